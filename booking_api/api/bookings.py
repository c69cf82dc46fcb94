from typing import List

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from booking_api.core.logger import logger
from booking_api.models.booking import Booking, BookingPayload, ErrorMessage
from booking_api.services.db_service import db_service

# Handlers are sync: FastAPI runs them in its threadpool,
# so concurrency is bounded by the connection pool, not the event loop.

router = APIRouter()

ERROR_RESPONSES = {
    404: {"model": ErrorMessage},
    500: {"model": ErrorMessage},
}

# POST and PUT also answer 400 "Invalid booking data"
BODY_RESPONSES = {
    400: {"model": ErrorMessage},
    **ERROR_RESPONSES,
}

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})

@router.get("/bookings", response_model=List[Booking], responses=ERROR_RESPONSES)
def list_bookings():
    try:
        return db_service.list_bookings()
    except SQLAlchemyError:
        logger.exception("❌ DB Error (list_bookings)")
        return _error(500, "Failed to retrieve bookings")

@router.post("/bookings", status_code=201, response_model=Booking, responses=BODY_RESPONSES)
def create_booking(payload: BookingPayload):
    try:
        return db_service.create_booking(payload)
    except SQLAlchemyError:
        logger.exception("❌ DB Error (create_booking)")
        return _error(500, "Failed to add booking")

@router.put("/bookings/{booking_id}", response_model=Booking, responses=BODY_RESPONSES)
def update_booking(booking_id: str, payload: BookingPayload):
    try:
        booking = db_service.update_booking(booking_id, payload)
    except SQLAlchemyError:
        logger.exception(f"❌ DB Error (update_booking {booking_id})")
        return _error(500, "Failed to update booking")

    if booking is None:
        return _error(404, "Booking not found")
    return booking

@router.delete("/bookings/{booking_id}", status_code=204, response_class=Response, responses=ERROR_RESPONSES)
def delete_booking(booking_id: str):
    try:
        deleted = db_service.delete_booking(booking_id)
    except SQLAlchemyError:
        logger.exception(f"❌ DB Error (delete_booking {booking_id})")
        return _error(500, "Failed to delete booking")

    if not deleted:
        return _error(404, "Booking not found")
    return Response(status_code=204)

@router.delete("/bookings", status_code=204, response_class=Response, responses=ERROR_RESPONSES)
def delete_all_bookings():
    try:
        db_service.delete_all_bookings()
    except SQLAlchemyError:
        logger.exception("❌ DB Error (delete_all_bookings)")
        return _error(500, "Failed to clear bookings")

    return Response(status_code=204)
