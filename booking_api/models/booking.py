from typing import Any, Dict, Mapping
from pydantic import BaseModel, Field, StrictStr, field_validator

# Range of the INTEGER column holding number_of_people
INT32_MIN, INT32_MAX = -2**31, 2**31 - 1

ROOM_NUMBER_DESCRIPTION = "Room identifier. Integers are accepted on input and always returned as a string."

# --- Incoming Request Models ---

class BookingPayload(BaseModel):
    """
    Body of POST /bookings and PUT /bookings/{id}.
    Only presence and type are checked; overlapping bookings are allowed.
    """
    time: StrictStr = Field(min_length=1)
    name: StrictStr = Field(min_length=1)
    roomNumber: str = Field(description=ROOM_NUMBER_DESCRIPTION, json_schema_extra={"examples": ["101", 101]})
    numberOfPeople: int = Field(ge=INT32_MIN, le=INT32_MAX)

    @field_validator("roomNumber", mode="before")
    @classmethod
    def check_room_number(cls, value: Any) -> str:
        # Rooms may be sent as "101" or 101, stored as text either way
        if isinstance(value, bool) or not value:
            raise ValueError("roomNumber is required")
        if isinstance(value, int):
            return str(value)
        if isinstance(value, str):
            return value
        raise ValueError("roomNumber must be a string or an integer")

    @field_validator("numberOfPeople", mode="before")
    @classmethod
    def check_number_of_people(cls, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError("numberOfPeople must be a whole number")
        if isinstance(value, int):
            return value
        # JSON has a single number type, 4.0 is the same party size as 4
        if isinstance(value, float) and value.is_integer():
            return int(value)
        raise ValueError("numberOfPeople must be a whole number")

    def to_row(self) -> Dict[str, Any]:
        """Maps wire field names onto the `bookings` table columns."""
        return {
            'time': self.time,
            'name': self.name,
            'room_number': self.roomNumber,
            'number_of_people': self.numberOfPeople,
        }

# --- Outgoing Response Models ---

class Booking(BaseModel):
    id: str
    time: str
    name: str
    roomNumber: str = Field(description=ROOM_NUMBER_DESCRIPTION)
    numberOfPeople: int

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Booking":
        return cls(
            id=row['id'],
            time=row['time'],
            name=row['name'],
            roomNumber=row['room_number'],
            numberOfPeople=row['number_of_people'],
        )

    @classmethod
    def from_payload(cls, booking_id: str, payload: BookingPayload) -> "Booking":
        return cls(id=booking_id, **payload.model_dump())

class ErrorMessage(BaseModel):
    message: str
