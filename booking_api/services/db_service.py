from typing import Any, Dict, List, Optional
import logging
import uuid

from sqlalchemy import create_engine, delete, insert, select, update
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from booking_api.core.config import settings
from booking_api.models.booking import Booking, BookingPayload
from booking_api.models.db_models import bookings, metadata

logger = logging.getLogger("booking_api")

def _engine_options(url: str) -> Dict[str, Any]:
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return {'pool_pre_ping': True}

    options: Dict[str, Any] = {'connect_args': {'check_same_thread': False}}
    if parsed.database in (None, "", ":memory:"):
        # One shared connection, otherwise every checkout sees an empty database
        options['poolclass'] = StaticPool
    return options

class DBService:
    """
    Owns the process-wide connection pool.
    Every method runs exactly one statement on a connection checked out for
    the duration of that statement. SQLAlchemy errors propagate to the caller.
    """
    _instance = None
    _engine: Optional[Engine] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(DBService, cls).__new__(cls)
        return cls._instance

    def init(self, url: Optional[str] = None) -> Engine:
        """
        Creates the pool and makes sure the bookings table exists.
        Called once from the application lifespan.
        """
        if self._engine is not None:
            return self._engine

        url = url or settings.POSTGRES_CONNECTION_URL
        self._engine = create_engine(url, **_engine_options(url))
        logger.info(f"✅ Database pool initialized ({self._engine.url.render_as_string(hide_password=True)})")

        try:
            metadata.create_all(self._engine)
        except SQLAlchemyError as e:
            # Keep serving; every request will answer 500 until the database is reachable
            logger.error(f"❌ Could not ensure bookings table: {e}")

        return self._engine

    def dispose(self):
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            logger.info("🔌 Database pool closed")

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("DBService.init() must be called before use")
        return self._engine

    def list_bookings(self) -> List[Booking]:
        """All bookings, earliest time first."""
        with self.engine.connect() as conn:
            rows = conn.execute(select(bookings).order_by(bookings.c.time)).mappings().all()
        return [Booking.from_row(row) for row in rows]

    def create_booking(self, payload: BookingPayload) -> Booking:
        booking_id = str(uuid.uuid4())
        with self.engine.begin() as conn:
            conn.execute(insert(bookings).values(id=booking_id, **payload.to_row()))

        logger.info(f"🆕 Booking {booking_id} created for {payload.name}")
        return Booking.from_payload(booking_id, payload)

    def update_booking(self, booking_id: str, payload: BookingPayload) -> Optional[Booking]:
        """
        Replaces all four fields in a single UPDATE.
        Returns None when no row has this id.
        """
        with self.engine.begin() as conn:
            result = conn.execute(
                update(bookings)
                .where(bookings.c.id == booking_id)
                .values(**payload.to_row())
            )
            matched = result.rowcount

        if matched == 0:
            return None

        logger.info(f"✏️ Booking {booking_id} updated")
        return Booking.from_payload(booking_id, payload)

    def delete_booking(self, booking_id: str) -> bool:
        with self.engine.begin() as conn:
            deleted = conn.execute(delete(bookings).where(bookings.c.id == booking_id)).rowcount

        if deleted:
            logger.info(f"🗑️ Booking {booking_id} deleted")
        return deleted > 0

    def delete_all_bookings(self) -> int:
        """Empties the table. Returns how many rows were removed."""
        with self.engine.begin() as conn:
            deleted = conn.execute(delete(bookings)).rowcount

        logger.info(f"🧹 Cleared {deleted} bookings")
        return deleted

db_service = DBService()
