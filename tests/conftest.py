import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from shared.core.auth import create_access_token  # noqa: E402
from shared.core.database import Base, build_engine, get_reservation_db  # noqa: E402
from reservation_service.app.crud.hospitality.rooms_crud import provision_rooms  # noqa: E402
from reservation_service.app.main import app  # noqa: E402
from reservation_service.app.models.hospitality import Booking, BookingRoom  # noqa: E402


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'reservations.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    provision_rooms(session)
    yield session
    session.close()


@pytest.fixture
def block_rooms(db):
    """Insert confirmed bookings holding `room_numbers`, five rooms per booking."""
    def _block(room_numbers, check_in, check_out, user_id="blocker", status="confirmed"):
        room_numbers = list(room_numbers)
        bookings = []
        for start in range(0, len(room_numbers), 5):
            chunk = room_numbers[start:start + 5]
            booking = Booking(
                user_id=user_id,
                rooms=chunk,
                total_rooms=len(chunk),
                travel_time=0,
                total_price=Decimal("0"),
                check_in=check_in,
                check_out=check_out,
                status=status,
                payment_status="pending"
            )
            for number in chunk:
                booking.booking_rooms.append(BookingRoom(
                    room_number=number, check_in=check_in, check_out=check_out,
                    price_per_night=Decimal("100.00")))
            db.add(booking)
            bookings.append(booking)
        db.commit()
        return bookings
    return _block


@pytest.fixture
def auth_headers():
    def _headers(user_id: str = "guest-1"):
        token = create_access_token({"user_id": user_id, "name": "Test Guest"})
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def client(db, session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_reservation_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
