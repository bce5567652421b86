import uuid
from datetime import date
from sqlalchemy import Column, String, Date, DateTime, Integer, Numeric, JSON, Uuid, CheckConstraint, func
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("check_out > check_in", name="ck_booking_date_order"),
        CheckConstraint("total_rooms BETWEEN 1 AND 5",
                        name="ck_booking_room_count"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String(64), nullable=False, index=True)
    # ordered room numbers, kept alongside booking_rooms for display
    rooms = Column(JSON, nullable=False)
    total_rooms = Column(Integer, nullable=False)
    travel_time = Column(Integer, nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    allocation_strategy = Column(String(16))
    check_in = Column(Date, nullable=False)
    check_out = Column(Date, nullable=False)
    status = Column(String(16), nullable=False, default="confirmed", index=True)
    payment_status = Column(String(16), nullable=False, default="pending")
    booking_date = Column(Date, default=date.today)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    cancelled_at = Column(DateTime(timezone=True))

    booking_rooms = relationship(
        "BookingRoom", back_populates="booking", cascade="all, delete-orphan")

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, rooms={self.rooms}, status={self.status})>"
