import uuid
from sqlalchemy import Column, Date, Integer, Numeric, ForeignKey, Index, Uuid

from sqlalchemy.orm import relationship
from shared.core.database import Base


class BookingRoom(Base):
    __tablename__ = "booking_rooms"
    __table_args__ = (
        Index("ix_booking_rooms_room_dates",
              "room_number", "check_in", "check_out"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    booking_id = Column(Uuid(as_uuid=True), ForeignKey(
        "bookings.id", ondelete="CASCADE"), nullable=False)
    room_number = Column(Integer, ForeignKey(
        "rooms.room_number"), nullable=False)
    # copy of the parent booking's range so overlap lookups stay on one index
    check_in = Column(Date, nullable=False)
    check_out = Column(Date, nullable=False)
    price_per_night = Column(Numeric(12, 2), nullable=False)

    booking = relationship("Booking", back_populates="booking_rooms")
    room = relationship("Room", back_populates="booking_rooms")
