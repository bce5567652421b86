from sqlalchemy import Column, Integer, String, Numeric, DateTime, UniqueConstraint, CheckConstraint, func
from sqlalchemy.orm import relationship

from shared.core.database import Base


class Room(Base):
    __tablename__ = "rooms"
    __table_args__ = (
        UniqueConstraint("floor", "position", name="uq_room_floor_position"),
        CheckConstraint("floor BETWEEN 1 AND 10", name="ck_room_floor_range"),
        CheckConstraint("position >= 1", name="ck_room_position_positive"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    room_number = Column(Integer, nullable=False, unique=True, index=True)
    floor = Column(Integer, nullable=False)
    position = Column(Integer, nullable=False)
    room_type = Column(String(16), nullable=False, default="standard")
    base_price = Column(Numeric(10, 2), nullable=False, default=100)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    booking_rooms = relationship("BookingRoom", back_populates="room")

    def __repr__(self) -> str:
        return f"<Room(number={self.room_number}, floor={self.floor}, position={self.position})>"
