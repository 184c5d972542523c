# backend/classroom_scheduler/models/room.py
from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from ..database import Base


class Room(Base):
    """A bookable room inside a building."""

    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, autoincrement=True)
    room_number = Column(String(50), nullable=False, unique=True, index=True)
    building_id = Column(Integer, ForeignKey("buildings.id"), nullable=False)
    capacity = Column(Integer, nullable=False, default=0)
    has_projector = Column(Boolean, nullable=False, default=False)
    has_computers = Column(Boolean, nullable=False, default=False)

    building = relationship("Building", back_populates="rooms")
    schedules = relationship("Schedule", back_populates="room")

    __table_args__ = (CheckConstraint("capacity >= 0", name="check_capacity_non_negative"),)

    def __repr__(self) -> str:
        return f"<Room {self.id}: {self.room_number} (capacity={self.capacity})>"
