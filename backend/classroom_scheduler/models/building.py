# backend/classroom_scheduler/models/building.py
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from ..database import Base


class Building(Base):
    """A campus building that contains rooms."""

    __tablename__ = "buildings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)

    rooms = relationship("Room", back_populates="building")

    def __repr__(self) -> str:
        return f"<Building {self.id}: {self.name}>"
