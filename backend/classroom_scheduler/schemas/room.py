# backend/classroom_scheduler/schemas/room.py
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from ._strict_base import StrictRequestModel
from .base import StandardizedModel


def _strip_required(value: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise ValueError("must not be blank")
    return cleaned


class BuildingCreate(StrictRequestModel):
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def clean_name(cls, v: str) -> str:
        return _strip_required(v)


class BuildingUpdate(BuildingCreate):
    pass


class BuildingResponse(StandardizedModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class RoomCreate(StrictRequestModel):
    room_number: str = Field(..., min_length=1, max_length=50)
    building_id: int = Field(..., gt=0)
    capacity: int = Field(0, ge=0)
    has_projector: bool = False
    has_computers: bool = False

    @field_validator("room_number")
    @classmethod
    def clean_room_number(cls, v: str) -> str:
        return _strip_required(v)


class RoomUpdate(RoomCreate):
    pass


class RoomResponse(StandardizedModel):
    id: int
    room_number: str
    building_id: int
    building_name: Optional[str] = None
    capacity: int
    has_projector: bool
    has_computers: bool

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_room(cls, room) -> "RoomResponse":
        return cls(
            id=room.id,
            room_number=room.room_number,
            building_id=room.building_id,
            building_name=room.building.name if room.building else None,
            capacity=room.capacity,
            has_projector=room.has_projector,
            has_computers=room.has_computers,
        )
