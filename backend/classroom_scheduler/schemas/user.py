# backend/classroom_scheduler/schemas/user.py
from pydantic import ConfigDict, EmailStr, Field, field_validator

from ..models.user import UserRole
from ._strict_base import StrictRequestModel
from .base import StandardizedModel


class UserCreate(StrictRequestModel):
    name: str = Field(..., min_length=1, max_length=150)
    email: EmailStr
    role: UserRole = UserRole.FACULTY

    @field_validator("name")
    @classmethod
    def clean_name(cls, v: str) -> str:
        return v.strip()


class UserResponse(StandardizedModel):
    id: int
    name: str
    email: str
    role: UserRole

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)
