"""
Base schemas with standardized field handling for consistent API responses.
"""

from datetime import time
import re

from pydantic import BaseModel, ConfigDict

DATE_ONLY_REGEX = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_REGEX = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


class StandardizedModel(BaseModel):
    """Base model with standardized JSON encoding"""

    model_config = ConfigDict(use_enum_values=True, populate_by_name=True)


def ensure_date_only(value: object, field_name: str) -> object:
    if isinstance(value, str):
        candidate = value.strip()
        if not DATE_ONLY_REGEX.fullmatch(candidate):
            raise ValueError(f"{field_name} must be a YYYY-MM-DD date-only string")
        return candidate
    return value


def parse_time_value(value: object) -> object:
    """Convert ``HH:MM`` (or ``HH:MM:SS``) strings to ``time`` objects."""
    if isinstance(value, str):
        match = TIME_REGEX.fullmatch(value.strip())
        if not match:
            raise ValueError(f"Invalid time format: {value}. Expected HH:MM format.")
        hour, minute, second = match.groups()
        try:
            return time(int(hour), int(minute), int(second or 0))
        except ValueError:
            raise ValueError(f"Invalid time format: {value}. Expected HH:MM format.")
    return value
