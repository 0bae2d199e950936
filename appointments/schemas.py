"""Request schemas for appointments."""

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from shared.constants import APPOINTMENT_STATUSES


class CreateAppointmentBody(BaseModel):
    service: str = Field(..., min_length=1)
    preferred_date: str = Field(..., min_length=1)
    location: Optional[str] = None


class AppointmentFilters(BaseModel):
    status: Optional[str] = None


class UpdateAppointmentStatusBody(BaseModel):
    status: str

    @field_validator("status")
    @classmethod
    def known_status(cls, value: str) -> str:
        if value not in APPOINTMENT_STATUSES:
            raise ValueError(f"must be one of {', '.join(APPOINTMENT_STATUSES)}")
        return value
