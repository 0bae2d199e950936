"""Request schemas for consultation requests."""

from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from shared.constants import CONSULTATION_STATUSES


class SubmitConsultationBody(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)
    service: Optional[str] = None
    location: Optional[str] = None
    message: Optional[str] = None


class ConsultationFilters(BaseModel):
    status: Optional[str] = None
    search: Optional[str] = None
    from_date: Optional[str] = None
    to_date: Optional[str] = None


class UpdateConsultationStatusBody(BaseModel):
    status: str

    @field_validator("status")
    @classmethod
    def known_status(cls, value: str) -> str:
        if value not in CONSULTATION_STATUSES:
            raise ValueError(f"must be one of {', '.join(CONSULTATION_STATUSES)}")
        return value
