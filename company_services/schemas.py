"""Request schemas for the service catalog."""

from typing import Optional
from pydantic import BaseModel, Field

from shared.validation import PartialUpdate


class ServiceFilters(BaseModel):
    search: Optional[str] = None
    category: Optional[str] = None
    active: Optional[str] = None


class CreateServiceBody(BaseModel):
    name: str = Field(..., min_length=1)
    category: Optional[str] = None
    description: Optional[str] = None


class UpdateServiceBody(PartialUpdate):
    name: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = None
    description: Optional[str] = None
    active: Optional[bool] = None
