"""Request schemas for portfolio projects."""

import uuid
from typing import Annotated, List, Optional
from pydantic import AfterValidator, BaseModel, Field, HttpUrl, TypeAdapter, ValidationError

from shared.validation import PartialUpdate

_http_url = TypeAdapter(HttpUrl)


def _valid_url(value: str) -> str:
    """Check the URL but keep the caller's exact string."""
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError("must be a valid URL")
    return value


ImageUrl = Annotated[str, AfterValidator(_valid_url)]


class ProjectFilters(BaseModel):
    search: Optional[str] = None
    stage: Optional[str] = None
    location: Optional[str] = None
    service_id: Optional[str] = None


class CreateProjectBody(BaseModel):
    title: str = Field(..., min_length=1)
    service_id: Optional[uuid.UUID] = None
    location: Optional[str] = None
    stage: Optional[str] = None
    description: Optional[str] = None
    images: Optional[List[ImageUrl]] = None


class UpdateProjectBody(PartialUpdate):
    title: Optional[str] = Field(None, min_length=1)
    service_id: Optional[uuid.UUID] = None
    location: Optional[str] = None
    stage: Optional[str] = None
    description: Optional[str] = None
    images: Optional[List[ImageUrl]] = None
