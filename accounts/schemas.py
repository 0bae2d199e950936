"""Request schemas for registration and login."""

from pydantic import BaseModel, EmailStr, Field


class RegisterBody(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    full_name: str = Field(..., min_length=1)


class LoginBody(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
