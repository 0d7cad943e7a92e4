from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field, field_validator

from ..listings.models import CamelModel, check_state, check_zip


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    phone: str | None = None
    contact_email: EmailStr | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None

    @field_validator("state")
    @classmethod
    def validate_state(cls, value: str | None) -> str | None:
        return check_state(value)

    @field_validator("zip_code")
    @classmethod
    def validate_zip_code(cls, value: str | None) -> str | None:
        return check_zip(value)


class RegisterResponse(CamelModel):
    message: str
    user_id: str


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
