# tracker/schemas/user.py
import uuid
from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, EmailStr, Field, field_validator, model_validator

from tracker.core.security import MAX_PASSWORD_BYTES
from tracker.models.user import normalize_identity
from tracker.schemas.common import CamelModel


# Fields accepted on POST /users/register
class UserCreate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    username: str = Field(..., min_length=1, max_length=64)
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("username", "email", mode="after")
    @classmethod
    def normalize(cls, value: str) -> str:
        value = normalize_identity(value)
        if not value:
            raise ValueError("Field is required")
        return value

    @field_validator("password", mode="before")
    @classmethod
    def password_not_blank(cls, value):
        # Passwords are kept verbatim, but whitespace-only is the same as blank
        if isinstance(value, str) and not value.strip():
            raise ValueError("Password is required")
        return value

    @field_validator("password", mode="after")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


# Fields accepted on POST /users/login
class UserLogin(CamelModel):
    model_config = ConfigDict(extra="forbid")

    email: Optional[str] = None
    username: Optional[str] = None
    password: str = Field(..., min_length=1)

    @field_validator("username", "email", mode="after")
    @classmethod
    def normalize(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return normalize_identity(value) or None

    @model_validator(mode="after")
    def identifier_required(self):
        if not self.email and not self.username:
            raise ValueError("Email or username is required")
        return self


# Public fields, never including the password hash
class UserRead(CamelModel):
    id: uuid.UUID
    username: str
    email: str
    created_at: datetime
    updated_at: datetime


class LoginResult(CamelModel):
    user: UserRead
    access_token: str
