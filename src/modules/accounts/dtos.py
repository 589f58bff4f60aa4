"""Account DTOs for the Service Layer."""

from __future__ import annotations

import re
from typing import Optional, Self

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")
PHONE_PATTERN = re.compile(r"^\+?[\d\s\-()]+$")


class RegisterUserDTO(BaseModel):
    """Immutable DTO for sign-up.

    Validates:
    - ``username``: 3-30 characters, letters, digits and underscores.
    - ``password``: at least 6 characters with a lower-case letter, an
      upper-case letter and a digit; must match ``password_confirm``.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    username: str = Field(min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(min_length=6)
    password_confirm: str
    phone: Optional[str] = Field(default=None, max_length=30)

    @field_validator("username")
    @classmethod
    def username_charset(cls, v: str) -> str:
        if not USERNAME_PATTERN.match(v):
            raise ValueError("Username can only contain letters, numbers, and underscores.")
        return v

    @field_validator("email")
    @classmethod
    def email_lowercase(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def password_strength(cls, v: str) -> str:
        if not (
            any(c.islower() for c in v)
            and any(c.isupper() for c in v)
            and any(c.isdigit() for c in v)
        ):
            raise ValueError(
                "Password must contain at least one lowercase letter, "
                "one uppercase letter, and one number."
            )
        return v

    @field_validator("phone")
    @classmethod
    def phone_shape(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return None
        if not PHONE_PATTERN.match(v):
            raise ValueError("Please provide a valid phone number.")
        return v

    @model_validator(mode="after")
    def passwords_match(self) -> Self:
        if self.password != self.password_confirm:
            raise ValueError("Passwords do not match.")
        return self
