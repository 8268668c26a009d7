from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from imagestudio.domain.users.entities import User

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _validate_email(value: str) -> str:
    if not value:
        raise PydanticCustomError("missing", "Email cannot be empty", {})
    if not EMAIL_PATTERN.match(value):
        raise PydanticCustomError(
            "email_invalid",
            "Email must look like name@example.com",
            {},
        )
    return value


class RegisterRequestDTO(BaseModel):
    # Emails are stored and matched exactly as submitted.
    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=6, max_length=128)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _validate_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError(
                "password_blank",
                "Password cannot be only whitespace",
                {},
            )
        return value


class LoginRequestDTO(BaseModel):
    email: str = Field(min_length=1, max_length=320)
    password: str = Field(min_length=1, max_length=128)  # No strength check on login


class UserDTO(BaseModel):
    id: int
    email: str

    @classmethod
    def from_entity(cls, user: User) -> UserDTO:
        return cls(id=user.id, email=user.email)


class AuthSuccessDTO(BaseModel):
    user: UserDTO
    token: str


class VerifySuccessDTO(BaseModel):
    valid: bool = True
    user: UserDTO
