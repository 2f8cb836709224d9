"""
Request / response schemas for the ``/users`` routes.

Validators raise ``PydanticCustomError`` so the message reaching the client
is exactly the rule that failed.
"""

from __future__ import annotations

import uuid

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

NAME_MIN_LENGTH = 4
PASSWORD_MIN_LENGTH = 6

NAME_TOO_SHORT = "Your name must be at least 4 characters long"
INVALID_EMAIL = "Invalid email address!"
PASSWORD_TOO_SHORT = "Your password must be at least 6 characters long"
PASSWORDS_DO_NOT_MATCH = "Passwords do not match"


def _require_min_length(value: str, length: int, message: str) -> str:
    if len(value) < length:
        raise PydanticCustomError("too_short", message)
    return value


def _require_email(value: str) -> str:
    try:
        # test_environment admits the reserved .test domain and skips DNS
        validate_email(value, check_deliverability=False, test_environment=True)
    except EmailNotValidError:
        raise PydanticCustomError("invalid_email", INVALID_EMAIL)
    return value


# ── Requests ───────────────────────────────────────────────────────────


class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: str
    password: str
    confirm_password: str = Field(..., alias="confirmPassword")

    @field_validator("name")
    @classmethod
    def _name_length(cls, value: str) -> str:
        return _require_min_length(value, NAME_MIN_LENGTH, NAME_TOO_SHORT)

    @field_validator("email")
    @classmethod
    def _email_format(cls, value: str) -> str:
        return _require_email(value)

    @field_validator("password")
    @classmethod
    def _password_length(cls, value: str) -> str:
        return _require_min_length(value, PASSWORD_MIN_LENGTH, PASSWORD_TOO_SHORT)

    @field_validator("confirm_password")
    @classmethod
    def _confirmation_matches(cls, value: str, info: ValidationInfo) -> str:
        _require_min_length(value, PASSWORD_MIN_LENGTH, PASSWORD_TOO_SHORT)
        # password is absent from info.data when it failed its own check
        password = info.data.get("password")
        if password is not None and value != password:
            raise PydanticCustomError("password_mismatch", PASSWORDS_DO_NOT_MATCH)
        return value


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _email_format(cls, value: str) -> str:
        return _require_email(value)

    @field_validator("password")
    @classmethod
    def _password_length(cls, value: str) -> str:
        return _require_min_length(value, PASSWORD_MIN_LENGTH, PASSWORD_TOO_SHORT)


# ── Responses ──────────────────────────────────────────────────────────


class RegisterResponse(BaseModel):
    message: str


class PublicUser(BaseModel):
    id: uuid.UUID
    name: str
    email: str


class LoginResponse(BaseModel):
    token: str
    user: PublicUser


class ErrorResponse(BaseModel):
    error: str
