"""
Request body validation for register and login.

Each body is parsed with a pydantic model; the first violation is turned
into an ``auth.errors.ValidationError`` whose message reads
``"<field>: <reason>"``.
"""

from __future__ import annotations

import re
from typing import Any, Sequence, Type, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator

from auth.errors import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_BCRYPT_MAX_BYTES = 72

_ModelT = TypeVar("_ModelT", bound=BaseModel)


def _strip_email(value: Any) -> Any:
    return value.strip().lower() if isinstance(value, str) else value


def _check_email(value: str) -> str:
    if len(value) < 6:
        raise ValueError("must be at least 6 characters")
    if not _EMAIL_RE.match(value):
        raise ValueError("must be a valid email address")
    return value


def _check_password_bytes(value: str) -> str:
    if len(value.encode()) > _BCRYPT_MAX_BYTES:
        raise ValueError(f"must be at most {_BCRYPT_MAX_BYTES} bytes")
    return value


class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=6)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("email", mode="before")
    @classmethod
    def _normalise_email(cls, value: Any) -> Any:
        return _strip_email(value)

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("password")
    @classmethod
    def _password(cls, value: str) -> str:
        return _check_password_bytes(value)


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def _normalise_email(cls, value: Any) -> Any:
        return _strip_email(value)

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("password")
    @classmethod
    def _password(cls, value: str) -> str:
        return _check_password_bytes(value)


def format_error(loc: Sequence[Any], msg: str) -> str:
    """Render one pydantic error as ``"<field>: <reason>"``."""
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    field = ".".join(str(part) for part in loc)
    return f"{field}: {msg}" if field else msg


def _first_error_message(exc: pydantic.ValidationError) -> str:
    err = exc.errors()[0]
    return format_error(err["loc"], err["msg"])


def _validate(model: Type[_ModelT], data: Any) -> _ModelT:
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as exc:
        raise ValidationError(
            _first_error_message(exc),
            details={"errors": exc.error_count()},
        ) from exc


def register_validation(data: Any) -> RegisterRequest:
    """Validate a register body, raising ``ValidationError`` on the first violation."""
    return _validate(RegisterRequest, data)


def login_validation(data: Any) -> LoginRequest:
    """Validate a login body, raising ``ValidationError`` on the first violation."""
    return _validate(LoginRequest, data)
