# pyright: reportMissingTypeStubs=false
"""
Shared request models and validators for API endpoints.

This module contains the user request models (used by both registration and
admin user management) and common field validation logic.
"""

import re
from typing import Optional

from pydantic import Field, field_validator

from api.responses import CamelModel
from core.constants import DNI_LENGTH, MAX_NAME_LENGTH, MIN_USER_NAME_LENGTH, MIN_PASSWORD_LENGTH
from models import UserRole
from utils.datetime_utils import parse_date_string, parse_time_string

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_DNI_PATTERN = re.compile(rf"^\S{{{DNI_LENGTH}}}$")


# ===== Common Field Validators =====

def validate_email(v: str) -> str:
    """Normalize and validate an email address."""
    v = v.strip().lower()
    if not _EMAIL_PATTERN.match(v):
        raise ValueError('Invalid email address')
    if len(v) > MAX_NAME_LENGTH:
        raise ValueError('Email is too long')
    return v


def validate_dni(v: str) -> str:
    """National ID must be exactly DNI_LENGTH non-blank characters."""
    v = v.strip()
    if not _DNI_PATTERN.match(v):
        raise ValueError(f'DNI must be exactly {DNI_LENGTH} characters')
    return v


def validate_name(v: str) -> str:
    """Trim and check the display name length."""
    v = v.strip()
    if len(v) < MIN_USER_NAME_LENGTH or len(v) > MAX_NAME_LENGTH:
        raise ValueError(f'Name must be between {MIN_USER_NAME_LENGTH} and {MAX_NAME_LENGTH} characters')
    return v


def coerce_date(v: object) -> object:
    """Accept YYYY-MM-DD strings for date fields."""
    if isinstance(v, str):
        return parse_date_string(v)
    return v


def coerce_time(v: object) -> object:
    """Accept HH:MM:SS or HH:MM strings for time fields."""
    if isinstance(v, str):
        return parse_time_string(v)
    return v


# ===== User Request Models =====

class UserCreateRequest(CamelModel):
    """Request model for registration and admin user creation."""
    dni: str
    name: str
    email: str
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    role: UserRole

    @field_validator('dni')
    @classmethod
    def _validate_dni(cls, v: str) -> str:
        return validate_dni(v)

    @field_validator('name')
    @classmethod
    def _validate_name(cls, v: str) -> str:
        return validate_name(v)

    @field_validator('email')
    @classmethod
    def _validate_email(cls, v: str) -> str:
        return validate_email(v)


class UserUpdateRequest(CamelModel):
    """Request model for updating a user. All fields optional."""
    dni: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = Field(None, min_length=MIN_PASSWORD_LENGTH)
    role: Optional[UserRole] = None

    @field_validator('dni')
    @classmethod
    def _validate_dni(cls, v: Optional[str]) -> Optional[str]:
        return validate_dni(v) if v is not None else v

    @field_validator('name')
    @classmethod
    def _validate_name(cls, v: Optional[str]) -> Optional[str]:
        return validate_name(v) if v is not None else v

    @field_validator('email')
    @classmethod
    def _validate_email(cls, v: Optional[str]) -> Optional[str]:
        return validate_email(v) if v is not None else v


__all__ = [
    "validate_email",
    "validate_dni",
    "validate_name",
    "coerce_date",
    "coerce_time",
    "UserCreateRequest",
    "UserUpdateRequest",
]
