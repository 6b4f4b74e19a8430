"""
Account schemas - user administration and profile management.
"""

import re
from datetime import datetime

from ninja import Schema
from pydantic import EmailStr, Field, ValidationInfo, field_validator

PASSWORD_MIN_LENGTH = 8
PASSWORD_SPECIAL_CHAR = re.compile(r"[!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]")


def check_password_strength(value: str) -> str:
    if len(value) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
    if not PASSWORD_SPECIAL_CHAR.search(value):
        raise ValueError("Password must contain at least one special character (!@#$%^&* etc.)")
    return value


# --- Admin ---


class AddUserInput(Schema):
    """Create a user inside an organization."""

    organization_id: int
    email: EmailStr
    name: str | None = None
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)
    is_admin: bool = False


class UserIdInput(Schema):
    user_id: int


class ToggleUserAdminInput(Schema):
    user_id: int
    is_admin: bool


class ListUsersInput(Schema):
    organization_id: int | None = None


class UserOut(Schema):
    id: int
    email: str
    name: str | None
    is_admin: bool
    organization_id: int | None
    created_at: datetime


# --- Profile ---


class UpdateProfileInput(Schema):
    name: str = ""
    email: EmailStr

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        return v.strip().lower() if isinstance(v, str) else v


class UpdatePasswordInput(Schema):
    current_password: str = Field(min_length=1)
    new_password: str
    confirm_password: str = Field(min_length=1)

    @field_validator("new_password")
    @classmethod
    def check_new_password(cls, v: str) -> str:
        return check_password_strength(v)

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, v: str, info: ValidationInfo) -> str:
        if "new_password" in info.data and v != info.data["new_password"]:
            raise ValueError("Passwords do not match")
        return v
