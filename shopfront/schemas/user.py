# shopfront/schemas/user.py
from datetime import datetime
from typing import Literal

from pydantic import EmailStr, field_validator
from sqlmodel import Field

from shopfront.schemas.base import ApiModel

# App-level roles. "guest" = no token, so we don't store it here.
Role = Literal["customer", "seller", "admin"]

# Roles a visitor may pick when signing up; admins are provisioned manually.
SignupRole = Literal["customer", "seller"]


class UserRead(ApiModel):
    """Response schema returned to clients."""

    id: int
    username: str
    email: str
    full_name: str | None = None
    role: Role
    created_at: datetime


class UserRegister(ApiModel):
    """
    Payload for creating an account.

    Validation rules:
      - email must be a valid EmailStr
      - username cannot be empty or whitespace
    """

    username: str = Field(max_length=50)
    email: EmailStr
    password: str = Field(min_length=1)
    full_name: str | None = Field(default=None, max_length=100)
    role: SignupRole = "customer"

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username cannot be empty")
        return v

    @field_validator("full_name")
    @classmethod
    def normalize_full_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class LoginRequest(ApiModel):
    email: EmailStr
    password: str = Field(min_length=1)


class TokenRead(ApiModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead
