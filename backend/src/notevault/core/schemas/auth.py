"""
Authentication schemas.

These schemas define the API contracts for registration, login and the
session token handed back to the client. No schema here ever carries the
password hash.
"""

import uuid
from datetime import datetime

from pydantic import Field, field_validator

from .common import ApiModel


class RegisterRequest(ApiModel):
    """User registration request schema."""

    name: str = Field(min_length=1, max_length=100, description="Display name")
    email: str = Field(min_length=3, max_length=255, description="Email, unique case-insensitively")
    password: str = Field(min_length=1, max_length=128, description="User password")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip()
        local, sep, domain = v.partition("@")
        if not sep or not local or not domain:
            raise ValueError("Invalid email address")
        return v

    model_config = {
        "json_schema_extra": {
            "example": {"name": "Ada", "email": "ada@example.com", "password": "correct horse"}
        }
    }


class LoginRequest(ApiModel):
    """User login request schema."""

    email: str = Field(min_length=1, max_length=255, description="Registered email")
    password: str = Field(min_length=1, max_length=128, description="User password")

    model_config = {
        "json_schema_extra": {"example": {"email": "ada@example.com", "password": "correct horse"}}
    }


class UserResponse(ApiModel):
    """Public profile."""

    id: uuid.UUID = Field(description="User unique identifier")
    name: str = Field(description="Display name")
    email: str = Field(description="Normalized email")
    created_at: datetime = Field(description="Account creation timestamp")


class LoginResponse(ApiModel):
    """Session issued on login."""

    access_token: str = Field(description="Opaque session token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_at: datetime = Field(description="Fixed session expiry")
    expires_in: int = Field(description="Seconds until expiry")
    user: UserResponse = Field(description="User information")
