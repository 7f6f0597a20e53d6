"""
User model for authentication.
"""

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


def normalize_email(email: str) -> str:
    """Uniqueness key for emails: trimmed and lowercased."""
    return email.strip().lower()


class User(BaseModel):
    """User account identified by a unique, normalized email."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # always stored normalized, the unique index arbitrates concurrent sign-ups
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        CheckConstraint("length(name) <= 100", name="ck_users_name_len"),
        CheckConstraint("length(email) <= 255", name="ck_users_email_len"),
    )

    def __repr__(self) -> str:
        return f"<User(email='{self.email}')>"
