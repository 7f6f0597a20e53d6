# Server-side login sessions
import uuid
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel, as_utc


class UserSession(BaseModel):
    """Opaque session token bound to one user for a fixed window.

    ``created_at`` is the issue time. Rows are deleted on logout, so a
    present, unexpired row is the only thing that authenticates a request.
    """

    __tablename__ = "sessions"

    token: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_seen_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint("length(token) <= 255", name="ck_sessions_token_len"),
        Index("idx_sessions_user_id", "user_id"),
        Index("idx_sessions_expires_at", "expires_at"),
    )

    def __repr__(self) -> str:
        # never print the token itself
        return f"<UserSession(user_id={self.user_id}, expires_at={self.expires_at})>"

    @classmethod
    def create_for_user(cls, user_id: uuid.UUID, token: str, issued_at: datetime, lifetime: timedelta) -> "UserSession":
        """Build a new session whose expiry is fixed at issue time."""
        return cls(
            token=token,
            user_id=user_id,
            created_at=issued_at,
            updated_at=issued_at,
            expires_at=issued_at + lifetime,
        )

    def is_expired_at(self, now: datetime) -> bool:
        """Expired once ``now`` reaches ``expires_at``."""
        return as_utc(now) >= as_utc(self.expires_at)
