"""Session manager: issue, validate and revoke opaque session tokens."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import Settings, get_settings
from ...security import create_session_token, token_fingerprint
from ..exceptions import UnauthenticatedError
from ..models.base import as_utc, utcnow
from ..models.session import UserSession
from ..repositories.session_repository import SessionRepository
from .interfaces import ISessionManager

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class IssuedSession:
    token: str
    user_id: UUID
    issued_at: datetime
    expires_at: datetime


class SessionManager(ISessionManager):
    """Database-backed sessions with a fixed expiry window.

    Lifecycle: active until ``expires_at``, then expired for good; logout
    deletes the row. Validation never moves ``expires_at``.
    """

    def __init__(
        self,
        session: AsyncSession,
        settings: Optional[Settings] = None,
        clock: Clock = utcnow,
    ):
        self.session = session
        self.settings = settings or get_settings()
        self.clock = clock
        self.session_repo = SessionRepository(session)

    @property
    def lifetime(self) -> timedelta:
        return timedelta(days=self.settings.session_expire_days)

    async def issue(self, user_id: UUID) -> IssuedSession:
        """Create a session for ``user_id`` and return its token."""
        issued_at = self.clock()
        token = create_session_token()
        user_session = UserSession.create_for_user(user_id, token, issued_at, self.lifetime)
        await self.session_repo.create_session(user_session)

        logger.info(
            "Session issued",
            extra={"user_id": str(user_id), "session": token_fingerprint(token)},
        )
        return IssuedSession(
            token=token,
            user_id=user_id,
            issued_at=issued_at,
            expires_at=issued_at + self.lifetime,
        )

    async def validate(self, token: Optional[str]) -> UUID:
        """Resolve a token to its user id or raise UnauthenticatedError."""
        if not token:
            raise UnauthenticatedError()

        found = await self.session_repo.get_with_user_id(token)
        if found is None:
            raise UnauthenticatedError()

        user_session, user_id = found
        now = self.clock()
        if user_session.is_expired_at(now):
            logger.info("Expired session presented", extra={"session": token_fingerprint(token)})
            raise UnauthenticatedError()

        if self.settings.session_track_last_seen:
            await self.session_repo.touch(token, now)
        return user_id

    async def revoke(self, token: Optional[str]) -> bool:
        """Delete the session; revoking an unknown token is not an error."""
        if not token:
            return False
        removed = await self.session_repo.delete_by_token(token)
        logger.info(
            "Session revoked" if removed else "Revoke for unknown session",
            extra={"session": token_fingerprint(token)},
        )
        return removed

    async def purge_expired(self) -> int:
        """Remove every session past its expiry."""
        purged = await self.session_repo.delete_expired(self.clock())
        if purged:
            logger.info("Purged expired sessions", extra={"count": purged})
        return purged

    def seconds_left(self, issued: IssuedSession) -> int:
        return max(0, int((as_utc(issued.expires_at) - as_utc(self.clock())).total_seconds()))
