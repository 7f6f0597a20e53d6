"""Session repository for database operations."""

from datetime import datetime
from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import translate_storage_errors
from ..models.session import UserSession
from ..models.user import User


class SessionRepository:
    """Repository for login session rows."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_storage_errors
    async def create_session(self, user_session: UserSession) -> UserSession:
        """Persist a new session."""
        self.session.add(user_session)
        await self.session.commit()
        await self.session.refresh(user_session)
        return user_session

    @translate_storage_errors
    async def get_with_user_id(self, token: str) -> Optional[Tuple[UserSession, UUID]]:
        """Get the session for a token together with its (existing) user id."""
        stmt = (
            select(UserSession, User.id)
            .join(User, User.id == UserSession.user_id)
            .where(UserSession.token == token)
        )
        result = await self.session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        return row[0], row[1]

    @translate_storage_errors
    async def touch(self, token: str, seen_at: datetime) -> None:
        """Record activity; expiry is left alone."""
        stmt = update(UserSession).where(UserSession.token == token).values(last_seen_at=seen_at)
        await self.session.execute(stmt)
        await self.session.commit()

    @translate_storage_errors
    async def delete_by_token(self, token: str) -> bool:
        """Delete one session, True if a row was removed."""
        stmt = delete(UserSession).where(UserSession.token == token)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    @translate_storage_errors
    async def delete_expired(self, now: datetime) -> int:
        """Delete all sessions expired at ``now``."""
        stmt = delete(UserSession).where(UserSession.expires_at <= now)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount
