"""User repository for database operations."""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import AlreadyExistsError, translate_storage_errors
from ..models.user import User, normalize_email


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_storage_errors
    async def create_user(self, user_data: dict) -> User:
        """Insert a user; a duplicate normalized email raises AlreadyExistsError.

        The unique index decides between concurrent registrations, the
        caller's pre-check is only a fast path.
        """
        user = User(**{**user_data, "email": normalize_email(user_data["email"])})
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise AlreadyExistsError() from exc
        await self.session.refresh(user)
        return user

    @translate_storage_errors
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID."""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    @translate_storage_errors
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (normalized before lookup)."""
        stmt = select(User).where(User.email == normalize_email(email))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def is_email_taken(self, email: str) -> bool:
        """Check if email exists."""
        user = await self.get_by_email(email)
        return user is not None
