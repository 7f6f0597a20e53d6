"""
Service interfaces for NoteVault.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from uuid import UUID

from ..repositories.note_repository import NoteFilters
from ..schemas.auth import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from ..schemas.common import HealthCheckResponse
from ..schemas.notes import NoteCreate, NoteListResponse, NoteResponse, NoteUpdate


class ISessionManager(ABC):
    """Opaque session tokens bound to a user id."""

    @abstractmethod
    async def issue(self, user_id: UUID):
        """Create a session and return it with its token."""
        pass

    @abstractmethod
    async def validate(self, token: Optional[str]) -> UUID:
        """Resolve token to user id."""
        pass

    @abstractmethod
    async def revoke(self, token: Optional[str]) -> bool:
        """Remove session, idempotent."""
        pass

    @abstractmethod
    async def purge_expired(self) -> int:
        """Delete expired sessions."""
        pass


class IAuthService(ABC):
    """Registration, login and profile lookup."""

    @abstractmethod
    async def register_user(self, request: RegisterRequest) -> UserResponse:
        """Register new user."""
        pass

    @abstractmethod
    async def authenticate_user(self, email: str, password: str) -> UUID:
        """Check credentials, return user id."""
        pass

    @abstractmethod
    async def login(self, request: LoginRequest) -> LoginResponse:
        """Authenticate and issue a session."""
        pass

    @abstractmethod
    async def logout(self, token: str) -> bool:
        """Revoke the session behind token."""
        pass

    @abstractmethod
    async def get_profile(self, user_id: UUID) -> UserResponse:
        """Get public profile by user ID."""
        pass


class INoteService(ABC):
    """Owner-scoped note operations."""

    @abstractmethod
    async def create_note(self, owner_id: UUID, request: NoteCreate) -> NoteResponse:
        pass

    @abstractmethod
    async def list_notes(self, owner_id: UUID, filters: NoteFilters) -> NoteListResponse:
        pass

    @abstractmethod
    async def get_note(self, owner_id: UUID, note_id: UUID) -> NoteResponse:
        pass

    @abstractmethod
    async def update_note(self, owner_id: UUID, note_id: UUID, request: NoteUpdate) -> NoteResponse:
        pass

    @abstractmethod
    async def delete_note(self, owner_id: UUID, note_id: UUID) -> None:
        pass

    @abstractmethod
    async def toggle_pin(self, owner_id: UUID, note_id: UUID) -> NoteResponse:
        pass

    @abstractmethod
    async def toggle_favorite(self, owner_id: UUID, note_id: UUID) -> NoteResponse:
        pass

    @abstractmethod
    async def set_archived(self, owner_id: UUID, note_id: UUID, archived: bool) -> NoteResponse:
        pass

    @abstractmethod
    async def get_categories(self, owner_id: UUID) -> List[str]:
        pass


class IHealthService(ABC):
    """Health check service."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
        pass

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Check DB connection."""
        pass

    @abstractmethod
    async def check_redis_health(self) -> Dict[str, Any]:
        """Check Redis connection."""
        pass
