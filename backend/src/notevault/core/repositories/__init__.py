"""Repository layer for data access."""

from .note_repository import NoteRepository
from .session_repository import SessionRepository
from .user_repository import UserRepository

__all__ = [
    "UserRepository",
    "SessionRepository",
    "NoteRepository",
]
