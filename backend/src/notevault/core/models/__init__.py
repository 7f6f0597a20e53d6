"""
Database models for NoteVault.

Models included:
    - User: account identified by a normalized, unique email
    - UserSession: server-side session bound to an opaque token
    - Note: personal note owned by exactly one user
"""

from .base import BaseModel
from .note import Note
from .session import UserSession
from .user import User

__all__ = [
    "BaseModel",
    "User",
    "UserSession",
    "Note",
]
