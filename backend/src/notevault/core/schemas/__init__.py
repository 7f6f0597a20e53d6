"""
Pydantic schemas for validating and documenting API requests and responses.
"""

from .auth import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from .common import ErrorResponse, HealthCheckResponse, MessageResponse
from .notes import ArchiveRequest, NoteCreate, NoteListResponse, NoteResponse, NoteUpdate

__all__ = [
    # Auth schemas
    "RegisterRequest",
    "LoginRequest",
    "LoginResponse",
    "UserResponse",
    # Note schemas
    "NoteCreate",
    "NoteUpdate",
    "NoteResponse",
    "NoteListResponse",
    "ArchiveRequest",
    # Common schemas
    "ErrorResponse",
    "MessageResponse",
    "HealthCheckResponse",
]
