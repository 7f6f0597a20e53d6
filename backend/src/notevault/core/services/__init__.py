"""
Service layer interfaces and implementations.
"""

from .interfaces import IAuthService, IHealthService, INoteService, ISessionManager

from .auth_service import AuthService
from .health_service import HealthService
from .login_throttle import LoginThrottle
from .note_service import NoteService
from .session_service import IssuedSession, SessionManager

__all__ = [
    # Interfaces
    "IAuthService",
    "ISessionManager",
    "INoteService",
    "IHealthService",

    # Implementations
    "AuthService",
    "SessionManager",
    "IssuedSession",
    "LoginThrottle",
    "NoteService",
    "HealthService",
]
