"""Middleware for authentication and other cross-cutting concerns."""

from .auth import CurrentSession, SessionAuth, get_current_session, get_current_user_id

__all__ = ["CurrentSession", "SessionAuth", "get_current_session", "get_current_user_id"]
