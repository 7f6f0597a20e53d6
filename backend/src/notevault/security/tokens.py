"""Opaque session token utilities."""

import hashlib
import secrets

from ..config import get_settings


def create_session_token() -> str:
    """Create a random, URL-safe session token.

    The token carries no data, so it works unchanged as a bearer header
    value or a cookie value.
    """
    settings = get_settings()
    return secrets.token_urlsafe(settings.session_token_bytes)


def token_fingerprint(token: str) -> str:
    """Short, non-reversible identifier for a token, safe to log."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()[:12]
