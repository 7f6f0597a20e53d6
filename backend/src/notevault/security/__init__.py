"""Security utilities."""

from .password import dummy_verify, hash_password, verify_password
from .tokens import create_session_token, token_fingerprint

__all__ = [
    "hash_password",
    "verify_password",
    "dummy_verify",
    "create_session_token",
    "token_fingerprint",
]
