"""
Domain errors raised by the core services.

Each error carries the HTTP status and the public message the API renders.
Messages for authentication and ownership failures are deliberately generic.
"""

import functools
import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class NoteVaultError(Exception):
    """Base class for errors that map onto an API response."""

    status_code: int = 500
    error: str = "ServerError"
    default_message: str = "Server error"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(NoteVaultError):
    """Missing or empty required field."""

    status_code = 422
    error = "ValidationError"
    default_message = "Invalid input"


class AlreadyExistsError(NoteVaultError):
    """Unique key already taken."""

    status_code = 409
    error = "AlreadyExists"
    default_message = "User already exists"


class InvalidCredentialsError(NoteVaultError):
    """Unknown email or wrong password - intentionally indistinguishable."""

    status_code = 401
    error = "InvalidCredentials"
    default_message = "Invalid email or password"


class UnauthenticatedError(NoteVaultError):
    """Missing, unknown, expired or revoked session token."""

    status_code = 401
    error = "Unauthenticated"
    default_message = "Not authenticated"


class NotFoundError(NoteVaultError):
    """Resource absent or owned by someone else."""

    status_code = 404
    error = "NotFound"
    default_message = "Not found"


class TooManyAttemptsError(NoteVaultError):
    status_code = 429
    error = "TooManyAttempts"
    default_message = "Too many login attempts, try again later"


class StorageFailure(NoteVaultError):
    """Persistence layer unavailable or failing."""

    status_code = 503
    error = "StorageFailure"
    default_message = "Storage unavailable"


class CredentialStoreError(NoteVaultError):
    """Stored password hash is unreadable (data corruption)."""

    status_code = 500
    error = "ServerError"
    default_message = "Server error"


def translate_storage_errors(func):
    """Roll back and re-raise driver/ORM errors as StorageFailure.

    Meant for repository coroutine methods (``self.session`` must exist).
    Errors raised deliberately by the method itself pass through untouched.
    """

    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            return await func(self, *args, **kwargs)
        except SQLAlchemyError as exc:
            logger.error(
                "Storage operation failed",
                extra={"operation": f"{type(self).__name__}.{func.__name__}", "exception_type": type(exc).__name__},
            )
            try:
                await self.session.rollback()
            except SQLAlchemyError:
                logger.warning("Rollback after storage failure also failed")
            raise StorageFailure() from exc

    return wrapper
