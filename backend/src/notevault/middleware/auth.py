"""Authentication gate.

Resolves the session token carried by a request (bearer header first, then
the session cookie) to a user id before any note operation runs.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import Settings, get_settings
from ..core.exceptions import UnauthenticatedError
from ..core.services.session_service import SessionManager
from ..database import get_db_session


@dataclass(frozen=True)
class CurrentSession:
    user_id: UUID
    token: str


class SessionAuth(HTTPBearer):
    """Session token authentication over bearer header or cookie."""

    def __init__(self):
        # we raise our own uniform 401 instead of HTTPBearer's 403
        super().__init__(auto_error=False)

    async def __call__(
        self,
        request: Request,
        session: AsyncSession = Depends(get_db_session),
        settings: Settings = Depends(get_settings),
    ) -> CurrentSession:
        token = await self.extract_token(request, settings)
        if not token:
            raise UnauthenticatedError()

        user_id = await SessionManager(session, settings).validate(token)

        # visible to handlers and the request logger for the rest of the request
        request.state.user_id = user_id
        return CurrentSession(user_id=user_id, token=token)

    async def extract_token(self, request: Request, settings: Settings) -> Optional[str]:
        header = request.headers.get("Authorization")
        if header:
            credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)
            if credentials is None or credentials.scheme.lower() != "bearer":
                return None
            return credentials.credentials
        return request.cookies.get(settings.session_cookie_name) or None


session_auth = SessionAuth()


async def get_current_session(current: CurrentSession = Depends(session_auth)) -> CurrentSession:
    """Get the authenticated session of this request."""
    return current


# Dependency for getting current user ID from the session
async def get_current_user_id(current: CurrentSession = Depends(session_auth)) -> UUID:
    """Get current authenticated user ID."""
    return current.user_id
