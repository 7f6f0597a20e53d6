"""Authentication service implementation."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import Settings, get_settings
from ...security import dummy_verify, hash_password, verify_password
from ..exceptions import AlreadyExistsError, InvalidCredentialsError, NotFoundError
from ..models.user import User, normalize_email
from ..repositories.user_repository import UserRepository
from ..schemas.auth import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from .interfaces import IAuthService
from .login_throttle import LoginThrottle
from .session_service import SessionManager

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """Identity directory plus the login/logout flow around sessions."""

    def __init__(
        self,
        session: AsyncSession,
        session_manager: Optional[SessionManager] = None,
        throttle: Optional[LoginThrottle] = None,
        settings: Optional[Settings] = None,
    ):
        self.session = session
        self.settings = settings or get_settings()
        self.user_repo = UserRepository(session)
        self.sessions = session_manager or SessionManager(session, self.settings)
        self.throttle = throttle or LoginThrottle(settings=self.settings)

    async def register_user(self, request: RegisterRequest) -> UserResponse:
        """Register new user."""
        email = normalize_email(request.email)

        # fast path; the unique index settles concurrent registrations
        if await self.user_repo.is_email_taken(email):
            raise AlreadyExistsError()

        user = await self.user_repo.create_user(
            {
                "name": request.name.strip(),
                "email": email,
                "password_hash": hash_password(request.password),
            }
        )
        logger.info("User registered", extra={"user_id": str(user.id)})
        return self._to_response(user)

    async def authenticate_user(self, email: str, password: str) -> UUID:
        """Return the user id for valid credentials.

        Unknown email and wrong password raise the same error and cost the
        same hashing work.
        """
        user = await self.user_repo.get_by_email(email)
        if user is None:
            dummy_verify()
            raise InvalidCredentialsError()

        if not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()

        return user.id

    async def login(self, request: LoginRequest) -> LoginResponse:
        """Login user and issue a session."""
        await self.throttle.check(request.email)

        try:
            user_id = await self.authenticate_user(request.email, request.password)
        except InvalidCredentialsError:
            await self.throttle.record_failure(request.email)
            logger.info("Login failed")
            raise

        await self.throttle.reset(request.email)
        issued = await self.sessions.issue(user_id)
        profile = await self.get_profile(user_id)

        return LoginResponse(
            access_token=issued.token,
            token_type="bearer",
            expires_at=issued.expires_at,
            expires_in=self.sessions.seconds_left(issued),
            user=profile,
        )

    async def logout(self, token: str) -> bool:
        """Logout by revoking the presented session."""
        return await self.sessions.revoke(token)

    async def get_profile(self, user_id: UUID) -> UserResponse:
        """Get user by ID."""
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return self._to_response(user)

    @staticmethod
    def _to_response(user: User) -> UserResponse:
        return UserResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            created_at=user.created_at,
        )
