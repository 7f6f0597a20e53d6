"""Authentication API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import Settings, get_settings
from ..core.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from ..core.schemas.common import MessageResponse
from ..core.services import AuthService
from ..database import get_db_session
from ..middleware.auth import CurrentSession, get_current_session, get_current_user_id

router = APIRouter(prefix="/auth", tags=["authentication"])


def get_auth_service(
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(session, settings=settings)


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    """Register a new user. The response never includes the password."""
    return await auth.register_user(request)


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
):
    """Exchange credentials for a session token (and cookie, when enabled)."""
    result = await auth.login(request)

    if settings.session_cookie_enabled:
        response.set_cookie(
            key=settings.session_cookie_name,
            value=result.access_token,
            max_age=result.expires_in,
            httponly=True,
            secure=settings.session_cookie_secure,
            samesite=settings.session_cookie_samesite,
        )
    return result


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    current: CurrentSession = Depends(get_current_session),
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
):
    """Revoke the session this request was made with."""
    await auth.logout(current.token)

    if settings.session_cookie_enabled:
        response.delete_cookie(
            key=settings.session_cookie_name,
            httponly=True,
            secure=settings.session_cookie_secure,
            samesite=settings.session_cookie_samesite,
        )
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
async def me(
    current_user_id: UUID = Depends(get_current_user_id),
    auth: AuthService = Depends(get_auth_service),
):
    """Profile of the authenticated user."""
    return await auth.get_profile(current_user_id)
