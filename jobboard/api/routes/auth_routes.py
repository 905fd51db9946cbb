"""
Authentication Routes

POST /auth/register - Register new user
POST /auth/login - Login, get JWT token and session cookie
POST /auth/logout - Clear session cookie
"""

from fastapi import APIRouter, Depends, Request, Response

from jobboard.api.deps import get_app_settings, get_user_service
from jobboard.core.config import Settings
from jobboard.schemas.schemas import (
    LoginRequest, MessageResponse, RegisterRequest, TokenResponse, UserEnvelope
)
from jobboard.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=UserEnvelope, status_code=201)
async def register(request: RegisterRequest, users: UserService = Depends(get_user_service)):
    """
    Register a new user account.

    After registration, login to get an access token.
    """
    return {"user": users.register(request)}


@router.post("/login", response_model=TokenResponse)
async def login(
    request: Request,
    response: Response,
    credentials: LoginRequest,
    users: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_app_settings),
):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    (the HttpOnly cookie set here works too).
    """
    user = users.authenticate(credentials.email, credentials.password)
    token = request.app.state.token_service.issue(user["_id"], user["role"])

    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=settings.cookie_max_age,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    return {"token": token, "user": user}


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response, settings: Settings = Depends(get_app_settings)):
    response.delete_cookie(settings.cookie_name)
    return {"message": "Logged out successfully"}
