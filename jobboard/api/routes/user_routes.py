"""
User Routes

GET /me - Get current user's profile
PATCH /me - Update own name
"""

from fastapi import APIRouter, Depends

from jobboard.api.deps import get_user_service
from jobboard.core.auth import get_current_user
from jobboard.schemas.schemas import UserEnvelope, UserUpdate
from jobboard.services.user_service import UserService

router = APIRouter(tags=["Users"])


@router.get("/me", response_model=UserEnvelope)
async def get_me(user: dict = Depends(get_current_user), users: UserService = Depends(get_user_service)):
    """Get current authenticated user's info."""
    return {"user": users.get_by_id(user["id"])}


@router.patch("/me", response_model=UserEnvelope)
async def update_me(
    update: UserUpdate,
    user: dict = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
):
    return {"user": users.update_profile(user["id"], update)}
