"""Profile routes for the signed-in user."""

import logging

from fastapi import APIRouter, Depends

from api.routes.auth import get_current_user
from core.dependencies import UserManagerDep
from models.user import UserModel
from schemas.user import UpdateDisplayNameRequest
from utils.converters import user_to_info

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/profile", tags=["Profile"])


@router.get("", summary="Get profile")
def get_profile(current_user: UserModel = Depends(get_current_user)) -> dict:
    return {"success": True, "data": user_to_info(current_user)}


@router.put("/update-displayName", summary="Update display name")
def update_display_name(
    req: UpdateDisplayNameRequest,
    current_user: UserModel = Depends(get_current_user),
    user_manager: UserManagerDep = None,
) -> dict:
    user = user_manager.update_display_name(current_user.user_id, req.display_name)
    return {
        "success": True,
        "message": "Display name updated successfully",
        "data": user_to_info(user),
    }
