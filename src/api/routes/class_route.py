"""Class management routes."""

from fastapi import APIRouter, Depends, status

from api.routes.auth import get_current_user
from core.dependencies import ClassManagerDep
from models.class_membership import ROLE_INSTRUCTOR, ROLE_STUDENT
from models.user import UserModel
from schemas.class_schema import ClassMemberInfo, CreateClassRequest, JoinClassRequest
from utils.converters import class_to_info

router = APIRouter(prefix="/api/class", tags=["Class"])


@router.post("/create", status_code=status.HTTP_201_CREATED, summary="Create a class")
def create_class(
    req: CreateClassRequest,
    class_manager: ClassManagerDep,
    current_user: UserModel = Depends(get_current_user),
) -> dict:
    class_model = class_manager.create_class(req.name, req.description, current_user.user_id)
    return {
        "success": True,
        "message": "Class created successfully",
        "data": class_to_info(class_model, role=ROLE_INSTRUCTOR),
    }


@router.post("/join", summary="Join a class with its code")
def join_class(
    req: JoinClassRequest,
    class_manager: ClassManagerDep,
    current_user: UserModel = Depends(get_current_user),
) -> dict:
    class_model = class_manager.join_by_code(req.class_code, current_user.user_id)
    return {
        "success": True,
        "message": "Successfully joined class",
        "data": class_to_info(class_model, role=ROLE_STUDENT),
    }


@router.get("/my-classes", summary="List my classes")
def list_my_classes(
    class_manager: ClassManagerDep,
    current_user: UserModel = Depends(get_current_user),
) -> dict:
    rows = class_manager.list_classes_for_user(current_user.user_id)
    return {
        "success": True,
        "data": [class_to_info(model, role=role) for model, role in rows],
    }


@router.get("/{class_id}", summary="Get class details")
def get_class(
    class_id: str,
    class_manager: ClassManagerDep,
    current_user: UserModel = Depends(get_current_user),
) -> dict:
    role = class_manager.require_class_access(current_user.user_id, class_id)
    class_model = class_manager.get_class(class_id)
    return {"success": True, "data": class_to_info(class_model, role=role)}


@router.get("/{class_id}/members", summary="List class members")
def list_members(
    class_id: str,
    class_manager: ClassManagerDep,
    current_user: UserModel = Depends(get_current_user),
) -> dict:
    class_manager.require_class_access(current_user.user_id, class_id)
    members = class_manager.list_members(class_id)
    return {
        "success": True,
        "data": [ClassMemberInfo(**member) for member in members],
    }
