"""Personal calendar event routes."""

from fastapi import APIRouter, Depends, status

from api.routes.auth import get_current_user
from core.dependencies import EventManagerDep
from models.user import UserModel
from schemas.event import CreateEventRequest
from utils.converters import event_to_info

router = APIRouter(prefix="/api/event", tags=["Event"])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create an event")
def create_event(
    req: CreateEventRequest,
    event_manager: EventManagerDep,
    current_user: UserModel = Depends(get_current_user),
) -> dict:
    model = event_manager.create_event(
        current_user.user_id, req.title, req.date, req.time, req.color
    )
    return {
        "success": True,
        "message": "Event created successfully",
        "data": event_to_info(model),
    }


@router.get("", summary="List my events")
def list_events(
    event_manager: EventManagerDep,
    current_user: UserModel = Depends(get_current_user),
) -> dict:
    models = event_manager.list_events(current_user.user_id)
    return {"success": True, "data": [event_to_info(m) for m in models]}


@router.delete("/{event_id}", summary="Delete an event")
def delete_event(
    event_id: str,
    event_manager: EventManagerDep,
    current_user: UserModel = Depends(get_current_user),
) -> dict:
    event_manager.delete_event(current_user.user_id, event_id)
    return {"success": True, "message": "Event deleted successfully"}
