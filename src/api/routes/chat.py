"""Class chat routes."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from api.routes.auth import get_current_user
from config import DEFAULT_MESSAGE_PAGE_SIZE, MAX_MESSAGE_PAGE_SIZE
from core.dependencies import ChatManagerDep
from models.user import UserModel
from schemas.chat import AddMembersRequest, CreateChatRequest, SendMessageRequest
from utils.converters import chat_to_info, message_to_info

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chat", tags=["Chat"])


@router.post("/create", summary="Create or reuse a chat")
def create_chat(
    req: CreateChatRequest,
    response: Response,
    chat_manager: ChatManagerDep,
    current_user: UserModel = Depends(get_current_user),
) -> dict:
    """Create a chat, or return the chat that already has these participants.

    Answers 201 for a new chat and 200 when an existing chat is reused.
    """
    chat, is_new = chat_manager.create_chat(
        current_user.user_id,
        req.class_id,
        req.participant_ids,
        is_group_chat=req.is_group_chat,
        name=req.name,
    )
    response.status_code = status.HTTP_201_CREATED if is_new else status.HTTP_200_OK
    return {
        "success": True,
        "message": "Chat created successfully" if is_new else "Chat already exists",
        "data": {"chat": chat_to_info(chat), "isNew": is_new},
    }


@router.get("/list", summary="List my chats")
def list_chats(
    chat_manager: ChatManagerDep,
    class_id: Optional[str] = Query(default=None, alias="classId"),
    current_user: UserModel = Depends(get_current_user),
) -> dict:
    chats = chat_manager.list_chats_for_user(current_user.user_id, class_id)
    return {"success": True, "data": [chat_to_info(chat) for chat in chats]}


@router.get("/{chat_id}", summary="Get chat details")
def get_chat(
    chat_id: str,
    chat_manager: ChatManagerDep,
    current_user: UserModel = Depends(get_current_user),
) -> dict:
    chat = chat_manager.get_chat_for_participant(current_user.user_id, chat_id)
    return {"success": True, "data": chat_to_info(chat)}


@router.post("/{chat_id}/add-members", summary="Add members to a chat")
def add_members(
    chat_id: str,
    req: AddMembersRequest,
    chat_manager: ChatManagerDep,
    current_user: UserModel = Depends(get_current_user),
) -> dict:
    chat = chat_manager.add_members(current_user.user_id, chat_id, req.participant_ids)
    return {
        "success": True,
        "message": "Members added successfully",
        "data": {"chat": chat_to_info(chat)},
    }


@router.get("/{chat_id}/messages", summary="Read chat messages")
def get_messages(
    chat_id: str,
    chat_manager: ChatManagerDep,
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=DEFAULT_MESSAGE_PAGE_SIZE, ge=1, le=MAX_MESSAGE_PAGE_SIZE),
    current_user: UserModel = Depends(get_current_user),
) -> dict:
    messages = chat_manager.get_messages(current_user.user_id, chat_id, offset, limit)
    return {"success": True, "data": [message_to_info(m) for m in messages]}


@router.post("/{chat_id}/send", status_code=status.HTTP_201_CREATED, summary="Send a message")
def send_message(
    chat_id: str,
    req: SendMessageRequest,
    chat_manager: ChatManagerDep,
    current_user: UserModel = Depends(get_current_user),
) -> dict:
    message = chat_manager.send_message(current_user.user_id, chat_id, req.content)
    return {
        "success": True,
        "message": "Message sent successfully",
        "data": message_to_info(message),
    }


@router.delete("/{chat_id}", summary="Delete a chat")
def delete_chat(
    chat_id: str,
    chat_manager: ChatManagerDep,
    current_user: UserModel = Depends(get_current_user),
) -> dict:
    chat_manager.delete_chat(current_user.user_id, chat_id)
    return {"success": True, "message": "Chat deleted successfully"}
