from fastapi import APIRouter, Depends, status

from flatchat.routers.dependencies import get_conversation_service
from flatchat.schemas.conversation import ChatCreate, GroupCreate
from flatchat.services.conversation_service import ConversationService
from flatchat.utils.errors import ServiceError, to_http


router = APIRouter(tags=["chat"])


@router.post("/chats", status_code=status.HTTP_201_CREATED)
async def create_chat(payload: ChatCreate, service: ConversationService = Depends(get_conversation_service)):
    try:
        chat = await service.create_direct_chat(payload.user_id, payload.counterpart, payload.name)
    except ServiceError as exc:
        raise to_http(exc)
    return {"message": "Chat created successfully!", "newChat": chat}


@router.post("/groups", status_code=status.HTTP_201_CREATED)
async def create_group(payload: GroupCreate, service: ConversationService = Depends(get_conversation_service)):
    try:
        group = await service.create_group(payload.user_id, payload.name, payload.members, payload.end_date)
    except ServiceError as exc:
        raise to_http(exc)
    return {"message": "Group created successfully!", "newGroup": group}
