from fastapi import APIRouter, Depends, status

from flatchat.routers.dependencies import get_message_service
from flatchat.schemas.message import MessageCreate
from flatchat.services.message_service import MessageService
from flatchat.utils.errors import ServiceError, to_http


router = APIRouter(prefix="/messages", tags=["chat"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def send_message(payload: MessageCreate, service: MessageService = Depends(get_message_service)):
    try:
        result = await service.send_message(
            payload.conversation_id,
            payload.resolved_sender(),
            payload.resolved_content(),
        )
    except ServiceError as exc:
        raise to_http(exc)
    return {
        "message": "Message sent to all participants.",
        "newMessage": result["message"],
        "deliveredCopies": result["delivered_copies"],
        "missingParticipants": result["missing_participants"],
    }
