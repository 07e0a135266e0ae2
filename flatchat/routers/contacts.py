import logging

from fastapi import APIRouter, Depends, HTTPException, status

from flatchat.routers.dependencies import get_conversation_service
from flatchat.schemas.conversation import ContactAdd
from flatchat.services.conversation_service import ConversationService
from flatchat.utils.errors import ServiceError, to_http


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contacts", tags=["contact"])


@router.post("/add-by-email", status_code=status.HTTP_201_CREATED)
async def add_contact_by_email(payload: ContactAdd, service: ConversationService = Depends(get_conversation_service)):
    try:
        chat = await service.add_contact_by_email(payload.adder_email, payload.contact_email, payload.contact_name)
    except ServiceError as exc:
        raise to_http(exc)
    except Exception:
        logger.exception("Failed to add contact %s for %s", payload.contact_email, payload.adder_email)
        raise HTTPException(status_code=500, detail="Failed to add contact.")
    return {"message": "Contact added and chat created!", "newChat": chat}
