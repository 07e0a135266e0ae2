import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from flatchat.routers.dependencies import get_user_service
from flatchat.services.user_service import UserService
from flatchat.utils.errors import ServiceError, to_http


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["user"])


@router.get("/{email}")
async def get_user(email: str, service: UserService = Depends(get_user_service)):
    try:
        return await service.get_public_user(email)
    except ServiceError as exc:
        raise to_http(exc)


@router.put("/{email}")
async def update_user(email: str, body: Dict[str, Any] | None = None, service: UserService = Depends(get_user_service)):
    try:
        await service.update_user(email, body or {})
    except ServiceError as exc:
        raise to_http(exc)
    except Exception:
        logger.exception("Failed to update user %s", email)
        raise HTTPException(status_code=500, detail="Failed to update user data.")
    return {"message": "User data updated successfully!"}
