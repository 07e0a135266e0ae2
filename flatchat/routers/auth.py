from fastapi import APIRouter, Depends, status

from flatchat.routers.dependencies import get_user_service
from flatchat.schemas.user import LoginResponse, UserCredentials
from flatchat.services.user_service import UserService
from flatchat.utils.errors import ServiceError, to_http


router = APIRouter(tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(payload: UserCredentials, service: UserService = Depends(get_user_service)):
    try:
        await service.register_user(payload.email, payload.password)
    except ServiceError as exc:
        raise to_http(exc)
    return {"message": "Registration successful!"}


@router.post("/login", response_model=LoginResponse)
async def login(payload: UserCredentials, service: UserService = Depends(get_user_service)):
    try:
        user = await service.authenticate_user(payload.email, payload.password)
    except ServiceError as exc:
        raise to_http(exc)
    return LoginResponse(message="Login successful!", userEmail=user["email"])
