from fastapi import Depends

from flatchat.database.connection import store_dependency
from flatchat.repositories.user_repository import UserRepository
from flatchat.services.conversation_service import ConversationService
from flatchat.services.message_service import MessageService
from flatchat.services.user_service import UserService


def get_user_repository(store = Depends(store_dependency)) -> UserRepository:
    return UserRepository(store)


def get_user_service(repo: UserRepository = Depends(get_user_repository)) -> UserService:
    return UserService(repo)


def get_conversation_service(repo: UserRepository = Depends(get_user_repository)) -> ConversationService:
    return ConversationService(repo)


def get_message_service(repo: UserRepository = Depends(get_user_repository)) -> MessageService:
    return MessageService(repo)
