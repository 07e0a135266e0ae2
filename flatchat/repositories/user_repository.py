import asyncio
from typing import Any, Dict, List, Optional

from flatchat.models.user import UserDocument
from flatchat.repositories.conversation_repository import normalize_conversation


def normalize_user(raw: Dict[str, Any]) -> UserDocument:
    user: Dict[str, Any] = dict(raw)
    email = user.get("email")
    for field in ("contacts", "groups", "conversations"):
        if not isinstance(user.get(field), list):
            user[field] = []
    user["conversations"] = [
        normalize_conversation(email, conv)
        for conv in user["conversations"]
        if isinstance(conv, dict)
    ]
    return user  # type: ignore[return-value]


def find_user(users: List[UserDocument], email: str) -> Optional[UserDocument]:
    for user in users:
        if user.get("email") == email:
            return user
    return None


def find_user_index(users: List[UserDocument], email: str) -> int:
    for index, user in enumerate(users):
        if user.get("email") == email:
            return index
    return -1


class UserRepository:

    def __init__(self, store) -> None:
        self._store = store

    @property
    def lock(self) -> asyncio.Lock:
        return self._store.lock

    async def load_all(self) -> List[UserDocument]:
        return [normalize_user(doc) for doc in await self._store.load_all()]

    async def save_all(self, users: List[UserDocument]) -> None:
        await self._store.save_all(users)

    async def get_user_by_email(self, email: str) -> Optional[UserDocument]:
        return find_user(await self.load_all(), email)
