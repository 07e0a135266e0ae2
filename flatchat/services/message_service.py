import logging
from typing import Any, Dict, Optional

from flatchat.repositories.message_repository import append_to_copies, build_message, expected_participants
from flatchat.repositories.user_repository import UserRepository
from flatchat.utils.errors import BadRequestError, NotFoundError


logger = logging.getLogger(__name__)


class MessageService:

    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    async def send_message(self, conversation_id: Optional[str], sender: Optional[str], content: Optional[str]) -> Dict[str, Any]:
        """Append one message to every stored copy of ``conversation_id``.

        Delivery is best-effort: a conversation whose copies exist for only
        some of its participants still accepts the message, and the missing
        participants are reported back.
        """
        if not conversation_id or not content or not content.strip():
            raise BadRequestError("conversationId and message content are required.")

        message = build_message(sender, content.strip())
        async with self._users.lock:
            users = await self._users.load_all()
            holders = append_to_copies(users, conversation_id, message)
            if not holders:
                raise NotFoundError("Conversation not found.")
            await self._users.save_all(users)

        reached = {user["email"] for user, _ in holders}
        missing = [p for p in expected_participants(holders) if p not in reached]
        if missing:
            logger.warning(
                "Partial fan-out for %s: %d copies updated, missing %s",
                conversation_id, len(holders), missing,
            )
        return {
            "message": message,
            "delivered_copies": len(holders),
            "missing_participants": missing,
        }
