import copy
import logging
from typing import Any, List, Optional

from flatchat.models.conversation import ConversationDocument
from flatchat.models.user import UserDocument
from flatchat.repositories.conversation_repository import (
    build_direct_pair,
    build_group,
    conversation_ids,
    find_conversation,
    has_direct_conversation,
)
from flatchat.repositories.user_repository import UserRepository, find_user
from flatchat.utils.errors import BadRequestError, ConflictError, NotFoundError


logger = logging.getLogger(__name__)


class ConversationService:
    """Creates conversation copies in every participant's record.

    Conversations are stored once per participant. Each create operation
    loads the whole collection, adds all copies, and saves once, so the
    copies of one conversation are never persisted separately.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    async def create_direct_chat(
        self,
        initiator: Optional[str],
        counterpart: Optional[str],
        display_name: Optional[str],
    ) -> ConversationDocument:
        if not initiator or not display_name or not counterpart:
            raise BadRequestError("userId, name and contactEmail are required.")
        if initiator == counterpart:
            raise BadRequestError("You cannot start a chat with yourself.")

        async with self._users.lock:
            users = await self._users.load_all()
            initiator_doc = find_user(users, initiator)
            if initiator_doc is None:
                raise NotFoundError("User not found.")
            counterpart_doc = find_user(users, counterpart)
            if counterpart_doc is None:
                raise NotFoundError("No account exists for this contact email.")

            chat = self._link_pair(users, initiator_doc, counterpart_doc, display_name)
            await self._users.save_all(users)

        logger.info("Created chat %s between %s and %s", chat["id"], initiator, counterpart)
        return chat

    async def add_contact_by_email(
        self,
        adder: Optional[str],
        contact_email: Optional[str],
        contact_name: Optional[str],
    ) -> ConversationDocument:
        if not adder or not contact_email or not contact_name:
            raise BadRequestError("adderEmail, contactEmail and contactName are required.")
        if adder == contact_email:
            raise BadRequestError("You cannot add yourself as a contact.")

        async with self._users.lock:
            users = await self._users.load_all()
            adder_doc = find_user(users, adder)
            if adder_doc is None:
                raise NotFoundError("User not found.")
            contact_doc = find_user(users, contact_email)
            if contact_doc is None:
                raise NotFoundError("No account exists for this contact email.")

            chat = self._link_pair(users, adder_doc, contact_doc, contact_name)
            contacts = [c for c in adder_doc["contacts"] if not (isinstance(c, dict) and c.get("email") == contact_email)]
            contacts.append({"name": contact_name, "email": contact_email})
            adder_doc["contacts"] = contacts
            await self._users.save_all(users)

        logger.info("%s added contact %s (chat %s)", adder, contact_email, chat["id"])
        return chat

    async def create_group(
        self,
        initiator: Optional[str],
        name: Optional[str],
        members: Any,
        end_date: Any,
    ) -> ConversationDocument:
        if not initiator or not name:
            raise BadRequestError("userId and name are required.")
        if not isinstance(members, list) or not members or not all(isinstance(m, str) for m in members):
            raise BadRequestError("members must be a non-empty list of emails.")
        if not end_date:
            raise BadRequestError("endDate is required.")

        async with self._users.lock:
            users = await self._users.load_all()
            if find_user(users, initiator) is None:
                raise NotFoundError("User not found.")

            group = build_group(initiator, name, members, end_date, conversation_ids(users))
            recipients = self._group_recipients(users, group)
            for user in recipients:
                user["conversations"].append(copy.deepcopy(group))
            await self._users.save_all(users)

        logger.info(
            "Created group %s by %s with %d copies (%d listed members)",
            group["id"], initiator, len(recipients), len(members),
        )
        return group

    def _link_pair(
        self,
        users: List[UserDocument],
        initiator_doc: UserDocument,
        counterpart_doc: UserDocument,
        display_name: str,
    ) -> ConversationDocument:
        initiator = initiator_doc["email"]
        counterpart = counterpart_doc["email"]
        if has_direct_conversation(initiator_doc, counterpart):
            raise ConflictError("A conversation with this contact already exists.")

        chat, mirrored = build_direct_pair(initiator, counterpart, display_name, conversation_ids(users))
        initiator_doc["conversations"].append(chat)
        counterpart_doc["conversations"].append(mirrored)
        return chat

    def _group_recipients(self, users: List[UserDocument], group: ConversationDocument) -> List[UserDocument]:
        recipients: List[UserDocument] = []
        for participant in group["participants"]:
            user = find_user(users, participant)
            if user is None:
                logger.debug("Skipping group member without account: %s", participant)
                continue
            if find_conversation(user, group["id"]) is not None:
                continue
            recipients.append(user)
        return recipients
