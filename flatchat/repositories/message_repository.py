import copy
from typing import Any, Dict, List, Optional, Tuple

from flatchat.models.conversation import ConversationDocument
from flatchat.models.message import MessageDocument
from flatchat.models.user import UserDocument
from flatchat.repositories.conversation_repository import find_conversation
from flatchat.utils.ids import new_id, utc_now_iso


PREVIEW_LENGTH = 200


def build_message(sender: Optional[str], content: str) -> MessageDocument:
    return {
        "id": new_id("msg"),
        "sender": sender,
        "content": content,
        "timestamp": utc_now_iso(),
    }


def append_to_copies(
    users: List[UserDocument],
    conversation_id: str,
    message: MessageDocument,
) -> List[Tuple[UserDocument, ConversationDocument]]:
    """Append ``message`` to every copy of ``conversation_id``; return the updated holders."""
    holders: List[Tuple[UserDocument, ConversationDocument]] = []
    for user in users:
        conv = find_conversation(user, conversation_id)
        if conv is None:
            continue
        conv.setdefault("messages", []).append(copy.deepcopy(message))
        conv["lastMessagePreview"] = message["content"][:PREVIEW_LENGTH]
        conv["lastActivityTime"] = message["timestamp"]
        holders.append((user, conv))
    return holders


def expected_participants(holders: List[Tuple[UserDocument, ConversationDocument]]) -> List[str]:
    expected: Dict[str, Any] = {}
    for _, conv in holders:
        for participant in conv.get("participants", []):
            expected.setdefault(participant, None)
    return list(expected)
