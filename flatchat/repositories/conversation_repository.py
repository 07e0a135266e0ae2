import copy
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from flatchat.models.conversation import ConversationDocument
from flatchat.utils.ids import new_id, utc_now_iso


# legacy key -> current key
_RENAMED_FIELDS = {
    "name": "displayName",
    "lastMessage": "lastMessagePreview",
    "time": "lastActivityTime",
}


def _ordered_unique(values: Iterable[Any]) -> List[str]:
    seen: Set[str] = set()
    result: List[str] = []
    for value in values:
        if isinstance(value, str) and value not in seen:
            seen.add(value)
            result.append(value)
    return result


def normalize_message(raw: Dict[str, Any]) -> Dict[str, Any]:
    message = dict(raw)
    if "content" not in message and "text" in message:
        message["content"] = message.pop("text")
    return message


def normalize_conversation(owner: Optional[str], raw: Dict[str, Any]) -> ConversationDocument:
    """Bring a stored conversation copy into the current shape.

    Older records carry ``identifier`` (1:1) or ``members`` (group) instead of
    ``participants`` and use the ``name``/``lastMessage``/``time`` keys.
    """
    conv: Dict[str, Any] = dict(raw)
    for old, new in _RENAMED_FIELDS.items():
        if old in conv:
            value = conv.pop(old)
            conv.setdefault(new, value)

    members = conv.pop("members", None)
    is_group = bool(conv.get("isGroup", isinstance(members, list)))
    conv["isGroup"] = is_group

    participants = conv.get("participants")
    if not isinstance(participants, list):
        if is_group:
            participants = members if isinstance(members, list) else []
        elif conv.get("identifier"):
            participants = [owner, conv["identifier"]]
        else:
            participants = []
    conv["participants"] = _ordered_unique(participants)

    messages = conv.get("messages")
    conv["messages"] = [normalize_message(m) for m in messages if isinstance(m, dict)] if isinstance(messages, list) else []
    conv.setdefault("isPriority", False)
    conv.setdefault("lastMessagePreview", "")
    conv.setdefault("lastActivityTime", conv.get("createdAt", ""))
    return conv  # type: ignore[return-value]


def find_conversation(user: Dict[str, Any], conversation_id: str) -> Optional[ConversationDocument]:
    for conv in user.get("conversations", []):
        if conv.get("id") == conversation_id:
            return conv
    return None


def has_direct_conversation(user: Dict[str, Any], counterpart: str) -> bool:
    for conv in user.get("conversations", []):
        if conv.get("isGroup"):
            continue
        if counterpart in conv.get("participants", []) or conv.get("identifier") == counterpart:
            return True
    return False


def conversation_ids(users: List[Dict[str, Any]]) -> Set[str]:
    return {
        conv["id"]
        for user in users
        for conv in user.get("conversations", [])
        if conv.get("id")
    }


def build_direct_pair(
    initiator: str,
    counterpart: str,
    display_name: str,
    taken_ids: Set[str],
) -> Tuple[ConversationDocument, ConversationDocument]:
    now = utc_now_iso()
    chat: ConversationDocument = {
        "id": new_id("chat", taken_ids),
        "displayName": display_name,
        "identifier": counterpart,
        "participants": [initiator, counterpart],
        "isGroup": False,
        "isPriority": False,
        "createdAt": now,
        "lastMessagePreview": "",
        "lastActivityTime": now,
        "messages": [],
    }
    # the counterpart always sees the initiator's identifier
    mirrored = copy.deepcopy(chat)
    mirrored["displayName"] = initiator
    mirrored["identifier"] = initiator
    return chat, mirrored


def build_group(
    initiator: str,
    name: str,
    members: List[str],
    end_date: Any,
    taken_ids: Set[str],
) -> ConversationDocument:
    now = utc_now_iso()
    return {
        "id": new_id("group", taken_ids),
        "displayName": name,
        "participants": _ordered_unique([initiator, *members]),
        "isGroup": True,
        "isPriority": False,
        "endDate": end_date,
        "createdBy": initiator,
        "createdAt": now,
        "lastMessagePreview": "",
        "lastActivityTime": now,
        "messages": [],
    }
