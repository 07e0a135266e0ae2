from typing import List, Optional, TypedDict

from flatchat.models.message import MessageDocument


class ConversationDocument(TypedDict, total=False):
    id: str
    displayName: str
    # 1:1 only: the counterpart as seen by the owner
    identifier: str
    participants: List[str]
    isGroup: bool
    isPriority: bool
    # groups only
    endDate: Optional[str]
    createdBy: str
    createdAt: str
    lastMessagePreview: str
    lastActivityTime: str
    messages: List[MessageDocument]
