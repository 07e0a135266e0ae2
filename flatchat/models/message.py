from typing import Optional, TypedDict


class MessageDocument(TypedDict, total=False):
    id: str
    sender: Optional[str]
    content: str
    timestamp: str
