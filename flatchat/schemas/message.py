from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class MessageCreate(BaseModel):

    model_config = ConfigDict(populate_by_name=True)

    conversation_id: Optional[str] = Field(default=None, alias="conversationId")
    sender_email: Optional[str] = Field(default=None, alias="senderEmail")
    content: Optional[str] = None
    # plain text, or a legacy {text|content, sender} object
    message: Any = None

    def resolved_content(self) -> Optional[str]:
        if self.content:
            return self.content
        if isinstance(self.message, str):
            return self.message
        if isinstance(self.message, dict):
            value = self.message.get("content") or self.message.get("text")
            return value if isinstance(value, str) else None
        return None

    def resolved_sender(self) -> Optional[str]:
        if self.sender_email:
            return self.sender_email
        if isinstance(self.message, dict) and isinstance(self.message.get("sender"), str):
            return self.message["sender"]
        return None
