from typing import Any, List, TypedDict

from flatchat.models.conversation import ConversationDocument


class ContactDocument(TypedDict, total=False):
    name: str
    email: str


class UserDocument(TypedDict, total=False):

    email: str
    # stored as given; not a credential system
    password: str
    contacts: List[ContactDocument]
    # legacy list, groups now live in conversations
    groups: List[Any]
    conversations: List[ConversationDocument]
