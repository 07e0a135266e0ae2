from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatCreate(BaseModel):

    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(default=None, alias="userId")
    name: Optional[str] = None
    contact_email: Optional[str] = Field(default=None, alias="contactEmail")
    # older clients send the counterpart as ``identifier``
    identifier: Optional[str] = None

    @property
    def counterpart(self) -> Optional[str]:
        return self.contact_email or self.identifier


class GroupCreate(BaseModel):

    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(default=None, alias="userId")
    name: Optional[str] = None
    # validated by the service so a non-list answers 400
    members: Any = None
    end_date: Any = Field(default=None, alias="endDate")


class ContactAdd(BaseModel):

    model_config = ConfigDict(populate_by_name=True)

    adder_email: Optional[str] = Field(default=None, alias="adderEmail")
    contact_email: Optional[str] = Field(default=None, alias="contactEmail")
    contact_name: Optional[str] = Field(default=None, alias="contactName")
