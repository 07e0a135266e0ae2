from typing import Optional

from pydantic import BaseModel


class UserCredentials(BaseModel):

    email: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):

    message: str
    userEmail: str
