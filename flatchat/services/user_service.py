import logging
from typing import Any, Dict, Optional

from flatchat.repositories.user_repository import UserRepository, find_user, find_user_index
from flatchat.utils.errors import BadRequestError, ConflictError, NotFoundError, UnauthorizedError


logger = logging.getLogger(__name__)

# fields a client may always overwrite, even if the record lacks them
PATCHABLE_FIELDS = ("contacts", "groups", "conversations")
# never writable through a patch
PROTECTED_FIELDS = ("email",)


class UserService:
    """Service layer for account and profile operations"""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def register_user(self, email: Optional[str], password: Optional[str]) -> Dict[str, Any]:
        """
        Register a new account
        - Both fields are required
        - Email must not be taken
        - Starts with empty contacts, groups and conversations
        """
        if not email or not password:
            raise BadRequestError("Email and password are required.")

        async with self.user_repository.lock:
            users = await self.user_repository.load_all()
            if find_user(users, email):
                raise ConflictError("This email is already registered.")

            user = {
                "email": email,
                "password": password,
                "contacts": [],
                "groups": [],
                "conversations": [],
            }
            users.append(user)
            await self.user_repository.save_all(users)

        logger.info("Registered user %s", email)
        return user

    async def authenticate_user(self, email: Optional[str], password: Optional[str]) -> Dict[str, Any]:
        """
        Check credentials
        - Plain comparison against the stored password
        """
        if not email or not password:
            raise BadRequestError("Email and password are required.")

        user = await self.user_repository.get_user_by_email(email)
        if not user or user.get("password") != password:
            raise UnauthorizedError("Incorrect email or password.")
        return user

    async def get_public_user(self, email: str) -> Dict[str, Any]:
        user = await self.user_repository.get_user_by_email(email)
        if not user:
            raise NotFoundError("User not found.")
        return {key: value for key, value in user.items() if key != "password"}

    async def update_user(self, email: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """
        Overwrite whole fields of a stored user
        - contacts / groups / conversations are always accepted
        - any other field is accepted only if the record already has it
        - email is never changed; unknown fields are ignored
        """
        async with self.user_repository.lock:
            users = await self.user_repository.load_all()
            index = find_user_index(users, email)
            if index == -1:
                raise NotFoundError("User not found.")

            user = users[index]
            updated = []
            for key, value in fields.items():
                if key in PROTECTED_FIELDS:
                    continue
                if key in PATCHABLE_FIELDS or key in user:
                    user[key] = value
                    updated.append(key)

            await self.user_repository.save_all(users)

        logger.info("Updated user %s fields=%s", email, updated)
        return user
