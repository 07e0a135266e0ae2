import asyncio
import logging
from typing import Any, Dict, List

from bson.errors import BSONError
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, ReplaceOne


logger = logging.getLogger(__name__)


class MongoUserStore:

    backend = "mongo"

    def __init__(self, url: str, db_name: str) -> None:
        self._client = AsyncIOMotorClient(url)
        self._db = self._client[db_name]
        self.lock = asyncio.Lock()

    @property
    def collection(self):
        return self._db["users"]

    async def ensure_indexes(self) -> None:
        await self.collection.create_index([("email", ASCENDING)], unique=True)

    async def load_all(self) -> List[Dict[str, Any]]:
        try:
            cursor = self.collection.find({}, {"_id": 0})
            docs = await cursor.to_list(length=None)
        except BSONError as exc:
            logger.warning("User collection holds undecodable documents, treating as empty: %s", exc)
            return []
        return _with_email(docs)

    async def save_all(self, users: List[Dict[str, Any]]) -> None:
        # upsert by email, then drop anything no longer in the collection
        users = _with_email(users)
        emails = [u["email"] for u in users]
        ops = [ReplaceOne({"email": u["email"]}, dict(u), upsert=True) for u in users]
        if ops:
            await self.collection.bulk_write(ops, ordered=True)
        await self.collection.delete_many({"email": {"$nin": emails}})

    async def close(self) -> None:
        self._client.close()


def _with_email(users: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    kept = [u for u in users if isinstance(u.get("email"), str) and u["email"]]
    if len(kept) != len(users):
        logger.warning("Skipped %d user documents without an email", len(users) - len(kept))
    return kept
