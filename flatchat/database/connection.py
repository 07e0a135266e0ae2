import logging
from typing import Optional, Union

from flatchat.config import Settings, get_settings
from flatchat.database.json_store import JsonUserStore
from flatchat.database.mongo_store import MongoUserStore


logger = logging.getLogger(__name__)

UserStore = Union[JsonUserStore, MongoUserStore]

_store: Optional[UserStore] = None


def build_store(settings: Settings) -> UserStore:
    if settings.store_backend == "mongo":
        return MongoUserStore(settings.mongo_url, settings.mongo_db)
    if settings.store_backend != "json":
        raise ValueError(f"Unknown STORE_BACKEND: {settings.store_backend!r}")
    return JsonUserStore(settings.users_file)


async def connect_store() -> None:
    global _store
    settings = get_settings()
    _store = build_store(settings)
    if isinstance(_store, MongoUserStore):
        await _store.ensure_indexes()
    logger.info("User store ready (backend=%s)", _store.backend)


async def close_store() -> None:
    global _store
    if _store is not None:
        await _store.close()
        _store = None


def get_store() -> UserStore:
    global _store
    if _store is None:
        _store = build_store(get_settings())
    return _store


def store_dependency() -> UserStore:
    return get_store()
