from __future__ import annotations

import os
from functools import lru_cache

from dotenv import load_dotenv


load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self) -> None:
        self.app_env: str = os.getenv("APP_ENV", "development")
        self.store_backend: str = os.getenv("STORE_BACKEND", "json").lower()
        self.users_file: str = os.getenv("USERS_FILE", "users.json")
        self.mongo_url: str = os.getenv("MONGO_URL", "mongodb://localhost:27017")
        self.mongo_db: str = os.getenv("MONGO_DB", "flatchat")
        self.frontend_origin: str = os.getenv("FRONTEND_ORIGIN", "http://localhost:3000")
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "5000"))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
