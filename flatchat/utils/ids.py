import secrets
import string
import time
from datetime import datetime, timezone
from typing import Collection


_ALPHABET = string.ascii_lowercase + string.digits


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_id(prefix: str, taken: Collection[str] = ()) -> str:
    """Return ``<prefix>_<epoch ms>_<9 random chars>`` not present in ``taken``."""
    while True:
        suffix = "".join(secrets.choice(_ALPHABET) for _ in range(9))
        candidate = f"{prefix}_{int(time.time() * 1000)}_{suffix}"
        if candidate not in taken:
            return candidate
