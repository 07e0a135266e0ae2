import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List


logger = logging.getLogger(__name__)


class JsonUserStore:
    """Whole-collection persistence in a single JSON array file.

    ``load_all`` never fails on bad content: a file that is not valid UTF-8,
    does not parse, or does not hold a list is reported and treated as an
    empty collection. ``save_all`` writes a sibling temp file and swaps it in
    with ``os.replace`` so readers never observe a half-written file.
    File IO runs in a worker thread.
    """

    backend = "json"

    def __init__(self, path: str | os.PathLike) -> None:
        self._path = Path(path)
        self.lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def load_all(self) -> List[Dict[str, Any]]:
        return await asyncio.to_thread(self._read)

    async def save_all(self, users: List[Dict[str, Any]]) -> None:
        payload = json.dumps(users, indent=2, ensure_ascii=False)
        await asyncio.to_thread(self._write, payload)

    async def close(self) -> None:
        return

    def _read(self) -> List[Dict[str, Any]]:
        if not self._path.exists():
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text("[]", encoding="utf-8")
            logger.info("Created empty user store at %s", self._path)

        try:
            data = json.loads(self._path.read_bytes().decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("User store %s is corrupted, treating as empty: %s", self._path, exc)
            return []
        if not isinstance(data, list):
            logger.warning("User store %s does not hold a list, treating as empty", self._path)
            return []

        users = [doc for doc in data if isinstance(doc, dict)]
        if len(users) != len(data):
            logger.warning("Skipped %d malformed user entries in %s", len(data) - len(users), self._path)
        return users

    def _write(self, payload: str) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self._path)
        finally:
            # only left behind when the write or swap failed
            tmp_path.unlink(missing_ok=True)
