"""Durable client-side session: the bearer token and the username it belongs to.

The session is restored from disk when constructed, so a returning user is
signed in without a round trip. ``logout`` removes the stored file.
"""

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_SESSION_PATH = Path.home() / ".progress_tracker" / "session.json"


class ClientSession:
    def __init__(self, storage_path: str | Path | None = None):
        self.storage_path = Path(storage_path) if storage_path else DEFAULT_SESSION_PATH
        self.token: str | None = None
        self.username: str | None = None
        self._load()

    def _load(self) -> None:
        try:
            with self.storage_path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except FileNotFoundError:
            return
        except (OSError, json.JSONDecodeError):
            logger.warning("Ignoring unreadable session file %s", self.storage_path)
            return

        if isinstance(data, dict) and data.get("token"):
            self.token = data["token"]
            self.username = data.get("username")

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def login(self, token: str, username: str) -> None:
        self.token = token
        self.username = username
        self.storage_path.parent.mkdir(parents=True, exist_ok=True)
        # the token is a bearer credential: owner read/write only
        fd = os.open(self.storage_path, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, 0o600)
        os.chmod(self.storage_path, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump({"token": token, "username": username}, handle)

    def logout(self) -> None:
        self.token = None
        self.username = None
        self.storage_path.unlink(missing_ok=True)

    def auth_headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}
