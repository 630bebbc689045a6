"""Mentor session held by the client.

A ``SessionContext`` is created once and handed to whatever needs the signed-in
mentor; nothing reads the session file behind its back.
"""

import json
import logging
from pathlib import Path
from typing import Any

from app.core.config import settings

logger = logging.getLogger("mentorhub.client")


class SessionContext:
    def __init__(self, path: str | Path | None = None):
        self.path = Path(path or settings.session_file).expanduser()
        self.user: dict[str, Any] | None = None
        self.access_token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user and self.access_token)

    def load(self) -> bool:
        """Restore a saved session. A file that cannot be read is discarded."""
        if not self.path.exists():
            return False
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            user, token = data["user"], data["access_token"]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Discarding unreadable session file {self.path}: {e}")
            self.clear()
            return False
        if not user or not token:
            self.clear()
            return False
        self.user, self.access_token = user, token
        return True

    def save(self, user: dict[str, Any], access_token: str) -> None:
        self.user, self.access_token = user, access_token
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"user": user, "access_token": access_token}), encoding="utf-8")

    def clear(self) -> None:
        self.user, self.access_token = None, None
        self.path.unlink(missing_ok=True)

    def auth_headers(self) -> dict[str, str]:
        if not self.access_token:
            return {}
        return {"Authorization": f"Bearer {self.access_token}"}
