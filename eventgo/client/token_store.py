"""
Token persistence for the session client.

The session only needs three operations: load, save and clear. The stored
value is a dict holding the JWT and the last known user object.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path(os.environ.get("EVENTGO_CONFIG_DIR", Path.home() / ".eventgo"))


class TokenStore:
    """Interface for token persistence."""

    def load(self) -> Optional[dict]:
        raise NotImplementedError

    def save(self, data: dict) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError


class MemoryTokenStore(TokenStore):
    """Process-local store; used by tests and short-lived scripts."""

    def __init__(self, data: Optional[dict] = None):
        self._data = dict(data) if data else None

    def load(self) -> Optional[dict]:
        return dict(self._data) if self._data else None

    def save(self, data: dict) -> None:
        self._data = dict(data)

    def clear(self) -> None:
        self._data = None


class FileTokenStore(TokenStore):
    """
    JSON file under a config directory (default ~/.eventgo/session.json).
    A missing or unreadable file counts as no session.
    """

    def __init__(self, config_dir: Optional[Path] = None, filename: str = "session.json"):
        self.path = Path(config_dir or DEFAULT_CONFIG_DIR) / filename

    def load(self) -> Optional[dict]:
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            return None
        return data if isinstance(data, dict) and data.get("token") else None

    def save(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, default=str)
        try:
            os.chmod(self.path, 0o600)
        except OSError:
            pass

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
