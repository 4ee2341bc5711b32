"""
Recent-password history and favorites, persisted to a small local file.

File format (JSON text), plain:
{
  "version": 1,
  "history": ["most recent", ...],
  "favorites": ["first starred", ...]
}

Encrypted, when a master password is given:
{
  "version": 1,
  "salt": "<base64>",
  "data": "<base64 Fernet token of the plain payload>"
}
"""

from __future__ import annotations

import base64
import hashlib
import json
import logging
import os
from datetime import date
from pathlib import Path
from typing import List

from cryptography.fernet import Fernet, InvalidToken  # pip install cryptography

from .config import FAVORITES_LIMIT, HISTORY_LIMIT
from .errors import StoreError

logger = logging.getLogger(__name__)

STORE_VERSION = 1
KDF_ITERATIONS = 300_000
SALT_BYTES = 16


def default_store_path() -> Path:
    """
    Per-user data location, overridable with PASSFORGE_STORE.
    The directory is created lazily on first save.
    """
    override = os.getenv("PASSFORGE_STORE")
    if override:
        return Path(override)

    if os.name == "nt":
        base = os.getenv("APPDATA")
        base_path = Path(base) if base else Path.home() / "AppData" / "Roaming"
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else Path.home() / ".local" / "share"

    return base_path / "passforge" / "passwords.json"


def default_export_name(day: date | None = None) -> str:
    day = day or date.today()
    return f"passwords-{day.isoformat()}.txt"


def _derive_key(master_password: str, salt: bytes) -> bytes:
    dk = hashlib.pbkdf2_hmac(
        "sha256",
        master_password.encode("utf-8"),
        salt,
        KDF_ITERATIONS,
        dklen=32,
    )
    return base64.urlsafe_b64encode(dk)


def _string_list(value, field: str) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise StoreError(f"Store field {field!r} is not a list of strings.")
    return list(value)


class PasswordStore:
    """
    Bounded history (most recent first) plus a bounded favorites list.

    Mutating methods change memory only; call save() to persist.
    """

    def __init__(
        self,
        path: Path | str | None = None,
        master_password: str | None = None,
    ) -> None:
        self.path = Path(path) if path is not None else default_store_path()
        self.master_password = master_password or None
        self._history: list[str] = []
        self._favorites: list[str] = []

    # ---------- lists ----------

    @property
    def history(self) -> List[str]:
        return list(self._history)

    @property
    def favorites(self) -> List[str]:
        return list(self._favorites)

    def add_to_history(self, password: str) -> None:
        """Put ``password`` first, dropping any older copy and the overflow."""
        if not password:
            return
        rest = [p for p in self._history if p != password]
        self._history = [password, *rest][:HISTORY_LIMIT]

    def clear_history(self) -> None:
        self._history = []

    def is_favorite(self, password: str) -> bool:
        return password in self._favorites

    def toggle_favorite(self, password: str) -> bool:
        """
        Star or unstar ``password``. Returns True if it is now a favorite.
        A full list keeps its first FAVORITES_LIMIT entries.
        """
        if password in self._favorites:
            self._favorites = [p for p in self._favorites if p != password]
            return False
        if not password:
            return False
        self._favorites = [*self._favorites, password][:FAVORITES_LIMIT]
        return password in self._favorites

    # ---------- export ----------

    def export_lines(self) -> List[str]:
        """History then favorites, duplicates removed, first occurrence wins."""
        return list(dict.fromkeys([*self._history, *self._favorites]))

    def export_text(self) -> str:
        """``1. first`` / ``2. second`` ... joined with newlines."""
        return "\n".join(
            f"{idx}. {pw}" for idx, pw in enumerate(self.export_lines(), start=1)
        )

    def export_to(self, target: Path | str) -> Path:
        """Write export_text() to ``target``; a directory gets the dated name."""
        if not self.export_lines():
            raise StoreError("No passwords to export.")

        target = Path(target)
        if target.is_dir():
            target = target / default_export_name()
        try:
            target.write_text(self.export_text(), encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"Failed to write export file: {exc}") from exc
        return target

    # ---------- persistence ----------

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> "PasswordStore":
        """
        Replace in-memory lists with the file contents.
        A missing file leaves both lists empty.
        """
        if not self.exists():
            self._history, self._favorites = [], []
            return self

        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise StoreError(f"Failed to read store: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise StoreError("Store file is corrupted.") from exc

        if not isinstance(payload, dict) or payload.get("version") != STORE_VERSION:
            raise StoreError("Unsupported store version.")

        if "data" in payload:
            payload = self._decrypt(payload)

        history = _string_list(payload.get("history", []), "history")
        favorites = _string_list(payload.get("favorites", []), "favorites")

        self._history = list(dict.fromkeys(history))[:HISTORY_LIMIT]
        self._favorites = list(dict.fromkeys(favorites))[:FAVORITES_LIMIT]
        logger.debug(
            "Loaded %d history / %d favorite entries from %s",
            len(self._history), len(self._favorites), self.path,
        )
        return self

    def save(self) -> None:
        """Write both lists, encrypted when a master password is set."""
        body = {
            "version": STORE_VERSION,
            "history": self._history,
            "favorites": self._favorites,
        }
        if self.master_password:
            body = self._encrypt(body)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(body, indent=2), encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"Failed to write store: {exc}") from exc
        logger.debug("Saved store to %s", self.path)

    # ---------- encryption ----------

    def _encrypt(self, body: dict) -> dict:
        salt = os.urandom(SALT_BYTES)
        fernet = Fernet(_derive_key(self.master_password, salt))
        token = fernet.encrypt(json.dumps(body).encode("utf-8"))
        return {
            "version": STORE_VERSION,
            "salt": base64.b64encode(salt).decode("ascii"),
            "data": base64.b64encode(token).decode("ascii"),
        }

    def _decrypt(self, payload: dict) -> dict:
        if not self.master_password:
            raise StoreError("Store is encrypted; a master password is required.")

        try:
            salt = base64.b64decode(payload["salt"])
            token = base64.b64decode(payload["data"])
        except (KeyError, TypeError, ValueError) as exc:
            raise StoreError("Store file is corrupted.") from exc

        fernet = Fernet(_derive_key(self.master_password, salt))
        try:
            plaintext = fernet.decrypt(token)
        except InvalidToken as exc:
            raise StoreError("Invalid master password or corrupted store.") from exc

        try:
            body = json.loads(plaintext.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise StoreError("Store data is corrupted.") from exc

        if not isinstance(body, dict):
            raise StoreError("Store data is corrupted.")
        return body
