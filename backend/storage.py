"""Durable JSON document storage.

Every storage key maps to one JSON document kept in its own file inside the
data directory.  Documents are always replaced wholesale; there are no
partial writes and no schema versioning.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

from . import DEFAULT_DATA_DIR
from .errors import HydrationError, PersistenceError

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


class DocumentStorage:
    """String-keyed JSON documents stored under ``data_dir``."""

    def __init__(self, data_dir: Path | str = DEFAULT_DATA_DIR) -> None:
        self.data_dir = Path(data_dir)

    def path_for(self, key: str) -> Path:
        """Return the file backing ``key``."""
        name = _UNSAFE_CHARS.sub("_", key).strip("_.") or "document"
        return self.data_dir / f"{name}.json"

    def read(self, key: str) -> Any:
        """Return the document stored under ``key`` or ``None`` if absent.

        Raises :class:`HydrationError` when the file exists but cannot be
        read or does not contain valid JSON.
        """

        path = self.path_for(key)
        try:
            if not path.exists():
                return None
            text = path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise HydrationError(key, f"cannot read {path}: {exc}") from exc
        if not text:
            return None
        try:
            return json.loads(text)
        except ValueError as exc:
            raise HydrationError(key, f"corrupt document in {path}: {exc}") from exc

    def write(self, key: str, document: Any) -> None:
        """Replace the document stored under ``key``.

        The payload goes to a temporary file first and is moved into place,
        so a failed write never leaves a truncated document behind.
        """

        try:
            payload = json.dumps(document)
        except (TypeError, ValueError) as exc:
            raise PersistenceError(key, f"document is not JSON serializable: {exc}") from exc

        path = self.path_for(key)
        temp_path = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                "w", dir=path.parent, delete=False, encoding="utf-8", suffix=".tmp"
            ) as tmp:
                temp_path = Path(tmp.name)
                tmp.write(payload)
            temp_path.replace(path)
        except OSError as exc:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            raise PersistenceError(key, f"cannot write {path}: {exc}") from exc

