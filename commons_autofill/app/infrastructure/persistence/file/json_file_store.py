"""File-backed key-value store: one file per slot under a directory."""
from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path

from commons_autofill.app.ports.key_value_store import StoreError

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]")


class JsonFileStore:
    """Stores each slot as ``<directory>/<key>.json``; writes replace the file atomically."""

    def __init__(self, directory: Path) -> None:
        self._directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self._directory / f"{_UNSAFE.sub('_', key)}.json"

    def read(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise StoreError(f"cannot read {path}: {exc}") from exc

    def write(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=".tmp-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StoreError(f"cannot write {path}: {exc}") from exc

    def remove(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StoreError(f"cannot remove {path}: {exc}") from exc
