"""Key-value storage media for saved games.

The codec only ever talks to a :class:`KeyValueStorage`: a synchronous
``get``/``set`` API over string keys and string values.  :class:`MemoryStorage`
keeps everything in process, :class:`FileStorage` persists to a single TOML
document that is replaced atomically on every write.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Dict, Optional, Protocol, runtime_checkable

from .serialization import read_toml, write_toml

log = logging.getLogger(__name__)

DATA_ROOT_ENV = "REINCARNATION_DATA_ROOT"


class StorageError(RuntimeError):
    """Base class for storage medium failures."""


class StorageReadError(StorageError):
    pass


class StorageWriteError(StorageError):
    pass


@runtime_checkable
class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


def _is_site_packages(path: Path) -> bool:
    """Return ``True`` if ``path`` is inside a site/dist-packages directory."""

    normalized = {part.lower() for part in path.parts}
    return "site-packages" in normalized or "dist-packages" in normalized


def resolve_storage_root(package_root: Path) -> Path:
    """Determine where save files should live.

    An explicit ``REINCARNATION_DATA_ROOT`` wins.  Otherwise saves sit beside
    the source checkout, unless the package is installed into site-packages or
    the directory is not writable, in which case the working directory is used.
    """

    override = os.getenv(DATA_ROOT_ENV)
    if override:
        return Path(override).expanduser().resolve()

    if _is_site_packages(package_root) or not os.access(package_root, os.W_OK):
        return Path.cwd().resolve()

    return package_root.resolve()


class MemoryStorage:
    """Process-local storage, the equivalent of a browser's local storage."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = str(value)

    def __contains__(self, key: object) -> bool:
        return key in self._values


class FileStorage:
    """Stores string values under string keys in one TOML document."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    @classmethod
    def in_root(cls, root: Path, filename: str = "saves.toml") -> "FileStorage":
        return cls(root / filename)

    def get(self, key: str) -> Optional[str]:
        document = self._read_document()
        value = document.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise StorageReadError(f"Value stored under {key!r} is not text")
        return value

    def set(self, key: str, value: str) -> None:
        try:
            document = dict(read_toml(self.path) or {})
        except (tomllib.TOMLDecodeError, UnicodeDecodeError):
            log.warning("Replacing malformed storage document at %s", self.path)
            document = {}
        except OSError as exc:
            raise StorageWriteError(f"Unable to read {self.path} before writing: {exc}") from exc
        document[str(key)] = str(value)
        try:
            write_toml(self.path, document)
        except OSError as exc:
            raise StorageWriteError(f"Unable to write {self.path}: {exc}") from exc

    def _read_document(self) -> Dict[str, object]:
        try:
            payload = read_toml(self.path)
        except (OSError, tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise StorageReadError(f"Unable to read {self.path}: {exc}") from exc
        if payload is None:
            return {}
        return dict(payload)


__all__ = [
    "FileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "resolve_storage_root",
]
