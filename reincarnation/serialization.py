"""TOML reading and writing helpers shared by the codec and file storage."""

from __future__ import annotations

import math
import os
import tempfile
import tomllib
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping


def _normalize_for_toml(value: Any) -> Any:
    if isinstance(value, Mapping):
        normalized: Dict[str, Any] = {}
        for key, item in value.items():
            if item is None:
                continue
            normalized[str(key)] = _normalize_for_toml(item)
        return normalized
    if isinstance(value, (list, tuple)):
        return [_normalize_for_toml(item) for item in value if item is not None]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (str, int, bool)):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Cannot store non-finite float {value!r}")
        return value
    return str(value)


def _quote_string(value: str) -> str:
    replacements = {
        "\\": "\\\\",
        '"': '\\"',
        "\b": "\\b",
        "\t": "\\t",
        "\n": "\\n",
        "\f": "\\f",
        "\r": "\\r",
    }

    def _escape_char(char: str) -> str:
        if char in replacements:
            return replacements[char]
        code = ord(char)
        if 0x20 <= code <= 0x7E:
            return char
        return f"\\u{code:04x}" if code <= 0xFFFF else f"\\U{code:08x}"

    return '"' + "".join(_escape_char(char) for char in value) + '"'


def _format_toml_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        # repr is the shortest text that reads back to the same float
        return repr(value)
    if isinstance(value, str):
        return _quote_string(value)
    if isinstance(value, list):
        return "[" + ", ".join(_format_toml_value(item) for item in value) + "]"
    raise TypeError(f"Unsupported TOML value: {type(value).__name__}")


def _serialize_table(
    data: Mapping[str, Any],
    *,
    parent: tuple[str, ...] = (),
    output: list[str],
) -> None:
    simple_items: list[tuple[str, Any]] = []
    tables: list[tuple[str, Mapping[str, Any]]] = []

    for key, value in data.items():
        if isinstance(value, Mapping):
            tables.append((key, value))
        else:
            simple_items.append((key, value))

    simple_items.sort(key=lambda item: item[0])
    tables.sort(key=lambda item: item[0])

    for key, value in simple_items:
        output.append(f"{_format_key(key)} = {_format_toml_value(value)}")

    for key, value in tables:
        header = ".".join(_format_key(part) for part in (*parent, key))
        if output and output[-1] != "":
            output.append("")
        output.append(f"[{header}]")
        _serialize_table(value, parent=(*parent, key), output=output)


def _format_key(key: str) -> str:
    if key and all(char.isascii() and (char.isalnum() or char in "-_") for char in key):
        return key
    return _quote_string(key)


def toml_dumps(data: Mapping[str, Any]) -> str:
    """Render ``data`` as a canonical TOML document with sorted keys."""

    normalized = _normalize_for_toml(data)
    if not isinstance(normalized, Mapping):
        raise TypeError("Top level TOML document must be a mapping")
    output: list[str] = []
    _serialize_table(normalized, output=output)
    return "\n".join(output) + "\n"


def toml_loads(text: str) -> Dict[str, Any]:
    return tomllib.loads(text)


def read_toml(path: Path) -> Dict[str, Any] | None:
    """Return the parsed document at ``path`` or ``None`` when it does not exist.

    Unreadable files and malformed documents propagate their ``OSError`` or
    ``tomllib.TOMLDecodeError``.
    """

    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except FileNotFoundError:
        return None


def write_toml(path: Path, payload: Mapping[str, Any]) -> None:
    """Atomically replace ``path`` with ``payload`` rendered as TOML."""

    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path: Path | None = None
    data = toml_dumps(payload)
    try:
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf8", dir=path.parent, delete=False
        ) as handle:
            temp_path = Path(handle.name)
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_path, path)
        temp_path = None
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink()
            except FileNotFoundError:
                pass


__all__ = ["read_toml", "toml_dumps", "toml_loads", "write_toml"]
