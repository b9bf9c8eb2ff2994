"""Save-game codec.

A cultivator is saved as a TOML document (``[cultivator]`` table) that is then
wrapped in unpadded standard base64 so the value survives any medium that only
accepts printable text.  Loading never fails: a missing save, an unreadable
medium, an undecodable payload and a payload that decodes to garbage all lead
back to the default cultivator.
"""

from __future__ import annotations

import base64
import binascii
import logging
import tomllib
from typing import Mapping

from .models import CultivatorState, ModelValidationError
from .serialization import toml_dumps, toml_loads
from .storage import KeyValueStorage, StorageReadError

log = logging.getLogger(__name__)

STORAGE_KEY = "myimmortalreincarnation"

_ROOT_TABLE = "cultivator"


class StateDecodeError(ValueError):
    """The stored text is not a valid base64 payload."""


class StateParseError(ValueError):
    """The decoded payload is not a valid cultivator record."""


def encode_text(text: str) -> str:
    raw = base64.b64encode(text.encode("utf8")).decode("ascii")
    return raw.rstrip("=")


def decode_text(encoded: str) -> bytes:
    """Reverse :func:`encode_text`, returning the raw payload bytes.

    Only canonical payloads are accepted: the final character may not carry
    non-zero trailing bits.
    """

    if not isinstance(encoded, str):
        raise StateDecodeError(f"Expected text, received {type(encoded).__name__}")
    if "=" in encoded:
        raise StateDecodeError("Padding is not allowed in stored payloads")
    if len(encoded) % 4 == 1:
        raise StateDecodeError(f"Invalid payload length {len(encoded)}")
    padded = encoded + "=" * (-len(encoded) % 4)
    try:
        decoded = base64.b64decode(padded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise StateDecodeError(str(exc)) from exc
    if base64.b64encode(decoded).decode("ascii").rstrip("=") != encoded:
        raise StateDecodeError("Payload has non-zero trailing bits")
    return decoded


class PersistenceCodec:
    """Round-trips :class:`CultivatorState` through a key-value storage medium."""

    def __init__(self, storage: KeyValueStorage, *, key: str = STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key

    def serialize(self, state: CultivatorState) -> str:
        return toml_dumps({_ROOT_TABLE: state.to_dict()})

    def deserialize(self, payload: bytes | str) -> CultivatorState:
        try:
            text = payload.decode("utf8") if isinstance(payload, bytes) else payload
            document = toml_loads(text)
        except (UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
            raise StateParseError(f"Unreadable cultivator record: {exc}") from exc
        record = document.get(_ROOT_TABLE)
        if not isinstance(record, Mapping):
            raise StateParseError(f"Missing [{_ROOT_TABLE}] table")
        try:
            return CultivatorState.from_dict(record)
        except ModelValidationError as exc:
            raise StateParseError(str(exc)) from exc

    def encode(self, state: CultivatorState) -> str:
        raw = self.serialize(state)
        log.debug("Serialized cultivator: %s", raw)
        encoded = encode_text(raw)
        log.debug("Encoded cultivator: %s", encoded)
        return encoded

    def decode(self, encoded: str) -> bytes:
        return decode_text(encoded)

    def store(self, state: CultivatorState) -> None:
        """Overwrite the saved game with ``state``.

        Storage failures propagate as
        :class:`~reincarnation.storage.StorageWriteError`.
        """

        self.storage.set(self.key, self.encode(state))

    def retrieve(self) -> CultivatorState:
        try:
            raw = self.storage.get(self.key)
        except StorageReadError as exc:
            log.warning("Unable to read saved game, starting fresh: %s", exc)
            return CultivatorState.default()
        if raw is None:
            return CultivatorState.default()

        try:
            decoded = self.decode(raw)
        except StateDecodeError as exc:
            log.warning("Saved game is corrupted, substituting default: %s", exc)
            decoded = self.serialize(CultivatorState.default()).encode("utf8")

        try:
            return self.deserialize(decoded)
        except StateParseError as exc:
            log.warning("Saved game could not be parsed, starting fresh: %s", exc)
            return CultivatorState.default()


__all__ = [
    "PersistenceCodec",
    "STORAGE_KEY",
    "StateDecodeError",
    "StateParseError",
    "decode_text",
    "encode_text",
]
