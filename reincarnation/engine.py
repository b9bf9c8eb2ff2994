"""Progression engine driving a single cultivator."""

from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum
from typing import Callable, Dict, Optional

from .codec import PersistenceCodec
from .models import CultivatorState, multiplier

log = logging.getLogger(__name__)

# Qi gained per cultivation action before the tier multiplier applies.
BASE_QI_GAIN = 1.0


class Command(str, Enum):
    """Discrete player actions the engine responds to."""

    SPIRIT = "spirit"
    VESSEL = "vessel"
    SAVE = "save"
    LOAD = "load"
    HEARTBEAT = "heartbeat"


class Outcome(str, Enum):
    APPLIED = "applied"
    # The command exists but has no defined behaviour yet.
    UNSPECIFIED = "unspecified"

    @property
    def changed(self) -> bool:
        return self is Outcome.APPLIED


def cultivate_spirit(state: CultivatorState) -> float:
    """Add one spiritual cultivation action to ``state`` and return the gain."""

    gain = BASE_QI_GAIN * multiplier(state.spiritual_tier)
    state.spiritual_qi += gain
    return gain


def cultivate_vessel(state: CultivatorState) -> float:
    """Add one vessel cultivation action to ``state``; the rate is flat."""

    state.vessel_qi += BASE_QI_GAIN
    return BASE_QI_GAIN


class ProgressionEngine:
    """Owns the session's cultivator and applies commands to it."""

    def __init__(
        self, codec: PersistenceCodec, state: Optional[CultivatorState] = None
    ) -> None:
        self.codec = codec
        self.state = state if state is not None else CultivatorState.default()
        self._handlers: Dict[Command, Callable[[], Outcome]] = {
            Command.SPIRIT: self._spirit,
            Command.VESSEL: self._vessel,
            Command.SAVE: self._save,
            Command.LOAD: self._load,
            Command.HEARTBEAT: self.heartbeat,
        }

    @classmethod
    def start(cls, codec: PersistenceCodec) -> "ProgressionEngine":
        return cls(codec, codec.retrieve())

    def handle(self, command: Command | str) -> Outcome:
        return self._handlers[Command(command)]()

    def increment_spiritual(self) -> bool:
        return self._spirit().changed

    def increment_vessel(self) -> bool:
        return self._vessel().changed

    def save(self) -> bool:
        """Persist a snapshot of the cultivator.

        Storage write failures propagate to the caller.
        """

        return self._save().changed

    def load(self) -> bool:
        """Replace the cultivator with the saved one, or a fresh one."""

        return self._load().changed

    def heartbeat(self) -> Outcome:
        return Outcome.UNSPECIFIED

    def _spirit(self) -> Outcome:
        cultivate_spirit(self.state)
        return Outcome.APPLIED

    def _vessel(self) -> Outcome:
        cultivate_vessel(self.state)
        return Outcome.APPLIED

    def _save(self) -> Outcome:
        self.codec.store(replace(self.state))
        log.info("Saved cultivator progress")
        return Outcome.APPLIED

    def _load(self) -> Outcome:
        self.state = self.codec.retrieve()
        log.info("Loaded cultivator at %s", self.state.spiritual_tier_label)
        return Outcome.APPLIED


__all__ = [
    "BASE_QI_GAIN",
    "Command",
    "Outcome",
    "ProgressionEngine",
    "cultivate_spirit",
    "cultivate_vessel",
]
