"""My Immortal Reincarnation: an idle cultivation progression simulator."""

from .codec import STORAGE_KEY, PersistenceCodec
from .engine import Command, Outcome, ProgressionEngine
from .models import CultivatorState, PhysicalTier, Quality, SpiritualTier

__all__ = [
    "Command",
    "CultivatorState",
    "Outcome",
    "PersistenceCodec",
    "PhysicalTier",
    "ProgressionEngine",
    "Quality",
    "STORAGE_KEY",
    "SpiritualTier",
]
