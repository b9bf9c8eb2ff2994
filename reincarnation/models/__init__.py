"""Domain models for cultivator progression."""

from ._validation import ModelValidationError
from .cultivator import CultivatorState
from .tiers import (
    PhysicalTier,
    Quality,
    SpiritualTier,
    TierRecord,
    label,
    multiplier,
    next_tier,
    ordered_tiers,
)

__all__ = [
    "CultivatorState",
    "ModelValidationError",
    "PhysicalTier",
    "Quality",
    "SpiritualTier",
    "TierRecord",
    "label",
    "multiplier",
    "next_tier",
    "ordered_tiers",
]
