"""Cultivation tiers and quality grades.

Every enumeration is backed by an ordered table of :class:`TierRecord` entries
indexed by the member's ``order_index``.  Enum values are the tags written to
storage; labels exist for display only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple, TypeVar, Union


@dataclass(frozen=True, slots=True)
class TierRecord:
    """A single row in a tier table."""

    label: str
    multiplier: Optional[float] = None


class _OrderedTier(str, Enum):
    """Shared behaviour for the ordered tier enumerations."""

    @property
    def order_index(self) -> int:
        return list(type(self)).index(self)

    @property
    def display_name(self) -> str:
        return label(self)

    @classmethod
    def from_value(cls, value: Any, *, default: Any = None) -> Any:
        if isinstance(value, cls):
            return value
        if value is None:
            if default is not None:
                return default
            raise ValueError(f"{cls.__name__} cannot be None")
        normalized = str(value).strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        if default is not None:
            return default
        raise ValueError(f"Unknown {cls.__name__}: {value}")


class SpiritualTier(_OrderedTier):
    """Stages of the spiritual cultivation track, lowest first."""

    MORTAL = "mortal"
    QI_CONDENSATION = "qi_condensation"
    FOUNDATION_ESTABLISHMENT = "foundation_establishment"
    CORE_FORMATION = "core_formation"
    SPIRITUAL_SEA = "spiritual_sea"
    NASCENT_SOUL = "nascent_soul"
    SPIRITUAL_LORD = "spiritual_lord"
    SPIRITUAL_EMPYREAN = "spiritual_empyrean"
    DAO_LORD = "dao_lord"
    DAO_EMPYREAN = "dao_empyrean"
    SOVEREIGN_EMPYREAN = "sovereign_empyrean"


class PhysicalTier(_OrderedTier):
    """Stages of the vessel (body) cultivation track, lowest first."""

    QI_GATHERING = "qi_gathering"
    ORGAN_REFINEMENT = "organ_refinement"
    MERIDIAN_REFORGING = "meridian_reforging"


class Quality(_OrderedTier):
    """Grades used to rate spiritual veins and meridians, worst first."""

    WORST = "worst"
    VERY_HORRIBLE = "very_horrible"
    HORRIBLE = "horrible"
    VERY_POOR = "very_poor"
    POOR = "poor"
    AVERAGE = "average"
    GOOD = "good"
    VERY_GOOD = "very_good"
    GREAT = "great"
    VERY_GREAT = "very_great"
    BEST = "best"


SPIRITUAL_TIER_TABLE: Tuple[TierRecord, ...] = (
    TierRecord("Mortal", 0.01),
    TierRecord("Qi Condensation", 0.05),
    TierRecord("Foundation Establishment", 0.095),
    TierRecord("Core Formation", 0.2),
    TierRecord("Spiritual Sea", 0.5),
    TierRecord("Nascent Soul", 1.0),
    TierRecord("Spiritual Lord", 1.5),
    TierRecord("Spiritual Empyrean", 5.0),
    TierRecord("Dao Lord", 10.0),
    TierRecord("Dao Empyrean", 20.0),
    TierRecord("Sovereign Empyrean", 100.0),
)

# Vessel stages carry no rate multiplier yet.
PHYSICAL_TIER_TABLE: Tuple[TierRecord, ...] = (
    TierRecord("Qi Gathering"),
    TierRecord("Organ Refinement"),
    TierRecord("Meridian Reforging"),
)

QUALITY_TABLE: Tuple[TierRecord, ...] = (
    TierRecord("Worst", 0.1),
    TierRecord("Very Horrible", 0.3),
    TierRecord("Horrible", 0.4),
    TierRecord("Very Poor", 0.5),
    TierRecord("Poor", 0.8),
    TierRecord("Average", 1.0),
    TierRecord("Good", 1.2),
    TierRecord("Very Good", 1.5),
    TierRecord("Great", 3.0),
    TierRecord("Very Great", 4.0),
    TierRecord("Best", 10.0),
)

_TABLES = {
    SpiritualTier: SPIRITUAL_TIER_TABLE,
    PhysicalTier: PHYSICAL_TIER_TABLE,
    Quality: QUALITY_TABLE,
}

AnyTier = Union[SpiritualTier, PhysicalTier, Quality]
T = TypeVar("T", SpiritualTier, PhysicalTier, Quality)


def tier_record(tier: AnyTier) -> TierRecord:
    try:
        table = _TABLES[type(tier)]
    except KeyError as exc:
        raise TypeError(f"Not a tier enumeration: {tier!r}") from exc
    return table[tier.order_index]


def multiplier(tier: Union[SpiritualTier, Quality]) -> float:
    """Return the rate multiplier attached to ``tier``.

    Vessel stages have no multiplier and raise :class:`TypeError`.
    """

    value = tier_record(tier).multiplier
    if value is None:
        raise TypeError(f"{type(tier).__name__} has no multiplier")
    return value


def label(tier: AnyTier) -> str:
    return tier_record(tier).label


def ordered_tiers(tier_type: type[T]) -> Tuple[T, ...]:
    return tuple(tier_type)


def next_tier(tier: T) -> Optional[T]:
    """Return the stage after ``tier`` or ``None`` at the top of its track."""

    members = ordered_tiers(type(tier))
    index = tier.order_index + 1
    if index >= len(members):
        return None
    return members[index]


__all__ = [
    "PHYSICAL_TIER_TABLE",
    "PhysicalTier",
    "QUALITY_TABLE",
    "Quality",
    "SPIRITUAL_TIER_TABLE",
    "SpiritualTier",
    "TierRecord",
    "label",
    "multiplier",
    "next_tier",
    "ordered_tiers",
    "tier_record",
]
