"""The cultivator record advanced by the progression engine."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping

from ._validation import (
    FieldSpec,
    ModelValidationError,
    ModelValidator,
    is_non_negative_int,
    is_non_negative_number,
)
from .tiers import PhysicalTier, Quality, SpiritualTier, label


def _is_tag_of(tier_type: type) -> Any:
    def _check(value: Any) -> bool:
        if not isinstance(value, str):
            return False
        tier_type.from_value(value)
        return True

    return _check


@dataclass(slots=True)
class CultivatorState:
    """Progression of a single cultivator across both tracks."""

    vessel_qi: float = 0.0
    vessel_cycles: int = 0
    vessel_tier: PhysicalTier = PhysicalTier.QI_GATHERING
    spiritual_qi: float = 0.0
    spiritual_harmony: Quality = Quality.WORST
    spiritual_tier: SpiritualTier = SpiritualTier.MORTAL
    meridians: Quality = Quality.WORST

    def __post_init__(self) -> None:
        self.vessel_qi = float(self.vessel_qi)
        self.spiritual_qi = float(self.spiritual_qi)
        self.vessel_cycles = int(self.vessel_cycles)
        self.vessel_tier = PhysicalTier.from_value(self.vessel_tier)
        self.spiritual_tier = SpiritualTier.from_value(self.spiritual_tier)
        self.spiritual_harmony = Quality.from_value(self.spiritual_harmony)
        self.meridians = Quality.from_value(self.meridians)

        errors = [
            f"Field '{name}' must be a non-negative finite number"
            for name in ("vessel_qi", "spiritual_qi")
            if not is_non_negative_number(getattr(self, name))
        ]
        if not is_non_negative_int(self.vessel_cycles):
            errors.append("Field 'vessel_cycles' must be a non-negative integer")
        if errors:
            raise ModelValidationError(type(self), errors)

    @classmethod
    def default(cls) -> "CultivatorState":
        return cls()

    @property
    def spiritual_tier_label(self) -> str:
        return label(self.spiritual_tier)

    @property
    def vessel_tier_label(self) -> str:
        return label(self.vessel_tier)

    @property
    def spiritual_harmony_label(self) -> str:
        return label(self.spiritual_harmony)

    @property
    def meridians_label(self) -> str:
        return label(self.meridians)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vessel_qi": float(self.vessel_qi),
            "vessel_cycles": int(self.vessel_cycles),
            "vessel_tier": self.vessel_tier.value,
            "spiritual_qi": float(self.spiritual_qi),
            "spiritual_harmony": self.spiritual_harmony.value,
            "spiritual_tier": self.spiritual_tier.value,
            "meridians": self.meridians.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CultivatorState":
        """Build a state from a stored record.

        Raises :class:`~reincarnation.models.ModelValidationError` when a field
        is missing, has the wrong type, is negative or carries an unknown tag.
        """

        payload = CultivatorStateValidator.validate(data)
        allowed = {field.name for field in fields(cls)}
        return cls(
            **{key: value for key, value in payload.items() if key in allowed}
        )


class CultivatorStateValidator(ModelValidator):
    model = CultivatorState
    fields = {
        "vessel_qi": FieldSpec(is_non_negative_number, "a non-negative number"),
        "vessel_cycles": FieldSpec(is_non_negative_int, "a non-negative integer"),
        "vessel_tier": FieldSpec(_is_tag_of(PhysicalTier), "a vessel tier tag"),
        "spiritual_qi": FieldSpec(is_non_negative_number, "a non-negative number"),
        "spiritual_harmony": FieldSpec(_is_tag_of(Quality), "a quality tag"),
        "spiritual_tier": FieldSpec(_is_tag_of(SpiritualTier), "a spiritual tier tag"),
        "meridians": FieldSpec(_is_tag_of(Quality), "a quality tag"),
    }


__all__ = ["CultivatorState", "CultivatorStateValidator"]
