from __future__ import annotations

import math
import sys
from pathlib import Path

import pytest

PROJECT_BASE = Path(__file__).resolve().parents[1]
if str(PROJECT_BASE) not in sys.path:
    sys.path.insert(0, str(PROJECT_BASE))

from reincarnation.models import (
    CultivatorState,
    ModelValidationError,
    PhysicalTier,
    Quality,
    SpiritualTier,
)


def test_default_state_starts_at_the_bottom() -> None:
    state = CultivatorState.default()
    assert state.vessel_qi == 0.0
    assert state.vessel_cycles == 0
    assert state.spiritual_qi == 0.0
    assert state.vessel_tier is PhysicalTier.QI_GATHERING
    assert state.spiritual_tier is SpiritualTier.MORTAL
    assert state.spiritual_harmony is Quality.WORST
    assert state.meridians is Quality.WORST
    assert state == CultivatorState()


def test_labels_follow_current_tiers() -> None:
    state = CultivatorState(
        spiritual_tier=SpiritualTier.NASCENT_SOUL,
        vessel_tier=PhysicalTier.ORGAN_REFINEMENT,
        spiritual_harmony=Quality.GREAT,
        meridians=Quality.VERY_POOR,
    )
    assert state.spiritual_tier_label == "Nascent Soul"
    assert state.vessel_tier_label == "Organ Refinement"
    assert state.spiritual_harmony_label == "Great"
    assert state.meridians_label == "Very Poor"


def test_to_dict_uses_storage_tags() -> None:
    state = CultivatorState(spiritual_qi=2.5, spiritual_tier=SpiritualTier.CORE_FORMATION)
    record = state.to_dict()
    assert record == {
        "vessel_qi": 0.0,
        "vessel_cycles": 0,
        "vessel_tier": "qi_gathering",
        "spiritual_qi": 2.5,
        "spiritual_harmony": "worst",
        "spiritual_tier": "core_formation",
        "meridians": "worst",
    }
    assert CultivatorState.from_dict(record) == state


def test_from_dict_accepts_integer_qi() -> None:
    record = CultivatorState.default().to_dict()
    record["vessel_qi"] = 3
    state = CultivatorState.from_dict(record)
    assert state.vessel_qi == 3.0
    assert isinstance(state.vessel_qi, float)


@pytest.mark.parametrize(
    "field, value",
    [
        ("spiritual_qi", -1.0),
        ("vessel_qi", float("nan")),
        ("vessel_cycles", 1.5),
        ("vessel_cycles", True),
        ("spiritual_tier", "immortal_emperor"),
        ("meridians", 3),
        ("vessel_tier", "Qi Gathering"),
    ],
)
def test_from_dict_rejects_invalid_fields(field: str, value: object) -> None:
    record = CultivatorState.default().to_dict()
    record[field] = value
    with pytest.raises(ModelValidationError) as excinfo:
        CultivatorState.from_dict(record)
    assert field in str(excinfo.value)


def test_from_dict_reports_missing_fields() -> None:
    record = CultivatorState.default().to_dict()
    del record["meridians"]
    del record["spiritual_qi"]
    with pytest.raises(ModelValidationError) as excinfo:
        CultivatorState.from_dict(record)
    assert len(excinfo.value.errors) == 2


def test_from_dict_rejects_non_mappings() -> None:
    with pytest.raises(ModelValidationError):
        CultivatorState.from_dict(["vessel_qi", 0.0])  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "overrides",
    [
        {"vessel_qi": -5.0},
        {"spiritual_qi": -0.01},
        {"spiritual_qi": math.inf},
        {"vessel_qi": math.nan},
        {"vessel_cycles": -1},
    ],
)
def test_construction_rejects_invalid_accumulators(overrides: dict[str, object]) -> None:
    with pytest.raises(ModelValidationError) as excinfo:
        CultivatorState(**overrides)
    (field,) = overrides
    assert field in str(excinfo.value)
