from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any

PROJECT_BASE = Path(__file__).resolve().parents[1]
if str(PROJECT_BASE) not in sys.path:
    sys.path.insert(0, str(PROJECT_BASE))

from reincarnation.codec import PersistenceCodec
from reincarnation.engine import Command, ProgressionEngine
from reincarnation.models import CultivatorState, PhysicalTier, Quality, SpiritualTier
from reincarnation.storage import MemoryStorage, StorageWriteError
from reincarnation.views import CultivatorView, build_status_embed, status_lines


class FailingStorage(MemoryStorage):
    def set(self, key: str, value: str) -> None:
        raise StorageWriteError("disk full")


class RecordingResponse:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def send_message(self, content: str | None = None, **kwargs: Any) -> None:
        self.calls.append(("send_message", {"content": content, **kwargs}))

    async def edit_message(self, **kwargs: Any) -> None:
        self.calls.append(("edit_message", kwargs))

    async def defer(self) -> None:
        self.calls.append(("defer", {}))


def _interaction(user_id: int = 7) -> SimpleNamespace:
    return SimpleNamespace(user=SimpleNamespace(id=user_id), response=RecordingResponse())


def test_status_lines_render_labels_and_two_decimals() -> None:
    state = CultivatorState(
        vessel_qi=3.0,
        vessel_cycles=1200,
        vessel_tier=PhysicalTier.ORGAN_REFINEMENT,
        spiritual_qi=0.456,
        spiritual_harmony=Quality.AVERAGE,
        spiritual_tier=SpiritualTier.CORE_FORMATION,
        meridians=Quality.VERY_GREAT,
    )

    assert status_lines(state) == [
        "Level of Spiritual cultivation: Core Formation",
        "Quality of Spiritual veins: Average",
        "Spiritual qi : 0.46",
        "Stage of Vessel cultivation: Organ Refinement",
        "Vessel qi : 3.00",
        "Completed Vessel cycles: 1'200",
        "Quality of Meridians: Very Great",
    ]


def test_status_embed_contains_status_block() -> None:
    embed = build_status_embed(CultivatorState.default())
    assert embed.title == "My Immortal Reincarnation"
    assert len(embed.fields) == 1
    assert embed.fields[0].name == "Status"
    assert "Spiritual qi : 0.00" in embed.fields[0].value
    assert "Level of Spiritual cultivation: Mortal" in embed.fields[0].value


def test_view_buttons_apply_commands_and_rerender() -> None:
    engine = ProgressionEngine(PersistenceCodec(MemoryStorage()))

    async def scenario() -> RecordingResponse:
        view = CultivatorView(engine, owner_id=7)
        labels = [child.label for child in view.children]
        assert labels == ["Cultivate Spirit", "Cultivate Vessel", "Save Game", "Load Game"]
        interaction = _interaction()
        await view._apply(interaction, Command.SPIRIT)
        await view._apply(interaction, Command.HEARTBEAT)
        return interaction.response

    response = asyncio.run(scenario())

    assert engine.state.spiritual_qi == 0.01
    kinds = [kind for kind, _ in response.calls]
    assert kinds == ["edit_message", "defer"]
    embed = response.calls[0][1]["embed"]
    assert "Spiritual qi : 0.01" in embed.fields[0].value


def test_failed_save_is_reported_to_the_user() -> None:
    engine = ProgressionEngine(PersistenceCodec(FailingStorage()))

    async def scenario() -> RecordingResponse:
        view = CultivatorView(engine, owner_id=None)
        interaction = _interaction()
        await view._apply(interaction, Command.SAVE)
        return interaction.response

    response = asyncio.run(scenario())

    assert len(response.calls) == 1
    kind, payload = response.calls[0]
    assert kind == "send_message"
    assert payload["ephemeral"] is True
    assert "could not be saved" in payload["content"]


def test_view_rejects_other_users() -> None:
    engine = ProgressionEngine(PersistenceCodec(MemoryStorage()))

    async def scenario() -> tuple[bool, RecordingResponse]:
        view = CultivatorView(engine, owner_id=7)
        interaction = _interaction(user_id=99)
        allowed = await view.interaction_check(interaction)
        return allowed, interaction.response

    allowed, response = asyncio.run(scenario())

    assert allowed is False
    assert response.calls[0][1]["ephemeral"] is True
