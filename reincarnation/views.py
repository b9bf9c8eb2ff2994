"""Discord UI components for the cultivation control panel."""

from __future__ import annotations

import logging
from typing import Optional

import discord

from .engine import Command, ProgressionEngine
from .models import CultivatorState
from .storage import StorageError
from .utils import format_number, format_qi

log = logging.getLogger(__name__)

TITLE = "My Immortal Reincarnation"


def status_lines(state: CultivatorState) -> list[str]:
    return [
        f"Level of Spiritual cultivation: {state.spiritual_tier_label}",
        f"Quality of Spiritual veins: {state.spiritual_harmony_label}",
        f"Spiritual qi : {format_qi(state.spiritual_qi)}",
        f"Stage of Vessel cultivation: {state.vessel_tier_label}",
        f"Vessel qi : {format_qi(state.vessel_qi)}",
        f"Completed Vessel cycles: {format_number(state.vessel_cycles)}",
        f"Quality of Meridians: {state.meridians_label}",
    ]


def build_status_embed(state: CultivatorState) -> discord.Embed:
    embed = discord.Embed(title=TITLE, colour=discord.Colour.teal())
    embed.add_field(name="Status", value="\n".join(status_lines(state)), inline=False)
    return embed


class OwnedView(discord.ui.View):
    """Base view that restricts interactions to a single Discord user."""

    def __init__(self, owner_id: int | None, *, timeout: float | None = 600.0) -> None:
        super().__init__(timeout=timeout)
        self.owner_id = owner_id

    async def interaction_check(self, interaction: discord.Interaction) -> bool:  # type: ignore[override]
        if self.owner_id is None or interaction.user.id == self.owner_id:
            return True
        await interaction.response.send_message(
            "Only the cultivator who summoned these controls may use them.",
            ephemeral=True,
        )
        return False


class CultivatorView(OwnedView):
    """Status panel with the four cultivation actions."""

    def __init__(
        self,
        engine: ProgressionEngine,
        owner_id: int | None,
        *,
        timeout: float | None = 600.0,
    ) -> None:
        super().__init__(owner_id, timeout=timeout)
        self.engine = engine
        self.message: Optional[discord.Message] = None

    async def on_timeout(self) -> None:
        for child in self.children:
            child.disabled = True
        if self.message is not None:
            try:
                await self.message.edit(view=self)
            except discord.HTTPException:
                pass
        self.stop()

    async def _apply(self, interaction: discord.Interaction, command: Command) -> None:
        try:
            outcome = self.engine.handle(command)
        except StorageError:
            log.exception("Saving cultivator progress failed")
            await interaction.response.send_message(
                "Your progress could not be saved. Try again later.", ephemeral=True
            )
            return
        if not outcome.changed:
            await interaction.response.defer()
            return
        embed = build_status_embed(self.engine.state)
        await interaction.response.edit_message(embed=embed, view=self)

    @discord.ui.button(label="Cultivate Spirit", style=discord.ButtonStyle.primary, row=0)
    async def cultivate_spirit(  # type: ignore[override]
        self, interaction: discord.Interaction, button: discord.ui.Button
    ) -> None:
        await self._apply(interaction, Command.SPIRIT)

    @discord.ui.button(label="Cultivate Vessel", style=discord.ButtonStyle.primary, row=0)
    async def cultivate_vessel(  # type: ignore[override]
        self, interaction: discord.Interaction, button: discord.ui.Button
    ) -> None:
        await self._apply(interaction, Command.VESSEL)

    @discord.ui.button(label="Save Game", style=discord.ButtonStyle.success, row=1)
    async def save_game(  # type: ignore[override]
        self, interaction: discord.Interaction, button: discord.ui.Button
    ) -> None:
        await self._apply(interaction, Command.SAVE)

    @discord.ui.button(label="Load Game", style=discord.ButtonStyle.secondary, row=1)
    async def load_game(  # type: ignore[override]
        self, interaction: discord.Interaction, button: discord.ui.Button
    ) -> None:
        await self._apply(interaction, Command.LOAD)


__all__ = ["CultivatorView", "OwnedView", "build_status_embed", "status_lines"]
