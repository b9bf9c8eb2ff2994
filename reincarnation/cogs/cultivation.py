"""Slash command that opens the cultivation control panel."""

from __future__ import annotations

import logging

import discord
from discord import app_commands
from discord.ext import commands

from ..engine import ProgressionEngine
from ..views import CultivatorView, build_status_embed

log = logging.getLogger(__name__)


class CultivationCog(commands.Cog):
    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @property
    def engine(self) -> ProgressionEngine:
        return self.bot.engine  # type: ignore[attr-defined]

    @property
    def owner_id(self) -> int | None:
        return self.bot.config.owner_id  # type: ignore[attr-defined]

    @app_commands.command(name="cultivate", description="Open your cultivation status panel")
    async def cultivate(self, interaction: discord.Interaction) -> None:
        owner_id = self.owner_id
        if owner_id is not None and interaction.user.id != owner_id:
            await interaction.response.send_message(
                "This reincarnation belongs to another cultivator.", ephemeral=True
            )
            return
        view = CultivatorView(self.engine, owner_id or interaction.user.id)
        await interaction.response.send_message(
            embed=build_status_embed(self.engine.state), view=view
        )
        view.message = await interaction.original_response()
        log.debug("Opened cultivation panel for %s", interaction.user.id)


async def setup(bot: commands.Bot) -> None:
    await bot.add_cog(CultivationCog(bot))
