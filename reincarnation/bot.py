"""Entry point for the My Immortal Reincarnation Discord bot."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import discord
from discord.ext import commands

from .codec import PersistenceCodec
from .config import BotConfig
from .engine import ProgressionEngine
from .storage import FileStorage, resolve_storage_root

log = logging.getLogger(__name__)


class ReincarnationBot(commands.Bot):
    def __init__(self, config: BotConfig, engine: ProgressionEngine):
        intents = discord.Intents.default()
        super().__init__(command_prefix="!", intents=intents)
        self.config = config
        self.engine = engine
        self._synced = False

    async def setup_hook(self) -> None:
        await self.load_extension("reincarnation.cogs.cultivation")

    async def on_ready(self) -> None:
        if not self._synced:
            await self.tree.sync()
            self._synced = True
            log.info("Application commands synced")
        if self.user:
            log.info("Connected as %s (%s)", self.user, self.user.id)


def build_engine(config: BotConfig, package_root: Path | None = None) -> ProgressionEngine:
    root = package_root or Path(__file__).resolve().parent.parent
    storage = FileStorage.in_root(resolve_storage_root(root), config.save_file)
    log.info("Using save file %s", storage.path)
    return ProgressionEngine.start(PersistenceCodec(storage))


async def main() -> None:
    config = BotConfig.from_env()
    logging.basicConfig(level=config.log_level)
    bot = ReincarnationBot(config, build_engine(config))
    async with bot:
        await bot.start(config.token)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
