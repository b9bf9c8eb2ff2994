"""Bot configuration utilities."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass


def env(name: str, default: str | None = None) -> str:
    value = os.getenv(name, default)
    if value is None:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


@dataclass(slots=True)
class BotConfig:
    token: str
    owner_id: int | None = None
    save_file: str = "saves.toml"
    log_level: int = logging.INFO

    @classmethod
    def from_env(cls) -> "BotConfig":
        token = env("DISCORD_TOKEN")
        raw_owner = os.getenv("REINCARNATION_OWNER_ID", "").strip()
        try:
            owner_id = int(raw_owner) if raw_owner else None
        except ValueError as exc:
            raise RuntimeError(
                f"REINCARNATION_OWNER_ID must be a Discord user id, got {raw_owner!r}"
            ) from exc
        save_file = os.getenv("REINCARNATION_SAVE_FILE", "saves.toml").strip() or "saves.toml"
        level_name = os.getenv("REINCARNATION_LOG_LEVEL", "INFO").strip().upper()
        log_level = logging.getLevelName(level_name)
        if not isinstance(log_level, int):
            log_level = logging.INFO

        return cls(
            token=token,
            owner_id=owner_id,
            save_file=save_file,
            log_level=log_level,
        )


__all__ = ["BotConfig"]
