from __future__ import annotations

import logging
import os
from typing import Optional

from pydantic import BaseModel, Field

from .engine.systems.repetition import MIN_WINDOW


class Settings(BaseModel):
    log_level: str = "INFO"
    redis_url: Optional[str] = None
    action_log_max: int = Field(default=1000, ge=1)
    anti_stall_window: int = Field(default=4, ge=MIN_WINDOW)


def get_settings() -> Settings:
    # raw strings, pydantic coerces and validates them
    return Settings(
        log_level=os.getenv("STRATEGO_LOG_LEVEL", "INFO").upper(),
        redis_url=os.getenv("REDIS_URL") or None,
        action_log_max=os.getenv("ACTION_LOG_MAX", "1000"),
        anti_stall_window=os.getenv("ANTI_STALL_WINDOW", "4"),
    )


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
