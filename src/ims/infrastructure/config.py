"""Application settings, loaded from ``IMS_*`` environment variables or ``.env``."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Relative to the working directory the service is started from.
_DATA_DIR = Path("data")


class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="IMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Database ---
    database_url: str = Field(
        f"sqlite:///{(_DATA_DIR / 'ims.db').as_posix()}",
        description="SQLAlchemy database URL",
    )
    database_echo: bool = Field(False, description="Log every SQL statement")

    # --- Concurrency ---
    max_conflict_retries: int = Field(
        3, ge=0, description="Extra attempts after a stock version conflict"
    )

    # --- Events ---
    event_sink: Literal["none", "jsonl"] = Field(
        "jsonl", description="Where orders.created events go"
    )
    event_log_path: Path = Field(_DATA_DIR / "events.jsonl")

    # --- Logging ---
    log_level: str = "INFO"
    log_json: bool = False
