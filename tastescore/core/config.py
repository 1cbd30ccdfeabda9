import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── AniList ───────────────────────────────────────────────────────────────
    ANILIST_GRAPHQL_URL: str = "https://graphql.anilist.co/"
    # A stuck request would otherwise block the whole run.
    REQUEST_TIMEOUT_SECONDS: float = 30.0

    # ── Reports ───────────────────────────────────────────────────────────────
    OUTPUT_DIR: str = "."
    # Ratios further than this from 1.0 are reported as contrarian taste.
    CONTRARIAN_BAND: float = 0.1

    # ── Logging ───────────────────────────────────────────────────────────────
    LOG_LEVEL: str = "WARNING"  # DEBUG | INFO | WARNING | ERROR

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def parse_log_level(cls, v: object) -> str:
        level = str(v or "WARNING").strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {v!r}")
        return level


settings = Settings()
