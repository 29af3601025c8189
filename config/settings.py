from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from src.sf_generator.domain.layout import DEFAULT_EPOCH_MS


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Identity — must be unique per running generator (0-31 with default bits)
    WORKER_ID: int = 0
    DATACENTER_ID: int = 0

    # Layout — changing any of these after ids were issued breaks ordering
    EPOCH_MS: int = DEFAULT_EPOCH_MS
    DATACENTER_BITS: int = 5
    WORKER_BITS: int = 5
    SEQUENCE_BITS: int = 12
    SIGNED_IDS: bool = True

    # Tick wait when a millisecond's sequence space is exhausted
    WAIT_STRATEGY: Literal["spin", "sleep"] = "spin"
    WAIT_SLEEP_SECONDS: float = 0.0001
    MAX_WAIT_MS: int | None = None  # None = wait until the clock advances

    # App
    APP_NAME: str = "Snowflake ID Generator"


settings = Settings()
