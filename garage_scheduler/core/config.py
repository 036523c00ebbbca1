from datetime import time
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GARAGE_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )
    PROJECT_NAME: str = "garage-scheduler"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["console", "json"] = "console"

    # JSON-file persistence root
    DATA_DIR: Path = Path("./data")

    # Day defaults
    DEFAULT_MAX_CARS_CAPACITY: int = Field(default=7, ge=0)
    DEFAULT_TOTAL_WORKERS: int = Field(default=8, ge=1, le=20)
    DAY_START: time = time(8, 0)
    # Weekly half-day, 0=Mon .. 6=Sun (Saturday: 8AM-2PM)
    SHORT_DAY_WEEKDAY: int = Field(default=5, ge=0, le=6)
    WEEKDAY_HOURS_OPEN: int = Field(default=8, ge=2, le=12)
    SHORT_DAY_HOURS_OPEN: int = Field(default=6, ge=2, le=12)

    # Worker action timeline length per ticket
    RECENT_ACTIONS_LIMIT: int = Field(default=3, ge=1)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SCHEDULES_DIR(self) -> Path:
        return self.DATA_DIR / "schedules"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ACTION_LOG_FILE(self) -> Path:
        return self.DATA_DIR / "action_log.jsonl"

    @model_validator(mode="after")
    def _check_short_day_hours(self) -> Self:
        if self.SHORT_DAY_HOURS_OPEN > self.WEEKDAY_HOURS_OPEN:
            raise ValueError(
                "SHORT_DAY_HOURS_OPEN cannot exceed WEEKDAY_HOURS_OPEN "
                f"({self.SHORT_DAY_HOURS_OPEN} > {self.WEEKDAY_HOURS_OPEN})"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
