"""Environment-driven settings and logging setup."""

from __future__ import annotations

import logging
import os
from enum import StrEnum
from functools import lru_cache

from pydantic import BaseModel, field_validator


class Environment(StrEnum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TEST = "test"


class Settings(BaseModel):
    env: Environment = Environment.DEVELOPMENT
    log_level: str = "INFO"
    api_title: str = "Accommodation Booking API"
    seed_data: bool = True

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from ``LODGING_*`` variables, falling back to defaults."""
        fields = {
            "env": "LODGING_ENV",
            "log_level": "LODGING_LOG_LEVEL",
            "api_title": "LODGING_API_TITLE",
            "seed_data": "LODGING_SEED_DATA",
        }
        values = {
            name: os.environ[var] for name, var in fields.items() if var in os.environ
        }
        return cls.model_validate(values)


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
