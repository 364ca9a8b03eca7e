# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import logging
from typing import Any, ClassVar

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ("GroupSettings", "settings")


class GroupSettings(BaseSettings, frozen=True):
    """Package settings with environment variable support.

    Every field can be overridden with a ``KEYEDGROUP_`` prefixed environment
    variable, e.g. ``KEYEDGROUP_LOG_LEVEL=DEBUG``.
    """

    model_config = SettingsConfigDict(
        env_prefix="KEYEDGROUP_",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    LOG_LEVEL: str = Field(
        default="WARNING",
        description="Level of the 'keyedgroup' package logger",
    )
    ERROR_REPR_LIMIT: int = Field(
        default=50,
        ge=8,
        description="Max length of a value repr embedded in error messages",
    )

    # Class variable to store the singleton instance
    _instance: ClassVar[Any] = None

    @field_validator("LOG_LEVEL", mode="before")
    def _validate_log_level(cls, value: Any) -> str:
        level = str(value).strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @property
    def log_level(self) -> int:
        """Numeric logging level for ``LOG_LEVEL``."""
        return logging.getLevelNamesMapping()[self.LOG_LEVEL]


# Create a singleton instance
settings = GroupSettings()
# Store the instance in the class variable for singleton pattern
GroupSettings._instance = settings
