# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from typing import Any, ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ("ListSettings", "settings")


class ListSettings(BaseSettings, frozen=True):
    """Defaults applied to newly created lists, with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    OBSERVABLE_LIST_DRAIN_LIMIT: int | None = Field(
        default=None,
        ge=1,
        description="Most changes a single drain cycle may process, None for no limit",
    )

    OBSERVABLE_LIST_WEAK_LISTENERS: bool = Field(
        default=True,
        description="Hold bound-method listeners through weak references",
    )

    # Class variable to store the singleton instance
    _instance: ClassVar[Any] = None

    @property
    def drain_limit(self) -> int | None:
        return self.OBSERVABLE_LIST_DRAIN_LIMIT

    @property
    def weak_listeners(self) -> bool:
        return self.OBSERVABLE_LIST_WEAK_LISTENERS


# Create a singleton instance
settings = ListSettings()
# Store the instance in the class variable for singleton pattern
ListSettings._instance = settings
