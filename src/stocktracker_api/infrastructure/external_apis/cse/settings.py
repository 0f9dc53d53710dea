# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Pydantic settings for the CSE (Colombo Stock Exchange) transport client."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CseSettings(BaseSettings):
    """Configuration for the CSE public API client.

    Environment variables (with ``model_config.env_prefix``):

    * ``CSE_BASE_URL``
    * ``CSE_TIMEOUT_S``
    * ``CSE_MAX_RETRIES``
    """

    base_url: str = Field(
        "https://www.cse.lk/api",
        description="Base URL for the CSE public API.",
    )
    timeout_s: float = Field(
        10.0,
        gt=0.0,
        description="Per-request timeout in seconds for the transport client.",
    )
    max_retries: int = Field(
        2,
        ge=0,
        description="Maximum number of retry attempts for retryable failures.",
    )

    model_config: SettingsConfigDict = SettingsConfigDict(
        env_prefix="CSE_",
        extra="ignore",
    )
