# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_dataref

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DataRefConfig(BaseSettings):
    """
    Configuration for offloading and resolving data references.
    """

    # Inline values longer than this are offloaded to remote storage.
    max_inline_length: int = Field(default=200, gt=0)
    # None leaves the timeout to the HTTP client
    fetch_timeout: float | None = Field(default=None, gt=0)
    ignore_hash: bool = False

    model_config = SettingsConfigDict(
        env_prefix="COREASON_DATAREF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
