# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_dataref

"""Typed errors for coreason-dataref."""


class DataRefError(Exception):
    """Base exception for all coreason-dataref errors."""


class UnresolvableReferenceError(DataRefError):
    """Raised when bytes are requested for a reference that only the remote store can resolve."""

    def __init__(self, handle: str) -> None:
        self.handle = handle
        super().__init__(f"Cannot create blob from type=hash: {handle}")


class TransportError(DataRefError):
    """Raised when fetching a referenced blob over the network fails."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class DecodeError(DataRefError, ValueError):
    """Raised when an inline value is not valid base64, UTF-8 or JSON."""
