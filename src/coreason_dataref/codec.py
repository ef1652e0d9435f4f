# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_dataref

"""Encoding helpers shared by the offload policy and blob conversion."""

import base64
import binascii
import json
from typing import Any

from coreason_dataref.exceptions import DecodeError

_ASCII_WHITESPACE = str.maketrans("", "", " \t\n\r\f\v")


def decode_base64(value: str) -> bytes:
    """Decodes base64 text, rejecting anything outside the base64 alphabet.

    ASCII whitespace is ignored and missing "=" padding is restored, so line
    wrapped and unpadded input decodes the same as the canonical form.
    """
    compact = value.translate(_ASCII_WHITESPACE)
    compact += "=" * (-len(compact) % 4)
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid base64 value: {e}") from e


def encode_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def encode_utf8(value: str) -> bytes:
    try:
        return value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise DecodeError(f"Value is not encodable as UTF-8: {e}") from e


def decode_utf8(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Invalid UTF-8 data: {e}") from e


def to_json_text(value: Any) -> str:
    """Serializes a value to compact JSON text, e.g. ``{"a":1}``.

    NaN and infinities have no JSON form and are rejected.
    """
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Value is not JSON serializable: {e}") from e


def from_json_text(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Invalid JSON text: {e}") from e
