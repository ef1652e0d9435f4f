# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_dataref

import hashlib


def content_hash(data: bytes | str) -> str:
    """Returns the SHA-1 hex digest used to brand references with their content.

    Strings are hashed over their UTF-8 encoding.

    Args:
        data: The original, unencoded content.

    Returns:
        str: The hex digest.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha1(data).hexdigest()
