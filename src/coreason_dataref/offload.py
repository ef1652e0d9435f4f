# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_dataref

"""Offload policy: keep small values inline, move large ones to remote storage."""

import asyncio

from loguru import logger

from coreason_dataref.codec import decode_base64, encode_utf8, to_json_text
from coreason_dataref.hashing import content_hash
from coreason_dataref.models import DataRef, DataRefType, InputsRefs, StringUploadFunc, UploadFunc

MAX_INLINE_LENGTH = 200


def _bytes_if_too_large(ref: DataRef, max_length: int) -> bytes | None:
    """Returns the decoded bytes of an inline value longer than max_length, else None."""
    match ref.effective_type:
        case DataRefType.hash:
            # Already a remote handle, trust it.
            return None
        case DataRefType.json:
            if ref.value:
                json_text = to_json_text(ref.value)
                if len(json_text) > max_length:
                    return encode_utf8(json_text)
            return None
        case DataRefType.utf8:
            if len(ref.value) > max_length:
                return encode_utf8(ref.value)
            return None
        case DataRefType.base64 | DataRefType.url:
            # base64 is the fallback for anything not handled above
            if len(ref.value) > max_length:
                return decode_base64(ref.value)
            return None


async def _copy_if_large(name: str, ref: DataRef, upload: UploadFunc, max_length: int) -> DataRef:
    data = _bytes_if_too_large(ref, max_length)
    if data is None:
        return ref

    digest = content_hash(data)
    logger.info(f"Offloading input {name} ({len(data)} bytes) to remote storage")
    remote_ref = await upload(data, name=name)
    # The caller's digest of the original bytes wins over whatever the remote reported.
    return remote_ref.model_copy(update={"hash": digest})


async def copy_large_blobs_to_remote(
    inputs: InputsRefs | None,
    upload: UploadFunc,
    *,
    max_length: int = MAX_INLINE_LENGTH,
) -> InputsRefs | None:
    """Uploads every inline value that is too big and replaces it with a remote reference.

    All entries are processed concurrently. If any upload fails, the remaining
    uploads are cancelled and the failure propagates; no partial mapping is returned.

    Args:
        inputs: Name to DataRef mapping, or None.
        upload: Stores a blob remotely and returns a DataRef pointing to it.
        max_length: Inline values longer than this (in encoded characters) are offloaded.

    Returns:
        InputsRefs | None: A new mapping with the same names, or None if inputs was None.
    """
    if inputs is None:
        return None

    names = list(inputs)
    tasks = [asyncio.ensure_future(_copy_if_large(name, inputs[name], upload, max_length)) for name in names]
    try:
        refs = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        # Let the cancelled uploads unwind and collect any other failures.
        await asyncio.gather(*tasks, return_exceptions=True)
        logger.error(f"Offloading large inputs failed, {len(tasks)} entries abandoned")
        raise

    return dict(zip(names, refs))


async def base64_to_data_ref(
    value: str,
    upload: StringUploadFunc,
    *,
    ignore_hash: bool = False,
    max_length_unmodified: int = MAX_INLINE_LENGTH,
) -> DataRef:
    """Converts a base64 encoded value into a DataRef, uploading it if it is too long.

    Remote references such as pre-signed URLs are a few hundred characters, so
    only values at least max_length_unmodified long are worth the round trip.
    Smaller ones stay inline, which keeps accumulated job state small.

    Args:
        value: The base64 encoded value.
        upload: Stores the value remotely and returns a DataRef pointing to it.
        ignore_hash: If True, the returned reference carries no content hash.
        max_length_unmodified: Values shorter than this are returned inline.

    Returns:
        DataRef: An inline base64 reference or the uploaded reference.
    """
    if len(value) < max_length_unmodified:
        return DataRef(
            value=value,
            type=DataRefType.base64,
            hash=None if ignore_hash else content_hash(value),
        )

    logger.info(f"Uploading base64 value of length {len(value)}")
    remote_ref = await upload(value)
    if not ignore_hash:
        remote_ref = remote_ref.model_copy(update={"hash": content_hash(value)})
    return remote_ref
