# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_dataref

"""
coreason-dataref
"""

__version__ = "0.1.0"
__author__ = "Gowtham A Rao"
__email__ = "gowtham.rao@coreason.ai"

from .blob import data_ref_to_blob, fetch_blob_from_url, materialize
from .config import DataRefConfig
from .exceptions import DataRefError, DecodeError, TransportError, UnresolvableReferenceError
from .hashing import content_hash
from .models import (
    DATA_MODE_DEFAULT,
    DATA_REF_TYPE_DEFAULT,
    Blob,
    DataMode,
    DataRef,
    DataRefType,
    DownloadFunc,
    InputsBase64String,
    InputsRefs,
    StringUploadFunc,
    UploadFunc,
    inputs_from_base64,
)
from .offload import MAX_INLINE_LENGTH, base64_to_data_ref, copy_large_blobs_to_remote
from .resolver import DataRefResolver, DataRefResolverAsync

__all__ = [
    "DataRef",
    "DataRefType",
    "DATA_REF_TYPE_DEFAULT",
    "DataMode",
    "DATA_MODE_DEFAULT",
    "Blob",
    "InputsRefs",
    "InputsBase64String",
    "inputs_from_base64",
    "UploadFunc",
    "StringUploadFunc",
    "DownloadFunc",
    "DataRefConfig",
    "DataRefError",
    "UnresolvableReferenceError",
    "TransportError",
    "DecodeError",
    "content_hash",
    "MAX_INLINE_LENGTH",
    "copy_large_blobs_to_remote",
    "base64_to_data_ref",
    "fetch_blob_from_url",
    "data_ref_to_blob",
    "materialize",
    "DataRefResolverAsync",
    "DataRefResolver",
]
