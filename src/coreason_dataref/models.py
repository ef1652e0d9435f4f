# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_dataref

"""Data models for content references and the blobs they resolve to."""

from enum import Enum
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field, model_validator

from coreason_dataref.codec import decode_utf8, encode_base64, from_json_text


class DataRefType(str, Enum):
    """How the ``value`` of a DataRef is encoded.

    Attributes:
        base64: Inline bytes, base64 encoded. The default when no type is given.
        url: The value is a location to GET the bytes from.
        utf8: Inline text.
        json: Inline structured value, serialized on demand.
        hash: Opaque content-address handle owned by the remote store.
    """

    base64 = "base64"
    url = "url"
    utf8 = "utf8"
    json = "json"
    hash = "hash"


# Unless the value is not a string, in which case json is implied.
DATA_REF_TYPE_DEFAULT = DataRefType.base64


class DataMode(str, Enum):
    """The form a consumer wants referenced data returned in."""

    dataref = "dataref"
    base64 = "base64"
    utf8 = "utf8"
    json = "json"


DATA_MODE_DEFAULT = DataMode.base64


class DataRef(BaseModel):
    """A reference to a piece of data, either inline or stored elsewhere.

    Attributes:
        value: The payload. A string for every encoding except json.
        hash: Digest of the original, unencoded bytes.
        type: The encoding of ``value``. See ``effective_type`` when absent.
    """

    model_config = ConfigDict(frozen=True)

    value: Any = Field(..., description="Inline payload, location or handle.")
    hash: str | None = Field(default=None, description="Content digest of the original bytes.")
    type: DataRefType | None = Field(default=None, description="Encoding of the value.")

    @model_validator(mode="after")
    def check_value_matches_type(self) -> "DataRef":
        """Only json references may carry a non-string value."""
        if self.effective_type != DataRefType.json and not isinstance(self.value, str):
            raise ValueError(
                f"value of a {self.effective_type.value} reference must be a string, got {type(self.value).__name__}"
            )
        return self

    @property
    def effective_type(self) -> DataRefType:
        """The declared type, or the default implied by the value."""
        if self.type is not None:
            return self.type
        if not isinstance(self.value, str):
            return DataRefType.json
        return DATA_REF_TYPE_DEFAULT

    @classmethod
    def from_bytes(cls, data: bytes, hash: str | None = None) -> "DataRef":
        """Builds an inline base64 reference from raw bytes."""
        return cls(value=encode_base64(data), type=DataRefType.base64, hash=hash)

    @classmethod
    def from_text(cls, text: str, hash: str | None = None) -> "DataRef":
        return cls(value=text, type=DataRefType.utf8, hash=hash)

    @classmethod
    def from_json(cls, value: Any, hash: str | None = None) -> "DataRef":
        return cls(value=value, type=DataRefType.json, hash=hash)

    @classmethod
    def from_url(cls, url: str, hash: str | None = None) -> "DataRef":
        return cls(value=url, type=DataRefType.url, hash=hash)

    @classmethod
    def from_hash(cls, handle: str, hash: str | None = None) -> "DataRef":
        return cls(value=handle, type=DataRefType.hash, hash=hash)


# Name to DataRef, e.g. the named inputs or outputs of one job.
InputsRefs = dict[str, DataRef]

# Name to base64 encoded buffer.
InputsBase64String = dict[str, str]


def inputs_from_base64(inputs: InputsBase64String) -> InputsRefs:
    """Wraps a mapping of base64 strings as inline base64 DataRefs."""
    return {name: DataRef(value=value, type=DataRefType.base64) for name, value in inputs.items()}


class UploadFunc(Protocol):
    """Uploads a blob of data to remote storage and returns a DataRef to it."""

    async def __call__(self, value: bytes, name: str | None = None) -> DataRef: ...


class StringUploadFunc(Protocol):
    """Uploads an already encoded string value and returns a DataRef to it."""

    async def __call__(self, value: str) -> DataRef: ...


class DownloadFunc(Protocol):
    """Exchanges a reference the caller cannot resolve for one it can."""

    async def __call__(self, ref: DataRef) -> DataRef: ...


class Blob(BaseModel):
    """Fully decoded binary content of a DataRef.

    Attributes:
        data: The raw bytes.
        content_type: The MIME type of the bytes, when known.
    """

    model_config = ConfigDict(frozen=True)

    data: bytes
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.data)

    def text(self) -> str:
        """Decodes the blob as UTF-8 text."""
        return decode_utf8(self.data)

    def as_json(self) -> Any:
        """Parses the blob as UTF-8 JSON text."""
        return from_json_text(self.text())
