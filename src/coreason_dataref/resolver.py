# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_dataref

from typing import Any

import anyio
import httpx
from loguru import logger

from coreason_dataref.blob import data_ref_to_blob, materialize
from coreason_dataref.config import DataRefConfig
from coreason_dataref.exceptions import UnresolvableReferenceError
from coreason_dataref.models import (
    DATA_MODE_DEFAULT,
    Blob,
    DataMode,
    DataRef,
    DataRefType,
    DownloadFunc,
    InputsRefs,
    StringUploadFunc,
    UploadFunc,
)
from coreason_dataref.offload import base64_to_data_ref, copy_large_blobs_to_remote


class DataRefResolverAsync:
    """Async-native DataRef service (The Core).

    Bundles the injected upload/download capabilities with configuration and
    a shared HTTP client.
    """

    def __init__(
        self,
        upload: UploadFunc | None = None,
        download: DownloadFunc | None = None,
        config: DataRefConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """Initializes the DataRefResolverAsync service.

        Args:
            upload: Stores a blob remotely and returns a DataRef pointing to it.
            download: Exchanges a hash reference for one that can be fetched.
            config: Configuration for thresholds and timeouts.
            client: Optional httpx.AsyncClient for connection pooling.
        """
        self.upload = upload
        self.download = download
        self.config = config or DataRefConfig()
        self._internal_client = client is None
        self._client = client or httpx.AsyncClient(timeout=None)

    async def __aenter__(self) -> "DataRefResolverAsync":
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        """Closes the HTTP client if this service created it."""
        if self._internal_client:
            await self._client.aclose()

    async def offload(self, inputs: InputsRefs | None) -> InputsRefs | None:
        """Replaces every inline value above the configured length with an uploaded reference.

        Raises:
            ValueError: If no upload function was configured.
        """
        if self.upload is None:
            raise ValueError("An upload function is required to offload inputs")
        return await copy_large_blobs_to_remote(inputs, self.upload, max_length=self.config.max_inline_length)

    async def to_data_ref(
        self,
        value: str,
        upload: StringUploadFunc,
        ignore_hash: bool | None = None,
    ) -> DataRef:
        """Wraps a base64 value as a DataRef, uploading it when it is too long."""
        return await base64_to_data_ref(
            value,
            upload,
            ignore_hash=self.config.ignore_hash if ignore_hash is None else ignore_hash,
            max_length_unmodified=self.config.max_inline_length,
        )

    async def _exchange_hash(self, ref: DataRef) -> DataRef:
        if ref.effective_type != DataRefType.hash:
            return ref
        if self.download is None:
            raise UnresolvableReferenceError(ref.value)
        logger.info(f"Resolving hash reference {ref.value} through the remote store")
        resolved = await self.download(ref)
        if resolved.effective_type == DataRefType.hash:
            raise UnresolvableReferenceError(resolved.value)
        return resolved

    async def to_blob(self, ref: DataRef) -> Blob:
        """Decodes a DataRef into a Blob.

        Hash references are first exchanged through the download function.

        Raises:
            UnresolvableReferenceError: If a hash reference cannot be exchanged.
        """
        ref = await self._exchange_hash(ref)
        return await data_ref_to_blob(ref, client=self._client, timeout=self.config.fetch_timeout)

    async def materialize(self, ref: DataRef, mode: DataMode = DATA_MODE_DEFAULT) -> Any:
        """Returns the referenced data in the requested mode."""
        if mode != DataMode.dataref:
            ref = await self._exchange_hash(ref)
        return await materialize(ref, mode, client=self._client, timeout=self.config.fetch_timeout)


class DataRefResolver:
    """Sync Facade for DataRefResolverAsync (The Facade).

    Each call runs in its own event loop via anyio.run with a short-lived HTTP client.
    """

    def __init__(
        self,
        upload: UploadFunc | None = None,
        download: DownloadFunc | None = None,
        config: DataRefConfig | None = None,
    ):
        self.upload = upload
        self.download = download
        self.config = config or DataRefConfig()

    def _resolver(self) -> DataRefResolverAsync:
        return DataRefResolverAsync(upload=self.upload, download=self.download, config=self.config)

    async def _run(self, method: str, *args: Any) -> Any:
        async with self._resolver() as resolver:
            return await getattr(resolver, method)(*args)

    def offload(self, inputs: InputsRefs | None) -> InputsRefs | None:
        """Offloads large inputs synchronously."""
        result: InputsRefs | None = anyio.run(self._run, "offload", inputs)
        return result

    def to_data_ref(self, value: str, upload: StringUploadFunc, ignore_hash: bool | None = None) -> DataRef:
        """Wraps a base64 value as a DataRef synchronously."""
        result: DataRef = anyio.run(self._run, "to_data_ref", value, upload, ignore_hash)
        return result

    def to_blob(self, ref: DataRef) -> Blob:
        """Decodes a DataRef into a Blob synchronously."""
        result: Blob = anyio.run(self._run, "to_blob", ref)
        return result

    def materialize(self, ref: DataRef, mode: DataMode = DATA_MODE_DEFAULT) -> Any:
        """Returns the referenced data in the requested mode synchronously."""
        return anyio.run(self._run, "materialize", ref, mode)
