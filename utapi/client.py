"""Async API client for the UploadThing service."""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from datetime import timedelta
from typing import Any, Protocol, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, JsonValue

from .builder import Endpoint, RequestBuilder, validate_payload
from .config import CredentialSource, UploadThingConfig, resolve_api_key
from .decoder import decode_response
from .errors import InvalidInputError, MalformedResponseError, TransportError
from .models import (
    DeleteFilesResult,
    FileKeysPayload,
    FileRename,
    FileUrlsResponse,
    ListFilesOpts,
    ListFilesResult,
    OperationResult,
    PollUploadResult,
    PresignedUrl,
    PresignedUrlResponse,
    RenameFilesPayload,
    RenameFilesResult,
    UploadFile,
    UploadFileOpts,
    UploadFilesPayload,
    UploadFilesResponse,
    UploadTicket,
    UsageInfo,
)
from .presigned import PresignedUrlSigner

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class Transport(Protocol):
    """Sends one request. ``httpx.AsyncClient`` satisfies this protocol.

    Failures raised as ``httpx.HTTPError``, ``OSError`` or timeouts are
    reported as TransportError.
    """

    async def send(self, request: httpx.Request) -> httpx.Response: ...


class UtApi:
    """Async API client for UploadThing.

    Every operation returns an ``OperationResult``; failures are carried in
    ``result.error`` instead of being raised. Only the constructor raises,
    when no API secret can be resolved.

    Example:
        async with UtApi(api_key=os.environ["UPLOADTHING_SECRET"]) as api:
            result = await api.list_files(limit=20)
            for record in result.unwrap().files:
                print(record.key, record.status)
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        config: UploadThingConfig | None = None,
        credential_source: CredentialSource | None = None,
        transport: Transport | None = None,
    ):
        """Create a new UploadThing client.

        Args:
            api_key: API secret (default: UPLOADTHING_SECRET from credential_source)
            config: Host, version and timeout settings (default: from environment)
            credential_source: Secret lookup by name (default: os.environ.get)
            transport: Request sender (default: an owned httpx.AsyncClient)

        Raises:
            MissingCredentialsError: If no API secret is provided or found
        """
        self._api_key = resolve_api_key(api_key, credential_source)
        self._config = config or UploadThingConfig()
        self._builder = RequestBuilder(self._config, self._api_key)
        self._signer = PresignedUrlSigner()

        self._owns_transport = transport is None
        self._transport: Transport = transport or httpx.AsyncClient(
            timeout=self._config.timeout
        )

    @property
    def config(self) -> UploadThingConfig:
        return self._config

    async def _call(
        self,
        endpoint: Endpoint,
        schema: type[M],
        body: BaseModel | None = None,
        *,
        path_suffix: str | None = None,
    ) -> OperationResult[M]:
        """Send one request and decode the response against ``schema``."""
        request = self._builder.build(endpoint, body, path_suffix=path_suffix)
        logger.debug(f"Sending {request.method} {request.url.path}")

        try:
            response = await self._transport.send(request)
        except (httpx.HTTPError, OSError, asyncio.TimeoutError) as e:
            logger.warning(
                f"Transport failure for {endpoint.value}: {e}",
                extra={"endpoint": endpoint.value},
            )
            return OperationResult.failure(TransportError(f"Request failed: {e}"))

        return decode_response(response, schema)

    async def request_uploadthing(
        self,
        files: Sequence[UploadFile],
        opts: UploadFileOpts | None = None,
    ) -> OperationResult[list[UploadTicket]]:
        """
        Initiate an upload session.

        POST /api/uploadFiles

        Returns one presigned upload target per file, in request order. The
        file bytes are not transferred by this call.

        Args:
            files: Files to upload (name, size and MIME type)
            opts: Metadata, content disposition and ACL for all files
        """
        opts = opts or UploadFileOpts()
        try:
            payload = validate_payload(
                UploadFilesPayload,
                files=files,
                metadata=opts.metadata,
                content_disposition=opts.content_disposition,
                acl=opts.acl,
            )
        except InvalidInputError as e:
            return OperationResult.failure(e)

        result = await self._call(Endpoint.UPLOAD_FILES, UploadFilesResponse, payload)
        if result.error is not None:
            return OperationResult.failure(result.error)

        tickets = result.data.data
        if len(tickets) != len(payload.files):
            return OperationResult.failure(
                MalformedResponseError(
                    f"Expected {len(payload.files)} upload tickets, got {len(tickets)}"
                )
            )
        return OperationResult.success(tickets)

    async def delete_files(self, keys: Sequence[str]) -> OperationResult[DeleteFilesResult]:
        """
        Delete files by key.

        POST /api/deleteFile

        Deleting an unknown or already deleted key is not an error; the
        service's aggregate ``success`` flag is returned as data.
        """
        try:
            payload = validate_payload(FileKeysPayload, file_keys=keys)
        except InvalidInputError as e:
            return OperationResult.failure(e)

        return await self._call(Endpoint.DELETE_FILES, DeleteFilesResult, payload)

    async def get_file_urls(
        self, keys: Sequence[str]
    ) -> OperationResult[dict[str, str | None]]:
        """
        Get URLs for files.

        POST /api/getFileUrl

        Returns:
            Mapping of every requested key to its URL, or None when the
            service returned no URL for it
        """
        try:
            payload = validate_payload(FileKeysPayload, file_keys=keys)
        except InvalidInputError as e:
            return OperationResult.failure(e)

        result = await self._call(Endpoint.GET_FILE_URLS, FileUrlsResponse, payload)
        if result.error is not None:
            return OperationResult.failure(result.error)

        urls: dict[str, str | None] = dict.fromkeys(payload.file_keys)
        for item in result.data.data:
            urls[item.key] = item.url
        return OperationResult.success(urls)

    async def list_files(
        self,
        limit: int | None = None,
        offset: int | None = None,
    ) -> OperationResult[ListFilesResult]:
        """
        List one page of files.

        POST /api/listFiles

        Args:
            limit: Page size (default: server default)
            offset: Number of files to skip (default: server default)
        """
        try:
            payload = validate_payload(ListFilesOpts, limit=limit, offset=offset)
        except InvalidInputError as e:
            return OperationResult.failure(e)

        return await self._call(Endpoint.LIST_FILES, ListFilesResult, payload)

    async def rename_files(
        self,
        renames: Mapping[str, str] | Sequence[FileRename | tuple[str, str]],
    ) -> OperationResult[RenameFilesResult]:
        """
        Rename files.

        POST /api/renameFiles

        Args:
            renames: ``{file_key: new_name}`` mapping, or a sequence of
                ``(file_key, new_name)`` pairs or FileRename models
        """
        if isinstance(renames, Mapping):
            renames = list(renames.items())

        updates: list[Any] = [
            dict(zip(("file_key", "new_name"), item)) if isinstance(item, tuple) else item
            for item in renames
        ]
        try:
            payload = validate_payload(RenameFilesPayload, updates=updates)
        except InvalidInputError as e:
            return OperationResult.failure(e)

        return await self._call(Endpoint.RENAME_FILES, RenameFilesResult, payload)

    async def get_presigned_url(
        self,
        file_key: str,
        expires_in: int | timedelta | None = None,
        transform: dict[str, JsonValue] | None = None,
    ) -> OperationResult[PresignedUrl]:
        """
        Request a presigned URL for a file.

        POST /api/requestFileAccess

        Args:
            file_key: Key of the file
            expires_in: Lifetime in seconds from now, at most 604800 (7 days).
                Must be allowed by the app's dashboard settings.
                Fractional seconds are rejected.
            transform: Transformation parameters, sent unchanged
        """
        try:
            payload = self._signer.build_payload(file_key, expires_in, transform)
        except InvalidInputError as e:
            return OperationResult.failure(e)

        result = await self._call(
            Endpoint.REQUEST_FILE_ACCESS, PresignedUrlResponse, payload
        )
        if result.error is not None:
            return OperationResult.failure(result.error)
        return OperationResult.success(self._signer.to_presigned_url(result.data))

    async def get_usage_info(self) -> OperationResult[UsageInfo]:
        """
        Get usage information for the app.

        POST /api/getUsageInfo
        """
        return await self._call(Endpoint.GET_USAGE_INFO, UsageInfo)

    async def poll_upload(self, file_key: str) -> OperationResult[PollUploadResult]:
        """
        Check once whether an upload has finished processing.

        GET /api/pollUpload/{file_key}
        """
        if not file_key:
            return OperationResult.failure(
                InvalidInputError("file_key must be a non-empty string")
            )

        return await self._call(
            Endpoint.POLL_UPLOAD,
            PollUploadResult,
            path_suffix=quote(file_key, safe=""),
        )

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_transport and isinstance(self._transport, httpx.AsyncClient):
            await self._transport.aclose()

    async def __aenter__(self) -> "UtApi":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        await self.close()
