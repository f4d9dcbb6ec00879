"""Request payloads, response schemas and result types.

Payload models validate caller input before any request is built; their
field names are the wire names sent to the service. Response models are
the strict decode schemas: unknown fields are ignored, missing required
fields fail.
"""

import mimetypes
from enum import Enum
from pathlib import Path
from typing import Any, Generic, TypeVar

from pydantic import (
    AliasChoices,
    AliasGenerator,
    BaseModel,
    ConfigDict,
    Field,
    JsonValue,
    NonNegativeInt,
    PositiveInt,
    model_validator,
)
from pydantic.alias_generators import to_camel
from typing_extensions import Self

from .errors import UploadThingError
from .types import ExpiresIn, FileKey, FileName

T = TypeVar("T")

DEFAULT_CONTENT_TYPE = "application/octet-stream"


# ============================================================================
# Request payloads
# ============================================================================


class FileKeysPayload(BaseModel):
    """Body for deleteFile and getFileUrl."""

    file_keys: list[FileKey] = Field(min_length=1)


class ListFilesOpts(BaseModel):
    """Pagination options for listFiles. Unset fields use the server default."""

    limit: PositiveInt | None = None
    offset: NonNegativeInt | None = None


class FileRename(BaseModel):
    """Single rename: existing file key to its new name."""

    file_key: FileKey
    new_name: FileName


class RenameFilesPayload(BaseModel):
    """Body for renameFiles."""

    updates: list[FileRename] = Field(min_length=1)

    @model_validator(mode="after")
    def _check_unique_destinations(self) -> Self:
        seen: set[str] = set()
        for update in self.updates:
            if update.new_name in seen:
                raise ValueError(f"duplicate destination name: {update.new_name!r}")
            seen.add(update.new_name)
        return self


class PresignedUrlPayload(BaseModel):
    """Body for requestFileAccess. ``expires_in`` is seconds from now."""

    file_key: FileKey
    expires_in: ExpiresIn | None = None
    transform: dict[str, JsonValue] | None = None


class ContentDisposition(str, Enum):
    """Content-Disposition applied to uploaded files."""

    INLINE = "inline"
    ATTACHMENT = "attachment"


class Acl(str, Enum):
    """Access control for uploaded files."""

    PRIVATE = "private"
    PUBLIC_READ = "public-read"


class UploadFile(BaseModel):
    """Description of one file to upload. The bytes are not part of it."""

    name: FileName
    size: int = Field(ge=0)
    type: str = DEFAULT_CONTENT_TYPE

    @classmethod
    def from_path(cls, path: str | Path, name: str | None = None) -> Self:
        """Describe a local file, guessing its MIME type from the extension.

        Args:
            path: Local file path
            name: Name to upload under (default: the file's base name)

        Returns:
            UploadFile with size taken from the filesystem
        """
        path = Path(path)
        mime, _ = mimetypes.guess_type(path.name)
        return cls(
            name=name or path.name,
            size=path.stat().st_size,
            type=mime or DEFAULT_CONTENT_TYPE,
        )


class UploadFileOpts(BaseModel):
    """Options shared by all files of one upload request."""

    metadata: dict[str, str] = Field(default_factory=dict)
    content_disposition: ContentDisposition = ContentDisposition.INLINE
    acl: Acl = Acl.PUBLIC_READ


class UploadFilesPayload(UploadFileOpts):
    """Body for uploadFiles."""

    model_config = ConfigDict(
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )

    files: list[UploadFile] = Field(min_length=1)


# ============================================================================
# Response schemas
# ============================================================================


def _snake_or_camel(name: str) -> AliasChoices:
    return AliasChoices(name, to_camel(name))


class ResponseModel(BaseModel):
    """Base for decoded responses. Accepts snake_case or camelCase keys."""

    model_config = ConfigDict(
        alias_generator=AliasGenerator(validation_alias=_snake_or_camel),
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class FileStatus(str, Enum):
    """Status of a stored file as reported by the service."""

    DELETION_PENDING = "DeletionPending"
    FAILED = "Failed"
    UPLOADED = "Uploaded"
    UPLOADING = "Uploading"


class FileRecord(ResponseModel):
    """Server-reported metadata for one file."""

    key: str
    id: str
    status: FileStatus
    name: str | None = None
    size: int | None = None
    url: str | None = None


class ListFilesResult(ResponseModel):
    """One page of files, in server order."""

    files: list[FileRecord]
    has_more: bool | None = None
    """Continuation indicator, when the service provides one."""


class DeleteFilesResult(ResponseModel):
    """Aggregate outcome of a delete request."""

    success: bool
    deleted_count: int | None = None


class RenameFilesResult(ResponseModel):
    """Outcome of a rename request."""

    success: bool | None = None
    """Aggregate flag, None when the service answers without one."""


class FileUrl(ResponseModel):
    key: str
    url: str


class FileUrlsResponse(ResponseModel):
    data: list[FileUrl]


class UsageInfo(ResponseModel):
    """Account usage snapshot."""

    total_bytes: int
    total_readable: str
    app_total_bytes: float
    app_total_readable: str
    files_uploaded: int
    limit_bytes: float
    limit_readable: str


class PresignedUrlResponse(ResponseModel):
    url: str
    expires_at: int | str | None = None


class PresignedUrl(BaseModel):
    """Time-limited URL for direct file access."""

    model_config = ConfigDict(frozen=True)

    url: str
    expires_at: int | str | None = None
    """Expiry exactly as reported by the service; None if it reported none."""


class UploadTicket(ResponseModel):
    """Presigned upload target issued for one file."""

    key: str
    file_url: str
    fields: dict[str, Any]
    presigned_url: str | None = None
    url: str | None = None
    urls: list[str] | None = None
    chunk_size: int | None = None


class UploadFilesResponse(ResponseModel):
    data: list[UploadTicket]


class PollUploadResult(ResponseModel):
    """Upload processing status for one file."""

    status: str

    @property
    def done(self) -> bool:
        return self.status == "done"


# ============================================================================
# Operation result
# ============================================================================


class OperationResult(BaseModel, Generic[T]):
    """
    Outcome of one operation: either ``data`` or ``error``, never both.

    Example:
        result = await api.list_files()
        if result.ok:
            for record in result.data.files:
                print(record.key)
        else:
            print(f"Listing failed: {result.error}")
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    data: T | None = None
    error: UploadThingError | None = None

    @model_validator(mode="after")
    def _check_exclusive(self) -> Self:
        if self.error is not None and self.data is not None:
            raise ValueError("OperationResult cannot carry both data and error")
        return self

    @classmethod
    def success(cls, data: T) -> "OperationResult[T]":
        """Create a successful result."""
        return cls(data=data)

    @classmethod
    def failure(cls, error: UploadThingError) -> "OperationResult[T]":
        """Create a failed result."""
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the data, raising the carried error on failure."""
        if self.error is not None:
            raise self.error
        return self.data  # type: ignore[return-value]
