"""UploadThing Python API client.

Server-side client for UploadThing file management: upload initiation,
deletion, URL lookup, listing, renaming, presigned URLs and usage info.

Example:
    from utapi import UtApi

    async with UtApi() as api:  # reads UPLOADTHING_SECRET
        result = await api.delete_files(["file_key_1", "file_key_2"])
        if not result.ok:
            print(f"Delete failed: {result.error}")

        urls = (await api.get_file_urls(["file_key_3"])).unwrap()
"""

from .client import Transport, UtApi
from .config import VERSION, UploadThingConfig, resolve_api_key
from .errors import (
    InvalidInputError,
    MalformedResponseError,
    MissingCredentialsError,
    RemoteError,
    TransportError,
    UploadThingError,
)
from .models import (
    Acl,
    ContentDisposition,
    DeleteFilesResult,
    FileRecord,
    FileRename,
    FileStatus,
    ListFilesResult,
    OperationResult,
    PollUploadResult,
    PresignedUrl,
    RenameFilesResult,
    UploadFile,
    UploadFileOpts,
    UploadTicket,
    UsageInfo,
)

__version__ = VERSION

__all__ = [
    "Acl",
    "ContentDisposition",
    "DeleteFilesResult",
    "FileRecord",
    "FileRename",
    "FileStatus",
    # Errors
    "InvalidInputError",
    "ListFilesResult",
    "MalformedResponseError",
    "MissingCredentialsError",
    "OperationResult",
    "PollUploadResult",
    "PresignedUrl",
    "RemoteError",
    "RenameFilesResult",
    "Transport",
    "TransportError",
    "UploadFile",
    "UploadFileOpts",
    "UploadThingConfig",
    "UploadThingError",
    "UploadTicket",
    "UsageInfo",
    # Client
    "UtApi",
    # Version
    "__version__",
    "resolve_api_key",
]
