"""Request construction for UploadThing API endpoints.

Every request carries the same header set; the API secret travels in
``x-uploadthing-api-key``. The endpoint table below is the frozen wire
contract: the service exposes its file operations as POST RPC endpoints,
and only upload polling is a GET.
"""

from enum import Enum
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .config import UploadThingConfig
from .errors import InvalidInputError

P = TypeVar("P", bound=BaseModel)

API_KEY_HEADER = "x-uploadthing-api-key"
VERSION_HEADER = "x-uploadthing-version"


class Endpoint(str, Enum):
    """API endpoint paths."""

    UPLOAD_FILES = "/api/uploadFiles"
    DELETE_FILES = "/api/deleteFile"
    GET_FILE_URLS = "/api/getFileUrl"
    LIST_FILES = "/api/listFiles"
    RENAME_FILES = "/api/renameFiles"
    REQUEST_FILE_ACCESS = "/api/requestFileAccess"
    GET_USAGE_INFO = "/api/getUsageInfo"
    POLL_UPLOAD = "/api/pollUpload"

    @property
    def method(self) -> str:
        return "GET" if self is Endpoint.POLL_UPLOAD else "POST"


def validate_payload(model: type[P], **data: Any) -> P:
    """Build a payload model, turning validation failures into InvalidInputError.

    Args:
        model: Payload model class
        **data: Field values supplied by the caller

    Returns:
        Validated payload

    Raises:
        InvalidInputError: If any field violates its constraints
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or model.__name__}: {err['msg']}"
            for err in e.errors()
        )
        raise InvalidInputError(f"Invalid {model.__name__}: {details}") from e


class RequestBuilder:
    """Builds authenticated ``httpx.Request`` objects for one client."""

    def __init__(self, config: UploadThingConfig, api_key: str):
        self._base_url = config.base_url
        self._headers = {
            "Content-Type": "application/json",
            "Cache-Control": "no-store",
            "User-Agent": config.user_agent,
            API_KEY_HEADER: api_key,
            VERSION_HEADER: config.version,
        }

    def url_for(self, endpoint: Endpoint, path_suffix: str | None = None) -> str:
        url = f"{self._base_url}{endpoint.value}"
        if path_suffix:
            url = f"{url}/{path_suffix}"
        return url

    def build(
        self,
        endpoint: Endpoint,
        body: BaseModel | None = None,
        *,
        path_suffix: str | None = None,
    ) -> httpx.Request:
        """
        Build the request for an endpoint.

        POST requests always carry a JSON object body; an absent payload is
        sent as ``{}``. GET requests carry no body.
        """
        url = self.url_for(endpoint, path_suffix)

        if endpoint.method == "GET":
            return httpx.Request("GET", url, headers=self._headers)

        json_body: dict[str, Any] = {}
        if body is not None:
            # Unset top-level fields are omitted; nested values go out unchanged
            dumped = body.model_dump(mode="json", by_alias=True)
            json_body = {k: v for k, v in dumped.items() if v is not None}

        return httpx.Request(endpoint.method, url, headers=self._headers, json=json_body)
