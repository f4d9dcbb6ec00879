"""Response decoding into typed results.

Decoding is total: every response maps to exactly one OperationResult,
and nothing raises past ``decode_response``.
"""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .errors import MalformedResponseError, RemoteError, TransportError
from .models import OperationResult

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _parse_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def decode_error(response: httpx.Response) -> RemoteError | TransportError:
    """Map an error status to RemoteError or, without an envelope, TransportError."""
    status = response.status_code
    data = _parse_json(response)

    if isinstance(data, dict) and ("error" in data or "message" in data):
        message = data.get("error") or data.get("message") or ""
        code = data.get("code") or f"HTTP_{status}"
        return RemoteError(str(code), str(message), status_code=status)

    return TransportError(
        f"Request failed: {status} - {response.text}",
        status_code=status,
        body=response.text,
    )


def decode_response(response: httpx.Response, schema: type[M]) -> OperationResult[M]:
    """
    Decode a response against the expected schema.

    Args:
        response: Response returned by the transport
        schema: Response model the body must satisfy

    Returns:
        OperationResult carrying the decoded model or a typed error
    """
    if not response.is_success:
        error = decode_error(response)
        logger.warning(
            f"UploadThing request failed: {error}",
            extra={"status_code": response.status_code},
        )
        return OperationResult.failure(error)

    try:
        payload = response.json()
    except ValueError as e:
        return OperationResult.failure(
            MalformedResponseError(f"Response is not valid JSON: {e}")
        )

    try:
        return OperationResult.success(schema.model_validate(payload))
    except ValidationError as e:
        return OperationResult.failure(
            MalformedResponseError(
                f"Response does not match {schema.__name__}: {e.error_count()} error(s)"
            )
        )
