"""Presigned URL parameter encoding.

The service signs URLs server-side. Locally we only encode the request
(expiry as seconds from now, transform parameters passed through as-is)
and copy the URL and expiry from the service's answer.
"""

from datetime import timedelta

from pydantic import JsonValue

from .builder import validate_payload
from .models import PresignedUrl, PresignedUrlPayload, PresignedUrlResponse
from .types import MAX_PRESIGNED_EXPIRY_SECONDS


class PresignedUrlSigner:
    """Encodes presigned URL requests and reads back the service's answer."""

    max_expires_in = MAX_PRESIGNED_EXPIRY_SECONDS

    @staticmethod
    def encode_expiry(expires_in: int | timedelta | None) -> int | float | None:
        """Convert an expiry to seconds from now.

        Fractional seconds are kept so that validation rejects them.
        """
        if isinstance(expires_in, timedelta):
            seconds = expires_in.total_seconds()
            return int(seconds) if seconds.is_integer() else seconds
        return expires_in

    def build_payload(
        self,
        file_key: str,
        expires_in: int | timedelta | None = None,
        transform: dict[str, JsonValue] | None = None,
    ) -> PresignedUrlPayload:
        """
        Validate and encode a presigned URL request.

        Raises:
            InvalidInputError: If the key is empty or the expiry is not
                between 1 second and 7 days
        """
        return validate_payload(
            PresignedUrlPayload,
            file_key=file_key,
            expires_in=self.encode_expiry(expires_in),
            transform=transform,
        )

    @staticmethod
    def to_presigned_url(response: PresignedUrlResponse) -> PresignedUrl:
        return PresignedUrl(url=response.url, expires_at=response.expires_at)
