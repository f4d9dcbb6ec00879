"""Common annotated types for field validation.

These types keep payload validation consistent across operations.
"""

from typing import Annotated

from pydantic import Field

# Maximum lifetime of a presigned URL, in seconds (7 days)
MAX_PRESIGNED_EXPIRY_SECONDS = 604800

# Pattern for names that contain at least one visible character
NON_BLANK_PATTERN = r"\S"


# File key - opaque identifier assigned by the service, must be non-empty
FileKey = Annotated[str, Field(min_length=1)]

# File name - destination name for renames and uploads, must not be blank
FileName = Annotated[str, Field(min_length=1, pattern=NON_BLANK_PATTERN)]

# Presigned URL lifetime in seconds from now
ExpiresIn = Annotated[int, Field(ge=1, le=MAX_PRESIGNED_EXPIRY_SECONDS)]
