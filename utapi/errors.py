"""Error taxonomy for UploadThing operations.

Every operation returns these inside an ``OperationResult`` rather than
raising them. ``MissingCredentialsError`` is the exception: it is raised
by the client constructor.
"""


class UploadThingError(Exception):
    """Base class for client errors."""


class MissingCredentialsError(UploadThingError):
    """No usable API secret was found."""


class InvalidInputError(UploadThingError):
    """Caller-supplied parameters violate a precondition."""


class TransportError(UploadThingError):
    """The transport failed or the error body could not be parsed."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class RemoteError(UploadThingError):
    """The service returned a structured error envelope."""

    def __init__(self, code: str, message: str, *, status_code: int):
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message
        self.status_code = status_code


class MalformedResponseError(UploadThingError):
    """A successful response whose body does not match the expected schema."""
