"""Client configuration and API secret resolution.

Uses Pydantic BaseSettings for automatic environment variable loading.
Environment variables are prefixed with UPLOADTHING_.

The API secret is resolved separately by ``resolve_api_key`` so that
callers and tests can inject the lookup instead of mutating the process
environment.
"""

import os
from collections.abc import Callable
from importlib.metadata import PackageNotFoundError, version

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import MissingCredentialsError

try:
    VERSION = version("utapi")
except PackageNotFoundError:
    VERSION = "0.0.0"

# Environment variable holding the API secret
SECRET_ENV_VAR = "UPLOADTHING_SECRET"

# Lookup of a named secret; returns None when it is not set
CredentialSource = Callable[[str], str | None]


def _default_user_agent() -> str:
    return f"utapi-py/{VERSION}/python"


class UploadThingConfig(BaseSettings):
    """
    Client configuration.

    Optional environment variables:
        UPLOADTHING_HOST: API host (default: https://uploadthing.com)
        UPLOADTHING_VERSION: Value sent in x-uploadthing-version (default: package version)
        UPLOADTHING_USER_AGENT: User-Agent header (default: utapi-py/<version>/python)
        UPLOADTHING_TIMEOUT: Request timeout in seconds (default: 30)
    """

    model_config = SettingsConfigDict(
        env_prefix="UPLOADTHING_",
        extra="ignore",
    )

    # API host - validated as URL
    host: HttpUrl = "https://uploadthing.com"  # type: ignore[assignment]

    version: str = Field(default=VERSION, min_length=1)

    user_agent: str = Field(default_factory=_default_user_agent, min_length=1)

    # Timeout applied to the owned HTTP client (seconds)
    timeout: float = Field(default=30.0, gt=0)

    @property
    def base_url(self) -> str:
        """Host without trailing slash, ready for path concatenation."""
        return str(self.host).rstrip("/")


def resolve_api_key(
    explicit: str | None = None,
    source: CredentialSource | None = None,
) -> str:
    """Resolve the API secret.

    Args:
        explicit: Secret passed by the caller; wins when non-empty
        source: Lookup for the secret by name (default: os.environ.get)

    Returns:
        The non-empty API secret

    Raises:
        MissingCredentialsError: If neither input yields a non-empty value
    """
    if explicit:
        return explicit

    lookup = source if source is not None else os.environ.get
    secret = lookup(SECRET_ENV_VAR)
    if not secret:
        raise MissingCredentialsError(
            f"api_key is required. Pass it directly or set {SECRET_ENV_VAR} "
            "environment variable."
        )
    return secret
