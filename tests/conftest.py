"""Shared fixtures for UploadThing client tests."""

import os

import httpx
import pytest

from utapi import UploadThingConfig, UtApi

# Environment variables to clear for isolated tests
UPLOADTHING_ENV_VARS = [
    "UPLOADTHING_SECRET",
    "UPLOADTHING_HOST",
    "UPLOADTHING_VERSION",
    "UPLOADTHING_USER_AGENT",
    "UPLOADTHING_TIMEOUT",
]


@pytest.fixture
def clean_env():
    """Clear all UPLOADTHING_ environment variables for isolated tests."""
    original = {k: os.environ.get(k) for k in UPLOADTHING_ENV_VARS}
    for k in UPLOADTHING_ENV_VARS:
        os.environ.pop(k, None)
    yield
    # Restore original values
    for k, v in original.items():
        if v is not None:
            os.environ[k] = v
        else:
            os.environ.pop(k, None)


@pytest.fixture
def config() -> UploadThingConfig:
    return UploadThingConfig(
        host="https://uploadthing.com",
        version="6.4.0",
        user_agent="utapi-py/test",
    )


class StubTransport:
    """Transport that replays queued responses and records every request."""

    def __init__(self, *responses: httpx.Response | Exception):
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    async def send(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def make_api(config):
    """Create a client wired to a StubTransport replaying the given responses."""

    def _make(
        *responses: httpx.Response | Exception,
        credential_source=None,
    ) -> tuple[UtApi, StubTransport]:
        transport = StubTransport(*responses)
        api = UtApi(
            api_key=None if credential_source else "sk_test_123",
            config=config,
            credential_source=credential_source,
            transport=transport,
        )
        return api, transport

    return _make
