"""Shared fixtures: a fake contents API served through httpx.MockTransport."""

import asyncio

import httpx
import pytest

from repo_tunes.client import open_client
from repo_tunes.config import RepositoryConfig

API_PREFIX = "/repos/octo/tunes/contents/"


def entry(name: str, type_: str = "file") -> dict:
    return {"name": name, "type": type_, "path": name}


class FakeContentsApi:
    """Serves listings keyed by folder name ("" is the repository root).

    A listing value may be a list of entries (200), an int status code, an
    httpx exception class to raise, or any other JSON payload (200).
    Unknown paths answer 404.
    """

    def __init__(self, listings: dict) -> None:
        self.listings = listings
        self.requests: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        key = request.url.path[len(API_PREFIX):]
        self.requests.append(key)
        if key not in self.listings:
            return httpx.Response(404, json={"message": "Not Found"})
        value = self.listings[key]
        if isinstance(value, type) and issubclass(value, httpx.HTTPError):
            raise value("connection refused", request=request)
        if isinstance(value, int):
            return httpx.Response(value, json={"message": "API rate limit exceeded"})
        return httpx.Response(200, json=value)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


class RecordingSurface:
    def __init__(self) -> None:
        self.states = []

    def show(self, state) -> None:
        self.states.append(state)


@pytest.fixture
def config() -> RepositoryConfig:
    return RepositoryConfig(owner="octo", repository="tunes", branch="main")


@pytest.fixture
def with_client(config):
    """Run ``func(client)`` against a fake API inside a fresh event loop."""

    def _run(api: FakeContentsApi, func):
        async def _go():
            async with open_client(config, transport=api.transport) as client:
                return await func(client)

        return asyncio.run(_go())

    return _run
