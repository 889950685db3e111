"""Read-only access to the hosting provider's contents endpoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from .config import RepositoryConfig
from .models import RepositoryEntry

logger = logging.getLogger(__name__)


class ContentsError(Exception):
    """A contents listing could not be obtained."""

    def __init__(self, message: str, path: str = "", status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.path = path
        self.status_code = status_code


class RepositoryNotFoundError(ContentsError):
    """The repository root answered 404."""


class ListingError(ContentsError):
    """Any other failure: non-success status, transport error or unusable body."""


def parse_entries(payload: object) -> list[RepositoryEntry]:
    if not isinstance(payload, list):
        raise ValueError(f"expected a list of entries, got {type(payload).__name__}")

    entries: list[RepositoryEntry] = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        name = item.get("name")
        if not isinstance(name, str) or not name:
            continue
        # Missing or unexpected types are kept verbatim; callers only match "file"/"dir".
        entries.append(RepositoryEntry(name=name, type=str(item.get("type") or "")))
    return entries


class ContentsClient:
    def __init__(self, config: RepositoryConfig, http: httpx.AsyncClient) -> None:
        self.config = config
        self.http = http

    async def list_contents(self, path: str = "") -> list[RepositoryEntry]:
        url = self.config.contents_url(path)
        label = path or "/"
        logger.debug("GET %s", url)

        try:
            response = await self.http.get(url)
        except httpx.HTTPError as exc:
            raise ListingError(f"request for {label} failed: {exc}", path=path) from exc

        if response.status_code == 404:
            if not path:
                raise RepositoryNotFoundError(
                    f"Repository not found: {self.config.slug}", path=path, status_code=404
                )
            raise ListingError(f"folder not found: {label}", path=path, status_code=404)

        if not response.is_success:
            raise ListingError(
                f"GitHub API error: {response.status_code} for {label}",
                path=path,
                status_code=response.status_code,
            )

        try:
            return parse_entries(response.json())
        except ValueError as exc:
            raise ListingError(
                f"unusable listing for {label}: {exc}", path=path, status_code=response.status_code
            ) from exc


@asynccontextmanager
async def open_client(
    config: RepositoryConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AsyncIterator[ContentsClient]:
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": config.user_agent,
    }
    async with httpx.AsyncClient(
        headers=headers,
        timeout=config.timeout,
        transport=transport,
    ) as http:
        yield ContentsClient(config, http)
