"""Load-and-render pipeline for the artist listing.

A run moves through ``IDLE -> LOADING -> ERROR | EMPTY | LOADED``. Each call to
:meth:`MusicListPipeline.run` takes a fresh run token; snapshots produced by a
run that is no longer the latest are dropped, so a slow earlier run can never
overwrite what a newer run has shown.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

import httpx

from .client import ListingError, RepositoryNotFoundError, open_client
from .config import RepositoryConfig
from .models import ErrorKind, RunState, RunStatus
from .render import RenderSurface
from .scanner import fetch_all_artists, list_artist_folders

logger = logging.getLogger(__name__)


class MusicListPipeline:
    def __init__(
        self,
        config: RepositoryConfig,
        surface: Optional[RenderSurface] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> None:
        self.config = config
        self.surface = surface
        self.transport = transport
        self.progress_callback = progress_callback
        self._latest_token = 0
        self._state = RunState(status=RunStatus.IDLE)

    @property
    def state(self) -> RunState:
        return self._state

    def _publish(self, state: RunState) -> bool:
        if state.run_token != self._latest_token:
            logger.debug("dropping %s snapshot from stale run %d", state.status.value, state.run_token)
            return False
        self._state = state
        if self.surface is not None:
            self.surface.show(state)
        return True

    async def run(self) -> RunState:
        self._latest_token += 1
        token = self._latest_token
        self._publish(RunState(status=RunStatus.LOADING, run_token=token))
        try:
            state = await self._load(token)
        except Exception as exc:
            self._publish(
                RunState(
                    status=RunStatus.ERROR,
                    run_token=token,
                    error_kind=ErrorKind.LISTING_FAILED,
                    error_message=f"unexpected error: {exc}",
                )
            )
            raise
        self._publish(state)
        return state

    async def retry(self) -> RunState:
        logger.info("retrying %s", self.config.slug)
        return await self.run()

    async def _load(self, token: int) -> RunState:
        async with open_client(self.config, transport=self.transport) as client:
            try:
                folders = await list_artist_folders(client)
            except RepositoryNotFoundError as exc:
                logger.error("%s", exc)
                return RunState(
                    status=RunStatus.ERROR,
                    run_token=token,
                    error_kind=ErrorKind.REPOSITORY_NOT_FOUND,
                    error_message=str(exc),
                )
            except ListingError as exc:
                logger.error("failed to list %s: %s", self.config.slug, exc)
                return RunState(
                    status=RunStatus.ERROR,
                    run_token=token,
                    error_kind=ErrorKind.LISTING_FAILED,
                    error_message=str(exc),
                )

            if not folders:
                return RunState(status=RunStatus.EMPTY, run_token=token)

            self._publish(
                RunState(status=RunStatus.LOADING, run_token=token, pending_artists=len(folders))
            )
            result = await fetch_all_artists(client, folders, progress_callback=self.progress_callback)

        return RunState(
            status=RunStatus.LOADED,
            run_token=token,
            artists=tuple(result.artists),
            warnings=tuple(result.warnings),
        )
