from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from .client import ContentsClient, ListingError
from .metadata import display_name, is_audio_name, is_icon_name, song_title, title_sort_key
from .models import ArtistRecord, FetchResult, RepositoryEntry, SongRecord

logger = logging.getLogger(__name__)


async def list_artist_folders(client: ContentsClient) -> list[str]:
    """Names of the top-level directories, in the order the API returned them.

    Raises RepositoryNotFoundError on a 404 and ListingError on any other failure.
    """
    entries = await client.list_contents()
    return [entry.name for entry in entries if entry.is_dir]


def build_artist(client: ContentsClient, folder_name: str, entries: list[RepositoryEntry]) -> ArtistRecord:
    raw_url = client.config.raw_url

    songs = sorted(
        (
            SongRecord(
                filename=entry.name,
                title=song_title(entry.name),
                media_url=raw_url(folder_name, entry.name),
            )
            for entry in entries
            if entry.is_file and is_audio_name(entry.name)
        ),
        key=lambda song: title_sort_key(song.title),
    )

    icon = next((entry for entry in entries if entry.is_file and is_icon_name(entry.name)), None)

    return ArtistRecord(
        display_name=display_name(folder_name),
        folder_name=folder_name,
        songs=tuple(songs),
        icon_url=raw_url(folder_name, icon.name) if icon else None,
    )


async def fetch_artist(
    client: ContentsClient,
    folder_name: str,
    warnings: Optional[list[str]] = None,
) -> ArtistRecord:
    """Songs and icon for one artist folder; failures degrade to an empty record."""
    try:
        entries = await client.list_contents(folder_name)
    except ListingError as exc:
        if exc.status_code == 404:
            message = f"artist folder not found: {folder_name}"
        else:
            message = f"artist fetch failed: {folder_name}: {exc}"
        logger.warning(message)
        if warnings is not None:
            warnings.append(message)
        return ArtistRecord(display_name=display_name(folder_name), folder_name=folder_name)

    return build_artist(client, folder_name, entries)


async def fetch_all_artists(
    client: ContentsClient,
    folders: list[str],
    progress_callback: Callable[[int, int], None] | None = None,
) -> FetchResult:
    warnings: list[str] = []
    total = len(folders)
    done = 0
    if progress_callback:
        progress_callback(0, total)

    async def _fetch(folder_name: str) -> ArtistRecord:
        nonlocal done
        try:
            return await fetch_artist(client, folder_name, warnings)
        finally:
            done += 1
            if progress_callback:
                progress_callback(done, total)

    artists = await asyncio.gather(*(_fetch(name) for name in folders))
    return FetchResult(artists=list(artists), warnings=warnings)
