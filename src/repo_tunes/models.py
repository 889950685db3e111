from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class RepositoryEntry:
    name: str
    type: str

    @property
    def is_dir(self) -> bool:
        return self.type == "dir"

    @property
    def is_file(self) -> bool:
        return self.type == "file"


@dataclass(frozen=True)
class SongRecord:
    filename: str
    title: str
    media_url: str


@dataclass(frozen=True)
class ArtistRecord:
    display_name: str
    folder_name: str
    songs: tuple[SongRecord, ...] = ()
    icon_url: Optional[str] = None

    @property
    def song_count(self) -> int:
        return len(self.songs)


@dataclass
class FetchResult:
    artists: list[ArtistRecord]
    warnings: list[str]


@dataclass
class CatalogMetrics:
    total_artists: int
    total_songs: int
    artists_with_icon: int
    empty_artists: int


class RunStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    LOADED = "loaded"


class ErrorKind(str, Enum):
    REPOSITORY_NOT_FOUND = "repository-not-found"
    LISTING_FAILED = "listing-failed"


@dataclass(frozen=True)
class RunState:
    status: RunStatus
    run_token: int = 0
    artists: tuple[ArtistRecord, ...] = ()
    error_kind: Optional[ErrorKind] = None
    error_message: str = ""
    pending_artists: int = 0
    warnings: tuple[str, ...] = field(default=(), repr=False)

