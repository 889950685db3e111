from __future__ import annotations

from typing import Optional, Protocol, TextIO

from .config import RepositoryConfig
from .models import ArtistRecord, ErrorKind, RunState, RunStatus

LOADING_MESSAGE = "loading music..."
EMPTY_MESSAGE = "No artist folders found in this repository."
NO_SONGS_MESSAGE = "No songs found for this artist."


class RenderSurface(Protocol):
    def show(self, state: RunState) -> None:
        ...


def song_count_label(count: int) -> str:
    return f"{count} song{'' if count == 1 else 's'}"


def artist_initial(artist: ArtistRecord) -> str:
    return artist.display_name[:1].upper() or "?"


def format_artist_card(artist: ArtistRecord) -> list[str]:
    icon = artist.icon_url or f"[{artist_initial(artist)}]"
    lines = [
        f"{artist.display_name} ({song_count_label(artist.song_count)})",
        f"  icon: {icon}",
    ]
    if not artist.songs:
        lines.append(f"  - {NO_SONGS_MESSAGE}")
    for song in artist.songs:
        lines.append(f"  - {song.title}")
        lines.append(f"      {song.media_url}")
    return lines


def format_error_panel(state: RunState, config: RepositoryConfig) -> list[str]:
    if state.error_kind is ErrorKind.REPOSITORY_NOT_FOUND:
        return [
            "[error] Repository Not Found",
            f"[error] Could not find: {config.slug}",
            "[error] Please check:",
            "  - the GitHub owner name is correct",
            "  - the repository name is correct",
            "  - the repository is public",
        ]
    return [f"[error] {state.error_message or 'listing failed'}"]


class TextSurface:
    """Writes each published state to a terminal stream."""

    def __init__(self, config: RepositoryConfig, stream: Optional[TextIO] = None) -> None:
        self.config = config
        self.stream = stream

    def _emit(self, lines: list[str]) -> None:
        for line in lines:
            print(line, file=self.stream)

    def show(self, state: RunState) -> None:
        if state.status is RunStatus.LOADING:
            if state.pending_artists:
                self._emit([f"[loading] Loading {state.pending_artists} artists..."])
            else:
                self._emit([f"[loading] {LOADING_MESSAGE}"])
        elif state.status is RunStatus.ERROR:
            self._emit(format_error_panel(state, self.config))
        elif state.status is RunStatus.EMPTY:
            self._emit([f"[empty] {EMPTY_MESSAGE}"])
        elif state.status is RunStatus.LOADED:
            lines = [f"Artists ({len(state.artists)})", ""]
            for artist in state.artists:
                lines.extend(format_artist_card(artist))
                lines.append("")
            self._emit(lines)
