from __future__ import annotations

from collections import Counter

from .metadata import format_ext
from .models import ArtistRecord, CatalogMetrics


def summarize(artists: list[ArtistRecord]) -> tuple[CatalogMetrics, dict[str, int]]:
    format_counts = Counter()
    for artist in artists:
        for song in artist.songs:
            format_counts[format_ext(song.filename)] += 1

    return (
        CatalogMetrics(
            total_artists=len(artists),
            total_songs=sum(a.song_count for a in artists),
            artists_with_icon=sum(1 for a in artists if a.icon_url),
            empty_artists=sum(1 for a in artists if not a.songs),
        ),
        dict(sorted(format_counts.items())),
    )


def format_percent(format_counts: dict[str, int]) -> dict[str, float]:
    total = sum(format_counts.values())
    return {
        fmt: round((count / total * 100.0) if total else 0.0, 2)
        for fmt, count in format_counts.items()
    }
