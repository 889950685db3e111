from __future__ import annotations

import csv
import json
import sqlite3
from pathlib import Path

from .metadata import format_ext
from .models import ArtistRecord


SONG_COLUMNS = [
    "artist",
    "folder_name",
    "title",
    "filename",
    "format_ext",
    "media_url",
    "icon_url",
]

ARTIST_COLUMNS = [
    "display_name",
    "folder_name",
    "song_count",
    "icon_url",
]


def export_songs_csv(path: Path, artists: list[ArtistRecord]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=SONG_COLUMNS)
        writer.writeheader()
        for a in artists:
            for s in a.songs:
                writer.writerow(
                    {
                        "artist": a.display_name,
                        "folder_name": a.folder_name,
                        "title": s.title,
                        "filename": s.filename,
                        "format_ext": format_ext(s.filename),
                        "media_url": s.media_url,
                        "icon_url": a.icon_url or "",
                    }
                )


def export_artists_csv(path: Path, artists: list[ArtistRecord]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(ARTIST_COLUMNS)
        for a in artists:
            writer.writerow([a.display_name, a.folder_name, a.song_count, a.icon_url or ""])


def artist_to_dict(artist: ArtistRecord) -> dict[str, object]:
    return {
        "name": artist.display_name,
        "folder_name": artist.folder_name,
        "icon_url": artist.icon_url,
        "song_count": artist.song_count,
        "songs": [
            {"title": s.title, "filename": s.filename, "media_url": s.media_url}
            for s in artist.songs
        ],
    }


def export_json(path: Path, artists: list[ArtistRecord]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [artist_to_dict(a) for a in artists]
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def export_sqlite(path: Path, artists: list[ArtistRecord]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    try:
        cur = conn.cursor()
        cur.execute("DROP TABLE IF EXISTS songs")
        cur.execute("DROP TABLE IF EXISTS artists")

        cur.execute(
            """
            CREATE TABLE artists (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                display_name TEXT NOT NULL,
                folder_name TEXT NOT NULL UNIQUE,
                song_count INTEGER NOT NULL,
                icon_url TEXT
            )
            """
        )

        cur.execute(
            """
            CREATE TABLE songs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                artist_id INTEGER NOT NULL REFERENCES artists(id),
                position INTEGER NOT NULL,
                title TEXT NOT NULL,
                filename TEXT NOT NULL,
                format_ext TEXT NOT NULL,
                media_url TEXT NOT NULL
            )
            """
        )

        for a in artists:
            cur.execute(
                "INSERT INTO artists (display_name, folder_name, song_count, icon_url) VALUES (?, ?, ?, ?)",
                (a.display_name, a.folder_name, a.song_count, a.icon_url),
            )
            artist_id = cur.lastrowid
            cur.executemany(
                """
                INSERT INTO songs (artist_id, position, title, filename, format_ext, media_url)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                [
                    (artist_id, position, s.title, s.filename, format_ext(s.filename), s.media_url)
                    for position, s in enumerate(a.songs)
                ],
            )

        conn.commit()
    finally:
        conn.close()
