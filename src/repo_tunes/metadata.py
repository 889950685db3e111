from __future__ import annotations

import re
from functools import lru_cache
from urllib.parse import quote

from pyuca import Collator


AUDIO_EXTENSIONS = (
    ".mp3",
    ".wav",
    ".ogg",
    ".m4a",
)

IMAGE_EXTENSIONS = (
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
)

# Icon heuristic: substring match, or one of these exact names.
ICON_KEYWORDS = ("icon", "profile")
ICON_EXACT_NAMES = {"image.png", "image.jpg"}

TRAILING_EXTENSION = re.compile(r"\.[^/.]+$")
SEPARATORS = re.compile(r"[_-]")

# Same unreserved set as JavaScript's encodeURIComponent.
URI_COMPONENT_SAFE = "!'()*~"


def has_extension(filename: str, extensions: tuple[str, ...]) -> bool:
    return filename.lower().endswith(extensions)


def is_audio_name(filename: str) -> bool:
    return has_extension(filename, AUDIO_EXTENSIONS)


def is_icon_name(filename: str) -> bool:
    if not has_extension(filename, IMAGE_EXTENSIONS):
        return False
    lowered = filename.lower()
    return any(keyword in lowered for keyword in ICON_KEYWORDS) or lowered in ICON_EXACT_NAMES


def song_title(filename: str) -> str:
    """Song title from a filename: trailing extension removed, ``_``/``-`` become spaces."""
    return SEPARATORS.sub(" ", TRAILING_EXTENSION.sub("", filename))


def display_name(folder_name: str) -> str:
    return SEPARATORS.sub(" ", folder_name)


def format_ext(filename: str) -> str:
    match = TRAILING_EXTENSION.search(filename)
    return match.group(0).lstrip(".").lower() if match else ""


def encode_segment(value: str) -> str:
    return quote(value, safe=URI_COMPONENT_SAFE)


@lru_cache(maxsize=1)
def _collator() -> Collator:
    return Collator()


def title_sort_key(title: str) -> tuple[int, ...]:
    """Unicode collation key: lowercase before uppercase on ties, punctuation before letters."""
    return _collator().sort_key(title)
