from __future__ import annotations

import os
from dataclasses import dataclass

from .metadata import encode_segment

# Defaults for the music repository
DEFAULT_OWNER = "TotallyNotHappey"
DEFAULT_REPOSITORY = "HappeyTunes"
DEFAULT_BRANCH = "main"
DEFAULT_TIMEOUT = 10.0

API_HOST = "https://api.github.com"
RAW_HOST = "https://raw.githubusercontent.com"

APP_NAME = "repo-tunes"
APP_VERSION = "0.1.0"


@dataclass(frozen=True)
class RepositoryConfig:
    owner: str = DEFAULT_OWNER
    repository: str = DEFAULT_REPOSITORY
    branch: str = DEFAULT_BRANCH
    timeout: float = DEFAULT_TIMEOUT
    api_host: str = API_HOST
    raw_host: str = RAW_HOST

    def __post_init__(self) -> None:
        for field_name in ("owner", "repository", "branch"):
            if not str(getattr(self, field_name)).strip():
                raise ValueError(f"{field_name} must not be empty")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    @classmethod
    def from_env(cls, **overrides: object) -> "RepositoryConfig":
        """Build a config from REPO_TUNES_* variables; non-None overrides win."""
        raw_timeout = os.getenv("REPO_TUNES_TIMEOUT", "")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError as exc:
            raise ValueError(f"REPO_TUNES_TIMEOUT is not a number: {raw_timeout!r}") from exc

        values: dict[str, object] = {
            "owner": os.getenv("REPO_TUNES_OWNER", DEFAULT_OWNER),
            "repository": os.getenv("REPO_TUNES_REPOSITORY", DEFAULT_REPOSITORY),
            "branch": os.getenv("REPO_TUNES_BRANCH", DEFAULT_BRANCH),
            "timeout": timeout,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)  # type: ignore[arg-type]

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repository}"

    @property
    def api_root(self) -> str:
        return f"{self.api_host}/repos/{self.owner}/{self.repository}/contents/"

    @property
    def raw_root(self) -> str:
        return f"{self.raw_host}/{self.owner}/{self.repository}/{self.branch}/"

    @property
    def user_agent(self) -> str:
        return f"{APP_NAME}/{APP_VERSION}"

    def contents_url(self, path: str = "") -> str:
        return f"{self.api_root}{encode_segment(path)}" if path else self.api_root

    def raw_url(self, *segments: str) -> str:
        return self.raw_root + "/".join(encode_segment(segment) for segment in segments)
