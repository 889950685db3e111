from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

from .config import RepositoryConfig
from .exporters import export_artists_csv, export_json, export_songs_csv, export_sqlite
from .metrics import format_percent, summarize
from .models import RunState, RunStatus
from .pipeline import MusicListPipeline
from .render import TextSurface


def _make_progress_printer(stage: str) -> Callable[[int, int], None]:
    is_tty = sys.stdout.isatty()
    last_percent = -1

    def _report(current: int, total: int) -> None:
        nonlocal last_percent
        percent = 100 if total <= 0 else int((current / total) * 100)
        percent = max(0, min(100, percent))

        if is_tty:
            if percent == last_percent and current < total:
                return
            end = "\n" if current >= total else ""
            print(f"\r[{stage}] {percent:3d}% ({current}/{total})", end=end, flush=True)
            last_percent = percent
            return

        should_print = (
            last_percent < 0
            or current >= total
            or percent >= last_percent + 10
        )
        if should_print:
            print(f"[{stage}] {percent:3d}% ({current}/{total})")
            last_percent = percent

    return _report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repo-tunes",
        description="List the artists and songs stored in a GitHub music repository.",
    )
    parser.add_argument("--owner", default=None, help="Repository owner (env: REPO_TUNES_OWNER)")
    parser.add_argument("--repository", default=None, help="Repository name (env: REPO_TUNES_REPOSITORY)")
    parser.add_argument("--branch", default=None, help="Branch used for media URLs (env: REPO_TUNES_BRANCH)")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-request timeout in seconds (env: REPO_TUNES_TIMEOUT)",
    )
    parser.add_argument(
        "--export",
        choices=["none", "csv", "json", "sqlite", "all"],
        default="none",
        help="Export format for the artist catalog",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("./output"),
        help="Directory for generated CSV/JSON/SQLite outputs",
    )
    parser.add_argument(
        "--retry",
        type=int,
        default=None,
        help="Retry the whole listing up to N times after a failure (default: ask on a terminal)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log request and per-artist diagnostics",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _should_retry(remaining: Optional[int]) -> bool:
    if remaining is not None:
        return remaining > 0
    if not sys.stdin.isatty():
        return False
    try:
        answer = input("Retry? [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in {"y", "yes"}


def _write_exports(state: RunState, export: str, output_dir: Path) -> None:
    artists = list(state.artists)
    output_dir.mkdir(parents=True, exist_ok=True)

    if state.warnings:
        warnings_path = output_dir / "fetch_warnings.log"
        warnings_path.write_text("\n".join(state.warnings) + "\n", encoding="utf-8")
        print(f"[warn] details written: {warnings_path}")

    if export in {"csv", "all"}:
        songs_csv = output_dir / "songs_catalog.csv"
        artists_csv = output_dir / "artists_catalog.csv"
        export_songs_csv(songs_csv, artists)
        export_artists_csv(artists_csv, artists)
        print(f"[write] CSV songs: {songs_csv}")
        print(f"[write] CSV artists: {artists_csv}")

    if export in {"json", "all"}:
        json_path = output_dir / "music.json"
        export_json(json_path, artists)
        print(f"[write] JSON catalog: {json_path}")

    if export in {"sqlite", "all"}:
        db_path = output_dir / "music_catalog.db"
        export_sqlite(db_path, artists)
        print(f"[write] SQLite catalog: {db_path}")


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        config = RepositoryConfig.from_env(
            owner=args.owner,
            repository=args.repository,
            branch=args.branch,
            timeout=args.timeout,
        )
    except ValueError as exc:
        raise SystemExit(str(exc))

    print(f"[start] listing: {config.slug} ({config.branch})")
    pipeline = MusicListPipeline(
        config,
        surface=TextSurface(config),
        progress_callback=_make_progress_printer("fetch"),
    )

    state = asyncio.run(pipeline.run())
    remaining = args.retry
    while state.status is RunStatus.ERROR and _should_retry(remaining):
        if remaining is not None:
            remaining -= 1
        state = asyncio.run(pipeline.retry())

    if state.status is RunStatus.ERROR:
        raise SystemExit(1)
    if state.status is RunStatus.EMPTY:
        return

    metrics, format_counts = summarize(list(state.artists))
    print(f"[done] artists found: {metrics.total_artists}")
    print(f"[done] songs found: {metrics.total_songs}")
    print(f"[done] artists with icon: {metrics.artists_with_icon}")
    print(f"[done] artists without songs: {metrics.empty_artists}")
    if format_counts:
        percents = format_percent(format_counts)
        print("[done] format distribution (% of songs):")
        for fmt in format_counts:
            print(f"  - {fmt}: {percents[fmt]}% ({format_counts[fmt]})")
    if state.warnings:
        print(f"[warn] artist fetch warnings: {len(state.warnings)}")

    if args.export != "none":
        _write_exports(state, args.export, args.output_dir.expanduser().resolve())


if __name__ == "__main__":
    main()
