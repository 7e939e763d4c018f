"""Cron entry point for removing slide images no slide references."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass

from src.cms.config import load_config
from src.cms.slides.slide_assets import SlideAssetStore
from src.cms.slides.slides_repository import SlideRepository
from src.cms.slides.slides_service import SlideService


@dataclass(slots=True)
class CleanupSummary:
    orphans: list[str]
    dry_run: bool


def perform_cleanup(*, dry_run: bool, grace_seconds: float | None = None) -> CleanupSummary:
    """Execute cleanup logic and return the affected filenames."""
    config = load_config()
    service = SlideService(
        repo=SlideRepository(config.session_factory),
        assets=SlideAssetStore(root=config.media_paths.slides),
    )
    grace = config.orphan_grace_seconds if grace_seconds is None else grace_seconds
    orphans = service.purge_orphan_assets(grace_seconds=grace, dry_run=dry_run)
    return CleanupSummary(orphans=orphans, dry_run=dry_run)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Remove orphaned slide images.")
    parser.add_argument("--dry-run", action="store_true", help="Only list orphans without deleting files.")
    parser.add_argument(
        "--grace-seconds",
        type=float,
        default=None,
        help="Skip files modified more recently than this (defaults to ORPHAN_GRACE_SECONDS).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv or [])
    try:
        summary = perform_cleanup(dry_run=args.dry_run, grace_seconds=args.grace_seconds)
    except Exception as exc:
        print(f"cleanup failed: {exc}", file=sys.stderr)
        return 2

    label = "cleanup dry-run, orphans_found" if summary.dry_run else "cleanup done, orphans_removed"
    print(f"{label}={len(summary.orphans)}", file=sys.stdout)
    for name in summary.orphans:
        print(f"  {name}", file=sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
