"""
Command-line entry point.

    anilist-taste-score <username> <mediaType> [--output-dir DIR]

mediaType is ANIME or MANGA, in any case.
"""
import argparse
import sys
from typing import Sequence

from tastescore.core.config import settings
from tastescore.core.logging import configure_logging
from tastescore.schemas.scores import MediaKind
from tastescore.services.anilist_client import AniListTransportError
from tastescore.services.extractors import ShapeError
from tastescore.services.taste_service import run


class StartupError(Exception):
    """Raised for missing or invalid command-line arguments."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="anilist-taste-score",
        description=(
            "Compare an AniList user's scores with global average scores "
            "for their Watching and Completed lists."
        ),
    )
    parser.add_argument("username", nargs="?", help="AniList username")
    parser.add_argument("media_type", nargs="?", help="ANIME or MANGA (case-insensitive)")
    parser.add_argument(
        "--output-dir",
        default=None,
        help="directory for the CSV reports (default: OUTPUT_DIR setting)",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> tuple[str, MediaKind, str]:
    """
    Return ``(username, media_kind, output_dir)``.

    Raises:
        StartupError: If the username or media type is missing or invalid.
    """
    args = build_parser().parse_args(argv)
    if not args.username:
        raise StartupError("No Anilist username provided.")
    if not args.media_type:
        raise StartupError("No media type provided. (ANIME/MANGA)")
    try:
        media_kind = MediaKind.parse(args.media_type)
    except ValueError as exc:
        raise StartupError(str(exc)) from exc
    return args.username, media_kind, args.output_dir or settings.OUTPUT_DIR


def main(argv: Sequence[str] | None = None) -> int:
    configure_logging(settings.LOG_LEVEL)

    try:
        username, media_kind, output_dir = parse_args(argv)
    except StartupError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    try:
        run(username, media_kind, output_dir)
    except (AniListTransportError, ShapeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
