"""
Taste score pipeline.

Per run:
1. Fetch the user's list collection (one request).
2. For each Watching/Completed list, fetch every entry's global average in one
   batched request.
3. Join by position, write one CSV per list and print its taste ratio.

A failed or misaligned average fetch drops that list only. A failed list
fetch, or a list response without ``data.MediaListCollection.lists``, stops the run.
"""
import logging
from pathlib import Path
from typing import Sequence

from tastescore.core.config import settings
from tastescore.schemas.scores import MediaKind, ScoredList, TasteSummary
from tastescore.services.anilist_client import AniListClient, AniListTransportError
from tastescore.services.extractors import (
    BatchResponseError,
    extract_batched_averages,
    extract_list_entries,
    extract_media_lists,
    tracked_lists,
)
from tastescore.services.query_builder import build_batch_average_query, build_list_query
from tastescore.services.report_writer import (
    BANNER,
    ReportWriteError,
    format_summary_line,
    report_filename,
    report_rows,
    write_report_csv,
)
from tastescore.services.taste_math import MismatchedScoresError, join, summarize

logger = logging.getLogger(__name__)


def fetch_average_scores(
    client: AniListClient,
    media_ids: Sequence[int],
    media_kind: MediaKind,
) -> list[int]:
    """Return global averages aligned with *media_ids*, in one request."""
    if not media_ids:
        return []

    response = client.execute(build_batch_average_query(media_ids, media_kind))
    data = response.get("data") if isinstance(response, dict) else None
    return extract_batched_averages(data)


def fetch_scored_lists(
    client: AniListClient,
    username: str,
    media_kind: MediaKind,
) -> list[ScoredList]:
    """
    Fetch and score every tracked list of *username*.

    Raises:
        AniListTransportError: The list-collection request failed.
        ShapeError: The list-collection response has no lists.
    """
    response = client.execute(build_list_query(username, media_kind))
    media_lists = extract_media_lists(response)

    scored_lists: list[ScoredList] = []
    for list_name, list_json in tracked_lists(media_lists):
        media_ids, personal_scores = extract_list_entries(list_json)
        logger.info("Fetching %d global averages for %r", len(media_ids), list_name)
        try:
            averages = fetch_average_scores(client, media_ids, media_kind)
            scored_lists.append(join(list_name, media_ids, personal_scores, averages))
        except (AniListTransportError, BatchResponseError, MismatchedScoresError) as exc:
            logger.error("Skipping %r list: %s", list_name, exc)

    return scored_lists


def emit_reports(
    scored_lists: Sequence[ScoredList],
    username: str,
    media_kind: MediaKind,
    output_dir: str | Path = ".",
) -> list[TasteSummary]:
    """Print the banner, then write each list's CSV and print its ratio."""
    print(BANNER)

    summaries: list[TasteSummary] = []
    for scored_list in scored_lists:
        path = Path(output_dir) / report_filename(media_kind, scored_list.list_name, username)
        try:
            write_report_csv(report_rows(scored_list), path)
        except ReportWriteError as exc:
            print(exc)
        else:
            logger.info("Wrote %s", path)

        summary = summarize(scored_list)
        summaries.append(summary)
        if summary.is_contrarian(settings.CONTRARIAN_BAND):
            logger.info("%r ratio %.3f is contrarian", summary.list_type, summary.ratio)
        print(format_summary_line(summary))

    return summaries


def run(
    username: str,
    media_kind: MediaKind,
    output_dir: str | Path = ".",
    client: AniListClient | None = None,
) -> list[TasteSummary]:
    """Fetch, score and report all tracked lists for *username*."""
    if client is not None:
        scored_lists = fetch_scored_lists(client, username, media_kind)
    else:
        with AniListClient() as owned_client:
            scored_lists = fetch_scored_lists(owned_client, username, media_kind)
    return emit_reports(scored_lists, username, media_kind, output_dir)
