"""
CSV reports and console lines for scored lists.
"""
import math
from pathlib import Path
from typing import Iterable

import pandas as pd

from tastescore.schemas.scores import MediaKind, ReportRow, ScoredList, TasteSummary

REPORT_COLUMNS = ["list_type", "anilist_id", "user_score", "global_avg_score"]

BANNER = """This script queries an Anilist profile and calculates a global average score.
    - score <= 0.99 indicates contrarian taste.
    - score = 1.0 indicates completely average taste.
    - score >= 1.1 indicates contrarian taste.
"""


class ReportWriteError(Exception):
    """Raised when a report file cannot be created or written."""


def report_filename(media_kind: MediaKind, list_type: str, username: str) -> str:
    return f"anilist_{MediaKind(media_kind).value}_{list_type}_score_{username}.csv"


def report_rows(scored_list: ScoredList) -> list[ReportRow]:
    """Flatten a scored list into one row per entry."""
    return [
        ReportRow(
            list_type=scored_list.list_name,
            anilist_id=entry.media_id,
            user_score=entry.personal_score,
            global_avg_score=average,
        )
        for entry, average in zip(scored_list.entries, scored_list.global_average_scores)
    ]


def write_report_csv(rows: Iterable[ReportRow], path: str | Path) -> Path:
    """
    Create or overwrite *path* with a header row and one line per row.

    Raises:
        ReportWriteError: If the file cannot be written.
    """
    path = Path(path)
    frame = pd.DataFrame([row.model_dump() for row in rows], columns=REPORT_COLUMNS)
    try:
        frame.to_csv(path, index=False)
    except OSError as exc:
        raise ReportWriteError(f"Unable to save file to {path}: {exc}") from exc
    return path


def read_report_csv(path: str | Path) -> list[ReportRow]:
    frame = pd.read_csv(
        path,
        dtype={
            "list_type": str,
            "anilist_id": "int64",
            "user_score": "int64",
            "global_avg_score": "int64",
        },
    )
    return [
        ReportRow(
            list_type=str(record.list_type),
            anilist_id=int(record.anilist_id),
            user_score=int(record.user_score),
            global_avg_score=int(record.global_avg_score),
        )
        for record in frame.itertuples(index=False)
    ]


def format_summary_line(summary: TasteSummary) -> str:
    if math.isnan(summary.ratio):
        value = "undefined (no global average scores)"
    else:
        value = str(summary.ratio)
    return f"Average-ness score for '{summary.list_type}' series: {value}\n"
