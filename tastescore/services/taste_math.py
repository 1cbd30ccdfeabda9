"""
Taste Math
──────────
Joins personal scores with global averages and computes the taste ratio.

    ratio = sum(personal scores) / sum(global average scores)

  • ratio ≈ 1.0  → the user's scale centers on the global average.
  • ratio outside 1.0 ± CONTRARIAN_BAND → reported as contrarian taste.

The join is positional: averages[i] belongs to ids[i]. There is no id-based
fallback, so unequal lengths are an error rather than a truncation.
"""
import logging
import math
from typing import Sequence

from tastescore.schemas.scores import ListEntry, ScoredList, TasteSummary

logger = logging.getLogger(__name__)


class MismatchedScoresError(ValueError):
    """Raised when personal and average score sequences differ in length."""


def join(
    list_name: str,
    media_ids: Sequence[int],
    personal_scores: Sequence[int],
    global_averages: Sequence[int],
) -> ScoredList:
    """
    Pair each entry with the average at the same position.

    Raises:
        MismatchedScoresError: If the three sequences are not the same length.
    """
    if not (len(media_ids) == len(personal_scores) == len(global_averages)):
        raise MismatchedScoresError(
            f"Cannot join {list_name!r}: {len(media_ids)} ids, "
            f"{len(personal_scores)} personal scores, "
            f"{len(global_averages)} global averages"
        )

    entries = [
        ListEntry(media_id=media_id, personal_score=score)
        for media_id, score in zip(media_ids, personal_scores)
    ]
    return ScoredList(
        list_name=list_name,
        entries=entries,
        global_average_scores=list(global_averages),
    )


def compute_taste_ratio(scored_list: ScoredList) -> float:
    """Return the taste ratio, or NaN when the global averages sum to zero."""
    user_total = sum(scored_list.personal_scores)
    average_total = sum(scored_list.global_average_scores)
    if average_total == 0:
        logger.warning(
            "Taste ratio for %r is undefined: global average scores sum to 0 "
            "(%d entries)",
            scored_list.list_name,
            len(scored_list.entries),
        )
        return math.nan
    return user_total / average_total


def summarize(scored_list: ScoredList) -> TasteSummary:
    return TasteSummary(
        list_type=scored_list.list_name,
        ratio=compute_taste_ratio(scored_list),
        user_score_total=sum(scored_list.personal_scores),
        average_score_total=sum(scored_list.global_average_scores),
        entry_count=len(scored_list.entries),
    )
