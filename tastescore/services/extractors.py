"""
Response extraction for the two AniList queries.

Two failure tiers:
- Missing top-level structure (no ``data.MediaListCollection.lists``) is a
  ShapeError; nothing downstream can run without it.
- Malformed individual entries are skipped without raising.
"""
import logging
from typing import Any, Iterable

from tastescore.services.query_builder import index_from_alias

logger = logging.getLogger(__name__)

TRACKED_LIST_NAMES = ("Watching", "Completed")


class ShapeError(Exception):
    """Raised when a structurally required level of a response is absent."""


class BatchResponseError(Exception):
    """Raised when a batched average-score response cannot be mapped back to ids."""


def _as_int(value: Any) -> int | None:
    """Return *value* if it is a JSON integer, else None. Floats such as 8.0 are not integers."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def extract_media_lists(response: Any) -> list[dict[str, Any]]:
    """
    Return the ``lists`` array of a MediaListCollection response.

    Raises:
        ShapeError: If ``data``, ``MediaListCollection`` or ``lists`` is missing.
    """
    node = response
    for key in ("data", "MediaListCollection", "lists"):
        if not isinstance(node, dict) or node.get(key) is None:
            raise ShapeError(f"Media lists not found: response has no {key!r}")
        node = node[key]
    if not isinstance(node, list):
        raise ShapeError("Media lists not found: 'lists' is not an array")
    return node


def tracked_lists(media_lists: Iterable[Any]) -> list[tuple[str, dict[str, Any]]]:
    """Keep only the Watching and Completed lists, as ``(name, list_json)`` pairs."""
    kept: list[tuple[str, dict[str, Any]]] = []
    for media_list in media_lists:
        if not isinstance(media_list, dict):
            continue
        name = media_list.get("name")
        if not isinstance(name, str):
            continue
        if name in TRACKED_LIST_NAMES:
            kept.append((name, media_list))
        else:
            logger.debug("Ignoring list %r", name)
    return kept


def extract_list_entries(list_json: dict[str, Any]) -> tuple[list[int], list[int]]:
    """
    Pull co-indexed ``(media ids, personal scores)`` out of one list.

    Entries missing ``mediaId`` or ``score``, or holding non-integers, are skipped.
    """
    ids: list[int] = []
    scores: list[int] = []

    entries = list_json.get("entries")
    if not isinstance(entries, list):
        return ids, scores

    for entry in entries:
        if not isinstance(entry, dict):
            continue
        media_id = _as_int(entry.get("mediaId"))
        score = _as_int(entry.get("score"))
        if media_id is None or score is None:
            logger.debug("Skipping malformed entry %r", entry)
            continue
        ids.append(media_id)
        scores.append(score)

    return ids, scores


def extract_batched_averages(data_object: Any) -> list[int]:
    """
    Turn ``{"query_<i>": {"averageScore": n}, ...}`` into ``[n_0, n_1, ...]``.

    Field order in the response is not guaranteed, so scores are sorted by the
    numeric alias index, which must run 0..k-1 without gaps. A missing, null or
    non-integer averageScore counts as 0.

    Raises:
        BatchResponseError: If *data_object* is not a mapping, an alias has no index,
            or the indices are not contiguous from 0.
    """
    if not isinstance(data_object, dict):
        raise BatchResponseError(
            f"Expected an object of aliased results, got {type(data_object).__name__}"
        )

    indexed: list[tuple[int, int]] = []
    for alias, value in data_object.items():
        try:
            index = index_from_alias(alias)
        except ValueError as exc:
            raise BatchResponseError(str(exc)) from exc

        score = None
        if isinstance(value, dict):
            score = _as_int(value.get("averageScore"))
        indexed.append((index, score if score is not None else 0))

    indexed.sort(key=lambda pair: pair[0])
    indices = [index for index, _ in indexed]
    if indices != list(range(len(indexed))):
        raise BatchResponseError(
            f"Aliases do not cover query_0..query_{len(indexed) - 1}: got indices {indices}"
        )
    return [score for _, score in indexed]
