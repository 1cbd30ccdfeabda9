"""
GraphQL Query Builder
─────────────────────
Builds the two documents the score pipeline sends to AniList:

  1. The list-collection query: every list of a user with (mediaId, score).
  2. The batched average-score query: one aliased ``Media`` lookup per id,
     named ``query_0 .. query_{n-1}``, so all averages for a list arrive in a
     single round trip.

The alias index is the only link between a response field and the id it
belongs to; ``index_from_alias`` is the inverse used by the extractor.
"""
from typing import Any, Sequence

from pydantic import BaseModel, Field

from tastescore.schemas.scores import MediaKind

ALIAS_PREFIX = "query_"

LIST_COLLECTION_QUERY = """
query ($username: String, $media: MediaType) {
  MediaListCollection (userName: $username, type: $media) {
    lists {
      name
      entries {
        mediaId
        score
      }
    }
  }
}
"""

_AVERAGE_SCORE_FIELD = """
  {alias}: Media (id: {media_id}, type: $media) {{
    averageScore
  }}"""

_BATCH_QUERY_TEMPLATE = """
query ($media: MediaType) {{{fields}
}}
"""


class QueryDocument(BaseModel):
    """A GraphQL document plus its variables."""

    query: str
    variables: dict[str, Any] = Field(default_factory=dict)

    def payload(self) -> dict[str, Any]:
        """JSON body for the POST request."""
        return {"query": self.query, "variables": self.variables}


def alias_for(index: int) -> str:
    return f"{ALIAS_PREFIX}{index}"


def index_from_alias(alias: str) -> int:
    """
    Recover the request position from an alias such as ``query_12``.

    Raises:
        ValueError: If *alias* is not ``query_`` followed by a non-negative integer.
    """
    if not alias.startswith(ALIAS_PREFIX):
        raise ValueError(f"unexpected alias {alias!r}")
    suffix = alias[len(ALIAS_PREFIX):]
    if not suffix.isdecimal():
        raise ValueError(f"alias {alias!r} does not end in an index")
    return int(suffix)


def build_list_query(username: str, media_kind: MediaKind) -> QueryDocument:
    return QueryDocument(
        query=LIST_COLLECTION_QUERY,
        variables={"username": username, "media": MediaKind(media_kind).value},
    )


def build_batch_average_query(
    media_ids: Sequence[int],
    media_kind: MediaKind,
) -> QueryDocument:
    """
    Build one document that asks for the averageScore of every id in *media_ids*.

    The field for ``media_ids[i]`` is aliased ``query_{i}``. An empty sequence
    yields a document with no selections; callers should not send it.
    """
    fields = "".join(
        _AVERAGE_SCORE_FIELD.format(alias=alias_for(i), media_id=int(media_id))
        for i, media_id in enumerate(media_ids)
    )
    return QueryDocument(
        query=_BATCH_QUERY_TEMPLATE.format(fields=fields),
        variables={"media": MediaKind(media_kind).value},
    )
