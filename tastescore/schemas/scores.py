"""
Score pipeline models: list entries, scored lists, report rows and summaries.
"""
import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MediaKind(str, Enum):
    """AniList media categories; the value is sent as the MediaType variable."""

    ANIME = "ANIME"
    MANGA = "MANGA"

    @classmethod
    def parse(cls, value: str) -> "MediaKind":
        """Case-insensitive lookup, e.g. ``"anime"`` -> ``MediaKind.ANIME``."""
        normalized = value.strip().upper()
        try:
            return cls(normalized)
        except ValueError:
            choices = "/".join(kind.value for kind in cls)
            raise ValueError(
                f"Unknown media type {value!r}. Expected one of {choices}."
            ) from None


class ListEntry(BaseModel):
    """One tracked item with the user's own score."""

    media_id: int
    personal_score: int

    model_config = ConfigDict(frozen=True)


class ScoredList(BaseModel):
    """A tracking list whose entries are aligned 1:1 with global averages."""

    list_name: str
    entries: list[ListEntry] = Field(default_factory=list)
    global_average_scores: list[int] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_alignment(self) -> "ScoredList":
        if len(self.entries) != len(self.global_average_scores):
            raise ValueError(
                f"{self.list_name!r} has {len(self.entries)} entries but "
                f"{len(self.global_average_scores)} global average scores"
            )
        return self

    @property
    def media_ids(self) -> list[int]:
        return [entry.media_id for entry in self.entries]

    @property
    def personal_scores(self) -> list[int]:
        return [entry.personal_score for entry in self.entries]


class ReportRow(BaseModel):
    """A single CSV row. Field order is the column order."""

    list_type: str
    anilist_id: int
    user_score: int
    global_avg_score: int


class TasteSummary(BaseModel):
    """Taste ratio for one list: personal score total over global average total."""

    list_type: str
    ratio: float  # NaN when average_score_total == 0
    user_score_total: int
    average_score_total: int
    entry_count: int

    @property
    def is_defined(self) -> bool:
        return not math.isnan(self.ratio)

    def is_contrarian(self, band: float = 0.1) -> bool:
        """True when the ratio falls outside 1.0 ± *band*. Undefined is never contrarian."""
        return self.is_defined and abs(self.ratio - 1.0) > band
