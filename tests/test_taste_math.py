import math
import unittest

from pydantic import ValidationError

from tastescore.schemas.scores import ListEntry, MediaKind, ScoredList
from tastescore.services.taste_math import (
    MismatchedScoresError,
    compute_taste_ratio,
    join,
    summarize,
)


class TestJoin(unittest.TestCase):
    def test_equal_lengths_join_by_position(self) -> None:
        scored = join("Watching", [1, 2], [80, 90], [70, 85])
        self.assertEqual(scored.media_ids, [1, 2])
        self.assertEqual(scored.personal_scores, [80, 90])
        self.assertEqual(scored.global_average_scores, [70, 85])
        self.assertEqual(scored.entries[0], ListEntry(media_id=1, personal_score=80))

    def test_empty_join(self) -> None:
        scored = join("Completed", [], [], [])
        self.assertEqual(scored.entries, [])

    def test_unequal_lengths_fail(self) -> None:
        with self.assertRaises(MismatchedScoresError):
            join("Watching", [1, 2], [80, 90], [70])
        with self.assertRaises(MismatchedScoresError):
            join("Watching", [1], [80, 90], [70, 85])

    def test_scored_list_rejects_misaligned_averages(self) -> None:
        with self.assertRaises(ValidationError):
            ScoredList(
                list_name="Watching",
                entries=[ListEntry(media_id=1, personal_score=80)],
                global_average_scores=[70, 85],
            )


class TestTasteRatio(unittest.TestCase):
    def test_average_taste_is_one(self) -> None:
        scored = join("Completed", [1, 2], [20, 30], [25, 25])
        self.assertEqual(compute_taste_ratio(scored), 1.0)

    def test_zero_denominator_is_nan(self) -> None:
        scored = join("Completed", [1], [0], [0])
        with self.assertLogs("tastescore.services.taste_math", level="WARNING"):
            ratio = compute_taste_ratio(scored)
        self.assertTrue(math.isnan(ratio))

    def test_empty_list_is_nan(self) -> None:
        with self.assertLogs("tastescore.services.taste_math", level="WARNING"):
            summary = summarize(join("Watching", [], [], []))
        self.assertFalse(summary.is_defined)
        self.assertFalse(summary.is_contrarian())

    def test_summary_totals(self) -> None:
        summary = summarize(join("Watching", [1, 2], [80, 90], [70, 85]))
        self.assertEqual(summary.user_score_total, 170)
        self.assertEqual(summary.average_score_total, 155)
        self.assertEqual(summary.entry_count, 2)
        self.assertAlmostEqual(summary.ratio, 170 / 155)
        self.assertTrue(summary.is_defined)

    def test_contrarian_band(self) -> None:
        self.assertFalse(summarize(join("A", [1], [105], [100])).is_contrarian())
        self.assertTrue(summarize(join("B", [1], [120], [100])).is_contrarian())
        self.assertTrue(summarize(join("C", [1], [80], [100])).is_contrarian())
        self.assertFalse(summarize(join("D", [1], [80], [100])).is_contrarian(band=0.25))


class TestMediaKind(unittest.TestCase):
    def test_parse_is_case_insensitive(self) -> None:
        self.assertIs(MediaKind.parse("anime"), MediaKind.ANIME)
        self.assertIs(MediaKind.parse(" Manga "), MediaKind.MANGA)

    def test_parse_rejects_unknown(self) -> None:
        with self.assertRaises(ValueError):
            MediaKind.parse("novel")
