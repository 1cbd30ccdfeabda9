import io
import unittest
from contextlib import redirect_stderr
from unittest.mock import patch

from tastescore.cli import StartupError, main, parse_args
from tastescore.schemas.scores import MediaKind
from tastescore.services.anilist_client import AniListTransportError
from tastescore.services.extractors import ShapeError


class TestParseArgs(unittest.TestCase):
    def test_media_type_is_upper_cased(self) -> None:
        username, media_kind, output_dir = parse_args(["someone", "manga", "--output-dir", "out"])
        self.assertEqual(username, "someone")
        self.assertIs(media_kind, MediaKind.MANGA)
        self.assertEqual(output_dir, "out")

    def test_missing_username(self) -> None:
        with self.assertRaisesRegex(StartupError, "No Anilist username provided"):
            parse_args([])

    def test_missing_media_type(self) -> None:
        with self.assertRaisesRegex(StartupError, r"No media type provided. \(ANIME/MANGA\)"):
            parse_args(["someone"])

    def test_unknown_media_type(self) -> None:
        with self.assertRaisesRegex(StartupError, "novel"):
            parse_args(["someone", "novel"])


class TestMain(unittest.TestCase):
    def test_startup_error_exits_before_network(self) -> None:
        stderr = io.StringIO()
        with patch("tastescore.cli.run") as run_mock, redirect_stderr(stderr):
            status = main(["someone"])

        self.assertEqual(status, 1)
        run_mock.assert_not_called()
        self.assertIn("No media type provided", stderr.getvalue())

    def test_successful_run(self) -> None:
        with patch("tastescore.cli.run", return_value=[]) as run_mock:
            status = main(["someone", "Anime", "--output-dir", "reports"])

        self.assertEqual(status, 0)
        run_mock.assert_called_once_with("someone", MediaKind.ANIME, "reports")

    def test_fatal_pipeline_errors_exit_non_zero(self) -> None:
        for error in (AniListTransportError("down"), ShapeError("Media lists not found")):
            with self.subTest(error=error):
                stderr = io.StringIO()
                with patch("tastescore.cli.run", side_effect=error), redirect_stderr(stderr):
                    status = main(["someone", "ANIME"])
                self.assertEqual(status, 1)
                self.assertIn(str(error), stderr.getvalue())
