"""Unit tests for reference resolution."""
from __future__ import annotations

import unittest

from yt_media_info.core.errors import MissingReference, UnresolvableReference
from yt_media_info.services.resolver import extract_video_id, resolve_reference

VIDEO_ID: str = "dQw4w9WgXcQ"


class TestExtractVideoId(unittest.TestCase):
    """Tests for the pure id extractor."""

    def test_accepted_url_shapes(self) -> None:
        """Every recognized URL shape yields the embedded id."""
        urls: list[str] = [
            f"https://www.youtube.com/watch?v={VIDEO_ID}",
            f"https://youtube.com/watch?v={VIDEO_ID}&t=42s",
            f"https://m.youtube.com/watch?v={VIDEO_ID}",
            f"https://youtu.be/{VIDEO_ID}",
            f"https://youtu.be/{VIDEO_ID}?si=abcdef",
            f"https://www.youtube.com/embed/{VIDEO_ID}",
            f"http://www.youtube.com/v/{VIDEO_ID}?version=3",
            f"youtube.com/watch?v={VIDEO_ID}",
        ]
        for url in urls:
            with self.subTest(url=url):
                self.assertEqual(extract_video_id(url), VIDEO_ID)

    def test_bare_id_is_returned_unchanged(self) -> None:
        """An input that is exactly 11 id characters is itself the id."""
        for raw in (VIDEO_ID, "a-b_c-d_e-f", "___________", "01234567890"):
            with self.subTest(raw=raw):
                self.assertEqual(extract_video_id(raw), raw)

    def test_unrecognized_inputs(self) -> None:
        """Anything else is not found."""
        for raw in (
            "not a url",
            "",
            "dQw4w9WgXc",
            "dQw4w9WgXcQQ",
            f" {VIDEO_ID}",
            f"{VIDEO_ID}\n",
            f"{VIDEO_ID} ",
            "dQw4w9WgXc!",
            f"https://vimeo.com/{VIDEO_ID}",
            "https://www.youtube.com/watch?v=short",
            f"https://www.youtube.com/shorts/{VIDEO_ID}",
        ):
            with self.subTest(raw=raw):
                self.assertIsNone(extract_video_id(raw))

    def test_idempotent(self) -> None:
        """Resolving the same input twice gives the same answer."""
        url: str = f"https://youtu.be/{VIDEO_ID}"
        self.assertEqual(extract_video_id(url), extract_video_id(url))


class TestResolveReference(unittest.TestCase):
    """Tests for the request-boundary resolver."""

    def test_missing_reference(self) -> None:
        """None and empty references raise MissingReference."""
        for raw in (None, ""):
            with self.subTest(raw=raw):
                with self.assertRaises(MissingReference) as ctx:
                    resolve_reference(raw)
                self.assertEqual(ctx.exception.status_code, 400)
                self.assertEqual(ctx.exception.message, "URL parameter is required")

    def test_unresolvable_reference(self) -> None:
        """A non-matching reference raises UnresolvableReference."""
        with self.assertRaises(UnresolvableReference) as ctx:
            resolve_reference("not a url")
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.message, "Invalid YouTube URL")

    def test_whitespace_is_not_stripped(self) -> None:
        """Blank or padded references are present but unresolvable."""
        for raw in ("   ", f" {VIDEO_ID}", f"{VIDEO_ID}\n"):
            with self.subTest(raw=raw):
                with self.assertRaises(UnresolvableReference):
                    resolve_reference(raw)

    def test_resolves_url(self) -> None:
        """A valid URL resolves to its id."""
        self.assertEqual(resolve_reference(f"https://www.youtube.com/embed/{VIDEO_ID}"), VIDEO_ID)


if __name__ == "__main__":
    unittest.main()
