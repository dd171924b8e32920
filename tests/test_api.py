"""HTTP tests for the /youtube endpoint and system routes.

The provider is patched at the router so no network access is needed.
"""
from __future__ import annotations

import sys
import unittest
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

# Ensure src/ is importable before importing the app
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if str(_SRC_PATH) not in sys.path:
    sys.path.insert(0, str(_SRC_PATH))

from fastapi.testclient import TestClient  # type: ignore  # imported after sys.path tweak
from yt_media_info.core.config import get_settings  # type: ignore
from yt_media_info.core.errors import ProviderError, VideoNotFound  # type: ignore
from yt_media_info.domain.provider import (  # type: ignore
    BasicInfo,
    ProviderPayload,
    RawStreamFormat,
    StreamingData,
)
from yt_media_info.main import create_app  # type: ignore

VIDEO_ID: str = "dQw4w9WgXcQ"
WATCH_URL: str = f"https://www.youtube.com/watch?v={VIDEO_ID}"
FETCH: str = "yt_media_info.api.http.fetch_video_info"

PAYLOAD: ProviderPayload = ProviderPayload(
    basic_info=BasicInfo(title="Clip", short_description="desc", duration=65, view_count=1500),
    streaming_data=StreamingData(
        formats=[RawStreamFormat(has_video=True, has_audio=True, quality_label="360p", url="https://cdn/18")],
        adaptive_formats=[
            RawStreamFormat(has_video=True, quality_label="1080p", content_length=1024),
            RawStreamFormat(has_video=False, has_audio=True, audio_quality="AUDIO_QUALITY_MEDIUM"),
        ],
    ),
)


class TestYoutubeEndpoint(unittest.TestCase):
    """Tests for POST/GET /youtube."""

    def setUp(self) -> None:
        get_settings.cache_clear()  # type: ignore[attr-defined]
        self.client: TestClient = TestClient(create_app())

    def tearDown(self) -> None:
        self.client.close()

    def _assert_error(self, resp: Any, status_code: int, message: str) -> None:
        self.assertEqual(resp.status_code, status_code, msg=resp.text)
        self.assertEqual(resp.json(), {"api": {"service": "YouTube", "status": "ERROR", "message": message}})

    @patch(FETCH, return_value=PAYLOAD)
    def test_post_returns_document(self, fetch: MagicMock) -> None:
        """POST with a JSON body returns the normalized document."""
        resp = self.client.post("/youtube", json={"url": WATCH_URL})
        self.assertEqual(resp.status_code, 200, msg=resp.text)
        api: dict[str, Any] = resp.json()["api"]
        self.assertEqual(fetch.call_args.args[0], VIDEO_ID)
        self.assertEqual(api["status"], "OK")
        self.assertEqual(api["service"], "YouTube")
        self.assertEqual(api["id"], VIDEO_ID)
        self.assertEqual(api["permanentLink"], WATCH_URL)
        self.assertEqual(api["previewUrl"], "https://cdn/18")
        self.assertEqual(api["mediaStats"]["viewsCount"], "1,500")
        items: list[dict[str, Any]] = api["mediaItems"]
        self.assertEqual([i["name"] for i in items], ["Media #001", "Media #002", "Media #003"])
        self.assertEqual([i["mediaQuality"] for i in items], ["SD", "FHD", "128K"])
        self.assertIs(items[2]["mediaRes"], False)
        self.assertEqual(items[1]["mediaFileSize"], "1 KB")
        self.assertIsNone(api["userInfo"]["accountCountry"])

    @patch(FETCH, return_value=PAYLOAD)
    def test_get_with_query(self, fetch: MagicMock) -> None:
        """GET ?url= accepts a bare id."""
        resp = self.client.get("/youtube", params={"url": VIDEO_ID})
        self.assertEqual(resp.status_code, 200, msg=resp.text)
        self.assertEqual(resp.json()["api"]["permanentLink"], VIDEO_ID)
        fetch.assert_called_once()

    @patch(FETCH, return_value=PAYLOAD)
    def test_post_with_query_fallback(self, _: MagicMock) -> None:
        """POST without a body falls back to the url query parameter."""
        resp = self.client.post("/youtube", params={"url": f"https://youtu.be/{VIDEO_ID}"})
        self.assertEqual(resp.status_code, 200, msg=resp.text)

    @patch(FETCH)
    def test_missing_url(self, fetch: MagicMock) -> None:
        """No reference at all is a 400 without calling the provider."""
        self._assert_error(self.client.post("/youtube", json={}), 400, "URL parameter is required")
        self._assert_error(self.client.get("/youtube"), 400, "URL parameter is required")
        fetch.assert_not_called()

    @patch(FETCH)
    def test_invalid_url(self, fetch: MagicMock) -> None:
        """An unresolvable reference is a 400 without calling the provider."""
        self._assert_error(self.client.post("/youtube", json={"url": "not a url"}), 400, "Invalid YouTube URL")
        fetch.assert_not_called()

    @patch(FETCH, return_value=PAYLOAD)
    def test_post_form_body(self, fetch: MagicMock) -> None:
        """A form-encoded body is accepted like a JSON one."""
        resp = self.client.post("/youtube", data={"url": VIDEO_ID})
        self.assertEqual(resp.status_code, 200, msg=resp.text)
        self.assertEqual(resp.json()["api"]["id"], VIDEO_ID)
        self.assertEqual(fetch.call_args.args[0], VIDEO_ID)

    @patch(FETCH)
    def test_form_body_without_url(self, fetch: MagicMock) -> None:
        """A form body lacking url is a missing reference."""
        self._assert_error(self.client.post("/youtube", data={"other": "x"}), 400, "URL parameter is required")
        fetch.assert_not_called()

    @patch(FETCH)
    def test_non_string_url(self, fetch: MagicMock) -> None:
        """A non-string url field gets the envelope, not a validation payload."""
        self._assert_error(self.client.post("/youtube", json={"url": 123}), 400, "Invalid YouTube URL")
        fetch.assert_not_called()

    @patch(FETCH)
    def test_malformed_json(self, fetch: MagicMock) -> None:
        """Undecodable or non-object JSON bodies are rejected with the envelope."""
        headers: dict[str, str] = {"Content-Type": "application/json"}
        for body in (b"{bad", b'["https://youtu.be/dQw4w9WgXcQ"]'):
            with self.subTest(body=body):
                resp = self.client.post("/youtube", content=body, headers=headers)
                self._assert_error(resp, 400, "Malformed request body")
        fetch.assert_not_called()

    @patch(FETCH, side_effect=VideoNotFound())
    def test_video_not_found(self, _: MagicMock) -> None:
        """Provider reporting no video yields a 404."""
        self._assert_error(self.client.post("/youtube", json={"url": WATCH_URL}), 404, "Video not found")

    @patch(FETCH, side_effect=ProviderError("Unable to download webpage"))
    def test_provider_error(self, _: MagicMock) -> None:
        """Provider failures surface as 500 with their message."""
        self._assert_error(self.client.post("/youtube", json={"url": WATCH_URL}), 500, "Unable to download webpage")

    @patch(FETCH, side_effect=RuntimeError("boom"))
    def test_unexpected_error(self, _: MagicMock) -> None:
        """Unexpected exceptions still produce the error envelope."""
        self._assert_error(self.client.get("/youtube", params={"url": WATCH_URL}), 500, "boom")

    @patch(FETCH, return_value=ProviderPayload())
    def test_malformed_payload(self, _: MagicMock) -> None:
        """A payload without basic info is a 500, never a partial document."""
        self._assert_error(
            self.client.post("/youtube", json={"url": WATCH_URL}),
            500,
            "Provider payload is missing basic video info",
        )


class TestSystemRoutes(unittest.TestCase):
    """Tests for / and /status."""

    def setUp(self) -> None:
        get_settings.cache_clear()  # type: ignore[attr-defined]
        self.client: TestClient = TestClient(create_app())

    def tearDown(self) -> None:
        self.client.close()

    def test_index_lists_endpoints(self) -> None:
        """GET / describes the available endpoints."""
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["endpoints"], {"youtube": "POST /youtube", "status": "GET /status"})

    def test_status(self) -> None:
        """GET /status returns OK with a timestamp."""
        resp = self.client.get("/status")
        self.assertEqual(resp.status_code, 200)
        data: dict[str, Any] = resp.json()
        self.assertEqual(data["status"], "OK")
        self.assertEqual(data["service"], "YouTube API")
        self.assertTrue(data["timestamp"])

    def test_cors_headers(self) -> None:
        """Cross-origin requests are allowed."""
        resp = self.client.get("/status", headers={"Origin": "https://example.com"})
        self.assertEqual(resp.headers.get("access-control-allow-origin"), "*")


if __name__ == "__main__":
    unittest.main()
