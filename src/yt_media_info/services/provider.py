"""Video-info provider backed by yt-dlp.

Fetches metadata for a single video id and reshapes yt-dlp's flat info dict
into a :class:`ProviderPayload` with ``basic_info`` and ``streaming_data``.
"""
from __future__ import annotations

import logging
from typing import Any, Final, Optional

from yt_dlp import YoutubeDL
from yt_dlp.utils import DownloadError

from yt_media_info.core.config import Settings
from yt_media_info.core.errors import ProviderError, VideoNotFound
from yt_media_info.domain.provider import (
    BasicInfo,
    ChannelInfo,
    ProviderPayload,
    RawStreamFormat,
    StreamingData,
    Thumbnail,
)

logger = logging.getLogger(__name__)

WATCH_URL: Final[str] = "https://www.youtube.com/watch?v={video_id}"

# yt-dlp phrases meaning "there is no such (public) video"
_NOT_FOUND_MARKERS: Final[tuple[str, ...]] = (
    "video unavailable",
    "this video is unavailable",
    "video is not available",
    "private video",
    "has been removed",
    "does not exist",
)

_AUDIO_NOTES: Final[dict[str, str]] = {
    "ultralow": "AUDIO_QUALITY_ULTRALOW",
    "low": "AUDIO_QUALITY_LOW",
    "medium": "AUDIO_QUALITY_MEDIUM",
    "high": "AUDIO_QUALITY_HIGH",
}


def _has_track(codec: Optional[str]) -> bool:
    """yt-dlp uses the literal ``"none"`` for a missing track."""

    return bool(codec) and codec != "none"


def _audio_quality(fmt: dict[str, Any]) -> Optional[str]:
    """Derive an InnerTube-style audio tier from the format note or ``abr``."""

    note: str = str(fmt.get("format_note") or "").lower()
    for word in note.replace(",", " ").split():
        if word in _AUDIO_NOTES:
            return _AUDIO_NOTES[word]
    abr = fmt.get("abr")
    if isinstance(abr, (int, float)) and abr > 0:
        return "AUDIO_QUALITY_LOW" if abr < 64 else "AUDIO_QUALITY_MEDIUM"
    return None


def _to_stream_format(fmt: dict[str, Any]) -> RawStreamFormat:
    """Normalize a yt-dlp format dict to RawStreamFormat.

    Notes
    -----
    - ``quality_label`` is rebuilt from ``height`` so it always reads ``"<N>p"``.
    - ``tbr`` is in kbit/s; ``bitrate`` is stored in bit/s.
    """

    has_video: bool = _has_track(fmt.get("vcodec"))
    has_audio: bool = _has_track(fmt.get("acodec"))
    height: Optional[int] = fmt.get("height")
    tbr = fmt.get("tbr")
    size = fmt.get("filesize") or fmt.get("filesize_approx")

    return RawStreamFormat(
        itag=str(fmt.get("format_id", "")) or None,
        mime_type=f"{'video' if has_video else 'audio'}/{fmt['ext']}" if fmt.get("ext") else None,
        has_video=has_video,
        has_audio=has_audio,
        quality_label=f"{height}p" if has_video and height else None,
        audio_quality=_audio_quality(fmt) if has_audio and not has_video else None,
        url=fmt.get("url"),
        content_length=int(size) if size else None,
        bitrate=float(tbr) * 1000 if isinstance(tbr, (int, float)) else None,
    )


def _to_thumbnails(raw: list[dict[str, Any]]) -> list[Thumbnail]:
    """Order thumbnails so the preferred (largest) one comes last."""

    usable = [t for t in raw if t.get("url")]
    usable.sort(key=lambda t: t.get("preference") or 0)
    return [Thumbnail(url=t["url"], width=t.get("width"), height=t.get("height")) for t in usable]


def to_payload(info: dict[str, Any]) -> ProviderPayload:
    """Reshape a yt-dlp info dict into a ProviderPayload.

    Notes
    -----
    - Muxed formats (video and audio track) go to ``formats``; single-track ones to
      ``adaptive_formats``. Storyboards and other trackless entries are skipped.
    - ``quality_label`` is rebuilt from ``height`` without a frame-rate suffix, so a
      60fps 1080p stream is labelled ``1080p`` (``FHD``), not ``1080p60``.
    - yt-dlp does not expose channel avatars or channel descriptions for a video.
    """

    progressive: list[RawStreamFormat] = []
    adaptive: list[RawStreamFormat] = []
    for raw in info.get("formats") or []:
        fmt: RawStreamFormat = _to_stream_format(raw)
        if fmt.has_video and fmt.has_audio:
            progressive.append(fmt)
        elif fmt.has_video or fmt.has_audio:
            adaptive.append(fmt)

    duration = info.get("duration")
    channel: ChannelInfo = ChannelInfo(
        id=info.get("channel_id"),
        name=info.get("channel") or info.get("uploader"),
        url=info.get("channel_url") or info.get("uploader_url"),
        verified=info.get("channel_is_verified"),
    )
    basic: BasicInfo = BasicInfo(
        id=info.get("id"),
        title=info.get("title"),
        short_description=info.get("description"),
        duration=float(duration) if isinstance(duration, (int, float)) else None,
        thumbnail=_to_thumbnails(info.get("thumbnails") or []),
        view_count=info.get("view_count"),
        like_count=info.get("like_count"),
        channel=channel,
    )
    return ProviderPayload(
        basic_info=basic,
        streaming_data=StreamingData(formats=progressive, adaptive_formats=adaptive),
    )


def fetch_video_info(video_id: str, settings: Settings) -> ProviderPayload:
    """Fetch metadata and formats for one video id.

    Parameters
    ----------
    video_id: str
        A resolved 11-character id.
    settings: Settings
        Supplies the provider socket timeout.

    Returns
    -------
    ProviderPayload
        The reshaped provider response.

    Raises
    ------
    VideoNotFound
        If yt-dlp returns nothing or reports the video as unavailable.
    ProviderError
        For any other extraction failure.
    """

    ydl_opts: dict[str, Any] = {
        "quiet": True,
        "no_warnings": True,
        "noplaylist": True,
        "skip_download": True,
        "socket_timeout": settings.provider_timeout,
    }

    try:
        with YoutubeDL(ydl_opts) as ydl:
            info: Optional[dict[str, Any]] = ydl.extract_info(WATCH_URL.format(video_id=video_id), download=False)
    except DownloadError as ex:
        message: str = str(ex)
        if any(marker in message.lower() for marker in _NOT_FOUND_MARKERS):
            logger.info("Provider reports video unavailable", extra={"video_id": video_id})
            raise VideoNotFound() from ex
        logger.warning("Provider extraction failed", extra={"video_id": video_id}, exc_info=True)
        raise ProviderError(message.removeprefix("ERROR: ")) from ex

    if not info:
        raise VideoNotFound()
    return to_payload(info)
