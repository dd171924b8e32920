"""Normalize a provider payload into the client-facing response document."""
from __future__ import annotations

import random
import time
from typing import Final, Optional

from yt_media_info.core.errors import ProviderDataMissing
from yt_media_info.domain.media import (
    ApiResult,
    MediaItem,
    MediaStats,
    ResponseDocument,
    UserInfo,
)
from yt_media_info.domain.provider import (
    BasicInfo,
    ChannelInfo,
    ProviderPayload,
    RawStreamFormat,
    Thumbnail,
)

FALLBACK_MEDIA_HOST: Final[str] = "https://s11.ytcontent.net/v3"

VIDEO_QUALITY: Final[dict[str, str]] = {
    "1080p": "FHD",
    "720p": "HD",
    "480p": "SD",
    "360p": "SD",
    "240p": "SD",
    "144p": "SD",
}
AUDIO_QUALITY: Final[dict[str, str]] = {
    "AUDIO_QUALITY_MEDIUM": "128K",
    "AUDIO_QUALITY_LOW": "48K",
}
_SIZE_UNITS: Final[tuple[str, ...]] = ("Bytes", "KB", "MB", "GB")


def format_duration(seconds: float) -> str:
    """Format seconds as ``MM:SS``; minutes keep counting past an hour."""

    total: int = int(seconds)
    return f"{total // 60:02d}:{total % 60:02d}"


def format_file_size(size: float) -> str:
    """Format a byte count with the largest fitting unit up to GB.

    Notes
    -----
    - Up to two decimals, trailing zeros stripped: ``1024 -> "1 KB"``,
      ``1500000 -> "1.43 MB"``.
    - Sizes under one byte stay in ``Bytes``; anything past GB stays in ``GB``.
    """

    if size <= 0:
        return "0 Bytes"
    # floor(log1024(size)) without float drift at exact powers of 1024
    index: int = 0
    while size >= 1024 ** (index + 1) and index < len(_SIZE_UNITS) - 1:
        index += 1
    value: str = f"{size / 1024 ** index:.2f}".rstrip("0").rstrip(".") or "0"
    return f"{value} {_SIZE_UNITS[index]}"


def video_resolution(label: str) -> str:
    """Build the legacy ``mediaRes`` string, e.g. ``"1080p" -> "1080x1080"``."""

    return label.replace("p", "x", 1) + label.replace("p", "", 1)


def _media_id(offset: int = 0) -> int:
    return int(time.time() * 1000) + random.randrange(10000) + offset


def _estimate_size(fmt: RawStreamFormat, duration: float) -> float:
    if fmt.content_length:
        return fmt.content_length
    if fmt.bitrate:
        return fmt.bitrate * duration / 8
    return 0


def _last_url(thumbnails: list[Thumbnail]) -> Optional[str]:
    return thumbnails[-1].url if thumbnails else None


def _media_name(position: int) -> str:
    return f"Media #{position:03d}"


def split_formats(payload: ProviderPayload) -> tuple[list[RawStreamFormat], list[RawStreamFormat]]:
    """Partition progressive + adaptive formats into video and audio lists.

    Notes
    -----
    - Progressive formats come first, provider order is kept within each list.
    - Video needs a video track and a quality label; audio needs no video track
      and an audio quality tier. Everything else is dropped.
    """

    streaming = payload.streaming_data
    combined: list[RawStreamFormat] = (
        [*streaming.formats, *streaming.adaptive_formats] if streaming is not None else []
    )
    video: list[RawStreamFormat] = [f for f in combined if f.has_video and f.quality_label]
    audio: list[RawStreamFormat] = [f for f in combined if not f.has_video and f.audio_quality]
    return video, audio


def _build_user_info(channel: Optional[ChannelInfo]) -> UserInfo:
    if channel is None:
        return UserInfo()
    return UserInfo(
        name=channel.name or "Unknown Channel",
        userBio=channel.description or "",
        username=channel.url or "",
        userId=channel.id or "",
        userAvatar=_last_url(channel.thumbnails) or "",
        internalUrl=channel.url or "",
        isVerified=bool(channel.verified),
    )


def _build_stats(info: BasicInfo, media_count: int) -> MediaStats:
    return MediaStats(
        mediaCount=str(media_count),
        likesCount=str(info.like_count) if info.like_count is not None else False,
        viewsCount=f"{info.view_count:,}" if info.view_count is not None else "0",
    )


def normalize(
    payload: ProviderPayload,
    video_id: str,
    original_reference: str,
    service: str = "YouTube",
) -> ResponseDocument:
    """Build the response document for ``video_id`` from a provider payload.

    Parameters
    ----------
    payload: ProviderPayload
        Raw metadata and stream formats as returned by the provider.
    video_id: str
        The resolved 11-character id.
    original_reference: str
        What the client sent; echoed back as ``permanentLink`` when non-empty.
    service: str
        Value for ``api.service``.

    Returns
    -------
    ResponseDocument
        Video summary, owner summary, stats, and video items followed by audio items.

    Raises
    ------
    ProviderDataMissing
        If the payload carries no ``basic_info``.
    """

    info: Optional[BasicInfo] = payload.basic_info
    if info is None:
        raise ProviderDataMissing()

    duration: float = info.duration or 0
    thumbnail: str = _last_url(info.thumbnail) or f"https://i.ytimg.com/vi/{video_id}/sddefault.jpg"
    mm_ss: str = format_duration(duration)
    video_formats, audio_formats = split_formats(payload)

    items: list[MediaItem] = []
    for index, fmt in enumerate(video_formats):
        label: str = fmt.quality_label or ""
        media_id: int = _media_id()
        items.append(
            MediaItem(
                type="Video",
                name=_media_name(index + 1),
                mediaId=media_id,
                mediaUrl=fmt.url or f"{FALLBACK_MEDIA_HOST}/videoProcess/{video_id}/{media_id}/{label}",
                mediaPreviewUrl=fmt.url or "",
                mediaThumbnail=thumbnail,
                mediaRes=video_resolution(label),
                mediaQuality=VIDEO_QUALITY.get(label, "SD"),
                mediaDuration=mm_ss,
                mediaExtension="MP4",
                mediaFileSize=format_file_size(_estimate_size(fmt, duration)),
                mediaTask="merge" if index % 2 == 0 else "download",
            )
        )

    for index, fmt in enumerate(audio_formats):
        tier: str = AUDIO_QUALITY.get(fmt.audio_quality or "", "128K")
        media_id = _media_id(offset=1000)
        items.append(
            MediaItem(
                type="Audio",
                name=_media_name(len(video_formats) + index + 1),
                mediaId=media_id,
                mediaUrl=fmt.url or f"{FALLBACK_MEDIA_HOST}/audioProcess/{video_id}/{media_id}/{tier.lower()}",
                mediaPreviewUrl=fmt.url or "",
                mediaThumbnail=thumbnail,
                mediaRes=False,
                mediaQuality=tier,
                mediaDuration=mm_ss,
                mediaExtension="M4A",
                mediaFileSize=format_file_size(_estimate_size(fmt, duration)),
                mediaTask="download",
            )
        )

    first_video: Optional[MediaItem] = items[0] if video_formats else None
    result: ApiResult = ApiResult(
        service=service,
        id=video_id,
        title=info.title or "",
        description=info.short_description or "",
        previewUrl=first_video.mediaPreviewUrl if first_video else "",
        imagePreviewUrl=thumbnail,
        permanentLink=original_reference or f"https://youtu.be/{video_id}",
        userInfo=_build_user_info(info.channel),
        mediaStats=_build_stats(info, len(items)),
        mediaItems=items,
    )
    return ResponseDocument(api=result)
