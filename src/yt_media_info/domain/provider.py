"""Domain models for the raw video-info provider payload.

The shape mirrors what InnerTube-style clients return: a ``basic_info`` block
and a ``streaming_data`` block holding progressive and adaptive format lists.
``services.provider`` fills these from yt-dlp; the normalizer only reads them.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class Thumbnail(BaseModel):
    """A single thumbnail image."""

    url: str
    width: Optional[int] = None
    height: Optional[int] = None


class ChannelInfo(BaseModel):
    """Owning channel summary."""

    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    thumbnails: list[Thumbnail] = Field(default_factory=list, description="Avatars, smallest first")
    verified: Optional[bool] = None


class BasicInfo(BaseModel):
    """Top-level video metadata."""

    id: Optional[str] = None
    title: Optional[str] = None
    short_description: Optional[str] = None
    duration: Optional[float] = Field(default=None, description="Duration in seconds")
    thumbnail: list[Thumbnail] = Field(default_factory=list, description="Thumbnails, smallest first")
    view_count: Optional[int] = None
    like_count: Optional[int] = None
    channel: Optional[ChannelInfo] = None


class RawStreamFormat(BaseModel):
    """One entry of the provider's progressive or adaptive format list."""

    itag: Optional[str] = Field(default=None, description="Provider format identifier")
    mime_type: Optional[str] = None
    has_video: bool = False
    has_audio: bool = False
    quality_label: Optional[str] = Field(default=None, description="Video label, e.g. 1080p")
    audio_quality: Optional[str] = Field(default=None, description="Audio tier, e.g. AUDIO_QUALITY_LOW")
    url: Optional[str] = Field(default=None, description="Direct media URL when not ciphered")
    content_length: Optional[int] = Field(default=None, description="Size in bytes")
    bitrate: Optional[float] = Field(default=None, description="Bits per second")


class StreamingData(BaseModel):
    """Progressive (muxed) and adaptive (single-track) format lists."""

    formats: list[RawStreamFormat] = Field(default_factory=list)
    adaptive_formats: list[RawStreamFormat] = Field(default_factory=list)


class ProviderPayload(BaseModel):
    """Everything the provider returned for one video id."""

    basic_info: Optional[BasicInfo] = None
    streaming_data: Optional[StreamingData] = None
