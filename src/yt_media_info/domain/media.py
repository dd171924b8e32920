"""Domain models for the normalized response document.

Field names are camelCase because they are the wire format consumed by
existing clients. Fields that the provider cannot supply are always present
and carry an explicit sentinel (``False``, ``None`` or ``""``) instead of
being omitted.
"""
from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

MediaType = Literal["Video", "Audio"]
MediaTask = Literal["merge", "download"]


class MediaItem(BaseModel):
    """One downloadable variant exposed to the client."""

    type: MediaType
    name: str = Field(description="Sequential display name, e.g. Media #001")
    mediaId: int = Field(description="Opaque, non-durable token used for fallback URLs")
    mediaUrl: str
    mediaPreviewUrl: str = ""
    mediaThumbnail: str
    mediaRes: Union[str, Literal[False]] = Field(description="Resolution string for video, false for audio")
    mediaQuality: str
    mediaDuration: str = Field(description="MM:SS")
    mediaExtension: Literal["MP4", "M4A"]
    mediaFileSize: str
    mediaTask: MediaTask


class UserInfo(BaseModel):
    """Owning channel summary."""

    name: str = "Unknown Channel"
    userCategory: Literal[False] = False
    userBio: str = ""
    username: str = ""
    userId: str = ""
    userAvatar: str = ""
    userPhone: Literal[False] = False
    userEmail: Literal[False] = False
    internalUrl: str = ""
    externalUrl: str = "https://support.google.com/youtube?p=sub_to_oac"
    accountCountry: None = None
    dateJoined: Literal[False] = False
    isVerified: bool = False
    dateVerified: Literal[False] = False


class MediaStats(BaseModel):
    """Aggregate counters; the ones YouTube does not expose stay false."""

    mediaCount: str = "0"
    followersCount: Literal[False] = False
    followingCount: Literal[False] = False
    likesCount: Union[str, Literal[False]] = False
    commentsCount: Literal[False] = False
    favouritesCount: Literal[False] = False
    sharesCount: Literal[False] = False
    viewsCount: str = "0"
    downloadsCount: Literal[False] = False


class ApiResult(BaseModel):
    """Successful ``api`` body."""

    service: str
    status: Literal["OK"] = "OK"
    message: str = "Processing started."
    id: str
    title: str = ""
    description: str = ""
    previewUrl: str = ""
    imagePreviewUrl: str
    permanentLink: str
    userInfo: UserInfo = Field(default_factory=UserInfo)
    mediaStats: MediaStats = Field(default_factory=MediaStats)
    mediaItems: list[MediaItem] = Field(default_factory=list)


class ResponseDocument(BaseModel):
    """Success envelope: ``{"api": {...}}``."""

    api: ApiResult


class ApiError(BaseModel):
    """Error ``api`` body."""

    service: str
    status: Literal["ERROR"] = "ERROR"
    message: str


class ErrorDocument(BaseModel):
    """Error envelope shared by every non-200 response."""

    api: ApiError


class ResolveRequest(BaseModel):
    """Request body for ``POST /youtube``."""

    url: Optional[str] = Field(default=None, description="YouTube URL or bare video id")
