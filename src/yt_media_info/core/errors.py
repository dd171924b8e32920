"""Exception taxonomy for the media info service.

Every failure that should reach a client maps to a subclass of
:class:`MediaInfoError`. The HTTP layer reads ``status_code`` and ``message``
to build the error envelope; nothing below the router imports FastAPI.

Hierarchy
---------
MediaInfoError
├── MalformedRequest        (400)
├── MissingReference        (400)
├── UnresolvableReference   (400)
├── VideoNotFound           (404)
├── ProviderDataMissing     (500)
└── ProviderError           (500)
"""
from __future__ import annotations

from typing import ClassVar, Optional


class MediaInfoError(Exception):
    """Base exception for all client-visible failures."""

    status_code: ClassVar[int] = 500
    default_message: ClassVar[str] = "Failed to fetch video information"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message: str = message or self.default_message
        super().__init__(self.message)


# --- Reference resolution -------------------------------------------------

class MalformedRequest(MediaInfoError):
    """The request body could not be parsed."""

    status_code = 400
    default_message = "Malformed request body"


class MissingReference(MediaInfoError):
    """No video reference was supplied with the request."""

    status_code = 400
    default_message = "URL parameter is required"


class UnresolvableReference(MediaInfoError):
    """The reference matched none of the accepted URL or ID shapes."""

    status_code = 400
    default_message = "Invalid YouTube URL"


# --- Provider ---------------------------------------------------------------

class VideoNotFound(MediaInfoError):
    """The provider has no video for a well-formed id."""

    status_code = 404
    default_message = "Video not found"


class ProviderDataMissing(MediaInfoError):
    """The provider payload lacks the structure needed to build a response."""

    default_message = "Provider payload is missing basic video info"


class ProviderError(MediaInfoError):
    """The provider failed for any other reason (network, extraction, ...)."""
