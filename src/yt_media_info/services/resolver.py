"""Resolve user-supplied YouTube references into canonical video ids."""
from __future__ import annotations

import logging
import re
from typing import Final, Optional

from yt_media_info.core.errors import MissingReference, UnresolvableReference

logger = logging.getLogger(__name__)

_URL_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/v/)([a-zA-Z0-9_-]{11})"
)
_BARE_ID: Final[re.Pattern[str]] = re.compile(r"[a-zA-Z0-9_-]{11}")


def extract_video_id(reference: str) -> Optional[str]:
    """Extract the 11-character video id from a URL or bare id.

    Notes
    -----
    - URL shapes are searched anywhere in the input (``m.``/``www.`` hosts and
      extra query parameters are fine); the bare id must be the whole input,
      with no surrounding whitespace or trailing newline.
    - Returns ``None`` rather than raising when nothing matches.
    """

    match = _URL_PATTERN.search(reference)
    if match:
        return match.group(1)
    if _BARE_ID.fullmatch(reference):
        return reference
    return None


def resolve_reference(reference: Optional[str]) -> str:
    """Resolve a request's ``url`` parameter or raise a client error.

    Raises
    ------
    MissingReference
        If ``reference`` is ``None`` or empty. Whitespace-only input is
        present but unresolvable.
    UnresolvableReference
        If no accepted shape matches.
    """

    if not reference:
        raise MissingReference()

    video_id: Optional[str] = extract_video_id(reference)
    if video_id is None:
        logger.info("Rejected unresolvable reference", extra={"reference": reference})
        raise UnresolvableReference()
    return video_id
