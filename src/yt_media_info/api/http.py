"""HTTP API routes for the YouTube media info service."""
from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from yt_media_info.core.config import Settings, get_settings
from yt_media_info.core.errors import MalformedRequest, MediaInfoError, UnresolvableReference
from yt_media_info.domain.media import ApiError, ErrorDocument, ResolveRequest, ResponseDocument
from yt_media_info.domain.provider import ProviderPayload
from yt_media_info.services.normalizer import normalize
from yt_media_info.services.provider import fetch_video_info
from yt_media_info.services.resolver import resolve_reference

logger = logging.getLogger(__name__)

router: APIRouter = APIRouter(prefix="/youtube", tags=["youtube"])

_ERROR_RESPONSES: dict[int | str, dict] = {
    400: {"model": ErrorDocument, "description": "Missing or invalid reference"},
    404: {"model": ErrorDocument, "description": "Video not found"},
    500: {"model": ErrorDocument, "description": "Provider or normalization failure"},
}


def error_response(status_code: int, message: str, settings: Settings) -> JSONResponse:
    """Render the shared ``{"api": {"status": "ERROR", ...}}`` envelope."""

    body: ErrorDocument = ErrorDocument(api=ApiError(service=settings.service_name, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump())


def describe_video(reference: Optional[str]) -> ResponseDocument | JSONResponse:
    """Resolve, fetch and normalize one reference.

    Notes
    -----
    - A single provider call per request; failures surface immediately.
    - Either a complete document or an error envelope is returned, never both.
    """

    settings: Settings = get_settings()
    try:
        video_id: str = resolve_reference(reference)
        payload: ProviderPayload = fetch_video_info(video_id, settings)
        return normalize(payload, video_id, reference or "", service=settings.service_name)
    except MediaInfoError as err:
        if err.status_code >= 500:
            logger.error("Request failed: %s", err.message, exc_info=True)
        return error_response(err.status_code, err.message, settings)
    except Exception as ex:  # noqa: BLE001 - every failure must map to the envelope
        logger.exception("Unexpected failure while describing video")
        return error_response(500, str(ex) or "Failed to fetch video information", settings)


POSTED_FORMS: frozenset[str] = frozenset({"application/x-www-form-urlencoded", "multipart/form-data"})


async def read_reference(request: Request) -> Optional[str]:
    """Pull the ``url`` field out of a JSON or form body.

    Notes
    -----
    - Falls back to the ``url`` query parameter when the body is empty or has no ``url``.
    - Bodies are parsed here rather than by FastAPI so that every rejection
      uses the error envelope instead of a 422 validation payload.

    Raises
    ------
    MalformedRequest
        If a JSON body does not decode to an object.
    UnresolvableReference
        If ``url`` is present but not a string.
    """

    fallback: Optional[str] = request.query_params.get("url")
    content_type: str = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type in POSTED_FORMS:
        form = await request.form()
        value = form.get("url")
        if value is not None and not isinstance(value, str):
            raise UnresolvableReference()
        return value or fallback

    if not (await request.body()).strip():
        return fallback
    try:
        data: Any = await request.json()
    except ValueError as ex:
        raise MalformedRequest() from ex
    if not isinstance(data, dict):
        raise MalformedRequest()
    try:
        body: ResolveRequest = ResolveRequest.model_validate(data)
    except ValidationError as ex:
        raise UnresolvableReference() from ex
    return body.url or fallback


@router.post(
    "",
    response_model=ResponseDocument,
    responses=_ERROR_RESPONSES,
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {"schema": ResolveRequest.model_json_schema()},
                "application/x-www-form-urlencoded": {"schema": ResolveRequest.model_json_schema()},
            }
        }
    },
)
async def post_youtube(request: Request) -> ResponseDocument | JSONResponse:
    """Describe a video given ``url`` in a JSON or form body.

    Notes
    -----
    - The body field wins over the ``url`` query parameter when both are sent.
    - The blocking yt-dlp call runs in the threadpool.
    """

    try:
        reference: Optional[str] = await read_reference(request)
    except MediaInfoError as err:
        return error_response(err.status_code, err.message, get_settings())
    return await run_in_threadpool(describe_video, reference)


@router.get("", response_model=ResponseDocument, responses=_ERROR_RESPONSES)
def get_youtube(
    url: Optional[str] = Query(default=None, description="YouTube URL or bare video id"),
) -> ResponseDocument | JSONResponse:
    """Describe a video given ``?url=...``."""

    return describe_video(url)
