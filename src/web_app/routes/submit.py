from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse

from config import config
from errors import MalformedRequest, PayloadTooLarge, SubmissionWriteError
from form_decoder import decode, parse_boundary
from saver import store_submission

router = APIRouter()

logger = logging.getLogger(__name__)

ALLOWED_METHODS = "POST, OPTIONS"


def _check_size(size: int) -> None:
    if size > config.max_body_bytes:
        raise PayloadTooLarge(size, config.max_body_bytes)


async def _read_body(request: Request) -> bytes:
    """Read the request body, stopping as soon as it exceeds ``max_body_bytes``."""
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit():
        _check_size(int(declared))
    chunks = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        _check_size(received)
        chunks.append(chunk)
    return b"".join(chunks)


@router.options("/submit")
async def submit_preflight() -> Response:
    """Ответ на CORS preflight."""
    return Response(
        status_code=204,
        headers={
            "Access-Control-Allow-Methods": ALLOWED_METHODS,
            "Access-Control-Allow-Headers": "Content-Type",
        },
    )


@router.api_route("/submit", methods=["GET", "HEAD", "PUT", "PATCH", "DELETE"])
async def submit_not_allowed() -> PlainTextResponse:
    return PlainTextResponse(
        "Method not allowed", status_code=405, headers={"Allow": ALLOWED_METHODS}
    )


@router.post("/submit")
async def submit(request: Request) -> PlainTextResponse:
    """Принять multipart-форму и сохранить её в отдельную папку."""
    try:
        boundary = parse_boundary(request.headers.get("content-type"))
    except MalformedRequest as exc:
        return PlainTextResponse(str(exc), status_code=400)

    try:
        body = await _read_body(request)
    except PayloadTooLarge as exc:
        logger.warning("Rejected submission: %s", exc)
        return PlainTextResponse(str(exc), status_code=413)

    try:
        submission = decode(body, boundary, strict=config.strict_parts)
    except MalformedRequest as exc:
        logger.info("Rejected malformed submission: %s", exc)
        return PlainTextResponse(str(exc), status_code=400)

    try:
        folder = await run_in_threadpool(
            store_submission, submission, Path(config.base_dir)
        )
    except SubmissionWriteError as exc:
        logger.error("Failed to store submission: %s", exc)
        return PlainTextResponse("Failed to store submission", status_code=500)

    logger.info("Successfully received submission: %s", folder.name)
    return PlainTextResponse(f"✅ Idea stored: {folder.name}")
