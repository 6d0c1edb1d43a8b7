"""
Echo endpoint: parses the JSON request body and returns it unchanged
wrapped as ``{"youSent": <body>}``.
"""

from __future__ import annotations

import json
import math
from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from app.server.api.schemas import EchoResponse
from app.server.logging import get_logger

router = APIRouter()
logger = get_logger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {name}")


def _finite_float(text: str) -> Optional[float]:
    # Literals such as 1e400 overflow to inf, which has no JSON form: echo null.
    value = float(text)
    return value if math.isfinite(value) else None


def parse_json_body(raw: bytes) -> Any:
    """
    Decode ``raw`` as strict JSON.

    Numbers too large for a float come back as None.

    Raises:
        ValueError: for empty input, undecodable bytes, malformed JSON,
            nesting deeper than the interpreter can decode, or the
            NaN/Infinity extensions Python's decoder would otherwise accept.
    """

    if not raw.strip():
        raise ValueError("empty body")
    try:
        return json.loads(raw, parse_constant=_reject_constant, parse_float=_finite_float)
    except RecursionError as exc:
        raise ValueError("nested too deeply") from exc


async def read_limited_body(request: Request, limit: int) -> bytes:
    """Read the request body, failing with 413 once it exceeds ``limit`` bytes."""

    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise HTTPException(status_code=413, detail="Request body too large")

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise HTTPException(status_code=413, detail="Request body too large")
    return bytes(body)


@router.post("/echo", response_model=EchoResponse, summary="Echo a JSON body")
async def echo(request: Request) -> JSONResponse:
    limit = request.app.state.config.max_body_bytes
    raw = await read_limited_body(request, limit)
    try:
        payload = parse_json_body(raw)
    except ValueError as exc:
        logger.info("echo_rejected", reason=str(exc), size=len(raw))
        raise HTTPException(status_code=400, detail="Request body is not valid JSON") from exc

    try:
        return JSONResponse(content={"youSent": payload})
    except RecursionError as exc:
        # Decodable, but one level too deep to encode inside the envelope.
        logger.info("echo_rejected", reason="nested too deeply", size=len(raw))
        raise HTTPException(status_code=400, detail="Request body is nested too deeply") from exc
