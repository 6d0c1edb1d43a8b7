"""Status endpoint: reports that the server is up and its current time."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter

from app.server.api.schemas import StatusResponse

router = APIRouter()


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """
    Format ``now`` (default: the current time) as ISO-8601 UTC with
    millisecond precision and a ``Z`` suffix, e.g. 2024-01-01T00:00:00.000Z.
    """

    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.api_route(
    "/status",
    methods=["GET", "HEAD"],
    response_model=StatusResponse,
    summary="Server status",
)
async def status() -> StatusResponse:
    return StatusResponse(status="ok", timestamp=utc_timestamp())
