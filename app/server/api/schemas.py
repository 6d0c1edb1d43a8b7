"""Response models for the demo API (used for validation and OpenAPI docs)."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class StatusResponse(BaseModel):
    status: Literal["ok"] = "ok"
    timestamp: str = Field(..., description="Current server time, ISO-8601 UTC")


class EchoResponse(BaseModel):
    you_sent: Any = Field(..., alias="youSent", description="The request body, unchanged")

    model_config = ConfigDict(populate_by_name=True)
