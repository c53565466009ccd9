"""API request and response models."""
from typing import Any

from pydantic import BaseModel, Field


class ExecuteRequest(BaseModel):
    # Optional here so a missing tool gets our 400 message rather than a validation error
    tool: str | None = Field(None, description="Name of the tool to run (see GET /tools)")
    arguments: dict[str, Any] | None = Field(None, description="Tool arguments, keyed by parameter name")


class ToolInfo(BaseModel):
    name: str
    description: str
    inputSchema: dict[str, Any]


class ToolsResponse(BaseModel):
    tools: list[ToolInfo]


class HealthResponse(BaseModel):
    status: str = Field("ok", description="Always ok while the process serves requests")
    service: str
