"""FastAPI routes for the tool bridge."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from bridge_app.core.auth import require_api_key
from bridge_app.models.schemas import ExecuteRequest, HealthResponse, ToolsResponse
from browser_tools import Dispatcher, ToolResult

_log = logging.getLogger(__name__)

router = APIRouter()


def get_dispatcher(request: Request) -> Dispatcher:
    return request.app.state.dispatcher


@router.get("/health", response_model=HealthResponse)
def health(request: Request) -> HealthResponse:
    """Health check. Never requires an API key."""
    return HealthResponse(status="ok", service=request.app.state.settings.service_name)


@router.get("/tools", response_model=ToolsResponse, dependencies=[Depends(require_api_key)])
def list_tools(dispatcher: Dispatcher = Depends(get_dispatcher)) -> dict:
    """List available tools with their input schemas."""
    return {"tools": [d.to_dict() for d in dispatcher.catalog.list()]}


@router.post("/execute", dependencies=[Depends(require_api_key)])
def execute(req: ExecuteRequest, dispatcher: Dispatcher = Depends(get_dispatcher)) -> dict:
    """Run one tool call. Tool failures come back as a result with isError=true, not as an HTTP error."""
    if not req.tool:
        raise HTTPException(status_code=400, detail="Tool name is required")
    try:
        result: ToolResult = dispatcher.execute(req.tool, req.arguments)
    except Exception as e:
        _log.exception("execute %s failed", req.tool)
        raise HTTPException(status_code=500, detail=str(e))
    return result.to_wire()
