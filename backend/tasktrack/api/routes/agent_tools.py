"""Agent Tool Routes — tool listing and invocation for agent clients.

Invariants:
    - GET /api/v1/tools returns the tool schemas in Anthropic Tool Use format
    - POST /api/v1/tools/{tool_name} always answers 200 with a tool result dict;
      tool-level failures are {"status": "error", ...}, not HTTP errors
    - Storage failure is the exception: StoreError propagates to the 503 handler
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from tasktrack.api.dependencies import get_tool_dispatch
from tasktrack.services.tool_dispatch import ToolDispatch

router = APIRouter(prefix="/api/v1/tools", tags=["tools"])


@router.get("")
def list_tools():
    return {"tools": ToolDispatch.definitions()}


@router.post("/{tool_name}")
def invoke_tool(
    tool_name: str,
    input_data: dict[str, Any] | None = Body(None),
    dispatch: ToolDispatch = Depends(get_tool_dispatch),
):
    """Execute one tool call and return its result."""
    return dispatch.execute(tool_name, input_data or {})
