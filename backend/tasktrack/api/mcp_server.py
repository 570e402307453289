"""MCP Server — read_tasks / write_tasks served over the Model Context Protocol.

Invariants:
    - Same tools, same results as /api/v1/tools: every call goes through ToolDispatch
    - Tool arguments are typed, so FastMCP rejects non-string fields before dispatch
    - Tool-level errors come back as ordinary results ({"status": "error", ...});
      StoreError raises, which MCP reports as an isError tool result
    - Dispatch runs on the worker thread pool: the store blocks on file IO

Design Decisions:
    - dispatch_provider is resolved per call: the service is built in the app
      lifespan, after this server is created and mounted
    - Descriptions come from TOOLS_TASKS so both agent surfaces advertise one text
"""

from typing import Any, Callable

from fastapi.concurrency import run_in_threadpool
from mcp.server.fastmcp import FastMCP

from tasktrack.services.define_task_tools import TOOLS_TASKS
from tasktrack.services.tool_dispatch import ToolDispatch

_DESCRIPTIONS = {tool["name"]: tool["description"] for tool in TOOLS_TASKS}


def create_mcp_server(dispatch_provider: Callable[[], ToolDispatch]) -> FastMCP:
    """Build a FastMCP server whose tools delegate to dispatch_provider()."""
    server = FastMCP("tasktrack")

    async def _call(tool_name: str, **arguments: Any) -> dict[str, Any]:
        input_data = {k: v for k, v in arguments.items() if v is not None}
        return await run_in_threadpool(
            dispatch_provider().execute, tool_name, input_data,
        )

    @server.tool(name="read_tasks", description=_DESCRIPTIONS["read_tasks"])
    async def read_tasks(
        id: str | None = None, status: str | None = None,
    ) -> dict[str, Any]:
        return await _call("read_tasks", id=id, status=status)

    @server.tool(name="write_tasks", description=_DESCRIPTIONS["write_tasks"])
    async def write_tasks(
        operation: str,
        id: str | None = None,
        title: str | None = None,
        description: str | None = None,
        status: str | None = None,
    ) -> dict[str, Any]:
        return await _call(
            "write_tasks", operation=operation, id=id, title=title,
            description=description, status=status,
        )

    return server
