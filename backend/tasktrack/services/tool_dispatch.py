"""Tool Dispatch — explicit routing from tool_name to handler function.

Invariants:
    - Every tool->handler mapping is visible — no getattr magic, no auto-discovery
    - Unknown tools return UNKNOWN_TOOL error (never raises)
    - Domain errors (not found, invalid transition, validation) become ErrorResult
    - StoreError is NOT converted: storage failure propagates to the caller,
      tagged with the tool name in its ErrorContext
    - Every tool call logged with tool_name and outcome

Design Decisions:
    - Explicit dict over getattr: adding a tool requires editing this dict
    - Returns plain dicts at the edge: the tool protocol is JSON
"""

import logging

from tasktrack.core.errors import StoreError, TaskTrackError
from tasktrack.services.define_task_tools import TOOLS_TASKS
from tasktrack.services.handle_tasks import TaskToolHandlers
from tasktrack.services.task_lifecycle import TaskLifecycleService
from tasktrack.services.tool_results import ErrorResult

logger = logging.getLogger(__name__)


class ToolDispatch:
    """Routes tool_name -> handler. Explicit registration, no auto-discovery."""

    def __init__(self, service: TaskLifecycleService):
        tasks = TaskToolHandlers(service)
        self._handlers = {
            "read_tasks": tasks.read_tasks,
            "write_tasks": tasks.write_tasks,
        }

    @property
    def tool_names(self) -> list[str]:
        return list(self._handlers)

    @staticmethod
    def definitions() -> list[dict]:
        """Tool schemas advertised to agents."""
        return TOOLS_TASKS

    def execute(self, tool_name: str, input_data: dict) -> dict:
        """Route tool_name to handler. Returns result dict. Logs every call."""
        handler = self._handlers.get(tool_name)
        if not handler:
            result = ErrorResult(
                "UNKNOWN_TOOL", f"Tool '{tool_name}' does not exist.",
            ).to_dict()
            self._log_tool_call(tool_name, result)
            return result
        try:
            result = handler(input_data).to_dict()
        except StoreError as e:
            e.context.tool_name = tool_name
            logger.error(
                f"Tool '{tool_name}' failed on storage", extra={"tool_name": tool_name},
            )
            raise
        except TaskTrackError as e:
            result = ErrorResult.from_error(e).to_dict()
        self._log_tool_call(tool_name, result)
        return result

    @staticmethod
    def _log_tool_call(tool_name: str, result: dict) -> None:
        if result.get("status") == "error":
            logger.info(
                f"Tool call '{tool_name}' returned error",
                extra={"tool_name": tool_name, "error_code": result.get("error_code")},
            )
        else:
            logger.info(f"Tool call '{tool_name}' ok", extra={"tool_name": tool_name})
