"""Tool Dispatch — tests for explicit tool routing and tagged tool results.

Tests cover:
    - Unknown tools return UNKNOWN_TOOL error
    - Both tools are registered and advertised with matching names
    - read_tasks: single task, list, status filter, bad status
    - write_tasks: create, update_status, delete, missing fields, bad operation
    - Non-string field values are validation errors (a bad id never lists everything)
    - Domain errors become error results; StoreError propagates
"""

import pytest

from tasktrack.core.errors import StoreError
from tasktrack.services.tool_dispatch import ToolDispatch
from tasktrack.services.tool_results import (
    ErrorResult, MessageResult, TaskListResult, TaskResult,
)


@pytest.fixture
def dispatch(service):
    return ToolDispatch(service)


def _create(dispatch, title="T", **extra) -> dict:
    result = dispatch.execute(
        "write_tasks", {"operation": "create", "title": title, **extra},
    )
    assert result["status"] == "ok", result
    return result["task"]


# ─── registry ───────────────────────────────────────────────────

def test_dispatch_returns_error_for_unknown_tool(dispatch):
    result = dispatch.execute("nonexistent_tool", {})
    assert result["status"] == "error"
    assert result["error_code"] == "UNKNOWN_TOOL"


def test_definitions_match_registered_handlers(dispatch):
    names = [t["name"] for t in ToolDispatch.definitions()]
    assert names == dispatch.tool_names == ["read_tasks", "write_tasks"]
    for tool in ToolDispatch.definitions():
        assert tool["input_schema"]["type"] == "object"
        assert tool["description"]


# ─── write_tasks ────────────────────────────────────────────────

def test_create_returns_task_result(dispatch):
    task = _create(dispatch, "Write spec", description="draft")
    assert task["status"] == "NEW"
    assert task["title"] == "Write spec"
    assert task["description"] == "draft"
    assert task["createdAt"] == task["updatedAt"]


def test_create_without_title_is_validation_error(dispatch):
    result = dispatch.execute("write_tasks", {"operation": "create", "title": "  "})
    assert result["error_code"] == "VALIDATION_ERROR"
    assert "title" in result["message"]


def test_create_overlong_title_is_validation_error(dispatch):
    result = dispatch.execute(
        "write_tasks", {"operation": "create", "title": "x" * 500},
    )
    assert result["error_code"] == "VALIDATION_ERROR"


def test_operation_is_case_insensitive(dispatch):
    result = dispatch.execute("write_tasks", {"operation": " CREATE ", "title": "T"})
    assert result["status"] == "ok"


@pytest.mark.parametrize("operation", [None, "", "archive"])
def test_invalid_operation(dispatch, operation):
    result = dispatch.execute("write_tasks", {"operation": operation})
    assert result["error_code"] == "INVALID_OPERATION"
    assert "create, update_status, delete" in result["message"]


def test_update_status_accepts_lowercase_token(dispatch):
    task = _create(dispatch)
    result = dispatch.execute(
        "write_tasks",
        {"operation": "update_status", "id": task["id"], "status": "in_progress"},
    )
    assert result["kind"] == "task"
    assert result["task"]["status"] == "IN_PROGRESS"


@pytest.mark.parametrize("missing", ["id", "status"])
def test_update_status_requires_id_and_status(dispatch, missing):
    payload = {"operation": "update_status", "id": "x", "status": "DONE"}
    del payload[missing]
    result = dispatch.execute("write_tasks", payload)
    assert result["error_code"] == "VALIDATION_ERROR"
    assert missing in result["message"]


def test_update_status_bad_token(dispatch):
    task = _create(dispatch)
    result = dispatch.execute(
        "write_tasks",
        {"operation": "update_status", "id": task["id"], "status": "FINISHED"},
    )
    assert result["error_code"] == "VALIDATION_ERROR"
    assert "NEW, IN_PROGRESS, DONE" in result["message"]


def test_illegal_transition_becomes_error_result(dispatch):
    task = _create(dispatch)
    result = dispatch.execute(
        "write_tasks",
        {"operation": "update_status", "id": task["id"], "status": "DONE"},
    )
    assert result["status"] == "error"
    assert result["error_code"] == "INVALID_STATUS_TRANSITION"
    assert "NEW → IN_PROGRESS" in result["message"]


def test_update_unknown_task_is_not_found(dispatch):
    result = dispatch.execute(
        "write_tasks", {"operation": "update_status", "id": "nope", "status": "DONE"},
    )
    assert result["error_code"] == "TASK_NOT_FOUND"


def test_delete_returns_message_result(dispatch):
    task = _create(dispatch)
    result = dispatch.execute("write_tasks", {"operation": "delete", "id": task["id"]})
    assert result == {
        "status": "ok", "kind": "message",
        "message": "Task deleted successfully", "id": task["id"],
    }
    again = dispatch.execute("write_tasks", {"operation": "delete", "id": task["id"]})
    assert again["error_code"] == "TASK_NOT_FOUND"


def test_delete_requires_id(dispatch):
    result = dispatch.execute("write_tasks", {"operation": "delete"})
    assert result["error_code"] == "VALIDATION_ERROR"


# ─── read_tasks ─────────────────────────────────────────────────

def test_read_single_task(dispatch):
    task = _create(dispatch)
    result = dispatch.execute("read_tasks", {"id": task["id"]})
    assert result["kind"] == "task"
    assert result["task"] == task


def test_read_unknown_task(dispatch):
    result = dispatch.execute("read_tasks", {"id": "nope"})
    assert result["error_code"] == "TASK_NOT_FOUND"


def test_read_lists_with_optional_filter(dispatch):
    a = _create(dispatch, "A")
    b = _create(dispatch, "B")
    dispatch.execute(
        "write_tasks", {"operation": "update_status", "id": b["id"], "status": "IN_PROGRESS"},
    )
    everything = dispatch.execute("read_tasks", {})
    assert everything["kind"] == "tasks"
    assert everything["count"] == 2
    new_only = dispatch.execute("read_tasks", {"status": "new"})
    assert [t["id"] for t in new_only["tasks"]] == [a["id"]]


def test_read_with_bad_status_filter(dispatch):
    result = dispatch.execute("read_tasks", {"status": "LATER"})
    assert result["error_code"] == "VALIDATION_ERROR"


@pytest.mark.parametrize("bad_id", [42, ["x"], {"id": "x"}, True])
def test_read_with_non_string_id_is_rejected_not_listed(dispatch, bad_id):
    _create(dispatch, "A")
    _create(dispatch, "B")
    result = dispatch.execute("read_tasks", {"id": bad_id})
    assert result == {
        "status": "error", "error_code": "VALIDATION_ERROR",
        "message": "id must be a string",
    }


@pytest.mark.parametrize("payload,field", [
    ({"operation": "create", "title": 7}, "title"),
    ({"operation": "create", "title": "T", "description": ["d"]}, "description"),
    ({"operation": "update_status", "id": 1, "status": "DONE"}, "id"),
    ({"operation": "update_status", "id": "x", "status": 3}, "status"),
    ({"operation": "delete", "id": 1.5}, "id"),
])
def test_write_with_non_string_field_is_rejected(dispatch, store, payload, field):
    result = dispatch.execute("write_tasks", payload)
    assert result["error_code"] == "VALIDATION_ERROR"
    assert result["message"] == f"{field} must be a string"
    assert store.count() == 0


# ─── error propagation ──────────────────────────────────────────

def test_store_error_propagates(dispatch, tasks_path):
    tasks_path.write_text("not json")
    with pytest.raises(StoreError) as exc:
        dispatch.execute("read_tasks", {})
    assert exc.value.context.tool_name == "read_tasks"


# ─── result variants ────────────────────────────────────────────

def test_result_variants_render_status(service):
    task = service.create("T")
    assert TaskResult(task).to_dict()["status"] == "ok"
    assert TaskListResult((task,)).to_dict()["count"] == 1
    assert MessageResult("done").to_dict()["id"] is None
    assert ErrorResult("X", "y").to_dict() == {
        "status": "error", "error_code": "X", "message": "y",
    }
