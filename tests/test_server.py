"""
MCP Layer Tests for the Todoist Pack.

This module tests the pieces of the MCP server that do not need a running
transport: input validation, error messages and response formatting.
"""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from todoist_pack.exceptions import (
    TodoistAuthenticationError,
    TodoistInvalidURLError,
    TodoistNotFoundError,
    TodoistValidationError,
)
from todoist_pack.mappers import to_project, to_task
from todoist_pack.server import handle_error
from todoist_pack.tools.formatting import format_row, format_rows, success_message
from todoist_pack.tools.inputs import (
    ResponseFormat,
    SyncTableInput,
    SyncTableName,
    TaskCreateInput,
    TaskUpdateInput,
)


pytestmark = [pytest.mark.unit]


# =============================================================================
# Input Validation Tests
# =============================================================================


class TestInputs:
    """Tests for tool input models."""

    def test_task_update_requires_numeric_id(self):
        with pytest.raises(ValidationError):
            TaskUpdateInput(task_id="abc", name="x")

    def test_task_create_strips_whitespace(self):
        params = TaskCreateInput(name="  Buy milk  ")

        assert params.name == "Buy milk"
        assert params.project_id is None

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            TaskCreateInput(name="x", priority=4)

    def test_sync_table_input(self):
        params = SyncTableInput(table="Tasks", filter="", project="9")

        assert params.table == SyncTableName.TASKS
        assert params.filter is None
        assert params.response_format == ResponseFormat.MARKDOWN

    def test_unknown_table(self):
        with pytest.raises(ValidationError):
            SyncTableInput(table="Comments")


# =============================================================================
# Error Message Tests
# =============================================================================


@pytest.mark.errors
class TestHandleError:
    """Tests for user-facing error messages."""

    def test_invalid_url(self):
        payload = json.loads(handle_error(TodoistInvalidURLError("task", "nope"), "get_task"))

        assert payload["success"] is False
        assert payload["error"] == "Invalid task URL: nope"
        assert "suggestion" in payload

    def test_authentication(self):
        error = TodoistAuthenticationError("bad token", status_code=401, url="u")

        payload = json.loads(handle_error(error, "sync_table"))

        assert "Authentication failed" in payload["error"]

    def test_not_found(self):
        error = TodoistNotFoundError("gone", status_code=404, url="u")

        assert "Resource not found" in json.loads(handle_error(error, "get_task"))["error"]

    def test_validation(self):
        payload = json.loads(handle_error(TodoistValidationError("Missing url"), "get_task"))

        assert payload["error"] == "Invalid input: Missing url"

    def test_unexpected(self):
        payload = json.loads(handle_error(RuntimeError("kaboom"), "get_task"))

        assert payload["error"] == "Unexpected error: kaboom"


# =============================================================================
# Formatting Tests
# =============================================================================


class TestFormatting:
    """Tests for row formatting."""

    def test_row_json_is_host_row(self):
        project = to_project({"id": 1, "name": "Work", "parent_id": 2}, with_references=True)

        assert json.loads(format_row(project, ResponseFormat.JSON)) == project.to_row()

    def test_row_markdown(self):
        task = to_task({"id": 5, "content": "Call Amy", "project_id": 1}, with_references=True)

        text = format_row(task, ResponseFormat.MARKDOWN)

        assert text.startswith("## Call Amy")
        assert "- **project**: Not found" in text

    def test_rows_markdown(self):
        rows = [to_project({"id": 1, "name": "Work", "url": "https://todoist.com/showProject?id=1"})]

        text = format_rows(rows, "Projects", ResponseFormat.MARKDOWN)

        assert "# Projects" in text
        assert "1 rows" in text
        assert "- `1` Work (https://todoist.com/showProject?id=1)" in text

    def test_success_message(self):
        payload = json.loads(success_message("Task created", url="https://todoist.com/showTask?id=1"))

        assert payload == {
            "success": True,
            "message": "Task created",
            "url": "https://todoist.com/showTask?id=1",
        }
