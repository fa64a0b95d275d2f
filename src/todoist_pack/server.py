#!/usr/bin/env python3
"""
Todoist Pack MCP Server.

Serves the Todoist pack's formulas and sync tables as MCP tools, with an
httpx fetcher standing in for the host's authenticated fetcher.

Features:
    - Project and task lookup by URL (including any pasted Todoist link)
    - Actions: add project (with sharing), add task, rename task, complete task
    - Sync tables: ActivityLog, SharedLabels, Labels, Projects, Tasks
    - Connected account name

Environment Variables Required:
    TODOIST_ACCESS_TOKEN
"""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from mcp.server.fastmcp import FastMCP, Context

from todoist_pack.exceptions import (
    TodoistAuthenticationError,
    TodoistConfigurationError,
    TodoistError,
    TodoistInvalidURLError,
    TodoistNotFoundError,
    TodoistRateLimitError,
    TodoistValidationError,
)
from todoist_pack.fetcher import HttpxFetcher
from todoist_pack.pack import pack
from todoist_pack.sdk import ExecutionContext
from todoist_pack.settings import get_settings
from todoist_pack.tools.inputs import (
    ResponseFormat,
    ProjectGetInput,
    TaskGetInput,
    ResolveUrlInput,
    ProjectCreateInput,
    TaskCreateInput,
    TaskUpdateInput,
    TaskCompleteInput,
    SyncTableInput,
    SyncTableName,
    ProjectSearchInput,
)
from todoist_pack.tools.formatting import (
    format_row,
    format_rows,
    success_message,
    error_message,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Management
# =============================================================================


@asynccontextmanager
async def lifespan(mcp: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """
    Manage the fetcher lifecycle.

    Builds the fetcher on startup and closes it on shutdown.
    """
    logger.info("Initializing Todoist Pack MCP Server...")

    fetcher = HttpxFetcher.from_settings()
    try:
        yield {"context": ExecutionContext(fetcher=fetcher)}
    finally:
        await fetcher.close()
        logger.info("Todoist fetcher closed")


mcp = FastMCP(
    "todoist_pack",
    lifespan=lifespan,
)


def get_context(ctx: Context) -> ExecutionContext:
    """Get the pack execution context from the MCP context."""
    return ctx.request_context.lifespan_context["context"]


# =============================================================================
# Error Handling
# =============================================================================


def handle_error(e: Exception, operation: str) -> str:
    """Turn an exception into the message shown to the user."""
    logger.exception("Error in %s: %s", operation, e)

    if isinstance(e, TodoistAuthenticationError):
        return error_message(
            "Authentication failed. Please reconnect your Todoist account.",
            "Ensure TODOIST_ACCESS_TOKEN holds a valid token with the data:read_write scope.",
        )
    if isinstance(e, TodoistNotFoundError):
        return error_message(
            f"Resource not found: {e}",
            "Verify the URL or ID is correct and the resource exists.",
        )
    if isinstance(e, TodoistInvalidURLError):
        return error_message(
            str(e),
            "Use a link such as https://todoist.com/app/project/<id> "
            "or https://todoist.com/showTask?id=<id>.",
        )
    if isinstance(e, TodoistRateLimitError):
        return error_message(f"Rate limited by Todoist: {e}", "Wait a minute and try again.")
    if isinstance(e, TodoistValidationError):
        return error_message(f"Invalid input: {e}")
    if isinstance(e, TodoistConfigurationError):
        return error_message(
            f"Configuration error: {e}",
            "Check your environment variables and settings.",
        )
    if isinstance(e, TodoistError):
        return error_message(str(e))
    return error_message(f"Unexpected error: {e}")


# =============================================================================
# Lookup Tools
# =============================================================================


@mcp.tool(
    name="todoist_get_project",
    annotations={
        "title": "Get Project",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def todoist_get_project(params: ProjectGetInput, ctx: Context) -> str:
    """
    Get a Todoist project from its URL.

    Accepts both https://todoist.com/app/project/<id> and the older
    https://todoist.com/showProject?id=<id> links.
    """
    try:
        project = await pack.execute_formula("GetProject", [params.url], get_context(ctx))
        return format_row(project, params.response_format)
    except Exception as e:
        return handle_error(e, "get_project")


@mcp.tool(
    name="todoist_get_task",
    annotations={
        "title": "Get Task",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def todoist_get_task(params: TaskGetInput, ctx: Context) -> str:
    """
    Get a Todoist task from its URL.

    Accepts both https://todoist.com/app/project/<project>/task/<id> and the
    older https://todoist.com/showTask?id=<id> links.
    """
    try:
        task = await pack.execute_formula("GetTask", [params.url], get_context(ctx))
        return format_row(task, params.response_format)
    except Exception as e:
        return handle_error(e, "get_task")


@mcp.tool(
    name="todoist_resolve_url",
    annotations={
        "title": "Resolve Todoist URL",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def todoist_resolve_url(params: ResolveUrlInput, ctx: Context) -> str:
    """Resolve any pasted project or task URL to the object it points at."""
    try:
        row = await pack.resolve_column_value(params.url, get_context(ctx))
        return format_row(row, params.response_format)
    except Exception as e:
        return handle_error(e, "resolve_url")


# =============================================================================
# Action Tools
# =============================================================================


@mcp.tool(
    name="todoist_add_project",
    annotations={
        "title": "Add Project",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True,
    },
)
async def todoist_add_project(params: ProjectCreateInput, ctx: Context) -> str:
    """
    Create a Todoist project and share it with collaborators.

    Sharing is best effort: a collaborator that cannot be invited does not
    fail the call.

    Returns:
        The URL of the new project.
    """
    try:
        url = await pack.execute_formula(
            "AddProject",
            [params.name, params.collaborators],
            get_context(ctx),
        )
        return success_message("Project created", url=url)
    except Exception as e:
        return handle_error(e, "add_project")


@mcp.tool(
    name="todoist_add_task",
    annotations={
        "title": "Add Task",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True,
    },
)
async def todoist_add_task(params: TaskCreateInput, ctx: Context) -> str:
    """Create a task, in the inbox unless a project ID is given."""
    try:
        url = await pack.execute_formula(
            "AddTask",
            [params.name, params.project_id],
            get_context(ctx),
        )
        return success_message("Task created", url=url)
    except Exception as e:
        return handle_error(e, "add_task")


@mcp.tool(
    name="todoist_update_task",
    annotations={
        "title": "Rename Task",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def todoist_update_task(params: TaskUpdateInput, ctx: Context) -> str:
    """Rename a task and return it as stored after the update."""
    try:
        task = await pack.execute_formula(
            "UpdateTask",
            [params.task_id, params.name],
            get_context(ctx),
        )
        return format_row(task, params.response_format)
    except Exception as e:
        return handle_error(e, "update_task")


@mcp.tool(
    name="todoist_mark_as_complete",
    annotations={
        "title": "Complete Task",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def todoist_mark_as_complete(params: TaskCompleteInput, ctx: Context) -> str:
    try:
        result = await pack.execute_formula("MarkAsComplete", [params.task_id], get_context(ctx))
        return success_message(f"Task {params.task_id} completed", result=result)
    except Exception as e:
        return handle_error(e, "mark_as_complete")


# =============================================================================
# Sync Tools
# =============================================================================


@mcp.tool(
    name="todoist_sync_table",
    annotations={
        "title": "Sync Table",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def todoist_sync_table(params: SyncTableInput, ctx: Context) -> str:
    """
    Fetch the full current contents of one of the pack's tables.

    Tables:
        - ActivityLog: every activity event, all pages
        - SharedLabels: label names used on tasks
        - Labels: label names used on tasks plus personal labels
        - Projects: all projects
        - Tasks: open tasks followed by completed tasks; accepts filter and project
    """
    try:
        args: list[Any] = []
        if params.table == SyncTableName.TASKS:
            args = [params.filter, params.project]
        rows = await pack.execute_sync_table(params.table.value, args, get_context(ctx))
        if params.limit is not None:
            rows = rows[: params.limit]
        return format_rows(rows, params.table.value, params.response_format)
    except Exception as e:
        return handle_error(e, "sync_table")


@mcp.tool(
    name="todoist_search_projects",
    annotations={
        "title": "Search Projects",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def todoist_search_projects(params: ProjectSearchInput, ctx: Context) -> str:
    """Project names and IDs matching the search text, for the Tasks project filter."""
    try:
        options = await pack.autocomplete("SyncTasks", "project", params.search, get_context(ctx))
        return json.dumps(options, indent=2)
    except Exception as e:
        return handle_error(e, "search_projects")


@mcp.tool(
    name="todoist_connection_name",
    annotations={
        "title": "Connected Account",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def todoist_connection_name(ctx: Context, response_format: ResponseFormat = ResponseFormat.MARKDOWN) -> str:
    """Name of the Todoist account the server is connected as."""
    try:
        name = await pack.get_connection_name(get_context(ctx))
        if response_format == ResponseFormat.MARKDOWN:
            return f"Connected to Todoist as **{name or 'unknown user'}**"
        return json.dumps({"connection_name": name}, indent=2)
    except Exception as e:
        return handle_error(e, "connection_name")


# =============================================================================
# Main Entry Point
# =============================================================================


def main():
    """Main entry point for the Todoist Pack MCP server."""
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    mcp.run()


if __name__ == "__main__":
    main()
