"""
Todoist Pack MCP Tools Package.

Input models and response formatting for the MCP tools that front the
pack's formulas and sync tables:
    - Lookup tools (project, task, pasted URL)
    - Action tools (add project, add task, update task, complete task)
    - Sync tools (any sync table, project search)
"""

from todoist_pack.tools.inputs import (
    ResponseFormat,
    SyncTableName,
    ProjectGetInput,
    TaskGetInput,
    ResolveUrlInput,
    ProjectCreateInput,
    TaskCreateInput,
    TaskUpdateInput,
    TaskCompleteInput,
    SyncTableInput,
    ProjectSearchInput,
)

__all__ = [
    "ResponseFormat",
    "SyncTableName",
    "ProjectGetInput",
    "TaskGetInput",
    "ResolveUrlInput",
    "ProjectCreateInput",
    "TaskCreateInput",
    "TaskUpdateInput",
    "TaskCompleteInput",
    "SyncTableInput",
    "ProjectSearchInput",
]
