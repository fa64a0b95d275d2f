"""
Pydantic Input Models for Todoist Pack MCP Tools.

Each model mirrors the parameters of the pack formula or sync table the
tool invokes, with field constraints and descriptions for MCP clients.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator


class ResponseFormat(str, Enum):
    """Output format for tool responses."""

    MARKDOWN = "markdown"
    JSON = "json"


class SyncTableName(str, Enum):
    """Sync tables exposed by the pack."""

    ACTIVITY_LOG = "ActivityLog"
    SHARED_LABELS = "SharedLabels"
    LABELS = "Labels"
    PROJECTS = "Projects"
    TASKS = "Tasks"


class BaseMCPInput(BaseModel):
    """Base input model with common configuration."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="forbid",
    )


# =============================================================================
# Lookup Input Models
# =============================================================================


class ProjectGetInput(BaseMCPInput):
    """Input for getting a project by URL."""

    url: str = Field(
        ...,
        description="Project URL (e.g., 'https://todoist.com/app/project/2203306141')",
        min_length=1,
    )
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' for human-readable, 'json' for machine-readable",
    )


class TaskGetInput(BaseMCPInput):
    """Input for getting a task by URL."""

    url: str = Field(
        ...,
        description="Task URL (e.g., 'https://todoist.com/showTask?id=2995104339')",
        min_length=1,
    )
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format",
    )


class ResolveUrlInput(BaseMCPInput):
    """Input for resolving any pasted Todoist URL."""

    url: str = Field(..., description="A Todoist project or task URL", min_length=1)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format",
    )


# =============================================================================
# Action Input Models
# =============================================================================


class ProjectCreateInput(BaseMCPInput):
    """Input for creating a project."""

    name: str = Field(
        ...,
        description="Project name (e.g., 'Website relaunch')",
        min_length=1,
        max_length=120,
    )
    collaborators: Optional[str] = Field(
        default=None,
        description="Comma-delimited list of collaborator emails to share the project with",
    )


class TaskCreateInput(BaseMCPInput):
    """Input for creating a task."""

    name: str = Field(
        ...,
        description="Task content (e.g., 'Buy groceries')",
        min_length=1,
        max_length=500,
    )
    project_id: Optional[int] = Field(
        default=None,
        description="Project ID to add the task to. If not provided, uses the inbox.",
        gt=0,
    )


class TaskUpdateInput(BaseMCPInput):
    """Input for renaming a task."""

    task_id: str = Field(
        ...,
        description="Numeric task identifier",
        pattern=r"^[0-9]+$",
    )
    name: str = Field(
        ...,
        description="New task content",
        min_length=1,
        max_length=500,
    )
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format",
    )


class TaskCompleteInput(BaseMCPInput):
    """Input for completing a task."""

    task_id: str = Field(
        ...,
        description="Numeric task identifier to complete",
        pattern=r"^[0-9]+$",
    )


# =============================================================================
# Sync Input Models
# =============================================================================


class SyncTableInput(BaseMCPInput):
    """Input for syncing one of the pack's tables."""

    table: SyncTableName = Field(
        ...,
        description="Table to sync: ActivityLog, SharedLabels, Labels, Projects or Tasks",
    )
    filter: Optional[str] = Field(
        default=None,
        description="Tasks only: a Todoist filter query (e.g., 'today | overdue')",
    )
    project: Optional[str] = Field(
        default=None,
        description="Tasks only: limit tasks to this project ID",
        pattern=r"^[0-9]+$",
    )
    limit: Optional[int] = Field(
        default=None,
        description="Maximum number of rows to include in the response",
        ge=1,
        le=5000,
    )
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format",
    )

    @field_validator("filter")
    @classmethod
    def empty_filter_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class ProjectSearchInput(BaseMCPInput):
    """Input for searching projects by name."""

    search: str = Field(
        default="",
        description="Text to look for in project names (case-insensitive)",
        max_length=120,
    )
