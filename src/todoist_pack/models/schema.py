"""
Host row schemas.

Each row model knows its identity (the name the host uses to match
references against synced rows), its id property and its display property.
Rows are handed to the host as camelCase dicts with absent values left out.
"""

from __future__ import annotations

from typing import Any, ClassVar, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RowModel(BaseModel):
    """Base model for everything the pack returns to the host."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    identity: ClassVar[str] = ""
    id_property: ClassVar[str] = ""
    display_property: ClassVar[str] = "name"
    featured_properties: ClassVar[tuple[str, ...]] = ()

    @property
    def row_id(self) -> Any:
        """Value of the id property, used to reconcile synced rows."""
        return getattr(self, self.id_property)

    @property
    def display_value(self) -> Any:
        return getattr(self, self.display_property)

    def to_row(self) -> dict[str, Any]:
        """Serialize for the host."""
        return self.model_dump(by_alias=True, exclude_none=True)


# =============================================================================
# References
# =============================================================================


class ProjectReference(RowModel):
    """Points at a row of the Projects sync table."""

    identity: ClassVar[str] = "Project"
    id_property: ClassVar[str] = "project_id"

    name: str
    project_id: int


class TaskReference(RowModel):
    """Points at a row of the Tasks sync table."""

    identity: ClassVar[str] = "Task"
    id_property: ClassVar[str] = "task_id"

    name: str
    task_id: int


# =============================================================================
# Rows
# =============================================================================


class Project(RowModel):
    """A Todoist project."""

    identity: ClassVar[str] = "Project"
    id_property: ClassVar[str] = "project_id"
    featured_properties: ClassVar[tuple[str, ...]] = ("url",)

    name: Optional[str] = Field(default=None, description="The name of the project.")
    url: Optional[str] = Field(default=None, description="A link to the project in the Todoist app.")
    shared: Optional[bool] = Field(default=None, description="Is the project shared.")
    favorite: Optional[bool] = Field(default=None, description="Is the project a favorite.")
    project_id: Optional[int] = Field(default=None, description="The ID of the project.")
    parent_project_id: Optional[int] = Field(
        default=None,
        description="For sub-projects, the ID of the parent project.",
    )
    parent_project: Optional[ProjectReference] = None


class Due(BaseModel):
    """Due date of a task, keyed exactly like the API's due object."""

    model_config = ConfigDict(extra="ignore")

    date: Optional[str] = None
    timezone: Optional[str] = None
    string: Optional[str] = None
    lang: Optional[str] = None
    is_recurring: Optional[bool] = None


class Task(RowModel):
    """A Todoist task, open or completed."""

    identity: ClassVar[str] = "Task"
    id_property: ClassVar[str] = "task_id"
    featured_properties: ClassVar[tuple[str, ...]] = ("project", "url")

    name: Optional[str] = Field(default=None, description="The name of the task.")
    description: Optional[str] = None
    url: Optional[str] = None
    order: Optional[int] = Field(
        default=None,
        description="The position of the task in the project or parent task.",
    )
    priority: Optional[str] = None
    task_id: Optional[int] = None
    project_id: Optional[int] = None
    parent_task_id: Optional[int] = None
    checked: bool = Field(default=False, description="Is the task completed?")
    assignee: Optional[int] = Field(
        default=None,
        description="The ID of user who is responsible for accomplishing the task.",
    )
    labels: Optional[list[Union[int, str]]] = None
    date_added: Optional[str] = None
    date_completed: Optional[str] = None
    due: Optional[Due] = None
    project: Optional[ProjectReference] = None
    parent_task: Optional[TaskReference] = None


class Label(RowModel):
    """A personal label, or a label name only seen on tasks."""

    identity: ClassVar[str] = "Label"
    # Labels only seen on tasks have no id, so rows are keyed by name.
    id_property: ClassVar[str] = "name"

    name: str
    label_id: Optional[int] = None
    color: Optional[int] = None
    order: Optional[int] = None
    favorite: Optional[bool] = None


class SharedLabel(RowModel):
    """A label name collected from tasks."""

    identity: ClassVar[str] = "SharedLabel"
    id_property: ClassVar[str] = "name"

    name: str


class ActivityLogEvent(RowModel):
    """An entry of the activity log."""

    identity: ClassVar[str] = "ActivityLogEvent"
    id_property: ClassVar[str] = "id"
    display_property: ClassVar[str] = "object_type"

    id: Optional[int] = None
    name: Optional[str] = Field(default=None, description="Event object name.")
    note: Optional[str] = Field(default=None, description="Note content.")
    object_type: Optional[str] = Field(
        default=None,
        description="The type of object, one of item, note or project.",
    )
    object_id: Optional[int] = None
    event_type: Optional[str] = None
    event_date: Optional[str] = None
    parent_project_id: Optional[int] = None
    parent_item_id: Optional[int] = None
    initiator_id: Optional[int] = None
    extra_data: Optional[dict[str, Any]] = None
    url: Optional[str] = None
