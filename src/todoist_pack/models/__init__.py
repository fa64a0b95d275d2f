"""
Todoist Pack data models.

Two families of pydantic models:
    - API models: payloads as the Todoist REST and sync endpoints send them
    - Row models: the shapes handed to the host (Project, Task, Label, ...)
"""

from todoist_pack.models.api import (
    ApiActivityEvent,
    ApiDue,
    ApiLabel,
    ApiProject,
    ApiTask,
)
from todoist_pack.models.schema import (
    ActivityLogEvent,
    Due,
    Label,
    Project,
    ProjectReference,
    RowModel,
    SharedLabel,
    Task,
    TaskReference,
)

__all__ = [
    "ApiActivityEvent",
    "ApiDue",
    "ApiLabel",
    "ApiProject",
    "ApiTask",
    "ActivityLogEvent",
    "Due",
    "Label",
    "Project",
    "ProjectReference",
    "RowModel",
    "SharedLabel",
    "Task",
    "TaskReference",
]
