"""
Response mappers.

Pure functions turning Todoist API payloads into host rows. Every mapper
accepts either a raw dict or the parsed API model, never mutates its
input, and leaves absent fields absent.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, TypeVar, Union

from pydantic import BaseModel

from todoist_pack.constants import APP_BASE_URL, REFERENCE_PLACEHOLDER_NAME
from todoist_pack.models.api import (
    ApiActivityEvent,
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
    SharedLabel,
    Task,
    TaskReference,
)

M = TypeVar("M", bound=BaseModel)


def _parse(model: type[M], data: Union[M, Mapping[str, Any]]) -> M:
    if isinstance(data, model):
        return data
    return model.model_validate(data)


def to_project(data: Union[ApiProject, Mapping[str, Any]], with_references: bool = False) -> Project:
    """Convert a project payload to a Project row."""
    project = _parse(ApiProject, data)
    result = Project(
        name=project.name,
        project_id=project.id,
        url=project.url,
        shared=project.shared,
        favorite=project.favorite,
        parent_project_id=project.parent_id,
    )
    if with_references and project.parent_id:
        result.parent_project = ProjectReference(
            project_id=project.parent_id,
            name=REFERENCE_PLACEHOLDER_NAME,
        )
    return result


def to_task(data: Union[ApiTask, Mapping[str, Any]], with_references: bool = False) -> Task:
    """
    Convert a task payload to a Task row.

    ``checked`` is only true for a literal ``True``; strings and numbers are
    not treated as completed.

    With references, the task points at its project and, for sub-tasks, at
    its parent task. The references carry a placeholder name that the host
    replaces once it finds the matching synced row.
    """
    task = _parse(ApiTask, data)
    result = Task(
        name=task.content,
        description=task.description,
        url=task.url,
        order=task.order,
        priority=str(task.priority) if task.priority is not None else None,
        task_id=task.id,
        project_id=task.project_id,
        parent_task_id=task.parent_id,
        labels=list(task.labels) if task.labels is not None else None,
        due=Due.model_validate(task.due.model_dump()) if task.due is not None else None,
        checked=task.checked is True,
        date_added=task.date_added,
        date_completed=task.completed_date,
    )
    if task.responsible_uid:
        result.assignee = task.responsible_uid

    if with_references:
        if task.project_id is not None:
            result.project = ProjectReference(
                project_id=task.project_id,
                name=REFERENCE_PLACEHOLDER_NAME,
            )
        if task.parent_id:
            result.parent_task = TaskReference(
                task_id=task.parent_id,
                name=REFERENCE_PLACEHOLDER_NAME,
            )
    return result


def to_label(data: Union[ApiLabel, Mapping[str, Any]]) -> Label:
    label = _parse(ApiLabel, data)
    return Label(
        name=label.name,
        label_id=label.id,
        color=label.color,
        order=label.order,
        favorite=label.favorite,
    )


def to_shared_label(name: str) -> SharedLabel:
    return SharedLabel(name=name)


def activity_event_url(data: Union[ApiActivityEvent, Mapping[str, Any]]) -> Optional[str]:
    """Link to the object an activity event is about, if it has one."""
    event = _parse(ApiActivityEvent, data)
    if event.object_type == "item":
        return f"{APP_BASE_URL}/app/task/{event.object_id}"
    if event.object_type == "note":
        return (
            f"{APP_BASE_URL}/app/today/task/{event.parent_item_id}"
            f"/comments#comment-{event.object_id}"
        )
    if event.object_type == "project":
        return f"{APP_BASE_URL}/app/project/{event.object_id}"
    return None


def to_activity_log_event(data: Union[ApiActivityEvent, Mapping[str, Any]]) -> ActivityLogEvent:
    """Convert an activity payload to an ActivityLogEvent row."""
    event = _parse(ApiActivityEvent, data)
    extra_data = event.extra_data or {}
    return ActivityLogEvent(
        id=event.id,
        object_type=event.object_type,
        object_id=event.object_id,
        event_type=event.event_type,
        event_date=event.event_date,
        parent_project_id=event.parent_project_id,
        parent_item_id=event.parent_item_id,
        initiator_id=event.initiator_id,
        extra_data=dict(event.extra_data) if event.extra_data is not None else None,
        url=event.url,
        name=extra_data.get("name"),
        note=extra_data.get("content"),
    )
