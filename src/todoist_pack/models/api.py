"""
Todoist API payload models.

These describe what the REST and sync endpoints send back. Every field is
optional: the endpoints disagree on which fields they include, and a field
the API leaves out stays None instead of being given a default. Where the
REST and sync APIs spell the same field differently both spellings are
accepted.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ApiModel(BaseModel):
    """Base model for API payloads."""

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
    )


class ApiDue(ApiModel):
    """A task's due date object."""

    date: Optional[str] = None
    timezone: Optional[str] = None
    string: Optional[str] = None
    lang: Optional[str] = None
    is_recurring: Optional[bool] = None


class ApiProject(ApiModel):
    """A project as returned by ``rest/v1/projects``."""

    id: Optional[int] = None
    name: Optional[str] = None
    url: Optional[str] = None
    shared: Optional[bool] = None
    favorite: Optional[bool] = Field(
        default=None,
        validation_alias=AliasChoices("favorite", "is_favorite"),
    )
    parent_id: Optional[int] = None


class ApiTask(ApiModel):
    """
    A task from any of the three task endpoints.

    Open sync items carry ``sync_id``; completed items carry ``task_id``
    next to their own record ``id``.
    """

    id: Optional[int] = None
    sync_id: Optional[int] = None
    task_id: Optional[int] = None
    content: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    order: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("order", "child_order"),
    )
    priority: Optional[int] = None
    project_id: Optional[int] = None
    parent_id: Optional[int] = None
    labels: Optional[list[Union[int, str]]] = Field(
        default=None,
        validation_alias=AliasChoices("labels", "label_ids"),
    )
    due: Optional[ApiDue] = None
    # Kept untyped so that only a literal ``True`` counts as completed.
    checked: Any = Field(
        default=None,
        validation_alias=AliasChoices("checked", "completed"),
    )
    responsible_uid: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("responsible_uid", "assignee"),
    )
    date_added: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("date_added", "created"),
    )
    completed_date: Optional[str] = None


class ApiLabel(ApiModel):
    """A personal label from the sync ``labels`` resource."""

    id: Optional[int] = None
    name: Optional[str] = None
    color: Optional[int] = None
    order: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("order", "item_order"),
    )
    favorite: Optional[bool] = Field(
        default=None,
        validation_alias=AliasChoices("favorite", "is_favorite"),
    )


class ApiActivityEvent(ApiModel):
    """An entry of ``sync/v8/activity/get``."""

    id: Optional[int] = None
    object_type: Optional[str] = None
    object_id: Optional[int] = None
    event_type: Optional[str] = None
    event_date: Optional[str] = None
    parent_project_id: Optional[int] = None
    parent_item_id: Optional[int] = None
    initiator_id: Optional[int] = None
    extra_data: Optional[dict[str, Any]] = None
    url: Optional[str] = None
