"""
Sync table executors.

Each executor returns the complete current snapshot of its table; the host
compares it with the rows it already has.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from todoist_pack.constants import (
    ACTIVITY_PAGE_SIZE,
    ACTIVITY_URL,
    COMPLETED_URL,
    FULL_SYNC_TOKEN,
    PROJECTS_URL,
    TASKS_URL,
)
from todoist_pack.endpoints import read_resources
from todoist_pack.mappers import (
    activity_event_url,
    to_activity_log_event,
    to_label,
    to_project,
    to_shared_label,
    to_task,
)
from todoist_pack.models.api import ApiActivityEvent, ApiTask
from todoist_pack.models.schema import ActivityLogEvent, Label, Project, SharedLabel, Task
from todoist_pack.sdk import ExecutionContext, autocomplete_search_objects

logger = logging.getLogger(__name__)


def unique_label_names(items: Iterable[dict[str, Any]]) -> list[str]:
    """
    Label names across all items, each once, in first-seen order.

    Sync items list their labels by id, so every entry is taken as text.
    """
    names: list[str] = []
    seen: set[str] = set()
    for item in items:
        for label in item.get("labels") or []:
            name = str(label)
            if name in seen:
                logger.debug("Skipping %s", name)
                continue
            logger.debug("Adding %s", name)
            seen.add(name)
            names.append(name)
    return names


# =============================================================================
# Activity Log
# =============================================================================


async def sync_activity_log(context: ExecutionContext) -> list[ActivityLogEvent]:
    """
    Page through the activity log.

    Pages are requested one after another and the walk stops at the first
    page holding fewer than ACTIVITY_PAGE_SIZE events.
    """
    limit = ACTIVITY_PAGE_SIZE
    offset = 0
    results: list[ActivityLogEvent] = []

    while True:
        logger.info("Getting activity offset=%d, limit=%d", offset, limit)
        response = await context.fetch(
            "GET",
            ACTIVITY_URL,
            params={"sync_token": FULL_SYNC_TOKEN, "offset": offset, "limit": limit},
        )
        events = (response.body or {}).get("events") or []
        for raw in events:
            event = ApiActivityEvent.model_validate(raw)
            event.url = activity_event_url(event)
            results.append(to_activity_log_event(event))

        if len(events) < limit:
            break
        offset += limit

    return results


# =============================================================================
# Labels
# =============================================================================


async def sync_shared_labels(context: ExecutionContext) -> list[SharedLabel]:
    state = await read_resources(context, ["items"])
    return [to_shared_label(name) for name in unique_label_names(state.get("items") or [])]


async def sync_labels(context: ExecutionContext) -> list[Label]:
    """
    Labels seen on tasks, followed by personal labels not seen on any task.

    Names are the key: a personal label whose name already appeared on a
    task is skipped.
    """
    state = await read_resources(context, ["labels", "items", "projects", "collaborators"])

    results = [Label(name=name) for name in unique_label_names(state.get("items") or [])]
    seen = {label.name for label in results}
    for raw in state.get("labels") or []:
        label = to_label(raw)
        if label.name in seen:
            continue
        seen.add(label.name)
        results.append(label)
    return results


# =============================================================================
# Projects
# =============================================================================


async def sync_projects(context: ExecutionContext) -> list[Project]:
    response = await context.fetch("GET", PROJECTS_URL)
    return [to_project(project, with_references=True) for project in response.body or []]


async def autocomplete_projects(context: ExecutionContext, search: str) -> list[dict[str, Any]]:
    """Project options for the Tasks ``project`` parameter, valued by id as text."""
    response = await context.fetch("GET", PROJECTS_URL)
    options = autocomplete_search_objects(search, response.body or [], "name", "id")
    return [{**option, "value": str(option["value"])} for option in options]


# =============================================================================
# Tasks
# =============================================================================


async def _open_tasks(
    context: ExecutionContext,
    filter: Optional[str],
    project: Optional[str],
) -> list[ApiTask]:
    if filter or project:
        # Only the REST endpoint can narrow by filter or project.
        params: dict[str, Any] = {}
        if filter:
            params["filter"] = filter
        if project:
            params["project_id"] = project
        response = await context.fetch("GET", TASKS_URL, params=params)
        return [ApiTask.model_validate(raw) for raw in response.body or []]

    state = await read_resources(context, ["items"])
    tasks = []
    for raw in state.get("items") or []:
        task = ApiTask.model_validate(raw)
        if task.sync_id is not None:
            task = task.model_copy(update={"id": task.sync_id})
        tasks.append(task)
    return tasks


async def _completed_tasks(context: ExecutionContext, project: Optional[str]) -> list[ApiTask]:
    params = {"project_id": project} if project else None
    response = await context.fetch("GET", COMPLETED_URL, params=params)
    tasks = []
    for raw in (response.body or {}).get("items") or []:
        task = ApiTask.model_validate(raw)
        tasks.append(task.model_copy(update={"checked": True, "id": task.task_id}))
    return tasks


async def sync_tasks(
    context: ExecutionContext,
    filter: Optional[str] = None,
    project: Optional[str] = None,
) -> list[Task]:
    """
    Open tasks followed by completed tasks.

    Completed entries are records of a completion, so their row id comes
    from ``task_id`` rather than the record's own ``id``.
    """
    results = [to_task(task, with_references=True) for task in await _open_tasks(context, filter, project)]
    results.extend(to_task(task, with_references=True) for task in await _completed_tasks(context, project))
    return results
