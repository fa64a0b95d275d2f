"""
Single-shot formulas.

Lookups by URL plus the action formulas that create, rename and complete
Todoist objects. Each makes a small, fixed number of requests; HTTP errors
from the fetcher propagate to the host untouched.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Union

from todoist_pack.constants import (
    ACTION_SUCCESS,
    PROJECTS_URL,
    SHARE_PROJECT_COMMAND,
    TASKS_URL,
)
from todoist_pack.endpoints import sync_command, write_commands
from todoist_pack.exceptions import TodoistValidationError
from todoist_pack.mappers import to_project, to_task
from todoist_pack.matchers import extract_project_id, extract_task_id
from todoist_pack.models.schema import Project, Task
from todoist_pack.sdk import ExecutionContext

logger = logging.getLogger(__name__)


@dataclass
class ShareOutcome:
    """Result of sharing a new project with one collaborator."""

    email: str
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def get_project(context: ExecutionContext, url: str) -> Project:
    """Get a project by its Todoist URL."""
    project_id = extract_project_id(url)
    response = await context.fetch("GET", f"{PROJECTS_URL}/{project_id}")
    return to_project(response.body)


async def get_task(context: ExecutionContext, url: str) -> Task:
    """Get a task by its Todoist URL."""
    task_id = extract_task_id(url)
    response = await context.fetch("GET", f"{TASKS_URL}/{task_id}")
    return to_task(response.body)


def split_collaborators(collaborators: Optional[str]) -> list[str]:
    if not collaborators:
        return []
    return [email.strip() for email in collaborators.split(",") if email.strip()]


async def share_project(
    context: ExecutionContext,
    project_id: int,
    emails: list[str],
) -> list[ShareOutcome]:
    """
    Share a project with each email, one sync command per collaborator.

    Sharing is best effort: failures are logged and reported in the
    outcomes, never raised.
    """

    async def share(email: str) -> None:
        logger.info("Sharing project %s with %s", project_id, email)
        command = sync_command(SHARE_PROJECT_COMMAND, {"project_id": project_id, "email": email})
        await write_commands(context, [command])

    results = await asyncio.gather(*(share(email) for email in emails), return_exceptions=True)

    outcomes = []
    for email, result in zip(emails, results):
        error = result if isinstance(result, BaseException) else None
        if error is not None:
            logger.warning("Could not share project %s with %s: %s", project_id, email, error)
        outcomes.append(ShareOutcome(email=email, error=error))
    return outcomes


async def add_project(context: ExecutionContext, name: str, collaborators: Optional[str] = None) -> str:
    """Create a project, share it with the collaborators and return its URL."""
    response = await context.fetch(
        "POST",
        PROJECTS_URL,
        headers={"Content-Type": "application/json"},
        json={"name": name},
    )
    project = response.body
    emails = split_collaborators(collaborators)
    if emails:
        outcomes = await share_project(context, project["id"], emails)
        shared = sum(outcome.ok for outcome in outcomes)
        logger.info("Shared project %s with %d of %d collaborators", project["id"], shared, len(outcomes))
    return project["url"]


async def add_task(context: ExecutionContext, name: str, project_id: Optional[Union[int, float]] = None) -> str:
    """Create a task and return its URL. Without a project it lands in the inbox."""
    body: dict[str, object] = {"content": name}
    if project_id is not None:
        if isinstance(project_id, float) and not project_id.is_integer():
            raise TodoistValidationError(f"Project id must be a whole number, got {project_id}")
        body["project_id"] = int(project_id)
    response = await context.fetch(
        "POST",
        TASKS_URL,
        headers={"Content-Type": "application/json"},
        json=body,
    )
    return response.body["url"]


async def update_task(context: ExecutionContext, task_id: str, name: str) -> Task:
    """
    Rename a task.

    Returns the task as re-read after the update, skipping the cache, so the
    host can refresh the matching synced row.
    """
    url = f"{TASKS_URL}/{task_id}"
    await context.fetch(
        "POST",
        url,
        headers={"Content-Type": "application/json"},
        json={"content": name},
    )
    response = await context.fetch("GET", url, cache_ttl_secs=0)
    return to_task(response.body)


async def mark_as_complete(context: ExecutionContext, task_id: str) -> str:
    await context.fetch(
        "POST",
        f"{TASKS_URL}/{task_id}/close",
        headers={"Content-Type": "application/json"},
    )
    return ACTION_SUCCESS
