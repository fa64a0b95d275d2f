"""URL matchers for Todoist project and task links."""

from __future__ import annotations

import re
from typing import Sequence

from todoist_pack.constants import PROJECT_URL_PATTERNS, TASK_URL_PATTERNS
from todoist_pack.exceptions import TodoistInvalidURLError


def extract_id(url: str, patterns: Sequence[re.Pattern[str]], kind: str) -> str:
    """
    Extract a numeric id from a Todoist URL.

    Patterns are tried in order and the first captured group of the first
    match wins.

    Raises:
        TodoistInvalidURLError: If no pattern matches.
    """
    for pattern in patterns:
        match = pattern.search(url)
        if match and match.group(1):
            return match.group(1)
    raise TodoistInvalidURLError(kind, url)


def extract_project_id(url: str) -> str:
    return extract_id(url, PROJECT_URL_PATTERNS, "project")


def extract_task_id(url: str) -> str:
    return extract_id(url, TASK_URL_PATTERNS, "task")
