"""
Todoist Pack exceptions.

Every error raised by the pack derives from TodoistError and carries a
message that is safe to show to the end user. Upstream HTTP failures are
raised by the fetcher and are never caught by formulas or sync tables.
"""

from __future__ import annotations

from typing import Any


class TodoistError(Exception):
    """Base class for all user-visible Todoist Pack errors."""

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class TodoistInvalidURLError(TodoistError):
    """A pasted or supplied URL does not match any known Todoist URL format."""

    def __init__(self, kind: str, url: str) -> None:
        super().__init__(f"Invalid {kind} URL: {url}", kind=kind, url=url)
        self.kind = kind
        self.url = url


class TodoistAPIError(TodoistError):
    """The Todoist API answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        url: str,
        body: Any = None,
    ) -> None:
        super().__init__(message, status_code=status_code, url=url)
        self.status_code = status_code
        self.url = url
        self.body = body


class TodoistAuthenticationError(TodoistAPIError):
    """The access token was rejected (401/403)."""


class TodoistNotFoundError(TodoistAPIError):
    """The requested resource does not exist (404)."""


class TodoistRateLimitError(TodoistAPIError):
    """Too many requests (429)."""


class TodoistValidationError(TodoistError):
    """Formula or sync table arguments failed validation."""


class TodoistConfigurationError(TodoistError):
    """The pack or its runtime is misconfigured."""


def error_for_status(status_code: int, url: str, body: Any = None) -> TodoistAPIError:
    """Build the most specific API error for an HTTP status code."""
    detail = body if isinstance(body, str) and body else f"HTTP {status_code}"
    message = f"Todoist request failed ({status_code}): {detail}"

    if status_code in (401, 403):
        cls: type[TodoistAPIError] = TodoistAuthenticationError
    elif status_code == 404:
        cls = TodoistNotFoundError
    elif status_code == 429:
        cls = TodoistRateLimitError
    else:
        cls = TodoistAPIError
    return cls(message, status_code=status_code, url=url, body=body)
