"""
Todoist Pack - Todoist projects, tasks, labels and activity as host tables.

The pack exposes the Todoist REST and sync APIs as sync tables, formulas
and action formulas. It can be driven by any host that supplies a fetcher,
or run standalone as an MCP server.

Architecture:
    MCP Tools Layer / Host
         │
         ▼
    Pack (formulas, sync tables, column formats)
         │
         ▼
    Mappers ── URL Matchers
         │
         ▼
    Fetcher (httpx)
"""

__version__ = "0.1.0"
__author__ = "Todoist Pack Contributors"

from todoist_pack.exceptions import (
    TodoistError,
    TodoistInvalidURLError,
    TodoistAPIError,
    TodoistAuthenticationError,
    TodoistNotFoundError,
    TodoistRateLimitError,
    TodoistValidationError,
    TodoistConfigurationError,
)

__all__ = [
    "__version__",
    "TodoistError",
    "TodoistInvalidURLError",
    "TodoistAPIError",
    "TodoistAuthenticationError",
    "TodoistNotFoundError",
    "TodoistRateLimitError",
    "TodoistValidationError",
    "TodoistConfigurationError",
]
