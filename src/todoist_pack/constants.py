"""
Todoist Pack constants.

Endpoints, URL patterns and fixed values shared by formulas, sync tables
and the authentication setup.
"""

from __future__ import annotations

import re

# =============================================================================
# Network
# =============================================================================

NETWORK_DOMAIN = "todoist.com"

APP_BASE_URL = "https://todoist.com"
REST_BASE_URL = "https://api.todoist.com/rest/v1"
SYNC_BASE_URL = "https://api.todoist.com/sync/v8"

SYNC_URL = f"{SYNC_BASE_URL}/sync"
ACTIVITY_URL = f"{SYNC_BASE_URL}/activity/get"
COMPLETED_URL = f"{SYNC_BASE_URL}/completed/get_all"
PROJECTS_URL = f"{REST_BASE_URL}/projects"
TASKS_URL = f"{REST_BASE_URL}/tasks"

# A full sync (as opposed to an incremental one) always sends "*".
FULL_SYNC_TOKEN = "*"

# =============================================================================
# OAuth2
# =============================================================================

AUTHORIZATION_URL = "https://todoist.com/oauth/authorize"
TOKEN_URL = "https://todoist.com/oauth/access_token"
SCOPE_READ_WRITE = "data:read_write"
SCOPES = [SCOPE_READ_WRITE]
SCOPE_DELIMITER = ","

# =============================================================================
# URL Patterns
# =============================================================================

PROJECT_URL_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"^https://todoist.com/app/project/([0-9]+)$"),
    re.compile(r"^https://todoist.com/showProject\?id=([0-9]+)"),
]

TASK_URL_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"^https://todoist.com/app/project/[0-9]+/task/([0-9]+)$"),
    re.compile(r"^https://todoist.com/showTask\?id=([0-9]+)"),
]

# =============================================================================
# Misc
# =============================================================================

ACTIVITY_PAGE_SIZE = 100

# Display name for references until the host matches them to a synced row.
REFERENCE_PLACEHOLDER_NAME = "Not found"

ACTION_SUCCESS = "OK"

SHARE_PROJECT_COMMAND = "share_project"
