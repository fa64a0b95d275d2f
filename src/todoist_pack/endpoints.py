"""
Helpers for the Todoist sync API.

The sync endpoint takes its resource types and command batches as
JSON-encoded query parameters. Commands carry a fresh uuid so the server
can tell retries apart.
"""

from __future__ import annotations

import json
import uuid
from typing import Any, Sequence

from todoist_pack.constants import FULL_SYNC_TOKEN, SYNC_URL
from todoist_pack.sdk import ExecutionContext


def sync_command(command_type: str, args: dict[str, Any]) -> dict[str, Any]:
    return {"type": command_type, "uuid": str(uuid.uuid4()), "args": args}


async def read_resources(context: ExecutionContext, resource_types: Sequence[str]) -> dict[str, Any]:
    """Full sync of the given resource types."""
    response = await context.fetch(
        "GET",
        SYNC_URL,
        params={
            "sync_token": FULL_SYNC_TOKEN,
            "resource_types": json.dumps(list(resource_types)),
        },
    )
    return response.body or {}


async def write_commands(context: ExecutionContext, commands: Sequence[dict[str, Any]]) -> dict[str, Any]:
    response = await context.fetch(
        "POST",
        SYNC_URL,
        params={
            "sync_token": FULL_SYNC_TOKEN,
            "commands": json.dumps(list(commands)),
        },
    )
    return response.body or {}
