"""Todoist OAuth2 setup."""

from __future__ import annotations

from typing import Optional

from todoist_pack.constants import AUTHORIZATION_URL, SCOPE_DELIMITER, SCOPES, TOKEN_URL
from todoist_pack.endpoints import read_resources
from todoist_pack.sdk import ExecutionContext, OAuth2Authentication


async def get_connection_name(context: ExecutionContext) -> Optional[str]:
    """Display name of the connected account: the user's full name."""
    state = await read_resources(context, ["user"])
    user = state.get("user") or {}
    return user.get("full_name")


AUTHENTICATION = OAuth2Authentication(
    authorization_url=AUTHORIZATION_URL,
    token_url=TOKEN_URL,
    scopes=list(SCOPES),
    scope_delimiter=SCOPE_DELIMITER,
    get_connection_name=get_connection_name,
)
