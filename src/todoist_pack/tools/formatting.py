"""
Response formatting for MCP tools.

Rows render either as markdown for people or as the camelCase JSON rows the
host would receive.
"""

from __future__ import annotations

import json
from typing import Any, Optional, Sequence

from todoist_pack.models.schema import RowModel
from todoist_pack.tools.inputs import ResponseFormat


def format_row_markdown(row: RowModel) -> str:
    data = row.to_row()
    title = row.display_value if row.display_value is not None else row.row_id
    lines = [f"## {title}", ""]
    for key, value in data.items():
        if isinstance(value, dict):
            value = value.get("name") or value.get("string") or json.dumps(value)
        elif isinstance(value, list):
            value = ", ".join(str(v) for v in value) or "-"
        lines.append(f"- **{key}**: {value}")
    return "\n".join(lines)


def format_rows_markdown(rows: Sequence[RowModel], title: str) -> str:
    lines = [f"# {title}", "", f"{len(rows)} rows", ""]
    for row in rows:
        label = row.display_value if row.display_value is not None else "(untitled)"
        url = getattr(row, "url", None)
        suffix = f" ({url})" if url else ""
        lines.append(f"- `{row.row_id}` {label}{suffix}")
    return "\n".join(lines)


def format_rows_json(rows: Sequence[RowModel]) -> str:
    return json.dumps([row.to_row() for row in rows], indent=2)


def format_row(row: RowModel, response_format: ResponseFormat) -> str:
    if response_format == ResponseFormat.MARKDOWN:
        return format_row_markdown(row)
    return json.dumps(row.to_row(), indent=2)


def format_rows(rows: Sequence[RowModel], title: str, response_format: ResponseFormat) -> str:
    if response_format == ResponseFormat.MARKDOWN:
        return format_rows_markdown(rows, title)
    return format_rows_json(rows)


def success_message(message: str, **data: Any) -> str:
    return json.dumps({"success": True, "message": message, **data}, indent=2)


def error_message(message: str, suggestion: Optional[str] = None) -> str:
    payload: dict[str, Any] = {"success": False, "error": message}
    if suggestion:
        payload["suggestion"] = suggestion
    return json.dumps(payload, indent=2)
