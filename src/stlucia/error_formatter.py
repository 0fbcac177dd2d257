# Area: Shared
# PRD: docs/protocol.md
"""Error formatting for structured fatal-error logs."""

from __future__ import annotations
import json
from typing import Any, Dict


def format_error_block(
    error_type: str,
    exit_code: int,
    diagnostic: str,
    detail: str,
    context: Dict[str, Any],
) -> str:
    """Format a structured error block for the log file."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " FATAL ERROR — GAME TERMINATED",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Exit Code:    {exit_code}",
        f" Diagnostic:   {diagnostic}",
    ]

    if detail:
        lines.append(f" Detail:       {detail}")

    lines.append("")
    lines.append(" ── CONTEXT " + "─" * 52)
    lines.append(indent_json(context))

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
