# Area: Shared
# PRD: docs/protocol.md
"""
stlucia._shared.codec — Line codec
==================================

Tokenizes one protocol line into its space-delimited fields and builds
outgoing lines. The codec checks structure only (field count and field
length); what the fields mean is up to the sender and receiver.
"""

from __future__ import annotations

from typing import List

from ..errors import InvalidMessageError

# Structural bounds for a single line
MAX_MESSAGE_LENGTH = 40
MAX_COMMANDS = 5

LINE_TERMINATOR = "\n"
FIELD_SEPARATOR = " "


def parse(line: str) -> List[str]:
    """
    Split a protocol line into fields.

    The line terminator is stripped, then the line is split on single
    spaces. Empty fields are kept, so ``"reroll "`` yields
    ``["reroll", ""]``.

    Args:
        line: Raw line, with or without its trailing newline

    Returns:
        Ordered list of fields

    Raises:
        InvalidMessageError: If the line has more than MAX_COMMANDS
            fields or a field longer than MAX_MESSAGE_LENGTH
    """
    if line.endswith(LINE_TERMINATOR):
        line = line[: -len(LINE_TERMINATOR)]
    if LINE_TERMINATOR in line:
        raise InvalidMessageError(f"Embedded newline in {line!r}", raw_line=line)

    fields = line.split(FIELD_SEPARATOR)
    if len(fields) > MAX_COMMANDS:
        raise InvalidMessageError(
            f"Too many fields: {len(fields)} > {MAX_COMMANDS}", raw_line=line
        )
    for fld in fields:
        if len(fld) > MAX_MESSAGE_LENGTH:
            raise InvalidMessageError(
                f"Field too long: {len(fld)} > {MAX_MESSAGE_LENGTH}", raw_line=line
            )
    return fields


def render(command: str, *fields: object) -> str:
    """Join a command and its fields with spaces and terminate the line."""
    parts = [command] + [str(f) for f in fields]
    return FIELD_SEPARATOR.join(parts) + LINE_TERMINATOR
