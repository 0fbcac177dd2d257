# Area: Player
# PRD: docs/protocol.md
"""
Internal player-side helpers.

This package contains:
- Validation of lines received from the hub
"""

from .incoming_validator import MessageRule, is_valid_label, validate_hub_message

__all__ = [
    "MessageRule",
    "is_valid_label",
    "validate_hub_message",
]
