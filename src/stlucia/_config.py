# Area: Hub
# PRD: docs/protocol.md
"""
stlucia._config — Hub configuration
===================================

The validated settings for one hub run. Positional CLI arguments fill
the game fields; optional tuning comes from environment variables
(and a ``.env`` file loaded by the CLI).
"""

from __future__ import annotations

import os
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, PositiveFloat, PositiveInt, field_validator

from ._shared.protocol import MAX_PLAYERS, MIN_PLAYERS

# Environment variable → config field
ENV_MAPPINGS = {
    "STLUCIA_REAP_TIMEOUT": "reap_timeout",
    "STLUCIA_POLL_INTERVAL": "poll_interval",
    "STLUCIA_MAX_REROLLS": "max_rerolls",
    "STLUCIA_LOG_FILE": "log_file",
    "STLUCIA_TRACE": "trace",
}

TRUE_VALUES = ("true", "1", "yes")


class HubConfig(BaseModel):
    """Settings for one game."""

    roll_file: str
    score_limit: PositiveInt
    programs: List[str] = Field(min_length=MIN_PLAYERS, max_length=MAX_PLAYERS)

    # Seconds to wait for each player to exit before killing it
    reap_timeout: PositiveFloat = 2.0
    # Seconds between cancellation checks while waiting on a player
    poll_interval: PositiveFloat = 0.1
    # Hub-side reroll cap per turn; None trusts the players
    max_rerolls: Optional[int] = Field(default=None, ge=0)
    log_file: Optional[str] = None
    trace: bool = False

    @field_validator("trace", mode="before")
    @classmethod
    def _parse_flag(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower() in TRUE_VALUES
        return value

    @field_validator("max_rerolls", "log_file", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Collect config values set through environment variables."""
    if environ is None:
        environ = os.environ
    overrides = {}
    for env_key, config_key in ENV_MAPPINGS.items():
        if env_key in environ:
            overrides[config_key] = environ[env_key]
    return overrides
