# Area: Hub
# PRD: docs/protocol.md
"""
stlucia.cli — Command-line interface
====================================

Provides the ``stlucia`` entry point.

Usage:
    stlucia rollfile winscore prog1 prog2 [prog3 ...]
    python -m stlucia rollfile winscore prog1 prog2 [prog3 ...]

Tuning comes from environment variables (a ``.env`` file in the
working directory is loaded first):
    STLUCIA_REAP_TIMEOUT    seconds to wait for players to exit
    STLUCIA_POLL_INTERVAL   seconds between SIGINT checks
    STLUCIA_MAX_REROLLS     hub-side reroll cap per turn
    STLUCIA_LOG_FILE        JSON log file
    STLUCIA_TRACE=true      trace every protocol line
"""

import argparse
import sys
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from ._config import HubConfig, env_overrides
from ._shared.protocol import MAX_PLAYERS, MIN_PLAYERS
from .errors import InvalidArgumentsError, InvalidScoreError, StLuciaError
from .hub import StLuciaHub


class _ArgumentParser(argparse.ArgumentParser):
    """Parser that reports errors as InvalidArgumentsError."""

    def error(self, message):
        raise InvalidArgumentsError(message)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = _ArgumentParser(
        prog="stlucia",
        description="St Lucia dice game hub",
        add_help=False,
    )
    parser.add_argument("rollfile", help="File of dice faces (1 2 3 H A P)")
    parser.add_argument("winscore", help="Points needed to win")
    parser.add_argument("programs", nargs="+", help="Player programs, 2 to 26")

    args = parser.parse_args(argv)
    if not MIN_PLAYERS <= len(args.programs) <= MAX_PLAYERS:
        raise InvalidArgumentsError(f"{len(args.programs)} player programs given")
    return args


def parse_score(text: str) -> int:
    """Parse the score limit; it must be a positive decimal integer."""
    if not (text.isascii() and text.isdigit()) or int(text) <= 0:
        raise InvalidScoreError(f"Score limit {text!r} is not a positive integer")
    return int(text)


def build_config(argv: Optional[List[str]] = None) -> HubConfig:
    """
    Build the hub config from arguments and environment.

    Raises:
        InvalidArgumentsError: Wrong argument count or bad env tuning
        InvalidScoreError: Score limit is not a positive integer
    """
    args = parse_args(argv)
    score_limit = parse_score(args.winscore)

    load_dotenv()
    try:
        return HubConfig(
            roll_file=args.rollfile,
            score_limit=score_limit,
            programs=args.programs,
            **env_overrides(),
        )
    except ValidationError as e:
        raise InvalidArgumentsError(f"Invalid configuration: {e}") from e


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    try:
        config = build_config(argv)
    except StLuciaError as e:
        print(e.diagnostic, file=sys.stderr)
        return int(e.exit_code)

    return StLuciaHub(config).run()
