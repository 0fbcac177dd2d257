# Area: Hub
# PRD: docs/protocol.md
"""
stlucia._hub.roll_file — Deterministic roll source
==================================================

The hub never rolls random dice. Every die comes from a pre-loaded
roll file, read in order and wrapped around when exhausted, so two
runs with the same file produce the same game.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union
import logging

from .._shared.dice import DiceSet, FACES
from ..errors import InvalidRollFileError, RollFileOpenError

logger = logging.getLogger("stlucia.hub.roll_file")

# Skipped while loading, never treated as a face
SEPARATOR = "\n"


class RollFile:
    """
    Cyclic sequence of die faces with a read cursor.

    The cursor always stays in ``[0, len(rolls))``.
    """

    def __init__(self, rolls: str):
        if not rolls:
            raise InvalidRollFileError("Roll file holds no dice")
        bad = [c for c in rolls if c not in FACES]
        if bad:
            raise InvalidRollFileError(f"Illegal die face {bad[0]!r} in roll file")
        self._rolls = rolls
        self.index = 0

    @classmethod
    def from_text(cls, text: str) -> "RollFile":
        """Build a roll file from text, skipping newlines."""
        return cls(text.replace(SEPARATOR, ""))

    @classmethod
    def load(cls, path: Union[str, Path]) -> "RollFile":
        """
        Load a roll file from disk.

        Raises:
            RollFileOpenError: If the file cannot be opened or read
            InvalidRollFileError: If the contents are empty or illegal
        """
        try:
            with open(path, encoding="ascii", errors="replace", newline="") as f:
                text = f.read()
        except OSError as e:
            raise RollFileOpenError(f"{path}: {e.strerror or e}") from e
        roll_file = cls.from_text(text)
        logger.info(f"Loaded {len(roll_file)} rolls from {path}")
        return roll_file

    def __len__(self) -> int:
        return len(self._rolls)

    @property
    def rolls(self) -> str:
        return self._rolls

    def next_die(self) -> str:
        """Return the next face and advance the cursor, wrapping at the end."""
        die = self._rolls[self.index]
        self.index = (self.index + 1) % len(self._rolls)
        return die

    def draw_set(self, number_of_dice: int) -> DiceSet:
        """Draw ``number_of_dice`` faces into a new dice set."""
        return DiceSet.from_faces(self.next_die() for _ in range(number_of_dice))
