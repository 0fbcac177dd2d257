# Area: Shared
# PRD: docs/protocol.md
"""
stlucia._shared.dice — Dice sets
================================

A DiceSet is a multiset of die faces drawn from ``1 2 3 H A P``.
Its canonical string lists the faces in that fixed order with no
separators. The ordering is part of the wire protocol.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable

# Face categories in canonical order
FACES = ("1", "2", "3", "H", "A", "P")

DICE_SET_SIZE = 6

HEAL_FACE = "H"
ATTACK_FACE = "A"
POINTS_FACE = "P"


def _empty_counts() -> Dict[str, int]:
    return dict.fromkeys(FACES, 0)


def is_valid_dice_string(text: str) -> bool:
    """Return True if every character of ``text`` is a legal face."""
    return all(c in FACES for c in text)


@dataclass
class DiceSet:
    """
    Six non-negative counters, one per face category.

    Attributes:
        counts: Mapping of face character to the number of dice showing it
    """

    counts: Dict[str, int] = field(default_factory=_empty_counts)

    @classmethod
    def from_string(cls, text: str) -> "DiceSet":
        """
        Build a dice set from a dice string in any order.

        Raises:
            ValueError: If the string holds a character outside ``FACES``
        """
        dice = cls()
        for face in text:
            dice.add(face)
        return dice

    @classmethod
    def from_faces(cls, faces: Iterable[str]) -> "DiceSet":
        return cls.from_string("".join(faces))

    # ── Counters ─────────────────────────────────────────────

    def count(self, face: str) -> int:
        return self.counts[face]

    @property
    def ones(self) -> int:
        return self.counts["1"]

    @property
    def twos(self) -> int:
        return self.counts["2"]

    @property
    def threes(self) -> int:
        return self.counts["3"]

    @property
    def hearts(self) -> int:
        return self.counts[HEAL_FACE]

    @property
    def attacks(self) -> int:
        return self.counts[ATTACK_FACE]

    @property
    def points(self) -> int:
        return self.counts[POINTS_FACE]

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def is_empty(self) -> bool:
        return self.total == 0

    # ── Mutation ─────────────────────────────────────────────

    def add(self, face: str, amount: int = 1) -> None:
        if face not in self.counts:
            raise ValueError(f"Invalid die face: {face!r}")
        self.counts[face] += amount

    def remove(self, face: str, amount: int = 1) -> None:
        """
        Remove dice showing ``face``.

        Raises:
            ValueError: If the face is illegal or fewer dice show it
        """
        if face not in self.counts:
            raise ValueError(f"Invalid die face: {face!r}")
        if self.counts[face] < amount:
            raise ValueError(f"Not enough '{face}' dice to remove {amount}")
        self.counts[face] -= amount

    def merge(self, other: "DiceSet") -> None:
        for face in FACES:
            self.counts[face] += other.counts[face]

    def subtract(self, other: "DiceSet") -> None:
        """Remove every die of ``other`` from this set (all or nothing)."""
        if not self.contains(other):
            raise ValueError(f"{other} is not a subset of {self}")
        for face in FACES:
            self.counts[face] -= other.counts[face]

    def contains(self, other: "DiceSet") -> bool:
        return all(self.counts[f] >= other.counts[f] for f in FACES)

    def reset(self) -> None:
        for face in FACES:
            self.counts[face] = 0

    def copy(self) -> "DiceSet":
        return DiceSet(counts=dict(self.counts))

    # ── Serialization ────────────────────────────────────────

    def to_string(self) -> str:
        return "".join(face * self.counts[face] for face in FACES)

    def __str__(self) -> str:
        return self.to_string()
