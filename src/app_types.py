"""app_types.py — shared value types
------------------------------------

Small immutable records passed between the cube model, the move engine,
the scramble session and the HTTP layer.

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. MIT License.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from config import FACE_ORDER, FACE_TO_COLOR, MOVE_SUFFIXES

# states[s][face][row][col]
Snapshot = Tuple[Tuple[Tuple[str, ...], ...], ...]


class Face(enum.IntEnum):
    U = 0
    D = 1
    F = 2
    B = 3
    L = 4
    R = 5

    @property
    def color(self) -> str:
        """Canonical color of this face on a solved cube."""
        return FACE_TO_COLOR[self.name]


if [f.name for f in Face] != FACE_ORDER:
    raise RuntimeError(f"Face enum does not match FACE_ORDER {FACE_ORDER!r}")


@dataclass(frozen=True)
class Move:
    """A face turn: which face, and how many clockwise quarter turns (1, 2 or 3)."""
    face: Face
    turns: int = 1

    def __post_init__(self):
        if self.turns not in (1, 2, 3):
            raise ValueError(f"turns must be 1, 2 or 3, got {self.turns!r}")

    @property
    def token(self) -> str:
        suffix = next(s for s, t in MOVE_SUFFIXES.items() if t == self.turns)
        return self.face.name + suffix

    def inverse(self) -> "Move":
        # X <-> X', X2 is its own inverse
        return Move(self.face, 4 - self.turns)

    def __str__(self) -> str:
        return self.token


@dataclass(frozen=True)
class Mismatch:
    face: Face
    row: int
    col: int
    expected: str
    actual: str

    def describe(self) -> str:
        return f"{self.face.name}[{self.row},{self.col}] expected={self.expected} actual={self.actual}"


@dataclass
class SolveResult:
    """Everything a finished scramble/replay session exposes."""
    states: List[Snapshot] = field(default_factory=list)
    moves: List[str] = field(default_factory=list)
    scramble_length: int = 0
    final_solved: bool = False
    mismatches: List[Mismatch] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready mapping, keys in wire order."""
        return {
            "states": [[[list(row) for row in face] for face in snap] for snap in self.states],
            "moves": list(self.moves),
            "scrambleLength": self.scramble_length,
            "finalSolved": self.final_solved,
            "mismatches": [m.describe() for m in self.mismatches],
        }
