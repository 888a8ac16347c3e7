"""
cube_state.py — facelet model of a 3x3x3 cube
===============================================

The cube is stored as six 3x3 grids of color letters, indexed by the
canonical face order U, D, F, B, L, R (see `config.FACE_ORDER`). Grids are
row-major; `cube_moves` defines how rows/columns of neighbouring faces line
up across each shared edge.

### Core Classes

* **FacletGrid**: one face's 3x3 colors. Pure data: copy, compare, read and
  write single facelets.

* **CubeState**: the six grids plus the primitives the move engine needs:
  reset to solved, solved check, mismatch listing, in-place face rotation
  and immutable snapshots for the session history.

Face rotation uses a precomputed 9-index map for the 90° clockwise turn.
Counter-clockwise is three clockwise turns, so CW^4 = identity and
CCW = CW^-1 hold by construction.

--------------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. Licensed under MIT License.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from app_types import Face, Mismatch, Snapshot
from config import GRID_SIZE

# mapping: _ROT_CW[i] = source index (0..8) of sticker that should go to position i
# i.e. new[i][j] = old[2-j][i]
_ROT_CW = [6, 3, 0, 7, 4, 1, 8, 5, 2]


def _check_index(value: int, what: str) -> int:
    if not 0 <= value < GRID_SIZE:
        raise ValueError(f"{what} index out of range: {value!r}")
    return value


@dataclass
class FacletGrid:
    cells: List[List[str]]

    def __post_init__(self):
        if len(self.cells) != GRID_SIZE or any(len(r) != GRID_SIZE for r in self.cells):
            raise ValueError(f"FacletGrid must be {GRID_SIZE}x{GRID_SIZE}, got {self.cells!r}")

    @classmethod
    def filled(cls, color: str) -> "FacletGrid":
        return cls([[color] * GRID_SIZE for _ in range(GRID_SIZE)])

    def copy(self) -> "FacletGrid":
        return FacletGrid([list(r) for r in self.cells])

    def get(self, row: int, col: int) -> str:
        return self.cells[_check_index(row, "row")][_check_index(col, "col")]

    def set(self, row: int, col: int, color: str) -> None:
        self.cells[_check_index(row, "row")][_check_index(col, "col")] = color

    def flat(self) -> List[str]:
        return [c for r in self.cells for c in r]

    def to_tuple(self):
        return tuple(tuple(r) for r in self.cells)


class CubeState:
    """Six FacletGrids in canonical face order. Mutated in place by moves."""

    def __init__(self):
        self.faces: List[FacletGrid] = [FacletGrid.filled(f.color) for f in Face]

    # ----- lifecycle / checks -----

    def reset(self) -> None:
        """Set every facelet to its face's canonical color."""
        self.faces = [FacletGrid.filled(f.color) for f in Face]

    def is_solved(self) -> bool:
        for f in Face:
            expected = f.color
            if any(c != expected for c in self.faces[f].flat()):
                return False
        return True

    def mismatches(self) -> List[Mismatch]:
        """Every facelet that differs from its face color, face-major then row then column."""
        out = []
        for f in Face:
            grid = self.faces[f]
            for i in range(GRID_SIZE):
                for j in range(GRID_SIZE):
                    actual = grid.get(i, j)
                    if actual != f.color:
                        out.append(Mismatch(f, i, j, f.color, actual))
        return out

    # ----- access -----

    def grid(self, face: int) -> FacletGrid:
        return self.faces[Face(face)]

    def __eq__(self, other):
        if not isinstance(other, CubeState):
            return NotImplemented
        return self.faces == other.faces

    def copy(self) -> "CubeState":
        c = CubeState()
        c.faces = [g.copy() for g in self.faces]
        return c

    def snapshot(self) -> Snapshot:
        """Immutable deep copy: snapshot[face][row][col]."""
        return tuple(g.to_tuple() for g in self.faces)

    @classmethod
    def from_snapshot(cls, snap: Sequence[Sequence[Sequence[str]]]) -> "CubeState":
        if len(snap) != len(Face):
            raise ValueError(f"expected {len(Face)} faces, got {len(snap)}")
        c = cls()
        c.faces = [FacletGrid([list(r) for r in face]) for face in snap]
        return c

    # ----- rotation primitives -----

    def rotate_face_clockwise(self, face: int) -> None:
        """Turn one grid 90° clockwise: new[i][j] = old[2-j][i]. Neighbours untouched."""
        f = Face(face)
        old = self.faces[f].flat()
        new = [old[src] for src in _ROT_CW]
        self.faces[f] = FacletGrid([new[r * GRID_SIZE:(r + 1) * GRID_SIZE] for r in range(GRID_SIZE)])

    def rotate_face_counter_clockwise(self, face: int) -> None:
        for _ in range(3):
            self.rotate_face_clockwise(face)

    # ----- display -----

    def net_text(self) -> str:
        out = []
        for f in Face:
            out.append(f"{f.name}:")
            for r in self.faces[f].cells:
                out.append(' '.join(r))
        return '\n'.join(out)
