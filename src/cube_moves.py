"""
cube_moves.py — move vocabulary and facelet permutations
==========================================================

Maps a move token (e.g. "R", "U'", "F2") onto a `CubeState`.

A base move turns the named face clockwise and then cycles four length-3
strips on the neighbouring faces. `_STRIPS[face]` lists those strips in
cycle order, source -> destination:

    strip[0] -> strip[1] -> strip[2] -> strip[3] -> strip[0]

Each strip is the ordered list of (row, col) cells on its face. Element i of
one strip lands on element i of the next, so a strip listed back to front
(e.g. the Back face's left column for R) is where the index reversal across
a mirrored edge lives. Counter-clockwise moves run the same cycle backwards
after a counter-clockwise face turn; half turns are two clockwise moves.

The U and D rows follow the documented cycle (U: F -> R -> B -> L, D: F -> L ->
B -> R), which runs against their clockwise face turn. They are not the
physical U/D of a real cube; do not flip them without changing that contract.

Vocabulary: U D F B L R, each plain, with "'" or with "2" (18 tokens).
Anything else parses to None and is applied as a no-op.

--------------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. Licensed under MIT License.
"""

from __future__ import annotations

import logging
import random
import re
from typing import Dict, List, Optional, Sequence, Tuple

from app_types import Face, Move
from config import GRID_SIZE, MOVE_SUFFIXES, SCRAMBLE_SUFFIX_WEIGHTS
from cube_state import CubeState

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

Cell = Tuple[int, int]
Strip = Tuple[Face, Tuple[Cell, ...]]

_IDX = range(GRID_SIZE)
_LAST = GRID_SIZE - 1


def _row(face: Face, r: int, reverse: bool = False) -> Strip:
    cols = reversed(_IDX) if reverse else _IDX
    return face, tuple((r, c) for c in cols)


def _col(face: Face, c: int, reverse: bool = False) -> Strip:
    rows = reversed(_IDX) if reverse else _IDX
    return face, tuple((r, c) for r in rows)


# face turned -> four neighbour strips in cycle order (source -> destination)
_STRIPS: Dict[Face, Tuple[Strip, Strip, Strip, Strip]] = {
    Face.U: (_row(Face.F, 0), _row(Face.R, 0), _row(Face.B, 0), _row(Face.L, 0)),
    Face.D: (_row(Face.F, _LAST), _row(Face.L, _LAST), _row(Face.B, _LAST), _row(Face.R, _LAST)),
    Face.F: (_row(Face.U, _LAST), _col(Face.R, 0), _row(Face.D, 0, reverse=True), _col(Face.L, _LAST, reverse=True)),
    Face.B: (_row(Face.U, 0), _col(Face.L, 0, reverse=True), _row(Face.D, _LAST, reverse=True), _col(Face.R, _LAST)),
    Face.L: (_col(Face.U, 0), _col(Face.F, 0), _col(Face.D, 0), _col(Face.B, _LAST, reverse=True)),
    Face.R: (_col(Face.U, _LAST), _col(Face.B, 0, reverse=True), _col(Face.D, _LAST), _col(Face.F, _LAST)),
}

# token -> Move, built once from the face list and suffix table
VOCABULARY: Dict[str, Move] = {
    f.name + suffix: Move(f, turns) for f in Face for suffix, turns in MOVE_SUFFIXES.items()
}

_WHITESPACE = re.compile(r"\s+")


# -----------------------
# Parsing / inversion
# -----------------------

def tokenize(scramble: Optional[str]) -> List[str]:
    """Collapse whitespace, trim and split. None or blank gives []."""
    if not scramble:
        return []
    cleaned = _WHITESPACE.sub(" ", scramble).strip()
    return cleaned.split(" ") if cleaned else []


def parse_move(token: str) -> Optional[Move]:
    """Exact, case-sensitive lookup. Unknown tokens return None."""
    return VOCABULARY.get(token)


def invert_move(token: str) -> Optional[str]:
    """X -> X', X' -> X, X2 -> X2. None for tokens outside the vocabulary."""
    mv = parse_move(token)
    return mv.inverse().token if mv else None


def invert_sequence(tokens: Sequence[str]) -> List[str]:
    """Reverse the order and invert each token. Unknown tokens have no inverse and are dropped."""
    out = []
    for tok in reversed(tokens):
        inv = invert_move(tok)
        if inv is not None:
            out.append(inv)
    return out


# -----------------------
# Application
# -----------------------

def _read(state: CubeState, strip: Strip) -> List[str]:
    face, cells = strip
    grid = state.grid(face)
    return [grid.get(r, c) for r, c in cells]


def _write(state: CubeState, strip: Strip, values: Sequence[str]) -> None:
    face, cells = strip
    grid = state.grid(face)
    for (r, c), v in zip(cells, values):
        grid.set(r, c, v)


def _cycle(state: CubeState, strips: Sequence[Strip]) -> None:
    # read everything first, then write each strip's values into the next one
    values = [_read(state, s) for s in strips]
    n = len(strips)
    for k in range(n):
        _write(state, strips[(k + 1) % n], values[k])


def _quarter_turn(state: CubeState, face: Face, clockwise: bool = True) -> None:
    strips = _STRIPS[face]
    if clockwise:
        state.rotate_face_clockwise(face)
        _cycle(state, strips)
    else:
        state.rotate_face_counter_clockwise(face)
        _cycle(state, tuple(reversed(strips)))


def apply(move: Move, state: CubeState) -> None:
    """Apply a parsed move in place."""
    if move.turns == 1:
        _quarter_turn(state, move.face)
    elif move.turns == 3:
        _quarter_turn(state, move.face, clockwise=False)
    else:
        _quarter_turn(state, move.face)
        _quarter_turn(state, move.face)


def apply_move(state: CubeState, token: str) -> bool:
    """
    Apply a single move token to `state`.
    Returns True if the state was turned, False for a token outside the vocabulary (no-op).
    """
    mv = parse_move(token)
    if mv is None:
        logger.debug("Ignoring unknown move token: %r", token)
        return False
    apply(mv, state)
    return True


def apply_sequence(state: CubeState, seq) -> List[str]:
    """
    Apply a whitespace-separated string or an iterable of tokens in order.
    Returns the tokens that were actually applied.
    """
    tokens = tokenize(seq) if isinstance(seq, str) or seq is None else list(seq)
    return [tok for tok in tokens if apply_move(state, tok)]


# -----------------------
# Scramble generation
# -----------------------

def random_scramble(length: int, rng: Optional[random.Random] = None, avoid_repeat: bool = True) -> List[str]:
    """
    Generate a random scramble (list of move tokens) of given length.
    avoid_repeat keeps two consecutive tokens off the same face.
    """
    if length < 0:
        raise ValueError(f"scramble length must be >= 0, got {length}")
    rng = rng or random.Random()
    suffixes = list(MOVE_SUFFIXES)
    faces = [f.name for f in Face]
    moves = []
    prev_face = None
    for _ in range(length):
        choices = [f for f in faces if f != prev_face] if avoid_repeat else faces
        face = rng.choice(choices)
        suffix = rng.choices(suffixes, weights=SCRAMBLE_SUFFIX_WEIGHTS)[0]
        moves.append(face + suffix)
        prev_face = face
    return moves

