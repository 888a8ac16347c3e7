"""
scramble_session.py — scramble, replay the inverse, verify
===========================================================

`ScrambleSession` owns one `CubeState` and its history for the lifetime of a
single request:

    init -> scrambling -> solving -> done

1. init: cube reset, history = [solved], recorded moves = [].
2. scrambling: every token is applied (unknown ones as no-ops) and a
   snapshot is appended after each, so len(states) == 1 + len(tokens).
3. solving: the scramble is walked back to front; each vocabulary token is
   inverted, applied and recorded. Unknown tokens still take a step and a
   snapshot but record nothing.
4. done: the final cube is checked against the solved reference and any
   mismatching facelets are listed.

This only ever undoes a scramble it applied itself. It is not a solver for
an arbitrary cube state.

Sessions are not shared: create one per request.

--------------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. Licensed under MIT License.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple, Union

from app_types import SolveResult, Snapshot
from cube_moves import apply_move, invert_move, tokenize
from cube_state import CubeState

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

INIT = "init"
SCRAMBLING = "scrambling"
SOLVING = "solving"
DONE = "done"


class ScrambleSession:
    def __init__(self):
        self.cube = CubeState()
        self.states: List[Snapshot] = []
        self.moves: List[str] = []
        self.scramble_tokens: List[str] = []
        self.phase = INIT
        self.reset()

    def _store_state(self) -> None:
        self.states.append(self.cube.snapshot())

    def reset(self) -> None:
        self.cube.reset()
        self.states = []
        self.moves = []
        self.scramble_tokens = []
        self.phase = INIT
        self._store_state()  # index 0 = solved initial

    def _expect(self, phase: str) -> None:
        if self.phase != phase:
            raise RuntimeError(f"session is in phase {self.phase!r}, expected {phase!r}")

    def scramble(self, tokens: Sequence[str]) -> None:
        """Apply the scramble, one snapshot per token (valid or not)."""
        self._expect(INIT)
        self.phase = SCRAMBLING
        self.scramble_tokens = list(tokens)
        for tok in self.scramble_tokens:
            apply_move(self.cube, tok)
            self._store_state()
        logger.debug("Scrambled with %d tokens", len(self.scramble_tokens))

    def solve(self) -> None:
        """Replay the inverse of the scramble, recording each applied move."""
        self._expect(SCRAMBLING)
        self.phase = SOLVING
        for tok in reversed(self.scramble_tokens):
            inv = invert_move(tok)
            if inv is not None:
                apply_move(self.cube, inv)
                self.moves.append(inv)
            self._store_state()
        logger.debug("Replayed inverse: %s", " ".join(self.moves))

    def finish(self) -> SolveResult:
        self._expect(SOLVING)
        self.phase = DONE
        solved = self.cube.is_solved()
        mismatches = [] if solved else self.cube.mismatches()
        if not solved:
            logger.warning("Final cube not solved: %d mismatching facelets", len(mismatches))
        return SolveResult(
            states=list(self.states),
            moves=list(self.moves),
            scramble_length=len(self.scramble_tokens),
            final_solved=solved,
            mismatches=mismatches,
        )

    def run(self, tokens: Sequence[str]) -> SolveResult:
        """Full cycle from a fresh reset."""
        self.reset()
        self.scramble(tokens)
        self.solve()
        return self.finish()


def run_scramble(scramble: Optional[Union[str, Sequence[str]]]) -> Tuple[bool, Union[SolveResult, str]]:
    """
    Drive one session for a raw scramble string (or token list).
    Returns (True, SolveResult) on success or (False, message) if anything raised.
    """
    try:
        tokens = tokenize(scramble) if scramble is None or isinstance(scramble, str) else list(scramble)
        result = ScrambleSession().run(tokens)
        logger.debug(
            "Session done: scramble=%d moves=%d states=%d solved=%s",
            result.scramble_length, len(result.moves), len(result.states), result.final_solved,
        )
        return True, result
    except Exception as e:
        logger.exception("Scramble session failed: %s", e)
        return False, str(e) or e.__class__.__name__
