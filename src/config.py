"""config.py — project configuration
------------------------------------

This file centralizes the runtime constants for the scramble/replay cube
service. These are *defaults*; the HTTP binding can be overridden from the
command line (`main.py serve --host ... --port ...`).

Notes / warnings
- FACE_ORDER is load-bearing: the face index 0..5 is used everywhere
  (cube grids, strip tables in `cube_moves`, JSON snapshots). Changing it
  silently re-wires every move.
- Colors are single characters and are treated as opaque symbols.

-------------------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. Licensed under MIT License.
"""

from typing import Dict, List, Tuple

# ---------------- Rubik cube configurations ----------------

# Canonical face order: U=0, D=1, F=2, B=3, L=4, R=5.
FACE_ORDER: List[str] = ['U', 'D', 'F', 'B', 'L', 'R']

# Canonical (solved) color of every face.
FACE_TO_COLOR: Dict[str, str] = {'U': 'W', 'D': 'Y', 'F': 'R', 'B': 'O', 'L': 'B', 'R': 'G'}

# Edge length of a face grid. The move tables only make sense for 3.
GRID_SIZE: int = 3

# Move suffix -> number of clockwise quarter turns.
# '' = clockwise, "'" = counter-clockwise (three clockwise turns), '2' = half turn.
MOVE_SUFFIXES: Dict[str, int] = {'': 1, "'": 3, '2': 2}

# Weights used by the random scramble generator for ('', "'", '2').
# Biased towards single quarter turns.
SCRAMBLE_SUFFIX_WEIGHTS: Tuple[int, int, int] = (70, 15, 15)
DEFAULT_RANDOM_SCRAMBLE_LENGTH: int = 25


# ---------------- HTTP server ----------------

SERVER_HOST: str = "127.0.0.1"
SERVER_PORT: int = 8000

# Query parameter carrying the space-separated move tokens.
SCRAMBLE_PARAM: str = "scramble"

JSON_CONTENT_TYPE: str = "application/json; charset=utf-8"
