import random

import pytest

from app_types import Face, Move
from conftest import make_labelled_cube
from cube_moves import (
    _STRIPS,
    VOCABULARY,
    apply,
    apply_move,
    apply_sequence,
    invert_move,
    invert_sequence,
    parse_move,
    random_scramble,
    tokenize,
)
from cube_state import CubeState

FACES = "UDFBLR"


def _at(snap, face, r, c):
    return snap[Face[face]][r][c]


def _turned(token):
    cube = make_labelled_cube()
    old = cube.snapshot()
    assert apply_move(cube, token)
    return old, cube.snapshot()


# ---------- vocabulary / parsing ----------

def test_vocabulary_has_eighteen_tokens():
    assert sorted(VOCABULARY) == sorted(f + s for f in FACES for s in ("", "'", "2"))
    assert len(VOCABULARY) == 18


@pytest.mark.parametrize("token, face, turns", [("U", Face.U, 1), ("R'", Face.R, 3), ("B2", Face.B, 2)])
def test_parse_move(token, face, turns):
    assert parse_move(token) == Move(face, turns)
    assert parse_move(token).token == token


@pytest.mark.parametrize("token", ["Q", "u", "r'", "R3", "R'2", "RR", "", " R", "M", "x"])
def test_unknown_tokens_are_noops(token, labelled_cube):
    before = labelled_cube.snapshot()
    assert parse_move(token) is None
    assert apply_move(labelled_cube, token) is False
    assert labelled_cube.snapshot() == before


def test_move_rejects_bad_turn_count():
    with pytest.raises(ValueError):
        Move(Face.U, 4)


def test_tokenize_collapses_whitespace():
    assert tokenize("  U   R\tU'\n ") == ["U", "R", "U'"]
    assert tokenize("") == []
    assert tokenize("   ") == []
    assert tokenize(None) == []


# ---------- inversion ----------

@pytest.mark.parametrize("token, inverse", [("U", "U'"), ("U'", "U"), ("U2", "U2"), ("L", "L'"), ("F'", "F"), ("D2", "D2")])
def test_invert_move(token, inverse):
    assert invert_move(token) == inverse


def test_invert_sequence_reverses_and_inverts():
    assert invert_sequence(["U", "R", "U'"]) == ["U", "R'", "U'"]
    assert invert_sequence(["F2", "B'", "L"]) == ["L'", "B", "F2"]
    assert invert_sequence([]) == []


def test_invert_sequence_drops_unknown_tokens():
    assert invert_move("Q") is None
    assert invert_sequence(["U", "Q", "R"]) == ["R'", "U'"]


# ---------- closure laws ----------

@pytest.mark.parametrize("face", FACES)
def test_four_quarter_turns_restore_state(face, labelled_cube):
    before = labelled_cube.snapshot()
    for _ in range(4):
        apply_move(labelled_cube, face)
    assert labelled_cube.snapshot() == before


@pytest.mark.parametrize("face", FACES)
def test_move_then_inverse_restores_state(face, labelled_cube):
    before = labelled_cube.snapshot()
    apply_move(labelled_cube, face)
    apply_move(labelled_cube, face + "'")
    assert labelled_cube.snapshot() == before
    apply_move(labelled_cube, face + "'")
    apply_move(labelled_cube, face)
    assert labelled_cube.snapshot() == before
    apply_move(labelled_cube, face + "2")
    apply_move(labelled_cube, face + "2")
    assert labelled_cube.snapshot() == before


@pytest.mark.parametrize("face", FACES)
def test_prime_is_three_turns_and_double_is_two(face):
    a, b = make_labelled_cube(), make_labelled_cube()
    apply_move(a, face + "'")
    apply_sequence(b, [face] * 3)
    assert a == b

    a, b = make_labelled_cube(), make_labelled_cube()
    apply_move(a, face + "2")
    apply_sequence(b, [face, face])
    assert a == b


@pytest.mark.parametrize("face", FACES)
def test_turn_moves_face_and_adjacent_strips(face):
    old, new = _turned(face)
    changed = {
        (f, r, c)
        for f in range(6) for r in range(3) for c in range(3)
        if old[f][r][c] != new[f][r][c]
    }
    on_face = {x for x in changed if x[0] == Face[face]}
    assert len(on_face) == 8
    assert len(changed) == 20
    # the opposite face never moves
    opposite = {"U": "D", "D": "U", "F": "B", "B": "F", "L": "R", "R": "L"}[face]
    assert not any(x[0] == Face[opposite] for x in changed)


# ---------- strip tables (source -> destination) ----------

def test_u_cycles_top_rows_front_right_back_left():
    old, new = _turned("U")
    for i in range(3):
        assert _at(new, "R", 0, i) == _at(old, "F", 0, i)
        assert _at(new, "B", 0, i) == _at(old, "R", 0, i)
        assert _at(new, "L", 0, i) == _at(old, "B", 0, i)
        assert _at(new, "F", 0, i) == _at(old, "L", 0, i)


def test_d_cycles_bottom_rows_front_left_back_right():
    old, new = _turned("D")
    for i in range(3):
        assert _at(new, "L", 2, i) == _at(old, "F", 2, i)
        assert _at(new, "B", 2, i) == _at(old, "L", 2, i)
        assert _at(new, "R", 2, i) == _at(old, "B", 2, i)
        assert _at(new, "F", 2, i) == _at(old, "R", 2, i)


def test_f_cycles_around_front():
    old, new = _turned("F")
    for i in range(3):
        assert _at(new, "R", i, 0) == _at(old, "U", 2, i)
        assert _at(new, "D", 0, 2 - i) == _at(old, "R", i, 0)
        assert _at(new, "L", i, 2) == _at(old, "D", 0, i)
        assert _at(new, "U", 2, i) == _at(old, "L", 2 - i, 2)


def test_b_cycles_around_back():
    old, new = _turned("B")
    for i in range(3):
        assert _at(new, "L", 2 - i, 0) == _at(old, "U", 0, i)
        assert _at(new, "D", 2, i) == _at(old, "L", i, 0)
        assert _at(new, "R", i, 2) == _at(old, "D", 2, 2 - i)
        assert _at(new, "U", 0, i) == _at(old, "R", i, 2)


def test_l_reverses_through_back_right_column():
    old, new = _turned("L")
    for i in range(3):
        assert _at(new, "F", i, 0) == _at(old, "U", i, 0)
        assert _at(new, "D", i, 0) == _at(old, "F", i, 0)
        assert _at(new, "B", 2 - i, 2) == _at(old, "D", i, 0)
        assert _at(new, "U", i, 0) == _at(old, "B", 2 - i, 2)


def test_r_reverses_through_back_left_column():
    old, new = _turned("R")
    for i in range(3):
        assert _at(new, "B", 2 - i, 0) == _at(old, "U", i, 2)
        assert _at(new, "D", i, 2) == _at(old, "B", 2 - i, 0)
        assert _at(new, "F", i, 2) == _at(old, "D", i, 2)
        assert _at(new, "U", i, 2) == _at(old, "F", i, 2)


def test_r_on_solved_cube_moves_front_column_to_up():
    cube = CubeState()
    front_right = [row[2] for row in cube.grid(Face.F).cells]
    apply_move(cube, "R")
    assert [row[2] for row in cube.grid(Face.U).cells] == front_right == ['R', 'R', 'R']
    assert [row[0] for row in cube.grid(Face.B).cells] == ['W', 'W', 'W']


def test_counter_clockwise_runs_the_cycle_backwards():
    old, new = _turned("R'")
    for i in range(3):
        assert _at(new, "F", i, 2) == _at(old, "U", i, 2)
        assert _at(new, "U", i, 2) == _at(old, "B", 2 - i, 0)


def test_strip_table_has_four_strips_of_three_cells():
    assert set(_STRIPS) == set(Face)
    for f in Face:
        strips = _STRIPS[f]
        assert len(strips) == 4
        assert all(len(cells) == 3 for _, cells in strips)
        assert f not in {face for face, _ in strips}


# ---------- sequences / scrambles ----------

def test_apply_sequence_returns_applied_tokens():
    cube = CubeState()
    assert apply_sequence(cube, "R  Q U'") == ["R", "U'"]
    assert apply_sequence(cube, ["U", "R'"]) == ["U", "R'"]
    assert cube.is_solved()


def test_apply_takes_parsed_moves():
    cube = CubeState()
    apply(Move(Face.F, 2), cube)
    assert not cube.is_solved()
    apply(Move(Face.F, 2), cube)
    assert cube.is_solved()


def test_scramble_then_inverse_is_solved():
    rng = random.Random(2024)
    for _ in range(20):
        seq = random_scramble(30, rng)
        cube = CubeState()
        apply_sequence(cube, seq)
        apply_sequence(cube, invert_sequence(seq))
        assert cube.is_solved()


def test_random_scramble_is_deterministic_for_fixed_seed():
    assert random_scramble(40, random.Random(7)) == random_scramble(40, random.Random(7))


def test_random_scramble_tokens_and_faces():
    seq = random_scramble(200, random.Random(99))
    assert len(seq) == 200
    assert all(tok in VOCABULARY for tok in seq)
    for prev, nxt in zip(seq, seq[1:]):
        assert prev[0] != nxt[0]
    assert random_scramble(0) == []


def test_random_scramble_rejects_negative_length():
    with pytest.raises(ValueError):
        random_scramble(-1)
