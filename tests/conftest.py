import pytest

from api import create_app
from app_types import Face
from cube_state import CubeState, FacletGrid


def make_labelled_cube() -> CubeState:
    """Every facelet gets a unique label like 'F12' so permutations are visible."""
    cube = CubeState()
    for f in Face:
        cube.faces[f] = FacletGrid([[f"{f.name}{r}{c}" for c in range(3)] for r in range(3)])
    return cube


@pytest.fixture
def labelled_cube():
    return make_labelled_cube()


@pytest.fixture
def client():
    app = create_app()
    with app.test_client() as c:
        yield c
