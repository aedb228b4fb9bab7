import os
import sys
import pytest

# Add the src directory to Python path to import local sparse_ndmatrix
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from sparse_ndmatrix import SparseMatrix, IndexBuilder, MatrixCell
from sparse_ndmatrix import IncompleteIndexError, CoordinateLengthError, NegativeCoordinateError


@pytest.fixture
def cube() -> SparseMatrix:
    return SparseMatrix(ndim=3, default=0)


def test_chained_write_and_read(cube):
    cube[1][2][3] = 7
    assert cube[1][2][3] == 7
    assert cube[1, 2, 3] == 7
    assert cube[1][2, 3] == 7
    assert cube[1, 2][3] == 7
    assert cube[3][2][1] == 0


def test_partial_index_returns_builder(cube):
    b = cube[4]
    assert isinstance(b, IndexBuilder)
    assert b.prefix == (4,)
    assert b.remaining == 2

    b2 = b[5]
    assert isinstance(b2, IndexBuilder)
    assert b2.prefix == (4, 5)
    assert b2.remaining == 1
    # extending does not mutate the original builder
    assert b.prefix == (4,)


def test_interleaved_builders_do_not_interfere(cube):
    row_a = cube[1][1]
    row_b = cube[2][2]
    row_a[3] = 10
    row_b[3] = 20
    # a builder held across other indexing expressions still addresses its own cell
    row_a[4] = cube[2][2][3] + 1
    assert cube[1, 1, 3] == 10
    assert cube[2, 2, 3] == 20
    assert cube[1, 1, 4] == 21
    assert len(cube) == 3


def test_branching_from_shared_prefix(cube):
    plane = cube[0]
    for j in range(3):
        for k in range(3):
            plane[j][k] = j * 3 + k
    # (0, 0, 0) received the default and is not stored
    assert len(cube) == 8
    assert cube[0][2][2] == 8


def test_writing_default_through_chain_erases(cube):
    cube[1][1][1] = 5
    cube[1][1][1] = 0
    assert len(cube) == 0
    assert list(cube) == []


def test_incomplete_write_fails_fast(cube):
    with pytest.raises(IncompleteIndexError):
        cube[1] = 3
    with pytest.raises(IncompleteIndexError):
        cube[1][2] = 3
    with pytest.raises(IncompleteIndexError) as exc:
        cube[1, 2] = 3
    assert exc.value.prefix == (1, 2)
    assert exc.value.action == "write"
    assert len(cube) == 0


def test_incomplete_read_fails_fast(cube):
    partial = cube[1][2]
    with pytest.raises(IncompleteIndexError):
        partial.value
    with pytest.raises(IncompleteIndexError):
        int(partial)
    with pytest.raises(IncompleteIndexError):
        float(partial)
    with pytest.raises(IncompleteIndexError):
        bool(partial)
    with pytest.raises(TypeError):
        list(partial)


def test_too_many_coordinates_fail_fast(cube):
    with pytest.raises(CoordinateLengthError):
        cube[1][2][3, 4]
    with pytest.raises(CoordinateLengthError):
        cube[1, 2, 3, 4]
    with pytest.raises(CoordinateLengthError):
        cube[()]


def test_negative_coordinate_in_chain(cube):
    with pytest.raises(NegativeCoordinateError):
        cube[1][-2]


def test_delete_through_builder(cube):
    cube[0][1][2] = 3
    del cube[0][1][2]
    assert len(cube) == 0
    # deleting an unset cell is a no-op
    del cube[0][1][2]
    with pytest.raises(IncompleteIndexError):
        del cube[0][1]


def test_cell_handle(cube):
    cell = cube.cell(2, 3, 4)
    assert isinstance(cell, MatrixCell)
    assert cell.coord == (2, 3, 4)
    assert cell.value == 0
    assert not cell.is_set

    cell.value = 11
    assert cube[2, 3, 4] == 11
    assert cell.is_set

    cell.set(12)
    assert cell.get() == 12

    cell.delete()
    assert cube[2, 3, 4] == 0
    assert len(cube) == 0


def test_cell_from_builder(cube):
    cube[(5, 6, 7)] = 1
    assert cube.cell((5, 6, 7)).value == 1
    assert cube[5].cell(6, 7).value == 1
    assert cube[5][6].cell(7).value == 1
    with pytest.raises(IncompleteIndexError):
        cube[5].cell(6)
    with pytest.raises(CoordinateLengthError):
        cube.cell(5, 6)


def test_builder_repr(cube):
    assert repr(cube[1][2]) == "IndexBuilder(prefix=(1, 2), remaining=1)"
