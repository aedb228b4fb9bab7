import os
import sys
import pytest

# Add the src directory to Python path to import local sparse_ndmatrix
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from sparse_ndmatrix import SparseMatrix, MatrixEnumerator


@pytest.fixture
def matrix() -> SparseMatrix:
    m = SparseMatrix(ndim=2, default=0)
    m[3][1] = 'd'
    m[0][7] = 'b'
    m[0][2] = 'a'
    m[1][0] = 'c'
    return m


def test_empty_matrix_yields_nothing():
    m = SparseMatrix(ndim=4)
    it = iter(m)
    with pytest.raises(StopIteration):
        next(it)

    cursor = m.enumerate()
    assert cursor.at_end
    assert cursor.position is None
    assert cursor == m.enumerate()


def test_iteration_yields_flat_tuples_in_order(matrix):
    assert list(matrix) == [(0, 2, 'a'), (0, 7, 'b'), (1, 0, 'c'), (3, 1, 'd')]


def test_iteration_is_restartable(matrix):
    it = iter(matrix)
    assert next(it) == (0, 2, 'a')
    # a fresh pass starts from the beginning, independent of the partial one
    assert list(matrix) == [(0, 2, 'a'), (0, 7, 'b'), (1, 0, 'c'), (3, 1, 'd')]
    assert next(it) == (0, 7, 'b')


def test_iteration_is_lazy():
    m = SparseMatrix(ndim=2)
    m[0][0] = 1
    m[0][1] = 2
    it = iter(m)
    assert next(it) == (0, 0, 1)
    # values are read when produced
    m[0][1] = 5
    assert next(it) == (0, 1, 5)


def test_unpacking_in_for_loop(matrix):
    seen = []
    for x, y, value in matrix:
        seen.append((x, y))
        assert matrix[x][y] == value
    assert seen == sorted(seen)
    assert len(seen) == len(matrix)


def test_cursor_positions(matrix):
    a = matrix.enumerate()
    b = matrix.enumerate()
    assert isinstance(a, MatrixEnumerator)
    assert a == b
    assert a.position == (0, 2)
    assert a.peek() == (0, 2, 'a')

    next(a)
    assert a != b
    assert a.position == (0, 7)
    next(b)
    assert a == b


def test_cursor_end_positions_are_equal(matrix):
    a = matrix.enumerate()
    b = matrix.enumerate()
    assert list(a) == list(matrix)
    assert a.at_end
    for _ in b:
        pass
    assert a == b
    with pytest.raises(StopIteration):
        next(a)


def test_cursors_over_different_matrices_differ(matrix):
    other = matrix.copy()
    assert matrix.enumerate() != other.enumerate()


def test_higher_dimensional_order():
    m = SparseMatrix(ndim=3, default=None)
    coords = [(1, 0, 0), (0, 1, 0), (0, 0, 1), (0, 1, 1), (1, 1, 1)]
    for c in coords:
        m[c] = sum(c)
    assert [e[:3] for e in m] == sorted(coords)
    assert all(len(e) == 4 for e in m)
