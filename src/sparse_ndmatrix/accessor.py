"""
Chained indexing for sparse matrices.

``m[a][b][c]`` is evaluated one bracket at a time. Every bracket before the
last returns an ``IndexBuilder`` carrying the coordinates seen so far; the
last bracket resolves against the store. Builders are immutable, so a
partially indexed builder can be kept around, reused or branched from
without affecting any other indexing expression on the same matrix.
"""

from typing import Any

from .coordinate import Coordinate, normalize_coordinate, normalize_prefix
from .matrix_errors import CoordinateLengthError, IncompleteIndexError
from .sparse_store import SparseStore


class MatrixCell:
    """Read/write handle to a single fully addressed cell."""

    __slots__ = ("_store", "coord")

    def __init__(self, store: SparseStore, coord: Coordinate):
        self._store = store
        self.coord = normalize_coordinate(coord, store.ndim)

    def get(self) -> Any:
        return self._store.get(self.coord)

    def set(self, value: Any) -> None:
        self._store.set(self.coord, value)

    def delete(self) -> None:
        """Reset the cell to the default value."""
        self._store.discard(self.coord)

    @property
    def value(self) -> Any:
        return self.get()

    @value.setter
    def value(self, value: Any) -> None:
        self.set(value)

    @property
    def is_set(self) -> bool:
        """True if the cell currently holds a non-default value."""
        return self.coord in self._store

    def __repr__(self) -> str:
        return f"MatrixCell({self.coord!r}, value={self.get()!r})"


class IndexBuilder:
    """Partially applied index: holds between 1 and ndim - 1 coordinates."""

    __slots__ = ("_store", "prefix")

    def __init__(self, store: SparseStore, prefix: Coordinate):
        prefix = normalize_prefix(prefix, store.ndim)
        if not 0 < len(prefix) < store.ndim:
            raise CoordinateLengthError(prefix, store.ndim)
        self._store = store
        self.prefix = prefix

    @property
    def remaining(self) -> int:
        """Number of coordinates still needed to address a cell."""
        return self._store.ndim - len(self.prefix)

    def _extend(self, key) -> Coordinate:
        if not isinstance(key, tuple):
            key = (key,)
        return normalize_prefix(self.prefix + key, self._store.ndim)

    def __getitem__(self, key):
        coord = self._extend(key)
        if len(coord) < self._store.ndim:
            return IndexBuilder(self._store, coord)
        return self._store.get(coord)

    def __setitem__(self, key, value: Any) -> None:
        coord = self._extend(key)
        if len(coord) < self._store.ndim:
            raise IncompleteIndexError(coord, self._store.ndim, action="write")
        self._store.set(coord, value)

    def __delitem__(self, key) -> None:
        coord = self._extend(key)
        if len(coord) < self._store.ndim:
            raise IncompleteIndexError(coord, self._store.ndim, action="delete")
        self._store.discard(coord)

    def cell(self, *key) -> MatrixCell:
        """Resolve the remaining coordinates into a cell handle."""
        coord = normalize_prefix(self.prefix + key, self._store.ndim)
        if len(coord) < self._store.ndim:
            raise IncompleteIndexError(coord, self._store.ndim, action="resolve")
        return MatrixCell(self._store, coord)

    # an incomplete index has no value
    @property
    def value(self):
        raise IncompleteIndexError(self.prefix, self._store.ndim)

    def __bool__(self):
        raise IncompleteIndexError(self.prefix, self._store.ndim)

    def __int__(self):
        raise IncompleteIndexError(self.prefix, self._store.ndim)

    def __float__(self):
        raise IncompleteIndexError(self.prefix, self._store.ndim)

    def __iter__(self):
        # without this python would fall back to calling __getitem__(0), (1), ...
        raise TypeError(f"'{type(self).__name__}' object is not iterable")

    def __repr__(self) -> str:
        return f"IndexBuilder(prefix={self.prefix!r}, remaining={self.remaining})"
