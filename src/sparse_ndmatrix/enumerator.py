from typing import Any, Iterator, Optional

from .coordinate import Coordinate
from .sparse_store import SparseStore


def iter_entries(store: SparseStore) -> Iterator[tuple]:
    """Lazily yield ``(c_1, ..., c_N, value)`` for every non-default cell.

    Cells are produced in ascending lexicographic coordinate order and each
    value is read when its tuple is produced. Every call starts a fresh pass.
    Mutating the store while a pass is in flight is undefined behaviour.
    """
    for coord in sorted(store.data_store):
        yield coord + (store.data_store[coord],)


class MatrixEnumerator:
    """Explicit cursor over the non-default cells of a store.

    Behaves as a normal python iterator, and additionally exposes the current
    position so two cursors can be compared. Cursors over the same store are
    equal when they point at the same cell; all exhausted cursors over the same
    store are equal to each other.
    """

    def __init__(self, store: SparseStore):
        self._store = store
        self._keys = sorted(store.data_store)
        self._index = 0

    @property
    def at_end(self) -> bool:
        return self._index >= len(self._keys)

    @property
    def position(self) -> Optional[Coordinate]:
        """Coordinate of the next cell to be produced, or None at the end."""
        if self.at_end:
            return None
        return self._keys[self._index]

    def peek(self) -> tuple:
        if self.at_end:
            raise StopIteration
        coord = self._keys[self._index]
        return coord + (self._store.data_store[coord],)

    def __iter__(self) -> 'MatrixEnumerator':
        return self

    def __next__(self) -> tuple:
        entry = self.peek()
        self._index += 1
        return entry

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, MatrixEnumerator):
            return NotImplemented
        return self._store is other._store and self.position == other.position

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __repr__(self) -> str:
        if self.at_end:
            return "MatrixEnumerator(<end>)"
        return f"MatrixEnumerator(position={self.position!r})"
