import logging
import numpy as np
from typing import Any
from dataclasses import dataclass, field

from .config import MatrixConfig
from .coordinate import Coordinate, normalize_coordinate


logger = logging.getLogger(__name__)


def values_equal(a: Any, b: Any) -> bool:
    """Equality that also works for numpy array elements (shape and contents must match)."""
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return np.array_equal(a, b)
    return bool(a == b)


@dataclass
class SparseStore:
    config: MatrixConfig = field(default_factory=MatrixConfig)
    data_store: dict[Coordinate, Any] = field(default_factory=dict)

    @property
    def ndim(self) -> int:
        return self.config.ndim

    @property
    def default(self) -> Any:
        return self.config.default

    def get(self, coord) -> Any:
        """Returns the value at ``coord``.

        Args:
            coord: Sequence of exactly ndim non-negative integers

        Returns:
            The stored value, or the configured default if the cell was never assigned.
        """
        return self.data_store.get(normalize_coordinate(coord, self.ndim), self.default)

    def set(self, coord, value: Any) -> None:
        """Sets the value at ``coord``.

        Assigning the default value removes the cell instead of storing it,
        so the store never holds a default-valued entry.

        Args:
            coord: Sequence of exactly ndim non-negative integers
            value: The value to set.
        """
        key = normalize_coordinate(coord, self.ndim)
        value = self.config.coerce(value)
        if values_equal(value, self.default):
            # Remove default values to maintain sparsity
            self.data_store.pop(key, None)
        else:
            self.data_store[key] = value

    def discard(self, coord) -> None:
        """Removes the cell at ``coord`` if present."""
        self.data_store.pop(normalize_coordinate(coord, self.ndim), None)

    def size(self) -> int:
        """Returns the number of non-default cells."""
        return len(self.data_store)

    def __len__(self) -> int:
        return len(self.data_store)

    def __contains__(self, coord) -> bool:
        """Checks if ``coord`` holds a non-default value.

        Malformed coordinates are simply not contained.
        """
        try:
            key = normalize_coordinate(coord, self.ndim)
        except (IndexError, ValueError):
            return False
        return key in self.data_store

    def keys(self) -> list[Coordinate]:
        """Returns the coordinates of non-default cells in ascending lexicographic order."""
        return sorted(self.data_store)

    def values(self) -> list[Any]:
        """Returns the values of non-default cells, ordered by coordinate."""
        return [self.data_store[k] for k in self.keys()]

    def entries(self) -> list[tuple[Coordinate, Any]]:
        """Returns a list of (coord, value) pairs in ascending coordinate order.

        Returns:
            List of tuples containing (coord, value) pairs.
        """
        return [(k, self.data_store[k]) for k in self.keys()]

    def clear(self) -> None:
        """Removes all cells from the store."""
        logger.debug("Clearing %d cells from sparse store", len(self.data_store))
        self.data_store.clear()

    def copy(self) -> 'SparseStore':
        """Returns a copy of the store sharing the same configuration."""
        return SparseStore(config=self.config, data_store=self.data_store.copy())

    def __repr__(self) -> str:
        """String representation of the store."""
        if not self.data_store:
            return f"SparseStore(ndim={self.ndim}, default={self.default!r}, {{}})"
        items_str = ", ".join(f"{k}: {v!r}" for k, v in self.entries())
        return f"SparseStore(ndim={self.ndim}, default={self.default!r}, {{{items_str}}})"
