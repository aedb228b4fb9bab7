import logging
import numpy as np
import pandas as pd
from scipy import sparse
from typing import Any, Iterator, Optional, Sequence
from dataclasses import replace
from numpy.typing import DTypeLike

from .accessor import IndexBuilder, MatrixCell
from .config import MatrixConfig
from .coordinate import Coordinate, normalize_prefix
from .enumerator import MatrixEnumerator, iter_entries
from .matrix_errors import IncompleteIndexError, InvalidDimensionalityError, UnsupportedExportError
from .sparse_store import SparseStore, values_equal


logger = logging.getLogger(__name__)

_MAX_EXTENT = np.iinfo(np.intp).max


class SparseMatrix:
    """
    Sparse N-dimensional matrix with a fixed default value.

    Reads like a dense array of unbounded extent: every coordinate that was
    never assigned reads as ``default``. Only cells holding a non-default value
    are stored, so ``len(m)`` counts the populated cells and iteration yields
    ``(c_1, ..., c_N, value)`` tuples for those cells in ascending coordinate
    order.

    Cells can be addressed with a full tuple (``m[i, j]``) or one coordinate
    per bracket (``m[i][j]``). Both forms accept python ints and numpy integer
    scalars; coordinates must be non-negative.

    Examples:
        >>> m = SparseMatrix(ndim=2, default=0)
        >>> m[1][2] = 7
        >>> m[1, 2], m[0, 0], len(m)
        (7, 0, 1)
        >>> list(m)
        [(1, 2, 7)]
    """

    def __init__(self, ndim: int = 2, default: Any = 0, dtype: Optional[DTypeLike] = None):
        """
        Initialize an empty sparse matrix.

        Args:
            ndim: Number of coordinate components per cell, at least 2.
            default: Value returned for unassigned cells. Writing it to a cell erases that cell.
            dtype: Optional numpy dtype values are coerced into on write.
        """
        self._init_from_config(MatrixConfig(ndim=ndim, default=default, dtype=dtype))

    def _init_from_config(self, config: MatrixConfig) -> None:
        config.validate()
        self.config = config
        self._store = SparseStore(config=config)
        logger.debug("Created SparseMatrix(ndim=%d, default=%r, dtype=%s)", config.ndim, config.default, config.dtype)

    @classmethod
    def from_config(cls, config: MatrixConfig) -> 'SparseMatrix':
        """Build an empty matrix from a copy of an existing MatrixConfig."""
        m = cls.__new__(cls)
        m._init_from_config(replace(config))
        return m

    @property
    def ndim(self) -> int:
        return self.config.ndim

    @property
    def default(self) -> Any:
        return self.config.default

    @property
    def dtype(self) -> Optional[np.dtype]:
        return self.config.dtype

    def get(self, coord: Sequence[int]) -> Any:
        """Get the value at ``coord`` (the default if the cell is unassigned)."""
        return self._store.get(coord)

    def set(self, coord: Sequence[int], value: Any) -> None:
        """Set the value at ``coord``. Setting the default removes the cell."""
        self._store.set(coord, value)

    def cell(self, *coord) -> MatrixCell:
        """Returns a read/write handle to the cell at ``coord``."""
        if len(coord) == 1 and isinstance(coord[0], tuple):
            coord = coord[0]
        return MatrixCell(self._store, coord)

    def _split_key(self, key) -> Coordinate:
        if not isinstance(key, tuple):
            key = (key,)
        return normalize_prefix(key, self.ndim)

    def __getitem__(self, key):
        """Returns the value at a full coordinate, or an IndexBuilder for a partial one.

        Args:
            key: A single coordinate component, or a tuple of up to ndim components

        Returns:
            The cell value if ndim components were given, otherwise an IndexBuilder
            awaiting the remaining components.
        """
        coord = self._split_key(key)
        if len(coord) == self.ndim:
            return self._store.get(coord)
        return IndexBuilder(self._store, coord)

    def __setitem__(self, key, value: Any) -> None:
        coord = self._split_key(key)
        if len(coord) != self.ndim:
            raise IncompleteIndexError(coord, self.ndim, action="write")
        self._store.set(coord, value)

    def __delitem__(self, key) -> None:
        """Resets the cell at ``key`` to the default value. Deleting an unset cell is a no-op."""
        coord = self._split_key(key)
        if len(coord) != self.ndim:
            raise IncompleteIndexError(coord, self.ndim, action="delete")
        self._store.discard(coord)

    def __contains__(self, coord) -> bool:
        """Checks if ``coord`` holds a non-default value."""
        return coord in self._store

    def size(self) -> int:
        """Returns the number of non-default cells."""
        return self._store.size()

    def __len__(self) -> int:
        return self._store.size()

    def __iter__(self) -> Iterator[tuple]:
        """Iterate over ``(c_1, ..., c_N, value)`` for every non-default cell in coordinate order.

        Do not modify the matrix while iterating.
        """
        return iter_entries(self._store)

    def enumerate(self) -> MatrixEnumerator:
        """Returns a fresh cursor over the non-default cells."""
        return MatrixEnumerator(self._store)

    def entries(self) -> list[tuple[Coordinate, Any]]:
        """Returns a list of (coord, value) pairs in ascending coordinate order."""
        return self._store.entries()

    def keys(self) -> list[Coordinate]:
        return self._store.keys()

    def values(self) -> list[Any]:
        return self._store.values()

    def update(self, entries) -> None:
        """Assign many cells at once.

        Args:
            entries: A mapping of coord -> value, or an iterable of (coord, value) pairs.
        """
        if hasattr(entries, "items"):
            entries = entries.items()
        for coord, value in entries:
            self._store.set(coord, value)

    def clear(self) -> None:
        """Removes all cells from the matrix."""
        self._store.clear()

    def copy(self) -> 'SparseMatrix':
        """Returns a copy of the matrix."""
        result = SparseMatrix.from_config(MatrixConfig(ndim=self.ndim, default=self.default, dtype=self.dtype))
        result._store.data_store = self._store.data_store.copy()
        return result

    def bounds(self) -> tuple[int, ...]:
        """Returns the exclusive upper bound on every axis of the populated cells.

        An empty matrix has bounds of all zeros.
        """
        if len(self._store) == 0:
            return (0,) * self.ndim
        return tuple(max(axis) + 1 for axis in zip(*self._store.data_store))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return (self.ndim == other.ndim
                and values_equal(self.default, other.default)
                and self._store.data_store.keys() == other._store.data_store.keys()
                and all(values_equal(v, other._store.data_store[k]) for k, v in self._store.data_store.items()))

    __hash__ = None

    def __repr__(self) -> str:
        """String representation of the matrix."""
        if len(self._store) == 0:
            return f"SparseMatrix(ndim={self.ndim}, default={self.default!r}, {{}})"
        items_str = ", ".join(f"{k}: {v!r}" for k, v in self._store.entries())
        return f"SparseMatrix(ndim={self.ndim}, default={self.default!r}, {{{items_str}}})"

    def _result_dtype(self) -> np.dtype:
        if self.dtype is not None:
            return self.dtype
        samples = [self.default] + self._store.values()
        if any(np.ndim(v) > 0 for v in samples):
            return np.dtype(object)
        kinds = {np.asarray(v).dtype.kind for v in samples}
        # mixing e.g. ints and strings must not stringify the default
        if len(kinds) > 1 and not kinds <= set("biufc"):
            return np.dtype(object)
        return np.asarray(samples).dtype

    def to_dense(self, shape: Optional[Sequence[int]] = None, origin: Optional[Sequence[int]] = None) -> np.ndarray:
        """Materialise a rectangular window of the matrix as a dense numpy array.

        Args:
            shape: Extent of the window on every axis. Defaults to everything from origin up to bounds().
            origin: Coordinate of the window's first cell. Defaults to all zeros.

        Returns:
            Array of the given shape, filled with the default wherever no cell is stored.
        """
        origin = (0,) * self.ndim if origin is None else normalize_prefix(origin, self.ndim)
        if len(origin) != self.ndim:
            raise IncompleteIndexError(origin, self.ndim, action="use as window origin")
        if shape is None:
            shape = tuple(max(b - o, 0) for b, o in zip(self.bounds(), origin))
        else:
            shape = normalize_prefix(shape, self.ndim)
            if len(shape) != self.ndim:
                raise IncompleteIndexError(shape, self.ndim, action="use as window shape")
        if any(s > _MAX_EXTENT for s in shape):
            raise UnsupportedExportError("numpy.ndarray", f"window shape {shape} exceeds the addressable array size")

        try:
            dense = np.full(shape, self.default, dtype=self._result_dtype())
        except (ValueError, MemoryError) as e:
            raise UnsupportedExportError("numpy.ndarray", f"cannot allocate window of shape {shape}: {e}") from e
        for coord, value in self._store.data_store.items():
            if all(o <= c < o + s for c, o, s in zip(coord, origin, shape)):
                dense[tuple(c - o for c, o in zip(coord, origin))] = value
        logger.debug("Materialised window origin=%s shape=%s", origin, shape)
        return dense

    @classmethod
    def from_dense(cls, array, default: Any = 0, dtype: Optional[DTypeLike] = None) -> 'SparseMatrix':
        """Build a sparse matrix from the non-default elements of a dense array."""
        array = np.asarray(array)
        if array.ndim < 2:
            raise InvalidDimensionalityError(array.ndim)
        m = cls(ndim=array.ndim, default=default, dtype=array.dtype if dtype is None else dtype)
        for idx in np.argwhere(array != m.default):
            coord = tuple(idx.tolist())
            m._store.set(coord, array[coord])
        logger.debug("Loaded %d cells from dense array of shape %s", len(m), array.shape)
        return m

    def coord_columns(self) -> list[str]:
        return [f"dim_{axis}" for axis in range(self.ndim)]

    def to_frame(self, value_column: str = "value") -> pd.DataFrame:
        """Returns the populated cells as a DataFrame, one row per cell in coordinate order.

        Columns are ``dim_0 .. dim_{N-1}`` followed by ``value_column``.
        """
        columns = self.coord_columns() + [value_column]
        rows = [coord + (value,) for coord, value in self._store.entries()]
        if len(rows) == 0:
            df = pd.DataFrame({c: pd.Series(dtype=np.int64) for c in self.coord_columns()})
            df[value_column] = pd.Series(dtype=self._result_dtype())
            return df
        df = pd.DataFrame(rows, columns=columns)
        if self.dtype is not None:
            df[value_column] = df[value_column].astype(self.dtype)
        return df

    @classmethod
    def from_frame(cls, df: pd.DataFrame,
                   coord_columns: Optional[list[str]] = None,
                   value_column: str = "value",
                   default: Any = 0,
                   dtype: Optional[DTypeLike] = None) -> 'SparseMatrix':
        """
        Build a sparse matrix from a DataFrame with one row per cell.

        Args:
            df: Frame holding coordinate columns and a value column.
            coord_columns: Coordinate column names in axis order. Defaults to every ``dim_*`` column.
            value_column: Name of the value column.
            default: Default value of the new matrix. Rows holding it are not stored.
            dtype: Optional element dtype.

        Rows are applied in order, so for repeated coordinates the last row wins.
        """
        if coord_columns is None:
            coord_columns = sorted((c for c in df.columns if str(c).startswith("dim_")),
                                   key=lambda c: int(str(c)[len("dim_"):]))
        for col in coord_columns + [value_column]:
            assert col in df.columns, f"Column \"{col}\" not found in DataFrame"

        m = cls(ndim=len(coord_columns), default=default, dtype=dtype)
        coords = df[coord_columns].to_numpy()
        values = df[value_column].to_numpy()
        for coord, value in zip(coords, values):
            m._store.set(tuple(coord.tolist()), value)
        logger.debug("Loaded %d cells from %d DataFrame rows", len(m), len(df))
        return m

    def to_coo(self, shape: Optional[Sequence[int]] = None) -> sparse.coo_array:
        """Export a 2-D matrix with a zero default to a scipy COO array.

        Args:
            shape: Shape of the exported array. Defaults to bounds().
        """
        if self.ndim != 2:
            raise UnsupportedExportError("scipy.sparse.coo_array", f"only 2-D matrices can be exported, this one has ndim={self.ndim}")
        if isinstance(self.default, (str, bytes)) or not np.isscalar(self.default) or self.default != 0:
            raise UnsupportedExportError("scipy.sparse.coo_array", f"the default value must be 0, got {self.default!r}")

        bounds = self.bounds()
        shape = bounds if shape is None else normalize_prefix(shape, self.ndim)
        if any(s > np.iinfo(np.int64).max for s in shape):
            raise UnsupportedExportError("scipy.sparse.coo_array", f"shape {tuple(shape)} exceeds the int64 index range")
        if len(shape) != 2 or any(s < b for s, b in zip(shape, bounds)):
            raise UnsupportedExportError("scipy.sparse.coo_array", f"shape {tuple(shape)} does not cover populated bounds {bounds}")

        entries = self._store.entries()
        rows = np.array([c[0] for c, _ in entries], dtype=np.int64)
        cols = np.array([c[1] for c, _ in entries], dtype=np.int64)
        data = np.array([v for _, v in entries], dtype=self._result_dtype())
        logger.debug("Exporting %d cells to scipy COO with shape %s", len(entries), tuple(shape))
        return sparse.coo_array((data, (rows, cols)), shape=tuple(shape))
