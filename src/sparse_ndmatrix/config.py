import numpy as np
from typing import Any, Optional
from numpy.typing import DTypeLike
from dataclasses import dataclass

from .matrix_errors import InvalidDimensionalityError, InvalidDTypeError


@dataclass
class MatrixConfig:
    """
    Configuration for a sparse N-dimensional matrix.

    The configuration is fixed for the lifetime of a matrix: the number of
    coordinate components, the value returned for unassigned cells, and
    optionally the element dtype values are coerced into on write.
    """

    ndim: int = 2
    """Number of coordinate components per cell. Must be at least 2."""

    default: Any = 0
    """Value returned for every unassigned coordinate. Assigning it to a cell removes that cell."""

    dtype: Optional[DTypeLike] = None
    """Element dtype. If None values are stored as given, otherwise they are coerced with numpy:
    - the default is coerced at validation time
    - every written value is coerced before it is compared against the default
    """

    def validate(self) -> None:
        """Validate configuration parameters, normalising dtype and default in place."""
        if isinstance(self.ndim, bool) or not isinstance(self.ndim, (int, np.integer)):
            raise InvalidDimensionalityError(self.ndim)
        if self.ndim < 2:
            raise InvalidDimensionalityError(self.ndim)
        self.ndim = int(self.ndim)

        if self.dtype is not None:
            try:
                self.dtype = np.dtype(self.dtype)
            except TypeError as e:
                raise InvalidDTypeError(self.dtype, reason=str(e)) from e
            self.default = self.coerce(self.default)

    def coerce(self, value: Any) -> Any:
        """Coerce a value into the configured dtype (identity when no dtype is set)."""
        if self.dtype is None:
            return value
        try:
            return np.dtype(self.dtype).type(value)
        except (TypeError, ValueError, OverflowError) as e:
            raise InvalidDTypeError(self.dtype, default=value, reason=f"cannot hold value {value!r}") from e
