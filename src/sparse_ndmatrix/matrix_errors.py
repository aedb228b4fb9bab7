class MatrixConfigError(ValueError):
    """Base class for sparse matrix configuration errors."""
    pass

class MatrixContractError(ValueError):
    """Base class for misuse of the matrix indexing contract."""
    pass



class InvalidDimensionalityError(MatrixConfigError):
    """Raised when a matrix is configured with fewer than two dimensions."""

    def __init__(self, ndim, min_ndim: int = 2):
        self.ndim = ndim
        self.min_ndim = min_ndim
        message = f"Invalid dimensionality {ndim!r}. A sparse matrix needs an integer ndim >= {min_ndim}"
        super().__init__(message)


class InvalidDTypeError(MatrixConfigError):
    """Raised when the element dtype cannot be understood or cannot hold the default value."""

    def __init__(self, dtype, default=None, reason: str = ""):
        self.dtype = dtype
        self.default = default
        self.reason = reason
        message = f"Invalid element dtype {dtype!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class CoordinateError(MatrixContractError, IndexError):
    """Base class for coordinates that do not address a cell of the matrix."""
    pass


class CoordinateLengthError(CoordinateError):
    """Raised when a coordinate does not have exactly ndim components."""

    def __init__(self, coord, ndim: int):
        self.coord = coord
        self.ndim = ndim
        message = f"Coordinate {coord!r} has {len(coord)} components, expected {ndim}"
        super().__init__(message)


class NegativeCoordinateError(CoordinateError):
    """Raised when a coordinate component is negative."""

    def __init__(self, coord, axis: int):
        self.coord = coord
        self.axis = axis
        message = f"Coordinate {coord!r} has a negative component on axis {axis}"
        super().__init__(message)


class InvalidCoordinateTypeError(CoordinateError):
    """Raised when a coordinate component is not an integer."""

    def __init__(self, component, axis: int):
        self.component = component
        self.axis = axis
        message = f"Coordinate component {component!r} on axis {axis} is not an integer (got {type(component).__name__})"
        super().__init__(message)


class IncompleteIndexError(MatrixContractError):
    """Raised when a chained index is read or written before all ndim coordinates are supplied."""

    def __init__(self, prefix: tuple, ndim: int, action: str = "read"):
        self.prefix = prefix
        self.ndim = ndim
        self.action = action

        missing = ndim - len(prefix)
        message = f'Cannot {action} through incomplete index {prefix!r}: {missing} of {ndim} coordinates still missing.'
        super().__init__(message)


class UnsupportedExportError(MatrixContractError):
    """Raised when a matrix cannot be exported to the requested container."""

    def __init__(self, target: str, reason: str):
        self.target = target
        self.reason = reason
        message = f"Cannot export sparse matrix to {target}: {reason}"
        super().__init__(message)
