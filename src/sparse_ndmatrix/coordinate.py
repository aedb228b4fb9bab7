import operator
import numpy as np

from .matrix_errors import CoordinateLengthError, NegativeCoordinateError, InvalidCoordinateTypeError


Coordinate = tuple[int, ...]


def as_component(value, axis: int) -> int:
    """Convert one coordinate component to a non-negative python int.

    Accepts python ints and numpy integer scalars. Booleans are rejected even
    though they are ints, since ``m[True]`` is almost certainly a bug.
    """
    if isinstance(value, (bool, np.bool_)):
        raise InvalidCoordinateTypeError(value, axis)
    try:
        component = operator.index(value)
    except TypeError:
        raise InvalidCoordinateTypeError(value, axis) from None
    return component


def normalize_prefix(components, ndim: int) -> Coordinate:
    """Normalize up to ``ndim`` leading coordinate components."""
    try:
        components = tuple(components)
    except TypeError:
        raise InvalidCoordinateTypeError(components, 0) from None
    if len(components) > ndim:
        raise CoordinateLengthError(components, ndim)
    coord = tuple(as_component(c, axis) for axis, c in enumerate(components))
    for axis, c in enumerate(coord):
        if c < 0:
            raise NegativeCoordinateError(coord, axis)
    return coord


def normalize_coordinate(components, ndim: int) -> Coordinate:
    """Normalize a full coordinate, failing fast unless it has exactly ``ndim`` components."""
    if isinstance(components, (int, np.integer)):
        components = (components,)
    coord = normalize_prefix(components, ndim)
    if len(coord) != ndim:
        raise CoordinateLengthError(coord, ndim)
    return coord
