"""Point type and coercion of foreign point values."""

from collections.abc import Sequence
from typing import Any, NamedTuple

import numpy as np


class Point(NamedTuple):
    """A 2D point."""

    x: float
    y: float


def as_xy(point: Any) -> tuple[float, float]:
    """View a point-like value as an ``(x, y)`` pair of floats.

    Accepts objects exposing ``x`` and ``y`` attributes (``Point``, shapely
    points), length-2 sequences and numpy arrays of shape ``(2,)``.

    Raises:
        TypeError: If the value cannot be read as two coordinates.
    """
    if hasattr(point, "x") and hasattr(point, "y"):
        return float(point.x), float(point.y)

    if isinstance(point, np.ndarray):
        if point.shape != (2,):
            raise TypeError(f"expected an array of shape (2,), got {point.shape}")
        return float(point[0]), float(point[1])

    if isinstance(point, Sequence) and not isinstance(point, (str, bytes)):
        if len(point) != 2:
            raise TypeError(f"expected 2 coordinates, got {len(point)}")
        return float(point[0]), float(point[1])

    raise TypeError(f"cannot interpret {type(point).__name__!r} as a 2D point")
