"""Exceptions raised by bbox2d."""


class BoundingBoxError(Exception):
    """Base class for bounding box errors."""


class InvalidExtremaError(BoundingBoxError, ValueError):
    """Raised when extremas violate xmin <= xmax and ymin <= ymax."""

    def __init__(self, xmin: float, xmax: float, ymin: float, ymax: float):
        self.extremas = (xmin, xmax, ymin, ymax)
        super().__init__(
            "one of the conditions xmin <= xmax and ymin <= ymax is not fulfilled: "
            f"xmin={xmin}, xmax={xmax}, ymin={ymin}, ymax={ymax}"
        )


class UnsupportedGeometryError(BoundingBoxError, TypeError):
    """Raised when a value cannot be converted into a bounding box."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(
            f"cannot derive a bounding box from {type(value).__name__!r}; "
            "register a converter or implement bounding_box()"
        )
