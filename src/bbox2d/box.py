"""Rectilinear 2D bounding box.

A bounding box is described by four values called extremas: ``xmin``,
``xmax``, ``ymin`` and ``ymax``. Every instance satisfies ``xmin <= xmax``
and ``ymin <= ymax``; a box whose min equals its max along an axis is
degenerate (singular) in that dimension, which is a valid state.

Boxes are mutable only through their methods, and every mutation validates
the new extremas before committing them, so an invalid box is never
observable. Instances are not synchronized: sharing one box between threads
that mutate it is the caller's responsibility. Use ``copy()``,
``translated()`` or ``scaled()`` to work on independent values.
"""

import logging
import math
from collections.abc import Iterable
from typing import Any

import numpy as np
from shapely.geometry import Polygon, box

from bbox2d.approx import resolve_tolerances, ulps_eq
from bbox2d.errors import InvalidExtremaError
from bbox2d.points import Point, as_xy
from bbox2d.schemas import BoundingBoxSchema

logger = logging.getLogger(__name__)

_MISSING = object()


def _is_ordered(xmin: float, xmax: float, ymin: float, ymax: float) -> bool:
    # False for NaN, since every comparison with NaN is False.
    return xmin <= xmax and ymin <= ymax


class BoundingBox:
    """An axis-aligned, rectilinear 2D bounding box.

    Args:
        xmin: Minimum x-value.
        xmax: Maximum x-value.
        ymin: Minimum y-value.
        ymax: Maximum y-value.

    Raises:
        InvalidExtremaError: If ``xmin > xmax`` or ``ymin > ymax``, or if any
            extremum is NaN. Use ``try_new`` to get ``None`` instead.
    """

    __slots__ = ("_xmin", "_xmax", "_ymin", "_ymax")

    # Mutable value type
    __hash__ = None

    def __init__(self, xmin: float, xmax: float, ymin: float, ymax: float):
        xmin, xmax, ymin, ymax = float(xmin), float(xmax), float(ymin), float(ymax)
        if not _is_ordered(xmin, xmax, ymin, ymax):
            raise InvalidExtremaError(xmin, xmax, ymin, ymax)
        self._xmin = xmin
        self._xmax = xmax
        self._ymin = ymin
        self._ymax = ymax

    @classmethod
    def try_new(
        cls, xmin: float, xmax: float, ymin: float, ymax: float
    ) -> "BoundingBox | None":
        """Like the constructor, but return None for invalid extremas."""
        try:
            return cls(xmin, xmax, ymin, ymax)
        except InvalidExtremaError:
            logger.debug(
                "Rejected extremas xmin=%s xmax=%s ymin=%s ymax=%s",
                xmin, xmax, ymin, ymax,
            )
            return None

    @classmethod
    def from_points(cls, points: Iterable[Any]) -> "BoundingBox | None":
        """Create the tightest box enclosing the given points.

        The points are consumed in a single pass, so lazy iterators work.
        A numpy array of shape ``(n, 2)`` is reduced column-wise instead.

        Args:
            points: Point-like values (see ``bbox2d.points.as_xy``).

        Returns:
            The enclosing box, or None if ``points`` is empty. A single point
            yields a box that is degenerate in both dimensions.

        Raises:
            InvalidExtremaError: If a coordinate is NaN.
        """
        if isinstance(points, np.ndarray):
            if points.size == 0:
                return None
            if points.ndim != 2 or points.shape[1] != 2:
                raise TypeError(f"expected an array of shape (n, 2), got {points.shape}")
            lower = points.min(axis=0)
            upper = points.max(axis=0)
            return cls(float(lower[0]), float(upper[0]), float(lower[1]), float(upper[1]))

        iterator = iter(points)
        first = next(iterator, _MISSING)
        if first is _MISSING:
            return None

        xmin, ymin = as_xy(first)
        xmax, ymax = xmin, ymin
        for point in iterator:
            x, y = as_xy(point)
            # NaN fails every comparison below and would be skipped silently.
            if math.isnan(x) or math.isnan(y):
                raise InvalidExtremaError(x, x, y, y)
            if x > xmax:
                xmax = x
            if x < xmin:
                xmin = x
            if y > ymax:
                ymax = y
            if y < ymin:
                ymin = y
        return cls(xmin, xmax, ymin, ymax)

    @classmethod
    def from_bounded_entities(cls, entities: Iterable[Any]) -> "BoundingBox | None":
        """Return the union of the boxes of all entities.

        Each entity is converted with ``bbox2d.protocol.to_bounding_box``.
        Returns None if ``entities`` is empty.
        """
        from bbox2d.protocol import to_bounding_box

        result = None
        for entity in entities:
            bb = to_bounding_box(entity)
            result = bb if result is None else result.union(bb)
        return result

    @classmethod
    def from_schema(cls, schema: BoundingBoxSchema) -> "BoundingBox":
        return cls(schema.xmin, schema.xmax, schema.ymin, schema.ymax)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BoundingBox":
        """Create a box from a dict with the keys xmin, xmax, ymin and ymax.

        Raises:
            pydantic.ValidationError: If keys are missing or the ordering
                is violated.
        """
        return cls.from_schema(BoundingBoxSchema.model_validate(data))

    # -- Extremas ---------------------------------------------------------

    @property
    def xmin(self) -> float:
        """Minimum x-value."""
        return self._xmin

    @property
    def xmax(self) -> float:
        """Maximum x-value."""
        return self._xmax

    @property
    def ymin(self) -> float:
        """Minimum y-value."""
        return self._ymin

    @property
    def ymax(self) -> float:
        """Maximum y-value."""
        return self._ymax

    def try_set_xmin(self, value: float) -> bool:
        """Set ``xmin`` unless it would exceed ``xmax``.

        Returns:
            True if the value was committed, False if the box is unchanged.
        """
        value = float(value)
        if not value <= self._xmax:
            logger.debug("Rejected xmin=%s for %r", value, self)
            return False
        self._xmin = value
        return True

    def try_set_xmax(self, value: float) -> bool:
        """Set ``xmax`` unless it would fall below ``xmin``."""
        value = float(value)
        if not value >= self._xmin:
            logger.debug("Rejected xmax=%s for %r", value, self)
            return False
        self._xmax = value
        return True

    def try_set_ymin(self, value: float) -> bool:
        """Set ``ymin`` unless it would exceed ``ymax``."""
        value = float(value)
        if not value <= self._ymax:
            logger.debug("Rejected ymin=%s for %r", value, self)
            return False
        self._ymin = value
        return True

    def try_set_ymax(self, value: float) -> bool:
        """Set ``ymax`` unless it would fall below ``ymin``."""
        value = float(value)
        if not value >= self._ymin:
            logger.debug("Rejected ymax=%s for %r", value, self)
            return False
        self._ymax = value
        return True

    def _commit(self, xmin: float, xmax: float, ymin: float, ymax: float) -> None:
        """Replace all extremas at once, or raise and leave the box unchanged."""
        if not _is_ordered(xmin, xmax, ymin, ymax):
            raise InvalidExtremaError(xmin, xmax, ymin, ymax)
        self._xmin = xmin
        self._xmax = xmax
        self._ymin = ymin
        self._ymax = ymax

    # -- Combination and predicates --------------------------------------

    def union(self, other: Any) -> "BoundingBox":
        """Return the smallest box containing both ``self`` and ``other``.

        ``other`` may be any value accepted by ``to_bounding_box``.
        """
        if not isinstance(other, BoundingBox):
            from bbox2d.protocol import to_bounding_box

            other = to_bounding_box(other)
        return BoundingBox(
            min(self._xmin, other._xmin),
            max(self._xmax, other._xmax),
            min(self._ymin, other._ymin),
            max(self._ymax, other._ymax),
        )

    def contains_point(self, point: Any) -> bool:
        """Return True if the point lies inside the box or on its edge."""
        x, y = as_xy(point)
        return self._xmin <= x <= self._xmax and self._ymin <= y <= self._ymax

    def approx_contains_point(
        self,
        point: Any,
        epsilon: float | None = None,
        max_ulps: int | None = None,
    ) -> bool:
        """Like ``contains_point``, but a point approximately on an edge counts.

        Each edge comparison passes if the coordinate is strictly on the inner
        side, or approximately equal to the edge.

        Args:
            point: Point-like value.
            epsilon: Absolute tolerance. Defaults to ``settings.default_epsilon``.
            max_ulps: ULP tolerance. Defaults to ``settings.default_max_ulps``.
        """
        epsilon, max_ulps = resolve_tolerances(epsilon, max_ulps)
        x, y = as_xy(point)
        return (
            (self._xmin < x or ulps_eq(self._xmin, x, epsilon, max_ulps))
            and (self._ymin < y or ulps_eq(self._ymin, y, epsilon, max_ulps))
            and (self._xmax > x or ulps_eq(self._xmax, x, epsilon, max_ulps))
            and (self._ymax > y or ulps_eq(self._ymax, y, epsilon, max_ulps))
        )

    def contains(self, other: "BoundingBox") -> bool:
        """Return True if ``other`` fits inside ``self``.

        Shared extremas still count, so every box contains itself.
        """
        return (
            self._xmin <= other._xmin
            and self._ymin <= other._ymin
            and self._xmax >= other._xmax
            and self._ymax >= other._ymax
        )

    def approx_contains(
        self,
        other: "BoundingBox",
        epsilon: float | None = None,
        max_ulps: int | None = None,
    ) -> bool:
        """Like ``contains``, with extremas compared approximately."""
        epsilon, max_ulps = resolve_tolerances(epsilon, max_ulps)
        return (
            (self._xmin < other._xmin or ulps_eq(self._xmin, other._xmin, epsilon, max_ulps))
            and (self._ymin < other._ymin or ulps_eq(self._ymin, other._ymin, epsilon, max_ulps))
            and (self._xmax > other._xmax or ulps_eq(self._xmax, other._xmax, epsilon, max_ulps))
            and (self._ymax > other._ymax or ulps_eq(self._ymax, other._ymax, epsilon, max_ulps))
        )

    def approx_eq(
        self,
        other: "BoundingBox",
        epsilon: float | None = None,
        max_ulps: int | None = None,
    ) -> bool:
        """Return True if all four extremas are approximately equal."""
        epsilon, max_ulps = resolve_tolerances(epsilon, max_ulps)
        return (
            ulps_eq(self._xmin, other._xmin, epsilon, max_ulps)
            and ulps_eq(self._xmax, other._xmax, epsilon, max_ulps)
            and ulps_eq(self._ymin, other._ymin, epsilon, max_ulps)
            and ulps_eq(self._ymax, other._ymax, epsilon, max_ulps)
        )

    def intersects(self, other: "BoundingBox") -> bool:
        """Return True if the boxes overlap with a non-empty interior.

        Boxes that only share an edge are touching, not intersecting.
        """
        return (
            self._xmin < other._xmax
            and other._xmin < self._xmax
            and self._ymin < other._ymax
            and other._ymin < self._ymax
        )

    def touches(self, other: "BoundingBox") -> bool:
        """Return True if the boxes share an extremum and do not intersect."""
        if self.intersects(other):
            return False
        return (
            self._xmin == other._xmax
            or self._xmax == other._xmin
            or self._ymin == other._ymax
            or self._ymax == other._ymin
        )

    def approx_touches(
        self,
        other: "BoundingBox",
        epsilon: float | None = None,
        max_ulps: int | None = None,
    ) -> bool:
        """Like ``touches``, with the shared extremum compared approximately."""
        epsilon, max_ulps = resolve_tolerances(epsilon, max_ulps)
        if self.intersects(other):
            return False
        return (
            ulps_eq(self._xmin, other._xmax, epsilon, max_ulps)
            or ulps_eq(self._xmax, other._xmin, epsilon, max_ulps)
            or ulps_eq(self._ymin, other._ymax, epsilon, max_ulps)
            or ulps_eq(self._ymax, other._ymin, epsilon, max_ulps)
        )

    # -- Metrics ------------------------------------------------------------

    def width(self) -> float:
        return self._xmax - self._xmin

    def height(self) -> float:
        return self._ymax - self._ymin

    def center(self) -> Point:
        """Return the midpoint of both axes."""
        return Point(0.5 * (self._xmax + self._xmin), 0.5 * (self._ymax + self._ymin))

    def is_finite(self) -> bool:
        """Return True if no extremum is infinite or NaN."""
        return all(math.isfinite(v) for v in self.as_tuple())

    # -- Transforms ---------------------------------------------------------

    def translate(self, shift: Any) -> None:
        """Move the box in place by a point-like ``(dx, dy)`` shift.

        Raises:
            InvalidExtremaError: If the shift produces NaN extremas
                (e.g. an infinite shift of an infinite box).
        """
        dx, dy = as_xy(shift)
        self._commit(self._xmin + dx, self._xmax + dx, self._ymin + dy, self._ymax + dy)

    def scale(self, factor: float) -> None:
        """Scale width and height in place while keeping the center fixed.

        Each side moves outwards by half of ``(factor - 1)`` times the size
        of its axis. A factor of 0 collapses the box to its center. Axes of
        infinite size are left unchanged.

        Raises:
            ValueError: If ``factor`` is negative or NaN, even for a box that
                is singular in both dimensions. The box is left unchanged.
        """
        factor = float(factor)
        if not factor >= 0.0:
            raise ValueError(f"factor must be non-negative, got {factor}")
        width = self.width()
        height = self.height()
        dw = 0.5 * (factor - 1.0) * width if math.isfinite(width) else 0.0
        dh = 0.5 * (factor - 1.0) * height if math.isfinite(height) else 0.0
        self._commit(self._xmin - dw, self._xmax + dw, self._ymin - dh, self._ymax + dh)

    def remove_singular_dimensions(self, pad: float) -> None:
        """Buffer every zero-size axis by ``pad`` on both sides, in place.

        A singular width becomes ``2 * pad``; non-singular axes are untouched.

        Raises:
            InvalidExtremaError: If ``pad`` is negative or NaN and an axis is
                singular. The box is left unchanged.
        """
        xmin, xmax, ymin, ymax = self.as_tuple()
        if self.width() == 0.0:
            xmin -= pad
            xmax += pad
        if self.height() == 0.0:
            ymin -= pad
            ymax += pad
        self._commit(xmin, xmax, ymin, ymax)

    def translated(self, shift: Any) -> "BoundingBox":
        """Return a translated copy."""
        bb = self.copy()
        bb.translate(shift)
        return bb

    def scaled(self, factor: float) -> "BoundingBox":
        """Return a scaled copy."""
        bb = self.copy()
        bb.scale(factor)
        return bb

    # -- Conversion ---------------------------------------------------------

    def copy(self) -> "BoundingBox":
        return BoundingBox(self._xmin, self._xmax, self._ymin, self._ymax)

    def as_tuple(self) -> tuple[float, float, float, float]:
        """Return the extremas in the order (xmin, xmax, ymin, ymax)."""
        return (self._xmin, self._xmax, self._ymin, self._ymax)

    def to_shapely(self) -> Polygon:
        """Return the box as a shapely polygon."""
        return box(self._xmin, self._ymin, self._xmax, self._ymax)

    def to_schema(self) -> BoundingBoxSchema:
        return BoundingBoxSchema(
            xmin=self._xmin, xmax=self._xmax, ymin=self._ymin, ymax=self._ymax
        )

    def to_dict(self) -> dict[str, float]:
        """Convert to a JSON-serializable dict."""
        return self.to_schema().model_dump()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoundingBox):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __repr__(self) -> str:
        # Slots are unset if __init__ raised before assigning them.
        xmin, xmax, ymin, ymax = (
            getattr(self, name, None) for name in ("_xmin", "_xmax", "_ymin", "_ymax")
        )
        return f"BoundingBox(xmin={xmin}, xmax={xmax}, ymin={ymin}, ymax={ymax})"

    def __copy__(self) -> "BoundingBox":
        return self.copy()
