"""Conversion of arbitrary geometry into bounding boxes.

Geometry types take part in ``BoundingBox.from_bounded_entities`` and
``BoundingBox.union`` in one of two ways, neither of which requires a
common base class:

- implement a ``bounding_box()`` method (the ``HasBoundingBox`` protocol), or
- register a converter function for the type::

    @register_converter(Circle)
    def _circle_bounds(c: Circle) -> BoundingBox:
        return BoundingBox(c.cx - c.r, c.cx + c.r, c.cy - c.r, c.cy + c.r)

Registered converters take precedence over ``bounding_box()`` and are
resolved along the class MRO, so subclasses inherit their parent's converter.
"""

import logging
from collections.abc import Callable
from functools import singledispatch
from typing import Any, Protocol, TypeVar, runtime_checkable

from shapely.geometry.base import BaseGeometry

from bbox2d.box import BoundingBox
from bbox2d.errors import InvalidExtremaError, UnsupportedGeometryError
from bbox2d.schemas import BoundingBoxSchema

logger = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class HasBoundingBox(Protocol):
    """Anything that can report its own bounding box."""

    def bounding_box(self) -> BoundingBox: ...


@singledispatch
def to_bounding_box(value: Any) -> BoundingBox:
    """Return the bounding box of ``value``.

    Raises:
        UnsupportedGeometryError: If no converter is registered for the type
            and it does not implement ``bounding_box()``.
    """
    if isinstance(value, HasBoundingBox):
        return value.bounding_box()
    raise UnsupportedGeometryError(value)


def register_converter(
    cls: type[T],
) -> Callable[[Callable[[T], BoundingBox]], Callable[[T], BoundingBox]]:
    """Decorator registering a function that converts ``cls`` instances."""

    def decorator(func: Callable[[T], BoundingBox]) -> Callable[[T], BoundingBox]:
        logger.debug("Registering bounding box converter for %s", cls.__qualname__)
        to_bounding_box.register(cls, func)
        return func

    return decorator


@register_converter(BoundingBox)
def _from_bounding_box(value: BoundingBox) -> BoundingBox:
    return value.copy()


@register_converter(BoundingBoxSchema)
def _from_schema(value: BoundingBoxSchema) -> BoundingBox:
    return BoundingBox.from_schema(value)


@register_converter(BaseGeometry)
def _from_shapely(value: BaseGeometry) -> BoundingBox:
    """Bounds of a shapely geometry.

    Raises:
        InvalidExtremaError: If the geometry is empty and has no bounds.
    """
    if value.is_empty:
        nan = float("nan")
        raise InvalidExtremaError(nan, nan, nan, nan)
    minx, miny, maxx, maxy = value.bounds
    return BoundingBox(minx, maxx, miny, maxy)
