"""Rectilinear 2D bounding boxes with geometric predicates."""

from bbox2d.box import BoundingBox
from bbox2d.errors import BoundingBoxError, InvalidExtremaError, UnsupportedGeometryError
from bbox2d.points import Point
from bbox2d.protocol import HasBoundingBox, register_converter, to_bounding_box
from bbox2d.schemas import BoundingBoxSchema

__version__ = "0.1.0"
__all__ = [
    "BoundingBox",
    "BoundingBoxSchema",
    "BoundingBoxError",
    "HasBoundingBox",
    "InvalidExtremaError",
    "Point",
    "UnsupportedGeometryError",
    "register_converter",
    "to_bounding_box",
]
