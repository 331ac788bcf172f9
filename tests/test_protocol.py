"""Tests for the bounding box conversion protocol."""

import itertools
from dataclasses import dataclass

import pytest
from shapely.geometry import LineString, Point as ShapelyPoint, Polygon

from bbox2d import (
    BoundingBox,
    BoundingBoxSchema,
    HasBoundingBox,
    InvalidExtremaError,
    UnsupportedGeometryError,
    register_converter,
    to_bounding_box,
)


@dataclass
class Circle:
    """Geometry that knows its own bounding box."""

    cx: float
    cy: float
    radius: float

    def bounding_box(self) -> BoundingBox:
        return BoundingBox(
            self.cx - self.radius,
            self.cx + self.radius,
            self.cy - self.radius,
            self.cy + self.radius,
        )


@dataclass
class Segment:
    """Geometry converted through a registered function."""

    start: tuple[float, float]
    end: tuple[float, float]


@register_converter(Segment)
def _segment_bounds(segment: Segment) -> BoundingBox:
    return BoundingBox.from_points([segment.start, segment.end])


@dataclass
class DirectedSegment(Segment):
    """Subclass that should inherit the Segment converter."""

    label: str = ""


class TestHasBoundingBox:
    def test_protocol_is_structural(self):
        """Objects with a bounding_box() method satisfy the protocol."""
        assert isinstance(Circle(0.0, 0.0, 1.0), HasBoundingBox)
        assert not isinstance(Segment((0.0, 0.0), (1.0, 1.0)), HasBoundingBox)

    def test_method_is_used_for_conversion(self):
        bb = to_bounding_box(Circle(2.0, 2.0, 2.0))
        assert bb == BoundingBox(0.0, 4.0, 0.0, 4.0)


class TestRegisteredConverters:
    """Tests for register_converter and the built-in converters."""

    def test_registered_converter(self):
        bb = to_bounding_box(Segment((3.0, -1.0), (1.0, 2.0)))
        assert bb == BoundingBox(1.0, 3.0, -1.0, 2.0)

    def test_subclass_inherits_converter(self):
        bb = to_bounding_box(DirectedSegment((0.0, 0.0), (1.0, 1.0), label="up"))
        assert bb == BoundingBox(0.0, 1.0, 0.0, 1.0)

    def test_register_returns_function(self):
        assert _segment_bounds(Segment((0.0, 0.0), (0.0, 0.0))) == BoundingBox(0.0, 0.0, 0.0, 0.0)

    def test_bounding_box_converts_to_copy(self, unit_box):
        bb = to_bounding_box(unit_box)
        assert bb == unit_box
        assert bb is not unit_box

    def test_schema(self):
        schema = BoundingBoxSchema(xmin=0.0, xmax=1.0, ymin=2.0, ymax=3.0)
        assert to_bounding_box(schema) == BoundingBox(0.0, 1.0, 2.0, 3.0)

    def test_shapely_polygon(self):
        polygon = Polygon([(0.0, 0.0), (4.0, 1.0), (2.0, 5.0)])
        assert to_bounding_box(polygon) == BoundingBox(0.0, 4.0, 0.0, 5.0)

    def test_shapely_point_is_degenerate(self):
        assert to_bounding_box(ShapelyPoint(1.0, 2.0)) == BoundingBox(1.0, 1.0, 2.0, 2.0)

    def test_empty_shapely_geometry(self):
        with pytest.raises(InvalidExtremaError):
            to_bounding_box(Polygon())

    def test_unsupported_value(self):
        with pytest.raises(UnsupportedGeometryError):
            to_bounding_box(object())

    def test_unsupported_value_is_type_error(self):
        with pytest.raises(TypeError, match="str"):
            to_bounding_box("not a geometry")


class TestFromBoundedEntities:
    """Tests for BoundingBox.from_bounded_entities."""

    def test_circles(self):
        circles = [
            Circle(0.0, 0.0, 1.0),
            Circle(0.0, 2.0, 1.0),
            Circle(0.0, 2.0, 2.0),
        ]
        bb = BoundingBox.from_bounded_entities(circles)
        assert bb == BoundingBox(-2.0, 2.0, -1.0, 4.0)

    def test_boxes(self):
        boxes = [BoundingBox(0.0, 1.0, 0.0, 1.0), BoundingBox(0.5, 2.0, 0.5, 2.0)]
        assert BoundingBox.from_bounded_entities(boxes) == BoundingBox(0.0, 2.0, 0.0, 2.0)

    def test_empty_returns_none(self):
        assert BoundingBox.from_bounded_entities([]) is None
        assert BoundingBox.from_bounded_entities(iter(())) is None

    def test_order_does_not_matter(self):
        entities = [
            Circle(0.0, 0.0, 1.0),
            Segment((5.0, -3.0), (6.0, 0.0)),
            BoundingBox(-4.0, -2.0, 1.0, 7.0),
        ]
        results = {
            BoundingBox.from_bounded_entities(perm).as_tuple()
            for perm in itertools.permutations(entities)
        }
        assert results == {(-4.0, 6.0, -3.0, 7.0)}

    def test_heterogeneous_geometry(self):
        entities = [
            Circle(0.0, 0.0, 1.0),
            LineString([(2.0, 2.0), (3.0, -5.0)]),
            BoundingBoxSchema(xmin=-1.5, xmax=0.0, ymin=0.0, ymax=0.5),
        ]
        bb = BoundingBox.from_bounded_entities(entities)
        assert bb == BoundingBox(-1.5, 3.0, -5.0, 2.0)

    def test_does_not_alias_inputs(self, unit_box):
        bb = BoundingBox.from_bounded_entities([unit_box])
        bb.translate((1.0, 1.0))
        assert unit_box == BoundingBox(0.0, 1.0, 0.0, 1.0)

    def test_unsupported_entity_raises(self):
        with pytest.raises(UnsupportedGeometryError):
            BoundingBox.from_bounded_entities([Circle(0.0, 0.0, 1.0), 42])


class TestUnionWithGeometry:
    def test_union_accepts_convertible_values(self, unit_box):
        assert unit_box.union(ShapelyPoint(3.0, 4.0)) == BoundingBox(0.0, 3.0, 0.0, 4.0)
        assert unit_box.union(Circle(0.0, 0.0, 2.0)) == BoundingBox(-2.0, 2.0, -2.0, 2.0)
