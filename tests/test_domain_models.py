"""Tests for domain models to verify they work correctly."""

import pytest

from glacon.domain import (
    NOTDEF_NAME,
    BezierPath,
    BoundingBox,
    Contour,
    CurvePoint,
    GlyphRecord,
    GroupNode,
    PathNode,
    Segment,
    TextNode,
    Verb,
    bounding_box,
)


def square_path(x: float = 0, y: float = 0, size: float = 10) -> BezierPath:
    path = BezierPath()
    path.move_to((x, y))
    path.line_to((x + size, y))
    path.line_to((x + size, y + size))
    path.line_to((x, y + size))
    path.close_path()
    return path


class TestBoundingBox:
    """Tests for BoundingBox class."""

    def test_dimensions(self) -> None:
        """Test width, height and derived values."""
        box = BoundingBox(10, 20, 110, 70)
        assert box.width == 100
        assert box.height == 50
        assert box.max_side == 100
        assert box.area == 5000

    def test_union(self) -> None:
        """Test union of two boxes."""
        a = BoundingBox(0, 0, 10, 10)
        b = BoundingBox(5, -5, 20, 8)
        assert a.union(b).to_tuple() == (0, -5, 20, 10)

    def test_from_points(self) -> None:
        """Test bounds of a point set."""
        box = BoundingBox.from_points([(3, 4), (-1, 7), (2, -2)])
        assert box.to_tuple() == (-1, -2, 3, 7)

    def test_from_no_points(self) -> None:
        """Test that an empty point set gives the zero box."""
        assert BoundingBox.from_points([]).to_tuple() == (0, 0, 0, 0)

    def test_union_all_empty(self) -> None:
        """Test that a union of nothing is the zero box."""
        assert BoundingBox.union_all([]) == BoundingBox()

    def test_immutable(self) -> None:
        """Test that bounding box is immutable."""
        box = BoundingBox(0, 0, 1, 1)
        with pytest.raises(AttributeError):
            box.x_min = 5  # type: ignore


class TestContour:
    """Tests for Contour class."""

    def test_bounding_box_includes_control_points(self) -> None:
        """Test that off-curve points count towards the bounds."""
        contour = Contour(
            [CurvePoint(0, 0), CurvePoint(50, 100, on_curve=False), CurvePoint(100, 0)]
        )
        assert contour.bounding_box().to_tuple() == (0, 0, 100, 100)

    def test_signed_area_counter_clockwise(self) -> None:
        """Test that counter-clockwise contours have positive area."""
        contour = Contour(
            [CurvePoint(0, 0), CurvePoint(100, 0), CurvePoint(100, 100), CurvePoint(0, 100)]
        )
        assert contour.signed_area() == 10000

    def test_signed_area_degenerate(self) -> None:
        """Test that contours with fewer than three points have no area."""
        assert Contour([CurvePoint(0, 0), CurvePoint(1, 1)]).signed_area() == 0.0

    def test_len(self) -> None:
        """Test contour length."""
        assert len(Contour([CurvePoint(0, 0)])) == 1


class TestBezierPath:
    """Tests for BezierPath class."""

    def test_elements(self) -> None:
        """Test that drawing calls record elements in order."""
        path = square_path()
        assert [e.verb for e in path] == [
            Verb.MOVE_TO,
            Verb.LINE_TO,
            Verb.LINE_TO,
            Verb.LINE_TO,
            Verb.CLOSE,
        ]
        assert path.is_closed()
        assert not path.has_cubic()

    def test_segments_add_closing_line(self) -> None:
        """Test that close yields the implicit line back to the start."""
        segments = list(square_path().segments())
        assert len(segments) == 4
        assert segments[-1] == Segment(((0, 10), (0, 0)))

    def test_segments_skip_closing_line_at_start(self) -> None:
        """Test that close yields nothing when already at the start."""
        path = BezierPath()
        path.move_to((0, 0))
        path.line_to((10, 0))
        path.line_to((0, 0))
        path.close_path()
        assert len(list(path.segments())) == 2

    def test_is_empty(self) -> None:
        """Test that a lone moveTo draws nothing."""
        path = BezierPath()
        assert path.is_empty()
        path.move_to((1, 1))
        assert path.is_empty()
        path.line_to((2, 2))
        assert not path.is_empty()

    def test_subpaths(self) -> None:
        """Test splitting at moveTo elements."""
        path = square_path()
        path.extend(square_path(20, 20))
        path.move_to((50, 50))

        subpaths = path.subpaths()
        assert len(subpaths) == 2
        assert subpaths[1] == square_path(20, 20)

    def test_bounding_box_curve_extrema(self) -> None:
        """Test that curve extrema are included, not control points."""
        path = BezierPath()
        path.move_to((0, 0))
        path.quad_to((50, 100), (100, 0))

        box = path.bounding_box()
        assert box.y_max == pytest.approx(50)
        assert box.x_max == 100

    def test_cubic_bounding_box(self) -> None:
        """Test cubic curve bounds."""
        path = BezierPath()
        path.move_to((0, 0))
        path.curve_to((0, 100), (100, 100), (100, 0))
        assert path.has_cubic()
        assert path.bounding_box().y_max == pytest.approx(75)

    def test_from_segments_starts_subpath_at_gap(self) -> None:
        """Test that discontinuous segments start new sub-paths."""
        segments = [
            Segment(((0, 0), (10, 0))),
            Segment(((10, 0), (10, 10))),
            Segment(((50, 50), (60, 50))),
        ]
        path = BezierPath.from_segments(segments, close=True)

        verbs = [e.verb for e in path]
        assert verbs == [
            Verb.MOVE_TO,
            Verb.LINE_TO,
            Verb.LINE_TO,
            Verb.CLOSE,
            Verb.MOVE_TO,
            Verb.LINE_TO,
            Verb.CLOSE,
        ]

    def test_bounding_box_of_paths(self) -> None:
        """Test the union over several paths, ignoring empty ones."""
        empty = BezierPath()
        empty.move_to((-100, -100))
        box = bounding_box([square_path(), square_path(20, 30), empty])
        assert box.to_tuple() == (0, 0, 30, 40)


class TestNodes:
    """Tests for the SVG node tree."""

    def test_iter_paths(self) -> None:
        """Test collecting path nodes from nested groups."""
        inner = PathNode(square_path())
        outer = PathNode(square_path(20, 20))
        tree = GroupNode([GroupNode([inner, TextNode("label")]), outer])
        assert tree.iter_paths() == [inner, outer]


class TestGlyphRecord:
    """Tests for GlyphRecord class."""

    def test_notdef(self) -> None:
        """Test the empty glyph at index 0."""
        record = GlyphRecord.notdef(1000)
        assert record.name == NOTDEF_NAME
        assert record.is_empty()
        assert record.advance_width == 1000
        assert record.left_side_bearing == 0

    def test_point_count(self) -> None:
        """Test total point count over contours."""
        record = GlyphRecord(
            name="icon",
            contours=[
                Contour([CurvePoint(0, 0), CurvePoint(1, 0), CurvePoint(1, 1)]),
                Contour([CurvePoint(5, 5), CurvePoint(6, 5)]),
            ],
        )
        assert record.point_count == 5
        assert not record.is_empty()
