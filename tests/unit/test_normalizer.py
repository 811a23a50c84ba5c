"""Unit tests for outline normalization."""

import pytest

from glacon.config import GeometryConfig
from glacon.core.normalizer import (
    PathNormalizer,
    normalize_node,
    outermost,
    separate_stroked_path,
    to_quadratic_curves,
)
from glacon.core.stroke import stroke_path
from glacon.domain import (
    BezierPath,
    Fill,
    GroupNode,
    ImageNode,
    LineCap,
    PathNode,
    Stroke,
    TextNode,
    Verb,
)


def square_path(x: float = 10, y: float = 10, size: float = 80) -> BezierPath:
    path = BezierPath()
    path.move_to((x, y))
    path.line_to((x + size, y))
    path.line_to((x + size, y + size))
    path.line_to((x, y + size))
    path.close_path()
    return path


def curve_path() -> BezierPath:
    path = BezierPath()
    path.move_to((0, 0))
    path.curve_to((0, 100), (100, 100), (100, 0))
    path.close_path()
    return path


@pytest.fixture
def normalizer() -> PathNormalizer:
    return PathNormalizer(GeometryConfig())


class TestToQuadraticCurves:
    """Tests for cubic reduction."""

    def test_removes_cubics(self) -> None:
        """Test that no curveTo element survives."""
        result = to_quadratic_curves(curve_path())

        assert not result.has_cubic()
        assert any(e.verb == Verb.QUAD_TO for e in result)
        assert result.is_closed()

    def test_keeps_other_elements(self) -> None:
        """Test that line-only paths are returned unchanged."""
        assert to_quadratic_curves(square_path()) == square_path()

    def test_curve_after_close_starts_at_subpath_start(self) -> None:
        """Test that the current point returns to the start on close."""
        path = BezierPath()
        path.move_to((0, 0))
        path.line_to((10, 0))
        path.close_path()
        path.curve_to((0, 10), (10, 10), (10, 0))

        result = to_quadratic_curves(path)
        assert result.bounding_box().y_max == pytest.approx(7.5, abs=0.05)


class TestSeparateStrokedPath:
    """Tests for seam removal."""

    def test_square_outline_splits_into_two_rings(self) -> None:
        """Test that a closed stroke outline splits into inner and outer ring."""
        outline = stroke_path(square_path(), Stroke(width=4))
        rings = separate_stroked_path(outline)

        assert len(rings) == 2
        assert all(ring.is_closed() for ring in rings)
        assert outermost(rings).bounding_box().to_tuple() == pytest.approx((8, 8, 92, 92))

    def test_curved_tail_returns_input(self) -> None:
        """Test that paths not ending with a line are left alone."""
        path = BezierPath()
        path.move_to((0, 0))
        path.line_to((10, 0))
        path.quad_to((10, 10), (0, 0))
        path.close_path()

        assert separate_stroked_path(path) == [path]

    def test_ring_without_seam_returns_input(self) -> None:
        """Test that a single ring drawn once is not cut."""
        path = BezierPath()
        path.move_to((10, 10))
        path.line_to((10.2, 10))
        path.line_to((10.2, 10.2))
        path.line_to((10, 10.2))
        path.close_path()

        assert separate_stroked_path(path) == [path]


class TestPathNormalizer:
    """Tests for PathNormalizer."""

    def test_fill_only(self, normalizer: PathNormalizer) -> None:
        """Test that filled paths only lose their cubics."""
        outlines = normalizer.normalize(PathNode(curve_path(), fill=Fill()))

        assert len(outlines) == 1
        assert not outlines[0].has_cubic()

    def test_unpainted_path(self, normalizer: PathNormalizer) -> None:
        """Test that paths without fill or stroke produce nothing."""
        assert normalizer.normalize(PathNode(square_path())) == []

    def test_empty_path(self, normalizer: PathNormalizer) -> None:
        """Test that empty paths produce nothing."""
        assert normalizer.normalize(PathNode(BezierPath(), fill=Fill())) == []

    def test_stroked_closed_path(self, normalizer: PathNormalizer) -> None:
        """Test that a stroke-only closed path keeps both rings."""
        node = PathNode(square_path(), stroke=Stroke(width=4))
        assert len(normalizer.normalize(node)) == 2

    def test_stroked_and_filled_closed_path(self, normalizer: PathNormalizer) -> None:
        """Test that a filled and stroked closed path keeps only the outer ring."""
        node = PathNode(square_path(), fill=Fill(), stroke=Stroke(width=4))
        outlines = normalizer.normalize(node)

        assert len(outlines) == 1
        assert outlines[0].bounding_box().to_tuple() == pytest.approx((8, 8, 92, 92))

    def test_stroked_open_path(self, normalizer: PathNormalizer) -> None:
        """Test that an open stroked line gives one ring."""
        path = BezierPath()
        path.move_to((10, 50))
        path.line_to((90, 50))

        outlines = normalizer.normalize(PathNode(path, stroke=Stroke(width=10)))
        assert len(outlines) == 1
        assert outlines[0].is_closed()

    def test_stroked_open_filled_path_keeps_fill(self, normalizer: PathNormalizer) -> None:
        """Test that the fill of an open path is closed and kept."""
        path = BezierPath()
        path.move_to((10, 10))
        path.line_to((90, 10))
        path.line_to((50, 90))

        outlines = normalizer.normalize(PathNode(path, fill=Fill(), stroke=Stroke(width=2)))
        assert len(outlines) == 2
        assert outlines[0].is_closed()

    def test_no_cubics_in_any_output(self, normalizer: PathNormalizer) -> None:
        """Test that stroked curves are also free of cubics."""
        node = PathNode(curve_path(), fill=Fill(), stroke=Stroke(width=3))
        for outline in normalizer.normalize(node):
            assert not outline.has_cubic()

    def test_zero_length_sub_path_paints_dot(self, normalizer: PathNormalizer) -> None:
        """Test that "M x y Z" with round caps adds a dot next to the filled square."""
        path = square_path()
        path.move_to((120, 120))
        path.close_path()
        node = PathNode(path, fill=Fill(), stroke=Stroke(width=2, cap=LineCap.ROUND))

        outlines = normalizer.normalize(node)

        assert len(outlines) == 2
        assert outlines[1].bounding_box().to_tuple() == pytest.approx((119, 119, 121, 121), abs=1e-6)

    def test_zero_length_butt_cap_paints_nothing(self, normalizer: PathNormalizer) -> None:
        """Test that a dot with butt caps leaves no degenerate fill contour."""
        path = BezierPath()
        path.move_to((12, 12))
        path.close_path()
        node = PathNode(path, fill=Fill(), stroke=Stroke(width=2))

        assert normalizer.normalize(node) == []

    def test_group_recursion(self, normalizer: PathNormalizer) -> None:
        """Test that groups concatenate their children's outlines in order."""
        first = PathNode(square_path(), fill=Fill())
        second = PathNode(square_path(200, 200), fill=Fill())
        tree = GroupNode([GroupNode([first]), TextNode("x"), second])

        outlines = normalizer.normalize(tree)
        assert outlines == [square_path(), square_path(200, 200)]

    def test_text_and_image_ignored(self, normalizer: PathNormalizer) -> None:
        """Test that text and image nodes produce no outlines."""
        assert normalizer.normalize(TextNode("hello")) == []
        assert normalizer.normalize(ImageNode("icon.png")) == []

    def test_unknown_node_kind(self, normalizer: PathNormalizer) -> None:
        """Test that unknown node kinds are rejected."""
        with pytest.raises(TypeError, match="Unsupported node type"):
            normalizer.normalize("not a node")  # type: ignore[arg-type]

    def test_normalize_node_wrapper(self) -> None:
        """Test the functional wrapper."""
        assert normalize_node(PathNode(square_path(), fill=Fill())) == [square_path()]
