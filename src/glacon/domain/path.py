"""Bezier path representation.

A BezierPath is the vector form of an icon outline between SVG parsing and
glyph synthesis: a list of drawing elements (moveTo, lineTo, quadTo,
curveTo, close) in SVG user space. The path normalizer guarantees that no
curveTo element survives on its way to the glyph synthesizer.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum, auto

from fontTools.misc.bezierTools import calcCubicBounds, calcQuadraticBounds

from glacon.domain.contour import BoundingBox

Pt = tuple[float, float]


class Verb(Enum):
    """Drawing element kind."""

    MOVE_TO = auto()
    LINE_TO = auto()
    QUAD_TO = auto()
    CURVE_TO = auto()
    CLOSE = auto()


@dataclass(frozen=True, slots=True)
class PathElement:
    """A single drawing element.

    Attributes:
        verb: Element kind
        points: Control points followed by the end point; empty for CLOSE
    """

    verb: Verb
    points: tuple[Pt, ...] = ()


@dataclass(frozen=True, slots=True)
class Segment:
    """A drawable segment with explicit start point.

    Two points describe a line, three a quadratic and four a cubic curve.
    """

    points: tuple[Pt, ...]

    @property
    def start(self) -> Pt:
        return self.points[0]

    @property
    def end(self) -> Pt:
        return self.points[-1]

    @property
    def is_line(self) -> bool:
        return len(self.points) == 2

    @property
    def is_quadratic(self) -> bool:
        return len(self.points) == 3

    @property
    def is_cubic(self) -> bool:
        return len(self.points) == 4

    def reversed(self) -> "Segment":
        """Same segment traversed in the opposite direction."""
        return Segment(tuple(reversed(self.points)))


class BezierPath:
    """An ordered list of drawing elements.

    Example:
        path = BezierPath()
        path.move_to((10, 10))
        path.line_to((90, 10))
        path.quad_to((90, 90), (10, 90))
        path.close_path()
    """

    def __init__(self, elements: Iterable[PathElement] | None = None) -> None:
        self._elements: list[PathElement] = list(elements) if elements else []

    @property
    def elements(self) -> list[PathElement]:
        return self._elements

    def move_to(self, point: Pt) -> None:
        self._elements.append(PathElement(Verb.MOVE_TO, (point,)))

    def line_to(self, point: Pt) -> None:
        self._elements.append(PathElement(Verb.LINE_TO, (point,)))

    def quad_to(self, control: Pt, point: Pt) -> None:
        self._elements.append(PathElement(Verb.QUAD_TO, (control, point)))

    def curve_to(self, control1: Pt, control2: Pt, point: Pt) -> None:
        self._elements.append(PathElement(Verb.CURVE_TO, (control1, control2, point)))

    def close_path(self) -> None:
        self._elements.append(PathElement(Verb.CLOSE))

    def extend(self, other: "BezierPath") -> None:
        """Append all elements of another path."""
        self._elements.extend(other.elements)

    def is_empty(self) -> bool:
        """Check if the path draws nothing."""
        return not any(e.verb != Verb.MOVE_TO for e in self._elements)

    def has_cubic(self) -> bool:
        """Check if any element is a cubic curve."""
        return any(e.verb == Verb.CURVE_TO for e in self._elements)

    def is_closed(self) -> bool:
        """Check if the path ends with a close element."""
        return bool(self._elements) and self._elements[-1].verb == Verb.CLOSE

    def segments(self) -> Iterator[Segment]:
        """Iterate over drawable segments.

        A close element yields the implicit line back to the sub-path start
        unless the current point is already there.
        """
        start: Pt = (0.0, 0.0)
        current: Pt = (0.0, 0.0)

        for element in self._elements:
            if element.verb == Verb.MOVE_TO:
                start = current = element.points[0]
            elif element.verb == Verb.CLOSE:
                if current != start:
                    yield Segment((current, start))
                current = start
            else:
                yield Segment((current, *element.points))
                current = element.points[-1]

    def subpaths(self) -> list["BezierPath"]:
        """Split the path at every moveTo."""
        result: list[BezierPath] = []
        current: BezierPath | None = None

        for element in self._elements:
            if element.verb == Verb.MOVE_TO or current is None:
                current = BezierPath()
                result.append(current)
            current.elements.append(element)

        return [path for path in result if not path.is_empty()]

    def bounding_box(self) -> BoundingBox:
        """Exact bounds of the drawn geometry, curve extrema included.

        Returns:
            BoundingBox, the zero box for an empty path
        """
        boxes: list[BoundingBox] = []
        start: Pt = (0.0, 0.0)
        current: Pt = (0.0, 0.0)

        for element in self._elements:
            if element.verb == Verb.MOVE_TO:
                start = current = element.points[0]
                boxes.append(BoundingBox(*current, *current))
            elif element.verb == Verb.LINE_TO:
                current = element.points[0]
                boxes.append(BoundingBox(*current, *current))
            elif element.verb == Verb.CLOSE:
                current = start
            elif element.verb == Verb.QUAD_TO:
                boxes.append(BoundingBox(*calcQuadraticBounds(current, *element.points)))
                current = element.points[-1]
            elif element.verb == Verb.CURVE_TO:
                boxes.append(BoundingBox(*calcCubicBounds(current, *element.points)))
                current = element.points[-1]

        return BoundingBox.union_all(boxes)

    @classmethod
    def from_segments(cls, segments: Iterable[Segment], close: bool = False) -> "BezierPath":
        """Build a path from segments, starting a sub-path at every discontinuity.

        Args:
            segments: Segments in drawing order
            close: Close the path after the last segment

        Returns:
            New BezierPath
        """
        path = cls()
        current: Pt | None = None

        for segment in segments:
            if current != segment.start:
                if close and current is not None:
                    path.close_path()
                path.move_to(segment.start)
            if segment.is_line:
                path.line_to(segment.end)
            elif segment.is_quadratic:
                path.quad_to(segment.points[1], segment.end)
            else:
                path.curve_to(segment.points[1], segment.points[2], segment.end)
            current = segment.end

        if close and current is not None:
            path.close_path()

        return path

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[PathElement]:
        return iter(self._elements)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BezierPath):
            return NotImplemented
        return self._elements == other._elements

    def __repr__(self) -> str:
        return f"BezierPath({self._elements!r})"


def bounding_box(paths: Iterable[BezierPath]) -> BoundingBox:
    """Smallest box enclosing all paths."""
    return BoundingBox.union_all(
        path.bounding_box() for path in paths if not path.is_empty()
    )
