"""Core geometric types for glyph outlines.

This module defines the types a synthesized glyph is made of:
- CurvePoint: A point in font units with its on-curve flag
- Contour: A closed sequence of curve points
- BoundingBox: Axis-aligned bounds, used both in SVG space and font space
"""

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned bounding box.

    Attributes:
        x_min: Minimum x coordinate
        y_min: Minimum y coordinate
        x_max: Maximum x coordinate
        y_max: Maximum y coordinate
    """

    x_min: float = 0
    y_min: float = 0
    x_max: float = 0
    y_max: float = 0

    @property
    def width(self) -> float:
        """Horizontal extent of the box."""
        return abs(self.x_max - self.x_min)

    @property
    def height(self) -> float:
        """Vertical extent of the box."""
        return abs(self.y_max - self.y_min)

    @property
    def max_side(self) -> float:
        """Length of the longer side."""
        return max(self.width, self.height)

    @property
    def area(self) -> float:
        """Area covered by the box."""
        return self.width * self.height

    def union(self, other: "BoundingBox") -> "BoundingBox":
        """Return the smallest box enclosing both boxes."""
        return BoundingBox(
            min(self.x_min, other.x_min),
            min(self.y_min, other.y_min),
            max(self.x_max, other.x_max),
            max(self.y_max, other.y_max),
        )

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Convert to (x_min, y_min, x_max, y_max)."""
        return (self.x_min, self.y_min, self.x_max, self.y_max)

    @classmethod
    def from_points(cls, points: Iterable[tuple[float, float]]) -> "BoundingBox":
        """Bounds of a set of points; the zero box if there are none."""
        xs: list[float] = []
        ys: list[float] = []
        for x, y in points:
            xs.append(x)
            ys.append(y)
        if not xs:
            return cls()
        return cls(min(xs), min(ys), max(xs), max(ys))

    @classmethod
    def union_all(cls, boxes: Iterable["BoundingBox"]) -> "BoundingBox":
        """Union of several boxes; the zero box if there are none."""
        result: BoundingBox | None = None
        for box in boxes:
            result = box if result is None else result.union(box)
        return result if result is not None else cls()


@dataclass(frozen=True, slots=True)
class CurvePoint:
    """A point of a TrueType contour.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in font units
        y: Y coordinate in font units
        on_curve: True for points on the outline, False for quadratic
            control points
    """

    x: int
    y: int
    on_curve: bool = True

    def to_tuple(self) -> tuple[int, int]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)


@dataclass
class Contour:
    """A closed contour of a glyph.

    The last point connects back to the first one. A copy of the first
    point is stored at the end only when the source path did not already
    return to its start.

    Attributes:
        points: Points forming the contour, at least one
    """

    points: list[CurvePoint]
    _cached_bbox: BoundingBox | None = field(default=None, repr=False, init=False)

    def bounding_box(self) -> BoundingBox:
        """Calculate bounding box of the contour, control points included.

        Result is cached for efficiency.

        Returns:
            BoundingBox of all points
        """
        if self._cached_bbox is None:
            self._cached_bbox = BoundingBox.from_points(p.to_tuple() for p in self.points)
        return self._cached_bbox

    def signed_area(self) -> float:
        """Calculate signed area of the point polygon using the shoelace formula.

        Returns:
            Positive for counter-clockwise contours, negative for clockwise
        """
        n = len(self.points)
        if n < 3:
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.points[i].x * self.points[j].y
            area -= self.points[j].x * self.points[i].y

        return area / 2.0

    def __len__(self) -> int:
        return len(self.points)
