"""Vector node tree produced from SVG documents.

The tree is a simplified view of an SVG document: transforms are already
applied to the path geometry and presentation attributes are resolved, so
consumers only have to dispatch on the node kind.

Node kinds:
- PathNode: Geometry with optional fill and stroke
- GroupNode: Ordered children
- TextNode: Text content (not converted to outlines)
- ImageNode: Raster image reference (not converted to outlines)
"""

from dataclasses import dataclass, field
from enum import Enum

from glacon.domain.path import BezierPath


class LineJoin(str, Enum):
    """Shape used at the corners of stroked paths."""

    MITER = "miter"
    ROUND = "round"
    BEVEL = "bevel"


class LineCap(str, Enum):
    """Shape used at the ends of open stroked paths."""

    BUTT = "butt"
    ROUND = "round"
    SQUARE = "square"


class FillRule(str, Enum):
    """SVG fill rule."""

    NONZERO = "nonzero"
    EVENODD = "evenodd"


@dataclass(frozen=True)
class Fill:
    """Fill paint of a path."""

    rule: FillRule = FillRule.NONZERO


@dataclass(frozen=True)
class Stroke:
    """Stroke paint of a path.

    Attributes:
        width: Stroke width in user units
        join: Corner shape
        cap: End shape
        miter_limit: Ratio of miter length to stroke width above which
            miter joins fall back to bevel joins
        dash_array: Alternating dash and gap lengths (empty for solid)
        dash_offset: Distance into the dash pattern at the path start
    """

    width: float = 1.0
    join: LineJoin = LineJoin.MITER
    cap: LineCap = LineCap.BUTT
    miter_limit: float = 4.0
    dash_array: tuple[float, ...] = ()
    dash_offset: float = 0.0


@dataclass
class PathNode:
    """A path with resolved paint."""

    path: BezierPath
    fill: Fill | None = None
    stroke: Stroke | None = None


@dataclass
class GroupNode:
    """A container of child nodes."""

    children: list["SvgNode"] = field(default_factory=list)

    def iter_paths(self) -> list[PathNode]:
        """All path nodes of the subtree in document order."""
        result: list[PathNode] = []
        for child in self.children:
            if isinstance(child, PathNode):
                result.append(child)
            elif isinstance(child, GroupNode):
                result.extend(child.iter_paths())
        return result


@dataclass
class TextNode:
    """Text content."""

    content: str = ""


@dataclass
class ImageNode:
    """An embedded or linked raster image."""

    href: str = ""


SvgNode = PathNode | GroupNode | TextNode | ImageNode
