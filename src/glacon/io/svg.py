"""SVG document parsing.

Builds the node tree consumed by the path normalizer from SVG markup.
ElementTree reads the XML and fontTools' svgLib turns path data and basic
shapes into drawing commands.

Supported:
- path, rect, circle, ellipse, line, polyline, polygon
- g, a, switch and nested svg containers
- use elements referencing other elements by id
- transform attributes on every element
- fill, stroke and stroke geometry from presentation attributes and the
  style attribute, with inheritance
- display="none" and visibility

Not supported: CSS style sheets, clipping, masking, markers, fill-rule
based hole punching and gradients (any paint other than none fills).
Geometry is mapped into the root viewport: the viewBox origin moves to
(0, 0) and its size is scaled to the width and height attributes when they
are given. The glyph synthesizer then rescales every icon to the em box.
"""

import logging
import math
import re
import xml.etree.ElementTree as ET

from fontTools.misc.transform import Identity, Transform
from fontTools.pens.transformPen import TransformPen
from fontTools.svgLib.path import parse_path
from fontTools.svgLib.path.shapes import PathBuilder

from glacon.domain import (
    Fill,
    FillRule,
    GroupNode,
    ImageNode,
    LineCap,
    LineJoin,
    PathNode,
    Stroke,
    SvgNode,
    TextNode,
)
from glacon.exceptions import SvgParseError
from glacon.io.converter import BezierPathPen

logger = logging.getLogger(__name__)

XLINK_HREF = "{http://www.w3.org/1999/xlink}href"

SHAPES = frozenset({"path", "rect", "circle", "ellipse", "line", "polyline", "polygon"})
CONTAINERS = frozenset({"g", "a", "switch", "svg"})
LENGTH_ATTRIBUTES = frozenset(
    {"x", "y", "width", "height", "rx", "ry", "cx", "cy", "r", "x1", "y1", "x2", "y2"}
)
NON_RENDERED = frozenset(
    {
        "defs",
        "clipPath",
        "mask",
        "marker",
        "pattern",
        "symbol",
        "linearGradient",
        "radialGradient",
        "filter",
        "style",
        "script",
        "title",
        "desc",
        "metadata",
    }
)

INHERITED_PROPERTIES = (
    "fill",
    "fill-opacity",
    "fill-rule",
    "stroke",
    "stroke-opacity",
    "stroke-width",
    "stroke-linejoin",
    "stroke-linecap",
    "stroke-miterlimit",
    "stroke-dasharray",
    "stroke-dashoffset",
    "visibility",
)

DEFAULT_STYLE = {
    "fill": "black",
    "stroke": "none",
    "visibility": "visible",
}

MAX_USE_DEPTH = 16

_TRANSFORM_RE = re.compile(r"(matrix|translate|scale|rotate|skewX|skewY)\s*\(([^)]*)\)")
_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def parse_number(value: str | None, default: float = 0.0) -> float:
    """Parse the leading number of an attribute value, ignoring units."""
    if value is None:
        return default
    match = _NUMBER_RE.match(value.strip())
    return float(match.group()) if match else default


def parse_transform(value: str | None) -> Transform:
    """Parse an SVG transform list.

    Examples:
        >>> parse_transform("translate(10 20) scale(2)").transformPoint((1, 1))
        (12.0, 22.0)

    Raises:
        ValueError: If a transform has the wrong number of arguments
    """
    transform = Identity
    if not value:
        return transform

    for name, args_text in _TRANSFORM_RE.findall(value):
        args = [float(arg) for arg in _NUMBER_RE.findall(args_text)]

        if name == "matrix":
            if len(args) != 6:
                raise ValueError(f"matrix() takes 6 arguments, got {len(args)}")
            step = Transform(*args)
        elif name == "translate":
            if len(args) not in (1, 2):
                raise ValueError(f"translate() takes 1 or 2 arguments, got {len(args)}")
            step = Identity.translate(args[0], args[1] if len(args) == 2 else 0)
        elif name == "scale":
            if len(args) not in (1, 2):
                raise ValueError(f"scale() takes 1 or 2 arguments, got {len(args)}")
            step = Identity.scale(args[0], args[1] if len(args) == 2 else args[0])
        elif name == "rotate":
            if len(args) not in (1, 3):
                raise ValueError(f"rotate() takes 1 or 3 arguments, got {len(args)}")
            angle = math.radians(args[0])
            if len(args) == 3:
                cx, cy = args[1], args[2]
                step = Identity.translate(cx, cy).rotate(angle).translate(-cx, -cy)
            else:
                step = Identity.rotate(angle)
        elif name == "skewX":
            if len(args) != 1:
                raise ValueError("skewX() takes 1 argument")
            step = Identity.skew(math.radians(args[0]), 0)
        else:
            if len(args) != 1:
                raise ValueError("skewY() takes 1 argument")
            step = Identity.skew(0, math.radians(args[0]))

        transform = transform.transform(step)

    return transform


def _viewport_length(value: str | None) -> float | None:
    # Percentages resolve against a parent viewport the icon does not have
    if value is None or value.strip().endswith("%"):
        return None
    length = parse_number(value, -1.0)
    return length if length > 0 else None


def viewport_transform(element: ET.Element) -> Transform:
    """Map the viewBox of an svg element onto its viewport.

    The viewport is the element's width and height, or the viewBox size
    when they are missing. preserveAspectRatio alignment and meet/slice are
    honored. An absent or invalid viewBox maps nothing.

    Examples:
        >>> svg = ET.fromstring('<svg viewBox="0 -960 960 960"/>')
        >>> viewport_transform(svg).transformPoint((0, -960))
        (0.0, 0.0)
    """
    numbers = [float(n) for n in _NUMBER_RE.findall(element.attrib.get("viewBox", ""))]
    if len(numbers) != 4 or numbers[2] <= 0 or numbers[3] <= 0:
        return Identity
    min_x, min_y, view_width, view_height = numbers

    width = _viewport_length(element.attrib.get("width")) or view_width
    height = _viewport_length(element.attrib.get("height")) or view_height
    scale_x, scale_y = width / view_width, height / view_height

    align, _, mode = element.attrib.get("preserveAspectRatio", "xMidYMid meet").strip().partition(" ")
    if align != "none":
        scale_x = scale_y = max(scale_x, scale_y) if mode.strip() == "slice" else min(scale_x, scale_y)

    offset_x = width - view_width * scale_x
    offset_y = height - view_height * scale_y
    factor_x = {"xMin": 0.0, "xMax": 1.0}.get(align[:4], 0.5) if align != "none" else 0.0
    factor_y = {"YMin": 0.0, "YMax": 1.0}.get(align[4:], 0.5) if align != "none" else 0.0

    return Identity.translate(
        offset_x * factor_x - min_x * scale_x,
        offset_y * factor_y - min_y * scale_y,
    ).scale(scale_x, scale_y)


def parse_style(element: ET.Element) -> dict[str, str]:
    """Presentation attributes of an element, style attribute taking precedence."""
    properties = {
        name: element.attrib[name].strip()
        for name in (*INHERITED_PROPERTIES, "display")
        if name in element.attrib
    }

    for declaration in element.attrib.get("style", "").split(";"):
        if ":" not in declaration:
            continue
        name, value = declaration.split(":", 1)
        properties[name.strip()] = value.replace("!important", "").strip()

    return properties


def _scale_factor(transform: Transform) -> float:
    """Length scale of a transform, used for stroke widths."""
    xx, xy, yx, yy, _, _ = transform
    return math.sqrt(abs(xx * yy - xy * yx))


def _paint_fill(style: dict[str, str]) -> Fill | None:
    if style.get("fill", "black") == "none" or parse_number(style.get("fill-opacity"), 1.0) <= 0:
        return None
    rule = FillRule.EVENODD if style.get("fill-rule") == "evenodd" else FillRule.NONZERO
    return Fill(rule=rule)


def _parse_dash_array(value: str | None, scale: float) -> tuple[float, ...]:
    if not value or value == "none":
        return ()
    dashes = [float(number) for number in _NUMBER_RE.findall(value)]
    if any(d < 0 for d in dashes) or sum(dashes) <= 0:
        return ()
    return tuple(d * scale for d in dashes)


def _paint_stroke(style: dict[str, str], transform: Transform) -> Stroke | None:
    if style.get("stroke", "none") == "none" or parse_number(style.get("stroke-opacity"), 1.0) <= 0:
        return None

    scale = _scale_factor(transform)
    width = parse_number(style.get("stroke-width"), 1.0) * scale
    if width <= 0:
        return None

    try:
        join = LineJoin(style.get("stroke-linejoin", "miter"))
    except ValueError:
        join = LineJoin.MITER
    try:
        cap = LineCap(style.get("stroke-linecap", "butt"))
    except ValueError:
        cap = LineCap.BUTT

    return Stroke(
        width=width,
        join=join,
        cap=cap,
        miter_limit=max(1.0, parse_number(style.get("stroke-miterlimit"), 4.0)),
        dash_array=_parse_dash_array(style.get("stroke-dasharray"), scale),
        dash_offset=parse_number(style.get("stroke-dashoffset"), 0.0) * scale,
    )


class SvgParser:
    """Converts an SVG document into a node tree.

    Example:
        parser = SvgParser(text, source="icons/book.svg")
        document = parser.parse()
    """

    def __init__(self, text: str | bytes, source: str = "<string>") -> None:
        self.text = text
        self.source = source
        self._ids: dict[str, ET.Element] = {}

    def parse(self) -> GroupNode:
        """Parse the document.

        Returns:
            Root group node

        Raises:
            SvgParseError: If the markup is not well-formed SVG or contains
                invalid geometry
        """
        try:
            root = ET.fromstring(self.text)
        except ET.ParseError as e:
            raise SvgParseError(self.source, str(e)) from e

        if _local_name(root.tag) != "svg":
            raise SvgParseError(self.source, f"root element is <{_local_name(root.tag)}>, not <svg>")

        self._ids = {el.attrib["id"]: el for el in root.iter() if "id" in el.attrib}

        root_style = {k: v for k, v in parse_style(root).items() if k != "display"}
        style = {**DEFAULT_STYLE, **root_style}

        try:
            transform = parse_transform(root.attrib.get("transform")).transform(viewport_transform(root))
            children = self._children(root, style, transform, 0)
        except (ValueError, TypeError) as e:
            raise SvgParseError(self.source, str(e)) from e

        return GroupNode(children)

    def _children(
        self,
        element: ET.Element,
        style: dict[str, str],
        transform: Transform,
        depth: int,
    ) -> list[SvgNode]:
        nodes: list[SvgNode] = []
        for child in element:
            node = self._node(child, style, transform, depth)
            if node is not None:
                nodes.append(node)
        return nodes

    def _node(
        self,
        element: ET.Element,
        parent_style: dict[str, str],
        parent_transform: Transform,
        depth: int,
    ) -> SvgNode | None:
        if not isinstance(element.tag, str):
            # Comments and processing instructions
            return None

        tag = _local_name(element.tag)
        if tag in NON_RENDERED:
            return None

        own_style = parse_style(element)
        if own_style.get("display") == "none":
            return None

        style = {**parent_style, **{k: v for k, v in own_style.items() if k != "display"}}
        transform = parent_transform.transform(parse_transform(element.attrib.get("transform")))

        if tag in CONTAINERS:
            if tag == "svg":
                transform = transform.translate(
                    parse_number(element.attrib.get("x")),
                    parse_number(element.attrib.get("y")),
                ).transform(viewport_transform(element))
            return GroupNode(self._children(element, style, transform, depth))

        if tag == "use":
            return self._use(element, style, transform, depth)

        if tag in SHAPES:
            return self._shape(element, style, transform)

        if tag == "text":
            return TextNode("".join(element.itertext()).strip())

        if tag == "image":
            return ImageNode(element.attrib.get("href") or element.attrib.get(XLINK_HREF, ""))

        logger.debug("Skipping unsupported element <%s> in %s", tag, self.source)
        return None

    def _use(
        self,
        element: ET.Element,
        style: dict[str, str],
        transform: Transform,
        depth: int,
    ) -> SvgNode | None:
        href = element.attrib.get("href") or element.attrib.get(XLINK_HREF, "")
        target = self._ids.get(href[1:]) if href.startswith("#") else None
        if target is None:
            logger.debug("Unresolved reference %r in %s", href, self.source)
            return None
        if depth >= MAX_USE_DEPTH:
            raise ValueError(f"reference chain through {href!r} is too deep")

        transform = transform.translate(
            parse_number(element.attrib.get("x")),
            parse_number(element.attrib.get("y")),
        )

        if _local_name(target.tag) == "symbol":
            return GroupNode(self._children(target, style, transform, depth + 1))

        node = self._node(target, style, transform, depth + 1)
        return GroupNode([node]) if node is not None else None

    def _shape(self, element: ET.Element, style: dict[str, str], transform: Transform) -> PathNode | None:
        if style.get("visibility") in ("hidden", "collapse"):
            return None

        if _local_name(element.tag) == "path" and "d" not in element.attrib:
            return None

        # svgLib only understands matrix() transforms and unitless lengths;
        # transforms are applied by the pen instead
        attrib = {k: v for k, v in element.attrib.items() if k != "transform"}
        for name in LENGTH_ATTRIBUTES.intersection(attrib):
            attrib[name] = repr(parse_number(attrib[name]))
        bare = ET.Element(element.tag, attrib)

        builder = PathBuilder()
        if not builder.add_path_from_element(bare) or not builder.paths:
            return None

        pen = BezierPathPen()
        parse_path(builder.paths[-1], TransformPen(pen, transform))

        if pen.path.is_empty():
            return None
        if _local_name(element.tag) in ("circle", "ellipse") and not pen.path.is_closed():
            # svgLib draws these as two open arcs
            pen.path.close_path()

        return PathNode(
            path=pen.path,
            fill=_paint_fill(style),
            stroke=_paint_stroke(style, transform),
        )


def parse_svg(text: str | bytes, source: str = "<string>") -> GroupNode:
    """Parse SVG markup into a node tree.

    Args:
        text: SVG document
        source: Name used in error messages

    Returns:
        Root group node

    Raises:
        SvgParseError: If the document cannot be parsed
    """
    return SvgParser(text, source).parse()
