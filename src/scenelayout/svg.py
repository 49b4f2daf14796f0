"""Reference SVG renderer.

Consumes only the public geometry of a laid-out tree (absolute points, sizes,
total rotation, style and paint order); nothing in the layout core imports it.
"""
from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from typing import Any, Dict, Optional

from .annotations import AngleMarker
from .container import Container
from .element import Element
from .geometry import Point
from .shapes import Circle, Line, Polygon
from .text import Text
from .units import fmt

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
ET.register_namespace("", SVG_NS)

DEFAULT_SHAPE_STYLE = {"fill": "none", "stroke": "#000000"}
DEFAULT_TEXT_STYLE = {"fill": "#000000"}

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _q(tag: str) -> str:
    return f"{{{SVG_NS}}}{tag}"


def style_attributes(style: Dict[str, Any]) -> Dict[str, str]:
    """``{"strokeWidth": 2}`` -> ``{"stroke-width": "2"}``."""
    attrs: Dict[str, str] = {}
    for key, value in style.items():
        if value is None:
            continue
        name = _CAMEL_RE.sub("-", key).replace("_", "-").lower()
        attrs[name] = fmt(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else str(value)
    return attrs


def render_svg(root: Element, *, padding: float = 0.0, pretty: bool = True) -> str:
    """Serialize ``root`` and its subtree as a standalone SVG document."""
    logger.debug("rendering %r", root)
    bounds = root.bounding_box()
    min_x = bounds.min_x - padding
    min_y = bounds.min_y - padding
    width = bounds.width + 2 * padding
    height = bounds.height + 2 * padding
    svg = ET.Element(
        _q("svg"),
        {
            "width": fmt(width),
            "height": fmt(height),
            "viewBox": f"{fmt(min_x)} {fmt(min_y)} {fmt(width)} {fmt(height)}",
        },
    )
    _render_node(root, svg)
    if pretty:
        ET.indent(svg, space="  ")
    return ET.tostring(svg, encoding="unicode")


def _render_node(node: Element, parent: ET.Element) -> None:
    if isinstance(node, Container):
        _render_container(node, parent)
    elif isinstance(node, Circle):
        _render_circle(node, parent)
    elif isinstance(node, Line):
        _render_line(node, parent)
    elif isinstance(node, AngleMarker):
        _render_angle(node, parent)
    elif isinstance(node, Polygon):
        _render_polygon(node, parent)
    elif isinstance(node, Text):
        _render_text(node, parent)
    else:
        _render_rect(node, parent, DEFAULT_SHAPE_STYLE)


def _attrs(node: Element, defaults: Dict[str, str], **geometry: str) -> Dict[str, str]:
    attrs = dict(geometry)
    if node.name:
        attrs["id"] = node.name
    attrs.update(style_attributes({**defaults, **node.style}))
    return attrs


def _rotation(node: Element, about: Point) -> Optional[str]:
    angle = node.total_rotation
    if not angle:
        return None
    return f"rotate({fmt(angle)} {fmt(about.x)} {fmt(about.y)})"


def _unrotated_origin(node: Element) -> Point:
    center = node.center
    return Point(center.x - node.width / 2, center.y - node.height / 2)


def _render_rect(node: Element, parent: ET.Element, defaults: Dict[str, str], **extra: str) -> ET.Element:
    origin = _unrotated_origin(node)
    attrs = _attrs(
        node,
        defaults,
        x=fmt(origin.x),
        y=fmt(origin.y),
        width=fmt(node.width),
        height=fmt(node.height),
        **extra,
    )
    transform = _rotation(node, node.center)
    if transform:
        attrs["transform"] = transform
    return ET.SubElement(parent, _q("rect"), attrs)


def _render_container(node: Container, parent: ET.Element) -> None:
    group_attrs = {"id": node.name} if node.name else {}
    group = ET.SubElement(parent, _q("g"), group_attrs)
    if node.style:
        background = _render_rect(node, group, {})
        background.attrib.pop("id", None)
    for child in node.children_in_paint_order():
        _render_node(child, group)


def _render_circle(node: Circle, parent: ET.Element) -> None:
    center = node.center
    attrs = _attrs(node, DEFAULT_SHAPE_STYLE, cx=fmt(center.x), cy=fmt(center.y), r=fmt(node.radius))
    ET.SubElement(parent, _q("circle"), attrs)


def _render_line(node: Line, parent: ET.Element) -> None:
    start = node.start
    end = node.end
    attrs = _attrs(node, DEFAULT_SHAPE_STYLE, x1=fmt(start.x), y1=fmt(start.y), x2=fmt(end.x), y2=fmt(end.y))
    ET.SubElement(parent, _q("line"), attrs)


def _points(points) -> str:
    return " ".join(f"{fmt(p.x)},{fmt(p.y)}" for p in points)


def _render_polygon(node: Polygon, parent: ET.Element) -> None:
    ET.SubElement(parent, _q("polygon"), _attrs(node, DEFAULT_SHAPE_STYLE, points=_points(node.vertices)))


def _render_angle(node: AngleMarker, parent: ET.Element) -> None:
    if node.is_right_angle:
        apex, first, corner, second = node.square_marker()
        d = (
            f"M {fmt(apex.x)} {fmt(apex.y)} L {fmt(first.x)} {fmt(first.y)} "
            f"L {fmt(corner.x)} {fmt(corner.y)} L {fmt(second.x)} {fmt(second.y)} Z"
        )
    else:
        start = node.arc_start
        end = node.arc_end
        large_arc = 1 if node.degrees > 180 else 0
        r = fmt(node.radius)
        d = f"M {fmt(start.x)} {fmt(start.y)} A {r} {r} 0 {large_arc} 1 {fmt(end.x)} {fmt(end.y)}"
    ET.SubElement(parent, _q("path"), _attrs(node, DEFAULT_SHAPE_STYLE, d=d))


def _render_text(node: Text, parent: ET.Element) -> None:
    origin = _unrotated_origin(node)
    content = node.box_model.box_origin("contentBox")
    x = origin.x + content.x
    y = origin.y + content.y + node.ascent
    attrs = _attrs(
        node,
        DEFAULT_TEXT_STYLE,
        x=fmt(x),
        y=fmt(y),
        **{"font-size": fmt(node.font_size), "font-family": node.font_family},
    )
    if node.font_weight:
        attrs["font-weight"] = str(node.font_weight)
    transform = _rotation(node, node.center)
    if transform:
        attrs["transform"] = transform
    text = ET.SubElement(parent, _q("text"), attrs)
    lines = node.content.split("\n")
    if len(lines) == 1:
        text.text = node.content
        return
    for index, line in enumerate(lines):
        span = ET.SubElement(text, _q("tspan"), {"x": fmt(x)})
        if index:
            span.set("dy", fmt(node.metrics.line_height))
        span.text = line
