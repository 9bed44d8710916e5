"""SVG optimizer built from a pipeline of named tree plugins."""

from __future__ import annotations

import math
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from importlib import metadata
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

from fontTools.misc.transform import Identity, Transform
from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.pens.transformPen import TransformPen
from fontTools.svgLib.path import parse_path

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)

_ENTRY_POINT_GROUP = "iconpack.optimizer_plugins"

_TRANSFORM_PATTERN = re.compile(r"(matrix|translate|scale|rotate|skewX|skewY)\s*\(([^)]*)\)")
_NUMBER_PATTERN = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")

# Elements a group transform can be pushed through without changing rendering.
_PUSHABLE_TAGS = {"g", "path", "title", "desc"}


class OptimizeError(RuntimeError):
    """Raised when an SVG document cannot be parsed or transformed."""


@dataclass(frozen=True)
class PluginContext:
    """Per-call settings handed to every plugin."""

    path: Optional[str]
    precision: int

    def format_number(self, value: float) -> str:
        text = f"{value:.{self.precision}f}"
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        if text in {"-0", ""}:
            return "0"
        return text


@dataclass(frozen=True)
class OptimizeResult:
    """Optimized SVG text."""

    data: str
    path: Optional[str] = None


PluginFunc = Callable[[ET.Element, PluginContext], None]
PluginSpec = Union[str, PluginFunc]


def _local_name(tag: object) -> str:
    return tag.rsplit("}", 1)[-1] if isinstance(tag, str) else ""


def _retag(element: ET.Element, local: str) -> None:
    tag = element.tag
    namespace = tag[: tag.index("}") + 1] if isinstance(tag, str) and tag.startswith("{") else ""
    element.tag = f"{namespace}{local}"


def _numbers(text: str | None) -> List[float]:
    return [float(value) for value in _NUMBER_PATTERN.findall(text or "")]


def _attr_number(element: ET.Element, name: str, default: float = 0.0) -> float:
    values = _numbers(element.get(name))
    return values[0] if values else default


def parse_transform(value: str) -> Transform:
    """Return the affine transform described by an SVG `transform` attribute."""
    transform = Transform()
    for kind, raw_args in _TRANSFORM_PATTERN.findall(value):
        args = _numbers(raw_args)
        if kind == "matrix" and len(args) == 6:
            step = Transform(*args)
        elif kind == "translate" and args:
            step = Transform().translate(args[0], args[1] if len(args) > 1 else 0)
        elif kind == "scale" and args:
            step = Transform().scale(args[0], args[1] if len(args) > 1 else args[0])
        elif kind == "rotate" and len(args) in (1, 3):
            angle = math.radians(args[0])
            if len(args) == 3:
                cx, cy = args[1], args[2]
                step = Transform().translate(cx, cy).rotate(angle).translate(-cx, -cy)
            else:
                step = Transform().rotate(angle)
        elif kind == "skewX" and len(args) == 1:
            step = Transform().skew(math.radians(args[0]), 0)
        elif kind == "skewY" and len(args) == 1:
            step = Transform().skew(0, math.radians(args[0]))
        else:
            raise ValueError(f"Invalid transform {kind}({raw_args.strip()})")
        transform = transform.transform(step)
    return transform


def _bake_path(element: ET.Element, transform: Transform, context: PluginContext) -> None:
    data = element.get("d")
    if not data:
        return
    pen = SVGPathPen(None, ntos=context.format_number)
    parse_path(data, TransformPen(pen, transform))
    element.set("d", pen.getCommands())


def _only_pushable(element: ET.Element) -> bool:
    return all(_local_name(child.tag) in _PUSHABLE_TAGS for child in element.iter() if child is not element)


def _apply_transforms(element: ET.Element, ctm: Transform, context: PluginContext) -> None:
    own = element.get("transform")
    if _local_name(element.tag) == "path":
        total = ctm.transform(parse_transform(own)) if own else ctm
        if total != Identity:
            _bake_path(element, total, context)
        element.attrib.pop("transform", None)
        return

    if own is not None and _only_pushable(element):
        ctm = ctm.transform(parse_transform(own))
        del element.attrib["transform"]
    elif own is not None:
        # The element keeps its transform, so children stay in its coordinate system.
        ctm = Identity

    for child in element:
        _apply_transforms(child, ctm, context)


def convert_transform(root: ET.Element, context: PluginContext) -> None:
    """Bake `transform` attributes into path data where it is safe to do so."""
    _apply_transforms(root, Identity, context)


def _shape_path(element: ET.Element, context: PluginContext) -> str | None:
    fmt = context.format_number
    kind = _local_name(element.tag)
    if kind == "rect":
        if element.get("rx") or element.get("ry"):
            return None
        x, y = _attr_number(element, "x"), _attr_number(element, "y")
        width, height = _attr_number(element, "width"), _attr_number(element, "height")
        if width <= 0 or height <= 0:
            return None
        return f"M{fmt(x)} {fmt(y)}H{fmt(x + width)}V{fmt(y + height)}H{fmt(x)}Z"
    if kind == "line":
        return (
            f"M{fmt(_attr_number(element, 'x1'))} {fmt(_attr_number(element, 'y1'))}"
            f"L{fmt(_attr_number(element, 'x2'))} {fmt(_attr_number(element, 'y2'))}"
        )
    if kind in {"polyline", "polygon"}:
        coords = _numbers(element.get("points"))
        pairs = [(coords[i], coords[i + 1]) for i in range(0, len(coords) - 1, 2)]
        if len(pairs) < 2:
            return None
        head, *rest = pairs
        data = f"M{fmt(head[0])} {fmt(head[1])}" + "".join(f"L{fmt(x)} {fmt(y)}" for x, y in rest)
        return data + "Z" if kind == "polygon" else data
    if kind in {"circle", "ellipse"}:
        cx, cy = _attr_number(element, "cx"), _attr_number(element, "cy")
        if kind == "circle":
            rx = ry = _attr_number(element, "r")
        else:
            rx, ry = _attr_number(element, "rx"), _attr_number(element, "ry")
        if rx <= 0 or ry <= 0:
            return None
        arc = f"A{fmt(rx)} {fmt(ry)} 0 1 0"
        return (
            f"M{fmt(cx - rx)} {fmt(cy)}{arc} {fmt(cx + rx)} {fmt(cy)}"
            f"{arc} {fmt(cx - rx)} {fmt(cy)}Z"
        )
    return None


_SHAPE_ATTRIBUTES = {
    "rect": ("x", "y", "width", "height", "rx", "ry"),
    "line": ("x1", "y1", "x2", "y2"),
    "polyline": ("points",),
    "polygon": ("points",),
    "circle": ("cx", "cy", "r"),
    "ellipse": ("cx", "cy", "rx", "ry"),
}


def convert_shape_to_path(root: ET.Element, context: PluginContext) -> None:
    """Rewrite basic shapes as equivalent `<path>` elements."""
    for element in root.iter():
        kind = _local_name(element.tag)
        if kind not in _SHAPE_ATTRIBUTES:
            continue
        data = _shape_path(element, context)
        if data is None:
            continue
        for name in _SHAPE_ATTRIBUTES[kind]:
            element.attrib.pop(name, None)
        element.set("d", data)
        _retag(element, "path")


def remove_xmlns(root: ET.Element, context: PluginContext) -> None:
    """Drop the SVG namespace so the output carries no `xmlns` declaration."""
    prefix = f"{{{SVG_NS}}}"
    for element in root.iter():
        if isinstance(element.tag, str) and element.tag.startswith(prefix):
            element.tag = element.tag[len(prefix):]


def remove_empty_attrs(root: ET.Element, context: PluginContext) -> None:
    for element in root.iter():
        for name, value in list(element.attrib.items()):
            if not value.strip():
                del element.attrib[name]


def remove_dimensions(root: ET.Element, context: PluginContext) -> None:
    """Remove width/height from the root element when a viewBox is present."""
    if root.get("viewBox"):
        root.attrib.pop("width", None)
        root.attrib.pop("height", None)


_BUILTIN_PLUGINS: Dict[str, PluginFunc] = {
    "convertTransform": convert_transform,
    "convertShapeToPath": convert_shape_to_path,
    "removeXMLNS": remove_xmlns,
    "removeEmptyAttrs": remove_empty_attrs,
    "removeDimensions": remove_dimensions,
}


def available_plugins() -> List[str]:
    names = list(_BUILTIN_PLUGINS)
    for entry in _iter_entry_points():
        if entry.name not in names:
            names.append(entry.name)
    return names


def resolve_plugins(plugins: Sequence[PluginSpec]) -> List[PluginFunc]:
    """Turn plugin names and callables into an ordered list of callables."""
    resolved: List[PluginFunc] = []
    external: Dict[str, metadata.EntryPoint] | None = None
    for plugin in plugins:
        if callable(plugin):
            resolved.append(plugin)
            continue
        builtin = _BUILTIN_PLUGINS.get(plugin)
        if builtin is not None:
            resolved.append(builtin)
            continue
        if external is None:
            external = {entry.name: entry for entry in _iter_entry_points()}
        entry = external.get(plugin)
        if entry is None:
            raise ValueError(f"Unknown optimizer plugin: {plugin}")
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover
            raise RuntimeError(f"Failed to load optimizer plugin '{plugin}': {exc}") from exc
        if not callable(loaded):
            raise TypeError(f"Optimizer plugin '{plugin}' is not callable")
        resolved.append(loaded)
    return resolved


def optimize(
    svg_text: str,
    *,
    path: str | Path | None = None,
    plugins: Sequence[PluginSpec] = (),
    precision: int = 3,
) -> OptimizeResult:
    """Run `plugins` over `svg_text` in order and return the serialized result."""
    context = PluginContext(path=str(path) if path is not None else None, precision=precision)
    pipeline = resolve_plugins(plugins)
    where = f" {context.path}" if context.path else ""

    try:
        root = ET.fromstring(svg_text)
    except ET.ParseError as exc:
        raise OptimizeError(f"Cannot parse SVG{where}: {exc}") from exc
    if _local_name(root.tag) != "svg":
        raise OptimizeError(f"Root element of{where or ' document'} is <{_local_name(root.tag)}>, expected <svg>")

    for plugin in pipeline:
        try:
            plugin(root, context)
        except OptimizeError:
            raise
        except (ValueError, TypeError, KeyError, IndexError) as exc:
            name = getattr(plugin, "__name__", repr(plugin))
            raise OptimizeError(f"Plugin {name} failed on{where or ' document'}: {exc}") from exc

    return OptimizeResult(data=ET.tostring(root, encoding="unicode"), path=context.path)


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "OptimizeError",
    "OptimizeResult",
    "PluginContext",
    "available_plugins",
    "optimize",
    "parse_transform",
    "resolve_plugins",
]
