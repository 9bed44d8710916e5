"""React Native text-icon emitter (`reactNative/`)."""

from __future__ import annotations

import json
import re
from typing import Dict

from ..models import IconRegistry
from ..naming import normalize, react_native_policy
from .base import Artifact, Emitter
from .templating import js_string, render_template

SUBDIR = "reactNative"

DEFAULT_FONT_SIZE = 16

_LEADING_NUMBER = re.compile(r"\s*(\d+(?:\.\d+)?)")


def component_name(prefix: str) -> str:
    return normalize(prefix, react_native_policy(prefix))


def render_icon_map(registry: IconRegistry) -> str:
    """Return the `name -> glyph character` object literal in registry order."""
    mapping = {entry.name: entry.char for entry in registry}
    return json.dumps(mapping, indent=2, ensure_ascii=True)


def render_name_union(registry: IconRegistry) -> str:
    names = registry.names()
    if not names:
        return "never"
    return " | ".join(js_string(name) for name in names)


def render_component(registry: IconRegistry, *, component: str, font_family: str, font_size: float) -> str:
    return render_template(
        "react_native/component.jsx.j2",
        component=component,
        font_family=font_family,
        font_size=_format_size(font_size),
        icon_map=render_icon_map(registry),
    )


def render_component_types(registry: IconRegistry, *, component: str) -> str:
    return render_template(
        "react_native/component.d.ts.j2",
        component=component,
        union=render_name_union(registry),
    )


class ReactNativeEmitter(Emitter):
    """Writes one `<Text>`-based component covering every icon."""

    name = "react_native"
    subdir = SUBDIR

    def __init__(self, font_name: str, *, prefix: str | None = None, font_size: str | None = None) -> None:
        super().__init__()
        self.font_name = font_name
        self.prefix = prefix or font_name
        self.font_size = parse_font_size(font_size)

    def render(self, registry: IconRegistry) -> Dict[str, Artifact]:
        component = component_name(self.prefix)
        return {
            f"{self.subdir}/{component}.jsx": render_component(
                registry,
                component=component,
                font_family=self.font_name,
                font_size=self.font_size,
            ),
            f"{self.subdir}/{component}.d.ts": render_component_types(registry, component=component),
        }


def parse_font_size(value: str | None) -> float:
    """Read the numeric part of a CSS length such as `"18px"`."""
    if value is None:
        return DEFAULT_FONT_SIZE
    match = _LEADING_NUMBER.match(value)
    return float(match.group(1)) if match else DEFAULT_FONT_SIZE


def _format_size(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)
