"""CSS class map emitter (`{fontName}.css`)."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from ..models import IconRegistry
from ..naming import css_policy, join_words, resolve_identifiers, split_words
from .base import Artifact, Emitter
from .templating import render_template


def base_class(prefix: str) -> str:
    return join_words(split_words(prefix), "kebab")


def class_names(names: Sequence[str], prefix: str) -> Dict[str, str]:
    """Return `name -> CSS class` with the prefix folded into each identifier."""
    policy = css_policy(prefix)
    # Normalizing "<prefix> <name>" keeps class names from ever starting with a digit.
    qualified = [f"{prefix} {name}" for name in names]
    # Every icon element also carries the base class, so no icon may claim it.
    resolved = resolve_identifiers(qualified, policy, taken=[base_class(prefix)])
    return {name: resolved[key] for name, key in zip(names, qualified)}


def render_css(
    registry: IconRegistry,
    *,
    prefix: str,
    font_family: str,
    font_file: str,
    font_size: Optional[str] = None,
) -> str:
    classes = class_names(registry.names(), prefix)
    icons: List[Dict[str, str]] = [
        {"name": entry.name, "class_name": classes[entry.name], "hex": entry.hex}
        for entry in registry
    ]
    return render_template(
        "css/font.css.j2",
        prefix=base_class(prefix),
        font_family=font_family,
        font_file=font_file,
        font_size=font_size,
        icons=icons,
    )


class CssEmitter(Emitter):
    """Writes an `@font-face` rule and one class per icon."""

    name = "css"

    def __init__(self, font_name: str, *, prefix: str | None = None, font_size: str | None = "16px") -> None:
        super().__init__()
        self.font_name = font_name
        self.prefix = prefix or font_name
        self.font_size = _css_length(font_size)

    def render(self, registry: IconRegistry) -> Dict[str, Artifact]:
        text = render_css(
            registry,
            prefix=self.prefix,
            font_family=self.font_name,
            font_file=f"{self.font_name}.ttf",
            font_size=self.font_size,
        )
        return {f"{self.font_name}.css": text}


def _css_length(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    value = value.strip()
    return f"{value}px" if value.replace(".", "", 1).isdigit() else value
