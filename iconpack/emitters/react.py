"""React component emitter (`react/`)."""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Sequence

from ..models import IconEntry, IconRegistry
from ..naming import react_policy, resolve_identifiers
from .base import Artifact, Emitter
from .templating import render_template

SUBDIR = "react"

INDEX_STEM = "index"


def render_component(
    entry: IconEntry,
    identifier: str,
    *,
    class_name: str,
    view_box: str,
    size: Optional[str] = None,
) -> str:
    return render_template(
        "react/component.js.j2",
        identifier=identifier,
        class_name=class_name,
        view_box=view_box,
        size=size,
        paths=entry.geometry,
    )


def render_component_types(identifier: str) -> str:
    return render_template("react/component.d.ts.j2", identifier=identifier)


def render_index(identifiers: Sequence[str]) -> str:
    return render_template("react/index.j2", identifiers=identifiers)


class ReactEmitter(Emitter):
    """Writes one component and one declaration file per icon plus an index."""

    name = "react"
    subdir = SUBDIR

    def __init__(
        self,
        font_name: str,
        *,
        prefix: str | None = None,
        view_box: str = "0 0 24 24",
        size: str | None = None,
    ) -> None:
        super().__init__()
        self.font_name = font_name
        self.prefix = prefix or font_name
        self.view_box = view_box
        self.size = size

    def identifiers(self, registry: IconRegistry) -> Mapping[str, str]:
        return resolve_identifiers(registry.names(), react_policy(self.prefix), taken=[INDEX_STEM])

    def render(self, registry: IconRegistry) -> Dict[str, Artifact]:
        identifiers = self.identifiers(registry)
        artifacts: Dict[str, Artifact] = {}
        for entry in registry:
            identifier = identifiers[entry.name]
            artifacts[f"{self.subdir}/{identifier}.js"] = render_component(
                entry,
                identifier,
                class_name=self.prefix,
                view_box=self.view_box,
                size=self.size,
            )
            artifacts[f"{self.subdir}/{identifier}.d.ts"] = render_component_types(identifier)
        ordered = [identifiers[name] for name in registry.names()]
        index = render_index(ordered)
        artifacts[f"{self.subdir}/{INDEX_STEM}.js"] = index
        artifacts[f"{self.subdir}/{INDEX_STEM}.d.ts"] = index
        return artifacts
