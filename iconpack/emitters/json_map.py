"""Geometry map emitter (`{fontName}.json`)."""

from __future__ import annotations

import json
from typing import Dict

from ..models import IconRegistry
from .base import Artifact, Emitter


def render_geometry_map(registry: IconRegistry) -> str:
    """Return the `name -> [path data, ...]` JSON document in registry order."""
    payload = {entry.name: list(entry.geometry) for entry in registry}
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


class JsonEmitter(Emitter):
    """Writes the raw geometry of every icon as one JSON file."""

    name = "json"

    def __init__(self, font_name: str) -> None:
        super().__init__()
        self.font_name = font_name

    def render(self, registry: IconRegistry) -> Dict[str, Artifact]:
        return {f"{self.font_name}.json": render_geometry_map(registry)}
