"""Base class for registry emitters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Union

from ..logging import get_logger
from ..models import IconRegistry

Artifact = Union[str, bytes]


class Emitter(ABC):
    """Turns a finalized registry into one target's files.

    `render` is pure and returns `relative path -> content`; `emit` writes the
    rendered files under the destination directory, inside `subdir` when the
    target has one. Emitters never modify the registry and share no state
    with each other.
    """

    name: str = ""
    subdir: str = ""

    def __init__(self) -> None:
        self.logger = get_logger(f"emitters.{self.name}")

    @abstractmethod
    def render(self, registry: IconRegistry) -> Dict[str, Artifact]:
        """Return the artifacts for `registry` keyed by POSIX path relative to dist."""

    def emit(self, registry: IconRegistry, dist: Path) -> List[Path]:
        artifacts = self.render(registry)
        written = [_write_artifact(dist / relative, content) for relative, content in artifacts.items()]
        self.logger.info("Wrote %d %s artifacts", len(written), self.name)
        return written


def _write_artifact(path: Path, content: Artifact) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        with path.open("w", encoding="utf-8", newline="\n") as handle:
            handle.write(content)
    return path


__all__ = ["Artifact", "Emitter"]
