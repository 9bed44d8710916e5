"""Core data models shared across iconpack components."""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

IconGeometry = Tuple[str, ...]


@dataclass(frozen=True)
class IconSource:
    """One SVG file discovered in the source directory."""

    name: str
    raw_content: str
    path: Optional[Path] = None


@dataclass(frozen=True)
class IconEntry:
    """Registry row consumed by every emitter."""

    name: str
    geometry: IconGeometry
    code_point: int

    @property
    def char(self) -> str:
        return chr(self.code_point)

    @property
    def hex(self) -> str:
        return f"{self.code_point:x}"


@dataclass(frozen=True)
class IconRegistry:
    """Ordered, read-only map from icon name to geometry and code point."""

    entries: Tuple[IconEntry, ...]
    font_name: str
    _index: Mapping[str, IconEntry] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: Dict[str, IconEntry] = {}
        for entry in self.entries:
            if entry.name in index:
                raise ValueError(f"Duplicate icon name in registry: {entry.name}")
            index[entry.name] = entry
        object.__setattr__(self, "_index", MappingProxyType(index))

    def __iter__(self) -> Iterator[IconEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def get(self, name: str) -> Optional[IconEntry]:
        return self._index.get(name)

    def names(self) -> Tuple[str, ...]:
        return tuple(entry.name for entry in self.entries)

    def code_points(self) -> Mapping[str, int]:
        """Return a read-only `name -> code point` mapping in registry order."""
        return MappingProxyType({entry.name: entry.code_point for entry in self.entries})

    def geometry_map(self) -> Mapping[str, IconGeometry]:
        return MappingProxyType({entry.name: entry.geometry for entry in self.entries})
