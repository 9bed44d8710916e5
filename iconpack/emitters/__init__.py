"""Registry emitters and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Dict, Iterable, List, Sequence

from ..config import IconPackConfig
from .base import Emitter
from .css import CssEmitter
from .flutter import FlutterEmitter
from .json_map import JsonEmitter
from .react import ReactEmitter
from .react_native import ReactNativeEmitter

_ENTRY_POINT_GROUP = "iconpack.emitters"

EmitterFactory = Callable[[IconPackConfig], Emitter]

_BUILTIN_FACTORIES: Dict[str, EmitterFactory] = {
    "json": lambda config: JsonEmitter(config.font_name),
    "css": lambda config: CssEmitter(
        config.font_name,
        prefix=config.prefix,
        font_size=config.css.font_size,
    ),
    "react": lambda config: ReactEmitter(
        config.font_name,
        prefix=config.prefix,
        view_box=config.react.view_box,
        size=config.css.font_size,
    ),
    "react_native": lambda config: ReactNativeEmitter(
        config.font_name,
        prefix=config.prefix,
        font_size=config.css.font_size,
    ),
    "flutter": lambda config: FlutterEmitter(config.font_name, prefix=config.prefix),
}

BUILTIN_TARGETS = tuple(_BUILTIN_FACTORIES)


def discover_emitters(config: IconPackConfig, enabled: Sequence[str] | None = None) -> List[Emitter]:
    """Return emitters for `enabled` target names, builtins first, in a fixed order."""
    wanted = [name.lower() for name in (enabled if enabled is not None else config.targets.enabled())]
    remaining = set(wanted)

    emitters: List[Emitter] = []
    for name, factory in _BUILTIN_FACTORIES.items():
        if name in remaining:
            emitters.append(_checked(name, factory(config)))
            remaining.discard(name)

    if remaining:
        for entry in _iter_entry_points():
            key = entry.name.lower()
            if key not in remaining:
                continue
            try:
                loaded = entry.load()
            except Exception as exc:  # pragma: no cover
                raise RuntimeError(f"Failed to load emitter entry point '{entry.name}': {exc}") from exc
            emitters.append(_checked(entry.name, _coerce_emitter(loaded, config)))
            remaining.discard(key)

    if remaining:
        missing = ", ".join(sorted(remaining))
        raise ValueError(f"Unknown targets requested: {missing}")

    return emitters


def _checked(name: str, instance: object) -> Emitter:
    if not isinstance(instance, Emitter):
        raise TypeError(f"Emitter factory for '{name}' did not return an Emitter instance")
    return instance


def _coerce_emitter(obj: object, config: IconPackConfig) -> Emitter:
    if isinstance(obj, Emitter):
        return obj
    if callable(obj):
        instance = obj(config)
        if isinstance(instance, Emitter):
            return instance
    raise TypeError("Emitter entry point must be an Emitter or a factory taking the config")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "BUILTIN_TARGETS",
    "CssEmitter",
    "Emitter",
    "FlutterEmitter",
    "JsonEmitter",
    "ReactEmitter",
    "ReactNativeEmitter",
    "discover_emitters",
]
