"""Tests for emitter selection and entry-point discovery."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Dict

import pytest

import iconpack.emitters as emitters_module
from iconpack.config import TargetsConfig, default_config
from iconpack.emitters import (
    BUILTIN_TARGETS,
    CssEmitter,
    Emitter,
    JsonEmitter,
    ReactEmitter,
    discover_emitters,
)
from iconpack.emitters.base import Artifact
from iconpack.models import IconRegistry


class ManifestEmitter(Emitter):
    name = "manifest"

    def render(self, registry: IconRegistry) -> Dict[str, Artifact]:
        return {"manifest.txt": "\n".join(registry.names())}


class _FakeEntryPoint:
    def __init__(self, name: str, target: object) -> None:
        self.name = name
        self._target = target

    def load(self) -> object:
        return self._target


def test_builtin_targets_order() -> None:
    assert BUILTIN_TARGETS == ("json", "css", "react", "react_native", "flutter")


def test_discover_uses_enabled_targets_from_config(tmp_path: Path) -> None:
    config = default_config(tmp_path)

    emitters = discover_emitters(config)

    assert [type(emitter) for emitter in emitters] == [JsonEmitter, CssEmitter]


def test_discover_keeps_builtin_order_for_explicit_targets(tmp_path: Path) -> None:
    config = dataclasses.replace(default_config(tmp_path), font_name="brand")

    emitters = discover_emitters(config, ["React", "json"])

    assert [emitter.name for emitter in emitters] == ["json", "react"]
    assert isinstance(emitters[1], ReactEmitter)
    assert emitters[1].font_name == "brand"


def test_discover_rejects_unknown_targets(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="Unknown targets requested: sketch"):
        discover_emitters(default_config(tmp_path), ["json", "sketch"])


def test_discover_loads_entry_point_factories(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        emitters_module,
        "_iter_entry_points",
        lambda: [_FakeEntryPoint("manifest", lambda config: ManifestEmitter())],
    )
    config = dataclasses.replace(default_config(tmp_path), targets=TargetsConfig(json=False, css=False))

    emitters = discover_emitters(config, ["manifest"])

    assert len(emitters) == 1
    assert isinstance(emitters[0], ManifestEmitter)


def test_discover_rejects_entry_point_without_emitter(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        emitters_module,
        "_iter_entry_points",
        lambda: [_FakeEntryPoint("broken", object())],
    )

    with pytest.raises(TypeError):
        discover_emitters(default_config(tmp_path), ["broken"])


def test_builtin_emitters_declare_output_subdirectories(tmp_path: Path) -> None:
    config = default_config(tmp_path)

    emitters = discover_emitters(config, list(BUILTIN_TARGETS))

    assert {emitter.name: emitter.subdir for emitter in emitters} == {
        "json": "",
        "css": "",
        "react": "react",
        "react_native": "reactNative",
        "flutter": "flutter",
    }
