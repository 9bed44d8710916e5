"""End-to-end tests for iconpack.pipeline."""

from __future__ import annotations

import dataclasses
import json
from pathlib import Path

import pytest

from iconpack.config import TargetsConfig, default_config
from iconpack.emitters import JsonEmitter
from iconpack.geometry import ExtractionError
from iconpack.models import IconRegistry
from iconpack.pipeline import Pipeline
from tests._fixtures.icon_builder import EMPTY, SQUARE, IconBuilder

TRANSLATED = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">'
    '<g transform="translate(1 1)"><path d="M0 0H10V10H0Z"/></g></svg>'
)

ALL_TARGETS = TargetsConfig(json=True, css=True, react=True, react_native=True, flutter=True)


class RecordingCompiler:
    """Font compiler double that writes a placeholder file."""

    def __init__(self) -> None:
        self.registries: list[IconRegistry] = []

    def compile(self, registry: IconRegistry, destination: Path) -> Path:
        self.registries.append(registry)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(b"ttf")
        return destination


def _config(icon_builder: IconBuilder, **overrides: object):
    config = dataclasses.replace(default_config(icon_builder.root), font_name="svgtofont", **overrides)
    return config.validate()


def test_run_emits_every_enabled_target(icon_builder: IconBuilder) -> None:
    icon_builder.write({"home.svg": SQUARE, "2fa.svg": TRANSLATED, "react.svg": EMPTY})
    config = _config(icon_builder, targets=ALL_TARGETS, start_code_point=0xE001)

    result = Pipeline().run(config)

    dist = icon_builder.dist
    assert result.font_path == dist / "svgtofont.ttf"
    assert result.font_path.exists()
    assert list(result.artifacts) == ["json", "css", "react", "react_native", "flutter"]
    geometry = json.loads((dist / "svgtofont.json").read_text(encoding="utf-8"))
    assert geometry == {"2fa": ["M1 1H11V11H1Z"], "home": ["M2 2H22V22H2Z"], "react": []}
    assert ".svgtofont-2fa:before" in (dist / "svgtofont.css").read_text(encoding="utf-8")
    assert (dist / "react" / "Svgtofont2fa.js").exists()
    assert (dist / "react" / "ReactSvgtofont.d.ts").exists()
    assert (dist / "reactNative" / "Svgtofont.jsx").exists()
    assert (dist / "flutter" / "fonts" / "svgtofont.ttf").read_bytes() == result.font_path.read_bytes()
    assert dict(result.registry.code_points()) == {"2fa": 0xE001, "home": 0xE002, "react": 0xE003}


def test_run_is_reproducible(icon_builder: IconBuilder) -> None:
    icon_builder.write({"home.svg": SQUARE, "star.svg": TRANSLATED})
    config = _config(icon_builder)

    Pipeline(font_compiler=RecordingCompiler()).run(config)
    first = (icon_builder.dist / "svgtofont.json").read_bytes()
    first_css = (icon_builder.dist / "svgtofont.css").read_bytes()
    Pipeline(font_compiler=RecordingCompiler()).run(config)

    assert (icon_builder.dist / "svgtofont.json").read_bytes() == first
    assert (icon_builder.dist / "svgtofont.css").read_bytes() == first_css


def test_failed_extraction_writes_nothing(icon_builder: IconBuilder) -> None:
    icon_builder.write({"home.svg": SQUARE, "broken.svg": "<svg><path></svg>"})
    compiler = RecordingCompiler()

    with pytest.raises(ExtractionError, match="broken"):
        Pipeline(font_compiler=compiler).run(_config(icon_builder, targets=ALL_TARGETS))

    assert compiler.registries == []
    assert not icon_builder.dist.exists()


def test_unknown_target_fails_before_scanning(icon_builder: IconBuilder) -> None:
    with pytest.raises(ValueError, match="Unknown targets requested"):
        Pipeline().run(_config(icon_builder), targets=["json", "sketch"])

    assert not icon_builder.dist.exists()


def test_font_compilation_can_be_disabled(icon_builder: IconBuilder) -> None:
    icon_builder.write({"home.svg": SQUARE})
    config = _config(icon_builder)
    config = dataclasses.replace(config, font=dataclasses.replace(config.font, enabled=False))
    compiler = RecordingCompiler()

    result = Pipeline(font_compiler=compiler).run(config)

    assert result.font_path is None
    assert compiler.registries == []
    assert (icon_builder.dist / "svgtofont.json").exists()


def test_explicit_emitters_override_discovery(icon_builder: IconBuilder) -> None:
    icon_builder.write({"home.svg": SQUARE})
    compiler = RecordingCompiler()

    result = Pipeline(font_compiler=compiler, emitters=[JsonEmitter("custom")]).run(_config(icon_builder))

    assert list(result.artifacts) == ["json"]
    assert (icon_builder.dist / "custom.json").exists()
    assert not (icon_builder.dist / "svgtofont.css").exists()
    assert compiler.registries[0].names() == ("home",)


def test_build_registry_respects_start_code_point(icon_builder: IconBuilder) -> None:
    icon_builder.write({"a.svg": SQUARE, "b.svg": SQUARE})

    registry = Pipeline().build_registry(_config(icon_builder, start_code_point=0xF101))

    assert [entry.code_point for entry in registry] == [0xF101, 0xF102]
    assert registry.font_name == "svgtofont"
