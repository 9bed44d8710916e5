"""Tests for iconpack.geometry."""

from __future__ import annotations

import asyncio

import pytest

from iconpack.geometry import DEFAULT_PLUGINS, ExtractionError, GeometryExtractor
from iconpack.models import IconSource
from iconpack.optimizer import OptimizeError, OptimizeResult
from tests._fixtures.icon_builder import EMPTY, SQUARE


class RecordingOptimizer:
    """Optimizer double returning canned output and recording calls."""

    def __init__(self, data: str) -> None:
        self.data = data
        self.calls: list[dict[str, object]] = []

    def __call__(self, svg_text: str, **options: object) -> OptimizeResult:
        self.calls.append(dict(options, svg_text=svg_text))
        return OptimizeResult(data=self.data)


def test_extract_returns_paths_in_document_order() -> None:
    optimizer = RecordingOptimizer('<svg><path d="M9 9"/><g><path id="x" d="M1 1"/></g><path d="M5 5"/></svg>')
    extractor = GeometryExtractor(optimizer=optimizer)

    geometry = extractor.extract("<svg/>", "ordered.svg")

    assert geometry == ("M9 9", "M1 1", "M5 5")


def test_extract_appends_caller_plugins_after_defaults() -> None:
    optimizer = RecordingOptimizer("<svg/>")
    extractor = GeometryExtractor(["removeXMLNS"], optimizer=optimizer, precision=1)

    extractor.extract("<svg/>", "icon.svg")

    call = optimizer.calls[0]
    assert call["plugins"] == [*DEFAULT_PLUGINS, "removeXMLNS"]
    assert call["path"] == "icon.svg"
    assert call["precision"] == 1


def test_extract_with_real_optimizer_flattens_transforms() -> None:
    svg = (
        '<svg xmlns="http://www.w3.org/2000/svg">'
        '<path transform="translate(1 1)" d="M0 0L4 0"/><circle cx="2" cy="2" r="1"/></svg>'
    )
    extractor = GeometryExtractor(["convertShapeToPath"])

    geometry = extractor.extract(svg, "mixed.svg")

    assert geometry[0] == "M1 1H5"
    assert len(geometry) == 2
    assert geometry[1].startswith("M1 2A1 1")


def test_extract_without_paths_yields_empty_geometry() -> None:
    assert GeometryExtractor().extract(EMPTY, "empty.svg") == ()


def test_extract_wraps_optimizer_failures() -> None:
    def _failing(svg_text: str, **options: object) -> OptimizeResult:
        raise OptimizeError("boom")

    extractor = GeometryExtractor(optimizer=_failing)

    with pytest.raises(ExtractionError, match="bad.svg"):
        extractor.extract("<svg/>", "bad.svg")


def test_extract_async_uses_source_path_as_hint() -> None:
    optimizer = RecordingOptimizer(SQUARE)
    extractor = GeometryExtractor(optimizer=optimizer)
    source = IconSource(name="square", raw_content=SQUARE)

    geometry = asyncio.run(extractor.extract_async(source))

    assert geometry == ("M2 2H22V22H2Z",)
    assert optimizer.calls[0]["path"] == "square"
