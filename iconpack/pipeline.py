"""Build pipeline: scan, assemble the registry, compile the font, emit targets."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from .config import IconPackConfig
from .emitters import Emitter, discover_emitters
from .font import FontCompiler, FontToolsCompiler
from .geometry import GeometryExtractor
from .logging import get_logger
from .models import IconRegistry
from .registry import build_registry
from .source_scanner import SourceScanner


@dataclass
class BuildResult:
    """Outcome of a successful build."""

    registry: IconRegistry
    artifacts: Dict[str, List[Path]] = field(default_factory=dict)
    font_path: Optional[Path] = None


class Pipeline:
    """Coordinates one full, from-scratch build."""

    def __init__(
        self,
        scanner: SourceScanner | None = None,
        extractor: GeometryExtractor | None = None,
        font_compiler: FontCompiler | None = None,
        emitters: Optional[Iterable[Emitter]] = None,
    ) -> None:
        self.scanner = scanner or SourceScanner()
        self._extractor = extractor
        self._font_compiler = font_compiler
        self._emitter_overrides = list(emitters) if emitters is not None else None
        self.logger = get_logger("pipeline")

    def build_registry(self, config: IconPackConfig) -> IconRegistry:
        """Scan `config.src` and return the finalized registry."""
        sources = self.scanner.scan(config.src)
        self.logger.info("Found %d icons in %s", len(sources), config.src)
        return build_registry(
            sources,
            self._resolve_extractor(config),
            config.start_code_point,
            font_name=config.font_name,
            on_duplicate=config.duplicates,
            concurrency=config.concurrency,
        )

    def run(self, config: IconPackConfig, *, targets: Sequence[str] | None = None) -> BuildResult:
        """Run a full build; nothing is written unless the registry assembles."""
        self.logger.info("Starting build for %s", config.src)
        emitters = self._select_emitters(config, targets)
        registry = self.build_registry(config)

        result = BuildResult(registry=registry)
        dist = config.dist
        if config.font.enabled:
            compiler = self._font_compiler or FontToolsCompiler(
                units_per_em=config.font.units_per_em,
                canvas_size=config.font.canvas_size,
            )
            result.font_path = compiler.compile(registry, dist / f"{config.font_name}.ttf")

        for emitter in emitters:
            self.logger.debug("Running %s emitter", emitter.name)
            result.artifacts[emitter.name] = emitter.emit(registry, dist)

        self.logger.info(
            "Build finished: %d icons, %d targets written to %s",
            len(registry),
            len(result.artifacts),
            dist,
        )
        return result

    def _resolve_extractor(self, config: IconPackConfig) -> GeometryExtractor:
        if self._extractor is not None:
            return self._extractor
        return GeometryExtractor(config.optimizer.plugins, precision=config.optimizer.precision)

    def _select_emitters(self, config: IconPackConfig, targets: Sequence[str] | None) -> List[Emitter]:
        if self._emitter_overrides is not None:
            return list(self._emitter_overrides)
        return discover_emitters(config, targets)


__all__ = ["BuildResult", "Pipeline"]
