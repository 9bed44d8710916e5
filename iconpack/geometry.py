"""Path-geometry extraction from optimized SVG sources."""

from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import Callable, Sequence, Tuple

from .logging import get_logger
from .models import IconGeometry, IconSource
from .optimizer import OptimizeError, OptimizeResult, PluginSpec, optimize

# Normalization every caller gets; configured plugins run after these.
DEFAULT_PLUGINS: Tuple[str, ...] = ("convertTransform",)

_PATH_DATA_PATTERN = re.compile(r' d="([^"]+)"')

Optimizer = Callable[..., OptimizeResult]


class ExtractionError(RuntimeError):
    """Raised when an icon cannot be optimized."""


class GeometryExtractor:
    """Optimizes SVG text and collects its path data in document order."""

    def __init__(
        self,
        plugins: Sequence[PluginSpec] = (),
        *,
        optimizer: Optimizer = optimize,
        precision: int = 3,
    ) -> None:
        self.plugins: Tuple[PluginSpec, ...] = DEFAULT_PLUGINS + tuple(plugins)
        self.precision = precision
        self._optimizer = optimizer
        self.logger = get_logger("geometry")

    def extract(self, content: str, path_hint: str | Path | None = None) -> IconGeometry:
        try:
            result = self._optimizer(
                content,
                path=path_hint,
                plugins=list(self.plugins),
                precision=self.precision,
            )
        except (OptimizeError, ValueError) as exc:
            raise ExtractionError(f"Failed to optimize {path_hint or 'icon'}: {exc}") from exc

        geometry = tuple(_PATH_DATA_PATTERN.findall(result.data))
        if not geometry:
            self.logger.debug("No path data found in %s", path_hint or "icon")
        return geometry

    async def extract_async(self, source: IconSource) -> IconGeometry:
        hint = source.path if source.path is not None else source.name
        return await asyncio.to_thread(self.extract, source.raw_content, hint)


__all__ = ["DEFAULT_PLUGINS", "ExtractionError", "GeometryExtractor"]
