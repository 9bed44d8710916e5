"""TTF compilation of registry geometry."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Protocol, Tuple

from fontTools.fontBuilder import FontBuilder
from fontTools.pens.cu2quPen import Cu2QuPen
from fontTools.pens.transformPen import TransformPen
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.svgLib.path import parse_path

from .logging import get_logger
from .models import IconEntry, IconRegistry

ASCENT_RATIO = 0.875


class FontCompileError(RuntimeError):
    """Raised when geometry cannot be turned into a font."""


class FontCompiler(Protocol):
    """Anything that turns a registry into a font file at `destination`."""

    def compile(self, registry: IconRegistry, destination: Path) -> Path:
        ...


def glyph_name(code_point: int) -> str:
    return f"uni{code_point:04X}" if code_point <= 0xFFFF else f"u{code_point:05X}"


class FontToolsCompiler:
    """Builds a TrueType font with one glyph per registry entry.

    Icons are assumed to be drawn on a `canvas_size` square whose top edge maps
    to the ascender and whose bottom edge maps to the descender.
    """

    def __init__(self, units_per_em: int = 1000, canvas_size: float = 24.0) -> None:
        self.units_per_em = units_per_em
        self.canvas_size = canvas_size
        self.logger = get_logger("font")

    @property
    def ascent(self) -> int:
        return round(self.units_per_em * ASCENT_RATIO)

    @property
    def descent(self) -> int:
        return self.ascent - self.units_per_em

    def compile(self, registry: IconRegistry, destination: Path) -> Path:
        scale = self.units_per_em / self.canvas_size
        transform = (scale, 0, 0, -scale, 0, self.ascent)

        glyph_order = [".notdef"]
        glyphs = {".notdef": TTGlyphPen(None).glyph()}
        cmap: Dict[int, str] = {}
        for entry in registry:
            name = glyph_name(entry.code_point)
            glyph_order.append(name)
            glyphs[name] = self._draw(entry, transform)
            cmap[entry.code_point] = name

        family = registry.font_name
        builder = FontBuilder(self.units_per_em, isTTF=True)
        builder.setupGlyphOrder(glyph_order)
        builder.setupCharacterMap(cmap)
        builder.setupGlyf(glyphs)
        glyph_table = builder.font["glyf"]
        metrics: Dict[str, Tuple[int, int]] = {
            name: (self.units_per_em, getattr(glyph_table[name], "xMin", 0)) for name in glyph_order
        }
        builder.setupHorizontalMetrics(metrics)
        builder.setupHorizontalHeader(ascent=self.ascent, descent=self.descent)
        ps_name = "".join(char for char in family if char.isalnum()) or "Icons"
        builder.setupNameTable(
            {
                "familyName": family,
                "styleName": "Regular",
                "uniqueFontIdentifier": f"{ps_name}-Regular",
                "fullName": f"{family} Regular",
                "psName": f"{ps_name}-Regular",
                "version": "1.0",
            }
        )
        builder.setupOS2(
            sTypoAscender=self.ascent,
            sTypoDescender=self.descent,
            sTypoLineGap=0,
            usWinAscent=self.ascent,
            usWinDescent=-self.descent,
        )
        builder.setupPost()

        destination.parent.mkdir(parents=True, exist_ok=True)
        builder.save(str(destination))
        self.logger.info("Compiled %d glyphs into %s", len(registry), destination)
        return destination

    def _draw(self, entry: IconEntry, transform: Tuple[float, ...]):
        pen = TTGlyphPen(None)
        # Flipping the y axis reverses contour direction, so reverse it back.
        draw_pen = TransformPen(Cu2QuPen(pen, max_err=1.0, reverse_direction=True), transform)
        try:
            for data in entry.geometry:
                parse_path(data, draw_pen)
        except (ValueError, IndexError, AssertionError) as exc:
            raise FontCompileError(f"Cannot draw icon '{entry.name}': {exc}") from exc
        return pen.glyph()


__all__ = ["FontCompileError", "FontCompiler", "FontToolsCompiler", "glyph_name"]
