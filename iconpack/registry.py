"""Icon registry assembly."""

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional, Sequence

from .config import DUPLICATE_POLICIES, MAX_CODE_POINT, SURROGATE_RANGE
from .geometry import GeometryExtractor
from .logging import get_logger
from .models import IconEntry, IconGeometry, IconRegistry, IconSource

logger = get_logger("registry")


class DuplicateIconError(RuntimeError):
    """Raised when two sources share an icon name and duplicates are rejected."""


def _unique_sources(sources: Sequence[IconSource], on_duplicate: str) -> List[IconSource]:
    """Collapse duplicate names according to `on_duplicate`.

    With "replace" the later source wins but keeps the slot of the first
    occurrence, so positions stay contiguous.
    """
    if on_duplicate not in DUPLICATE_POLICIES:
        raise ValueError(f"Unknown duplicate policy: {on_duplicate}")

    slots: Dict[str, int] = {}
    unique: List[IconSource] = []
    for source in sources:
        slot = slots.get(source.name)
        if slot is None:
            slots[source.name] = len(unique)
            unique.append(source)
            continue
        previous = unique[slot]
        if on_duplicate == "error":
            raise DuplicateIconError(
                f"Duplicate icon name '{source.name}': {previous.path or previous.name} and {source.path or source.name}"
            )
        logger.warning(
            "Icon '%s' from %s replaces %s", source.name, source.path or source.name, previous.path or previous.name
        )
        unique[slot] = source
    return unique


async def assemble(
    sources: Sequence[IconSource],
    extractor: GeometryExtractor,
    base_code_point: int,
    *,
    font_name: str,
    on_duplicate: str = "error",
    concurrency: Optional[int] = None,
) -> IconRegistry:
    """Extract geometry for every source concurrently and build the registry.

    Code points are `base_code_point + index` where `index` is the position in
    `sources` after duplicate handling; extraction completion order has no
    influence on the result. Any extraction failure aborts the assembly.
    """
    unique = _unique_sources(sources, on_duplicate)
    if not 0 <= base_code_point <= MAX_CODE_POINT:
        raise ValueError(f"Base code point out of range: {base_code_point:#x}")
    last_code_point = base_code_point + len(unique) - 1
    if last_code_point > MAX_CODE_POINT:
        raise ValueError(
            f"{len(unique)} icons starting at {base_code_point:#x} exceed the code point range"
        )
    if unique and base_code_point <= SURROGATE_RANGE[-1] and last_code_point >= SURROGATE_RANGE[0]:
        raise ValueError(
            f"Code points {base_code_point:#x}..{last_code_point:#x} overlap the surrogate block"
            f" {SURROGATE_RANGE[0]:#x}..{SURROGATE_RANGE[-1]:#x}"
        )

    semaphore = asyncio.Semaphore(concurrency) if concurrency else None

    async def _extract(source: IconSource) -> IconGeometry:
        if semaphore is None:
            return await extractor.extract_async(source)
        async with semaphore:
            return await extractor.extract_async(source)

    logger.debug("Extracting geometry for %d icons", len(unique))
    # gather() returns results in argument order regardless of completion order.
    geometries = await asyncio.gather(*(_extract(source) for source in unique))

    entries = tuple(
        IconEntry(name=source.name, geometry=geometry, code_point=base_code_point + index)
        for index, (source, geometry) in enumerate(zip(unique, geometries))
    )
    logger.info("Registry assembled with %d icons", len(entries))
    return IconRegistry(entries=entries, font_name=font_name)


def build_registry(
    sources: Sequence[IconSource],
    extractor: GeometryExtractor,
    base_code_point: int,
    *,
    font_name: str,
    on_duplicate: str = "error",
    concurrency: Optional[int] = None,
) -> IconRegistry:
    """Synchronous wrapper around `assemble`."""
    return asyncio.run(
        assemble(
            sources,
            extractor,
            base_code_point,
            font_name=font_name,
            on_duplicate=on_duplicate,
            concurrency=concurrency,
        )
    )


__all__ = ["DuplicateIconError", "assemble", "build_registry"]
