"""Icon source directory enumeration."""

from __future__ import annotations

from pathlib import Path
from typing import List

from .logging import get_logger
from .models import IconSource

_ICON_SUFFIX = ".svg"

_EXCLUDED_FILES = {
    ".DS_Store",
    "Thumbs.db",
}


class IconSourceError(RuntimeError):
    """Raised when the source directory or one of its icons cannot be read."""


def _is_icon_file(path: Path) -> bool:
    return (
        path.is_file()
        and path.suffix.lower() == _ICON_SUFFIX
        and path.name not in _EXCLUDED_FILES
        and not path.name.startswith(".")
    )


class SourceScanner:
    """Lists SVG files in a directory in a stable order and reads them."""

    def __init__(self) -> None:
        self.logger = get_logger("source_scanner")

    def list_files(self, src: str | Path) -> List[Path]:
        """Return the icon files of `src`, sorted by filename."""
        src_path = Path(src).expanduser().resolve()
        if not src_path.exists():
            raise IconSourceError(f"Icon source directory not found: {src}")
        if not src_path.is_dir():
            raise IconSourceError(f"Icon source path is not a directory: {src}")

        try:
            candidates = list(src_path.iterdir())
        except OSError as exc:
            raise IconSourceError(f"Cannot list icon source directory {src_path}: {exc}") from exc

        files = sorted((path for path in candidates if _is_icon_file(path)), key=lambda path: path.name)
        self.logger.debug("Found %d icon files in %s", len(files), src_path)
        return files

    def scan(self, src: str | Path) -> List[IconSource]:
        """Return one `IconSource` per icon file, in enumeration order."""
        sources: List[IconSource] = []
        for path in self.list_files(src):
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise IconSourceError(f"Cannot read icon {path}: {exc}") from exc
            sources.append(IconSource(name=path.stem, raw_content=content, path=path))
        return sources


__all__ = ["IconSourceError", "SourceScanner"]
