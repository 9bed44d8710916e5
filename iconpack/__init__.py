"""Build icon registries from SVG directories and emit per-platform bundles."""

__version__ = "0.1.0"
