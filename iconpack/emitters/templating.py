"""Jinja2 environment shared by the emitters."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

TEMPLATES_DIR = Path(__file__).with_name("templates")


def js_string(value: str) -> str:
    """Quote `value` as a JavaScript/TypeScript string literal."""
    return json.dumps(value, ensure_ascii=True)


def dart_string(value: str) -> str:
    """Quote `value` as a single-quoted Dart string literal."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'").replace("$", "\\$")
    return f"'{escaped}'"


@lru_cache(maxsize=None)
def _environment(templates_dir: str) -> Environment:
    env = Environment(
        loader=FileSystemLoader(templates_dir),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["js_string"] = js_string
    env.filters["dart_string"] = dart_string
    return env


def render_template(name: str, **context: Any) -> str:
    return _environment(str(TEMPLATES_DIR)).get_template(name).render(**context)


__all__ = ["TEMPLATES_DIR", "dart_string", "js_string", "render_template"]
