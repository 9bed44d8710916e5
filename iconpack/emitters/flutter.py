"""Flutter icon-font package emitter (`flutter/`)."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any, Dict, List

import yaml

from ..models import IconRegistry
from ..naming import dart_package_policy, flutter_member_policy, normalize, resolve_identifiers, to_pascal_case
from .base import Artifact, Emitter
from .templating import render_template

SUBDIR = "flutter"


def package_name(prefix: str) -> str:
    return normalize(f"{prefix} icons", dart_package_policy(prefix))


def render_pubspec(*, package: str, font_family: str, font_file: str, version: str = "1.0.0") -> str:
    manifest: Dict[str, Any] = {
        "name": package,
        "description": f"{font_family} icon font for Flutter.",
        "version": version,
        "environment": {"sdk": ">=2.17.0 <4.0.0"},
        "dependencies": {"flutter": {"sdk": "flutter"}},
        "flutter": {
            "fonts": [
                {"family": font_family, "fonts": [{"asset": f"fonts/{font_file}"}]},
            ]
        },
    }
    return yaml.safe_dump(manifest, sort_keys=False, default_flow_style=False)


def render_icon_data(*, data_class: str, font_family: str, package: str) -> str:
    return render_template(
        "flutter/icon_data.dart.j2",
        data_class=data_class,
        font_family=font_family,
        package=package,
    )


def render_icons(registry: IconRegistry, *, prefix: str, package: str) -> str:
    """Return the library with one `IconData` constant per icon."""
    pascal = to_pascal_case(prefix)
    members = resolve_identifiers(registry.names(), flutter_member_policy(prefix))
    icons: List[Dict[str, str]] = [
        {
            "name": entry.name,
            "identifier": members[entry.name],
            "literal": f"0x{entry.code_point:04x}",
        }
        for entry in registry
    ]
    return render_template(
        "flutter/icons.dart.j2",
        package=package,
        class_name=f"{pascal}Icons",
        data_class=f"{pascal}IconData",
        icons=icons,
    )


class FlutterEmitter(Emitter):
    """Writes a Flutter package exposing the icon font."""

    name = "flutter"
    subdir = SUBDIR

    def __init__(self, font_name: str, *, prefix: str | None = None, font_path: Path | None = None) -> None:
        super().__init__()
        self.font_name = font_name
        self.prefix = prefix or font_name
        self.font_path = font_path

    @property
    def font_file(self) -> str:
        return f"{self.font_name}.ttf"

    def render(self, registry: IconRegistry) -> Dict[str, Artifact]:
        package = package_name(self.prefix)
        return {
            f"{self.subdir}/pubspec.yaml": render_pubspec(
                package=package,
                font_family=self.font_name,
                font_file=self.font_file,
            ),
            f"{self.subdir}/lib/src/icon_data.dart": render_icon_data(
                data_class=f"{to_pascal_case(self.prefix)}IconData",
                font_family=self.font_name,
                package=package,
            ),
            f"{self.subdir}/lib/{package}.dart": render_icons(registry, prefix=self.prefix, package=package),
        }

    def emit(self, registry: IconRegistry, dist: Path) -> List[Path]:
        font_path = self.font_path or dist / self.font_file
        if not font_path.is_file():
            raise FileNotFoundError(f"Compiled font not found for the Flutter bundle: {font_path}")
        written = super().emit(registry, dist)
        target = dist / self.subdir / "fonts" / self.font_file
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(font_path, target)
        written.append(target)
        return written
