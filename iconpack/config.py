"""Configuration loading for iconpack (.iconpack.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .optimizer import available_plugins

CONFIG_FILENAME = ".iconpack.yml"

DEFAULT_START_CODE_POINT = 0xEA01
MAX_CODE_POINT = 0x10FFFF

# UTF-16 surrogates are not Unicode scalar values and cannot be mapped to glyphs.
SURROGATE_RANGE = range(0xD800, 0xE000)

DUPLICATE_POLICIES = ("error", "replace")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed or is invalid."""


@dataclass
class OptimizerConfig:
    """Extra optimizer plugins appended after the required defaults."""

    plugins: List[str] = field(default_factory=list)
    precision: int = 3


@dataclass
class TargetsConfig:
    """Per-target enable flags."""

    json: bool = True
    css: bool = True
    react: bool = False
    react_native: bool = False
    flutter: bool = False

    def enabled(self) -> List[str]:
        return [item.name for item in fields(self) if getattr(self, item.name)]


@dataclass
class FontConfig:
    """Settings for the bundled TTF compiler."""

    enabled: bool = True
    units_per_em: int = 1000
    canvas_size: float = 24.0


@dataclass
class CssConfig:
    """Settings for the CSS class map."""

    font_size: Optional[str] = "16px"


@dataclass
class ReactConfig:
    """Settings for generated React components."""

    view_box: str = "0 0 24 24"


@dataclass
class IconPackConfig:
    """Represents the settings defined in .iconpack.yml."""

    root: Path
    src: Path
    dist: Path
    font_name: str = "iconfont"
    class_name_prefix: Optional[str] = None
    start_code_point: int = DEFAULT_START_CODE_POINT
    duplicates: str = "error"
    concurrency: Optional[int] = None
    optimizer: OptimizerConfig = field(default_factory=OptimizerConfig)
    targets: TargetsConfig = field(default_factory=TargetsConfig)
    font: FontConfig = field(default_factory=FontConfig)
    css: CssConfig = field(default_factory=CssConfig)
    react: ReactConfig = field(default_factory=ReactConfig)

    @property
    def prefix(self) -> str:
        """Name used for identifiers and class names in emitted sources."""
        return self.class_name_prefix or self.font_name

    def validate(self) -> "IconPackConfig":
        if not self.font_name or not self.font_name.strip():
            raise ConfigError("font_name must not be empty")
        chars = [char for char in self.prefix if char.isascii() and char.isalnum()]
        if not chars or chars[0].isdigit():
            raise ConfigError("font_name/class_name_prefix must start with an ASCII letter")
        if not 0 <= self.start_code_point <= MAX_CODE_POINT:
            raise ConfigError(
                f"start_code_point must be between 0 and {MAX_CODE_POINT:#x}, got {self.start_code_point}"
            )
        if self.start_code_point in SURROGATE_RANGE:
            raise ConfigError(f"start_code_point {self.start_code_point:#x} lies in the surrogate block")
        if self.duplicates not in DUPLICATE_POLICIES:
            allowed = ", ".join(DUPLICATE_POLICIES)
            raise ConfigError(f"duplicates must be one of: {allowed}")
        if self.concurrency is not None and self.concurrency < 1:
            raise ConfigError("concurrency must be a positive integer")
        unknown_plugins = sorted(set(self.optimizer.plugins) - set(available_plugins()))
        if unknown_plugins:
            raise ConfigError(f"Unknown optimizer plugins: {', '.join(unknown_plugins)}")
        if self.optimizer.precision < 0:
            raise ConfigError("optimizer.precision must not be negative")
        if self.font.units_per_em <= 0 or self.font.canvas_size <= 0:
            raise ConfigError("font.units_per_em and font.canvas_size must be positive")
        return self


def default_config(root: Path) -> IconPackConfig:
    root = root.expanduser().resolve()
    return IconPackConfig(root=root, src=root / "icons", dist=root / "dist")


def load_config(config_path: Path) -> IconPackConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent

    if not config_file.exists():
        return default_config(root).validate()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    config = default_config(root)

    src = _as_str(data.get("src"))
    if src:
        config.src = (root / src).resolve()
    dist = _as_str(data.get("dist"))
    if dist:
        config.dist = (root / dist).resolve()

    font_name = _as_str(data.get("font_name"))
    if font_name is not None:
        config.font_name = font_name
    config.class_name_prefix = _as_str(data.get("class_name_prefix"))

    if "start_code_point" in data:
        start = _as_int(data.get("start_code_point"))
        if start is None:
            raise ConfigError("start_code_point must be an integer")
        config.start_code_point = start

    duplicates = _as_str(data.get("duplicates"))
    if duplicates is not None:
        config.duplicates = duplicates.lower()

    if data.get("concurrency") is not None:
        concurrency = _as_int(data.get("concurrency"))
        if concurrency is None:
            raise ConfigError("concurrency must be an integer")
        config.concurrency = concurrency

    optimizer_data = _as_dict(data.get("optimizer"))
    if optimizer_data:
        config.optimizer.plugins = _as_str_list(optimizer_data.get("plugins"))
        precision = _as_int(optimizer_data.get("precision"))
        if precision is not None:
            config.optimizer.precision = precision

    targets_data = _as_dict(data.get("targets"))
    for item in fields(TargetsConfig):
        if item.name not in targets_data:
            continue
        flag = _as_bool(targets_data.get(item.name))
        if flag is None:
            raise ConfigError(f"targets.{item.name} must be a boolean")
        setattr(config.targets, item.name, flag)
    unknown_targets = set(targets_data) - {item.name for item in fields(TargetsConfig)}
    if unknown_targets:
        raise ConfigError(f"Unknown targets: {', '.join(sorted(unknown_targets))}")

    font_data = _as_dict(data.get("font"))
    if font_data:
        enabled = _as_bool(font_data.get("enabled"))
        if enabled is not None:
            config.font.enabled = enabled
        units_per_em = _as_int(font_data.get("units_per_em"))
        if units_per_em is not None:
            config.font.units_per_em = units_per_em
        canvas_size = _as_float(font_data.get("canvas_size"))
        if canvas_size is not None:
            config.font.canvas_size = canvas_size

    css_data = _as_dict(data.get("css"))
    if "font_size" in css_data:
        config.css.font_size = _as_str(css_data.get("font_size"))

    react_data = _as_dict(data.get("react"))
    view_box = _as_str(react_data.get("view_box")) if react_data else None
    if view_box:
        config.react.view_box = view_box

    return config.validate()


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 0)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []
