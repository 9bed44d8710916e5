"""CLI entrypoints for iconpack commands."""

from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path

from .config import ConfigError, IconPackConfig, load_config
from .emitters import BUILTIN_TARGETS
from .font import FontCompileError
from .geometry import ExtractionError
from .logging import configure_logging
from .pipeline import Pipeline
from .registry import DuplicateIconError
from .source_scanner import IconSourceError

_BUILD_ERRORS = (
    ConfigError,
    IconSourceError,
    ExtractionError,
    DuplicateIconError,
    FontCompileError,
    ValueError,
    OSError,
)


def _add_logging_options(parser: argparse.ArgumentParser, *, suppress_default: bool = False) -> None:
    # Subcommands repeat the global flags; SUPPRESS keeps them from resetting
    # a value given before the subcommand.
    def default(value: object) -> object:
        return argparse.SUPPRESS if suppress_default else value

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default(False),
        help="Show debug output.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default(False),
        help="Only report warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=default(None),
        help="Also write the full log to this file.",
    )


def _add_source_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project directory holding .iconpack.yml (defaults to current directory).",
    )
    parser.add_argument("--config", type=Path, help="Explicit configuration file.")
    parser.add_argument("--src", type=Path, help="Directory of SVG icons.")
    parser.add_argument("--font-name", help="Font family name used by every target.")
    parser.add_argument(
        "--start-code-point",
        type=lambda value: int(value, 0),
        help="First code point to assign (accepts 0x prefixes).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="iconpack",
        description="Build an icon registry from SVG files and emit platform bundles.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Regenerate every enabled target from the icon directory.",
    )
    _add_logging_options(build_parser, suppress_default=True)
    _add_source_options(build_parser)
    build_parser.add_argument("--dist", type=Path, help="Output directory.")
    build_parser.add_argument(
        "--target",
        action="append",
        dest="targets",
        metavar="NAME",
        help=f"Target to emit; repeatable. Builtins: {', '.join(BUILTIN_TARGETS)}.",
    )
    build_parser.add_argument(
        "--no-font",
        action="store_true",
        help="Skip TTF compilation (an existing font in the output directory is reused).",
    )

    list_parser = subparsers.add_parser(
        "list",
        help="Print the registry without writing any files.",
    )
    _add_logging_options(list_parser, suppress_default=True)
    _add_source_options(list_parser)

    return parser


def _resolve_config(args: argparse.Namespace) -> IconPackConfig:
    config = load_config(args.config if args.config else Path(args.path))
    overrides: dict[str, object] = {}
    if args.src:
        overrides["src"] = args.src.expanduser().resolve()
    if getattr(args, "dist", None):
        overrides["dist"] = args.dist.expanduser().resolve()
    if args.font_name:
        overrides["font_name"] = args.font_name
    if args.start_code_point is not None:
        overrides["start_code_point"] = args.start_code_point
    if getattr(args, "no_font", False):
        overrides["font"] = dataclasses.replace(config.font, enabled=False)
    if overrides:
        config = dataclasses.replace(config, **overrides).validate()
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for iconpack commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    pipeline = Pipeline()

    try:
        config = _resolve_config(args)
        if args.command == "build":
            result = pipeline.run(config, targets=args.targets)
        elif args.command == "list":
            registry = pipeline.build_registry(config)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except _BUILD_ERRORS as exc:
        parser.exit(1, f"iconpack {args.command} failed: {exc}\nRun with --verbose for more details.\n")

    if args.command == "build":
        for target, paths in result.artifacts.items():
            print(f"{target}: {len(paths)} files")
        print(f"Built {len(result.registry)} icons into {_relativize(config.dist)}")
    else:
        for entry in registry:
            print(f"{entry.code_point:#06x}  {entry.name}  ({len(entry.geometry)} paths)")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
