"""CLI entrypoint for scoped Sass compilation."""

from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import Dict, List

from .compiler.base import OUTPUT_STYLES
from .config import CONFIG_FILENAME, ConfigError, load_config
from .errors import CompileError, StructuralMismatchError
from .logging import configure_logging, get_logger
from .pipeline import ScopedSassPipeline
from .sourcemap import normalize_source_map


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scopedsass",
        description="Compile a Sass stylesheet once per theme scope and merge the scoped copies.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Only report warnings and errors.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    compile_parser = subparsers.add_parser(
        "compile",
        help="Compile a stylesheet for every configured scope.",
    )
    compile_parser.add_argument("source", help="Path to the .scss or .sass entry file.")
    compile_parser.add_argument(
        "-o",
        "--output",
        help="Write CSS to this file instead of stdout.",
    )
    compile_parser.add_argument(
        "--config",
        help=f"Path to {CONFIG_FILENAME} or its directory (defaults to the source directory).",
    )
    compile_parser.add_argument(
        "--scope",
        action="append",
        default=[],
        metavar="NAME=PATH[,PATH...]",
        help="Scope name and variable file(s); replaces configured scopes. Repeatable.",
    )
    compile_parser.add_argument(
        "--output-style",
        choices=OUTPUT_STYLES,
        help="libsass output style (default from config, else expanded).",
    )
    compile_parser.add_argument(
        "--include-path",
        action="append",
        default=[],
        help="Additional directory searched for imports. Repeatable.",
    )
    compile_parser.add_argument(
        "--source-map",
        action="store_true",
        help="Write a source map next to the output file.",
    )
    compile_parser.add_argument(
        "--no-verify-structure",
        action="store_true",
        help="Merge scopes even when their compiled rules do not line up.",
    )
    compile_parser.add_argument(
        "--list-dependencies",
        action="store_true",
        help="Print every file the result depends on to stderr.",
    )
    return parser


def parse_scope_argument(value: str) -> Dict[str, object]:
    """Turn ``name=a.scss,b.scss`` into a scope spec mapping."""
    name, sep, paths = value.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"Expected NAME=PATH, got '{value}'")
    items = [item.strip() for item in paths.split(",") if item.strip()]
    path: object = items[0] if len(items) == 1 else items
    return {"scope_name": name.strip(), "path": path}


def dependency_paths(paths: List[str]) -> List[str]:
    """Normalise dependency paths, keeping absolute ones only, first occurrence wins."""
    seen: List[str] = []
    for path in paths:
        normalized = os.path.normpath(path)
        if os.path.isabs(normalized) and normalized not in seen:
            seen.append(normalized)
    return seen


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for scopedsass commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))
    logger = get_logger("cli")

    if args.command != "compile":  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")

    source = Path(args.source).expanduser().resolve()
    if not source.is_file():
        parser.exit(1, f"Source file not found: {args.source}\n")

    try:
        config = load_config(Path(args.config) if args.config else source.parent)
        scopes = [parse_scope_argument(value) for value in args.scope] or config.scopes
    except (ConfigError, argparse.ArgumentTypeError) as exc:
        parser.exit(1, f"{exc}\n")

    compiler_config = config.compiler
    if args.output_style:
        compiler_config.output_style = args.output_style
    if args.include_path:
        compiler_config.include_paths.extend(os.path.abspath(p) for p in args.include_path)
    if args.source_map:
        compiler_config.source_map = True
    if args.no_verify_structure:
        config = replace(config, merge=replace(config.merge, verify_structure=False))

    pipeline = ScopedSassPipeline.from_config(config)
    try:
        result = pipeline.compile_scoped(
            source.read_text(encoding="utf-8"),
            scopes,
            source_path=str(source),
        )
    except CompileError as exc:
        parser.exit(1, f"scopedsass compile failed: {exc.describe()}\n")
    except StructuralMismatchError as exc:
        parser.exit(
            1,
            f"scopedsass compile failed: {exc}\n"
            "Rerun with --no-verify-structure to merge anyway.\n",
        )

    if args.output:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        css = result.css
        if compiler_config.source_map and result.source_map:
            map_path = output.with_name(output.name + ".map")
            normalized = normalize_source_map(result.source_map, Path.cwd())
            map_path.write_text(json.dumps(normalized), encoding="utf-8")
            css = css.rstrip("\n") + f"\n/*# sourceMappingURL={map_path.name} */\n"
        output.write_text(css, encoding="utf-8")
        logger.info("Wrote %s", _relativize(output))
    else:
        if compiler_config.source_map:
            logger.warning("--source-map needs --output; skipping map")
        sys.stdout.write(result.css)

    if args.list_dependencies:
        for path in dependency_paths(result.dependency_paths):
            sys.stderr.write(f"{path}\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
