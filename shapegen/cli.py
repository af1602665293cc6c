"""CLI entrypoints for shapegen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ShapeGenConfig, load_config
from .errors import ConfigError, ExtractionError, ShapeGenError
from .logging import configure_logging
from .pipeline import Pipeline


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shapegen",
        description="Extract portable type-shape declarations from TypeScript sources.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract_parser = subparsers.add_parser(
        "extract",
        help="Write one declaration-only file per source file.",
    )
    _add_verbose_option(extract_parser, suppress_default=True)
    extract_parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Root folder of the project (defaults to the config location or current directory).",
    )
    extract_parser.add_argument(
        "--config",
        default=None,
        help="Path to a .shapegen.yml file (defaults to <path>/.shapegen.yml).",
    )
    extract_parser.add_argument(
        "--subfolder",
        default=None,
        help="Folder below the root that holds the sources to process.",
    )
    extract_parser.add_argument(
        "--out",
        default=None,
        help="Output root; files mirror their path relative to the root folder.",
    )
    extract_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List the files that would be written without writing them.",
    )
    extract_parser.add_argument(
        "--log-file",
        default=None,
        help="Also write logs to this file.",
    )

    return parser


def _resolve_config(args: argparse.Namespace) -> ShapeGenConfig:
    config_source = Path(args.config) if args.config else Path(args.path or ".")
    config = load_config(config_source)
    return config.with_overrides(
        root_folder=Path(args.path) if args.path and args.config else None,
        source_subfolder=Path(args.subfolder) if args.subfolder else None,
        output_root=Path(args.out) if args.out else None,
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for shapegen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if getattr(args, "log_file", None) else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    if args.command == "extract":
        try:
            config = _resolve_config(args)
            result = Pipeline().run(config, dry_run=bool(args.dry_run))
        except (FileNotFoundError, NotADirectoryError, ConfigError) as exc:
            parser.exit(1, f"{exc}\n")
        except ExtractionError as exc:
            parser.exit(1, f"shapegen extract failed: {exc}\nRun with --verbose for more details.\n")
        except ShapeGenError as exc:
            parser.exit(1, f"shapegen extract failed: {exc}\n")

        if result.dry_run:
            print(f"Would write {len(result.files)} shape files (dry-run):")
            for outcome in result.files:
                print(f"  {_relativize(outcome.destination)}")
        else:
            print(f"Wrote {len(result.files)} shape files to {_relativize(result.output_root)}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
