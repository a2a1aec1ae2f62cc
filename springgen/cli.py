"""Command-line entry point.

Usage::

    springgen
    springgen --output-dir ~/work --java-version 21
    python -m springgen --base-url http://localhost:8080 --verbose
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from springgen import __version__
from springgen.config import Config
from springgen.scaffold import Scaffolder, ScaffoldError
from springgen.utils import configure_logging, console, print_error, print_success

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="springgen",
        description="Scaffold a Spring Boot project from Spring Initializr",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  springgen\n"
            "  springgen --output-dir ./projects --java-version 21\n"
            "  springgen --config springgen.yaml --yes\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="JSON or YAML configuration file",
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help="Spring Initializr instance (default: https://start.spring.io)",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=None,
        help="Per-request timeout in seconds (default: 30)",
    )
    parser.add_argument(
        "--output-dir", "-o",
        type=Path,
        default=None,
        help="Directory the project folder is created in (default: .)",
    )
    parser.add_argument(
        "--group-id",
        default=None,
        help="Pre-fill the group id",
    )
    parser.add_argument(
        "--java-version",
        default=None,
        help="Pre-select a Java version",
    )
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Do not ask for confirmation before generating",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging",
    )
    return parser


def load_config(args: argparse.Namespace) -> Config:
    """The config file (or the environment without one), then command-line flags."""
    config = Config.load(args.config) if args.config else Config.from_env()
    config = config.with_overrides(
        base_url=args.base_url,
        timeout=args.timeout,
        output_dir=args.output_dir,
    )
    defaults = config.defaults.model_copy(
        update={
            key: value
            for key, value in {"group_id": args.group_id, "java_version": args.java_version}.items()
            if value is not None
        }
    )
    return config.model_copy(update={"defaults": defaults})


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``springgen`` and ``python -m springgen``."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(args)
    except FileNotFoundError:
        print_error(f"Error: configuration file not found: {args.config}")
        return EXIT_ERROR
    except OSError as exc:
        print_error(f"Error: cannot read configuration file {args.config}: {exc.strerror or exc}")
        return EXIT_ERROR
    except (ValidationError, ValueError, yaml.YAMLError) as exc:
        print_error(f"Error: invalid configuration: {exc}")
        return EXIT_ERROR

    scaffolder = Scaffolder(config, assume_yes=args.yes)
    try:
        project_root = scaffolder.run()
    except KeyboardInterrupt:
        console.print()
        return EXIT_INTERRUPTED
    except EOFError:
        console.print()
        print_error("Error: input closed before all questions were answered")
        return EXIT_ERROR
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        return EXIT_ERROR

    if project_root is None:
        console.print("Nothing generated.")
        return EXIT_OK

    print_success("Project generated successfully!")
    console.print(f"  [dim]{project_root}[/dim]")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
