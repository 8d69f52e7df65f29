"""
Command-line interface for Java source generation.

Provides two tools:

- ``composer-codegen``: generate Java sources from a business network archive
- ``composer-codegen-build``: generate the system model sources and the
  Engine interface from an empty in-memory model
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich import box

from .codegen import (
    GenerationResult,
    GeneratorConfig,
    generate_engine_interface,
    generate_model_sources,
    load_config,
)
from .engine import ComposerEngine
from .logging_config import get_logger, setup_logging
from .model import ModelManager
from .utils import is_url, load_archive

logger = get_logger(__name__)

# Initialize rich console
console = Console()


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--output-dir",
        "-o",
        required=True,
        metavar="DIR",
        help="Output directory for generated Java classes",
    )
    parser.add_argument(
        "--config", metavar="FILE", help="JSON configuration file for code generation"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logging and generation details",
    )


def create_parser() -> argparse.ArgumentParser:
    """Parser for the archive-driven generator."""
    parser = argparse.ArgumentParser(
        prog="composer-codegen",
        description="Generate Java classes from a business network archive",
    )
    parser.add_argument(
        "--input-bna",
        "-i",
        required=True,
        metavar="PATH",
        help="Input .bna archive path or URL",
    )
    _add_common_args(parser)
    parser.add_argument(
        "--include-system",
        action="store_true",
        help="Also generate classes for system declarations",
    )
    return parser


def create_build_parser() -> argparse.ArgumentParser:
    """Parser for the system model and Engine interface generator."""
    parser = argparse.ArgumentParser(
        prog="composer-codegen-build",
        description="Generate the system model classes and the Engine interface",
    )
    _add_common_args(parser)
    parser.add_argument(
        "--engine-dir",
        metavar="DIR",
        help="Output directory for Engine.java (default: the engine package below --output-dir)",
    )
    return parser


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    return load_config(config_file=args.config)


def _print_result(result: GenerationResult, verbose: bool) -> None:
    console.print(f"[green]✓[/green] Generated {len(result.files)} file(s)")

    if verbose and result.files:
        table = Table(title="Generated files", box=box.SIMPLE)
        table.add_column("File", style="cyan")
        for path in result.files:
            table.add_row(str(path))
        console.print(table)

    if verbose and result.skipped:
        console.print(f"[dim]Skipped: {', '.join(result.skipped)}[/dim]")

    for warning in result.warnings:
        console.print(f"[yellow]⚠ {warning}[/yellow]")


def _fail(error: Exception) -> int:
    console.print(f"[red]✗ Error:[/red] {error}")
    logger.error("Generation failed: %s", error, exc_info=True)
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    """
    Generate Java sources for the declarations of an archive.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = create_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else None)

    try:
        config = _build_config(args)
        source = args.input_bna
        if is_url(source):
            network = load_archive(url=source)
        else:
            network = load_archive(file_path=source)

        result = generate_model_sources(
            network, args.output_dir, config, ignore_system=not args.include_system
        )
    except Exception as e:
        return _fail(e)

    _print_result(result, args.verbose)
    return 0


def build_main(argv: Optional[List[str]] = None) -> int:
    """
    Generate the system model sources and the Engine interface.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = create_build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else None)

    try:
        config = _build_config(args)
        engine_dir = args.engine_dir
        if engine_dir is None:
            engine_dir = Path(args.output_dir).joinpath(*config.engine_package.split("."))

        result = generate_engine_interface(ComposerEngine, engine_dir, config)
        result = result.merge(
            generate_model_sources(
                ModelManager(include_system=True),
                args.output_dir,
                config,
                ignore_system=False,
            )
        )
    except Exception as e:
        return _fail(e)

    _print_result(result, args.verbose)
    return 0


if __name__ == "__main__":
    sys.exit(main())
