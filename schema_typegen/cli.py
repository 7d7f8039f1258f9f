"""
Command-line interface for schema-typegen.

Reads a DMMF document, generates the requested targets, and writes each
one to its configured output file or to standard output.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import (
    GenerationResult,
    GeneratorConfig,
    ConfigError,
    convert_dmmf,
    generate_code,
    get_registry,
    SchemaMismatchError,
)
from .codegen.core.config import ENUM_TYPES, MODEL_TYPES, get_config_manager
from .codegen.registry import RegistryError
from .logging_config import get_logger, setup_logging
from .utils import JSONLoaderError, load_dmmf, write_outputs

logger = get_logger(__name__)

# Config option holding the output path of each target
OUTPUT_OPTIONS = {
    "typescript": "output",
    "zod": "zod_output",
    "pg": "pg_output",
}


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="schema-typegen",
        description="Generate TypeScript types, zod schemas and SQL helpers from a Prisma DMMF document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  schema-typegen dmmf.json -o src/types.ts
  schema-typegen dmmf.json --target zod --zod-output src/zod.ts
  schema-typegen --stdin --config typegen.json < dmmf.json
  schema-typegen --list-targets
        """.strip(),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="DMMF JSON file")
    input_group.add_argument("--url", help="URL to fetch the DMMF document from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read the DMMF document from standard input"
    )

    # Core generation options
    parser.add_argument("--config", "-c", help="Configuration file path (JSON)")
    parser.add_argument(
        "--target",
        "-t",
        action="append",
        metavar="TARGET",
        help="Target to generate; repeatable (default: typescript, plus zod/pg when their output is configured)",
    )
    parser.add_argument("--output", "-o", help="TypeScript output file (default: stdout)")
    parser.add_argument("--zod-output", help="zod schema output file")
    parser.add_argument("--pg-output", help="pg data-access output file")

    # Common options
    options_group = parser.add_argument_group("generation options")
    options_group.add_argument("--model-type", choices=MODEL_TYPES, help="Shape of model declarations")
    options_group.add_argument("--enum-type", choices=ENUM_TYPES, help="Shape of enum declarations")
    options_group.add_argument(
        "--optional-nullables",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Mark nullable fields optional",
    )
    options_group.add_argument(
        "--omit-relations",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Leave relation fields out of model declarations",
    )
    options_group.add_argument(
        "--optional-relations",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Mark relation fields optional",
    )
    options_group.add_argument(
        "--format", action="store_true", help="Tidy whitespace in generated code"
    )

    # Informational / diagnostics
    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-targets", action="store_true", help="List supported targets and exit"
    )
    info_group.add_argument(
        "--verbose", "-v", action="store_true", help="Show generation result metadata"
    )
    info_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    return parser


def build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Collect configuration overrides given on the command line."""
    overrides: dict[str, Any] = {}

    for option in ("output", "zod_output", "pg_output", "model_type", "enum_type"):
        value = getattr(args, option, None)
        if value:
            overrides[option] = value

    for option in ("optional_nullables", "omit_relations", "optional_relations"):
        value = getattr(args, option, None)
        if value is not None:
            overrides[option] = value

    if getattr(args, "format", False):
        overrides["format_output"] = True

    return overrides


def select_targets(args: argparse.Namespace, config: GeneratorConfig) -> list[str]:
    """
    Resolve the targets to generate.

    Without --target, TypeScript is always generated and the zod and pg
    targets follow their output options.

    Raises:
        CLIError: For unknown targets
    """
    registry = get_registry()

    if args.target:
        targets = []
        for target in args.target:
            try:
                name = registry.resolve(target)
            except RegistryError as e:
                raise CLIError(str(e)) from e
            if name not in targets:
                targets.append(name)
        return targets

    targets = ["typescript"]
    if config.zod_output:
        targets.append("zod")
    if config.pg_output:
        targets.append("pg")
    return targets


class CLIHandler:
    """Handle command-line generation runs."""

    def __init__(self, console: Console | None = None, err_console: Console | None = None) -> None:
        """Initialize CLI handler with its consoles."""
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True, soft_wrap=True)
        logger.debug("CLIHandler initialized")

    def run(self, args: argparse.Namespace) -> int:
        """Run a generation based on parsed arguments.

        Returns:
            Exit code (0 for success, 1 for failure).
        """
        try:
            if args.list_targets:
                return self.list_targets()

            if not (args.file or args.url or args.stdin):
                raise CLIError("Input source required (file, --url, or --stdin)")

            config = self.build_config(args)
            targets = select_targets(args, config)

            source, document = load_dmmf(args.file, args.url, args.stdin)
            self.err_console.print(f"Loaded: {escape(source)}")
            datamodel = convert_dmmf(document)

            results = self.generate(datamodel, targets, config)
            failed = {target: r for target, r in results.items() if not r.success}
            if failed:
                for target, result in failed.items():
                    self.err_console.print(
                        f"[red]✗ {target} generation failed:[/red] {escape(str(result.error_message))}"
                    )
                # Nothing is written unless every target succeeded
                return 1

            written = self.write_files(results, config)
            for target, result in results.items():
                self.output(target, result, written.get(target), args)

            return 0

        except (
            CLIError,
            ConfigError,
            RegistryError,
            JSONLoaderError,
            SchemaMismatchError,
            FileNotFoundError,
        ) as e:
            self.err_console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
            logger.debug("Run aborted", exc_info=True)
            return 1
        except OSError as e:
            self.err_console.print(f"[red]✗ Failed to write output:[/red] {escape(str(e))}")
            return 1

    def build_config(self, args: argparse.Namespace) -> GeneratorConfig:
        """Merge the config file with command-line overrides and report issues."""
        manager = get_config_manager()
        config = manager.get_config(build_overrides(args), args.config)

        for warning in manager.validate_config(config):
            self.err_console.print(f"[yellow]⚠️  {escape(warning)}[/yellow]")
            logger.warning("Configuration: %s", warning)

        return config

    def generate(
        self, datamodel: Any, targets: list[str], config: GeneratorConfig
    ) -> dict[str, GenerationResult]:
        """Generate every target from the same datamodel."""
        registry = get_registry()
        results: dict[str, GenerationResult] = {}

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.err_console,
            transient=True,
        ) as progress:
            for target in targets:
                task = progress.add_task(f"[green]Generating {target}...", total=None)
                generator = registry.create_generator(target, config)
                results[target] = generate_code(generator, datamodel)
                progress.remove_task(task)

        return results

    def write_files(
        self, results: dict[str, GenerationResult], config: GeneratorConfig
    ) -> dict[str, Path]:
        """Write every result that has an output path configured."""
        paths = {
            target: getattr(config, OUTPUT_OPTIONS[target])
            for target in results
            if getattr(config, OUTPUT_OPTIONS[target])
        }
        written = write_outputs({path: results[target].code for target, path in paths.items()})
        return {target: written[path] for target, path in paths.items()}

    def output(
        self,
        target: str,
        result: GenerationResult,
        written: Path | None,
        args: argparse.Namespace,
    ) -> None:
        """Report a written result, or print it."""
        if written:
            self.err_console.print(
                f"[green]✓[/green] Generated {target} code saved to [cyan]{written}[/cyan]"
            )
        elif self.console.is_terminal:
            self.console.print(Syntax(result.code, "typescript", theme="monokai"))
        else:
            self.console.file.write(result.code)

        if args.verbose and result.metadata:
            self.print_metadata(target, result.metadata)

        if result.warnings:
            self.err_console.print(f"\n[yellow]⚠️  {target} warnings:[/yellow]")
            for warning in result.warnings:
                self.err_console.print(f"  [yellow]•[/yellow] {escape(warning)}")

    def print_metadata(self, target: str, metadata: dict[str, Any]) -> None:
        """Show generation metadata as a table."""
        table = Table(
            title=f"📊 {target} Generation Metadata",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("Property", style="bold")
        table.add_column("Value", style="green")

        for key, value in metadata.items():
            table.add_row(key.replace("_", " ").title(), str(value))

        self.err_console.print(table)

    def list_targets(self) -> int:
        """List supported targets with details."""
        registry = get_registry()

        table = Table(title="📋 Supported Targets", box=box.ROUNDED, title_style="bold cyan")
        table.add_column("Target", style="bold green", no_wrap=True)
        table.add_column("Extension", style="cyan")
        table.add_column("Generator Class", style="dim")
        table.add_column("Aliases", style="blue")

        for target in registry.list_targets():
            info = registry.get_target_info(target)
            aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
            table.add_row(target, info["file_extension"], info["class"], aliases)

        self.console.print(table)
        self.console.print(
            Panel(
                "[bold]Usage:[/bold] schema-typegen [dim]dmmf.json[/dim] --target [cyan]TARGET[/cyan]",
                title="💡 Quick Start",
                border_style="blue",
            )
        )
        return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the schema-typegen command."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    return CLIHandler().run(args)


if __name__ == "__main__":
    sys.exit(main())
