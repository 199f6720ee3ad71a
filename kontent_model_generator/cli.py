from __future__ import annotations

import argparse
import logging
from typing import Any

from rich.console import Console
from rich.markup import escape

from . import __version__
from .codegen import ConsoleReporter, GenerationResult, GeneratorError, get_generator
from .codegen.core.config import RESOLVER_KEYS, ConfigError, get_config_manager, load_config
from .codegen.core.schema import parse_snapshot
from .codegen.core.templates import TemplateError
from .logging_config import get_logger, setup_logging
from .management import ManagementClient, ManagementClientError
from .utils import SnapshotLoaderError, load_json_from_file, save_snapshot

logger = get_logger(__name__)

CASE_CHOICES = ["camel", "pascal", "snake", "kebab"]


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser of the `kontent-generate` command."""
    parser = argparse.ArgumentParser(
        prog="kontent-generate",
        description="Generate TypeScript models for the Kontent.ai Delivery SDK",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  kontent-generate --project-id <id> --api-key <key> -o models
  kontent-generate --snapshot schema.json -o models --module-style extension
  kontent-generate -p <id> -k <key> --save-snapshot schema.json --element-resolver snake
        """.strip(),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    source_group = parser.add_argument_group("schema source")
    source_group.add_argument("-p", "--project-id", help="Kontent.ai project id")
    source_group.add_argument("-k", "--api-key", help="Management API key")
    source_group.add_argument("--base-url", help="Management API base URL")
    source_group.add_argument(
        "--snapshot",
        metavar="FILE",
        help="Read the schema from a JSON snapshot instead of the Management API",
    )
    source_group.add_argument(
        "--save-snapshot",
        metavar="FILE",
        help="Write the fetched schema to a JSON snapshot file",
    )

    output_group = parser.add_argument_group("output")
    output_group.add_argument("-o", "--output-dir", help="Output directory (default: .)")
    output_group.add_argument(
        "-a",
        "--add-timestamp",
        action="store_true",
        default=None,
        help="Add generation timestamp to model comments",
    )
    output_group.add_argument(
        "-t", "--sdk-type", help="SDK to generate models for (default: delivery)"
    )
    output_group.add_argument(
        "--module-style",
        choices=["bare", "extension"],
        help="Import paths without extension (bare) or ending in .js (extension)",
    )
    output_group.add_argument(
        "--no-taxonomies",
        dest="generate_taxonomies",
        action="store_false",
        default=None,
        help="Don't generate taxonomy types",
    )
    output_group.add_argument(
        "--no-barrels",
        dest="generate_barrels",
        action="store_false",
        default=None,
        help="Don't generate index.ts barrel files",
    )

    naming_group = parser.add_argument_group("naming")
    for key in RESOLVER_KEYS:
        target = key[: -len("_resolver")].replace("_", " ")
        naming_group.add_argument(
            f"--{key.replace('_', '-')}",
            metavar="CASE",
            help=f"Case of {target} names ({', '.join(CASE_CHOICES)})",
        )

    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    return parser


class CLIHandler:
    """Handle command-line generation runs."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def run(self, args: Any) -> int:
        """Run a generation from parsed CLI arguments.

        Args:
            args: Parsed CLI arguments.

        Returns:
            Exit code (0 for success, 1 for failure).
        """
        try:
            return self._run(args)
        except (
            GeneratorError,
            ConfigError,
            ManagementClientError,
            SnapshotLoaderError,
            TemplateError,
            OSError,
        ) as e:
            self.console.print(f"❌ [red]{escape(str(e))}[/red]")
            logger.error("Generation failed: %s", e)
            return 1

    def _run(self, args: Any) -> int:
        config = load_config(self._overrides(args), getattr(args, "config", None))
        snapshot_file = getattr(args, "snapshot", None)
        get_config_manager().require_valid(config, needs_project=not snapshot_file)

        # Fails on an unsupported sdk type before anything is fetched
        reporter = ConsoleReporter(self.console, verbose=getattr(args, "verbose", False))
        generator = get_generator(config.sdk_type, config, reporter)

        if snapshot_file:
            raw = load_json_from_file(snapshot_file)
            self.console.print(f"📄 Loaded schema from '[yellow]{escape(str(snapshot_file))}[/yellow]'")
        else:
            client = ManagementClient(config.project_id, config.api_key, config.base_url)
            self.console.print(f"🌐 Fetching schema of project '{escape(config.project_id)}'")
            raw = client.fetch_raw_snapshot()

        if getattr(args, "save_snapshot", None):
            path = save_snapshot(raw, args.save_snapshot)
            self.console.print(f"Saved schema snapshot to '[yellow]{escape(str(path))}[/yellow]'")

        result = generator.generate(parse_snapshot(raw))
        self._print_summary(result)
        return 0

    def _overrides(self, args: Any) -> dict[str, Any]:
        keys = [
            "project_id",
            "api_key",
            "base_url",
            "output_dir",
            "add_timestamp",
            "sdk_type",
            "module_style",
            "generate_taxonomies",
            "generate_barrels",
            *RESOLVER_KEYS,
        ]
        return {key: getattr(args, key, None) for key in keys}

    def _print_summary(self, result: GenerationResult) -> None:
        for warning in result.warnings:
            self.console.print(f"[yellow]⚠️  {escape(warning)}[/yellow]")

        self.console.print(
            f"✅ [green]Generated {len(result.content_type_filenames)} content types, "
            f"{len(result.snippet_filenames)} snippets and "
            f"{len(result.taxonomy_filenames)} taxonomies[/green]"
        )


def main(argv: list[str] | None = None) -> int:
    """Entry point of the `kontent-generate` command."""
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)
    logger.debug("CLI arguments parsed")
    return CLIHandler().run(args)
