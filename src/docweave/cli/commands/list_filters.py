#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/docweave/cli/commands/list_filters.py
"""Filter listing command for the docweave CLI.

Shows the registered filters with their descriptions, aliases, options and
tags, as plain text or with rich terminal tables.
"""
import argparse
import sys

from docweave.cli.builder import EXIT_SUCCESS, EXIT_VALIDATION_ERROR
from docweave.filters.metadata import FilterMetadata
from docweave.filters.registry import filter_registry


def _create_list_filters_parser() -> argparse.ArgumentParser:
    """Create argparse parser for list-filters command.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser for list-filters command

    """
    parser = argparse.ArgumentParser(
        prog="docweave list-filters", description="Show available filters.", add_help=True
    )
    parser.add_argument("filter", nargs="?", help="Show details for specific filter")
    parser.add_argument("--rich", action="store_true", help="Use rich terminal output")
    return parser


def _render_rich_detail(metadata: FilterMetadata) -> None:
    from rich.console import Console
    from rich.panel import Panel
    from rich.table import Table

    console = Console()

    content = [
        f"[bold]Name:[/bold] {metadata.name}",
        f"[bold]Description:[/bold] {metadata.description}",
        f"[bold]Version:[/bold] {metadata.version}",
    ]
    if metadata.aliases:
        content.append(f"[bold]Aliases:[/bold] {', '.join(metadata.aliases)}")
    if metadata.tags:
        content.append(f"[bold]Tags:[/bold] {', '.join(metadata.tags)}")
    console.print(Panel("\n".join(content), title=f"Filter: {metadata.name}"))

    if metadata.options:
        table = Table(title="Options")
        table.add_column("Name", style="cyan")
        table.add_column("Description", style="white")
        for name, help_text in metadata.options.items():
            table.add_row(name, help_text)
        console.print(table)


def _render_rich_summary(names: list[str]) -> None:
    from rich.console import Console
    from rich.table import Table

    table = Table(title=f"Available Filters ({len(names)})")
    table.add_column("Name", style="cyan")
    table.add_column("Aliases", style="magenta")
    table.add_column("Description", style="white")
    table.add_column("Tags", style="yellow")

    for name in names:
        metadata = filter_registry.get_metadata(name)
        table.add_row(metadata.name, ", ".join(metadata.aliases), metadata.description, ", ".join(metadata.tags))

    Console().print(table)


def _render_plain_detail(metadata: FilterMetadata) -> None:
    print(f"\n{metadata.name}")
    print("=" * 60)
    print(f"Description: {metadata.description}")
    print(f"Version: {metadata.version}")
    if metadata.aliases:
        print(f"Aliases: {', '.join(metadata.aliases)}")
    if metadata.tags:
        print(f"Tags: {', '.join(metadata.tags)}")
    if metadata.options:
        print("\nOptions:")
        for name, help_text in metadata.options.items():
            print(f"  {name}")
            print(f"    {help_text}")


def _render_plain_summary(names: list[str]) -> None:
    print("\nAvailable Filters")
    print("=" * 60)
    for name in names:
        metadata = filter_registry.get_metadata(name)
        aliases_str = f" (aliases: {', '.join(metadata.aliases)})" if metadata.aliases else ""
        print(f"  {metadata.name:20} {metadata.description}{aliases_str}")
    print(f"\nTotal: {len(names)} filters")
    print("Use 'docweave list-filters <filter>' for details")


def handle_list_filters_command(args: list[str] | None = None) -> int:
    """Handle list-filters command.

    Parameters
    ----------
    args : list[str], optional
        Arguments after the command name

    Returns
    -------
    int
        Exit code (0 for success)

    """
    parser = _create_list_filters_parser()
    try:
        parsed = parser.parse_args(args or [])
    except SystemExit as e:
        # argparse exits on --help or bad arguments
        return e.code if isinstance(e.code, int) else 0

    names = filter_registry.list_filters()

    if parsed.filter:
        if not filter_registry.has_filter(parsed.filter):
            print(f"Error: Filter '{parsed.filter}' not found", file=sys.stderr)
            print(f"Available: {', '.join(names)}", file=sys.stderr)
            return EXIT_VALIDATION_ERROR
        metadata = filter_registry.get_metadata(parsed.filter)
        if parsed.rich:
            _render_rich_detail(metadata)
        else:
            _render_plain_detail(metadata)
        return EXIT_SUCCESS

    if parsed.rich:
        _render_rich_summary(names)
    else:
        _render_plain_summary(names)
    return EXIT_SUCCESS
