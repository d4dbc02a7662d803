"""Typer-based CLI for Snippet Converter."""

import logging
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .config import ConverterConfig
from .converter import ConversionResult, SnippetConverter
from .errors import SnippetConverterError
from .inputs import determine_input_type
from .metadata import describe_inputs
from .models.collection import InputType
from .multi import MergeStrategy, MultiSnippetConverter, SeparateStrategy

app = typer.Typer(
    name="snippet-converter",
    help="Convert Alfred snippet exports into macOS text replacement plists",
    add_completion=False,
)

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _print_result(result: ConversionResult) -> None:
    console.print(f"[bold green]Converted {result.snippets_written} snippet(s)[/bold green]")
    for output_file in result.output_files:
        console.print(f"  [green]+[/green] {escape(str(output_file))}")


@app.command()
def convert(
    inputs: List[str] = typer.Argument(
        ...,
        help="Directories containing JSON files exported from Alfred, or .alfredsnippets files.",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Output directory for the plist file(s) (default: ~/Desktop)",
    ),
    output_file: Optional[str] = typer.Option(
        None,
        "--output-file",
        "-f",
        help="Output file name; with --separate, the base name for each file",
    ),
    separate: bool = typer.Option(
        False,
        "--separate",
        "-s",
        help="Write one plist per collection instead of merging",
    ),
    prefix: bool = typer.Option(
        True,
        "--prefix/--no-prefix",
        help="Prefix merged keywords with the collection name",
    ),
    escape_xml: Optional[bool] = typer.Option(
        None,
        "--escape-xml/--no-escape-xml",
        help="Escape &, <, > and \" in snippet text (default: write text verbatim)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show debug logging",
    ),
):
    """Convert one or more snippet collections.

    A single input is written to one plist. Several inputs are merged into
    one plist (keywords prefixed with the collection name) or, with
    --separate, written to one plist each.
    """
    _configure_logging(verbose)

    config = ConverterConfig.from_env()
    destination = output_dir or config.output_destination
    file_name = output_file or config.output_file_name
    escape_markup = config.escape_markup if escape_xml is None else escape_xml

    for path in inputs:
        if determine_input_type(path) == InputType.UNSUPPORTED:
            console.print(
                f"[red]Invalid input: '{escape(path)}'. Please provide a directory containing "
                "JSON files or an .alfredsnippets file.[/red]"
            )
            raise typer.Exit(code=1)

    try:
        if len(inputs) == 1:
            converter = SnippetConverter(
                input_path=inputs[0],
                output_destination=destination,
                output_file_name=file_name,
                escape_markup=escape_markup,
            )
        else:
            if separate:
                strategy = SeparateStrategy(base_file_name=file_name)
            else:
                strategy = MergeStrategy(file_name=file_name, prefix_keywords=prefix)
            converter = MultiSnippetConverter(
                input_paths=inputs,
                output_strategy=strategy,
                output_destination=destination,
                escape_markup=escape_markup,
            )
        result = converter.run()
    except SnippetConverterError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    except Exception as e:
        console.print(f"[red]Error during conversion: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    _print_result(result)


@app.command()
def inspect(
    inputs: List[str] = typer.Argument(..., help="Snippet directories or .alfredsnippets files"),
):
    """List the collections that would be converted."""
    selections = describe_inputs(inputs)

    table = Table(title="Snippet Collections")
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Snippets", style="green")
    table.add_column("Path", style="dim")

    for selection in selections:
        count = "-" if selection.snippet_count is None else str(selection.snippet_count)
        table.add_row(
            escape(selection.display_name),
            selection.input_type.value,
            count,
            escape(selection.path),
        )

    console.print(table)

    unsupported = [s for s in selections if s.input_type == InputType.UNSUPPORTED]
    if unsupported:
        console.print(f"[yellow]{len(unsupported)} input(s) are not supported[/yellow]")
        raise typer.Exit(code=1)


@app.command()
def version():
    """Show Snippet Converter version."""
    from . import __version__
    console.print(f"Snippet Converter v{__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
