"""
formfill Command Line Interface.

Provides `formfill extract` and `formfill fill` commands for PDF form field
discovery and mapping-driven filling.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .config import load_options
from .errors import FormFillError
from .extractor import extract_fields
from .filler import fill_pdf
from .models import FillStatus, SummaryStatus

console = Console()

STATUS_STYLES = {
    FillStatus.FILLED: "green",
    FillStatus.MISSING: "yellow",
    FillStatus.SKIPPED: "yellow",
    FillStatus.ERROR: "red",
}


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    logging.getLogger().setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.group()
@click.version_option(version=__version__, prog_name="formfill")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def cli(verbose: bool):
    """formfill - fill PDF forms from JSON data.

    Discover AcroForm fields in a PDF and fill them from a JSON payload
    using a mapping of data paths to field names.

    Examples:

        formfill extract form.pdf

        formfill fill form.pdf --mapping mapping.json --data data.json
    """
    _setup_logging(verbose)


@cli.command()
@click.argument("pdf_file", type=click.Path(exists=True))
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.option("--output", "-o", type=click.Path(), help="Save output to file")
def extract(pdf_file: str, fmt: str, output: Optional[str]):
    """Discover form fields in a PDF.

    Examples:

        formfill extract application.pdf

        formfill extract form.pdf --format json --output fields.json
    """
    try:
        result = extract_fields(pdf_file)
    except (FormFillError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    data = result.model_dump(mode="json")

    if fmt == "json":
        text = json.dumps(data, indent=2)
        if output:
            Path(output).write_text(text)
            console.print(f"[green]Fields saved to {output}[/green]")
        else:
            click.echo(text)
        return

    if result.total_fields == 0:
        console.print("[yellow]The form in this PDF has no fields.[/yellow]")
        return

    table = Table(title=f"Fields in {result.filename} ({result.total_fields})")
    table.add_column("Name", style="cyan")
    table.add_column("Kind", style="yellow")
    table.add_column("Value", style="green")
    table.add_column("Options")
    table.add_column("Read-only", style="red")

    for field in result.fields:
        table.add_row(
            field.name,
            field.kind.value,
            "" if field.current_value is None else str(field.current_value),
            ", ".join(field.options or []),
            "Yes" if field.is_read_only else "",
        )

    console.print(table)

    if output:
        Path(output).write_text(json.dumps(data, indent=2))
        console.print(f"\n[green]Also saved to {output}[/green]")


@cli.command()
@click.argument("pdf_file", type=click.Path(exists=True))
@click.option(
    "--mapping",
    "-m",
    required=True,
    type=click.Path(exists=True),
    help="JSON/YAML file mapping data paths to field names",
)
@click.option(
    "--data",
    "-d",
    required=True,
    type=click.Path(exists=True),
    help="JSON/YAML data payload",
)
@click.option(
    "--mapping-property",
    help="Property holding the mapping list when the mapping file is an object",
)
@click.option("--output", "-o", type=click.Path(), help="Output PDF path")
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(exists=True),
    help="YAML/JSON file with engine options",
)
@click.option(
    "--warn-missing/--no-warn-missing",
    default=None,
    help="Warn about mapped paths with no value in the data",
)
@click.option("--date-format", help="Default date format, e.g. DD/MM/YYYY")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def fill(
    pdf_file: str,
    mapping: str,
    data: str,
    mapping_property: Optional[str],
    output: Optional[str],
    config_file: Optional[str],
    warn_missing: Optional[bool],
    date_format: Optional[str],
    verbose: bool,
):
    """Fill a PDF form from a JSON payload and a field mapping.

    Examples:

        formfill fill form.pdf -m mapping.json -d applicant.json

        formfill fill form.pdf -m mapping.yaml -d data.json --date-format D/M/YYYY

        formfill fill form.pdf -m request.json --mapping-property fields -d data.json
    """
    if verbose:
        _setup_logging(True)

    try:
        options = load_options(
            config_file,
            warn_on_missing_values=warn_missing,
            default_date_format=date_format,
        )
        result = fill_pdf(
            pdf_file,
            mapping,
            data,
            output,
            options=options,
            mapping_property=mapping_property,
        )
    except (FormFillError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    summary = result.summary

    table = Table(title=f"Fill {summary.status.value}")
    table.add_column("Field", style="cyan")
    table.add_column("Data key")
    table.add_column("Status")
    table.add_column("Message")
    for detail in summary.details:
        style = STATUS_STYLES[detail.status]
        table.add_row(
            detail.target_field,
            detail.data_key,
            f"[{style}]{detail.status.value}[/{style}]",
            detail.message or "",
        )
    if summary.details:
        console.print(table)

    console.print(f"[green]Filled PDF saved to {result.output_path}[/green]")
    console.print(
        f"  Fields filled: {summary.filled_count}/{len(summary.details)} "
        f"({summary.missing_count} missing, {summary.skipped_count} skipped, "
        f"{summary.errored_count} errored)"
    )

    if summary.status == SummaryStatus.ERROR:
        raise SystemExit(2)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
