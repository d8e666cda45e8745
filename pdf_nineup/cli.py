"""
Command-line interface for PDF Nine-Up.
"""

import logging
import os
import sys

import click
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table

from pdf_nineup import __version__
from pdf_nineup.exceptions import NineUpException
from pdf_nineup.info import get_pdf_info, validate_pdf
from pdf_nineup.pipeline import convert_pdf
from pdf_nineup.types import NineUpOptions
from pdf_nineup.utils import format_file_size

console = Console()


class RichStatusSink:
    """Show pipeline status messages as the description of a progress task."""

    def __init__(self, progress: Progress, task_id) -> None:
        self.progress = progress
        self.task_id = task_id

    def report(self, message: str) -> None:
        self.progress.update(self.task_id, description=message)


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    PDF Nine-Up CLI - Pack nine PDF pages onto every output page.
    """
    pass


@cli.command(name="convert")
@click.argument("input_pdf", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output", "-o",
    default=None,
    help="Output file or directory (default: <input>_9in1.pdf next to the input)",
    type=click.Path(),
)
@click.option("--scale", default=4.0, show_default=True, type=float, help="Render scale for normal pages")
@click.option(
    "--max-dimension",
    default=1400,
    show_default=True,
    type=int,
    help="Maximum rendered page width in pixels",
)
@click.option("--quality", default=85, show_default=True, type=click.IntRange(1, 95), help="JPEG quality")
@click.option("--padding", default=6.0, show_default=True, type=float, help="Cell padding in points")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def convert(input_pdf, output, scale, max_dimension, quality, padding, verbose):
    """
    Convert a PDF into a 9-in-1 PDF.

    Examples:

        pdf-nineup convert lecture.pdf

        pdf-nineup convert lecture.pdf -o handouts/ --max-dimension 1000
    """
    if verbose:
        logging.getLogger("pdf_nineup").setLevel(logging.DEBUG)

    try:
        options = NineUpOptions(
            base_scale=scale,
            max_dimension=max_dimension,
            jpeg_quality=quality,
            padding=padding,
        )
    except ValueError as e:
        raise click.BadParameter(str(e))

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Loading PDF...", total=None)

            def update_progress(current, total):
                progress.update(task, completed=current, total=total)

            result = convert_pdf(
                input_pdf,
                output,
                options=options,
                status=RichStatusSink(progress, task),
                progress_callback=update_progress,
            )
    except NineUpException as e:
        console.print(f"[bold red]✗ Error:[/bold red] {e.message}")
        sys.exit(1)
    except Exception as e:
        console.print(f"[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)

    table = Table(title="9-in-1 PDF", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Source pages", str(result.source_pages))
    table.add_row("Output pages", str(result.output_pages))
    table.add_row("Size", format_file_size(len(result.data)))
    if result.placeholders:
        table.add_row("Blank tiles", str(result.placeholders))
    console.print(table)

    console.print(f"\n[bold green]✓ Saved {os.path.basename(str(result.output_path))}[/bold green]")
    console.print(f"[dim]Output file: {result.output_path}[/dim]")


@cli.command(name="info")
@click.argument("input_pdf", type=click.Path(exists=True, dir_okay=False))
def show_info(input_pdf):
    """
    Display information about a PDF file.

    Example:

        pdf-nineup info input.pdf
    """
    is_valid, error_msg = validate_pdf(input_pdf)
    if not is_valid:
        console.print(f"[bold red]✗ Error:[/bold red] {error_msg}")
        sys.exit(1)

    info = get_pdf_info(input_pdf)

    table = Table(title="PDF Information", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("File", os.path.basename(input_pdf))
    table.add_row("Pages", str(info.num_pages))
    table.add_row("Size", format_file_size(info.file_size))
    if info.title:
        table.add_row("Title", info.title)
    if info.author:
        table.add_row("Author", info.author)
    table.add_row("Encrypted", "Yes" if info.is_encrypted else "No")
    table.add_row("9-in-1 pages", str(info.output_pages))
    console.print(table)


if __name__ == "__main__":
    cli()
