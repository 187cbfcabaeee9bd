"""Command-line interface for the sale comparables extractor."""
import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.markup import escape

from .utils.logger import setup_logger
from .utils.number_parser import format_currency
from .config import SUPPORTED_SUFFIXES, get_layout_profile_loader
from .batch_runner import run_batch, write_manifest

console = Console()
logger = setup_logger()


@click.group()
@click.version_option(version="0.1.0")
def cli():
    """Sales Comparables Extractor - Rebuild comparables tables from positioned PDF text."""
    pass


@cli.command()
@click.argument('file_path', type=click.Path(exists=True))
@click.option('--output', '-o', type=click.Path(), help='Output file path')
@click.option('--format', '-f', type=click.Choice(['xlsx', 'csv', 'json']), default='xlsx', help='Output format')
@click.option('--profile', '-p', help='Layout profile name (auto-detect if not specified)')
@click.option('--workers', '-w', type=int, default=1, show_default=True, help='Pages processed concurrently')
@click.option('--json', 'json_path', type=click.Path(), help='Optional path to write result JSON')
def extract(file_path, output, format, profile, workers, json_path):
    """
    Extract sale comparables from a document.

    FILE_PATH: Path to the PDF or positioned-text JSON
    """
    console.print("\n[bold blue]Sales Comparables Extractor[/bold blue]\n")

    file_path = Path(file_path)
    export_format = format.lower()

    if not output:
        output = file_path.with_name(f"{file_path.stem}_comparables.{export_format}")

    console.print(f"[cyan]Processing:[/cyan] {file_path.name}")
    console.print(f"[cyan]Output:[/cyan] {output}")

    from .pipeline import ExtractionPipeline

    pipeline = ExtractionPipeline(max_workers=workers)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console
    ) as progress:
        progress.add_task("Extracting comparables...", total=None)

        try:
            result = pipeline.process(
                file_path=file_path,
                output_path=Path(output),
                export_format=export_format,
                profile_name=profile,
            )
        except Exception as e:
            console.print(f"\n[red]✗ Error: {e}[/red]")
            logger.exception("Extraction failed")
            sys.exit(1)

    if json_path:
        try:
            Path(json_path).write_text(json.dumps(result.to_dict(), indent=2), encoding='utf-8')
            console.print(f"[green]JSON result saved to {json_path}[/green]")
        except OSError as json_exc:
            console.print(f"[yellow]![/yellow] Failed to write JSON: {json_exc}")

    if not result.success:
        console.print("\n[red]✗ Extraction failed[/red]")
        console.print(f"  Error: {result.error_message}")
        sys.exit(1)

    console.print("\n[green]✓ Extraction successful![/green]")
    console.print(f"  Records: {result.record_count}")
    console.print(f"  Pages: {result.page_count}")
    console.print(f"  Skipped rows: {result.rows_skipped}")
    console.print(f"  Layout profile: {result.layout_profile}")
    console.print(f"  Time: {result.processing_time:.2f}s")

    if result.records:
        console.print(_records_table(result.records))

    if result.warnings:
        console.print("\n[yellow]Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  ⚠ {warning}")


def _records_table(records) -> Table:
    """Render records as a rich table."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Date", style="cyan")
    table.add_column("Property")
    table.add_column("Tenant")
    table.add_column("Market")
    table.add_column("SF", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("$/SF", justify="right")
    table.add_column("Cap", justify="right")
    table.add_column("Purchaser")
    table.add_column("Seller")

    for record in records:
        price_per_sf = f"{record.price_per_sf:,.0f}"
        if record.price_per_sf_derived:
            price_per_sf += "*"
        table.add_row(
            record.date,
            record.property_name,
            record.major_tenant,
            record.borough_market,
            f"{record.square_feet:,}",
            format_currency(record.price),
            price_per_sf,
            f"{record.cap_rate:g}%",
            record.purchaser,
            record.seller,
        )
    return table


@cli.command()
@click.argument('file_path', type=click.Path(exists=True))
@click.option('--page', '-n', type=int, help='Only show this page (1-based)')
@click.option('--profile', '-p', help='Layout profile name (auto-detect if not specified)')
def rows(file_path, page, profile):
    """Show reconstructed rows, marking primary rows (layout debugging)."""
    from .pipeline import ExtractionPipeline
    from .parsers import RecordExtractor, reconstruct_rows, row_text

    file_path = Path(file_path)
    pipeline = ExtractionPipeline()

    try:
        requested = pipeline.resolve_profile(profile_name=profile)
        document = pipeline.load_document(file_path, requested)
        layout = pipeline.resolve_profile(document, profile)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    console.print(f"\n[cyan]Layout profile:[/cyan] {layout.profile_name} "
                  f"(y={layout.y_threshold}, x={layout.x_threshold})")

    for doc_page in document.pages:
        if page is not None and doc_page.page_number != page:
            continue

        console.print(f"\n[bold]--- Page {doc_page.page_number} ---[/bold]")
        for idx, row in enumerate(reconstruct_rows(doc_page.content, layout.y_threshold)):
            marker = "[green]●[/green]" if RecordExtractor.is_primary_row(row) else " "
            console.print(f"{marker} {idx:3d} y={row[0].y:7.1f}  {escape(row_text(row))}", highlight=False)


@cli.command()
@click.argument('directory', type=click.Path(exists=True))
@click.option('--output-dir', '-o', type=click.Path(), help='Directory to write outputs (defaults to <directory>/batch_output)')
@click.option('--format', '-f', type=click.Choice(['xlsx', 'csv', 'json']), default='xlsx', show_default=True)
@click.option('--profile', '-p', help='Force a specific layout profile for every file')
@click.option('--json-dir', type=click.Path(), help='Optional directory to store per-file JSON payloads')
@click.option('--manifest', type=click.Path(), help='Optional path for batch summary JSON (defaults to <output-dir>/batch_summary.json)')
@click.option('--limit', type=int, help='Process only the first N files (useful for dry runs)')
@click.option('--skip-existing', is_flag=True, help='Skip files whose output already exists in the output directory')
def batch(directory, output_dir, format, profile, json_dir, manifest, limit, skip_existing):
    """Process every PDF/JSON document in DIRECTORY and emit a manifest."""
    directory = Path(directory)

    if not directory.is_dir():
        console.print(f"[red]Error: Not a directory: {directory}[/red]")
        sys.exit(1)

    files = sorted(
        path for path in directory.iterdir()
        if path.is_file() and path.suffix.lower() in SUPPORTED_SUFFIXES
    )

    if not files:
        console.print(f"[yellow]No PDF or JSON documents found in {directory}[/yellow]")
        sys.exit(0)

    if limit is not None:
        files = files[:max(limit, 0)]

    if not files:
        console.print("[yellow]No files left to process after applying limit[/yellow]")
        sys.exit(0)

    output_dir = Path(output_dir) if output_dir else directory / "batch_output"
    json_output_dir = Path(json_dir) if json_dir else None
    manifest_path = Path(manifest) if manifest else output_dir / "batch_summary.json"

    console.print(f"\n[cyan]Found {len(files)} files to process[/cyan]")
    console.print(f"[cyan]Output directory:[/cyan] {output_dir}")
    if json_output_dir:
        console.print(f"[cyan]JSON directory:[/cyan] {json_output_dir}")

    with Progress(SpinnerColumn(), TextColumn("{task.description}"), console=console) as progress:
        task = progress.add_task("Processing documents...", total=len(files))

        def cli_progress(idx: int, total: int, name: str) -> None:
            progress.update(task, description=f"Processing {name}", completed=idx)

        summary = run_batch(
            files,
            output_dir=output_dir,
            format=format,
            profile=profile,
            json_output_dir=json_output_dir,
            skip_existing=skip_existing,
            progress_callback=cli_progress,
            root_directory=directory,
        )
        progress.update(task, description="Batch complete", completed=len(files))

    write_manifest(summary, manifest_path)

    totals = summary.totals
    console.print(
        f"\n[green]Batch complete[/green]: {totals['successes']} succeeded, "
        f"{totals['failures']} failed, {totals['skipped']} skipped, {totals['records']} records"
    )
    console.print(f"Manifest written to: {manifest_path}")

    if totals['failures']:
        console.print("\n[red]Failures detected[/red]. Inspect the manifest for details.")
        sys.exit(1)


@cli.command()
def profiles():
    """List layout profiles."""
    console.print("\n[bold blue]Layout Profiles[/bold blue]\n")

    loader = get_layout_profile_loader()

    if loader.profile_count == 0:
        console.print("[yellow]No layout profiles found; environment defaults apply[/yellow]")
        console.print(f"[yellow]Add YAML files to: {loader.config_dir}[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Profile", style="cyan")
    table.add_column("Y thr", justify="right")
    table.add_column("X thr", justify="right")
    table.add_column("Cap max", justify="right")
    table.add_column("Description", style="green")

    for name in loader.get_all_profiles():
        profile = loader.get_profile(name)
        table.add_row(
            name,
            f"{profile.y_threshold:g}",
            f"{profile.x_threshold:g}",
            f"{profile.cap_rate_max:g}",
            profile.description,
        )

    console.print(table)
    console.print(f"\n[cyan]Total profiles:[/cyan] {loader.profile_count}")


def main():
    """Main entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"\n[red]Error: {e}[/red]")
        logger.exception("Unhandled exception")
        sys.exit(1)


if __name__ == '__main__':
    main()
