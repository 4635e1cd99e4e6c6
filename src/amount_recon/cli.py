"""
Command-line interface for the amount reconciliation engine.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional
import logging
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .benchmark import run_benchmark
from .config import generate_default_config, load_config
from .matching.engine import ReconciliationEngine
from .parsers.csv_parser import RecordParser
from .reports.console_report import format_outcome, records_table, summary_table
from .utils.amounts import format_scaled, to_scaled
from .utils.logging_config import setup_logging

console = Console()
err_console = Console(stderr=True)


@click.group()
@click.version_option(version=__version__)
def main():
    """Two-sided amount reconciliation with a variance tolerance."""
    pass


@main.command()
@click.argument("side1_file", type=click.Path(exists=True, path_type=Path))
@click.argument("side2_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file (YAML)",
)
@click.option(
    "--variance",
    type=str,
    default=None,
    help='Override the variance, in major units (e.g. "0.50")',
)
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Proposing threads")
@click.option(
    "--limit",
    type=click.IntRange(min=0),
    default=None,
    help="Print at most this many outcome lines",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def reconcile(
    side1_file: Path,
    side2_file: Path,
    config: Optional[Path],
    variance: Optional[str],
    workers: Optional[int],
    limit: Optional[int],
    verbose: bool,
):
    """
    Reconcile two side files and print the outcomes.

    SIDE1_FILE: CSV with the side-1 records (drives output order)
    SIDE2_FILE: CSV with the side-2 records
    """
    try:
        recon_config = load_config(config)
        _setup_logging(recon_config, verbose)

        # Apply command-line overrides
        if workers is not None:
            recon_config.matching.workers = workers

        scale = recon_config.matching.scale
        if variance is not None:
            scaled_variance = to_scaled(variance, scale)
        else:
            scaled_variance = recon_config.matching.scaled_variance()

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Parsing side 1...", total=None)
            parser = RecordParser(recon_config)
            side1 = parser.parse_file(side1_file)
            progress.update(task, completed=True)

            task = progress.add_task("Parsing side 2...", total=None)
            side2 = parser.parse_file(side2_file)
            progress.update(task, completed=True)

            task = progress.add_task("Running reconciliation...", total=None)
            start_time = datetime.now()

            engine = ReconciliationEngine(recon_config)
            outcomes = engine.reconcile(side1, side2, scaled_variance)

            processing_time = (datetime.now() - start_time).total_seconds()
            progress.update(task, completed=True)

        summary = engine.generate_summary(outcomes, scaled_variance, processing_time)
        console.print(summary_table(summary, scale))

        shown = outcomes if limit is None else outcomes[:limit]
        for outcome in shown:
            console.print(format_outcome(outcome, scale), markup=False, highlight=False)
        if len(shown) < len(outcomes):
            console.print(f"\n... and {len(outcomes) - len(shown)} more outcomes")

    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if verbose:
            console.print_exception()
        sys.exit(1)


@main.command("parse-side")
@click.argument("side_file", type=click.Path(exists=True, path_type=Path))
@click.option("-c", "--config", type=click.Path(exists=True, path_type=Path))
def parse_side(side_file: Path, config: Optional[Path]):
    """
    Parse a side file and display its records.

    SIDE_FILE: CSV with id and amount columns
    """
    try:
        recon_config = load_config(config)
        records = RecordParser(recon_config).parse_file(side_file)
        scale = recon_config.matching.scale

        console.print(records_table(records, f"Records: {side_file.name}", scale))

        if len(records) > 20:
            console.print(f"\n... and {len(records) - 20} more records")

        total = sum(record.amount for record in records)
        console.print(f"\nTotal records: {len(records)}")
        console.print(f"Total amount: {format_scaled(total, scale)}")

    except Exception as e:
        console.print(f"[red]Error parsing file: {escape(str(e))}[/red]")
        sys.exit(1)


@main.command()
@click.option("--size", type=click.IntRange(min=0), default=10_000, help="Records per side")
@click.option("--variance", type=str, default="1.50", help="Variance in major units")
@click.option(
    "--workers",
    "worker_counts",
    type=click.IntRange(min=1),
    multiple=True,
    help="Worker count to time (repeatable)",
)
@click.option("--seed", type=int, default=None, help="Random seed")
def benchmark(size: int, variance: str, worker_counts: tuple[int, ...], seed: Optional[int]):
    """Time sequential and parallel runs over random data."""
    try:
        scaled_variance = to_scaled(variance)
        results = run_benchmark(
            size=size,
            variance=scaled_variance,
            worker_counts=worker_counts or (1, 4),
            seed=seed,
        )
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    table = Table(title=f"Benchmark: {size} records per side, variance {variance}")
    table.add_column("Workers", justify="right")
    table.add_column("Time", justify="right")
    table.add_column("Matched", justify="right")
    table.add_column("Identical", justify="center")

    for result in results:
        table.add_row(
            str(result.workers),
            f"{result.elapsed_seconds:.3f}s",
            str(result.matched_count),
            "yes" if result.identical else "[red]NO[/red]",
        )

    console.print(table)

    if not all(result.identical for result in results):
        sys.exit(1)


@main.command("init-config")
@click.option(
    "-o", "--output", type=click.Path(path_type=Path), default=Path("config.yaml")
)
def init_config(output: Path):
    """Generate a sample configuration file."""
    generate_default_config(output)
    console.print(f"[green]Configuration file generated: {output}[/green]")


def _setup_logging(recon_config, verbose: bool) -> None:
    log_config = recon_config.logging
    level = logging.DEBUG if verbose else log_config.level
    log_file = Path(log_config.file) if log_config.file else None
    setup_logging(
        level, log_file=log_file, log_format=log_config.format, console=err_console
    )


if __name__ == "__main__":
    main()
