"""CLI interface for period_agg using Typer."""

import time
from typing import Optional

import polars as pl
import typer

from period_agg import config
from period_agg.core.aggregator import PeriodAggregator
from period_agg.core.errors import InvalidArgument
from period_agg.utils.logging import get_logger, log_operation, setup_logging

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="period-agg - Count records per week, month or quarter",
)

# Set up logging on module import
setup_logging(config.LOG_LEVEL, config.STRUCTURED_LOGS)
logger = get_logger("cli")


def _aggregator(
    date_col: str,
    period: str,
    week_start: str,
    date_type: str,
    group: Optional[list[str]],
) -> PeriodAggregator:
    return PeriodAggregator(
        date_col,
        period=period,
        week_start=week_start,
        date_representation=date_type,
        group_columns=group,
    )


@app.command()
def count(
    path: str = typer.Argument(..., help="Path to a .parquet or .csv file"),
    date_col: str = typer.Option(..., "--date-col", help="Name of the date column"),
    period: str = typer.Option(
        config.DEFAULT_PERIOD, "--period", help="Aggregation period: week, month or quarter"
    ),
    week_start: str = typer.Option(
        config.DEFAULT_WEEK_START, "--week-start", help="First day of week: monday or sunday"
    ),
    date_type: str = typer.Option(
        config.DEFAULT_DATE_TYPE, "--date-type", help="Date column type: string or timestamp"
    ),
    group: Optional[list[str]] = typer.Option(
        None, "--group", "-g", help="Extra column to group by (repeatable)"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show the query plan without executing"),
    export: Optional[str] = typer.Option(
        None,
        "--export",
        help="Export results to JSON file (use 'auto' for artifacts/outputs/{run_id}.json)",
    ),
) -> None:
    """Count records per period in a local file."""
    from period_agg.ingest.loader import load_dataset

    try:
        aggregator = _aggregator(date_col, period, week_start, date_type, group)
        lf = aggregator.build(load_dataset(path))

        if dry_run:
            typer.echo(f"Plan hash: {aggregator.request.plan_hash()}")
            typer.echo(lf.explain())
            return

        t0 = time.perf_counter()
        df = lf.collect()
        log_operation(
            logger,
            "collect",
            duration_ms=(time.perf_counter() - t0) * 1000,
            path=path,
            rows=df.height,
        )

        with pl.Config(tbl_rows=-1):
            typer.echo(str(df))

        if export:
            from period_agg.core.export import export_results

            export_path = None if export == "auto" else export
            written = export_results(aggregator.request, df, export_path=export_path)
            typer.echo(f"Results exported to: {written}")

    except (InvalidArgument, FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    except Exception as e:
        typer.echo(f"Unexpected error: {e}", err=True)
        logger.error("Count command failed", exc_info=True)
        raise typer.Exit(1) from e


@app.command()
def sql(
    table: str = typer.Argument(..., help="Table reference, e.g. project.dataset.table"),
    date_col: str = typer.Option(..., "--date-col", help="Name of the date column"),
    period: str = typer.Option(
        config.DEFAULT_PERIOD, "--period", help="Aggregation period: week, month or quarter"
    ),
    week_start: str = typer.Option(
        config.DEFAULT_WEEK_START, "--week-start", help="First day of week: monday or sunday"
    ),
    date_type: str = typer.Option(
        config.DEFAULT_DATE_TYPE, "--date-type", help="Date column type: string or timestamp"
    ),
    group: Optional[list[str]] = typer.Option(
        None, "--group", "-g", help="Extra column to group by (repeatable)"
    ),
) -> None:
    """Print the BigQuery SQL for a count-by-period query."""
    from period_agg.core.sql import render_sql

    try:
        aggregator = _aggregator(date_col, period, week_start, date_type, group)
        typer.echo(render_sql(aggregator.request, table))
    except InvalidArgument as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e


if __name__ == "__main__":
    app()
