"""Export materialized aggregation results."""

import uuid
from datetime import datetime
from pathlib import Path

import orjson
import polars as pl

from period_agg.config import get_artifacts_dir
from period_agg.core.request_schema import AggregationRequest


def generate_run_id() -> str:
    """Generate a unique run ID for the export."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    short_uuid = str(uuid.uuid4())[:8]
    return f"{timestamp}_{short_uuid}"


def export_results(
    request: AggregationRequest,
    table: pl.DataFrame,
    run_id: str | None = None,
    export_path: str | None = None,
) -> str:
    """Write collected results and the request that produced them to JSON.

    Args:
        request: The aggregation request
        table: Collected result rows
        run_id: Optional run ID, generated if not provided
        export_path: Optional target path, defaults to artifacts/outputs/{run_id}.json

    Returns:
        Path to the exported file
    """
    if run_id is None:
        run_id = generate_run_id()

    if export_path is None:
        outputs_dir = get_artifacts_dir() / "outputs"
        outputs_dir.mkdir(parents=True, exist_ok=True)
        export_path = str(outputs_dir / f"{run_id}.json")

    export_data = {
        "run_id": run_id,
        "timestamp": datetime.now().isoformat(),
        "request": request.model_dump(mode="json"),
        "plan_hash": request.plan_hash(),
        "rows": table.to_dicts(),
        "metadata": {
            "rows_returned": table.height,
            "columns": table.columns,
        },
    }

    Path(export_path).write_bytes(
        orjson.dumps(export_data, default=str, option=orjson.OPT_INDENT_2)
    )
    return export_path
