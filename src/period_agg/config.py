"""Configuration and path management for period_agg."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Base paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
ARTIFACTS_DIR = Path(os.getenv("PERIOD_AGG_ARTIFACTS_DIR", str(PROJECT_ROOT / "artifacts")))

# Logging
LOG_LEVEL = os.getenv("PERIOD_AGG_LOG_LEVEL", "WARNING")
STRUCTURED_LOGS = os.getenv("PERIOD_AGG_STRUCTURED_LOGS", "1").lower() not in ("0", "false", "no")

# CLI defaults
DEFAULT_PERIOD = os.getenv("PERIOD_AGG_DEFAULT_PERIOD", "week")
DEFAULT_WEEK_START = os.getenv("PERIOD_AGG_DEFAULT_WEEK_START", "monday")
DEFAULT_DATE_TYPE = os.getenv("PERIOD_AGG_DEFAULT_DATE_TYPE", "string")


def get_artifacts_dir() -> Path:
    """Get artifacts directory, creating if needed."""
    ARTIFACTS_DIR.mkdir(parents=True, exist_ok=True)
    return ARTIFACTS_DIR
