"""Configuration from environment variables."""

import logging
import os
from typing import Optional

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_LEVEL = os.environ.get("PDF_TOOLS_LOG_LEVEL", "INFO")

# API result retention
RESULT_TTL_MINUTES = float(os.environ.get("RESULT_TTL_MINUTES", "10"))  # Delete results after 10 minutes
DOWNLOAD_TTL_MINUTES = float(os.environ.get("DOWNLOAD_TTL_MINUTES", "5"))  # Delete results 5 minutes after download
CLEANUP_INTERVAL_SECONDS = float(os.environ.get("CLEANUP_INTERVAL_SECONDS", "15"))  # How often to run the cleanup task

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))


def resolve_log_level(name: Optional[str]) -> int:
    """Map a level name to its logging constant. Unknown names raise ValueError."""
    name = (name or LOG_LEVEL).upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level {name!r}, expected one of {', '.join(LOG_LEVELS)}")
    return getattr(logging, name)


def configure_logging(level: Optional[str] = None) -> None:
    """Set up root logging for the command line and API entry points."""
    logging.basicConfig(
        level=resolve_log_level(level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
