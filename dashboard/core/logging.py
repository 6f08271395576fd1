"""
Logging utilities for the dashboard API.

Provides a consistent logging format and configuration.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """Configure root logging, optionally mirroring records to a file."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        handlers=handlers,
    )


__all__ = ["LOG_FORMAT", "configure_logging"]
