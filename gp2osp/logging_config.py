"""
Logging Configuration for GP2 to OSP extraction.

Provides logging setup with configurable levels, formats, and outputs,
plus a TRACE level below DEBUG for per-line filtering diagnostics.
"""

import logging
import sys
from typing import Optional


# Finest level, used for lines dropped by the time window or MID filters
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

# Log format strings
VERBOSE_FORMAT = '%(asctime)s.%(msecs)03d [%(levelname)-8s] %(name)s: %(message)s'
STANDARD_FORMAT = '%(asctime)s [%(levelname)-8s] %(message)s'

DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

LOG_LEVELS = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def setup_logging(
    level: int = logging.INFO,
    verbose: bool = False,
    log_file: Optional[str] = None,
    quiet: bool = False,
) -> None:
    """
    Configure logging for the extractor.

    Args:
        level: Base logging level
        verbose: Enable verbose output with timestamps and module names
        log_file: Optional file path for log output
        quiet: Suppress console output (only log to file if specified)
    """
    if verbose:
        log_format = VERBOSE_FORMAT
    else:
        log_format = STANDARD_FORMAT

    formatter = logging.Formatter(log_format, datefmt=DATE_FORMAT)

    # Get root logger for package
    root_logger = logging.getLogger('gp2osp')
    root_logger.setLevel(level)

    # Clear existing handlers
    root_logger.handlers.clear()

    # Console handler
    if not quiet:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    # File handler
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode='a')
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except IOError as e:
            print(f"Warning: Could not open log file {log_file}: {e}", file=sys.stderr)


def get_log_level(name: str) -> int:
    """
    Convert a level name from the command line to a logging level.

    Args:
        name: One of trace, debug, info, warn, error

    Returns:
        Logging level constant (INFO for unknown names)
    """
    return LOG_LEVELS.get(name.lower(), logging.INFO)
