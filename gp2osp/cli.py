#!/usr/bin/env python3
"""
Command Line Interface for GP2 to OSP extraction.
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import ExtractorConfig, load_config_from_args
from .logging_config import get_log_level, setup_logging
from .pipeline import ExtractionPipeline
from .stats import ExtractionStats
from .timestamp import InvalidWindow
from .whitelist import WhitelistError
from .writer import FrameWriter

# Exit codes
EXIT_OK = 0
EXIT_ARGS = 1
EXIT_INPUT = 2
EXIT_OUTPUT = 3
EXIT_WRITE = 4

_DEFAULTS = ExtractorConfig()


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="gp2osp",
        description="Generates an OSP file from a GP2 debug file containing SiRF IV receiver messages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Defaults: SLCLog.GP2 -> DATA.OSP, RINEX MIDs, 2014-2020
  gp2osp

  # All messages from one afternoon
  gp2osp -i SLCLog.GP2 -o day.OSP -d 29/10/2014 -t 12:00:00 -D 29/10/2014 -T 18:00:00 -w ALL

  # RINEX MIDs plus MID 41 and 66, with a summary table
  gp2osp -w RINEX,41,66 --summary
"""
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    # File options
    file_group = parser.add_argument_group("File Options")
    file_group.add_argument(
        "--infile", "-i",
        default=_DEFAULTS.in_file,
        help=f"GP2 input file (default: {_DEFAULTS.in_file})"
    )
    file_group.add_argument(
        "--outfile", "-o",
        default=_DEFAULTS.out_file,
        help=f"OSP binary output file (default: {_DEFAULTS.out_file})"
    )

    # Time window options
    window_group = parser.add_argument_group("Time Window Options")
    window_group.add_argument(
        "--fromdate", "-d",
        default=_DEFAULTS.from_date,
        help=f"From date dd/mm/yyyy (default: {_DEFAULTS.from_date})"
    )
    window_group.add_argument(
        "--fromtime", "-t",
        default=_DEFAULTS.from_time,
        help=f"From time hh:mm:ss (default: {_DEFAULTS.from_time})"
    )
    window_group.add_argument(
        "--todate", "-D",
        default=_DEFAULTS.to_date,
        help=f"To date dd/mm/yyyy (default: {_DEFAULTS.to_date})"
    )
    window_group.add_argument(
        "--totime", "-T",
        default=_DEFAULTS.to_time,
        help=f"To time hh:mm:ss (default: {_DEFAULTS.to_time})"
    )

    # Message filter options
    msg_group = parser.add_argument_group("Message Options")
    msg_group.add_argument(
        "--wmsg", "-w",
        default=_DEFAULTS.wanted_mids,
        help="Wanted message MIDs: a comma separated list, ALL, RINEX, or RINEX,list "
             f"(default: {_DEFAULTS.wanted_mids})"
    )

    # Logging options
    log_group = parser.add_argument_group("Logging Options")
    log_group.add_argument(
        "--log-level", "-l",
        choices=["trace", "debug", "info", "warn", "error"],
        default=_DEFAULTS.log_level,
        help=f"Log level (default: {_DEFAULTS.log_level})"
    )
    log_group.add_argument(
        "--log-file",
        default=None,
        help="Log output file (default: stdout)"
    )
    log_group.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet mode - no console logging"
    )

    # Display options
    display_group = parser.add_argument_group("Display Options")
    display_group.add_argument(
        "--summary",
        action="store_true",
        help="Print a summary table when extraction ends"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the extractor.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    config = load_config_from_args(args)

    setup_logging(
        level=get_log_level(config.log_level),
        verbose=(config.log_level in ("trace", "debug")),
        log_file=config.log_file,
        quiet=config.quiet,
    )
    logger = logging.getLogger('gp2osp')

    logger.info(f"GP2 to OSP v{__version__} START")
    logger.info(config.describe())

    try:
        whitelist = config.whitelist()
    except WhitelistError as e:
        logger.critical(f"Incorrect wanted MID option: {e}")
        return EXIT_ARGS
    logger.info(f"MID messages to OSP: {whitelist.describe()}")

    try:
        window = config.window()
    except InvalidWindow as e:
        logger.critical(str(e))
        return EXIT_ARGS

    try:
        in_file = open(config.in_file, 'r', encoding='utf-8', errors='replace')
    except OSError as e:
        logger.critical(f"Cannot open input file {config.in_file}: {e}")
        return EXIT_INPUT

    with in_file:
        try:
            out_file = open(config.out_file, 'wb')
        except OSError as e:
            logger.critical(f"Cannot create output file {config.out_file}: {e}")
            return EXIT_OUTPUT

        stats = ExtractionStats()
        pipeline = ExtractionPipeline(window, whitelist, FrameWriter(out_file), stats)
        read_error = None
        try:
            # Sink errors surface as WriteFailure inside the run
            result = pipeline.run(in_file)
        except OSError as e:
            read_error = e

        try:
            out_file.close()
        except OSError as e:
            # Buffered data that could not be flushed on close
            logger.critical(f"Cannot write to binary output file {config.out_file}: {e}")
            return EXIT_WRITE

    if read_error is not None:
        logger.critical(f"Cannot read input file {config.in_file}: {read_error}")
        return EXIT_INPUT

    logger.info(f"End of data extraction. Messages extracted: {result.count}")

    if config.summary:
        from .report import print_summary
        print_summary(stats, fatal=result.fatal)

    if result.fatal:
        return EXIT_WRITE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
