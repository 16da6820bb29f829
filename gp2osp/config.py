"""
Configuration dataclass for GP2 to OSP extraction.
"""

from dataclasses import dataclass
from typing import Optional

from .timestamp import TimeWindow, build_window
from .whitelist import MIDWhitelist, build_whitelist


@dataclass
class ExtractorConfig:
    """
    Configuration for one extraction run.

    Attributes:
        in_file: GP2 input file path
        out_file: OSP binary output file path
        from_date: Window start date (dd/mm/yyyy)
        from_time: Window start time (hh:mm:ss)
        to_date: Window end date (dd/mm/yyyy)
        to_time: Window end time (hh:mm:ss)
        wanted_mids: Wanted MIDs (ALL, RINEX, RINEX,list or list)
        log_level: Logging level name
        log_file: Log output file path (None = stdout only)
        quiet: Suppress console logging
        summary: Print a summary table at the end
    """
    # Files
    in_file: str = "SLCLog.GP2"
    out_file: str = "DATA.OSP"

    # Time window
    from_date: str = "01/01/2014"
    from_time: str = "00:00:00"
    to_date: str = "31/12/2020"
    to_time: str = "23:59:59"

    # MID filter
    wanted_mids: str = "RINEX"

    # Logging
    log_level: str = "info"
    log_file: Optional[str] = None
    quiet: bool = False

    # Reporting
    summary: bool = False

    def window(self) -> TimeWindow:
        """
        Resolve the time window.

        Raises:
            InvalidWindow: If a boundary is unparsable or start > end
        """
        return build_window(self.from_date, self.from_time, self.to_date, self.to_time)

    def whitelist(self) -> MIDWhitelist:
        """
        Build the wanted MID list.

        Raises:
            WhitelistError: If the MID list is invalid
        """
        return build_whitelist(self.wanted_mids)

    def describe(self) -> str:
        """One-line description of the effective options."""
        return (
            f"infile={self.in_file} outfile={self.out_file} "
            f"from={self.from_date} {self.from_time} "
            f"to={self.to_date} {self.to_time} wmsg={self.wanted_mids}"
        )


def load_config_from_args(args) -> ExtractorConfig:
    """
    Create ExtractorConfig from parsed command line arguments.

    Args:
        args: Parsed argparse namespace

    Returns:
        ExtractorConfig instance
    """
    return ExtractorConfig(
        in_file=args.infile,
        out_file=args.outfile,
        from_date=args.fromdate,
        from_time=args.fromtime,
        to_date=args.todate,
        to_time=args.totime,
        wanted_mids=args.wmsg,
        log_level=args.log_level,
        log_file=args.log_file,
        quiet=getattr(args, 'quiet', False),
        summary=getattr(args, 'summary', False),
    )
