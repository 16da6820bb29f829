"""
Statistics Module for GP2 to OSP extraction.

Tracks line outcomes, rejection reasons and per-MID output counts
for one extraction run.
"""

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .frame import (
    ChecksumMismatch,
    FrameError,
    LengthMismatch,
    MissingHeader,
    MissingTail,
    TooShortOrTooLong,
)

# Rejection reasons, in pipeline order
OUTSIDE_WINDOW = "outside_window"
MISSING_HEADER = "missing_header"
MISSING_TAIL = "missing_tail"
NO_DATA = "no_data"
LENGTH_MISMATCH = "length_mismatch"
CHECKSUM_MISMATCH = "checksum_mismatch"
UNWANTED_MID = "unwanted_mid"

REJECT_REASONS = (
    OUTSIDE_WINDOW,
    MISSING_HEADER,
    MISSING_TAIL,
    NO_DATA,
    LENGTH_MISMATCH,
    CHECKSUM_MISMATCH,
    UNWANTED_MID,
)

_REASON_BY_ERROR = {
    MissingHeader: MISSING_HEADER,
    MissingTail: MISSING_TAIL,
    TooShortOrTooLong: NO_DATA,
    LengthMismatch: LENGTH_MISMATCH,
    ChecksumMismatch: CHECKSUM_MISMATCH,
}


def reason_for_error(error: FrameError) -> str:
    """Map a frame error to its rejection reason."""
    return _REASON_BY_ERROR[type(error)]


@dataclass
class MIDStats:
    """Counters for a single MID."""
    mid: int
    written: int = 0
    skipped: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'mid': self.mid,
            'written': self.written,
            'skipped': self.skipped,
        }


@dataclass
class ExtractionStats:
    """
    Statistics for one extraction run.
    """
    start_time: Optional[float] = None
    end_time: Optional[float] = None

    lines_read: int = 0
    frames_written: int = 0
    write_failures: int = 0

    rejected: Dict[str, int] = field(
        default_factory=lambda: {reason: 0 for reason in REJECT_REASONS}
    )
    mid_stats: Dict[int, MIDStats] = field(default_factory=dict)

    def reset(self) -> None:
        """Clear all counters."""
        self.lines_read = 0
        self.frames_written = 0
        self.write_failures = 0
        self.rejected = {reason: 0 for reason in REJECT_REASONS}
        self.mid_stats = {}

    def start(self) -> None:
        """Clear counters and mark run start time."""
        self.reset()
        self.start_time = time.time()
        self.end_time = None

    def stop(self) -> None:
        """Mark run end time."""
        self.end_time = time.time()

    def record_line(self) -> None:
        self.lines_read += 1

    def record_rejected(self, reason: str) -> None:
        """Record a line dropped for the given reason."""
        self.rejected[reason] += 1

    def record_written(self, mid: int) -> None:
        """Record a frame written to the output."""
        self.frames_written += 1
        self._mid(mid).written += 1

    def record_skipped(self, mid: int) -> None:
        """Record a valid frame whose MID is not wanted."""
        self.rejected[UNWANTED_MID] += 1
        self._mid(mid).skipped += 1

    def record_write_failure(self) -> None:
        self.write_failures += 1

    def _mid(self, mid: int) -> MIDStats:
        if mid not in self.mid_stats:
            self.mid_stats[mid] = MIDStats(mid=mid)
        return self.mid_stats[mid]

    @property
    def total_rejected(self) -> int:
        return sum(self.rejected.values())

    def get_elapsed(self) -> float:
        """Get run duration in seconds."""
        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else time.time()
        return end - self.start_time

    def get_summary(self) -> dict:
        """
        Get summary statistics.

        Returns:
            Dictionary of statistics
        """
        elapsed = self.get_elapsed()
        line_rate = self.lines_read / elapsed if elapsed > 0 else 0

        summary = {
            'elapsed_seconds': round(elapsed, 1),
            'lines_read': self.lines_read,
            'lines_per_second': round(line_rate, 2),
            'frames_written': self.frames_written,
            'total_rejected': self.total_rejected,
            'write_failures': self.write_failures,
            'mid_count': len(self.mid_stats),
        }
        summary.update(self.rejected)
        return summary

    def get_mid_summary(self) -> List[dict]:
        """Get per-MID statistics sorted by MID."""
        return [stats.to_dict() for stats in sorted(
            self.mid_stats.values(), key=lambda s: s.mid
        )]

    def format_report(self) -> str:
        """
        Format a human-readable statistics report.

        Returns:
            Formatted report string
        """
        summary = self.get_summary()
        lines = []
        lines.append("=" * 50)
        lines.append("GP2 to OSP Extraction Report")
        lines.append("=" * 50)
        lines.append(f"Elapsed: {summary['elapsed_seconds']:.1f} seconds")
        lines.append(f"Lines read:         {summary['lines_read']}")
        lines.append(f"Frames written:     {summary['frames_written']}")
        lines.append(f"Lines rejected:     {summary['total_rejected']}")
        for reason in REJECT_REASONS:
            label = reason.replace('_', ' ').capitalize() + ":"
            lines.append(f"  {label:<18}{self.rejected[reason]}")
        if self.write_failures:
            lines.append(f"Write failures:     {self.write_failures}")
        lines.append("")

        mid_stats = self.get_mid_summary()
        if mid_stats:
            lines.append("Per-MID Statistics:")
            for mid in mid_stats:
                lines.append(
                    f"  MID {mid['mid']:3d}: {mid['written']} written, "
                    f"{mid['skipped']} skipped"
                )

        lines.append("=" * 50)
        return "\n".join(lines)
