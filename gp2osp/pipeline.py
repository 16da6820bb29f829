"""
GP2 to OSP extraction pipeline.

Processes GP2 lines one at a time: extract the frame, filter by time
window, validate, filter by MID and write. Per-line failures skip the
line; a write failure stops the run.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from .frame import FrameError, extract_frame, validate_frame
from .logging_config import TRACE
from .stats import OUTSIDE_WINDOW, ExtractionStats, reason_for_error
from .timestamp import TIME_TAG_LENGTH, TimeWindow
from .whitelist import MIDWhitelist
from .writer import FrameWriter, WriteFailure

logger = logging.getLogger(__name__)

# Fatal results are reported as -(frames written) + FATAL_COUNT_BASE
FATAL_COUNT_BASE = -4


class PipelineState(Enum):
    """Extraction pipeline state."""
    READING = "reading"
    DONE = "done"
    FATAL = "fatal"


@dataclass
class ExtractionResult:
    """Outcome of one extraction run."""
    frames_written: int
    state: PipelineState
    error: Optional[WriteFailure] = None
    stats: ExtractionStats = field(default_factory=ExtractionStats)

    @property
    def fatal(self) -> bool:
        return self.state is PipelineState.FATAL

    @property
    def count(self) -> int:
        """
        Signed message count.

        Non-negative on success. On a fatal write failure it is
        ``-frames_written - 4``.
        """
        if self.fatal:
            return -self.frames_written + FATAL_COUNT_BASE
        return self.frames_written


class ExtractionPipeline:
    """
    Extracts wanted OSP messages from GP2 lines into an OSP output.
    """

    def __init__(self, window: TimeWindow, whitelist: MIDWhitelist,
                 writer: FrameWriter, stats: Optional[ExtractionStats] = None):
        """
        Initialize pipeline.

        Args:
            window: Time window lines must fall in
            whitelist: Wanted MIDs
            writer: Output frame writer
            stats: Statistics collector (a new one if not given)
        """
        self.window = window
        self.whitelist = whitelist
        self.writer = writer
        self.stats = stats if stats is not None else ExtractionStats()
        self.state = PipelineState.READING

    def process_line(self, line: str) -> bool:
        """
        Run one line through the pipeline.

        Args:
            line: GP2 text line

        Returns:
            True if a frame was written

        Raises:
            WriteFailure: If the output rejects the frame
        """
        self.stats.record_line()

        try:
            raw = extract_frame(line)
        except FrameError as e:
            logger.warning(f"{line[:TIME_TAG_LENGTH]} {e}")
            self.stats.record_rejected(reason_for_error(e))
            return False

        time_tag = raw.time_tag
        if not self.window.contains_tag(time_tag):
            logger.log(TRACE, f"{time_tag} Time tag outside interval")
            self.stats.record_rejected(OUTSIDE_WINDOW)
            return False

        try:
            frame = validate_frame(raw.data)
        except FrameError as e:
            logger.warning(f"{time_tag} {e}")
            self.stats.record_rejected(reason_for_error(e))
            return False

        if not self.whitelist.is_wanted(frame.mid):
            logger.log(TRACE, f"{time_tag} skipped MID {frame.mid}")
            self.stats.record_skipped(frame.mid)
            return False

        self.writer.write(frame)
        self.stats.record_written(frame.mid)
        logger.debug(f"{time_tag} written MID {frame.mid}")
        return True

    def run(self, lines: Iterable[str]) -> ExtractionResult:
        """
        Process all lines, stopping on the first write failure.

        Args:
            lines: GP2 lines, consumed once front to back

        Returns:
            ExtractionResult with the frames written and final state
        """
        self.state = PipelineState.READING
        self.stats.start()
        error = None
        written = 0

        try:
            for line in lines:
                try:
                    if self.process_line(line):
                        written += 1
                except WriteFailure as e:
                    logger.critical(str(e))
                    self.stats.record_write_failure()
                    self.state = PipelineState.FATAL
                    error = e
                    break
        finally:
            self.stats.stop()

        if self.state is PipelineState.READING:
            self.state = PipelineState.DONE

        return ExtractionResult(
            frames_written=written,
            state=self.state,
            error=error,
            stats=self.stats,
        )


def extract_messages(lines: Iterable[str], window: TimeWindow,
                     whitelist: MIDWhitelist, writer: FrameWriter) -> int:
    """
    Extract messages and return the signed count.

    Returns:
        Frames written, or ``-frames_written - 4`` after a write failure
    """
    return ExtractionPipeline(window, whitelist, writer).run(lines).count
