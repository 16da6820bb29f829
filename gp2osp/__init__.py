"""
GP2 to OSP Extraction Package.

Extracts SiRF IV OSP receiver messages from GP2 debug log files into
OSP binary files.
"""

__version__ = "1.2.0"
__author__ = "Sierra Telecom"

from .frame import OSPFrame, RawFrame, extract_frame, validate_frame
from .pipeline import ExtractionPipeline, ExtractionResult, PipelineState
from .timestamp import TimeWindow, build_window, parse_timestamp
from .whitelist import MIDWhitelist, build_whitelist
from .writer import FrameWriter, iter_osp_records

__all__ = [
    "OSPFrame",
    "RawFrame",
    "extract_frame",
    "validate_frame",
    "ExtractionPipeline",
    "ExtractionResult",
    "PipelineState",
    "TimeWindow",
    "build_window",
    "parse_timestamp",
    "MIDWhitelist",
    "build_whitelist",
    "FrameWriter",
    "iter_osp_records",
]
