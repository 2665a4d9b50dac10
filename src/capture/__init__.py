"""
Dataset Capture - Locate instrument datasets on capture shares.

This package provides the dataset search tool used by the capture
manager to determine whether a dataset was written as a file, several
files, or a directory, before copying it from the instrument.
"""

__version__ = "0.1.0"

from capture.config import CaptureSettings, CaptureTaskParams
from capture.enums import DataFormat, InstrumentClass, InstrumentFileLayout
from capture.instruments import get_data_format, get_instrument_class
from capture.tools import (
    DatasetFileSearchTool,
    DatasetInfo,
    SearchOutcome,
    SearchResult,
    auto_fix_directory,
    auto_fix_filename,
)

__all__ = [
    # Enums
    "InstrumentClass",
    "InstrumentFileLayout",
    "DataFormat",
    # Instrument lookups
    "get_instrument_class",
    "get_data_format",
    # Search tool
    "DatasetFileSearchTool",
    "DatasetInfo",
    "SearchOutcome",
    "SearchResult",
    "auto_fix_filename",
    "auto_fix_directory",
    # Configuration
    "CaptureSettings",
    "CaptureTaskParams",
]
