"""
Instrument-specific lookup tables.

Each instrument class has its own conventions for:
- Whether raw data is written as a file or a directory
- How a matched directory should be reported (e.g. Bruker imaging)
- The raw data format name stored in the database

This module provides the tables and name conversions used by the
dataset search tool.
"""

from .base import (
    DIRECTORY_LAYOUT_OVERRIDES,
    DIRECTORY_PREFERRED_CLASSES,
    directory_layout_for,
    get_instrument_class,
    get_instrument_class_name,
    prefers_files,
    resolve_instrument_class,
)
from .formats import get_data_format, get_data_format_name

__all__ = [
    "DIRECTORY_PREFERRED_CLASSES",
    "DIRECTORY_LAYOUT_OVERRIDES",
    "directory_layout_for",
    "get_instrument_class",
    "get_instrument_class_name",
    "prefers_files",
    "resolve_instrument_class",
    "get_data_format",
    "get_data_format_name",
]
