"""
Tools module for locating datasets on instrument shares.

Provides the dataset search tool and the name utilities it relies on.

Module structure:
- types.py: SearchOutcome enum, DatasetInfo and SearchResult dataclasses
- naming.py: Stem/extension splitting, invalid character replacement
- search.py: DatasetFileSearchTool class for finding dataset files and directories
- fixer.py: Renaming of items with invalid characters in a dataset directory
"""

# Re-export fixer
from .fixer import auto_fix_directory, find_auto_fix_candidates

# Re-export naming functions
from .naming import (
    DEFAULT_FILENAME_AUTO_FIXES,
    auto_fix_filename,
    replace_invalid_chars,
    split_stem_and_extension,
    verify_relative_source_path,
)

# Re-export search tool
from .search import DatasetFileSearchTool
from .types import (
    DatasetInfo,
    EventSink,
    RenameAction,
    SearchOutcome,
    SearchResult,
    SourcePath,
)

__all__ = [
    # Types
    "SearchOutcome",
    "DatasetInfo",
    "SearchResult",
    "SourcePath",
    "RenameAction",
    "EventSink",
    # Naming functions
    "DEFAULT_FILENAME_AUTO_FIXES",
    "split_stem_and_extension",
    "replace_invalid_chars",
    "auto_fix_filename",
    "verify_relative_source_path",
    # Search
    "DatasetFileSearchTool",
    # Fixer
    "find_auto_fix_candidates",
    "auto_fix_directory",
]
