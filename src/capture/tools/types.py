"""
Type definitions for dataset searches.

Contains enums and dataclasses describing what a search found.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Protocol

from capture.enums import InstrumentFileLayout


class SearchOutcome(str, Enum):
    """
    Outcome of a dataset search.

    Attributes:
        NOT_FOUND: Nothing matched (or the source directory is missing)
        FOUND_FILE: Exactly one file matched
        FOUND_MULTIPLE_FILES: Several files matched the dataset name
        FOUND_DIRECTORY: A directory matched
    """

    NOT_FOUND = "not_found"
    FOUND_FILE = "found_file"
    FOUND_MULTIPLE_FILES = "found_multiple_files"
    FOUND_DIRECTORY = "found_directory"


@dataclass
class DatasetInfo:
    """
    Information about a dataset located on an instrument share.

    Attributes:
        dataset_name: Dataset name that was searched for
        dataset_type: How the dataset is stored (file, directory, ...)
        file_or_directory_name: Name of the matched file or directory
            (the dataset name for MULTI_FILE, empty when nothing matched)
        file_list: Matched files (one for FILE, several for MULTI_FILE)
        related_files: Realtime search results stored beside a single dataset file
    """

    dataset_name: str
    dataset_type: InstrumentFileLayout = InstrumentFileLayout.NONE
    file_or_directory_name: str = ""
    file_list: list[Path] = field(default_factory=list)
    related_files: list[Path] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        """Get the number of matched files."""
        return len(self.file_list)

    @property
    def found(self) -> bool:
        """Check if the dataset was located."""
        return self.dataset_type != InstrumentFileLayout.NONE

    @property
    def is_directory(self) -> bool:
        """Check if the dataset was matched to a directory."""
        return self.dataset_type in (
            InstrumentFileLayout.DIRECTORY_NO_EXT,
            InstrumentFileLayout.DIRECTORY_EXT,
            InstrumentFileLayout.BRUKER_IMAGING,
            InstrumentFileLayout.BRUKER_SPOT,
        )

    def clear(self) -> None:
        """Reset to the not-found state."""
        self.dataset_type = InstrumentFileLayout.NONE
        self.file_or_directory_name = ""
        self.file_list.clear()
        self.related_files.clear()

    def to_dict(self) -> dict:
        """Convert to a dictionary for JSON output."""
        return {
            "dataset_name": self.dataset_name,
            "dataset_type": self.dataset_type.value,
            "file_or_directory_name": self.file_or_directory_name,
            "file_count": self.file_count,
            "files": [p.name for p in self.file_list],
            "related_files": [p.name for p in self.related_files],
        }


@dataclass
class SearchResult:
    """
    Result of the core dataset search.

    `matched_directory` keeps the historical meaning: it is False only when
    a file matched or the source directory is missing, so an exhausted
    search reports True. Use `outcome` to detect a missing dataset.
    """

    outcome: SearchOutcome
    info: DatasetInfo
    matched_directory: bool

    @property
    def found(self) -> bool:
        """Check if anything matched."""
        return self.outcome != SearchOutcome.NOT_FOUND


@dataclass
class SourcePath:
    """
    Source share path for a capture task.

    Attributes:
        source_vol: Share root, e.g. "\\\\lumos01.bionet\\"
        source_path: Share-relative path, e.g. "ProteomicsData\\"
        capture_subdirectory: Optional subdirectory below the source path
        updated: True if relative parent references were folded into source_path
    """

    source_vol: str
    source_path: str
    capture_subdirectory: str = ""
    updated: bool = False


class EventSink(Protocol):
    """
    Receiver for search diagnostics.

    A `logging.Logger` satisfies this protocol, as does any object with
    the same four methods.
    """

    def debug(self, msg: str) -> Any: ...

    def info(self, msg: str) -> Any: ...

    def warning(self, msg: str) -> Any: ...

    def error(self, msg: str) -> Any: ...


@dataclass
class RenameAction:
    """
    A rename performed (or planned) to remove invalid characters.

    Attributes:
        source: Original path
        target: Path with invalid characters replaced
        renamed: True once the rename succeeded
        error: Reason the rename did not happen, if any
    """

    source: Path
    target: Path
    renamed: bool = False
    error: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to a dictionary for JSON output."""
        return {
            "source": str(self.source),
            "target": str(self.target),
            "renamed": self.renamed,
            "error": self.error,
        }
