"""
Dataset search tool for locating raw instrument data.

Provides the DatasetFileSearchTool class, which determines whether a
dataset exists on an instrument share as a single file, several files,
or a directory (with or without an extension).
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Optional, Union

from capture.enums import InstrumentClass, InstrumentFileLayout
from capture.instruments import directory_layout_for, prefers_files, resolve_instrument_class

from .naming import (
    DEFAULT_FILENAME_AUTO_FIXES,
    auto_fix_filename,
    names_match,
    replace_invalid_chars,
    split_stem_and_extension,
    validate_auto_fixes,
    verify_relative_source_path,
)
from .types import DatasetInfo, EventSink, SearchOutcome, SearchResult, SourcePath

logger = logging.getLogger(__name__)

# Maximum number of names listed in warning and status messages
MAX_NAMES_TO_REPORT = 5

REALTIME_SEARCH_SUFFIXES = ("_realtimesearch.tsv", "_realtimelibsearch.tsv")


class DatasetFileSearchTool:
    """
    Locate a dataset's file or directory in a source directory.

    The search runs up to four passes and stops at the first match:
    1. Files named after the dataset (any extension)
    2. Files whose name matches after replacing invalid characters
    3. Directories named after the dataset (extension ignored)
    4. Directories whose name matches after replacing invalid characters

    When directories are preferred, passes 3-4 run before passes 1-2.

    Example:
        tool = DatasetFileSearchTool()
        info = tool.find_dataset_file_or_directory(
            "/mnt/instrument/ProteomicsData", "QC_Mam_19_01", "LTQ_FT"
        )

        if info.found:
            print(f"{info.dataset_type.value}: {info.file_or_directory_name}")
    """

    def __init__(
        self,
        trace_mode: bool = False,
        filename_auto_fixes: Optional[Mapping[str, str]] = None,
        events: Optional[EventSink] = None,
    ):
        """
        Initialize the search tool.

        Args:
            trace_mode: Report progress of each search pass at debug level
            filename_auto_fixes: Characters to replace when comparing names
                (defaults to space, percent sign and period)
            events: Receiver for diagnostics (defaults to this module's logger)
        """
        self.trace_mode = trace_mode
        self.events = events if events is not None else logger

        if filename_auto_fixes is None:
            self._filename_auto_fixes = DEFAULT_FILENAME_AUTO_FIXES
        else:
            self._filename_auto_fixes = validate_auto_fixes(filename_auto_fixes)

    @property
    def filename_auto_fixes(self) -> Mapping[str, str]:
        """Characters replaced when matching names, mapped to their replacements."""
        return self._filename_auto_fixes

    def auto_fix_filename(
        self,
        dataset_name: str,
        file_name: str,
        chars_to_find: Optional[Mapping[str, str]] = None,
    ) -> str:
        """
        Replace invalid characters in a filename if that makes it match the dataset.

        Args:
            dataset_name: Dataset name
            file_name: File or directory name
            chars_to_find: Characters to replace (defaults to `filename_auto_fixes`)

        Returns:
            The updated name on a match, otherwise the original name
        """
        if chars_to_find is None:
            chars_to_find = self._filename_auto_fixes
        return auto_fix_filename(dataset_name, file_name, chars_to_find)

    def find_dataset_file(
        self,
        source_directory: Union[str, Path],
        dataset_name: str,
    ) -> DatasetInfo:
        """
        Look for the dataset file in the source directory.

        Directories are searched too, but a directory match is reported as
        not found since callers of this method need a file.

        Args:
            source_directory: Directory to search
            dataset_name: Dataset name

        Returns:
            DatasetInfo for the matched file(s)
        """
        result = self.search(source_directory, dataset_name, check_for_files_first=True)

        if result.matched_directory:
            result.info.clear()

        return result.info

    def find_dataset_file_or_directory(
        self,
        source_directory: Union[str, Path],
        dataset_name: str,
        instrument_class: Union[InstrumentClass, str, None],
    ) -> DatasetInfo:
        """
        Determine if the dataset exists as a file, several files, or a directory.

        Directory-based instruments (imaging, IMS, Waters QTOF) are searched
        for a directory first; all others for a file first. A matched
        directory is reported with the instrument-specific layout where
        one exists.

        Args:
            source_directory: Directory on the instrument share
            dataset_name: Dataset name
            instrument_class: Instrument class (enum member or name)

        Returns:
            DatasetInfo for the matched file(s) or directory
        """
        instrument_class = resolve_instrument_class(instrument_class)
        check_for_files_first = prefers_files(instrument_class)

        result = self.search(source_directory, dataset_name, check_for_files_first)

        if result.outcome == SearchOutcome.FOUND_DIRECTORY:
            result.info.dataset_type = directory_layout_for(
                instrument_class, result.info.dataset_type
            )

        return result.info

    def search(
        self,
        source_directory: Union[str, Path],
        dataset_name: str,
        check_for_files_first: bool = True,
    ) -> SearchResult:
        """
        Search a directory for a dataset file or directory.

        Exact names are tried before names with invalid characters replaced,
        and both file passes run before both directory passes (or the other
        way around when `check_for_files_first` is False).

        Args:
            source_directory: Directory to search
            dataset_name: Dataset name
            check_for_files_first: Look for files before directories

        Returns:
            SearchResult with the outcome and the populated DatasetInfo

        Raises:
            OSError: If the directory cannot be listed
        """
        info = DatasetInfo(dataset_name=dataset_name)
        directory = Path(source_directory)

        if not directory.is_dir():
            self.events.error(f"Source directory not found: [{directory.absolute()}]")
            return SearchResult(
                outcome=SearchOutcome.NOT_FOUND,
                info=info,
                matched_directory=False,
            )

        look_for_dataset_file = check_for_files_first

        for iteration in range(1, 5):
            if iteration == 3:
                # Switch from files to directories (or vice versa)
                look_for_dataset_file = not look_for_dataset_file

            replace_invalid_characters = iteration % 2 == 0

            if look_for_dataset_file:
                self._trace(
                    f"Looking for a dataset file, "
                    f"replace_invalid_characters is {replace_invalid_characters}"
                )

                found_files = self._find_files(directory, dataset_name, replace_invalid_characters)
                if not found_files:
                    continue

                info.file_list.extend(found_files)

                if info.file_count == 1:
                    info.file_or_directory_name = found_files[0].name
                    info.dataset_type = InstrumentFileLayout.FILE
                    outcome = SearchOutcome.FOUND_FILE
                    self._add_related_files(directory, info)
                else:
                    info.file_or_directory_name = dataset_name
                    info.dataset_type = InstrumentFileLayout.MULTI_FILE
                    outcome = SearchOutcome.FOUND_MULTIPLE_FILES
                    names = ", ".join(f.name for f in found_files[:MAX_NAMES_TO_REPORT])
                    self.events.warning(
                        f"Dataset name matched multiple files for iteration {iteration} "
                        f"in directory {directory.absolute()}: {names}"
                    )

                self._trace(
                    f"Matched file {info.file_or_directory_name}; "
                    f"dataset type = {info.dataset_type.value}"
                )
                return SearchResult(outcome=outcome, info=info, matched_directory=False)

            self._trace(
                f"Looking for a dataset directory, "
                f"replace_invalid_characters is {replace_invalid_characters}"
            )

            subdirectory = self._find_directory(directory, dataset_name, replace_invalid_characters)
            if subdirectory is None:
                continue

            _, extension = split_stem_and_extension(subdirectory.name)
            info.file_or_directory_name = subdirectory.name
            if extension:
                info.dataset_type = InstrumentFileLayout.DIRECTORY_EXT
            else:
                info.dataset_type = InstrumentFileLayout.DIRECTORY_NO_EXT

            self._trace(
                f"Matched directory {info.file_or_directory_name}; "
                f"dataset type = {info.dataset_type.value}"
            )

            if check_for_files_first:
                self.events.info(
                    f"Dataset name did not match a file, but it did match directory "
                    f"{info.file_or_directory_name}, dataset type is {info.dataset_type.value}"
                )

            return SearchResult(
                outcome=SearchOutcome.FOUND_DIRECTORY,
                info=info,
                matched_directory=True,
            )

        # Neither a file nor a directory matched; matched_directory stays True
        # for compatibility with existing callers
        return SearchResult(
            outcome=SearchOutcome.NOT_FOUND,
            info=info,
            matched_directory=True,
        )

    def verify_relative_source_path(
        self,
        source_vol: str,
        source_path: str,
        capture_subdirectory: str,
    ) -> SourcePath:
        """
        Fold a capture subdirectory starting with ".." into the source path.

        See `capture.tools.naming.verify_relative_source_path`.

        Returns:
            SourcePath with `updated` set when the paths changed
        """
        result = verify_relative_source_path(source_vol, source_path, capture_subdirectory)

        if result.updated:
            self.events.info(
                f"Updating Share Path, Old: '{source_vol}' '{source_path}' '{capture_subdirectory}'"
            )
            self.events.info(
                f"Updating Share Path, New: '{result.source_vol}' "
                f"'{result.source_path}' '{result.capture_subdirectory}'"
            )

        return result

    def _find_files(
        self,
        directory: Path,
        dataset_name: str,
        replace_invalid_characters: bool,
    ) -> list[Path]:
        """Get the files in `directory` whose name matches the dataset."""
        found = []

        for candidate in _list_files(directory):
            if replace_invalid_characters:
                stem, _ = split_stem_and_extension(candidate.name)
                updated_name = replace_invalid_chars(stem, self._filename_auto_fixes)
                if names_match(updated_name, dataset_name):
                    found.append(candidate)
            elif _matches_dataset_wildcard(candidate.name, dataset_name):
                found.append(candidate)

        return found

    def _find_directory(
        self,
        directory: Path,
        dataset_name: str,
        replace_invalid_characters: bool,
    ) -> Optional[Path]:
        """Get the first subdirectory whose name (minus extension) matches the dataset."""
        for subdirectory in _list_directories(directory):
            name_to_check, _ = split_stem_and_extension(subdirectory.name)

            if replace_invalid_characters:
                name_to_check = replace_invalid_chars(name_to_check, self._filename_auto_fixes)

            if names_match(name_to_check, dataset_name):
                return subdirectory

        return None

    def _add_related_files(self, directory: Path, info: DatasetInfo) -> None:
        """Record realtime search result files stored beside a dataset file."""
        stem, _ = split_stem_and_extension(info.file_or_directory_name)
        prefix = f"{stem}_".casefold()

        for suffix in REALTIME_SEARCH_SUFFIXES:
            for candidate in _list_files(directory):
                name = candidate.name.casefold()
                if (
                    name.startswith(prefix)
                    and name.endswith(suffix)
                    and len(name) >= len(prefix) + len(suffix)
                ):
                    info.related_files.append(candidate)

        if info.related_files:
            names = ", ".join(f.name for f in info.related_files[:MAX_NAMES_TO_REPORT])
            self.events.info(
                f"Dataset has realtime search files in directory {directory.absolute()}: {names}"
            )

    def _trace(self, message: str) -> None:
        if self.trace_mode:
            self.events.debug(message)


def _list_files(directory: Path) -> list[Path]:
    return sorted((p for p in directory.iterdir() if p.is_file()), key=lambda p: p.name)


def _list_directories(directory: Path) -> list[Path]:
    return sorted((p for p in directory.iterdir() if p.is_dir()), key=lambda p: p.name)


def _matches_dataset_wildcard(file_name: str, dataset_name: str) -> bool:
    """
    Check if a filename matches the wildcard "<dataset_name>.*", ignoring case.

    As with Windows wildcards, a file named exactly after the dataset (no
    extension) also matches.
    """
    if not names_match(file_name[: len(dataset_name)], dataset_name):
        return False
    remainder = file_name[len(dataset_name):]
    return remainder == "" or remainder.startswith(".")
