"""
Tests for the dataset search tool.
"""

import logging

import pytest

from capture.enums import InstrumentClass, InstrumentFileLayout
from capture.tools import DatasetFileSearchTool, SearchOutcome

SEARCH_LOGGER = "capture.tools.search"


class RecordingEvents:
    """Event sink that keeps every message."""

    def __init__(self):
        self.events = []

    def debug(self, msg):
        self.events.append(("debug", msg))

    def info(self, msg):
        self.events.append(("info", msg))

    def warning(self, msg):
        self.events.append(("warning", msg))

    def error(self, msg):
        self.events.append(("error", msg))

    def messages(self, level):
        return [msg for lvl, msg in self.events if lvl == level]


@pytest.fixture
def tool():
    return DatasetFileSearchTool()


def touch(directory, *names):
    for name in names:
        (directory / name).write_text("data")


class TestFileSearch:
    """Tests for finding dataset files."""

    def test_exact_match_wins_over_fuzzy_match(self, tool, tmp_path):
        """Test the exact name is found before names with spaces are fixed."""
        touch(tmp_path, "Sample_01.raw", "Sample 01.raw")

        result = tool.search(tmp_path, "Sample_01", check_for_files_first=True)

        assert result.outcome == SearchOutcome.FOUND_FILE
        assert result.info.dataset_type == InstrumentFileLayout.FILE
        assert result.info.file_or_directory_name == "Sample_01.raw"
        assert result.info.file_count == 1
        assert result.matched_directory is False

    def test_character_substitution_enables_match(self, tool, tmp_path):
        """Test a space in the filename is treated as an underscore."""
        touch(tmp_path, "Sample 01.raw")

        result = tool.search(tmp_path, "Sample_01", check_for_files_first=True)

        assert result.outcome == SearchOutcome.FOUND_FILE
        assert result.info.dataset_type == InstrumentFileLayout.FILE
        assert result.info.file_or_directory_name == "Sample 01.raw"
        assert result.info.file_list[0].name == "Sample 01.raw"

    def test_percent_and_period_substitution(self, tool, tmp_path):
        """Test percent signs and periods in the stem are replaced."""
        touch(tmp_path, "Lipid_5%_0.5mg.raw")

        info = tool.find_dataset_file(tmp_path, "Lipid_5pct_0pt5mg")

        assert info.dataset_type == InstrumentFileLayout.FILE
        assert info.file_or_directory_name == "Lipid_5%_0.5mg.raw"

    def test_multiple_matches_reported_as_multi_file(self, tool, tmp_path, caplog):
        """Test several files sharing the dataset name."""
        touch(tmp_path, "Sample_01.raw", "Sample_01.txt")
        caplog.set_level(logging.WARNING, logger=SEARCH_LOGGER)

        result = tool.search(tmp_path, "Sample_01")

        assert result.outcome == SearchOutcome.FOUND_MULTIPLE_FILES
        assert result.info.dataset_type == InstrumentFileLayout.MULTI_FILE
        assert result.info.file_or_directory_name == "Sample_01"
        assert result.info.file_count == 2
        assert result.matched_directory is False
        assert "matched multiple files" in caplog.text

    def test_multi_file_warning_lists_at_most_five_names(self, tmp_path):
        """Test the warning is capped at five filenames."""
        names = [f"Sample_01.{ext}" for ext in ("a", "b", "c", "d", "e", "f", "g")]
        touch(tmp_path, *names)
        events = RecordingEvents()
        tool = DatasetFileSearchTool(events=events)

        info = tool.find_dataset_file(tmp_path, "Sample_01")

        assert info.file_count == 7
        warnings = events.messages("warning")
        assert len(warnings) == 1
        assert "Sample_01.e" in warnings[0]
        assert "Sample_01.f" not in warnings[0]

    def test_match_ignores_case(self, tool, tmp_path):
        """Test names are compared without regard to case."""
        touch(tmp_path, "SAMPLE_01.RAW")

        info = tool.find_dataset_file(tmp_path, "sample_01")

        assert info.dataset_type == InstrumentFileLayout.FILE
        assert info.file_or_directory_name == "SAMPLE_01.RAW"

    def test_longer_name_does_not_match(self, tool, tmp_path):
        """Test a file whose stem only starts with the dataset name is ignored."""
        touch(tmp_path, "Sample_011.raw", "Sample_01_b.raw")

        result = tool.search(tmp_path, "Sample_01")

        assert result.outcome == SearchOutcome.NOT_FOUND

    def test_file_with_two_extensions(self, tool, tmp_path):
        """Test the exact pass accepts any text after the first period."""
        touch(tmp_path, "Sample_01.mzML.gz")

        info = tool.find_dataset_file(tmp_path, "Sample_01")

        assert info.dataset_type == InstrumentFileLayout.FILE
        assert info.file_or_directory_name == "Sample_01.mzML.gz"

    def test_realtime_search_files_are_related(self, tool, tmp_path):
        """Test realtime search results beside the dataset file are recorded."""
        touch(
            tmp_path,
            "Sample_01.raw",
            "Sample_01_2024_realtimesearch.tsv",
            "Sample_01_2024_realtimelibsearch.tsv",
            "Sample_02_2024_realtimesearch.tsv",
        )

        info = tool.find_dataset_file(tmp_path, "Sample_01")

        assert info.dataset_type == InstrumentFileLayout.FILE
        related = sorted(p.name for p in info.related_files)
        assert related == [
            "Sample_01_2024_realtimelibsearch.tsv",
            "Sample_01_2024_realtimesearch.tsv",
        ]


class TestDirectorySearch:
    """Tests for finding dataset directories."""

    def test_directory_fallback_when_no_file_matches(self, tmp_path, caplog):
        """Test a directory is matched after both file passes fail."""
        (tmp_path / "Sample_02").mkdir()
        caplog.set_level(logging.INFO, logger=SEARCH_LOGGER)
        tool = DatasetFileSearchTool()

        result = tool.search(tmp_path, "Sample_02", check_for_files_first=True)

        assert result.outcome == SearchOutcome.FOUND_DIRECTORY
        assert result.matched_directory is True
        assert result.info.dataset_type == InstrumentFileLayout.DIRECTORY_NO_EXT
        assert result.info.file_or_directory_name == "Sample_02"
        assert result.info.file_count == 0
        assert "did not match a file" in caplog.text

    def test_directory_with_extension(self, tool, tmp_path):
        """Test a directory such as Sample.d is reported with DIRECTORY_EXT."""
        (tmp_path / "Sample_03.d").mkdir()

        result = tool.search(tmp_path, "Sample_03")

        assert result.info.dataset_type == InstrumentFileLayout.DIRECTORY_EXT
        assert result.info.file_or_directory_name == "Sample_03.d"

    def test_directory_with_invalid_characters(self, tool, tmp_path):
        """Test a directory matches after spaces are replaced."""
        (tmp_path / "Sample 04.d").mkdir()

        result = tool.search(tmp_path, "Sample_04")

        assert result.outcome == SearchOutcome.FOUND_DIRECTORY
        assert result.info.file_or_directory_name == "Sample 04.d"

    def test_no_fallback_message_when_directories_preferred(self, tmp_path):
        """Test the fallback status message is only sent for file-first searches."""
        (tmp_path / "Sample_02").mkdir()
        events = RecordingEvents()
        tool = DatasetFileSearchTool(events=events)

        result = tool.search(tmp_path, "Sample_02", check_for_files_first=False)

        assert result.outcome == SearchOutcome.FOUND_DIRECTORY
        assert events.messages("info") == []

    def test_fuzzy_file_beats_exact_directory_when_files_first(self, tool, tmp_path):
        """Test both file passes run before any directory pass."""
        touch(tmp_path, "Sample 05.raw")
        (tmp_path / "Sample_05").mkdir()

        result = tool.search(tmp_path, "Sample_05", check_for_files_first=True)

        assert result.outcome == SearchOutcome.FOUND_FILE
        assert result.info.file_or_directory_name == "Sample 05.raw"

    def test_directory_first_when_requested(self, tool, tmp_path):
        """Test directories are searched first when files are not preferred."""
        touch(tmp_path, "Sample_05.raw")
        (tmp_path / "Sample_05.d").mkdir()

        result = tool.search(tmp_path, "Sample_05", check_for_files_first=False)

        assert result.outcome == SearchOutcome.FOUND_DIRECTORY
        assert result.info.file_or_directory_name == "Sample_05.d"

    def test_file_found_after_directory_passes(self, tool, tmp_path):
        """Test files are still found when directories are searched first."""
        touch(tmp_path, "Sample_06.uimf")

        result = tool.search(tmp_path, "Sample_06", check_for_files_first=False)

        assert result.outcome == SearchOutcome.FOUND_FILE
        assert result.matched_directory is False


class TestNotFound:
    """Tests for searches that find nothing."""

    def test_missing_source_directory(self, tool, tmp_path, caplog):
        """Test a nonexistent directory is logged as an error."""
        caplog.set_level(logging.ERROR, logger=SEARCH_LOGGER)

        result = tool.search(tmp_path / "missing", "Sample_01")

        assert result.outcome == SearchOutcome.NOT_FOUND
        assert result.info.dataset_type == InstrumentFileLayout.NONE
        assert result.matched_directory is False
        assert "Source directory not found" in caplog.text

    def test_source_path_is_a_file(self, tool, tmp_path):
        """Test a file path is treated as a missing directory."""
        touch(tmp_path, "not_a_directory.txt")

        result = tool.search(tmp_path / "not_a_directory.txt", "Sample_01")

        assert result.outcome == SearchOutcome.NOT_FOUND
        assert result.matched_directory is False

    def test_exhausted_search_reports_matched_directory(self, tmp_path):
        """Test an exhausted search keeps matched_directory True and logs no error."""
        touch(tmp_path, "Other.raw")
        events = RecordingEvents()
        tool = DatasetFileSearchTool(events=events)

        result = tool.search(tmp_path, "Sample_01")

        assert result.outcome == SearchOutcome.NOT_FOUND
        assert result.found is False
        assert result.info.dataset_type == InstrumentFileLayout.NONE
        assert result.info.file_or_directory_name == ""
        assert result.matched_directory is True
        assert events.messages("error") == []


class TestFindDatasetFile:
    """Tests for the files-only entry point."""

    def test_rejects_directory_match(self, tool, tmp_path):
        """Test a matched directory is reported as not found."""
        (tmp_path / "Sample_02").mkdir()

        info = tool.find_dataset_file(tmp_path, "Sample_02")

        assert info.dataset_type == InstrumentFileLayout.NONE
        assert info.file_or_directory_name == ""
        assert info.file_list == []

    def test_returns_file_match(self, tool, tmp_path):
        """Test a file match is returned unchanged."""
        touch(tmp_path, "Sample_01.raw")

        info = tool.find_dataset_file(tmp_path, "Sample_01")

        assert info.found
        assert info.file_or_directory_name == "Sample_01.raw"


class TestInstrumentClassSearch:
    """Tests for the instrument-class aware search."""

    @pytest.mark.parametrize(
        "instrument_class",
        [
            InstrumentClass.BrukerMALDI_Imaging_V2,
            InstrumentClass.IMS_Agilent_TOF_UIMF,
            InstrumentClass.IMS_Agilent_TOF_DotD,
            InstrumentClass.Waters_TOF,
            InstrumentClass.Waters_IMS,
        ],
    )
    def test_directory_preferred_classes(self, tool, tmp_path, instrument_class):
        """Test directory-based instruments match the directory over the file."""
        touch(tmp_path, "Sample_07.raw")
        (tmp_path / "Sample_07.d").mkdir()

        info = tool.find_dataset_file_or_directory(tmp_path, "Sample_07", instrument_class)

        assert info.dataset_type == InstrumentFileLayout.DIRECTORY_EXT
        assert info.file_or_directory_name == "Sample_07.d"

    def test_file_preferred_class(self, tool, tmp_path):
        """Test file-based instruments match the file over the directory."""
        touch(tmp_path, "Sample_07.raw")
        (tmp_path / "Sample_07.d").mkdir()

        info = tool.find_dataset_file_or_directory(tmp_path, "Sample_07", InstrumentClass.LTQ_FT)

        assert info.dataset_type == InstrumentFileLayout.FILE
        assert info.file_or_directory_name == "Sample_07.raw"

    def test_bruker_imaging_directory(self, tool, tmp_path):
        """Test MALDI imaging directories are retagged."""
        (tmp_path / "Tissue_01").mkdir()

        info = tool.find_dataset_file_or_directory(
            tmp_path, "Tissue_01", InstrumentClass.BrukerMALDI_Imaging
        )

        assert info.dataset_type == InstrumentFileLayout.BRUKER_IMAGING
        assert info.file_or_directory_name == "Tissue_01"

    def test_bruker_spot_directory(self, tool, tmp_path):
        """Test MALDI spot directories are retagged after the file passes."""
        (tmp_path / "Spot_01").mkdir()

        info = tool.find_dataset_file_or_directory(
            tmp_path, "Spot_01", InstrumentClass.BrukerMALDI_Spot
        )

        assert info.dataset_type == InstrumentFileLayout.BRUKER_SPOT

    def test_bruker_spot_file_is_not_retagged(self, tool, tmp_path):
        """Test a file match keeps its FILE layout."""
        touch(tmp_path, "Spot_01.zip")

        info = tool.find_dataset_file_or_directory(
            tmp_path, "Spot_01", InstrumentClass.BrukerMALDI_Spot
        )

        assert info.dataset_type == InstrumentFileLayout.FILE

    def test_not_found_is_not_retagged(self, tool, tmp_path):
        """Test an empty search stays NONE for retagged classes."""
        info = tool.find_dataset_file_or_directory(
            tmp_path, "Tissue_01", InstrumentClass.BrukerMALDI_Imaging
        )

        assert info.dataset_type == InstrumentFileLayout.NONE

    def test_instrument_class_by_name(self, tool, tmp_path):
        """Test the instrument class may be given by name."""
        touch(tmp_path, "Sample_08.raw")
        (tmp_path / "Sample_08").mkdir()

        info = tool.find_dataset_file_or_directory(tmp_path, "Sample_08", "waters_ims")

        assert info.dataset_type == InstrumentFileLayout.DIRECTORY_NO_EXT


class TestToolConfiguration:
    """Tests for search tool construction options."""

    def test_default_auto_fixes(self, tool):
        """Test the default substitution table."""
        assert dict(tool.filename_auto_fixes) == {" ": "_", "%": "pct", ".": "pt"}

    def test_auto_fixes_are_read_only(self, tool):
        """Test the substitution table cannot be modified."""
        with pytest.raises(TypeError):
            tool.filename_auto_fixes["-"] = "_"

    def test_custom_auto_fixes(self, tmp_path):
        """Test a custom substitution table is used by the fuzzy passes."""
        touch(tmp_path, "Sample-01.raw")
        tool = DatasetFileSearchTool(filename_auto_fixes={"-": "_"})

        info = tool.find_dataset_file(tmp_path, "Sample_01")

        assert info.file_or_directory_name == "Sample-01.raw"

    def test_invalid_auto_fix_key(self):
        """Test multi-character keys are rejected."""
        with pytest.raises(ValueError):
            DatasetFileSearchTool(filename_auto_fixes={"ab": "_"})

    def test_trace_mode_reports_passes(self, tmp_path):
        """Test trace mode sends a debug message per pass."""
        (tmp_path / "Sample_02").mkdir()
        events = RecordingEvents()
        tool = DatasetFileSearchTool(trace_mode=True, events=events)

        tool.search(tmp_path, "Sample_02")

        debug = events.messages("debug")
        assert sum("Looking for a dataset file" in m for m in debug) == 2
        assert sum("Looking for a dataset directory" in m for m in debug) == 1
        assert any("Matched directory Sample_02" in m for m in debug)

    def test_no_trace_messages_by_default(self, tmp_path):
        """Test no debug messages are sent without trace mode."""
        events = RecordingEvents()
        tool = DatasetFileSearchTool(events=events)

        tool.search(tmp_path, "Sample_01")

        assert events.messages("debug") == []
