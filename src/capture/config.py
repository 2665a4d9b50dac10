"""
Configuration for the capture tools.

Settings arrive as string-keyed parameters from the manager and task
parameter sources (e.g. {"TraceMode": "true", "Dataset": "QC_01"}).
These models validate and coerce them.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from capture.enums import InstrumentClass
from capture.instruments import get_instrument_class
from capture.tools import DEFAULT_FILENAME_AUTO_FIXES, DatasetFileSearchTool, SourcePath
from capture.tools.naming import validate_auto_fixes, verify_relative_source_path


def _select_params(model: type[BaseModel], params: Mapping[str, Any]) -> dict[str, Any]:
    """Pick the parameters a model knows about, matching aliases without regard to case."""
    known = {}
    for name, info in model.model_fields.items():
        known[name.lower()] = name
        if info.alias:
            known[info.alias.lower()] = name

    selected = {}
    for key, value in params.items():
        field_name = known.get(str(key).lower())
        if field_name is not None:
            selected[field_name] = value
    return selected


class CaptureSettings(BaseModel):
    """
    Manager-level settings for dataset searches.

    Attributes:
        trace_mode: Report each search pass at debug level
        filename_auto_fixes: Characters replaced when matching names
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    trace_mode: bool = Field(default=False, alias="TraceMode")
    filename_auto_fixes: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_FILENAME_AUTO_FIXES)
    )

    @field_validator("filename_auto_fixes")
    @classmethod
    def _check_auto_fixes(cls, value: dict[str, str]) -> dict[str, str]:
        validate_auto_fixes(value)
        return value

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "CaptureSettings":
        """
        Build settings from manager parameters.

        Args:
            params: String-keyed parameters; unknown keys are ignored

        Raises:
            pydantic.ValidationError: If a value cannot be coerced
        """
        return cls(**_select_params(cls, params))

    def create_search_tool(self, **kwargs: Any) -> DatasetFileSearchTool:
        """Create a DatasetFileSearchTool using these settings."""
        return DatasetFileSearchTool(
            trace_mode=self.trace_mode,
            filename_auto_fixes=self.filename_auto_fixes,
            **kwargs,
        )


class CaptureTaskParams(BaseModel):
    """
    Task parameters describing where a dataset should be captured from.

    Attributes:
        dataset: Dataset name
        source_vol: Share root, e.g. "\\\\exact04.bionet\\"
        source_path: Path below the share root, e.g. "ProteomicsData\\"
        capture_subdirectory: Optional subdirectory below the source path
        instrument_class: Instrument class of the dataset
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    dataset: str = Field(alias="Dataset", min_length=1)
    source_vol: str = Field(alias="Source_Vol")
    source_path: str = Field(default="", alias="Source_Path")
    capture_subdirectory: str = Field(default="", alias="Capture_Subfolder")
    instrument_class: InstrumentClass = Field(
        default=InstrumentClass.Unknown, alias="Instrument_Class"
    )

    @field_validator("instrument_class", mode="before")
    @classmethod
    def _parse_instrument_class(cls, value: Any) -> Any:
        if isinstance(value, str):
            return get_instrument_class(value)
        return value

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "CaptureTaskParams":
        """
        Build task parameters from a string-keyed task parameter mapping.

        Raises:
            pydantic.ValidationError: If a required parameter is missing
        """
        return cls(**_select_params(cls, params))

    def resolve_source(self) -> SourcePath:
        """Get the share path, with relative capture subdirectories folded in."""
        return verify_relative_source_path(
            self.source_vol, self.source_path, self.capture_subdirectory
        )

    @property
    def source_directory(self) -> str:
        """Directory that holds the dataset (share root plus source path)."""
        source = self.resolve_source()
        return _join_share_path(source.source_vol, source.source_path)

    @property
    def capture_directory(self) -> str:
        """Source directory plus the capture subdirectory, if any."""
        source = self.resolve_source()
        return _join_share_path(
            source.source_vol, source.source_path, source.capture_subdirectory
        )


def _join_share_path(source_vol: str, *parts: str) -> str:
    """Join a share root with relative parts; UNC roots keep Windows separators."""
    parts = tuple(p for p in parts if p)
    if source_vol.startswith("\\\\"):
        return "\\".join([source_vol.rstrip("\\")] + [p.strip("\\") for p in parts])
    return str(Path(source_vol, *(p.replace("\\", "/") for p in parts)))
