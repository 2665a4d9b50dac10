"""
Name utilities for dataset searches.

Functions for splitting names into stem and extension, substituting
characters that are not allowed in dataset names, and normalizing the
share paths given in capture task parameters.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Optional

from .types import SourcePath

# Characters replaced when doing so makes a filename match the dataset name
DEFAULT_FILENAME_AUTO_FIXES: Mapping[str, str] = MappingProxyType(
    {
        " ": "_",
        "%": "pct",
        ".": "pt",
    }
)


def split_stem_and_extension(name: str) -> tuple[str, str]:
    """
    Split a file or directory name at its last period.

    A trailing period is not an extension; it is dropped from the stem.

    Args:
        name: File or directory name (no path)

    Returns:
        Tuple of (stem, extension); extension includes the period

    Example:
        >>> split_stem_and_extension("Sample_01.raw")
        ("Sample_01", ".raw")
        >>> split_stem_and_extension("Sample_01.d.zip")
        ("Sample_01.d", ".zip")
    """
    index = name.rfind(".")
    if index < 0:
        return name, ""
    if index == len(name) - 1:
        return name[:index], ""
    return name[:index], name[index:]


def names_match(name: str, dataset_name: str) -> bool:
    """Compare a name to a dataset name, ignoring case."""
    return name.casefold() == dataset_name.casefold()


def validate_auto_fixes(auto_fixes: Mapping[str, str]) -> Mapping[str, str]:
    """
    Check a substitution table and return a read-only copy.

    Raises:
        ValueError: If a key is not exactly one character
    """
    for key in auto_fixes:
        if not isinstance(key, str) or len(key) != 1:
            raise ValueError(f"Auto-fix keys must be single characters, got {key!r}")
    return MappingProxyType(dict(auto_fixes))


def replace_invalid_chars(text: str, auto_fixes: Mapping[str, str]) -> str:
    """Replace every occurrence of each mapped character in `text`."""
    updated = text
    for char, replacement in auto_fixes.items():
        updated = updated.replace(char, replacement)
    return updated


def auto_fix_filename(
    dataset_name: str,
    file_name: str,
    chars_to_find: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Replace invalid characters in a filename if that makes it match the dataset.

    The extension is taken once from the original name and reattached after
    each substitution, so only the stem is ever modified.

    Args:
        dataset_name: Dataset name to match
        file_name: Candidate file or directory name
        chars_to_find: Characters to replace, mapped to their replacement text
            (defaults to DEFAULT_FILENAME_AUTO_FIXES)

    Returns:
        The updated name if its stem matches the dataset name, otherwise `file_name`

    Example:
        >>> auto_fix_filename("Sample_01", "Sample 01.raw")
        "Sample_01.raw"
        >>> auto_fix_filename("Sample_99", "Sample 01.raw")
        "Sample 01.raw"
    """
    if chars_to_find is None:
        chars_to_find = DEFAULT_FILENAME_AUTO_FIXES

    if not any(char in file_name for char in chars_to_find):
        return file_name

    _, extension = split_stem_and_extension(file_name)
    updated_name = file_name

    for char, replacement in chars_to_find.items():
        base_name, _ = split_stem_and_extension(updated_name)
        if char not in base_name:
            continue
        updated_name = base_name.replace(char, replacement) + extension

    updated_stem, _ = split_stem_and_extension(updated_name)
    if names_match(updated_stem, dataset_name):
        return updated_name

    return file_name


def verify_relative_source_path(
    source_vol: str,
    source_path: str,
    capture_subdirectory: str,
) -> SourcePath:
    """
    Fold a capture subdirectory that starts with ".." into the source path.

    Some instruments share a directory under an alternate name. The trigger
    file then lists the original share plus a relative hop, for example
    source_vol "\\\\lumos01.bionet\\", source_path "ProteomicsData\\" and
    capture_subdirectory "..\\ProteomicsData2". Combining those gives
    "\\\\lumos01.bionet\\ProteomicsData\\..\\ProteomicsData2", which is
    rewritten to source_path "ProteomicsData2" with an empty subdirectory.

    Only UNC share roots (starting with two backslashes) are rewritten.

    Args:
        source_vol: Share root
        source_path: Path below the share root
        capture_subdirectory: Subdirectory below the source path

    Returns:
        SourcePath with the (possibly updated) values and an `updated` flag
    """
    unchanged = SourcePath(
        source_vol=source_vol,
        source_path=source_path,
        capture_subdirectory=capture_subdirectory,
    )

    if not capture_subdirectory.lstrip("\\").startswith("..") or not source_vol.startswith("\\\\"):
        return unchanged

    source_path_parts = source_path.strip("\\.").split("\\")

    if len(source_path_parts) == 1:
        capture_sub_work = capture_subdirectory.lstrip("\\.")
        new_source_path = capture_sub_work.split("\\")[0]
        new_capture_subdirectory = capture_sub_work[len(new_source_path):].lstrip("\\")
    else:
        source_parts = list(source_path_parts)
        first_capture_sub = ""

        for part in capture_subdirectory.strip("\\").split("\\"):
            if part == ".." and source_parts:
                source_parts.pop()
            else:
                first_capture_sub = part
                break

        if not source_parts:
            new_source_path = first_capture_sub
            new_capture_subdirectory = (
                capture_subdirectory.lstrip("\\.")[len(new_source_path):].lstrip("\\")
            )
        else:
            new_source_path = "\\".join(source_parts)
            new_capture_subdirectory = capture_subdirectory.lstrip("\\.")

    return SourcePath(
        source_vol=source_vol,
        source_path=new_source_path,
        capture_subdirectory=new_capture_subdirectory,
        updated=True,
    )
