"""
Rename files whose names contain characters not allowed in dataset names.

After a dataset directory has been captured, files and subdirectories
named like "Sample 01.raw" are renamed to "Sample_01.raw" when the fixed
name matches the dataset name.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Union

from .naming import split_stem_and_extension
from .search import DatasetFileSearchTool
from .types import RenameAction

logger = logging.getLogger(__name__)


def find_auto_fix_candidates(
    directory: Union[str, Path],
    auto_fixes: Mapping[str, str],
) -> list[Path]:
    """
    Find files and directories whose names contain a character to replace.

    For periods, only names with a period in the stem are returned
    (the extension's period does not count).

    Args:
        directory: Directory to search recursively
        auto_fixes: Substitution table (only the keys are used)

    Returns:
        Candidate paths, deepest first so children are renamed before parents
    """
    root = Path(directory)
    candidates: dict[Path, None] = {}

    for path in root.rglob("*"):
        for char in auto_fixes:
            if char == ".":
                stem, _ = split_stem_and_extension(path.name)
                hit = "." in stem
            else:
                hit = char in path.name
            if hit:
                candidates[path] = None
                break

    return sorted(candidates, key=lambda p: (-len(p.parts), str(p)))


def auto_fix_directory(
    tool: DatasetFileSearchTool,
    dataset_name: str,
    directory: Union[str, Path],
    dry_run: bool = False,
) -> list[RenameAction]:
    """
    Rename items in a dataset directory so their names match the dataset.

    Uses `tool.auto_fix_filename`, so only items whose fixed stem equals
    the dataset name are renamed. Failures are reported and do not stop
    the remaining renames.

    Args:
        tool: Search tool providing the substitution table and event sink
        dataset_name: Dataset name
        directory: Dataset directory to process
        dry_run: Report the renames without performing them

    Returns:
        List of RenameAction, one per item whose name would change
    """
    actions = []

    for candidate in find_auto_fix_candidates(directory, tool.filename_auto_fixes):
        updated_name = tool.auto_fix_filename(dataset_name, candidate.name)

        if updated_name.casefold() == candidate.name.casefold():
            continue

        action = RenameAction(source=candidate, target=candidate.parent / updated_name)
        actions.append(action)

        if dry_run:
            continue

        if action.target.exists():
            action.error = "target already exists"
            tool.events.error(
                f"Cannot rename '{candidate.name}' to '{updated_name}': {action.error}"
            )
            continue

        tool.events.info(
            f"Renaming '{candidate.name}' to '{updated_name}' to remove invalid characters"
        )

        try:
            candidate.rename(action.target)
            action.renamed = True
        except OSError as e:
            action.error = str(e)
            tool.events.error(f"Error renaming '{candidate}' to '{action.target}': {e}")

    return actions
