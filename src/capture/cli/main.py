"""
Main CLI entry point for dataset-capture using Click.

Usage:
    dataset-capture find SOURCE_DIR DATASET [--instrument-class NAME] [--files-only]
    dataset-capture autofix-name DATASET FILENAME
    dataset-capture fix-names DATASET DIRECTORY [--dry-run]
    dataset-capture classes
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Optional

import click

from capture.config import CaptureSettings
from capture.enums import InstrumentClass
from capture.instruments import DIRECTORY_LAYOUT_OVERRIDES, get_instrument_class, prefers_files
from capture.tools import DatasetInfo, auto_fix_directory


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


class Config:
    """Shared configuration for CLI commands."""

    def __init__(self) -> None:
        self.verbose = False
        self.debug = False


pass_config = click.make_pass_decorator(Config, ensure=True)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.version_option(version="0.1.0", prog_name="dataset-capture")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """Locate instrument datasets on capture shares."""
    ctx.ensure_object(Config)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    setup_logging(verbose=verbose, debug=debug)


@cli.command()
@click.argument("source_dir", type=click.Path())
@click.argument("dataset")
@click.option(
    "--instrument-class",
    "-c",
    "instrument_class",
    help="Instrument class name (selects file or directory search order)",
)
@click.option("--files-only", is_flag=True, help="Only accept a file match")
@click.option("--trace", is_flag=True, help="Report each search pass")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@pass_config
def find(
    config: Config,
    source_dir: str,
    dataset: str,
    instrument_class: Optional[str],
    files_only: bool,
    trace: bool,
    as_json: bool,
) -> None:
    """Find the file or directory holding a dataset.

    Exits with status 1 when the dataset is not found.

    Example:
        dataset-capture find /mnt/lumos01/ProteomicsData QC_Mam_19_01 -c LTQ_FT
    """
    settings = CaptureSettings(trace_mode=trace)
    tool = settings.create_search_tool()

    if files_only:
        if instrument_class:
            raise click.ClickException("--files-only cannot be combined with --instrument-class")
        info = tool.find_dataset_file(source_dir, dataset)
    else:
        info = tool.find_dataset_file_or_directory(source_dir, dataset, instrument_class)

    if as_json:
        click.echo(json.dumps(info.to_dict(), indent=2))
    else:
        _print_dataset_info(info)

    if not info.found:
        sys.exit(1)


@cli.command("autofix-name")
@click.argument("dataset")
@click.argument("filename")
def autofix_name(dataset: str, filename: str) -> None:
    """Show the name a file would be renamed to for a dataset.

    Prints the filename unchanged if replacing invalid characters does
    not make it match the dataset name.

    Example:
        dataset-capture autofix-name Sample_01 "Sample 01.raw"
    """
    tool = CaptureSettings().create_search_tool()
    click.echo(tool.auto_fix_filename(dataset, filename))


@cli.command("fix-names")
@click.argument("dataset")
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
@click.option("--dry-run", is_flag=True, help="List renames without performing them")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@pass_config
def fix_names(
    config: Config,
    dataset: str,
    directory: str,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Rename items whose names contain invalid characters.

    Only items whose fixed name matches the dataset are renamed.

    Example:
        dataset-capture fix-names Sample_01 ./Sample_01 --dry-run
    """
    logger = logging.getLogger("fix-names")
    logger.info(f"Checking {directory} for names with invalid characters")

    tool = CaptureSettings().create_search_tool()
    actions = auto_fix_directory(tool, dataset, directory, dry_run=dry_run)

    if as_json:
        click.echo(json.dumps([a.to_dict() for a in actions], indent=2))
    elif not actions:
        click.echo("No names to fix")
    else:
        for action in actions:
            if dry_run:
                status = click.style("WOULD RENAME", fg="cyan")
            elif action.renamed:
                status = click.style("RENAMED", fg="green")
            else:
                status = click.style("FAILED", fg="red")
            click.echo(f"{status} {action.source} -> {action.target.name}")
            if action.error:
                click.echo(f"  ✗ {action.error}")

    if any(a.error for a in actions):
        sys.exit(1)


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.argument("name", required=False)
def classes(as_json: bool, name: Optional[str]) -> None:
    """List instrument classes and their search order.

    Pass NAME to show a single class (case-insensitive).

    Example:
        dataset-capture classes waters_tof
    """
    if name:
        instrument_class = get_instrument_class(name)
        if instrument_class == InstrumentClass.Unknown and name.lower() != "unknown":
            raise click.ClickException(f"Unknown instrument class: {name}")
        members = [instrument_class]
    else:
        members = list(InstrumentClass)

    rows = []
    for member in members:
        override = DIRECTORY_LAYOUT_OVERRIDES.get(member)
        rows.append(
            {
                "name": member.name,
                "code": int(member),
                "search_first": "file" if prefers_files(member) else "directory",
                "directory_layout": override.value if override else None,
            }
        )

    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return

    for row in rows:
        line = f"{row['code']:>3}  {row['name']:<24} {row['search_first']}"
        if row["directory_layout"]:
            line += f" ({row['directory_layout']})"
        click.echo(line)


def _print_dataset_info(info: DatasetInfo) -> None:
    """Print a human-readable search result."""
    if not info.found:
        click.echo(click.style("Not found: ", fg="red") + info.dataset_name)
        return

    click.echo(f"Dataset: {info.dataset_name}")
    click.echo(f"Type: {info.dataset_type.value}")
    click.echo(f"Name: {info.file_or_directory_name}")

    if info.file_count > 1:
        click.echo(f"\nFiles ({info.file_count}):")
        for path in info.file_list[:5]:  # Limit to first 5
            click.echo(f"  - {path.name}")

    if info.related_files:
        click.echo(f"\nRelated files ({len(info.related_files)}):")
        for path in info.related_files:
            click.echo(f"  - {path.name}")


def app(args: Optional[list[str]] = None) -> int:
    """
    Main application entry point (for testing).

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success)
    """
    try:
        cli(args, standalone_mode=False)
        return 0
    except click.ClickException as e:
        e.show()
        return 1
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


def main() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
