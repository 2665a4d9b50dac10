"""
Instrument class lookup tables.

Each instrument class has its own conventions for how raw data lands on
the instrument share. Most instruments write a single file per dataset;
imaging, IMS and Waters QTOF instruments write a directory. These tables
drive the search order and the dataset type refinement used by the
dataset search tool, so new classes can be added here without touching
the search code.
"""

from __future__ import annotations

from typing import Optional, Union

from capture.enums import InstrumentClass, InstrumentFileLayout

# Classes whose native data is a directory; the search looks for a
# directory first and only then for a file
DIRECTORY_PREFERRED_CLASSES: frozenset[InstrumentClass] = frozenset(
    {
        InstrumentClass.BrukerMALDI_Imaging,
        InstrumentClass.BrukerMALDI_Imaging_V2,
        InstrumentClass.IMS_Agilent_TOF_UIMF,
        InstrumentClass.IMS_Agilent_TOF_DotD,
        InstrumentClass.Waters_TOF,
        InstrumentClass.Waters_IMS,
    }
)

# Dataset type to report when a directory was matched for these classes
DIRECTORY_LAYOUT_OVERRIDES: dict[InstrumentClass, InstrumentFileLayout] = {
    InstrumentClass.BrukerMALDI_Imaging: InstrumentFileLayout.BRUKER_IMAGING,
    InstrumentClass.BrukerMALDI_Spot: InstrumentFileLayout.BRUKER_SPOT,
}


def get_instrument_class(instrument_class_name: Optional[str]) -> InstrumentClass:
    """
    Convert an instrument class name to the enum, ignoring case.

    Args:
        instrument_class_name: Name as stored in the database (e.g. "LTQ_FT")

    Returns:
        The matching InstrumentClass, or InstrumentClass.Unknown

    Example:
        >>> get_instrument_class("brukermaldi_imaging")
        InstrumentClass.BrukerMALDI_Imaging
    """
    if not instrument_class_name:
        return InstrumentClass.Unknown

    name = instrument_class_name.strip().lower()
    for member in InstrumentClass:
        if member.name.lower() == name:
            return member

    # Numeric codes are accepted too
    if name.isdigit():
        try:
            return InstrumentClass(int(name))
        except ValueError:
            return InstrumentClass.Unknown

    return InstrumentClass.Unknown


def get_instrument_class_name(instrument_class: InstrumentClass) -> str:
    """Get the database name of an instrument class."""
    return instrument_class.name


def resolve_instrument_class(
    instrument_class: Union[InstrumentClass, str, None],
) -> InstrumentClass:
    """Accept an enum member or a class name and return the enum member."""
    if isinstance(instrument_class, InstrumentClass):
        return instrument_class
    return get_instrument_class(instrument_class)


def prefers_files(instrument_class: InstrumentClass) -> bool:
    """
    Check whether datasets for this class should be searched as files first.

    Returns:
        False for directory-based instruments, True for everything else
    """
    return instrument_class not in DIRECTORY_PREFERRED_CLASSES


def directory_layout_for(
    instrument_class: InstrumentClass,
    resolved: InstrumentFileLayout,
) -> InstrumentFileLayout:
    """
    Refine the layout of a matched directory based on instrument class.

    Args:
        instrument_class: Instrument class of the dataset
        resolved: Layout determined by the search (DIRECTORY_NO_EXT or DIRECTORY_EXT)

    Returns:
        The instrument-specific layout, or `resolved` when there is no override
    """
    return DIRECTORY_LAYOUT_OVERRIDES.get(instrument_class, resolved)
