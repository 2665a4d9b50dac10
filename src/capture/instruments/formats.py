"""
Raw data format names.

The database stores a raw data type name for each instrument; these
helpers convert between that name and the DataFormat enum.
"""

from typing import Optional

from capture.enums import DataFormat

# Common raw data extensions (lowercase)
DOT_WIFF_EXTENSION = ".wiff"
DOT_D_EXTENSION = ".d"
DOT_RAW_EXTENSION = ".raw"
DOT_UIMF_EXTENSION = ".uimf"
DOT_MZXML_EXTENSION = ".mzxml"
DOT_MZML_EXTENSION = ".mzml"
DOT_MGF_EXTENSION = ".mgf"
DOT_CDF_EXTENSION = ".cdf"
DOT_TXT_GZ_EXTENSION = ".txt.gz"
DOT_QGD_EXTENSION = ".qgd"
DOT_LCMETHOD_EXTENSION = ".lcmethod"


def get_data_format(raw_data_type_name: Optional[str]) -> DataFormat:
    """
    Convert a raw data type name to a DataFormat.

    Args:
        raw_data_type_name: Name such as "dot_raw_files" or "bruker_ft" (any case)

    Returns:
        The matching DataFormat, or DataFormat.UNKNOWN

    Example:
        >>> get_data_format("Dot_D_Folders")
        DataFormat.AGILENT_D_FOLDER
    """
    if not raw_data_type_name:
        return DataFormat.UNKNOWN

    try:
        return DataFormat(raw_data_type_name.strip().lower())
    except ValueError:
        return DataFormat.UNKNOWN


def get_data_format_name(data_format: DataFormat) -> str:
    """Get the database name of a data format ("Unknown" if not defined)."""
    if data_format == DataFormat.UNKNOWN:
        return "Unknown"
    return data_format.value
