"""
Enums for instruments and dataset layouts.

These enums define the valid instrument classes, raw data formats and
on-disk dataset layouts understood by the capture tools.
"""

from enum import Enum, IntEnum


class InstrumentClass(IntEnum):
    """
    Instrument classes, keyed by their database codes.

    The class determines whether an instrument's native data is
    file-based or directory-based.
    """

    Unknown = 0
    Finnigan_Ion_Trap = 1
    LTQ_FT = 2
    Triple_Quad = 3
    Thermo_Exactive = 4
    Agilent_Ion_Trap = 5
    Agilent_TOF = 6
    Agilent_TOF_V2 = 7
    Bruker_Amazon_Ion_Trap = 8
    BrukerFT_BAF = 9
    BrukerFTMS = 10
    BrukerMALDI_Imaging = 11
    BrukerMALDI_Spot = 12
    BrukerTOF_BAF = 13
    Data_Folders = 14
    Finnigan_FTICR = 15
    IMS_Agilent_TOF_UIMF = 16
    Waters_TOF = 17
    QStar_QTOF = 18
    Sciex_QTrap = 19
    Sciex_TripleTOF = 20
    PrepHPLC = 21
    BrukerMALDI_Imaging_V2 = 22
    Illumina_Sequencer = 23
    GC_QExactive = 24
    Waters_IMS = 25
    Shimadzu_GC = 26
    BrukerTOF_TDF = 27
    FT_Booster_Data = 28
    IMS_Agilent_TOF_DotD = 29
    Thermo_SII_LC = 30
    Waters_Acquity_LC = 31
    LCMSNet_LC = 32


class InstrumentFileLayout(str, Enum):
    """
    How a dataset is represented on the instrument share.

    Attributes:
        NONE: Dataset not found
        FILE: A single file
        MULTI_FILE: Several files sharing the dataset name
        DIRECTORY_NO_EXT: A directory named after the dataset
        DIRECTORY_EXT: A directory named after the dataset, plus an extension (e.g. .d)
        BRUKER_IMAGING: Bruker MALDI imaging directory
        BRUKER_SPOT: Bruker MALDI spot directory
    """

    NONE = "none"
    FILE = "file"
    DIRECTORY_NO_EXT = "directory_no_ext"
    DIRECTORY_EXT = "directory_ext"
    BRUKER_IMAGING = "bruker_imaging"
    BRUKER_SPOT = "bruker_spot"
    MULTI_FILE = "multi_file"


class DataFormat(str, Enum):
    """Raw data formats, valued by their database names."""

    UNKNOWN = "unknown"
    THERMO_RAW_FILE = "dot_raw_files"
    UIMF = "dot_uimf_files"
    MZXML = "dot_mzxml_files"
    MZML = "dot_mzml_files"
    AGILENT_D_FOLDER = "dot_d_folders"
    AGILENT_QSTAR_WIFF_FILE = "dot_wiff_files"
    WATERS_RAW_FOLDER = "dot_raw_folder"
    ZIPPED_S_FOLDERS = "zipped_s_folders"
    BRUKER_FT_FOLDER = "bruker_ft"
    BRUKER_MALDI_SPOT = "bruker_maldi_spot"
    BRUKER_MALDI_IMAGING = "bruker_maldi_imaging"
    BRUKER_TOF_BAF = "bruker_tof_baf"
    SCIEX_WIFF_FILE = "sciex_wiff_files"
    ILLUMINA_FOLDER = "illumina_folder"
    SHIMADZU_QGD_FILE = "dot_qgd_files"
    BRUKER_TOF_TDF = "bruker_tof_tdf"
    LCMSNET_LC_METHOD = "lcmsnet_lcmethod"
    BRUKER_TOF_TSF = "bruker_tof_tsf"
