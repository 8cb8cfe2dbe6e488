"""
Mappings from model-internal variable names to reporting template names

Each supported mapping is a semicolon-separated file
with the columns `variable;unit;piam_variable;piam_unit;piam_factor`.
`piam_variable` and `piam_unit` are the names the model reports,
`variable` and `unit` are the names the template expects
and `piam_factor` is the factor to multiply values by
to go from `piam_unit` to `unit` (empty means 1).
"""

from __future__ import annotations

import importlib.resources
from enum import Enum
from pathlib import Path

import pandas as pd

from climassess.exceptions import (
    InvalidArgumentError,
    MappingFileNotFoundError,
    SchemaMismatchError,
)
from climassess.typing import PathType

MAPPING_COLUMNS: tuple[str, ...] = (
    "variable",
    "unit",
    "piam_variable",
    "piam_unit",
    "piam_factor",
)
"""
Columns in a mapping file
"""


class SupportedMapping(Enum):
    """
    Supported mappings
    """

    AR6 = "AR6"
    """Mapping used for the IPCC's sixth assessment report (AR6) database"""

    NGFS_AR6 = "NGFS_AR6"
    """Mapping used for NGFS submissions, AR6 variable conventions"""

    AR6_MAgPIE = "AR6_MAgPIE"
    """AR6 mapping for coupled REMIND-MAgPIE runs (land-use from MAgPIE)"""

    climateassessment = "climateassessment"
    """Minimal mapping of just the variables needed for climate assessment"""

    @classmethod
    def from_user_value(cls, value: str | SupportedMapping) -> SupportedMapping:
        """
        Get a mapping from a value supplied by a user

        Parameters
        ----------
        value
            Value to convert

        Returns
        -------
        :
            Matching mapping

        Raises
        ------
        InvalidArgumentError
            `value` is not a supported mapping
        """
        if isinstance(value, cls):
            return value

        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidArgumentError(
                invalid_value=value,
                name="mapping",
                supported_values=[m.value for m in cls],
            ) from exc


def get_default_mapping_dir() -> Path:
    """
    Get the directory holding the mapping files shipped with the package

    Returns
    -------
    :
        Path to the packaged mappings directory
    """
    return Path(str(importlib.resources.files("climassess") / "data" / "mappings"))


def get_mapping_file(
    mapping: SupportedMapping, mapping_dir: PathType | None = None
) -> Path:
    """
    Get the path to the file for a given mapping

    Parameters
    ----------
    mapping
        Mapping of interest

    mapping_dir
        Directory in which to look for the file

        If not supplied, we use [get_default_mapping_dir][(m).].

    Returns
    -------
    :
        Path to the mapping file (which may not exist)
    """
    if mapping_dir is None:
        mapping_dir = get_default_mapping_dir()

    return Path(mapping_dir) / f"mapping_{mapping.value}.csv"


def load_mapping(
    mapping: SupportedMapping, mapping_dir: PathType | None = None
) -> pd.DataFrame:
    """
    Load a mapping

    Parameters
    ----------
    mapping
        Mapping to load

    mapping_dir
        Directory in which to look for the mapping file

    Returns
    -------
    :
        Mapping with the columns given by [MAPPING_COLUMNS][(m).].
        Rows without a source variable (i.e. template variables
        which the model does not report) are dropped.

    Raises
    ------
    MappingFileNotFoundError
        The mapping file does not exist

    SchemaMismatchError
        The mapping file does not have the expected columns
    """
    mapping_file = get_mapping_file(mapping, mapping_dir=mapping_dir)
    if not mapping_file.exists():
        raise MappingFileNotFoundError(mapping=mapping.value, mapping_file=mapping_file)

    raw = pd.read_csv(mapping_file, sep=";", comment="#", dtype=str)
    missing = [c for c in MAPPING_COLUMNS if c not in raw.columns]
    if missing:
        raise SchemaMismatchError(mapping_file, f"missing columns {missing}")

    res = raw[list(MAPPING_COLUMNS)].dropna(subset=["piam_variable", "variable"])
    res["piam_unit"] = res["piam_unit"].fillna("")
    res["unit"] = res["unit"].fillna("")
    try:
        res["piam_factor"] = res["piam_factor"].fillna("1").astype(float)
    except ValueError as exc:
        raise SchemaMismatchError(mapping_file, "piam_factor is not numeric") from exc

    return res.reset_index(drop=True)
