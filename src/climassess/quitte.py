"""
Observation (quitte-style) tables

These are long-format tables with one observation per row.
The name comes from the R package that popularised the format
for IAM output ([quitte](https://github.com/pik-piam/quitte)).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

from climassess.exceptions import InvalidInputError
from climassess.typing import PathType, QuitteDataFrame, WideDataFrame

QUITTE_COLUMNS: tuple[str, ...] = (
    "model",
    "scenario",
    "region",
    "variable",
    "unit",
    "period",
    "value",
)
"""
Columns which every observation table must have
"""

QUITTE_METADATA_COLUMNS: tuple[str, ...] = QUITTE_COLUMNS[:5]
"""
Columns which describe the observation (i.e. everything except period and value)
"""


def get_quitte_problems(obj: Any) -> list[str]:
    """
    Get the reasons why an object is not an observation table

    Parameters
    ----------
    obj
        Object to check

    Returns
    -------
    :
        Problems found, empty if `obj` is a valid observation table
    """
    if not isinstance(obj, pd.DataFrame):
        return [f"expected a pandas DataFrame, received {type(obj).__name__}"]

    problems = []
    missing = [c for c in QUITTE_COLUMNS if c not in obj.columns]
    if missing:
        problems.append(f"missing columns {missing}")

    if "value" in obj.columns and not pd.api.types.is_numeric_dtype(obj["value"]):
        problems.append(f"value column is not numeric ({obj['value'].dtype})")

    if "period" in obj.columns and not _is_integer_like(obj["period"]):
        problems.append(f"period column does not hold years ({obj['period'].dtype})")

    return problems


def _is_integer_like(ser: pd.Series[Any]) -> bool:
    if pd.api.types.is_integer_dtype(ser):
        return True

    if pd.api.types.is_float_dtype(ser):
        return bool(ser.notnull().all() and (ser % 1 == 0).all())

    return False


def is_quitte(obj: Any) -> bool:
    """
    Check whether an object is an observation table

    Parameters
    ----------
    obj
        Object to check

    Returns
    -------
    :
        `True` if `obj` is an observation table, otherwise `False`
    """
    return not get_quitte_problems(obj)


def assert_is_quitte(obj: Any, name: str = "qf") -> None:
    """
    Assert that an object is an observation table

    Parameters
    ----------
    obj
        Object to check

    name
        Name of the object, used in the error message

    Raises
    ------
    InvalidInputError
        `obj` is not an observation table
    """
    problems = get_quitte_problems(obj)
    if problems:
        raise InvalidInputError(name=name, problems=problems)


def read_mif(path: PathType) -> QuitteDataFrame:
    """
    Read a model intercomparison file (mif) into an observation table

    Mif files are semicolon separated,
    with the metadata columns `Model;Scenario;Region;Variable;Unit`
    followed by one column per year.
    REMIND writes a trailing semicolon on each line,
    the resulting empty column is ignored.

    Parameters
    ----------
    path
        Path to the file to read

    Returns
    -------
    :
        Observation table. Rows without a value are dropped.
    """
    raw = pd.read_csv(Path(path), sep=";", na_values=["N/A", "NA", ""])
    raw = raw.loc[:, ~raw.columns.str.startswith("Unnamed")]
    raw.columns = [str(c).strip() for c in raw.columns]
    raw = raw.rename(columns={c: c.lower() for c in raw.columns if not c.isdigit()})

    time_columns = [c for c in raw.columns if c.isdigit()]
    res = raw.melt(
        id_vars=list(QUITTE_METADATA_COLUMNS),
        value_vars=time_columns,
        var_name="period",
        value_name="value",
    ).dropna(subset=["value"])
    res["period"] = res["period"].astype(int)
    res["value"] = res["value"].astype(float)

    return res.reset_index(drop=True)


def to_mif(wide: WideDataFrame, path: PathType) -> None:
    """
    Write wide data to a model intercomparison file

    Parameters
    ----------
    wide
        Data to write

    path
        Path to write to
    """
    wide.to_csv(Path(path), sep=";", index=False)
