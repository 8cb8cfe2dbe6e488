"""
Useful assertions
"""

from __future__ import annotations

from collections.abc import Collection, Iterable

import pandas as pd


def assert_has_columns(indf: pd.DataFrame, columns: Iterable[str]) -> None:
    """
    Assert that a [pd.DataFrame][pandas.DataFrame] has the given columns

    Parameters
    ----------
    indf
        Data to verify

    columns
        Columns that must be present

    Raises
    ------
    AssertionError
        `indf` is missing at least one of `columns`
    """
    missing = [c for c in columns if c not in indf.columns]
    if missing:
        msg = f"Missing required columns: {missing}. {indf.columns.tolist()=}"
        raise AssertionError(msg)


def assert_metadata_values_all_allowed(
    indf: pd.DataFrame, metadata_key: str, allowed_values: Collection[str]
) -> None:
    """
    Assert that all values in a column are allowed

    Parameters
    ----------
    indf
        Data to verify

    metadata_key
        Column to check

    allowed_values
        Allowed values

    Raises
    ------
    AssertionError
        There are values in `metadata_key` which are not in `allowed_values`
    """
    disallowed = sorted(set(indf[metadata_key].unique()) - set(allowed_values))
    if disallowed:
        msg = (
            f"{metadata_key} contains values which are not allowed: {disallowed}. "
            f"allowed_values={sorted(allowed_values)}"
        )
        raise AssertionError(msg)
