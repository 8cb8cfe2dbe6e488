"""
Code to support our tests

This is here, rather than in our `tests` directory
because of the issues that come
when you turn your tests into a package using `__init__.py` files
(for details, see https://docs.pytest.org/en/7.1.x/explanation/goodpractices.html#choosing-an-import-mode).
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pandas as pd

from climassess.mappings import MAPPING_COLUMNS
from climassess.quitte import QUITTE_COLUMNS
from climassess.typing import QuitteDataFrame


def create_quitte(rows: Iterable[tuple[Any, ...]]) -> QuitteDataFrame:
    """
    Create an observation table

    Parameters
    ----------
    rows
        Rows, each of which is
        `(model, scenario, region, variable, unit, period, value)`

    Returns
    -------
    :
        Observation table
    """
    res = pd.DataFrame(list(rows), columns=list(QUITTE_COLUMNS))
    res["period"] = res["period"].astype(int)
    res["value"] = res["value"].astype(float)

    return res


def write_mapping_file(
    mapping_dir: Path, name: str, rows: Iterable[tuple[Any, ...]]
) -> Path:
    """
    Write a mapping file

    Parameters
    ----------
    mapping_dir
        Directory in which to write the file

    name
        Name of the mapping (e.g. "AR6")

    rows
        Rows, each of which is
        `(variable, unit, piam_variable, piam_unit, piam_factor)`

    Returns
    -------
    :
        Path to the written file
    """
    out = mapping_dir / f"mapping_{name}.csv"
    pd.DataFrame(list(rows), columns=list(MAPPING_COLUMNS)).to_csv(
        out, sep=";", index=False
    )

    return out


def assert_frame_equal(
    res: pd.DataFrame,
    exp: pd.DataFrame,
    key_cols: Iterable[str] = ("Model", "Scenario", "Region", "Variable", "Unit"),
    rtol: float = 1e-8,
    **kwargs: Any,
) -> None:
    """
    Assert two wide [pd.DataFrame][pandas.DataFrame]'s are equal.

    This is a very thin wrapper around
    [pd.testing.assert_frame_equal][pandas.testing.assert_frame_equal]
    that ignores the order of rows and columns
    and gives slightly clearer errors when the rows don't match.

    Parameters
    ----------
    res
        Result

    exp
        Expected value

    key_cols
        Columns which identify each row

    rtol
        Relative tolerance

    **kwargs
        Passed to [pd.testing.assert_frame_equal][pandas.testing.assert_frame_equal]

    Raises
    ------
    AssertionError
        The frames aren't equal
    """
    key_cols = list(key_cols)

    res_keys = pd.MultiIndex.from_frame(res[key_cols])
    exp_keys = pd.MultiIndex.from_frame(exp[key_cols])
    key_diffs = res_keys.symmetric_difference(exp_keys)
    if not key_diffs.empty:
        msg = f"Differences in the rows (res on the left): {key_diffs=}"
        raise AssertionError(msg)

    pd.testing.assert_frame_equal(
        res.set_index(key_cols).sort_index(),
        exp.set_index(key_cols).sort_index(),
        check_like=True,
        check_exact=False,
        rtol=rtol,
        **kwargs,
    )
