"""
Generation of submissions in a reporting template's conventions

This takes model output (an observation table in the model's own naming),
maps it onto the template's variables and units,
checks it against the template
and, optionally, checks that reported totals equal the sum of their components.

Anything worth telling the user about (missing variables, unit mismatches, etc.)
is sent to this module's logger and, if a log file is given,
appended to that file.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from pathlib import Path

import numpy as np
import pandas as pd
from attrs import define
from pandas_openscm.grouping import groupby_except

from climassess.mappings import SupportedMapping, load_mapping
from climassess.quitte import (
    QUITTE_COLUMNS,
    QUITTE_METADATA_COLUMNS,
    assert_is_quitte,
    to_mif,
)
from climassess.templates import load_template
from climassess.typing import PathType, QuitteDataFrame, WideDataFrame
from climassess.units_helpers import are_units_equivalent

LOGGER = logging.getLogger(__name__)


@define
class SubmissionLog:
    """
    Destination for messages about a submission
    """

    log_file: Path | None = None
    """
    File to append messages to

    If `None`, messages only go to the module's logger.
    """

    def warning(self, msg: str) -> None:
        """
        Report a problem

        Parameters
        ----------
        msg
            Message to report
        """
        LOGGER.warning(msg)
        if self.log_file is not None:
            with open(self.log_file, "a") as fh:
                fh.write(f"{msg}\n")


def rename_and_convert_units(
    indf: QuitteDataFrame, mapping: pd.DataFrame, log: SubmissionLog
) -> QuitteDataFrame:
    """
    Rename variables and convert units following a mapping

    Contributions which map to the same template variable are summed.

    Parameters
    ----------
    indf
        Data to map

    mapping
        Mapping (see [climassess.mappings][])

    log
        Where to report variables from the mapping which are not in `indf`

    Returns
    -------
    :
        Data in the template's naming. Rows of `indf`
        which do not appear in the mapping are dropped.
    """
    mapping_renamed = mapping.rename(
        columns={"variable": "template_variable", "unit": "template_unit"}
    )
    merged = indf.merge(
        mapping_renamed,
        how="inner",
        left_on=["variable", "unit"],
        right_on=["piam_variable", "piam_unit"],
    )

    reported = set(zip(indf["variable"], indf["unit"]))
    missing = mapping[
        [
            (v, u) not in reported
            for v, u in zip(mapping["piam_variable"], mapping["piam_unit"])
        ]
    ]
    for (variable, unit), mdf in missing.groupby(["variable", "unit"], sort=True):
        sources = ", ".join(
            f"{v} ({u})" for v, u in zip(mdf["piam_variable"], mdf["piam_unit"])
        )
        log.warning(
            f"Missing in the data, needed for {variable} ({unit}): {sources}"
        )

    n_unmapped = len(set(indf["variable"]) - set(merged["variable"]))
    if n_unmapped:
        LOGGER.debug("%s variables in the data are not in the mapping", n_unmapped)

    if merged.empty:
        return pd.DataFrame(columns=list(QUITTE_COLUMNS))

    converted = pd.DataFrame(
        {
            "model": merged["model"],
            "scenario": merged["scenario"],
            "region": merged["region"],
            "variable": merged["template_variable"],
            "unit": merged["template_unit"],
            "period": merged["period"].astype(int),
            "piam_variable": merged["piam_variable"],
            "value": merged["value"] * merged["piam_factor"],
        }
    )

    summed = groupby_except(
        converted.set_index([*QUITTE_COLUMNS[:-1], "piam_variable"])["value"],
        ["piam_variable"],
    ).sum()

    return summed.reset_index()[list(QUITTE_COLUMNS)]


def check_against_template(
    indf: QuitteDataFrame, template: pd.DataFrame, log: SubmissionLog
) -> QuitteDataFrame:
    """
    Check data against a template

    Parameters
    ----------
    indf
        Data to check

    template
        Template (see [climassess.templates][])

    log
        Where to report problems

    Returns
    -------
    :
        `indf`, without variables that are not in the template
        and without variables whose unit does not match the template's unit.
        Units are written with the template's spelling.
    """
    allowed_units: dict[str, list[str]] = defaultdict(list)
    for variable, unit in zip(template["variable"], template["unit"]):
        allowed_units[variable].append(unit)

    in_template = indf["variable"].isin(list(allowed_units))
    not_in_template = sorted(indf.loc[~in_template, "variable"].unique())
    if not_in_template:
        log.warning(
            f"Variables not in the template, these are dropped: {not_in_template}"
        )

    res = indf.loc[in_template].copy()

    template_units = [
        _match_unit(unit, allowed_units[variable])
        for variable, unit in zip(res["variable"], res["unit"])
    ]
    unit_ok = np.array([u is not None for u in template_units], dtype=bool)
    if not unit_ok.all():
        bad = res.loc[~unit_ok, ["variable", "unit"]].drop_duplicates()
        for variable, unit in zip(bad["variable"], bad["unit"]):
            log.warning(
                f"Unit mismatch for {variable}: received {unit!r}, "
                f"template expects {allowed_units[variable]}. "
                "This variable is dropped."
            )

    res["unit"] = template_units
    # Different spellings of the same unit become one timeseries
    res = (
        res.loc[unit_ok]
        .groupby([*QUITTE_METADATA_COLUMNS, "period"], as_index=False, observed=True)[
            "value"
        ]
        .sum()
    )

    not_reported = sorted(set(allowed_units) - set(res["variable"]))
    if not_reported:
        log.warning(f"Template variables not reported: {not_reported}")

    return res


def _match_unit(unit: str, candidates: Iterable[str]) -> str | None:
    for candidate in candidates:
        if are_units_equivalent(unit, candidate):
            return candidate

    return None


def get_summation_differences(
    indf: QuitteDataFrame,
    rtol: float = 1e-2,
    atol: float = 1e-6,
    level_separator: str = "|",
) -> pd.DataFrame:
    """
    Get differences between reported totals and the sum of their components

    A variable `A|B` is treated as the total of all reported variables `A|B|C`
    with the same unit (only direct children, i.e. `A|B|C|D` is not included).
    Totals which have no reported components are not checked.

    Parameters
    ----------
    indf
        Data to check

    rtol
        Relative tolerance for the comparison

    atol
        Absolute tolerance for the comparison

    level_separator
        Separator between levels in variable names

    Returns
    -------
    :
        Totals which differ from the sum of their components,
        with the columns `reported` and `sum_of_components`.
        Empty if there are no differences.
    """
    index_cols = [*QUITTE_METADATA_COLUMNS, "period"]
    totals = indf.set_index(index_cols)["value"]

    components = indf.copy()
    components["variable"] = components["variable"].map(
        lambda v: v.rsplit(level_separator, 1)[0] if level_separator in v else None
    )
    sum_of_components = (
        components.dropna(subset=["variable"]).groupby(index_cols)["value"].sum()
    )

    totals_aligned, sum_aligned = totals.align(sum_of_components, join="inner")
    differences_locator = ~np.isclose(
        totals_aligned, sum_aligned, rtol=rtol, atol=atol
    )

    return pd.concat(
        [
            totals_aligned[differences_locator].rename("reported"),
            sum_aligned[differences_locator].rename("sum_of_components"),
        ],
        axis="columns",
    )


def to_wide(indf: QuitteDataFrame) -> WideDataFrame:
    """
    Convert submission data to the wide format used in submission files

    Parameters
    ----------
    indf
        Data to convert

    Returns
    -------
    :
        Wide data with capitalised metadata columns and one column per period
    """
    res = indf.set_index([*QUITTE_METADATA_COLUMNS, "period"])["value"].unstack(
        "period"
    )
    res.columns.name = None
    res = res.reset_index()
    res = res.rename(columns={c: c.capitalize() for c in QUITTE_METADATA_COLUMNS})

    return res


def write_submission(indf: QuitteDataFrame, output_filename: PathType) -> None:
    """
    Write a submission to disk

    Parameters
    ----------
    indf
        Data to write

    output_filename
        File to write to. The suffix decides the format:
        `.csv` (comma-separated) or `.mif` (semicolon-separated).

    Raises
    ------
    ValueError
        The suffix of `output_filename` is not supported
    """
    output_filename = Path(output_filename)
    wide = to_wide(indf)
    if output_filename.suffix == ".csv":
        wide.to_csv(output_filename, index=False)
    elif output_filename.suffix == ".mif":
        to_mif(wide, output_filename)
    else:
        msg = (
            f"Unsupported output format {output_filename.suffix!r}. "
            "Use '.csv' or '.mif'."
        )
        raise ValueError(msg)


def generate_iiasa_submission(  # noqa: PLR0913
    indf: QuitteDataFrame,
    mapping: str | SupportedMapping,
    output_filename: PathType | None = None,
    iiasa_template: PathType | None = None,
    log_file: PathType | None = None,
    check_summation: bool = True,
    mapping_dir: PathType | None = None,
    model: str | None = None,
    timesteps: Iterable[int] | None = None,
) -> QuitteDataFrame:
    """
    Generate a submission for an IIASA-hosted database/service

    Parameters
    ----------
    indf
        Model output, as an observation table in the model's own naming

    mapping
        Mapping to use

    output_filename
        If supplied, the submission is also written to this file
        (see [write_submission][(m).])

    iiasa_template
        Template to check the submission against

        If not supplied, no template check is done.

    log_file
        File to append messages about the submission to

        The file is never truncated, messages are always appended.

    check_summation
        Should we check that totals equal the sum of their components?

        Problems are reported, not raised.

    mapping_dir
        Directory to load the mapping from

        If not supplied, the mappings shipped with the package are used.

    model
        If supplied, the model column of the output is set to this value

    timesteps
        If supplied, only these periods are kept

    Returns
    -------
    :
        Submission, as an observation table in the template's naming

    Raises
    ------
    InvalidInputError
        `indf` is not an observation table

    InvalidArgumentError
        `mapping` is not a supported mapping
    """
    assert_is_quitte(indf, name="indf")
    mapping = SupportedMapping.from_user_value(mapping)
    log = SubmissionLog(log_file=None if log_file is None else Path(log_file))

    mapping_df = load_mapping(mapping, mapping_dir=mapping_dir)
    LOGGER.info("Generating submission using mapping %s", mapping.value)

    res = rename_and_convert_units(indf.dropna(subset=["value"]), mapping_df, log=log)

    if model is not None:
        res["model"] = model

    if timesteps is not None:
        res = res.loc[res["period"].isin(list(timesteps))]

    if iiasa_template is not None:
        res = check_against_template(res, load_template(iiasa_template), log=log)

    if check_summation:
        differences = get_summation_differences(res)
        if not differences.empty:
            log.warning(
                "Summing the components does not equal the total. "
                f"Differences:\n{differences}"
            )

    res = res.sort_values(["model", "scenario", "region", "variable", "period"])
    res = res.reset_index(drop=True)

    if output_filename is not None:
        write_submission(res, output_filename)

    return res
