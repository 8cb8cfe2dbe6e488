"""
Preparation of emissions data for climate assessment

The climate-assessment workflow expects global emissions,
named following a reporting template,
in wide format (one row per variable, one column per year).
This module takes model output in long format and produces exactly that.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import attr
import pandas as pd
from attrs import define, field
from pandas_indexing import assignlevel

from climassess.assertions import (
    assert_has_columns,
    assert_metadata_values_all_allowed,
)
from climassess.exceptions import NonUniquePivotError
from climassess.mappings import SupportedMapping, get_default_mapping_dir
from climassess.quitte import assert_is_quitte
from climassess.submission import generate_iiasa_submission
from climassess.templates import get_default_variables_file
from climassess.typing import PathType, QuitteDataFrame, WideDataFrame

LOGGER = logging.getLogger(__name__)

MODEL_NAME: str = "REMIND"
"""
Model name written in every row of the output
"""

WORLD_REGION: str = "World"
"""
Region name written in every row of the output
"""

GLOBAL_REGIONS: tuple[str, ...] = ("GLO", "World")
"""
Regions which hold global data in model output
"""


def filter_global_regions(
    qf: QuitteDataFrame,
    global_regions: Iterable[str] = GLOBAL_REGIONS,
    region_col: str = "region",
) -> QuitteDataFrame:
    """
    Keep only rows which hold global data

    Parameters
    ----------
    qf
        Data to filter

    global_regions
        Regions which hold global data (exact, case-sensitive match)

    region_col
        Column which holds the region

    Returns
    -------
    :
        Rows of `qf` whose region is in `global_regions`
    """
    return qf.loc[qf[region_col].isin(list(global_regions))]


def title_case(name: str) -> str:
    """
    Convert a string to title case

    The first letter of each whitespace-delimited word is made upper case
    and the rest of the word lower case.
    Whitespace is left untouched.

    Parameters
    ----------
    name
        String to convert

    Returns
    -------
    :
        `name` in title case

    Examples
    --------
    >>> title_case("period")
    'Period'
    >>> title_case("unit type")
    'Unit Type'
    >>> title_case(title_case("unit type"))
    'Unit Type'
    """
    return re.sub(r"\S+", _title_case_word, name)


def _title_case_word(match: re.Match[str]) -> str:
    word = match.group(0)

    return word[0].upper() + word[1:].lower()


def title_case_columns(indf: pd.DataFrame) -> pd.DataFrame:
    """
    Convert all column names to title case

    Parameters
    ----------
    indf
        Data whose columns to rename

    Returns
    -------
    :
        `indf` with its columns converted with [title_case][(m).]
    """
    return indf.rename(columns=lambda c: title_case(c) if isinstance(c, str) else c)


def pivot_to_wide(
    indf: pd.DataFrame,
    constant_columns: dict[str, Any] | None = None,
    period_col: str = "Period",
    value_col: str = "Value",
) -> WideDataFrame:
    """
    Pivot long data to wide data

    All columns other than `period_col` and `value_col` are used as the row key.

    Parameters
    ----------
    indf
        Data to pivot

    constant_columns
        Columns to set to a constant value before pivoting

        Existing columns are overwritten, other columns are added.

    period_col
        Column whose values become the columns of the output

    value_col
        Column which holds the values

    Returns
    -------
    :
        Wide data, one row per key and one column per period (sorted)

    Raises
    ------
    NonUniquePivotError
        More than one row has the same key and period
    """
    assert_has_columns(indf, [period_col, value_col])

    key_cols = [c for c in indf.columns if c not in (period_col, value_col)]
    indexed = indf.set_index([*key_cols, period_col])[value_col]
    if constant_columns:
        indexed = assignlevel(indexed, **constant_columns)

    duplicated = indexed.index.duplicated(keep=False)
    if duplicated.any():
        raise NonUniquePivotError(indexed.index[duplicated])

    res = indexed.unstack(period_col)
    res.columns.name = None

    return res.reset_index()


@define
class ClimateAssessmentPreparer:
    """
    Prepare emissions for climate assessment

    The data is restricted to global regions,
    mapped to the template's naming with
    [generate_iiasa_submission][climassess.submission.]
    and reshaped to wide format.
    """

    mapping: SupportedMapping = field(
        default=SupportedMapping.AR6, converter=SupportedMapping.from_user_value
    )
    """
    Mapping from model variables to template variables
    """

    variables_file: Path = field(factory=get_default_variables_file, converter=Path)
    """
    Template of the variables needed for climate assessment
    """

    log_file: Path | None = field(
        default=None, converter=attr.converters.optional(Path)
    )
    """
    File to which problems found while mapping are appended

    This is written by the mapping step, not by this class.
    """

    mapping_dir: Path = field(factory=get_default_mapping_dir, converter=Path)
    """
    Directory holding the mapping files
    """

    model_name: str = MODEL_NAME
    """
    Value of `Model` in the output
    """

    world_region: str = WORLD_REGION
    """
    Value of `Region` in the output
    """

    global_regions: tuple[str, ...] = field(default=GLOBAL_REGIONS, converter=tuple)
    """
    Regions which hold global data in the input
    """

    run_checks: bool = True
    """
    If `True`, check the output of the mapping step before reshaping it
    """

    @global_regions.validator
    def validate_global_regions(
        self, attribute: attr.Attribute[Any], value: tuple[str, ...]
    ) -> None:
        """
        Validate the global regions value
        """
        if not value:
            msg = "At least one global region is required"
            raise ValueError(msg)

    def __call__(self, qf: QuitteDataFrame, scenario: str) -> WideDataFrame:
        """
        Prepare emissions for climate assessment

        Parameters
        ----------
        qf
            Emissions, as an observation table

        scenario
            Scenario name to write in every row of the output

        Returns
        -------
        :
            Emissions for climate assessment, one row per variable
            and one column per period

        Raises
        ------
        InvalidInputError
            `qf` is not an observation table
        """
        assert_is_quitte(qf, name="qf")

        global_data = filter_global_regions(qf, global_regions=self.global_regions)
        LOGGER.debug(
            "Kept %s of %s rows with regions in %s",
            len(global_data),
            len(qf),
            self.global_regions,
        )

        submission = generate_iiasa_submission(
            global_data,
            mapping=self.mapping,
            output_filename=None,
            iiasa_template=self.variables_file,
            log_file=self.log_file,
            check_summation=False,
            mapping_dir=self.mapping_dir,
        )
        if self.run_checks:
            assert_metadata_values_all_allowed(
                submission, metadata_key="region", allowed_values=self.global_regions
            )

        return pivot_to_wide(
            title_case_columns(submission),
            constant_columns={
                "Model": self.model_name,
                "Region": self.world_region,
                "Scenario": scenario,
            },
        )


def emission_data_for_climate_assessment(  # noqa: PLR0913
    qf: QuitteDataFrame,
    scenario: str,
    mapping: str | SupportedMapping = "AR6",
    variables_file: PathType | None = None,
    log_file: PathType | None = None,
    mapping_dir: PathType | None = None,
) -> WideDataFrame:
    """
    Convert model emissions from long to wide format for climate assessment

    Only the regions "GLO" and "World" are considered.
    Only the variables in the template are kept.
    The output has one row per variable and one column per period,
    with `Model`, `Region` and `Scenario` set to
    [MODEL_NAME][(m).], [WORLD_REGION][(m).] and `scenario` respectively.

    Parameters
    ----------
    qf
        Emissions data, as an observation table

    scenario
        Name of the scenario

    mapping
        Mapping to use, one of "AR6", "NGFS_AR6", "AR6_MAgPIE"
        or "climateassessment"

    variables_file
        Template of the variables needed for climate assessment

        If not supplied, the template shipped with the package is used
        (see [get_default_variables_file][climassess.templates.]).

    log_file
        File to which problems found while mapping are appended

    mapping_dir
        Directory holding the mapping files

        If not supplied, the mappings shipped with the package are used.

    Returns
    -------
    :
        Emissions data reshaped for climate assessment

    Raises
    ------
    InvalidInputError
        `qf` is not an observation table

    InvalidArgumentError
        `mapping` is not a supported mapping
    """
    # Checked before the preparer is built, building it validates `mapping`
    assert_is_quitte(qf, name="qf")

    kwargs: dict[str, Any] = dict(mapping=mapping, log_file=log_file)
    if variables_file is not None:
        kwargs["variables_file"] = variables_file

    if mapping_dir is not None:
        kwargs["mapping_dir"] = mapping_dir

    preparer = ClimateAssessmentPreparer(**kwargs)

    return preparer(qf, scenario=scenario)
