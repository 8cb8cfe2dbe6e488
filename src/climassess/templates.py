"""
Reporting templates, i.e. the variables (and units) a submission may contain
"""

from __future__ import annotations

import importlib.resources
from pathlib import Path
from typing import Any

import pandas as pd
import yaml

from climassess.exceptions import SchemaMismatchError, TemplateFileNotFoundError
from climassess.typing import PathType

DEFAULT_VARIABLES_FILE_NAME: str = "climate_assessment_variables.yaml"
"""
Name of the packaged variables template
"""


def get_default_variables_file() -> Path:
    """
    Get the variables template shipped with the package

    Returns
    -------
    :
        Path to the packaged climate-assessment variables template
    """
    return Path(
        str(
            importlib.resources.files("climassess")
            / "data"
            / "templates"
            / DEFAULT_VARIABLES_FILE_NAME
        )
    )


def load_template(path: PathType) -> pd.DataFrame:
    """
    Load a variables template

    Two formats are supported:

    - YAML in the nomenclature style, i.e. a list of single-key mappings
      from variable name to its attributes (of which only `unit` is used)
    - CSV (comma or semicolon separated)
      with (at least) the columns `variable` and `unit`

    Parameters
    ----------
    path
        Path to the template

    Returns
    -------
    :
        Template with the columns `variable` and `unit`.
        A variable with several acceptable units appears once per unit.

    Raises
    ------
    TemplateFileNotFoundError
        `path` does not exist

    SchemaMismatchError
        The file's contents could not be interpreted as a template
    """
    path = Path(path)
    if not path.exists():
        raise TemplateFileNotFoundError(path)

    if path.suffix in (".yaml", ".yml"):
        with open(path) as fh:
            raw = yaml.safe_load(fh)

        return _template_from_yaml(raw, source=path)

    if path.suffix == ".csv":
        with open(path) as fh:
            header = fh.readline()

        raw_df = pd.read_csv(path, sep=";" if ";" in header else ",", dtype=str)
        raw_df.columns = raw_df.columns.str.lower()
        if not {"variable", "unit"}.issubset(raw_df.columns):
            raise SchemaMismatchError(path, "expected columns variable and unit")

        return (
            raw_df[["variable", "unit"]].fillna({"unit": ""}).reset_index(drop=True)
        )

    raise SchemaMismatchError(path, f"unsupported template format {path.suffix!r}")


def _template_from_yaml(raw: Any, source: Path) -> pd.DataFrame:
    if not isinstance(raw, list):
        raise SchemaMismatchError(source, "expected a list of variables")

    rows = []
    for item in raw:
        if not isinstance(item, dict) or len(item) != 1:
            raise SchemaMismatchError(
                source, f"expected a single variable per list item, received {item!r}"
            )

        ((variable, attributes),) = item.items()
        attributes = attributes or {}
        units = attributes.get("unit")
        if not isinstance(units, list):
            units = [units]

        # One row per acceptable unit
        rows.extend((variable, "" if u is None else str(u)) for u in units or [None])

    return pd.DataFrame(rows, columns=["variable", "unit"])
