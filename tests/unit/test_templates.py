"""
Tests of `climassess.templates`
"""

from __future__ import annotations

import re

import pandas as pd
import pytest

from climassess.exceptions import SchemaMismatchError, TemplateFileNotFoundError
from climassess.templates import get_default_variables_file, load_template


def test_default_variables_file():
    res = get_default_variables_file()

    assert res.name == "climate_assessment_variables.yaml"
    assert res.exists()


def test_load_default_template():
    res = load_template(get_default_variables_file())

    assert res.columns.tolist() == ["variable", "unit"]
    for variable, unit in (
        ("Emissions|CO2", "Mt CO2/yr"),
        ("Emissions|CO2|AFOLU", "Mt CO2/yr"),
        ("Emissions|N2O", "kt N2O/yr"),
        ("Emissions|Sulfur", "Mt SO2/yr"),
    ):
        assert unit in res.loc[res["variable"] == variable, "unit"].tolist()


def test_load_yaml_template(tmp_path):
    template_file = tmp_path / "template.yaml"
    template_file.write_text(
        "- Emissions|CO2:\n"
        "    description: CO2\n"
        "    unit: Mt CO2/yr\n"
        "- Emissions|F-Gases:\n"
        "    unit: [Mt CO2-equiv/yr, Mt CO2e/yr]\n"
        "- Population:\n"
        "    description: No unit given\n"
        "- Dimensionless:\n"
    )

    res = load_template(template_file)

    exp = pd.DataFrame(
        [
            ("Emissions|CO2", "Mt CO2/yr"),
            ("Emissions|F-Gases", "Mt CO2-equiv/yr"),
            ("Emissions|F-Gases", "Mt CO2e/yr"),
            ("Population", ""),
            ("Dimensionless", ""),
        ],
        columns=["variable", "unit"],
    )
    pd.testing.assert_frame_equal(res, exp)


def test_load_csv_template(tmp_path):
    template_file = tmp_path / "template.csv"
    template_file.write_text(
        "Variable;Unit;Description\n"
        "Emissions|CO2;Mt CO2/yr;CO2\n"
        "Emissions|CH4;Mt CH4/yr;CH4\n"
    )

    res = load_template(template_file)

    exp = pd.DataFrame(
        [("Emissions|CO2", "Mt CO2/yr"), ("Emissions|CH4", "Mt CH4/yr")],
        columns=["variable", "unit"],
    )
    pd.testing.assert_frame_equal(res, exp)


def test_load_template_missing_file(tmp_path):
    with pytest.raises(
        TemplateFileNotFoundError, match=re.escape("Variables template not found")
    ):
        load_template(tmp_path / "missing.yaml")


def test_template_not_found_is_file_not_found():
    with pytest.raises(FileNotFoundError):
        load_template("/this/path/does/not/exist.yaml")


@pytest.mark.parametrize(
    "content, match",
    (
        pytest.param(
            "Emissions|CO2:\n  unit: Mt CO2/yr\n",
            "expected a list of variables",
            id="not-a-list",
        ),
        pytest.param(
            "- Emissions|CO2: {unit: Mt CO2/yr}\n  Emissions|CH4: {unit: Mt CH4/yr}\n",
            "expected a single variable per list item",
            id="two-variables-in-one-item",
        ),
    ),
)
def test_load_yaml_template_bad_structure(tmp_path, content, match):
    template_file = tmp_path / "template.yaml"
    template_file.write_text(content)

    with pytest.raises(SchemaMismatchError, match=re.escape(match)):
        load_template(template_file)


def test_load_template_unsupported_format(tmp_path):
    template_file = tmp_path / "template.xlsx"
    template_file.write_bytes(b"")

    with pytest.raises(
        SchemaMismatchError, match=re.escape("unsupported template format '.xlsx'")
    ):
        load_template(template_file)


def test_load_csv_template_missing_columns(tmp_path):
    template_file = tmp_path / "template.csv"
    template_file.write_text("Variable,Description\nEmissions|CO2,CO2\n")

    with pytest.raises(
        SchemaMismatchError, match=re.escape("expected columns variable and unit")
    ):
        load_template(template_file)
