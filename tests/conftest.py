"""
Re-useable fixtures etc. for tests

See https://docs.pytest.org/en/7.1.x/reference/fixtures.html#conftest-py-sharing-fixtures-across-multiple-files
"""

from pathlib import Path

import pandas as pd
import pytest

from climassess.testing import write_mapping_file

REPO_ROOT = Path(__file__).parents[1]


@pytest.fixture(scope="session", autouse=True)
def pandas_terminal_width():
    # Set pandas terminal width so that doctests don't depend on terminal width.

    # We set the display width to 120 because examples should be short,
    # anything more than this is too wide to read in the source.
    pd.set_option("display.width", 120)

    # Display as many columns as you want (i.e. let the display width do the
    # truncation)
    pd.set_option("display.max_columns", 1000)


@pytest.fixture
def identity_mapping_dir(tmp_path):
    """
    Mapping directory in which AR6 maps template names onto themselves
    """
    write_mapping_file(
        tmp_path,
        "AR6",
        [
            ("Emissions|CO2", "Mt CO2/yr", "Emissions|CO2", "Mt CO2/yr", 1.0),
            ("Emissions|CH4", "Mt CH4/yr", "Emissions|CH4", "Mt CH4/yr", 1.0),
        ],
    )

    return tmp_path


@pytest.fixture
def co2_ch4_template(tmp_path):
    """
    Template with only CO2 and CH4
    """
    out = tmp_path / "template.yaml"
    out.write_text(
        "- Emissions|CO2:\n"
        "    unit: Mt CO2/yr\n"
        "- Emissions|CH4:\n"
        "    unit: Mt CH4/yr\n"
    )

    return out
