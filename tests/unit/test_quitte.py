"""
Tests of `climassess.quitte`
"""

from __future__ import annotations

import re
from contextlib import nullcontext as does_not_raise

import pandas as pd
import pytest

from climassess.exceptions import InvalidInputError
from climassess.quitte import assert_is_quitte, is_quitte, read_mif, to_mif
from climassess.testing import create_quitte

VALID = create_quitte(
    [
        ("REMIND", "SSP2", "World", "Emi|CO2", "Mt CO2/yr", 2020, 40.0),
        ("REMIND", "SSP2", "World", "Emi|CO2", "Mt CO2/yr", 2030, 35.0),
    ]
)


@pytest.mark.parametrize(
    "obj, exp",
    (
        pytest.param(VALID, True, id="valid"),
        pytest.param(
            VALID.assign(period=VALID["period"].astype(float)),
            True,
            id="whole-number-float-periods",
        ),
        pytest.param(VALID.drop(columns="region"), False, id="missing-region"),
        pytest.param(VALID.drop(columns="value"), False, id="missing-value"),
        pytest.param(
            VALID.assign(value=["a", "b"]), False, id="non-numeric-value"
        ),
        pytest.param(
            VALID.assign(period=[2020.5, 2030.0]), False, id="non-year-period"
        ),
        pytest.param(
            VALID.assign(period=["2020", "2030"]), False, id="string-period"
        ),
        pytest.param(VALID.to_dict(), False, id="dict"),
        pytest.param(None, False, id="none"),
    ),
)
def test_is_quitte(obj, exp):
    assert is_quitte(obj) == exp


@pytest.mark.parametrize(
    "obj, expectation",
    (
        pytest.param(VALID, does_not_raise(), id="valid"),
        pytest.param(
            VALID.drop(columns=["region", "unit"]),
            pytest.raises(
                InvalidInputError,
                match=re.escape(
                    "qf must be an observation (quitte-style) table. "
                    "Problems found: missing columns ['region', 'unit']"
                ),
            ),
            id="missing-columns",
        ),
        pytest.param(
            [1, 2, 3],
            pytest.raises(
                InvalidInputError,
                match=re.escape("expected a pandas DataFrame, received list"),
            ),
            id="list",
        ),
    ),
)
def test_assert_is_quitte(obj, expectation):
    with expectation:
        assert_is_quitte(obj)


def test_invalid_input_error_is_type_error():
    with pytest.raises(TypeError):
        assert_is_quitte("not a table")


def test_read_mif(tmp_path):
    mif_file = tmp_path / "REMIND_generic_SSP2.mif"
    mif_file.write_text(
        "Model;Scenario;Region;Variable;Unit;2020;2030;\n"
        "REMIND;SSP2;World;Emi|CO2;Mt CO2/yr;40;35;\n"
        "REMIND;SSP2;DEU;Emi|CO2;Mt CO2/yr;0.7;N/A;\n"
    )

    res = read_mif(mif_file)

    exp = create_quitte(
        [
            ("REMIND", "SSP2", "World", "Emi|CO2", "Mt CO2/yr", 2020, 40.0),
            ("REMIND", "SSP2", "DEU", "Emi|CO2", "Mt CO2/yr", 2020, 0.7),
            ("REMIND", "SSP2", "World", "Emi|CO2", "Mt CO2/yr", 2030, 35.0),
        ]
    )
    pd.testing.assert_frame_equal(res, exp)
    assert is_quitte(res)


def test_to_mif_read_mif(tmp_path):
    wide = pd.DataFrame(
        [("REMIND", "SSP2", "World", "Emissions|CO2", "Mt CO2/yr", 40.0, 35.0)],
        columns=["Model", "Scenario", "Region", "Variable", "Unit", 2020, 2030],
    )
    out = tmp_path / "out.mif"

    to_mif(wide, out)

    assert out.read_text().splitlines()[0] == (
        "Model;Scenario;Region;Variable;Unit;2020;2030"
    )
    res = read_mif(out)
    assert res["period"].tolist() == [2020, 2030]
    assert res["value"].tolist() == [40.0, 35.0]
