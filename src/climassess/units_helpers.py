"""
Helpers for unit handling
"""

from __future__ import annotations

import re

EQUIVALENT_SUFFIX_PATTERN: re.Pattern[str] = re.compile(
    r"(?:-?equiv|-?eq|(?<=[0-9])e)(?=/|$)"
)
"""
Spellings of the equivalent marker at the end of a species

For example, the `-equiv` in `CO2-equiv`, the `eq` in `CO2eq`
and the `e` in `CO2e`.
"""


def normalise_unit_string(unit_str: str) -> str:
    """
    Normalise a unit string so that trivially different spellings compare equal

    All whitespace is removed and the different spellings of
    an equivalent species (`CO2-equiv`, `CO2-eq`, `CO2eq`, `CO2e`)
    are written as `CO2-equiv`.
    The bare species is left as is, i.e. `CO2` stays `CO2`.

    Parameters
    ----------
    unit_str
        Unit string to normalise

    Returns
    -------
    :
        Normalised unit string

    Examples
    --------
    >>> normalise_unit_string("Mt CO2 / yr")
    'MtCO2/yr'
    >>> normalise_unit_string("Mt CO2e/yr")
    'MtCO2-equiv/yr'
    """
    no_whitespace = "".join(unit_str.split())

    return "/".join(
        EQUIVALENT_SUFFIX_PATTERN.sub("-equiv", part)
        for part in no_whitespace.split("/")
    )


def are_units_equivalent(unit_a: str, unit_b: str) -> bool:
    """
    Check whether two unit strings refer to the same unit

    This is a string comparison after [normalise_unit_string][(m).],
    no unit conversion is attempted
    (e.g. `"kt N2O/yr"` and `"Mt N2O/yr"` are not equivalent,
    neither are `"Mt CO2/yr"` and `"Mt CO2-equiv/yr"`).

    Parameters
    ----------
    unit_a
        First unit

    unit_b
        Second unit

    Returns
    -------
    :
        `True` if the units are equivalent, otherwise `False`
    """
    return normalise_unit_string(unit_a) == normalise_unit_string(unit_b)
