"""
Type hints that are used throughout
"""

from __future__ import annotations

from os import PathLike
from typing import Union

import numpy as np
import pandas as pd
from typing_extensions import TypeAlias

NUMERIC_DATA: TypeAlias = Union[float, int, np.floating, np.integer]
"""
Type alias for a value that can be used in the `value` column of a [QuitteDataFrame][(m).]
"""

TIME_POINT: TypeAlias = int
"""
Type alias for a value that can be used in the `period` column of a [QuitteDataFrame][(m).]
"""

PathType: TypeAlias = Union[str, PathLike[str]]
"""
Type alias for anything we accept as a path
"""

QuitteDataFrame: TypeAlias = pd.DataFrame
"""
Type alias for the long-format [pandas.DataFrame][pd.DataFrame] shape we take as input

For typing purposes, this is just a direct alias of [pandas.DataFrame][pd.DataFrame].
However, the point of defining this
is to provide greater clarity of the kind of data we expect.

We expect one observation per row.
Each row is described by the columns
`model`, `scenario`, `region`, `variable`, `unit` and `period`,
the observed number is in the `value` column.

```python
  model scenario region       variable        unit  period  value
REMIND     SSP2  World  Emi|CO2 Mt CO2/yr    2020   40.1
REMIND     SSP2  World  Emi|CO2 Mt CO2/yr    2030   35.2
```
"""

WideDataFrame: TypeAlias = pd.DataFrame
"""
Type alias for the wide-format [pandas.DataFrame][pd.DataFrame] shape we produce

Metadata is held in ordinary columns,
followed by one column per period.

```python
 Model Scenario Region       Variable        Unit  2020  2030
REMIND     SSP2  World  Emissions|CO2 Mt CO2/yr  40.1  35.2
```
"""
