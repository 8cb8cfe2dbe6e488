# ---
# jupyter:
#   jupytext:
#     text_representation:
#       extension: .py
#       format_name: percent
#       format_version: '1.3'
#       jupytext_version: 1.16.6
#   kernelspec:
#     display_name: Python 3 (ipykernel)
#     language: python
#     name: python3
# ---

# %% [markdown]
# # How to prepare emissions for climate assessment
#
# Here we demonstrate how to take emissions reported by REMIND
# and turn them into the input expected by the
# [climate-assessment](https://github.com/iiasa/climate-assessment) workflow.

# %% [markdown]
# ## Imports

# %%
import logging
import tempfile
from pathlib import Path

from climassess import emission_data_for_climate_assessment
from climassess.testing import create_quitte

# %%
# Show what the mapping step has to say
logging.basicConfig(level=logging.WARNING)

# %% [markdown]
# ## Starting point
#
# The starting point is model output in long format,
# i.e. a pandas `DataFrame` with one observation per row and the columns
# `["model", "scenario", "region", "variable", "unit", "period", "value"]`.
# If your data is in a `.mif` file, use `climassess.quitte.read_mif`.

# %%
qf = create_quitte(
    [
        ("REMIND", "SSP2", "World", "Emi|CO2", "Mt CO2/yr", 2020, 38.5),
        ("REMIND", "SSP2", "World", "Emi|CO2", "Mt CO2/yr", 2030, 30.1),
        ("REMIND", "SSP2", "World", "Emi|CO2|+|Energy", "Mt CO2/yr", 2020, 34.0),
        ("REMIND", "SSP2", "World", "Emi|CO2|+|Energy", "Mt CO2/yr", 2030, 27.0),
        ("REMIND", "SSP2", "World", "Emi|CH4", "Mt CH4/yr", 2020, 380.0),
        ("REMIND", "SSP2", "World", "Emi|CH4", "Mt CH4/yr", 2030, 350.0),
        # Regional data is ignored
        ("REMIND", "SSP2", "EUR", "Emi|CH4", "Mt CH4/yr", 2020, 20.0),
    ]
)
qf

# %% [markdown]
# ## Preparing the emissions
#
# Only global data ("GLO" or "World") is used.
# Variables are renamed using the chosen mapping
# and checked against the climate-assessment variables template.
# Anything that is missing is appended to the log file.

# %%
log_file = Path(tempfile.mkdtemp()) / "missing.log"

emissions = emission_data_for_climate_assessment(
    qf,
    scenario="SSP2-NPi",
    mapping="AR6",
    log_file=log_file,
)
emissions

# %%
print(log_file.read_text())
