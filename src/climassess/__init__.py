"""
Preparation of Integrated Assessment Model (IAM) emissions for climate assessment
"""

import importlib.metadata

from climassess.climate_assessment import (
    ClimateAssessmentPreparer,
    emission_data_for_climate_assessment,
)
from climassess.mappings import SupportedMapping

__version__ = importlib.metadata.version("climassess")

__all__ = [
    "ClimateAssessmentPreparer",
    "SupportedMapping",
    "emission_data_for_climate_assessment",
]
