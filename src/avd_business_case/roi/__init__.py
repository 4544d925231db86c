"""ROI module: value streams, implementation cost and financial metrics."""

from avd_business_case.roi.models import ImplementationCost, ROIResult
from avd_business_case.roi.synthesizer import ROISynthesizer, calculate_npv
from avd_business_case.roi.value_streams import (
    calculate_carbon_footprint,
    calculate_environmental_impact,
    calculate_operational_savings,
    calculate_productivity_gains,
    calculate_security_value,
)

__all__ = [
    "ImplementationCost",
    "ROIResult",
    "ROISynthesizer",
    "calculate_carbon_footprint",
    "calculate_environmental_impact",
    "calculate_npv",
    "calculate_operational_savings",
    "calculate_productivity_gains",
    "calculate_security_value",
]
