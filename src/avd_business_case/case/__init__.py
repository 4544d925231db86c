"""Business case module: customer inputs to a complete cost and ROI case."""

from avd_business_case.case.builder import BusinessCaseBuilder
from avd_business_case.case.models import (
    BusinessCaseResult,
    CurrentStateConfig,
    CustomerProfile,
    FutureStateConfig,
)

__all__ = [
    "BusinessCaseBuilder",
    "BusinessCaseResult",
    "CurrentStateConfig",
    "CustomerProfile",
    "FutureStateConfig",
]
