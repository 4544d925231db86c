"""Costing module for current/future state and TCO calculations."""

from avd_business_case.costing.calculator import PLATFORMS, CostCalculator
from avd_business_case.costing.models import (
    CurrentStateCost,
    FutureStateCost,
    PerUserEconomics,
    TCOResult,
)

__all__ = [
    "PLATFORMS",
    "CostCalculator",
    "CurrentStateCost",
    "FutureStateCost",
    "PerUserEconomics",
    "TCOResult",
]
