"""Rate table module: pricing and value-driver reference data."""

from avd_business_case.rates.loader import get_rate_table, load_rate_table
from avd_business_case.rates.models import (
    AdminTier,
    CitrixRates,
    CostAssumptions,
    ImplementationTier,
    OnPremiseRates,
    PriceTier,
    RateTable,
    StorageRate,
    ValueMetrics,
    VMProfile,
    VMwareRates,
    select_tier,
)

__all__ = [
    "AdminTier",
    "CitrixRates",
    "CostAssumptions",
    "ImplementationTier",
    "OnPremiseRates",
    "PriceTier",
    "RateTable",
    "StorageRate",
    "ValueMetrics",
    "VMProfile",
    "VMwareRates",
    "get_rate_table",
    "load_rate_table",
    "select_tier",
]
