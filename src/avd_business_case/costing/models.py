"""Data models for the costing module.

All amounts are USD, percentages are raw numbers (55.0 means 55%).
"""

from dataclasses import dataclass, field
from typing import Any

MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class VMCost:
    """Session host cost."""

    count: int
    sku: str
    monthly_cost: float

    @property
    def annual_cost(self) -> float:
        return self.monthly_cost * MONTHS_PER_YEAR


@dataclass(frozen=True)
class StorageCost:
    """Profile storage cost."""

    total_gb: float
    type: str
    monthly_cost: float

    @property
    def annual_cost(self) -> float:
        return self.monthly_cost * MONTHS_PER_YEAR


@dataclass(frozen=True)
class AutoScalingSavings:
    """VM cost avoided by scaling hosts to demand."""

    savings_percent: float
    monthly_savings: float

    @property
    def annual_savings(self) -> float:
        return self.monthly_savings * MONTHS_PER_YEAR


@dataclass(frozen=True)
class NerdioCost:
    """Nerdio Manager licensing."""

    enabled: bool
    monthly_cost: float = 0.0
    price_per_user: float = 0.0
    tier: str | None = None

    @property
    def annual_cost(self) -> float:
        return self.monthly_cost * MONTHS_PER_YEAR


@dataclass(frozen=True)
class FutureStateCost:
    """Azure Virtual Desktop (optionally Nerdio-managed) cost breakdown."""

    user_count: int
    vms: VMCost
    storage: StorageCost
    auto_scaling: AutoScalingSavings
    nerdio: NerdioCost

    @property
    def monthly_gross(self) -> float:
        """Monthly cost before auto-scaling savings."""
        return self.vms.monthly_cost + self.storage.monthly_cost + self.nerdio.monthly_cost

    @property
    def monthly_net(self) -> float:
        """Monthly cost after auto-scaling savings."""
        return self.monthly_gross - self.auto_scaling.monthly_savings

    @property
    def annual_gross(self) -> float:
        return self.monthly_gross * MONTHS_PER_YEAR

    @property
    def annual_net(self) -> float:
        return self.monthly_net * MONTHS_PER_YEAR

    @property
    def per_user_monthly(self) -> float:
        return self.monthly_net / self.user_count

    @property
    def per_user_annual(self) -> float:
        return self.annual_net / self.user_count

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        nerdio: dict[str, Any] = {
            "enabled": self.nerdio.enabled,
            "monthly_cost": self.nerdio.monthly_cost,
            "annual_cost": self.nerdio.annual_cost,
        }
        if self.nerdio.enabled:
            nerdio["price_per_user"] = self.nerdio.price_per_user
            nerdio["tier"] = self.nerdio.tier

        return {
            "user_count": self.user_count,
            "infrastructure": {
                "vms": {
                    "count": self.vms.count,
                    "sku": self.vms.sku,
                    "monthly_cost": self.vms.monthly_cost,
                    "annual_cost": self.vms.annual_cost,
                },
                "storage": {
                    "total_gb": self.storage.total_gb,
                    "type": self.storage.type,
                    "monthly_cost": self.storage.monthly_cost,
                    "annual_cost": self.storage.annual_cost,
                },
                "auto_scaling": {
                    "savings_percent": self.auto_scaling.savings_percent,
                    "monthly_savings": self.auto_scaling.monthly_savings,
                    "annual_savings": self.auto_scaling.annual_savings,
                },
            },
            "software": {"nerdio_manager": nerdio},
            "totals": {
                "monthly_gross": self.monthly_gross,
                "monthly_net": self.monthly_net,
                "annual_gross": self.annual_gross,
                "annual_net": self.annual_net,
                "per_user_monthly": self.per_user_monthly,
                "per_user_annual": self.per_user_annual,
            },
        }


@dataclass(frozen=True)
class CurrentStateCost:
    """Cost of the existing Citrix, VMware or on-premise estate."""

    platform: str
    monthly: float
    user_count: int
    server_count: int
    breakdown: dict[str, float] = field(default_factory=dict)
    custom_override: bool = False

    @property
    def annual(self) -> float:
        return self.monthly * MONTHS_PER_YEAR

    @property
    def per_user_monthly(self) -> float:
        return self.monthly / self.user_count

    @property
    def per_user_annual(self) -> float:
        return self.annual / self.user_count

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "platform": self.platform,
            "costs": {
                "monthly": self.monthly,
                "annual": self.annual,
                "per_user_monthly": self.per_user_monthly,
                "per_user_annual": self.per_user_annual,
            },
            "breakdown": dict(self.breakdown),
            "custom_override": self.custom_override,
            "metadata": {
                "user_count": self.user_count,
                "server_count": self.server_count,
            },
        }


@dataclass(frozen=True)
class StateTotals:
    """One side of a TCO comparison."""

    annual_cost: float
    total_cost: float

    @property
    def monthly_average(self) -> float:
        return self.annual_cost / MONTHS_PER_YEAR

    def to_dict(self) -> dict[str, Any]:
        return {
            "annual_cost": self.annual_cost,
            "total_cost": self.total_cost,
            "monthly_average": self.monthly_average,
        }


@dataclass(frozen=True)
class TCOResult:
    """Total cost of ownership comparison over a time horizon."""

    years: int
    current_state: StateTotals
    future_state: StateTotals
    savings_annual: float
    savings_total: float
    savings_percentage: float
    recommendation: str

    @property
    def months(self) -> int:
        return self.years * MONTHS_PER_YEAR

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "time_horizon": {"years": self.years, "months": self.months},
            "current_state": self.current_state.to_dict(),
            "future_state": self.future_state.to_dict(),
            "savings": {
                "annual": self.savings_annual,
                "total": self.savings_total,
                "percentage": self.savings_percentage,
                "monthly_average": self.savings_annual / MONTHS_PER_YEAR,
            },
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class PerUserEconomics:
    """Future-state cost per user."""

    monthly_infrastructure: float
    monthly_storage: float
    monthly_nerdio: float
    monthly_total: float
    annual_infrastructure: float
    annual_storage: float
    annual_nerdio: float
    annual_total: float
    monthly_auto_scaling_savings: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "monthly": {
                "infrastructure": self.monthly_infrastructure,
                "storage": self.monthly_storage,
                "nerdio": self.monthly_nerdio,
                "total": self.monthly_total,
            },
            "annual": {
                "infrastructure": self.annual_infrastructure,
                "storage": self.annual_storage,
                "nerdio": self.annual_nerdio,
                "total": self.annual_total,
            },
            "savings": {"auto_scaling": self.monthly_auto_scaling_savings},
        }
