"""Data models for the business case module."""

from dataclasses import asdict, dataclass, field
from typing import Any

from avd_business_case.costing.models import CurrentStateCost, FutureStateCost, TCOResult
from avd_business_case.roi.models import ImplementationCost, ROIResult

VALID_TIME_HORIZONS = (1, 3, 5)


@dataclass(frozen=True)
class CustomerProfile:
    """Customer being assessed."""

    company_name: str
    total_users: int
    current_platform: str
    current_server_count: int = 10
    user_profile: str = "medium"
    industry: str | None = None

    def __post_init__(self) -> None:
        if self.total_users <= 0:
            raise ValueError(f"total_users must be positive, got {self.total_users}")
        if self.current_server_count < 0:
            raise ValueError(
                f"current_server_count cannot be negative, got {self.current_server_count}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class CurrentStateConfig:
    """Overrides for the current state estimate. Unset fields fall back to the profile."""

    platform: str | None = None
    server_count: int | None = None
    custom_monthly_cost: float | None = None

    def __post_init__(self) -> None:
        if self.custom_monthly_cost is not None and self.custom_monthly_cost < 0:
            raise ValueError(
                f"custom_monthly_cost cannot be negative, got {self.custom_monthly_cost}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class FutureStateConfig:
    """Proposed Azure Virtual Desktop configuration."""

    user_profile: str | None = None
    storage_type: str = "premiumSSD"
    storage_per_user_gb: float = 100
    include_nerdio: bool = True
    time_horizon_years: int = 3
    notes: str = ""

    def __post_init__(self) -> None:
        if self.time_horizon_years not in VALID_TIME_HORIZONS:
            raise ValueError(
                f"time_horizon_years must be one of {VALID_TIME_HORIZONS}, "
                f"got {self.time_horizon_years}"
            )
        if self.storage_per_user_gb < 0:
            raise ValueError(
                f"storage_per_user_gb cannot be negative, got {self.storage_per_user_gb}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class BusinessCaseResult:
    """Everything a business case report needs."""

    customer_profile: CustomerProfile
    current_state: CurrentStateCost
    future_state: FutureStateCost
    tco: TCOResult
    implementation_cost: ImplementationCost
    roi: ROIResult
    future_config: FutureStateConfig = field(default_factory=FutureStateConfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "customer_profile": self.customer_profile.to_dict(),
            "current_state": self.current_state.to_dict(),
            "future_state": self.future_state.to_dict(),
            "tco": self.tco.to_dict(),
            "implementation_cost": self.implementation_cost.to_dict(),
            "roi": self.roi.to_dict(),
            "future_config": self.future_config.to_dict(),
        }

    def get_summary(self) -> str:
        """Generate human-readable summary."""
        profile = self.customer_profile
        payback = (
            f"{self.roi.payback_months:.1f} months"
            if self.roi.payback_months is not None
            else "never"
        )

        lines = [
            "=" * 60,
            f"AVD BUSINESS CASE: {profile.company_name}",
            "=" * 60,
            "",
            f"  Users:                {profile.total_users:,}",
            f"  Current platform:     {self.current_state.platform}",
            f"  Time horizon:         {self.tco.years} years",
            "",
            "COST COMPARISON",
            "-" * 40,
            f"  Current monthly:      ${self.current_state.monthly:,.2f}",
            f"  AVD monthly (net):    ${self.future_state.monthly_net:,.2f}",
            f"  Annual savings:       ${self.tco.savings_annual:,.2f}",
            f"  Total savings:        ${self.tco.savings_total:,.2f} "
            f"({self.tco.savings_percentage:.1f}%)",
            f"  Recommendation:       {self.tco.recommendation}",
            "",
            "RETURN ON INVESTMENT",
            "-" * 40,
            f"  Implementation:       ${self.implementation_cost.total_cost:,.0f} "
            f"({self.implementation_cost.tier}, {self.implementation_cost.duration_weeks} weeks)",
            f"  Total annual value:   ${self.roi.total_annual_value:,.2f}",
            f"  Payback:              {payback}",
            f"  ROI year 1/3/5:       {self.roi.roi_year1:.0f}% / "
            f"{self.roi.roi_year3:.0f}% / {self.roi.roi_year5:.0f}%",
            f"  NPV:                  ${self.roi.net_present_value:,.2f}",
            "",
            self.roi.summary,
            "",
            "=" * 60,
        ]
        return "\n".join(lines)
