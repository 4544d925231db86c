"""Data models for the ROI module."""

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class OperationalSavings:
    """Administrator and support time saved per year."""

    admin_time_savings: float
    auto_scaling_savings: float
    image_management_savings: float
    monitoring_savings: float
    support_ticket_savings: float
    admin_count: float
    admin_hours_per_week: float
    admin_hours_per_year: float
    automation_hours_per_year: float
    support_tickets_reduced: int

    @property
    def total_annual(self) -> float:
        return (
            self.admin_time_savings
            + self.auto_scaling_savings
            + self.image_management_savings
            + self.monitoring_savings
            + self.support_ticket_savings
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "admin_time_savings": self.admin_time_savings,
            "auto_scaling_savings": self.auto_scaling_savings,
            "image_management_savings": self.image_management_savings,
            "monitoring_savings": self.monitoring_savings,
            "support_ticket_savings": self.support_ticket_savings,
            "total_annual": self.total_annual,
            "breakdown": {
                "admin_count": self.admin_count,
                "admin_hours_per_week": self.admin_hours_per_week,
                "admin_hours_per_year": self.admin_hours_per_year,
                "automation_hours_per_year": self.automation_hours_per_year,
                "support_tickets_reduced": self.support_tickets_reduced,
            },
        }


@dataclass(frozen=True)
class ProductivityGains:
    """End-user productivity value per year."""

    login_time_savings: float
    downtime_savings: float
    performance_gain: float
    seconds_saved_per_user_per_day: float
    hours_gained_per_user_per_year: float
    downtime_hours_avoided: float

    @property
    def total_annual(self) -> float:
        return self.login_time_savings + self.downtime_savings + self.performance_gain

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "login_time_savings": self.login_time_savings,
            "downtime_savings": self.downtime_savings,
            "performance_gain": self.performance_gain,
            "total_annual": self.total_annual,
            "breakdown": {
                "seconds_saved_per_user_per_day": self.seconds_saved_per_user_per_day,
                "hours_gained_per_user_per_year": self.hours_gained_per_user_per_year,
                "downtime_hours_avoided": self.downtime_hours_avoided,
            },
        }


@dataclass(frozen=True)
class SecurityValue:
    """Compliance automation and risk reduction value per year."""

    compliance_savings: float
    risk_reduction_value: float
    audit_hours_saved: float
    risk_reduction_percent: float

    @property
    def total_annual(self) -> float:
        return self.compliance_savings + self.risk_reduction_value

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "compliance_savings": self.compliance_savings,
            "risk_reduction_value": self.risk_reduction_value,
            "total_annual": self.total_annual,
            "breakdown": {
                "audit_hours_saved": self.audit_hours_saved,
                "risk_reduction_percent": self.risk_reduction_percent,
            },
        }


@dataclass(frozen=True)
class EnvironmentalImpact:
    """Annual CO2 reduction from right-sized, auto-scaled hosts."""

    co2_reduction_tons: float
    carbon_credit_value: float
    vms_optimized: int
    description: str = "Annual CO2 reduction from optimized resource usage"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class CarbonFootprint:
    """Before/after carbon comparison for a VM fleet."""

    current_annual_co2_tons: float
    optimized_annual_co2_tons: float
    reduction_tons: float
    reduction_percent: float
    equivalent_trees: int
    equivalent_cars: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class ImplementationCost:
    """One-time implementation bundle for an estate size."""

    tier: str
    total_cost: float
    duration_weeks: int
    project_management_hours: int
    architect_hours: int
    engineer_hours: int

    @property
    def total_hours(self) -> int:
        return self.project_management_hours + self.architect_hours + self.engineer_hours

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["total_hours"] = self.total_hours
        return data


@dataclass(frozen=True)
class QuarterValue:
    """One quarter of the break-even series."""

    period: str
    value: float
    cumulative: float


@dataclass(frozen=True)
class ROIResult:
    """Comprehensive ROI analysis."""

    implementation_cost: float
    payback_months: float | None
    infrastructure_savings: float
    operational: OperationalSavings
    productivity: ProductivityGains
    security: SecurityValue
    environmental: EnvironmentalImpact
    roi_year1: float
    roi_year3: float
    roi_year5: float
    net_present_value: float
    quarterly_savings: list[QuarterValue] = field(default_factory=list)
    summary: str = ""

    @property
    def total_annual_value(self) -> float:
        """Sum of the four annual value components."""
        return (
            self.infrastructure_savings
            + self.operational.total_annual
            + self.productivity.total_annual
            + self.security.total_annual
        )

    @property
    def payback_years(self) -> float | None:
        if self.payback_months is None:
            return None
        return self.payback_months / 12

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "investment": {
                "implementation": self.implementation_cost,
                "payback_period": {
                    "months": self.payback_months,
                    "years": self.payback_years,
                },
            },
            "annual_value": {
                "infrastructure_savings": self.infrastructure_savings,
                "operational_savings": self.operational.total_annual,
                "productivity_gains": self.productivity.total_annual,
                "security_value": self.security.total_annual,
                "total_annual": self.total_annual_value,
            },
            "detailed_breakdown": {
                "operational": self.operational.to_dict(),
                "productivity": self.productivity.to_dict(),
                "security": self.security.to_dict(),
                "environmental": self.environmental.to_dict(),
            },
            "roi": {
                "year1": self.roi_year1,
                "year3": self.roi_year3,
                "year5": self.roi_year5,
            },
            "net_present_value": self.net_present_value,
            "break_even": {
                "months": self.payback_months,
                "quarterly_savings": [asdict(q) for q in self.quarterly_savings],
            },
            "summary": self.summary,
        }
