"""Comprehensive ROI: combines infrastructure savings with the value streams."""

import logging

from avd_business_case.errors import InvalidImplementationCostError
from avd_business_case.rates import RateTable, get_rate_table
from avd_business_case.roi.models import ImplementationCost, QuarterValue, ROIResult
from avd_business_case.roi.value_streams import (
    calculate_environmental_impact,
    calculate_operational_savings,
    calculate_productivity_gains,
    calculate_security_value,
)
from avd_business_case.rounding import round_half_up

logger = logging.getLogger(__name__)

ROI_YEARS = (1, 3, 5)
QUARTERS_PER_YEAR = 4


def _roi_percent(annual_value: float, implementation_cost: float, years: int) -> float:
    return (annual_value * years - implementation_cost) / implementation_cost * 100


def calculate_npv(
    annual_value: float,
    implementation_cost: float,
    years: int,
    discount_rate: float,
) -> float:
    """Net present value: upfront cost against discounted constant annual value."""
    npv = -implementation_cost
    for year in range(1, years + 1):
        npv += annual_value / (1 + discount_rate) ** year
    return npv


def quarterly_savings(annual_value: float, years: int) -> list[QuarterValue]:
    """Cumulative value per quarter over the horizon (Y1Q1, Y1Q2, ...)."""
    quarterly_value = annual_value / QUARTERS_PER_YEAR
    quarters = []
    for year in range(years):
        for quarter in range(1, QUARTERS_PER_YEAR + 1):
            quarters.append(
                QuarterValue(
                    period=f"Y{year + 1}Q{quarter}",
                    value=quarterly_value,
                    cumulative=quarterly_value * (year * QUARTERS_PER_YEAR + quarter),
                )
            )
    return quarters


def roi_summary(roi_year1: float, payback_months: float | None, annual_value: float) -> str:
    """One-paragraph ROI summary for reports."""
    if payback_months is None:
        summary = "The investment does not pay back: annual value is not positive. "
    elif payback_months < 12:
        summary = f"Outstanding ROI with payback in {round_half_up(payback_months)} months. "
    elif payback_months < 24:
        summary = f"Strong ROI with payback in {payback_months / 12:.1f} years. "
    else:
        summary = f"Moderate ROI with payback in {payback_months / 12:.1f} years. "

    if roi_year1 > 100:
        summary += f"First year ROI exceeds 100% ({round_half_up(roi_year1)}%)."
    elif roi_year1 > 50:
        summary += f"Strong first year ROI of {round_half_up(roi_year1)}%."
    else:
        summary += f"First year ROI of {round_half_up(roi_year1)}%."

    summary += (
        f" Annual value of ${annual_value:,.0f} includes infrastructure savings, "
        "operational efficiency, and productivity gains."
    )
    return summary


class ROISynthesizer:
    """
    Builds the multi-component ROI case.

    Total annual value is infrastructure savings plus operational,
    productivity and security value. Environmental impact is reported
    alongside but not monetized into the total.
    """

    def __init__(self, rates: RateTable | None = None):
        """
        Initialize synthesizer.

        Args:
            rates: Rate table (defaults to the process-wide table)
        """
        self.rates = rates or get_rate_table()

    def get_implementation_cost(self, user_count: int) -> ImplementationCost:
        """
        Look up the implementation bundle for an estate size.

        Raises:
            NoTierMatchError: If the rate table's tiers do not cover the user count
        """
        tier = self.rates.implementation_tier(user_count)
        return ImplementationCost(
            tier=tier.label,
            total_cost=tier.total_cost,
            duration_weeks=tier.duration_weeks,
            project_management_hours=tier.project_management_hours,
            architect_hours=tier.architect_hours,
            engineer_hours=tier.engineer_hours,
        )

    def calculate_comprehensive_roi(
        self,
        user_count: int,
        infrastructure_savings: float,
        implementation_cost: float,
        years: int = 3,
    ) -> ROIResult:
        """
        Calculate ROI with every value stream.

        Args:
            user_count: Total number of users
            infrastructure_savings: Annual infrastructure savings from the TCO
            implementation_cost: One-time implementation cost
            years: Horizon for NPV and the quarterly break-even series

        Returns:
            ROI analysis

        Raises:
            InvalidImplementationCostError: If implementation cost is not positive
        """
        if implementation_cost <= 0:
            raise InvalidImplementationCostError(implementation_cost)
        if user_count <= 0:
            raise ValueError(f"user_count must be positive, got {user_count}")

        operational = calculate_operational_savings(user_count, self.rates)
        productivity = calculate_productivity_gains(user_count, self.rates)
        security = calculate_security_value(user_count, self.rates)
        environmental = calculate_environmental_impact(user_count, self.rates)

        total_annual_value = (
            infrastructure_savings
            + operational.total_annual
            + productivity.total_annual
            + security.total_annual
        )

        payback_months = (
            implementation_cost / (total_annual_value / 12) if total_annual_value > 0 else None
        )
        roi = {n: _roi_percent(total_annual_value, implementation_cost, n) for n in ROI_YEARS}
        npv = calculate_npv(
            total_annual_value,
            implementation_cost,
            years,
            self.rates.value_metrics.discount_rate,
        )

        logger.debug(
            "ROI: %d users, annual value $%.2f, payback %s months, NPV $%.2f",
            user_count,
            total_annual_value,
            f"{payback_months:.1f}" if payback_months is not None else "never",
            npv,
        )

        return ROIResult(
            implementation_cost=implementation_cost,
            payback_months=payback_months,
            infrastructure_savings=infrastructure_savings,
            operational=operational,
            productivity=productivity,
            security=security,
            environmental=environmental,
            roi_year1=roi[1],
            roi_year3=roi[3],
            roi_year5=roi[5],
            net_present_value=npv,
            quarterly_savings=quarterly_savings(total_annual_value, years),
            summary=roi_summary(roi[1], payback_months, total_annual_value),
        )
