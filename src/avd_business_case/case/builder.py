"""Business case builder: chains the cost engine into the ROI synthesizer."""

import logging

from avd_business_case.case.models import (
    BusinessCaseResult,
    CurrentStateConfig,
    CustomerProfile,
    FutureStateConfig,
)
from avd_business_case.costing import CostCalculator
from avd_business_case.rates import RateTable, get_rate_table
from avd_business_case.roi import ROISynthesizer

logger = logging.getLogger(__name__)


class BusinessCaseBuilder:
    """
    Builds a complete business case for one customer.

    Errors from any stage propagate unchanged.
    """

    def __init__(self, rates: RateTable | None = None):
        """
        Initialize builder.

        Args:
            rates: Rate table shared by every stage
        """
        self.rates = rates or get_rate_table()
        self.costs = CostCalculator(self.rates)
        self.roi = ROISynthesizer(self.rates)

    def build(
        self,
        profile: CustomerProfile,
        current_config: CurrentStateConfig | None = None,
        future_config: FutureStateConfig | None = None,
    ) -> BusinessCaseResult:
        """
        Build the business case.

        Args:
            profile: Customer profile
            current_config: Current state overrides
            future_config: Proposed AVD configuration

        Returns:
            Business case with current and future cost, TCO, implementation
            cost and ROI
        """
        current_config = current_config or CurrentStateConfig()
        future_config = future_config or FutureStateConfig()
        users = profile.total_users

        logger.info(
            "Building business case for %s (%d users, %s)",
            profile.company_name,
            users,
            current_config.platform or profile.current_platform,
        )

        current = self.costs.calculate_current_cost(
            platform=current_config.platform or profile.current_platform,
            user_count=users,
            server_count=(
                current_config.server_count
                if current_config.server_count is not None
                else profile.current_server_count
            ),
            custom_monthly_cost=current_config.custom_monthly_cost,
        )

        future = self.costs.calculate_future_cost(
            user_count=users,
            user_profile=future_config.user_profile or profile.user_profile,
            storage_type=future_config.storage_type,
            storage_per_user_gb=future_config.storage_per_user_gb,
            include_nerdio=future_config.include_nerdio,
        )

        tco = self.costs.calculate_tco(current, future, years=future_config.time_horizon_years)
        implementation = self.roi.get_implementation_cost(users)

        roi = self.roi.calculate_comprehensive_roi(
            user_count=users,
            infrastructure_savings=tco.savings_annual,
            implementation_cost=implementation.total_cost,
            years=future_config.time_horizon_years,
        )

        logger.info(
            "Business case complete: savings %.1f%%, total annual value $%.2f",
            tco.savings_percentage,
            roi.total_annual_value,
        )

        return BusinessCaseResult(
            customer_profile=profile,
            current_state=current,
            future_state=future,
            tco=tco,
            implementation_cost=implementation,
            roi=roi,
            future_config=future_config,
        )
