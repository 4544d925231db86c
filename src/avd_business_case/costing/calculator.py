"""Cost engine for current-state, future-state and TCO calculations."""

import logging
import math

from avd_business_case.costing.models import (
    AutoScalingSavings,
    CurrentStateCost,
    FutureStateCost,
    NerdioCost,
    PerUserEconomics,
    StateTotals,
    StorageCost,
    TCOResult,
    VMCost,
)
from avd_business_case.errors import DegenerateTCOError, UnknownPlatformError
from avd_business_case.rates import RateTable, get_rate_table

logger = logging.getLogger(__name__)

PLATFORMS = ("citrix", "vmware", "onpremise")

STRONG_SAVINGS_PERCENT = 20


def _check_user_count(user_count: int) -> None:
    if user_count <= 0:
        raise ValueError(f"user_count must be positive, got {user_count}")


class CostCalculator:
    """
    Prices the current and proposed desktop estates.

    Every method is a pure function of its arguments and the rate table.
    """

    def __init__(self, rates: RateTable | None = None):
        """
        Initialize cost calculator.

        Args:
            rates: Rate table (defaults to the process-wide table)
        """
        self.rates = rates or get_rate_table()

    def calculate_future_cost(
        self,
        user_count: int,
        user_profile: str = "medium",
        storage_type: str = "premiumSSD",
        storage_per_user_gb: float = 100,
        include_nerdio: bool = True,
    ) -> FutureStateCost:
        """
        Calculate Azure Virtual Desktop infrastructure cost.

        Args:
            user_count: Total number of users
            user_profile: Workload profile key (light, medium, heavy, power)
            storage_type: Storage type key (standardSSD, premiumSSD)
            storage_per_user_gb: Profile storage per user in GB
            include_nerdio: Include Nerdio Manager licensing and its
                higher auto-scaling savings

        Returns:
            Future state cost breakdown

        Raises:
            UnknownProfileError: If the profile is not in the rate table
            UnknownStorageTypeError: If the storage type is not in the rate table
        """
        _check_user_count(user_count)
        profile = self.rates.vm_profile(user_profile)
        storage_rate = self.rates.storage_rate(storage_type)
        assumptions = self.rates.cost_assumptions

        concurrent_users = math.ceil(user_count * assumptions.peak_concurrency)
        vms_needed = math.ceil(concurrent_users / profile.users_per_vm)
        vm_monthly = vms_needed * profile.monthly_cost_per_vm

        total_gb = user_count * storage_per_user_gb
        storage_monthly = total_gb * storage_rate.cost_per_gb_month

        if include_nerdio:
            tier = self.rates.nerdio_tier(user_count)
            nerdio = NerdioCost(
                enabled=True,
                monthly_cost=user_count * tier.price_per_user,
                price_per_user=tier.price_per_user,
                tier=tier.label,
            )
            savings_fraction = assumptions.auto_scaling_savings_with_nerdio
        else:
            nerdio = NerdioCost(enabled=False)
            savings_fraction = assumptions.auto_scaling_savings_without_nerdio

        result = FutureStateCost(
            user_count=user_count,
            vms=VMCost(count=vms_needed, sku=profile.sku, monthly_cost=vm_monthly),
            storage=StorageCost(total_gb=total_gb, type=storage_type, monthly_cost=storage_monthly),
            auto_scaling=AutoScalingSavings(
                savings_percent=savings_fraction * 100,
                monthly_savings=vm_monthly * savings_fraction,
            ),
            nerdio=nerdio,
        )

        logger.debug(
            "Future state: %d users, %d x %s, net $%.2f/month",
            user_count,
            vms_needed,
            profile.sku,
            result.monthly_net,
        )
        return result

    def calculate_current_cost(
        self,
        platform: str,
        user_count: int,
        server_count: int = 10,
        custom_monthly_cost: float | None = None,
    ) -> CurrentStateCost:
        """
        Calculate the cost of the existing platform.

        Args:
            platform: citrix, vmware or onpremise (case-insensitive)
            user_count: Total number of users
            server_count: Servers in the current estate
            custom_monthly_cost: Known monthly cost replacing the estimate

        Returns:
            Current state cost

        Raises:
            UnknownPlatformError: If there is no cost formula for the platform
        """
        _check_user_count(user_count)
        key = platform.lower()

        if key == "citrix":
            citrix = self.rates.citrix
            licensing = user_count * citrix.license_per_user_month
            netscaler = citrix.netscaler_appliances * citrix.netscaler_per_appliance_month
            infrastructure = server_count * citrix.infrastructure_per_server_month
            monthly = licensing + netscaler + infrastructure
            breakdown = {
                "licensing": licensing,
                "netscaler": netscaler,
                "infrastructure": infrastructure,
                "one_time_setup": citrix.storefront_one_time_setup,
            }
        elif key == "vmware":
            vmware = self.rates.vmware
            licensing = user_count * vmware.horizon_license_per_user_month
            infrastructure = server_count * vmware.infrastructure_per_server_month
            monthly = licensing + infrastructure
            breakdown = {
                "licensing": licensing,
                "infrastructure": infrastructure,
                "one_time_setup": vmware.base_infrastructure_cost,
            }
        elif key == "onpremise":
            onprem = self.rates.on_premise
            server_capital = server_count * onprem.server_capital_cost / onprem.amortization_months
            datacenter = server_count * onprem.datacenter_per_server_month
            maintenance = server_count * onprem.maintenance_per_server_month
            monthly = server_capital + datacenter + maintenance
            breakdown = {
                "server_capital": server_capital,
                "data_center": datacenter,
                "maintenance": maintenance,
            }
        else:
            raise UnknownPlatformError(platform)

        custom = custom_monthly_cost is not None
        if custom:
            monthly = custom_monthly_cost

        logger.debug(
            "Current state: %s, %d users, %d servers, $%.2f/month%s",
            key,
            user_count,
            server_count,
            monthly,
            " (custom)" if custom else "",
        )

        return CurrentStateCost(
            platform=key,
            monthly=monthly,
            user_count=user_count,
            server_count=server_count,
            breakdown=breakdown,
            custom_override=custom,
        )

    def calculate_tco(
        self,
        current: CurrentStateCost,
        future: FutureStateCost,
        years: int = 3,
    ) -> TCOResult:
        """
        Compare total cost of ownership over a time horizon.

        Straight-line projection: no inflation, no growth.

        Args:
            current: Current state cost
            future: Future state cost
            years: Analysis period in years

        Returns:
            TCO comparison

        Raises:
            DegenerateTCOError: If the current state total cost is not positive
        """
        if years <= 0:
            raise ValueError(f"years must be positive, got {years}")

        current_annual = current.annual
        future_annual = future.annual_net
        current_total = current_annual * years
        future_total = future_annual * years

        if current_total <= 0:
            raise DegenerateTCOError(current_total)

        savings = current_total - future_total
        percentage = savings / current_total * 100

        if percentage > STRONG_SAVINGS_PERCENT:
            recommendation = "Strong cost savings - highly recommended"
        elif percentage > 0:
            recommendation = "Moderate savings - consider strategic benefits"
        else:
            recommendation = "Evaluate non-financial benefits carefully"

        logger.debug("TCO over %d years: savings $%.2f (%.1f%%)", years, savings, percentage)

        return TCOResult(
            years=years,
            current_state=StateTotals(annual_cost=current_annual, total_cost=current_total),
            future_state=StateTotals(annual_cost=future_annual, total_cost=future_total),
            savings_annual=current_annual - future_annual,
            savings_total=savings,
            savings_percentage=percentage,
            recommendation=recommendation,
        )

    def calculate_per_user_economics(
        self,
        future: FutureStateCost,
        user_count: int | None = None,
    ) -> PerUserEconomics:
        """
        Break the future state cost down per user.

        Args:
            future: Future state cost
            user_count: Users to divide by (defaults to the costed user count)
        """
        users = user_count if user_count is not None else future.user_count
        _check_user_count(users)

        return PerUserEconomics(
            monthly_infrastructure=future.vms.monthly_cost / users,
            monthly_storage=future.storage.monthly_cost / users,
            monthly_nerdio=future.nerdio.monthly_cost / users,
            monthly_total=future.monthly_net / users,
            annual_infrastructure=future.vms.annual_cost / users,
            annual_storage=future.storage.annual_cost / users,
            annual_nerdio=future.nerdio.annual_cost / users,
            annual_total=future.annual_net / users,
            monthly_auto_scaling_savings=future.auto_scaling.monthly_savings / users,
        )
