"""Value streams beyond infrastructure savings.

Each calculator is a pure function of the user count and the rate table's
value metrics. Productivity gains scale linearly with users, uncapped.
"""

import logging
import math

from avd_business_case.rates import RateTable
from avd_business_case.roi.models import (
    CarbonFootprint,
    EnvironmentalImpact,
    OperationalSavings,
    ProductivityGains,
    SecurityValue,
)
from avd_business_case.rounding import round_half_up, round_to

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600
MONTHS_PER_YEAR = 12

# Only a tenth of avoided breach exposure is counted as tangible annual value.
RISK_VALUE_REALIZATION = 0.1

# Rough fleet estimate for the environmental stream, independent of profile.
ENV_CONCURRENCY = 0.7
ENV_USERS_PER_VM = 8

CO2_TONS_PER_VM_HOUR = 0.00012
TREES_PER_TON_CO2 = 16
CAR_TONS_CO2_PER_YEAR = 4.6


def calculate_operational_savings(user_count: int, rates: RateTable) -> OperationalSavings:
    """
    Calculate administrator and support savings.

    Admin time scales with the admin headcount tier; the automation savings
    (auto-scaling, image management, monitoring) are flat per estate.
    """
    vm = rates.value_metrics
    admin_count = rates.admin_count(user_count)
    weeks = vm.working_weeks_per_year
    rate = vm.admin_hourly_rate

    admin_time = vm.admin_hours_per_week_saved * weeks * rate * admin_count
    auto_scaling = vm.auto_scaling_hours_per_week * weeks * rate
    image_management = vm.image_management_hours_per_week * weeks * rate
    monitoring = vm.monitoring_hours_per_week * weeks * rate

    tickets_reduced = vm.ticket_reduction_percent / 100 * vm.tickets_per_month * MONTHS_PER_YEAR
    support_tickets = tickets_reduced * vm.cost_per_ticket

    automation_hours_per_week = (
        vm.auto_scaling_hours_per_week
        + vm.image_management_hours_per_week
        + vm.monitoring_hours_per_week
    )

    return OperationalSavings(
        admin_time_savings=admin_time,
        auto_scaling_savings=auto_scaling,
        image_management_savings=image_management,
        monitoring_savings=monitoring,
        support_ticket_savings=support_tickets,
        admin_count=admin_count,
        admin_hours_per_week=vm.admin_hours_per_week_saved * admin_count,
        admin_hours_per_year=vm.admin_hours_per_week_saved * weeks * admin_count,
        automation_hours_per_year=automation_hours_per_week * weeks,
        support_tickets_reduced=round_half_up(tickets_reduced),
    )


def calculate_productivity_gains(user_count: int, rates: RateTable) -> ProductivityGains:
    """Calculate end-user productivity value from faster logins, less downtime and better performance."""
    vm = rates.value_metrics
    login_hours_per_day = vm.seconds_saved_per_login / SECONDS_PER_HOUR * vm.logins_per_user_per_day

    login_time = login_hours_per_day * vm.working_days_per_year * user_count * vm.user_hourly_wage
    performance = (
        user_count
        * vm.user_hourly_wage
        * vm.working_days_per_year
        * vm.working_hours_per_day
        * (vm.productivity_gain_percent / 100)
    )

    return ProductivityGains(
        login_time_savings=login_time,
        downtime_savings=vm.downtime_annual_savings,
        performance_gain=performance,
        seconds_saved_per_user_per_day=vm.seconds_saved_per_login * vm.logins_per_user_per_day,
        hours_gained_per_user_per_year=login_hours_per_day * vm.working_days_per_year,
        downtime_hours_avoided=vm.downtime_hours_reduced,
    )


def calculate_security_value(user_count: int, rates: RateTable) -> SecurityValue:
    """Calculate compliance automation savings plus dampened risk-reduction value."""
    vm = rates.value_metrics
    risk_value = (
        vm.potential_breach_cost * (vm.risk_reduction_percent / 100) * RISK_VALUE_REALIZATION
    )
    audit_hours = (
        vm.hours_per_audit * vm.audits_per_year * (vm.audit_time_reduction_percent / 100)
    )

    return SecurityValue(
        compliance_savings=vm.compliance_annual_savings,
        risk_reduction_value=risk_value,
        audit_hours_saved=audit_hours,
        risk_reduction_percent=vm.risk_reduction_percent,
    )


def calculate_environmental_impact(user_count: int, rates: RateTable) -> EnvironmentalImpact:
    """Estimate annual CO2 reduction and its carbon credit value."""
    vm = rates.value_metrics
    estimated_vms = math.ceil(user_count * ENV_CONCURRENCY / ENV_USERS_PER_VM)
    co2_tons = estimated_vms * vm.co2_reduction_tons_per_vm_year

    return EnvironmentalImpact(
        co2_reduction_tons=co2_tons,
        carbon_credit_value=co2_tons * vm.carbon_credit_value_per_ton,
        vms_optimized=estimated_vms,
    )


def calculate_carbon_footprint(
    current_vms: int,
    optimized_vms: int,
    hours_running: float,
) -> CarbonFootprint:
    """
    Compare annual CO2 of the current and optimized VM fleets.

    Args:
        current_vms: VMs running today
        optimized_vms: VMs running after optimization
        hours_running: Hours per year the fleet runs (8760 = always on)

    Raises:
        ValueError: If the current fleet emits nothing to compare against
    """
    current = current_vms * hours_running * CO2_TONS_PER_VM_HOUR
    optimized = optimized_vms * hours_running * CO2_TONS_PER_VM_HOUR
    if current <= 0:
        raise ValueError("Current fleet must have running VMs to compare carbon footprint")

    reduction = current - optimized
    return CarbonFootprint(
        current_annual_co2_tons=current,
        optimized_annual_co2_tons=optimized,
        reduction_tons=reduction,
        reduction_percent=reduction / current * 100,
        equivalent_trees=round_half_up(reduction * TREES_PER_TON_CO2),
        equivalent_cars=round_to(reduction / CAR_TONS_CO2_PER_YEAR, 1),
    )
