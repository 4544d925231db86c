"""Rate table data: Azure prices, Nerdio tiers, legacy platform costs, value drivers.

All records are frozen. A calculation reads the rate table but never changes it,
so a single instance is shared by every calculator in the process.
"""

from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Iterable, TypeVar

from pydantic import TypeAdapter, ValidationError

from avd_business_case.errors import (
    NoTierMatchError,
    UnknownProfileError,
    UnknownStorageTypeError,
)

RATE_TABLE_VERSION = "2025.10"


@dataclass(frozen=True)
class VMProfile:
    """Azure session host sizing for a user workload profile."""

    key: str
    sku: str
    users_per_vm: int
    monthly_cost_per_vm: float
    description: str = ""


@dataclass(frozen=True)
class StorageRate:
    """Managed disk / profile storage price."""

    key: str
    label: str
    cost_per_gb_month: float
    iops: int = 0


@dataclass(frozen=True)
class PriceTier:
    """Per-user monthly price for users below ``max_users`` (None = no limit)."""

    max_users: int | None
    label: str
    price_per_user: float


@dataclass(frozen=True)
class AdminTier:
    """Desktop administrator headcount for users below ``max_users``."""

    max_users: int | None
    admins: float


@dataclass(frozen=True)
class ImplementationTier:
    """Fixed implementation bundle for users below ``max_users``."""

    max_users: int | None
    label: str
    total_cost: float
    duration_weeks: int
    project_management_hours: int
    architect_hours: int
    engineer_hours: int


@dataclass(frozen=True)
class CostAssumptions:
    """Sizing assumptions for the future state (fractions, not percents)."""

    peak_concurrency: float = 0.7
    auto_scaling_savings_with_nerdio: float = 0.55
    auto_scaling_savings_without_nerdio: float = 0.25


@dataclass(frozen=True)
class CitrixRates:
    """Citrix Cloud current-state costs."""

    license_per_user_month: float = 16.0
    netscaler_per_appliance_month: float = 1_500.0
    netscaler_appliances: int = 2
    infrastructure_per_server_month: float = 500.0
    storefront_one_time_setup: float = 15_000.0


@dataclass(frozen=True)
class VMwareRates:
    """VMware Horizon current-state costs."""

    horizon_license_per_user_month: float = 10.0
    infrastructure_per_server_month: float = 550.0
    base_infrastructure_cost: float = 25_000.0


@dataclass(frozen=True)
class OnPremiseRates:
    """Self-hosted VDI current-state costs."""

    server_capital_cost: float = 8_000.0
    amortization_months: int = 36
    datacenter_per_server_month: float = 200.0
    maintenance_per_server_month: float = 150.0


@dataclass(frozen=True)
class ValueMetrics:
    """Constants behind the ROI value streams.

    Fields ending in ``_percent`` are whole-number percentages (30 = 30%),
    ``discount_rate`` is a fraction.
    """

    # Calculation defaults
    working_weeks_per_year: float = 48
    working_days_per_year: float = 240
    working_hours_per_day: float = 8
    admin_hourly_rate: float = 75.0
    user_hourly_wage: float = 35.0
    discount_rate: float = 0.08

    # Operational efficiency (hours per week saved by automation)
    admin_hours_per_week_saved: float = 10
    auto_scaling_hours_per_week: float = 5
    image_management_hours_per_week: float = 8
    monitoring_hours_per_week: float = 4

    # Tier 1 support
    ticket_reduction_percent: float = 30
    tickets_per_month: float = 200
    cost_per_ticket: float = 25.0

    # Business productivity
    seconds_saved_per_login: float = 30
    logins_per_user_per_day: float = 2
    downtime_annual_savings: float = 50_000.0
    downtime_hours_reduced: float = 40
    productivity_gain_percent: float = 2

    # Security and compliance
    compliance_annual_savings: float = 25_000.0
    hours_per_audit: float = 80
    audits_per_year: float = 4
    audit_time_reduction_percent: float = 50
    potential_breach_cost: float = 4_450_000.0
    risk_reduction_percent: float = 25

    # Environmental
    co2_reduction_tons_per_vm_year: float = 0.5
    carbon_credit_value_per_ton: float = 50.0


def _default_vm_profiles() -> tuple[VMProfile, ...]:
    return (
        VMProfile("light", "D2s_v5", 6, 70.08, "Office productivity"),
        VMProfile("medium", "D4s_v5", 8, 140.16, "Multiple apps"),
        VMProfile("heavy", "D8s_v5", 6, 280.32, "CAD, video editing"),
        VMProfile("power", "D16s_v5", 4, 560.64, "GPU workloads"),
    )


def _default_storage() -> tuple[StorageRate, ...]:
    return (
        StorageRate("standardSSD", "Standard SSD", 0.15, 500),
        StorageRate("premiumSSD", "Premium SSD", 0.21, 2_300),
    )


def _default_nerdio_tiers() -> tuple[PriceTier, ...]:
    return (
        PriceTier(1_000, "0-999", 2.00),
        PriceTier(2_500, "1000-2499", 1.75),
        PriceTier(5_000, "2500-4999", 1.50),
        PriceTier(None, "5000+", 1.25),
    )


def _default_admin_tiers() -> tuple[AdminTier, ...]:
    return (
        AdminTier(500, 0.5),
        AdminTier(2_000, 1),
        AdminTier(5_000, 2),
        AdminTier(None, 3),
    )


def _default_implementation_tiers() -> tuple[ImplementationTier, ...]:
    return (
        ImplementationTier(500, "small", 26_000.0, 8, 40, 40, 80),
        ImplementationTier(2_000, "medium", 58_000.0, 12, 80, 80, 200),
        ImplementationTier(5_000, "large", 116_000.0, 16, 160, 160, 400),
        ImplementationTier(None, "enterprise", 180_000.0, 24, 240, 240, 640),
    )


TierT = TypeVar("TierT", PriceTier, AdminTier, ImplementationTier)


def select_tier(tiers: Iterable[TierT], user_count: float, table: str) -> TierT:
    """
    Pick the first tier whose exclusive upper bound exceeds the user count.

    Args:
        tiers: Tiers ordered by ascending ``max_users``; the last is open-ended
        user_count: Number of users to place
        table: Table name used in the error message

    Returns:
        Matching tier

    Raises:
        NoTierMatchError: If no tier covers the user count
    """
    for tier in tiers:
        if tier.max_users is None or user_count < tier.max_users:
            return tier
    raise NoTierMatchError(table, user_count)


def _check_fields(record_type: type, item: Any, section: str) -> None:
    """Reject keys the record does not define (pydantic ignores them)."""
    if not isinstance(item, dict):
        return
    unknown = set(item) - {f.name for f in fields(record_type)}
    if unknown:
        raise ValueError(
            f"Invalid rate table section '{section}': unknown fields {sorted(unknown)}"
        )


@dataclass(frozen=True)
class RateTable:
    """
    Complete pricing and value-driver reference data.

    Lookups by key raise the engine's ``Unknown*`` errors so callers never see
    a bare ``KeyError``.
    """

    version: str = RATE_TABLE_VERSION
    vm_profiles: tuple[VMProfile, ...] = field(default_factory=_default_vm_profiles)
    storage: tuple[StorageRate, ...] = field(default_factory=_default_storage)
    nerdio_tiers: tuple[PriceTier, ...] = field(default_factory=_default_nerdio_tiers)
    admin_tiers: tuple[AdminTier, ...] = field(default_factory=_default_admin_tiers)
    implementation_tiers: tuple[ImplementationTier, ...] = field(
        default_factory=_default_implementation_tiers
    )
    cost_assumptions: CostAssumptions = field(default_factory=CostAssumptions)
    citrix: CitrixRates = field(default_factory=CitrixRates)
    vmware: VMwareRates = field(default_factory=VMwareRates)
    on_premise: OnPremiseRates = field(default_factory=OnPremiseRates)
    value_metrics: ValueMetrics = field(default_factory=ValueMetrics)

    def vm_profile(self, key: str) -> VMProfile:
        """Get VM sizing for a workload profile key."""
        for profile in self.vm_profiles:
            if profile.key == key:
                return profile
        raise UnknownProfileError(key)

    def storage_rate(self, key: str) -> StorageRate:
        """Get storage pricing for a storage type key."""
        for rate in self.storage:
            if rate.key == key:
                return rate
        raise UnknownStorageTypeError(key)

    def nerdio_tier(self, user_count: float) -> PriceTier:
        """Get the Nerdio Manager per-user price tier."""
        return select_tier(self.nerdio_tiers, user_count, "nerdio_tiers")

    def admin_count(self, user_count: float) -> float:
        """Get the administrator headcount for an estate size."""
        return select_tier(self.admin_tiers, user_count, "admin_tiers").admins

    def implementation_tier(self, user_count: float) -> ImplementationTier:
        """Get the implementation bundle for an estate size."""
        return select_tier(
            self.implementation_tiers, user_count, "implementation_tiers"
        )

    @property
    def profile_keys(self) -> list[str]:
        """Available workload profile keys."""
        return [p.key for p in self.vm_profiles]

    @property
    def storage_keys(self) -> list[str]:
        """Available storage type keys."""
        return [s.key for s in self.storage]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RateTable":
        """
        Build a rate table from a JSON-style document.

        Sections not present keep their defaults. Scalar sections
        (``citrix``, ``value_metrics``, ...) may be partial; list sections
        replace the default list entirely. Every value is validated against
        the record's field types, so a bad document fails here rather than
        in the middle of a calculation.

        Args:
            data: Parsed rate table document

        Returns:
            New rate table

        Raises:
            ValueError: If the document names an unknown section or field,
                or a value has the wrong type
        """
        base = cls()
        list_sections = {
            "vm_profiles": VMProfile,
            "storage": StorageRate,
            "nerdio_tiers": PriceTier,
            "admin_tiers": AdminTier,
            "implementation_tiers": ImplementationTier,
        }
        known = {f.name for f in fields(cls)}
        updates: dict[str, Any] = {}

        for key, value in data.items():
            if key not in known:
                raise ValueError(f"Unknown rate table section: {key}")
            try:
                if key == "version":
                    updates[key] = TypeAdapter(str).validate_python(value)
                elif key in list_sections:
                    record_type = list_sections[key]
                    for item in value:
                        _check_fields(record_type, item, key)
                    updates[key] = TypeAdapter(tuple[record_type, ...]).validate_python(value)
                else:
                    section = getattr(base, key)
                    _check_fields(type(section), value, key)
                    updates[key] = TypeAdapter(type(section)).validate_python(
                        {**asdict(section), **value}
                    )
            except (TypeError, ValidationError) as e:
                raise ValueError(f"Invalid rate table section '{key}': {e}") from e

        return replace(base, **updates)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
