"""Tests for the business case builder."""

import json
import pytest

from avd_business_case.case import (
    BusinessCaseBuilder,
    CurrentStateConfig,
    CustomerProfile,
    FutureStateConfig,
)
from avd_business_case.errors import (
    DegenerateTCOError,
    UnknownPlatformError,
    UnknownProfileError,
)


@pytest.fixture
def builder(rates):
    return BusinessCaseBuilder(rates)


@pytest.fixture
def contoso():
    return CustomerProfile(
        company_name="Contoso",
        total_users=1000,
        current_platform="citrix",
        current_server_count=15,
        industry="Retail",
    )


class TestInputValidation:
    """Tests for input record validation."""

    def test_profile_requires_users(self):
        with pytest.raises(ValueError):
            CustomerProfile(company_name="Empty", total_users=0, current_platform="citrix")

    def test_horizon_must_be_1_3_or_5(self):
        with pytest.raises(ValueError):
            FutureStateConfig(time_horizon_years=2)

    def test_storage_not_negative(self):
        with pytest.raises(ValueError):
            FutureStateConfig(storage_per_user_gb=-1)

    def test_future_defaults(self):
        config = FutureStateConfig()
        assert config.storage_type == "premiumSSD"
        assert config.storage_per_user_gb == 100
        assert config.include_nerdio
        assert config.time_horizon_years == 3


class TestBusinessCaseBuilder:
    """Tests for BusinessCaseBuilder."""

    def test_build_from_profile(self, builder, contoso):
        result = builder.build(contoso)

        assert result.current_state.platform == "citrix"
        assert result.current_state.monthly == pytest.approx(26_500)
        assert result.future_state.vms.sku == "D4s_v5"
        assert result.tco.years == 3
        assert result.implementation_cost.tier == "medium"

    def test_infrastructure_savings_from_tco(self, builder, contoso):
        result = builder.build(contoso)
        assert result.roi.infrastructure_savings == pytest.approx(result.tco.savings_annual)
        assert result.roi.implementation_cost == result.implementation_cost.total_cost

    def test_config_overrides_profile(self, builder, contoso):
        result = builder.build(
            contoso,
            CurrentStateConfig(platform="vmware", server_count=4),
            FutureStateConfig(user_profile="light", time_horizon_years=5),
        )

        assert result.current_state.platform == "vmware"
        assert result.current_state.server_count == 4
        assert result.future_state.vms.sku == "D2s_v5"
        assert result.tco.years == 5
        assert len(result.roi.quarterly_savings) == 20

    def test_custom_monthly_cost(self, builder, contoso):
        result = builder.build(contoso, CurrentStateConfig(custom_monthly_cost=80_000))
        assert result.current_state.monthly == 80_000
        assert result.tco.recommendation == "Strong cost savings - highly recommended"

    def test_errors_propagate(self, builder, contoso):
        with pytest.raises(UnknownPlatformError):
            builder.build(contoso, CurrentStateConfig(platform="physical"))
        with pytest.raises(UnknownProfileError):
            builder.build(contoso, future_config=FutureStateConfig(user_profile="ultra"))
        with pytest.raises(DegenerateTCOError):
            builder.build(contoso, CurrentStateConfig(custom_monthly_cost=0))

    def test_to_dict(self, builder, contoso):
        data = json.loads(json.dumps(builder.build(contoso).to_dict()))

        assert set(data) >= {
            "customer_profile",
            "current_state",
            "future_state",
            "tco",
            "implementation_cost",
            "roi",
        }
        assert data["customer_profile"]["company_name"] == "Contoso"

    def test_summary(self, builder, contoso):
        summary = builder.build(contoso).get_summary()
        assert "AVD BUSINESS CASE: Contoso" in summary
        assert "RETURN ON INVESTMENT" in summary
