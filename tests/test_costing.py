"""Tests for the cost engine."""

import json
import pytest

from avd_business_case.costing import CostCalculator
from avd_business_case.errors import (
    DegenerateTCOError,
    UnknownPlatformError,
    UnknownProfileError,
    UnknownStorageTypeError,
)


@pytest.fixture
def calculator(rates):
    return CostCalculator(rates)


class TestFutureCost:
    """Tests for AVD future state cost."""

    def test_medium_with_nerdio(self, calculator):
        """Test 1000 medium users on premium storage with Nerdio."""
        cost = calculator.calculate_future_cost(1000)

        assert cost.vms.count == 88
        assert cost.vms.sku == "D4s_v5"
        assert cost.vms.monthly_cost == pytest.approx(12334.08)
        assert cost.storage.total_gb == 100000
        assert cost.storage.monthly_cost == pytest.approx(21000)
        assert cost.nerdio.monthly_cost == pytest.approx(1750)
        assert cost.nerdio.tier == "1000-2499"
        assert cost.auto_scaling.savings_percent == pytest.approx(55)
        assert cost.auto_scaling.monthly_savings == pytest.approx(6783.744)
        assert cost.monthly_gross == pytest.approx(35084.08)
        assert cost.monthly_net == pytest.approx(28300.336)

    def test_without_nerdio(self, calculator):
        cost = calculator.calculate_future_cost(1000, include_nerdio=False)

        assert not cost.nerdio.enabled
        assert cost.nerdio.monthly_cost == 0
        assert cost.auto_scaling.savings_percent == pytest.approx(25)
        assert cost.monthly_net == pytest.approx(30250.56)

    def test_light_standard(self, calculator):
        cost = calculator.calculate_future_cost(
            100, user_profile="light", storage_type="standardSSD", storage_per_user_gb=50
        )
        assert cost.vms.count == 12
        assert cost.monthly_gross == pytest.approx(840.96 + 750 + 200)

    def test_annual_is_twelve_months(self, calculator):
        cost = calculator.calculate_future_cost(1000)
        assert cost.annual_net == pytest.approx(cost.monthly_net * 12)
        assert cost.annual_gross == pytest.approx(cost.monthly_gross * 12)
        assert cost.per_user_monthly == pytest.approx(cost.monthly_net / 1000)

    def test_unknown_profile(self, calculator):
        with pytest.raises(UnknownProfileError):
            calculator.calculate_future_cost(100, user_profile="ultra")

    def test_unknown_storage(self, calculator):
        with pytest.raises(UnknownStorageTypeError):
            calculator.calculate_future_cost(100, storage_type="tape")

    def test_rejects_zero_users(self, calculator):
        with pytest.raises(ValueError):
            calculator.calculate_future_cost(0)

    def test_to_dict(self, calculator):
        data = json.loads(json.dumps(calculator.calculate_future_cost(1000).to_dict()))
        assert data["infrastructure"]["vms"]["count"] == 88
        assert data["software"]["nerdio_manager"]["tier"] == "1000-2499"
        assert data["totals"]["monthly_net"] == pytest.approx(28300.336)


class TestCurrentCost:
    """Tests for current platform cost."""

    def test_citrix(self, calculator):
        cost = calculator.calculate_current_cost("citrix", 1000, server_count=15)

        assert cost.monthly == pytest.approx(26500)
        assert cost.breakdown["licensing"] == pytest.approx(16000)
        assert cost.breakdown["netscaler"] == pytest.approx(3000)
        assert cost.breakdown["infrastructure"] == pytest.approx(7500)
        assert cost.annual == pytest.approx(318000)
        assert cost.per_user_monthly == pytest.approx(26.5)

    def test_platform_case_insensitive(self, calculator):
        cost = calculator.calculate_current_cost("Citrix", 1000, server_count=15)
        assert cost.platform == "citrix"

    def test_vmware(self, calculator):
        cost = calculator.calculate_current_cost("vmware", 500, server_count=10)
        assert cost.monthly == pytest.approx(10500)

    def test_onpremise(self, calculator):
        cost = calculator.calculate_current_cost("onpremise", 200, server_count=10)
        assert cost.breakdown["server_capital"] == pytest.approx(80000 / 36)
        assert cost.monthly == pytest.approx(80000 / 36 + 2000 + 1500)

    def test_custom_monthly_cost(self, calculator):
        cost = calculator.calculate_current_cost("citrix", 1000, custom_monthly_cost=50000)
        assert cost.monthly == 50000
        assert cost.custom_override
        assert "licensing" in cost.breakdown

    def test_custom_zero_is_applied(self, calculator):
        cost = calculator.calculate_current_cost("vmware", 100, custom_monthly_cost=0)
        assert cost.monthly == 0

    def test_unknown_platform(self, calculator):
        with pytest.raises(UnknownPlatformError):
            calculator.calculate_current_cost("physical", 100)


class TestTCO:
    """Tests for the TCO comparison."""

    def test_strong_savings(self, calculator):
        current = calculator.calculate_current_cost("citrix", 1000, custom_monthly_cost=50000)
        future = calculator.calculate_future_cost(1000)
        tco = calculator.calculate_tco(current, future, years=3)

        assert tco.months == 36
        assert tco.current_state.total_cost == pytest.approx(1_800_000)
        assert tco.future_state.annual_cost == pytest.approx(28300.336 * 12)
        assert tco.savings_total == pytest.approx(
            tco.current_state.total_cost - tco.future_state.total_cost
        )
        assert tco.savings_percentage > 20
        assert tco.recommendation == "Strong cost savings - highly recommended"

    def test_negative_savings(self, calculator):
        current = calculator.calculate_current_cost("citrix", 1000, server_count=15)
        future = calculator.calculate_future_cost(1000)
        tco = calculator.calculate_tco(current, future, years=5)

        assert tco.savings_annual < 0
        assert tco.recommendation == "Evaluate non-financial benefits carefully"

    def test_moderate_savings(self, calculator):
        future = calculator.calculate_future_cost(1000)
        current = calculator.calculate_current_cost(
            "citrix", 1000, custom_monthly_cost=future.monthly_net * 1.1
        )
        tco = calculator.calculate_tco(current, future)
        assert tco.recommendation == "Moderate savings - consider strategic benefits"

    def test_total_is_annual_times_years(self, calculator):
        current = calculator.calculate_current_cost("vmware", 500)
        future = calculator.calculate_future_cost(500)
        for years in (1, 3, 5):
            tco = calculator.calculate_tco(current, future, years=years)
            assert tco.current_state.total_cost == pytest.approx(current.annual * years)
            assert tco.future_state.total_cost == pytest.approx(future.annual_net * years)

    def test_degenerate(self, calculator):
        current = calculator.calculate_current_cost("citrix", 100, custom_monthly_cost=0)
        future = calculator.calculate_future_cost(100)
        with pytest.raises(DegenerateTCOError):
            calculator.calculate_tco(current, future)

    def test_rejects_zero_years(self, calculator):
        current = calculator.calculate_current_cost("vmware", 500)
        future = calculator.calculate_future_cost(500)
        with pytest.raises(ValueError):
            calculator.calculate_tco(current, future, years=0)

    def test_to_dict(self, calculator):
        current = calculator.calculate_current_cost("vmware", 500)
        future = calculator.calculate_future_cost(500)
        data = calculator.calculate_tco(current, future).to_dict()
        assert data["time_horizon"] == {"years": 3, "months": 36}
        assert set(data["savings"]) == {"annual", "total", "percentage", "monthly_average"}


class TestPerUserEconomics:
    """Tests for per-user breakdown."""

    def test_per_user(self, calculator):
        future = calculator.calculate_future_cost(1000)
        economics = calculator.calculate_per_user_economics(future)

        assert economics.monthly_nerdio == pytest.approx(1.75)
        assert economics.monthly_total == pytest.approx(future.monthly_net / 1000)
        assert economics.annual_total == pytest.approx(economics.monthly_total * 12)

    def test_rejects_zero_users(self, calculator):
        future = calculator.calculate_future_cost(1000)
        with pytest.raises(ValueError):
            calculator.calculate_per_user_economics(future, user_count=0)
