"""Test the pure SOC to energy conversion."""
from custom_components.smart_charge_scheduler.domain import EnergyCalculator
from custom_components.smart_charge_scheduler.models import (
    DEFAULT_BATTERY_PROFILE,
    BatteryProfile,
)


class TestRemainingDemand:
    """Test EnergyCalculator.remaining_demand_wh."""

    def test_formula(self):
        """60 % of 50 kWh plus 10 % loss."""
        result = EnergyCalculator.remaining_demand_wh(
            initial_soc_percent=20,
            target_soc_percent=80,
            energy_delivered_kwh=0.0,
            battery_capacity_wh=50000,
            charge_loss_percent=10,
        )
        assert result == 33000

    def test_delivered_energy_is_subtracted(self):
        result = EnergyCalculator.remaining_demand_wh(
            initial_soc_percent=20,
            target_soc_percent=80,
            energy_delivered_kwh=5.0,
            battery_capacity_wh=50000,
            charge_loss_percent=10,
        )
        assert result == 28000

    def test_delivered_energy_truncated_on_its_own(self):
        """Fractions of a Wh delivered are dropped before subtracting."""
        result = EnergyCalculator.remaining_demand_wh(
            initial_soc_percent=20,
            target_soc_percent=80,
            energy_delivered_kwh=1.2345,
            battery_capacity_wh=50000,
            charge_loss_percent=10,
        )
        assert result == 33000 - 1234

    def test_sub_watt_hour_delivery_ignored(self):
        result = EnergyCalculator.remaining_demand_wh(
            initial_soc_percent=20,
            target_soc_percent=80,
            energy_delivered_kwh=0.0005,
            battery_capacity_wh=50000,
            charge_loss_percent=10,
        )
        assert result == 33000

    def test_target_reached_is_zero(self):
        result = EnergyCalculator.remaining_demand_wh(
            initial_soc_percent=80,
            target_soc_percent=80,
            energy_delivered_kwh=0.0,
            battery_capacity_wh=50000,
            charge_loss_percent=10,
        )
        assert result == 0

    def test_initial_above_target_is_negative(self):
        result = EnergyCalculator.remaining_demand_wh(
            initial_soc_percent=90,
            target_soc_percent=80,
            energy_delivered_kwh=0.0,
            battery_capacity_wh=100000,
            charge_loss_percent=10,
        )
        assert result == -11000

    def test_over_delivery_is_negative(self):
        result = EnergyCalculator.remaining_demand_wh(
            initial_soc_percent=20,
            target_soc_percent=80,
            energy_delivered_kwh=40.0,
            battery_capacity_wh=50000,
            charge_loss_percent=10,
        )
        assert result == -7000

    def test_out_of_range_soc_not_clamped(self):
        result = EnergyCalculator.remaining_demand_wh(
            initial_soc_percent=20,
            target_soc_percent=120,
            energy_delivered_kwh=0.0,
            battery_capacity_wh=10000,
            charge_loss_percent=0,
        )
        assert result == 10000

    def test_negative_capacity_propagates(self):
        result = EnergyCalculator.remaining_demand_wh(
            initial_soc_percent=20,
            target_soc_percent=80,
            energy_delivered_kwh=0.0,
            battery_capacity_wh=-50000,
            charge_loss_percent=10,
        )
        assert result == -33000

    def test_default_profile_full_charge(self):
        result = EnergyCalculator.remaining_demand_wh(
            initial_soc_percent=0,
            target_soc_percent=100,
            energy_delivered_kwh=0.0,
            battery_capacity_wh=DEFAULT_BATTERY_PROFILE.battery_capacity_wh,
            charge_loss_percent=DEFAULT_BATTERY_PROFILE.charge_loss_percent,
        )
        assert result == 110000

    def test_nan_delivery_counts_as_zero(self):
        result = EnergyCalculator.remaining_demand_wh(
            initial_soc_percent=20,
            target_soc_percent=80,
            energy_delivered_kwh=float("nan"),
            battery_capacity_wh=50000,
            charge_loss_percent=10,
        )
        assert result == 33000

    def test_infinite_delivery_saturates(self):
        result = EnergyCalculator.remaining_demand_wh(
            initial_soc_percent=20,
            target_soc_percent=80,
            energy_delivered_kwh=float("inf"),
            battery_capacity_wh=50000,
            charge_loss_percent=10,
        )
        assert result == 33000 - EnergyCalculator.INT_MAX


class TestTruncate:
    """Test EnergyCalculator.truncate."""

    def test_toward_zero(self):
        assert EnergyCalculator.truncate(2.9) == 2
        assert EnergyCalculator.truncate(-2.9) == -2

    def test_nan_is_zero(self):
        assert EnergyCalculator.truncate(float("nan")) == 0

    def test_infinities_clamp(self):
        assert EnergyCalculator.truncate(float("inf")) == 2147483647
        assert EnergyCalculator.truncate(float("-inf")) == -2147483648

    def test_large_finite_values_clamp(self):
        assert EnergyCalculator.truncate(1e12) == 2147483647
        assert EnergyCalculator.truncate(-1e12) == -2147483648


class TestResolveProfile:
    """Test EnergyCalculator.resolve_profile."""

    def test_missing_vehicle_uses_defaults(self):
        profile = EnergyCalculator.resolve_profile(None)

        assert profile.battery_capacity_wh == 100000
        assert profile.charge_loss_percent == 10

    def test_vehicle_profile_returned(self):
        vehicle = BatteryProfile(battery_capacity_wh=40000, charge_loss_percent=7, vehicle_id=3)

        assert EnergyCalculator.resolve_profile(vehicle) is vehicle
