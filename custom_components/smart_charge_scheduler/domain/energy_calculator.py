"""Pure SOC to energy conversion.

This module has NO dependencies on Home Assistant and does no logging.
Callers decide what to log based on the returned values.
"""

from __future__ import annotations

import math

from ..models import DEFAULT_BATTERY_PROFILE, BatteryProfile


class EnergyCalculator:
    """Convert a SOC target into the energy still to be delivered."""

    INT_MAX = 2**31 - 1
    INT_MIN = -(2**31)

    @staticmethod
    def truncate(value: float) -> int:
        """Truncate toward zero, saturating at the 32-bit integer range.

        NaN maps to 0, infinities to the nearest bound.
        """
        if math.isnan(value):
            return 0
        if value >= EnergyCalculator.INT_MAX:
            return EnergyCalculator.INT_MAX
        if value <= EnergyCalculator.INT_MIN:
            return EnergyCalculator.INT_MIN
        return int(value)

    @staticmethod
    def target_energy_wh(
        initial_soc_percent: int,
        target_soc_percent: int,
        battery_capacity_wh: int,
        charge_loss_percent: int,
    ) -> int:
        """Energy needed to move from initial to target SOC, including charge loss.

        Truncated toward zero.
        """
        return EnergyCalculator.truncate(
            (target_soc_percent - initial_soc_percent) / 100.0
            * (100 + charge_loss_percent) / 100.0
            * battery_capacity_wh
        )

    @staticmethod
    def delivered_energy_wh(energy_delivered_kwh: float) -> int:
        """Metered energy in Wh, truncated toward zero."""
        return EnergyCalculator.truncate(energy_delivered_kwh * 1000.0)

    @staticmethod
    def remaining_demand_wh(
        initial_soc_percent: int,
        target_soc_percent: int,
        energy_delivered_kwh: float,
        battery_capacity_wh: int,
        charge_loss_percent: int,
    ) -> int:
        """Calculate the remaining energy demand.

        Both terms are truncated on their own before subtracting. Inputs are
        not validated: out-of-range SOC values or a negative capacity simply
        yield an unusual (possibly negative) demand.

        Args:
            initial_soc_percent: SOC the vehicle started from (or currently has)
            target_soc_percent: SOC to charge to
            energy_delivered_kwh: Energy metered so far in this session
            battery_capacity_wh: Battery capacity
            charge_loss_percent: Charging overhead in percent

        Returns:
            Remaining demand in Wh; zero or negative means done
        """
        target_energy = EnergyCalculator.target_energy_wh(
            initial_soc_percent,
            target_soc_percent,
            battery_capacity_wh,
            charge_loss_percent,
        )
        return target_energy - EnergyCalculator.delivered_energy_wh(energy_delivered_kwh)

    @staticmethod
    def resolve_profile(vehicle: BatteryProfile | None) -> BatteryProfile:
        """Return the vehicle's profile, or the default profile if there is none."""
        if vehicle is None:
            return DEFAULT_BATTERY_PROFILE
        return vehicle
