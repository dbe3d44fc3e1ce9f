"""Data models for Smart Charge Scheduler."""

from __future__ import annotations

from dataclasses import dataclass

from ..const import DEFAULT_BATTERY_CAPACITY_WH, DEFAULT_CHARGE_LOSS_PERCENT


@dataclass(frozen=True)
class BatteryProfile:
    """Static battery constants of one vehicle."""

    battery_capacity_wh: int
    charge_loss_percent: int
    vehicle_id: int | None = None
    name: str | None = None


@dataclass(frozen=True)
class CalculationInputs:
    """Inputs that decide whether a cached demand is still valid.

    Compared by value. The float is compared exactly.
    """

    energy_delivered_kwh: float
    initial_soc_percent: int


DEFAULT_BATTERY_PROFILE = BatteryProfile(
    battery_capacity_wh=DEFAULT_BATTERY_CAPACITY_WH,
    charge_loss_percent=DEFAULT_CHARGE_LOSS_PERCENT,
)
