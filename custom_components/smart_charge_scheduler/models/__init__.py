"""Data models for Smart Charge Scheduler."""

from .data_models import (
    DEFAULT_BATTERY_PROFILE,
    BatteryProfile,
    CalculationInputs,
)

__all__ = [
    "DEFAULT_BATTERY_PROFILE",
    "BatteryProfile",
    "CalculationInputs",
]
