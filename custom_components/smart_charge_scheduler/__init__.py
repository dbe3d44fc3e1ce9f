"""Smart Charge Scheduler - energy demand of SOC based charging requests.

Layout:
- Pure domain logic (domain/*.py)
- Requests and Home Assistant adapters (core/*.py)
- Data models (models/*.py)
- Unified logging (scheduler_logging/*.py)
"""

from __future__ import annotations

from .const import DOMAIN
from .core import (
    AbstractEnergyRequest,
    ChargerSocListener,
    EnergyRequest,
    SensorEnergyMeter,
    SocRequest,
)
from .domain import CalculationCache, EnergyCalculator, VehicleRegistry
from .models import BatteryProfile, CalculationInputs

__all__ = [
    "DOMAIN",
    "AbstractEnergyRequest",
    "BatteryProfile",
    "CalculationCache",
    "CalculationInputs",
    "ChargerSocListener",
    "EnergyCalculator",
    "EnergyRequest",
    "SensorEnergyMeter",
    "SocRequest",
    "VehicleRegistry",
]
