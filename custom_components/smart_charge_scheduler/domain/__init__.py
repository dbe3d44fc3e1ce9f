"""Domain logic module - pure business logic without HA dependencies.

- EnergyCalculator: SOC target to remaining Wh
- CalculationCache: memoization of the last calculation
- VehicleRegistry: battery profiles by vehicle id
"""

from .calculation_cache import CalculationCache
from .energy_calculator import EnergyCalculator
from .vehicle_registry import VehicleConfigError, VehicleRegistry

__all__ = [
    "CalculationCache",
    "EnergyCalculator",
    "VehicleConfigError",
    "VehicleRegistry",
]
