"""Core module for Smart Charge Scheduler.

Contains the request objects polled by the scheduler and the adapters
connecting them to Home Assistant entities.
"""

from .energy_request import EnergyRequest
from .hardware import ChargerSocListener, SensorEnergyMeter
from .interfaces import EnergyMeter, VehicleLookup
from .request import AbstractEnergyRequest
from .soc_request import SocRequest

__all__ = [
    "AbstractEnergyRequest",
    "ChargerSocListener",
    "EnergyMeter",
    "EnergyRequest",
    "SensorEnergyMeter",
    "SocRequest",
    "VehicleLookup",
]
