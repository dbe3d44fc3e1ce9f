"""Collaborator contracts consumed by requests."""

from __future__ import annotations

from typing import Protocol

from ..models import BatteryProfile


class EnergyMeter(Protocol):
    """Cumulative energy delivered in the current appliance session."""

    @property
    def energy_kwh(self) -> float:
        """Energy in kWh."""


class VehicleLookup(Protocol):
    """Source of battery profiles, e.g. ``VehicleRegistry``."""

    def get_vehicle(self, vehicle_id: int | None) -> BatteryProfile | None:
        """Return the profile for ``vehicle_id`` or None."""
