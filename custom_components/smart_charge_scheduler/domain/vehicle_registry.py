"""Vehicle registry built from validated configuration."""

from __future__ import annotations

from typing import Any, Iterable

import voluptuous as vol

from ..const import (
    CONF_BATTERY_CAPACITY_WH,
    CONF_CHARGE_LOSS_PERCENT,
    CONF_VEHICLE_ID,
    CONF_VEHICLE_NAME,
    DEFAULT_CHARGE_LOSS_PERCENT,
)
from ..models import BatteryProfile

VEHICLE_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_VEHICLE_ID): vol.Coerce(int),
        vol.Optional(CONF_VEHICLE_NAME): str,
        vol.Required(CONF_BATTERY_CAPACITY_WH): vol.Coerce(int),
        vol.Optional(
            CONF_CHARGE_LOSS_PERCENT, default=DEFAULT_CHARGE_LOSS_PERCENT
        ): vol.Coerce(int),
    },
    extra=vol.REMOVE_EXTRA,
)

VEHICLES_SCHEMA = vol.Schema([VEHICLE_SCHEMA])


class VehicleConfigError(ValueError):
    """Raised when the vehicle configuration is invalid."""


class VehicleRegistry:
    """Read-only lookup of battery profiles by vehicle id."""

    def __init__(self, vehicles: Iterable[BatteryProfile] = ()) -> None:
        self._vehicles: dict[int, BatteryProfile] = {}
        for vehicle in vehicles:
            if vehicle.vehicle_id is None:
                raise VehicleConfigError("Vehicle profile without id")
            if vehicle.vehicle_id in self._vehicles:
                raise VehicleConfigError(f"Duplicate vehicle id {vehicle.vehicle_id}")
            self._vehicles[vehicle.vehicle_id] = vehicle

    @classmethod
    def from_config(cls, config: list[dict[str, Any]]) -> VehicleRegistry:
        """Build a registry from a list of vehicle dicts.

        Args:
            config: Vehicle dicts, see ``VEHICLE_SCHEMA``

        Returns:
            VehicleRegistry

        Raises:
            VehicleConfigError: If the configuration does not validate
        """
        try:
            validated = VEHICLES_SCHEMA(config)
        except vol.Invalid as ex:
            raise VehicleConfigError(f"Invalid vehicle configuration: {ex}") from ex

        return cls(
            BatteryProfile(
                battery_capacity_wh=item[CONF_BATTERY_CAPACITY_WH],
                charge_loss_percent=item[CONF_CHARGE_LOSS_PERCENT],
                vehicle_id=item[CONF_VEHICLE_ID],
                name=item.get(CONF_VEHICLE_NAME),
            )
            for item in validated
        )

    def get_vehicle(self, vehicle_id: int | None) -> BatteryProfile | None:
        """Return the profile for ``vehicle_id``, or None if unknown."""
        if vehicle_id is None:
            return None
        return self._vehicles.get(vehicle_id)

    @property
    def vehicle_ids(self) -> list[int]:
        """Configured vehicle ids."""
        return sorted(self._vehicles)

    def __len__(self) -> int:
        return len(self._vehicles)
