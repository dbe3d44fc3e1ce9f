"""Hardware abstraction layer - Home Assistant entities as request collaborators.

- SensorEnergyMeter: an energy sensor used as the request's meter
- ChargerSocListener: forwards SOC sensor changes to a request

Unavailable or invalid sensor states never raise; they are logged and
replaced by a neutral value (meter) or ignored (SOC).
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Callable

from homeassistant.const import (
    ATTR_UNIT_OF_MEASUREMENT,
    STATE_UNAVAILABLE,
    STATE_UNKNOWN,
)
from homeassistant.core import Event, callback
from homeassistant.helpers.event import async_track_state_change_event
from homeassistant.util import dt as dt_util

from ..const import UNIT_WATT_HOUR
from ..scheduler_logging import SchedulerLogger, get_logger
from .request import AbstractEnergyRequest

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant, State


def parse_sensor_state(state: State | None) -> float | None:
    """Return the numeric value of a sensor state, or None if it has none."""
    if state is None or state.state in (STATE_UNKNOWN, STATE_UNAVAILABLE):
        return None
    try:
        value = float(state.state)
    except (ValueError, TypeError):
        return None
    if not math.isfinite(value):
        return None
    return value


class SensorEnergyMeter:
    """Energy meter backed by a cumulative energy sensor (kWh or Wh)."""

    def __init__(
        self,
        hass: HomeAssistant,
        entity_id: str,
        logger: SchedulerLogger | None = None,
    ) -> None:
        """Initialize the meter.

        Args:
            hass: Home Assistant instance
            entity_id: Entity ID of the energy sensor
            logger: Injected logger
        """
        self.hass = hass
        self.entity_id = entity_id
        self._logger = logger or get_logger()

    @property
    def energy_kwh(self) -> float:
        """Energy delivered in kWh, 0.0 if the sensor cannot be read."""
        state = self.hass.states.get(self.entity_id)
        if state is None:
            self._logger.warning("METER_SENSOR_NOT_FOUND", entity_id=self.entity_id)
            return 0.0

        value = parse_sensor_state(state)
        if value is None:
            self._logger.warning(
                "METER_SENSOR_UNAVAILABLE",
                entity_id=self.entity_id,
                value=state.state,
            )
            return 0.0

        if state.attributes.get(ATTR_UNIT_OF_MEASUREMENT) == UNIT_WATT_HOUR:
            value = value / 1000.0
        return value


class ChargerSocListener:
    """Subscribe a request to the SOC sensor of a charger or vehicle."""

    def __init__(
        self,
        hass: HomeAssistant,
        entity_id: str,
        request: AbstractEnergyRequest,
        logger: SchedulerLogger | None = None,
    ) -> None:
        """Initialize the listener.

        Args:
            hass: Home Assistant instance
            entity_id: Entity ID of the SOC sensor (percent)
            request: Request receiving ``on_soc_observed``
            logger: Injected logger
        """
        self.hass = hass
        self.entity_id = entity_id
        self.request = request
        self._logger = logger or get_logger()
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def is_listening(self) -> bool:
        """Whether the state listener is registered."""
        return self._unsubscribe is not None

    @callback
    def async_start(self) -> None:
        """Start tracking SOC changes."""
        if self._unsubscribe is not None:
            return
        self._unsubscribe = async_track_state_change_event(
            self.hass, [self.entity_id], self._handle_soc_change
        )
        self._logger.debug("SOC_TRACKING_ENABLED", sensor=self.entity_id)

    @callback
    def async_stop(self) -> None:
        """Stop tracking SOC changes."""
        if self._unsubscribe is None:
            return
        self._unsubscribe()
        self._unsubscribe = None
        self._logger.debug("SOC_TRACKING_DISABLED", sensor=self.entity_id)

    @callback
    def _handle_soc_change(self, event: Event) -> None:
        """Forward a valid SOC reading to the request."""
        new_state = event.data.get("new_state")
        soc = parse_sensor_state(new_state)
        if soc is None:
            self._logger.debug(
                "SOC_SENSOR_IGNORED",
                sensor=self.entity_id,
                value=new_state.state if new_state is not None else None,
            )
            return

        self.request.on_soc_observed(dt_util.now(), soc)
