"""Request for a fixed amount of energy."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from ..domain import EnergyCalculator
from ..scheduler_logging import SchedulerLogger
from .interfaces import EnergyMeter
from .request import AbstractEnergyRequest


class EnergyRequest(AbstractEnergyRequest):
    """Demand between a minimum and a maximum amount of energy.

    Energy above the minimum is optional: the scheduler may deliver it when
    cheap or surplus power is available.
    """

    def __init__(
        self,
        min_energy_wh: int | None = None,
        max_energy_wh: int = 0,
        *,
        appliance_id: str = "",
        start: datetime | None = None,
        end: datetime | None = None,
        accept_control_recommendations: bool | None = None,
        meter: EnergyMeter | None = None,
        logger: SchedulerLogger | None = None,
    ) -> None:
        super().__init__(
            appliance_id=appliance_id,
            start=start,
            end=end,
            accept_control_recommendations=accept_control_recommendations,
            meter=meter,
            logger=logger,
        )
        self.min_energy_wh = min_energy_wh
        self.max_energy_wh = max_energy_wh
        self._delivered_wh = 0

    @property
    def min_energy_or_default(self) -> int:
        """Minimum energy, 0 Wh when not configured."""
        return self.min_energy_wh if self.min_energy_wh is not None else 0

    def uses_optional_energy(self) -> bool:
        return self.max_energy_wh > self.min_energy_or_default

    def min_demand_wh(self, now: datetime | None = None) -> int:
        return self.min_energy_or_default - self._delivered_wh

    def max_demand_wh(self, now: datetime | None = None) -> int:
        return self.max_energy_wh - self._delivered_wh

    def is_finished(self, now: datetime | None = None) -> bool:
        return self.max_demand_wh(now) <= 0

    def update(self, now: datetime | None = None) -> None:
        """Read the meter and disable the request once the maximum is reached."""
        with self._lock:
            delivered_wh = EnergyCalculator.delivered_energy_wh(self.energy_delivered_kwh())
            if delivered_wh != self._delivered_wh:
                self._logger.debug(
                    "ENERGY_REQUEST_METERED",
                    appliance_id=self.appliance_id,
                    delivered_wh=delivered_wh,
                    max_energy_wh=self.max_energy_wh,
                )
            self._delivered_wh = delivered_wh
            if self.is_finished(now):
                self.set_enabled(False)

    def _equality_key(self) -> tuple[Any, ...]:
        return super()._equality_key() + (self.min_energy_wh, self.max_energy_wh)

    def describe(self, now: datetime | None = None) -> str:
        return (
            f"{super().describe(now)}/{self.min_energy_or_default}Wh"
            f"/{self.max_energy_wh}Wh/delivered={self._delivered_wh}Wh"
        )
