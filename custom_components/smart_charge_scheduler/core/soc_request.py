"""Request that charges an electric vehicle to a target SOC."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any

from ..const import (
    CONF_EV_ID,
    CONF_TARGET_SOC,
    DEFAULT_INITIAL_SOC_PERCENT,
    DEFAULT_TARGET_SOC_PERCENT,
)
from ..domain import CalculationCache, EnergyCalculator
from ..models import BatteryProfile, CalculationInputs
from ..scheduler_logging import SchedulerLogger
from .interfaces import EnergyMeter, VehicleLookup
from .request import AbstractEnergyRequest


class SocRequest(AbstractEnergyRequest):
    """Energy demand derived from a SOC target.

    States:
    - Pending: no evaluation yet (``remaining_demand_wh`` is None)
    - Active: demand > 0
    - Finished: demand <= 0, ``enabled`` forced to False

    The demand is recalculated only when the metered energy or the initial
    SOC change. A changed target SOC alone does not trigger a recalculation.
    """

    def __init__(
        self,
        target_soc_percent: int | None = None,
        vehicle_id: int | None = None,
        remaining_demand_wh: int | None = None,
        vehicles: VehicleLookup | None = None,
        *,
        appliance_id: str = "",
        start: datetime | None = None,
        end: datetime | None = None,
        accept_control_recommendations: bool | None = None,
        meter: EnergyMeter | None = None,
        logger: SchedulerLogger | None = None,
    ) -> None:
        """Initialize the request.

        Args:
            target_soc_percent: SOC to charge to, None for 100 %
            vehicle_id: Vehicle whose battery profile is used
            remaining_demand_wh: Known demand, None until first evaluation
            vehicles: Battery profile lookup
        """
        super().__init__(
            appliance_id=appliance_id,
            start=start,
            end=end,
            accept_control_recommendations=accept_control_recommendations,
            meter=meter,
            logger=logger,
        )
        self.target_soc_percent = target_soc_percent
        self.vehicle_id = vehicle_id
        self.vehicles = vehicles
        self._initial_soc_percent: int | None = DEFAULT_INITIAL_SOC_PERCENT
        self._remaining_demand_wh = remaining_demand_wh
        self._cache = CalculationCache(logger=self._logger, name=appliance_id)

    # ========== Fields ==========

    @property
    def target_soc_or_default(self) -> int:
        """Target SOC, 100 % when not configured."""
        if self.target_soc_percent is None:
            return DEFAULT_TARGET_SOC_PERCENT
        return self.target_soc_percent

    @property
    def initial_soc_percent(self) -> int:
        """Last known SOC, 0 % when unknown."""
        if self._initial_soc_percent is None:
            return DEFAULT_INITIAL_SOC_PERCENT
        return self._initial_soc_percent

    @initial_soc_percent.setter
    def initial_soc_percent(self, value: int | None) -> None:
        with self._lock:
            self._initial_soc_percent = value

    @property
    def remaining_demand_wh(self) -> int | None:
        """Last computed demand in Wh."""
        with self._lock:
            return self._remaining_demand_wh

    @property
    def last_calculation_inputs(self) -> CalculationInputs | None:
        """Key of the cached calculation."""
        return self._cache.last_inputs

    # ========== Scheduler contract ==========

    def uses_optional_energy(self) -> bool:
        """SOC demand is never curtailable."""
        return False

    def min_demand_wh(self, now: datetime | None = None) -> int | None:
        with self._lock:
            return self._remaining_demand_wh

    def max_demand_wh(self, now: datetime | None = None) -> int | None:
        with self._lock:
            return self._remaining_demand_wh

    def is_finished(self, now: datetime | None = None) -> bool:
        with self._lock:
            demand = self._remaining_demand_wh
        return demand is not None and demand <= 0

    def update(self, now: datetime | None = None) -> None:
        """Re-evaluate the demand and disable the request once it is met."""
        with self._lock:
            vehicle = self.vehicles.get_vehicle(self.vehicle_id) if self.vehicles is not None else None
            self._remaining_demand_wh = self.calculate_energy(vehicle)
            if self._remaining_demand_wh <= 0:
                self.set_enabled(False)

    def on_soc_observed(self, now: datetime, soc_percent: float) -> None:
        """Take over the SOC reported by the charger and re-evaluate.

        A request that has never been enabled is enabled first, so that real
        SOC data wakes up a dormant request. Non-finite readings are ignored.
        """
        if not math.isfinite(soc_percent):
            self._logger.debug(
                "SOC_SENSOR_IGNORED",
                appliance_id=self.appliance_id,
                value=soc_percent,
            )
            return
        with self._lock:
            self._logger.debug(
                "SOC_OBSERVED",
                appliance_id=self.appliance_id,
                soc=soc_percent,
            )
            if not self.enabled_before:
                self.set_enabled(True)
            self._initial_soc_percent = EnergyCalculator.truncate(soc_percent)
            self.update(now)

    # ========== Calculation ==========

    def calculate_energy(self, vehicle: BatteryProfile | None) -> int:
        """Return the remaining demand for ``vehicle``, cached by meter and SOC.

        Args:
            vehicle: BatteryProfile of the vehicle, or None for defaults

        Returns:
            Remaining demand in Wh
        """
        with self._lock:
            inputs = CalculationInputs(
                energy_delivered_kwh=self.energy_delivered_kwh(),
                initial_soc_percent=self.initial_soc_percent,
            )
            return self._cache.get_or_compute(inputs, lambda: self._compute(vehicle, inputs))

    def _compute(self, vehicle: BatteryProfile | None, inputs: CalculationInputs) -> int:
        if vehicle is None:
            self._logger.warning(
                "VEHICLE_NOT_FOUND_USING_DEFAULTS",
                appliance_id=self.appliance_id,
                ev_id=self.vehicle_id,
            )
        profile = EnergyCalculator.resolve_profile(vehicle)
        target_soc = self.target_soc_or_default

        self._logger.debug(
            "SOC_ENERGY_CALCULATION",
            appliance_id=self.appliance_id,
            ev_id=self.vehicle_id,
            battery_capacity_wh=profile.battery_capacity_wh,
            charge_loss_percent=profile.charge_loss_percent,
            initial_soc=inputs.initial_soc_percent,
            target_soc=target_soc,
        )
        energy = EnergyCalculator.remaining_demand_wh(
            initial_soc_percent=inputs.initial_soc_percent,
            target_soc_percent=target_soc,
            energy_delivered_kwh=inputs.energy_delivered_kwh,
            battery_capacity_wh=profile.battery_capacity_wh,
            charge_loss_percent=profile.charge_loss_percent,
        )
        self._logger.debug(
            "SOC_ENERGY_CALCULATED",
            appliance_id=self.appliance_id,
            energy_wh=energy,
        )
        return energy

    # ========== Persistence ==========

    def to_dict(self) -> dict[str, Any]:
        """Persisted fields only."""
        return {
            CONF_TARGET_SOC: self.target_soc_percent,
            CONF_EV_ID: self.vehicle_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], **kwargs: Any) -> SocRequest:
        """Create a request from persisted fields."""
        return cls(
            target_soc_percent=data.get(CONF_TARGET_SOC),
            vehicle_id=data.get(CONF_EV_ID),
            **kwargs,
        )

    # ========== Equality / rendering ==========

    def _equality_key(self) -> tuple[Any, ...]:
        return super()._equality_key() + (
            self.target_soc_or_default,
            self.vehicle_id,
            self._remaining_demand_wh,
        )

    def describe(self, now: datetime | None = None) -> str:
        energy = self._remaining_demand_wh if self._remaining_demand_wh is not None else 0
        return (
            f"{super().describe(now)}/evId={self.vehicle_id}"
            f"/soc={self.initial_soc_percent}%=>{self.target_soc_or_default}%"
            f"/energy={energy}Wh"
        )
