"""Base contract for requests polled by the scheduler.

A request tells the scheduler how much energy an appliance still needs
(``min_demand_wh`` / ``max_demand_wh``), whether it is done
(``is_finished``) and whether it should currently be powered (``enabled``).
Concrete kinds (SOC based, energy based) implement the abstract methods.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from ..scheduler_logging import SchedulerLogger, get_logger
from .interfaces import EnergyMeter


class AbstractEnergyRequest(ABC):
    """Shared state and lifecycle of all request kinds.

    Every instance owns one re-entrant lock. ``update`` and inbound events
    must hold it while they mutate state.
    """

    def __init__(
        self,
        appliance_id: str = "",
        start: datetime | None = None,
        end: datetime | None = None,
        accept_control_recommendations: bool | None = None,
        meter: EnergyMeter | None = None,
        logger: SchedulerLogger | None = None,
    ) -> None:
        """Initialize the request.

        Args:
            appliance_id: Appliance this request belongs to (log context)
            start: Start of the scheduling window, if any
            end: End of the scheduling window, if any
            accept_control_recommendations: Explicit override, None for default
            meter: Energy meter of the appliance, None if not metered
            logger: Injected logger, defaults to the shared one
        """
        self.appliance_id = appliance_id
        self.start = start
        self.end = end
        self._accept_control_recommendations = accept_control_recommendations
        self.meter = meter
        self._logger = logger or get_logger()
        self._lock = threading.RLock()
        self._enabled = False
        self._enabled_before = False

    # ========== Lifecycle ==========

    @property
    def enabled(self) -> bool:
        """Whether the scheduler should currently power the appliance."""
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable the request."""
        with self._lock:
            if enabled:
                self._enabled_before = True
            if enabled != self._enabled:
                self._logger.debug(
                    "REQUEST_ENABLED_CHANGED",
                    appliance_id=self.appliance_id,
                    enabled=enabled,
                )
            self._enabled = enabled

    @property
    def enabled_before(self) -> bool:
        """Whether the request has ever been enabled."""
        return self._enabled_before

    def energy_delivered_kwh(self) -> float:
        """Energy metered so far, 0.0 without a meter."""
        if self.meter is None:
            return 0.0
        return self.meter.energy_kwh

    # ========== Scheduler contract ==========

    @abstractmethod
    def min_demand_wh(self, now: datetime | None = None) -> int | None:
        """Energy that must be delivered."""

    @abstractmethod
    def max_demand_wh(self, now: datetime | None = None) -> int | None:
        """Energy that may be delivered."""

    @abstractmethod
    def is_finished(self, now: datetime | None = None) -> bool:
        """Whether the demand is satisfied."""

    @abstractmethod
    def update(self, now: datetime | None = None) -> None:
        """Re-evaluate the demand; called on every scheduler tick."""

    @abstractmethod
    def uses_optional_energy(self) -> bool:
        """Whether part of the demand may be curtailed by the scheduler."""

    def accepts_control_recommendations(self) -> bool:
        """Whether control recommendations may switch this appliance."""
        if self._accept_control_recommendations is None:
            return True
        return self._accept_control_recommendations

    def on_soc_observed(self, now: datetime, soc_percent: float) -> None:
        """Handle a SOC reported by the charger. Ignored by default."""

    # ========== Equality / rendering ==========

    def _equality_key(self) -> tuple[Any, ...]:
        return (self.start, self.end, self._accept_control_recommendations)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(self) is not type(other):
            return NotImplemented
        return self._equality_key() == other._equality_key()

    def __hash__(self) -> int:
        return hash(self._equality_key())

    def describe(self, now: datetime | None = None) -> str:
        """Human readable rendering for diagnostics."""
        start = self.start.isoformat() if self.start else "-"
        end = self.end.isoformat() if self.end else "-"
        state = "enabled" if self._enabled else "disabled"
        return f"{start}-{end}/{state}"

    def __str__(self) -> str:
        return self.describe(datetime.now())

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.describe()}>"
