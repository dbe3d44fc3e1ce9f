"""Memoization of the last demand calculation."""

from __future__ import annotations

from typing import Callable

from ..models import CalculationInputs
from ..scheduler_logging import SchedulerLogger, get_logger


class CalculationCache:
    """Remember the last calculation inputs and their result.

    The scheduler polls requests on every tick. As long as the metered energy
    and the initial SOC stay the same, the stored result is returned and
    nothing is logged. Target SOC is not part of the key.
    """

    def __init__(
        self,
        logger: SchedulerLogger | None = None,
        name: str = "",
    ) -> None:
        """Initialize the cache.

        Args:
            logger: Logger for recalculation events
            name: Owner identifier used in log context (e.g. appliance id)
        """
        self._logger = logger or get_logger()
        self._name = name
        self._last_inputs: CalculationInputs | None = None
        self._last_result: int | None = None

    @property
    def last_inputs(self) -> CalculationInputs | None:
        """Key of the stored result."""
        return self._last_inputs

    @property
    def last_result(self) -> int | None:
        """Stored result."""
        return self._last_result

    def is_valid_for(self, inputs: CalculationInputs) -> bool:
        """Check whether the stored result was computed from ``inputs``."""
        return self._last_inputs is not None and self._last_inputs == inputs

    def get_or_compute(
        self,
        inputs: CalculationInputs,
        compute: Callable[[], int],
    ) -> int:
        """Return the stored result for ``inputs`` or compute a fresh one.

        Args:
            inputs: Current metered energy and initial SOC
            compute: Called only on a miss

        Returns:
            Remaining demand in Wh
        """
        if self.is_valid_for(inputs) and self._last_result is not None:
            return self._last_result

        self._logger.debug(
            "SOC_ENERGY_RECALCULATING",
            appliance_id=self._name,
            energy_charged_kwh=inputs.energy_delivered_kwh,
            initial_soc=inputs.initial_soc_percent,
        )
        result = compute()
        self._last_inputs = inputs
        self._last_result = result
        return result
