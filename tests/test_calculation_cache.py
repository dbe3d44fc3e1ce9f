"""Test memoization of the demand calculation."""
from unittest.mock import Mock

import pytest

from conftest import logged_events
from custom_components.smart_charge_scheduler.domain import CalculationCache
from custom_components.smart_charge_scheduler.models import CalculationInputs


class TestCalculationCache:
    """Test CalculationCache."""

    def test_first_lookup_computes(self, mock_logger):
        cache = CalculationCache(logger=mock_logger, name="F-1")
        compute = Mock(return_value=33000)
        inputs = CalculationInputs(energy_delivered_kwh=0.0, initial_soc_percent=20)

        assert cache.get_or_compute(inputs, compute) == 33000
        compute.assert_called_once()
        assert cache.last_inputs == inputs
        assert cache.last_result == 33000

    def test_hit_returns_stored_result_without_logging(self, mock_logger):
        cache = CalculationCache(logger=mock_logger)
        cache.get_or_compute(CalculationInputs(0.0, 20), Mock(return_value=33000))
        mock_logger.reset_mock()
        compute = Mock(return_value=1)

        result = cache.get_or_compute(CalculationInputs(0.0, 20), compute)

        assert result == 33000
        compute.assert_not_called()
        mock_logger.debug.assert_not_called()

    def test_miss_logs_recalculation(self, mock_logger):
        cache = CalculationCache(logger=mock_logger, name="F-1")

        cache.get_or_compute(CalculationInputs(2.5, 20), Mock(return_value=30500))

        mock_logger.debug.assert_called_once_with(
            "SOC_ENERGY_RECALCULATING",
            appliance_id="F-1",
            energy_charged_kwh=2.5,
            initial_soc=20,
        )

    def test_changed_energy_recomputes(self, mock_logger):
        cache = CalculationCache(logger=mock_logger)
        cache.get_or_compute(CalculationInputs(0.0, 20), Mock(return_value=33000))

        result = cache.get_or_compute(CalculationInputs(5.0, 20), Mock(return_value=28000))

        assert result == 28000
        assert logged_events(mock_logger.debug).count("SOC_ENERGY_RECALCULATING") == 2

    def test_changed_soc_recomputes(self, mock_logger):
        cache = CalculationCache(logger=mock_logger)
        cache.get_or_compute(CalculationInputs(0.0, 20), Mock(return_value=33000))
        compute = Mock(return_value=27500)

        assert cache.get_or_compute(CalculationInputs(0.0, 30), compute) == 27500
        compute.assert_called_once()

    def test_float_key_compared_exactly(self, mock_logger):
        """0.1 + 0.2 is not 0.3, so the key differs."""
        cache = CalculationCache(logger=mock_logger)
        cache.get_or_compute(CalculationInputs(0.3, 20), Mock(return_value=1))
        compute = Mock(return_value=2)

        assert cache.get_or_compute(CalculationInputs(0.1 + 0.2, 20), compute) == 2
        compute.assert_called_once()

    def test_equal_values_are_a_hit(self, mock_logger):
        """Keys are compared by value, not identity."""
        cache = CalculationCache(logger=mock_logger)
        cache.get_or_compute(CalculationInputs(1.5, 40), Mock(return_value=7))
        compute = Mock(return_value=8)

        assert cache.get_or_compute(CalculationInputs(float("1.5"), 40), compute) == 7
        compute.assert_not_called()

    def test_failed_compute_is_not_stored(self, mock_logger):
        """A raising compute leaves the previous key and result in place."""
        cache = CalculationCache(logger=mock_logger)
        cache.get_or_compute(CalculationInputs(0.0, 20), Mock(return_value=33000))
        failing = Mock(side_effect=RuntimeError("meter gone"))

        with pytest.raises(RuntimeError):
            cache.get_or_compute(CalculationInputs(5.0, 20), failing)

        assert cache.last_inputs == CalculationInputs(0.0, 20)
        assert cache.last_result == 33000

        compute = Mock(return_value=28000)
        assert cache.get_or_compute(CalculationInputs(5.0, 20), compute) == 28000
        compute.assert_called_once()

    def test_failed_first_compute_leaves_cache_empty(self, mock_logger):
        cache = CalculationCache(logger=mock_logger)

        with pytest.raises(RuntimeError):
            cache.get_or_compute(CalculationInputs(0.0, 20), Mock(side_effect=RuntimeError))

        assert cache.last_inputs is None
        assert cache.last_result is None
