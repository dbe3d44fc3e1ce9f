"""Fixtures for testing."""
import pytest
from unittest.mock import MagicMock, Mock

from custom_components.smart_charge_scheduler.domain import VehicleRegistry
from custom_components.smart_charge_scheduler.models import BatteryProfile
from custom_components.smart_charge_scheduler.scheduler_logging import SchedulerLogger

APPLIANCE_ID = "F-00000001-000000000019-00"


@pytest.fixture
def mock_logger():
    """Logger double recording every event."""
    return MagicMock(spec=SchedulerLogger)


@pytest.fixture
def mock_meter():
    """Energy meter with nothing delivered yet."""
    meter = Mock()
    meter.energy_kwh = 0.0
    return meter


@pytest.fixture
def vehicle_registry():
    """Registry with one 50 kWh vehicle (id 1) and one 75 kWh vehicle (id 2)."""
    return VehicleRegistry(
        [
            BatteryProfile(battery_capacity_wh=50000, charge_loss_percent=10, vehicle_id=1, name="Zoe"),
            BatteryProfile(battery_capacity_wh=75000, charge_loss_percent=5, vehicle_id=2, name="Model 3"),
        ]
    )


@pytest.fixture
def mock_hass():
    """Create a mock Home Assistant instance."""
    hass = MagicMock()
    hass.data = {}
    hass.states = MagicMock()
    hass.states.get = MagicMock(return_value=None)
    return hass


def logged_events(mock_method):
    """Event names passed to a mocked logger method, in call order."""
    return [call.args[0] for call in mock_method.call_args_list]
