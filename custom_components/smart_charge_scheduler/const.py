"""Constants for the Smart Charge Scheduler integration."""

DOMAIN = "smart_charge_scheduler"

# Vehicle configuration keys
CONF_VEHICLE_ID = "id"
CONF_VEHICLE_NAME = "name"
CONF_BATTERY_CAPACITY_WH = "battery_capacity_wh"
CONF_CHARGE_LOSS_PERCENT = "charge_loss_percent"

# Request configuration keys (persisted fields)
CONF_TARGET_SOC = "soc"
CONF_EV_ID = "evId"

# Defaults
DEFAULT_BATTERY_CAPACITY_WH = 100000  # 100 kWh
DEFAULT_CHARGE_LOSS_PERCENT = 10
DEFAULT_TARGET_SOC_PERCENT = 100
DEFAULT_INITIAL_SOC_PERCENT = 0

# Unit handling for meter sensors
UNIT_WATT_HOUR = "Wh"

# Logging
LOGGER_NAME = "scheduler"
DAILY_LOG_FILENAME = "events.log"
