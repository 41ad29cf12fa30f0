"""Constants for the WeMo Holmes integration."""

from datetime import timedelta

# Channel identifiers exposed to consumers.
CHANNEL_PURIFIER_MODE = "purifierMode"
CHANNEL_HEATER_MODE = "heaterMode"
CHANNEL_HUMIDIFIER_MODE = "humidifierMode"
CHANNEL_IONIZER = "ionizer"
CHANNEL_AIR_QUALITY = "airQuality"
CHANNEL_FILTER_LIFE = "filterLife"
CHANNEL_EXPIRED_FILTER_TIME = "expiredFilterTime"
CHANNEL_FILTER_PRESENT = "filterPresent"
CHANNEL_DESIRED_HUMIDITY = "desiredHumidity"
CHANNEL_CURRENT_HUMIDITY = "currentHumidity"
CHANNEL_CURRENT_TEMPERATURE = "currentTemperature"
CHANNEL_TARGET_TEMPERATURE = "targetTemperature"
CHANNEL_AUTO_OFF_TIME = "autoOffTime"
CHANNEL_HEATING_REMAINING = "heatingRemaining"

# UPnP services.
DEVICE_ACTION_SERVICE = "deviceevent"
BASIC_EVENT_SERVICE = "basicevent"

GET_ATTRIBUTES_ACTION = "GetAttributes"
SET_ATTRIBUTES_ACTION = "SetAttributes"

# Control ports probed when the device port is not configured.
PORT_RANGE = range(49151, 49157)

DEFAULT_REFRESH_INTERVAL = timedelta(seconds=60)
DEFAULT_SUBSCRIPTION_DURATION = timedelta(seconds=600)
DEFAULT_REQUEST_TIMEOUT = 2.0

HTTP_CONTENT_TYPE = 'text/xml; charset="utf-8"'

# Filter lifetime in minutes; purifiers ship a 330 day filter.
PURIFIER_FILTER_LIFE_MINUTES = 330 * 24 * 60
DEFAULT_FILTER_LIFE_MINUTES = 60480
