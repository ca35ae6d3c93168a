# garden/weather.py
"""
Weather normalization
---------------------
Single lookup table mapping raw provider conditions ("Clear", "Clouds", ...)
onto the three weather categories plants have bonuses for, plus the display
name and icon key presentation code uses.

Lookups are case-insensitive. Anything unrecognized falls back to the first
row (Clear / sunny).
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType

logger = logging.getLogger(__name__)

SUNNY = 'sunny'
CLOUDY = 'cloudy'
RAINY = 'rainy'
WEATHER_CATEGORIES = (SUNNY, CLOUDY, RAINY)


@dataclass(frozen=True)
class WeatherMapping:
    api_condition: str
    category: str
    display_name: str
    icon_key: str


WEATHER_MAPPINGS = (
    WeatherMapping('Clear', SUNNY, 'clear', 'sunny'),
    WeatherMapping('Clouds', CLOUDY, 'cloudy', 'cloudy'),
    WeatherMapping('Rain', RAINY, 'rainy', 'rainy'),
    WeatherMapping('Drizzle', RAINY, 'drizzly', 'rainy'),
    WeatherMapping('Mist', RAINY, 'foggy', 'rainy'),
    WeatherMapping('Fog', RAINY, 'foggy', 'rainy'),
    WeatherMapping('Haze', RAINY, 'hazy', 'rainy'),
    # no plant has snow or storm bonuses
    WeatherMapping('Snow', RAINY, 'snowy', 'snowy'),
    WeatherMapping('Thunderstorm', RAINY, 'stormy', 'thunderstorm'),
)

DEFAULT_MAPPING = WEATHER_MAPPINGS[0]

_BY_CONDITION = MappingProxyType({m.api_condition.lower(): m for m in WEATHER_MAPPINGS})


def get_weather_mapping(condition):
    """Return the table row for a raw provider condition (default: Clear)."""
    key = (condition or '').strip().lower()
    mapping = _BY_CONDITION.get(key)
    if mapping is None:
        logger.debug("Unknown weather condition %r, using %s", condition, DEFAULT_MAPPING.api_condition)
        return DEFAULT_MAPPING
    return mapping


def normalize_weather(condition):
    """
    Map a raw condition onto one of WEATHER_CATEGORIES.

    Category names themselves are accepted, so normalizing twice is a no-op.
    """
    key = (condition or '').strip().lower()
    if key in WEATHER_CATEGORIES:
        return key
    return get_weather_mapping(key).category


def weather_display_name(condition):
    return get_weather_mapping(condition).display_name


def weather_icon_key(condition):
    return get_weather_mapping(condition).icon_key


def conditions_equivalent(a, b):
    """True when two conditions (raw or normalized) land in the same category."""
    return normalize_weather(a) == normalize_weather(b)


def api_conditions_for(category):
    """All provider conditions that normalize to `category`."""
    category = (category or '').lower()
    return [m.api_condition for m in WEATHER_MAPPINGS if m.category == category]
