# garden/timing.py
"""
Time-to-maturity and the human-readable durations shown on plant cards.

Remaining real time is the plant's growth duration divided by the weather
multiplier, minus the time already elapsed, floored at zero.
"""

import numpy as np

from garden.clock import hours_between, utcnow
from garden.growth import GrowthCalculator

READY_TO_HARVEST = "Ready to harvest!"
HOURS_PER_DAY = 24

_default_calculator = GrowthCalculator()


def get_time_to_maturity(planted_at, plant_type, weather, now=None, calculator=None):
    """Real hours left until stage 5 under the current weather (never negative)."""
    return (calculator or _default_calculator).time_to_maturity(planted_at, plant_type, weather, now)


def get_time_to_maturity_for_instance(instance, plant_type, weather, now=None, calculator=None):
    return get_time_to_maturity(instance.planted_at, plant_type, weather, now, calculator)


def get_time_elapsed_hours(planted_at, now=None):
    return hours_between(planted_at, now if now is not None else utcnow())


def _format_days(hours):
    days = np.floor(hours / HOURS_PER_DAY)
    return f"{days:.0f} day{'s' if days > 1 else ''}"


def format_time_to_maturity(hours):
    if hours <= 0:
        return READY_TO_HARVEST
    if hours >= HOURS_PER_DAY:
        return _format_days(hours)
    return f"{np.ceil(hours):.0f} hours"


def format_time_since_planted(hours):
    if hours >= HOURS_PER_DAY:
        return _format_days(hours)
    return f"{np.floor(hours):.0f} hours"


def get_formatted_time_to_maturity(planted_at, plant_type, weather, now=None, calculator=None):
    return format_time_to_maturity(get_time_to_maturity(planted_at, plant_type, weather, now, calculator))


def get_formatted_time_since_planted(planted_at, now=None):
    return format_time_since_planted(get_time_elapsed_hours(planted_at, now))
