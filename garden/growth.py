# garden/growth.py
"""
GrowthCalculator
----------------
Turns (planting time, plant type, weather) into a growth stage and a percent
complete. Weather scales elapsed real time by the plant's bonus for the
normalized weather category:

    adjusted_hours = hours_elapsed * weather_bonus[category]
    progress       = min(adjusted_hours / total_hours * 100, 100)

Stages: 1=empty pot (UI only, never computed), 2=dirt, 3=sprout,
4=adolescent, 5=mature.

The calculator is stateless apart from its config and clock, so one instance
can be shared by the UI layer and the refresh job.
"""

import logging
import math
from types import MappingProxyType
from typing import NamedTuple, Optional

import numpy as np

from garden.clock import hours_between, utcnow
from garden.weather import normalize_weather

logger = logging.getLogger(__name__)

EMPTY_SLOT_STAGE = 1
PLANTED_STAGE = 2
MATURE_STAGE = 5
MAX_PROGRESS = 100.0

# (minimum progress, stage), highest first
STAGE_THRESHOLDS = ((100.0, 5), (40.0, 4), (20.0, 3))

STAGE_NAMES = MappingProxyType({
    1: 'empty pot',
    2: 'dirt',
    3: 'sprout',
    4: 'adolescent',
    5: 'mature',
})


class GrowthHours(NamedTuple):
    elapsed: float      # real hours since planting, may be negative
    multiplier: float   # weather bonus, NaN when the bonus table lacks the category
    adjusted: float     # growth hours accumulated so far
    total: float        # growth hours needed for maturity
    remaining: float    # real hours left at the current multiplier, unclamped


class GrowthResult(NamedTuple):
    stage: int
    progress: float


class GrowthUpdate(NamedTuple):
    instance: object
    stage: int
    is_mature: bool
    progress: float


def weather_multiplier(plant_type, weather):
    """Bonus for the normalized weather; NaN (not a default) if the table has no entry."""
    category = normalize_weather(weather)
    bonus = plant_type.weather_bonus.get(category)
    if bonus is None:
        logger.warning("Plant %s has no %r weather bonus (table: %s)",
                       plant_type.id, category, dict(plant_type.weather_bonus))
        return math.nan
    return float(bonus)


def round_progress(progress):
    """Round half up, like the display does. NaN stays NaN."""
    return float(np.floor(progress + 0.5))


def classify_stage(progress):
    for threshold, stage in STAGE_THRESHOLDS:
        if progress >= threshold:
            return stage
    # covers negative and NaN progress as well
    return PLANTED_STAGE


def next_stage(stage):
    return min(stage + 1, MATURE_STAGE)


def stage_name(stage):
    return STAGE_NAMES.get(stage, 'unknown')


class GrowthCalculator:
    def __init__(self, cfg=None, clock=None):
        cfg = cfg or {}
        self.total_hours_override = cfg.get('total_hours_override')
        if self.total_hours_override is not None and self.total_hours_override <= 0:
            raise ValueError(f"total_hours_override must be positive, got {self.total_hours_override}")
        self.clock = clock or utcnow

    def total_hours(self, plant_type):
        if self.total_hours_override is not None:
            return float(self.total_hours_override)
        return float(plant_type.growth_time_hours)

    def growth_hours(self, planted_at, plant_type, weather, now=None) -> GrowthHours:
        """Elapsed, adjusted and remaining hours; shared by stage and time-to-maturity."""
        now = now if now is not None else self.clock()
        elapsed = hours_between(planted_at, now)
        multiplier = weather_multiplier(plant_type, weather)
        total = self.total_hours(plant_type)

        adjusted = elapsed * multiplier
        real_hours_needed = total / multiplier if multiplier != 0 else math.inf
        return GrowthHours(elapsed, multiplier, adjusted, total, real_hours_needed - elapsed)

    def growth_stage(self, planted_at, plant_type, weather, now=None) -> GrowthResult:
        hours = self.growth_hours(planted_at, plant_type, weather, now)
        # NOTE: only the upper bound is clamped; a future planted_at gives
        # negative progress, while time_to_maturity floors at zero. The two
        # disagree on purpose until someone decides which one is right.
        # a zero growth time gives inf (clamped to 100) or NaN, never an error
        with np.errstate(divide='ignore', invalid='ignore'):
            ratio = np.divide(np.float64(hours.adjusted), np.float64(hours.total))
        raw = float(np.minimum(ratio * 100.0, MAX_PROGRESS))
        progress = round_progress(raw)
        return GrowthResult(classify_stage(progress), progress)

    def time_to_maturity(self, planted_at, plant_type, weather, now=None):
        hours = self.growth_hours(planted_at, plant_type, weather, now)
        return float(np.maximum(hours.remaining, 0.0))

    def is_mature(self, planted_at, plant_type, weather, now=None):
        result = self.growth_stage(planted_at, plant_type, weather, now)
        return result.stage == MATURE_STAGE and result.progress >= MAX_PROGRESS

    def garden_growth(self, instances, plant_types, weather, now=None):
        """
        Recompute every instance in one garden and return the ones whose cached
        stage or maturity no longer matches.

        plant_types: dict plant_id -> PlantType. Instances with an unknown
        plant are skipped.
        """
        now = now if now is not None else self.clock()
        updates = []
        for instance in instances:
            plant_type = plant_types.get(instance.plant_id)
            if plant_type is None:
                logger.warning("Planted %s references unknown plant %s", instance.id, instance.plant_id)
                continue
            result = self.growth_stage(instance.planted_at, plant_type, weather, now)
            mature = result.stage == MATURE_STAGE and result.progress >= MAX_PROGRESS
            if result.stage != instance.current_stage or mature != instance.is_mature:
                updates.append(GrowthUpdate(instance, result.stage, mature, result.progress))
        return updates


_default_calculator = GrowthCalculator()


def calculate_growth_stage(planted_at, plant_type, weather, now=None,
                           calculator: Optional[GrowthCalculator] = None) -> GrowthResult:
    return (calculator or _default_calculator).growth_stage(planted_at, plant_type, weather, now)


def is_mature(planted_at, plant_type, weather, now=None, calculator=None):
    return (calculator or _default_calculator).is_mature(planted_at, plant_type, weather, now)


def calculate_garden_growth(instances, plant_types, weather, now=None, calculator=None):
    return (calculator or _default_calculator).garden_growth(instances, plant_types, weather, now)


def weather_preference_description(plant_type):
    bonus = plant_type.weather_bonus
    best = max(bonus.get('sunny', 0.0), bonus.get('cloudy', 0.0), bonus.get('rainy', 0.0))
    if best == bonus.get('sunny'):
        return "Loves sunny weather"
    if best == bonus.get('rainy'):
        return "Loves rainy weather"
    if best == bonus.get('cloudy'):
        return "Loves cloudy weather"
    return "Grows in any weather"


def growth_time_description(growth_time_hours):
    if growth_time_hours <= 2:
        return "Fast growing"
    if growth_time_hours <= 4:
        return "Medium growth"
    return "Slow growing"


def growth_curve(plant_type, hours, weather, total_hours=None):
    """Vectorized progress (unrounded, upper-clamped) for an array of elapsed hours."""
    hours = np.asarray(hours, dtype=float)
    total = float(total_hours or plant_type.growth_time_hours)
    multiplier = weather_multiplier(plant_type, weather)
    return np.minimum(hours * multiplier / total * 100.0, MAX_PROGRESS)
