import math
from datetime import timedelta

import pytest

from conftest import T0, make_plant
from garden.growth import (GrowthCalculator, calculate_garden_growth, calculate_growth_stage,
                           classify_stage, growth_curve, growth_time_description, is_mature,
                           next_stage, stage_name, weather_multiplier, weather_preference_description)
from garden.models import PlantedInstance


def at(hours):
    return T0 + timedelta(hours=hours)


def test_round_trip_twenty_percent_and_maturity(plant):
    res = calculate_growth_stage(T0, plant, 'Clear', now=at(4.8))
    assert res.progress == 20
    assert res.stage == 3

    res = calculate_growth_stage(T0, plant, 'Clear', now=at(24))
    assert res.progress == 100
    assert res.stage == 5


def test_weather_bonus_speeds_up_growth():
    p = make_plant(sunny=2.0, hours=10)
    res = calculate_growth_stage(T0, p, 'Clear', now=at(3))
    assert res.progress == 60
    assert res.stage == 4


def test_unknown_weather_grows_like_clear():
    p = make_plant(sunny=1.5, cloudy=1.0, rainy=0.8)
    now = at(7)
    assert calculate_growth_stage(T0, p, 'Tornado', now=now) == calculate_growth_stage(T0, p, 'Clear', now=now)


def test_weather_lookup_is_case_insensitive():
    p = make_plant(sunny=1.5, cloudy=1.0, rainy=0.8)
    assert weather_multiplier(p, 'CLEAR') == 1.5
    assert weather_multiplier(p, 'clouds') == 1.0
    assert weather_multiplier(p, 'Thunderstorm') == 0.8


def test_freshly_planted_is_dirt_stage(plant):
    res = calculate_growth_stage(T0, plant, 'Clear', now=T0)
    assert res.stage == 2
    assert res.progress == 0


def test_progress_never_exceeds_100(plant):
    res = calculate_growth_stage(T0, plant, 'Clear', now=at(1000))
    assert res.progress == 100
    assert res.stage == 5


def test_future_planting_gives_negative_progress(plant):
    # not clamped at zero; see the note in GrowthCalculator.growth_stage
    res = calculate_growth_stage(T0, plant, 'Clear', now=at(-2))
    assert res.progress < 0
    assert res.progress == -8
    assert res.stage == 2


def test_stage_is_monotonic_and_mature_iff_full():
    p = make_plant(sunny=1.5, cloudy=1.0, rainy=0.8)
    for weather in ('Clear', 'Clouds', 'Rain'):
        last = 0
        for step in range(0, 80):
            res = calculate_growth_stage(T0, p, weather, now=at(step * 0.5))
            assert res.stage >= last
            assert (res.stage == 5) == (res.progress >= 100)
            assert 2 <= res.stage <= 5
            last = res.stage


def test_progress_rounds_half_up():
    p = make_plant(hours=10)
    res = calculate_growth_stage(T0, p, 'Clear', now=T0 + timedelta(minutes=15))
    assert res.progress == 3


def test_missing_bonus_propagates_nan():
    p = make_plant(weather_bonus={'sunny': 1.0})
    res = calculate_growth_stage(T0, p, 'Rain', now=at(5))
    assert math.isnan(res.progress)
    assert res.stage == 2
    assert not is_mature(T0, p, 'Rain', now=at(500))


def test_total_hours_override_from_config(plant):
    calc = GrowthCalculator({'total_hours_override': 0.083})
    res = calc.growth_stage(T0, plant, 'Clear', now=T0 + timedelta(minutes=5))
    assert res.stage == 5
    assert calc.is_mature(T0, plant, 'Clear', now=T0 + timedelta(minutes=5))


def test_total_hours_override_must_be_positive():
    with pytest.raises(ValueError):
        GrowthCalculator({'total_hours_override': 0})


def test_zero_growth_time_is_immediately_full():
    p = make_plant(hours=0)
    res = calculate_growth_stage(T0, p, 'Clear', now=at(1))
    assert res.progress == 100
    assert res.stage == 5
    assert is_mature(T0, p, 'Clear', now=at(1))
    # no time elapsed: 0 / 0
    assert math.isnan(calculate_growth_stage(T0, p, 'Clear', now=T0).progress)


def test_injected_clock(plant):
    calc = GrowthCalculator(clock=lambda: at(12))
    res = calc.growth_stage(T0, plant, 'Clear')
    assert res.progress == 50
    assert res.stage == 4


def test_growth_hours_shared_helper():
    p = make_plant(sunny=1.5)
    hours = GrowthCalculator().growth_hours(T0, p, 'Clear', now=at(6))
    assert hours.elapsed == 6
    assert hours.multiplier == 1.5
    assert hours.adjusted == 9
    assert hours.total == 24
    assert hours.remaining == 10


def test_classify_stage_thresholds():
    assert classify_stage(0) == 2
    assert classify_stage(19) == 2
    assert classify_stage(20) == 3
    assert classify_stage(39) == 3
    assert classify_stage(40) == 4
    assert classify_stage(99) == 4
    assert classify_stage(100) == 5
    assert classify_stage(-5) == 2
    assert classify_stage(float('nan')) == 2


def test_next_stage_and_names():
    assert next_stage(2) == 3
    assert next_stage(5) == 5
    assert stage_name(1) == 'empty pot'
    assert stage_name(5) == 'mature'


def _planted(pid, stage, mature=False, plant_id='sunflower'):
    return PlantedInstance(id=pid, garden_owner_id='alice', planter_id='bob', plant_id=plant_id,
                           planted_at=T0, current_stage=stage, is_mature=mature, slot=0)


def test_garden_growth_reports_only_changes(plant):
    instances = [_planted('a', 2), _planted('b', 4), _planted('c', 2, plant_id='ghost')]
    updates = calculate_garden_growth(instances, {'sunflower': plant}, 'Clear', now=at(12))
    assert [u.instance.id for u in updates] == ['a']
    assert updates[0].stage == 4
    assert not updates[0].is_mature


def test_garden_growth_flags_maturity(plant):
    updates = calculate_garden_growth([_planted('a', 4)], {'sunflower': plant}, 'Clear', now=at(30))
    assert len(updates) == 1
    assert updates[0].stage == 5
    assert updates[0].is_mature


def test_descriptions():
    assert weather_preference_description(make_plant(sunny=2.0)) == "Loves sunny weather"
    assert weather_preference_description(make_plant(rainy=1.5)) == "Loves rainy weather"
    assert weather_preference_description(make_plant(cloudy=1.5)) == "Loves cloudy weather"
    assert growth_time_description(1) == "Fast growing"
    assert growth_time_description(3) == "Medium growth"
    assert growth_time_description(24) == "Slow growing"


def test_growth_curve_matches_calculator():
    p = make_plant(sunny=2.0, hours=10)
    curve = growth_curve(p, [0, 3, 10], 'sunny')
    assert curve[0] == 0
    assert round(curve[1]) == 60
    assert curve[2] == 100
