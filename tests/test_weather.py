import dataclasses

import pytest

from garden.weather import (WEATHER_CATEGORIES, WEATHER_MAPPINGS, api_conditions_for, conditions_equivalent,
                            get_weather_mapping, normalize_weather, weather_display_name, weather_icon_key)


@pytest.mark.parametrize('raw, expected', [
    ('Clear', 'sunny'),
    ('clouds', 'cloudy'),
    ('RAIN', 'rainy'),
    ('Drizzle', 'rainy'),
    ('Mist', 'rainy'),
    ('Fog', 'rainy'),
    ('Haze', 'rainy'),
    ('Snow', 'rainy'),
    ('thunderstorm', 'rainy'),
])
def test_provider_conditions_normalize(raw, expected):
    assert normalize_weather(raw) == expected


def test_unknown_and_empty_default_to_sunny():
    assert normalize_weather('Tornado') == 'sunny'
    assert normalize_weather('') == 'sunny'
    assert normalize_weather(None) == 'sunny'
    assert get_weather_mapping('Tornado').api_condition == 'Clear'


def test_normalization_is_idempotent():
    for category in WEATHER_CATEGORIES:
        assert normalize_weather(category) == category
        assert normalize_weather(normalize_weather(category.upper())) == category
    for m in WEATHER_MAPPINGS:
        assert normalize_weather(normalize_weather(m.api_condition)) == normalize_weather(m.api_condition)


def test_display_names_and_icons():
    assert weather_display_name('Clear') == 'clear'
    assert weather_display_name('Mist') == 'foggy'
    assert weather_display_name('Thunderstorm') == 'stormy'
    assert weather_icon_key('Snow') == 'snowy'
    assert weather_icon_key('Drizzle') == 'rainy'


def test_conditions_equivalent():
    assert conditions_equivalent('Clouds', 'cloudy')
    assert conditions_equivalent('Rain', 'Drizzle')
    assert conditions_equivalent('sunny', 'SUNNY')
    assert not conditions_equivalent('Clear', 'Rain')


def test_api_conditions_for_category():
    assert api_conditions_for('cloudy') == ['Clouds']
    assert api_conditions_for('sunny') == ['Clear']
    assert 'Thunderstorm' in api_conditions_for('rainy')
    assert api_conditions_for('windy') == []


def test_table_is_immutable():
    assert isinstance(WEATHER_MAPPINGS, tuple)
    with pytest.raises(dataclasses.FrozenInstanceError):
        WEATHER_MAPPINGS[0].category = 'rainy'
