from datetime import datetime, timezone

import pytest

from garden.models import PlantType

T0 = datetime(2025, 7, 4, 12, 0, tzinfo=timezone.utc)


def make_plant(sunny=1.0, cloudy=1.0, rainy=1.0, hours=24.0, **kwargs):
    fields = dict(
        id='sunflower',
        name='Sunflower',
        growth_time_hours=hours,
        weather_bonus={'sunny': sunny, 'cloudy': cloudy, 'rainy': rainy},
        harvest_points=10,
        planting_cost=5,
        image_path='plants/sunflower',
    )
    fields.update(kwargs)
    return PlantType(**fields)


@pytest.fixture
def t0():
    return T0


@pytest.fixture
def plant():
    return make_plant()
