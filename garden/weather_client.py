# garden/weather_client.py
"""
Current-weather lookup against the OpenWeather REST API.

Only the condition string matters to the growth rules; temperature and the
rest are passed through for display.
"""

import logging
import os
from typing import NamedTuple, Optional

import requests

from garden.weather import normalize_weather

logger = logging.getLogger(__name__)

DEFAULT_URL = "https://api.openweathermap.org/data/2.5/weather"


class WeatherProviderError(RuntimeError):
    """The weather provider could not be reached or returned something unusable."""


class CurrentWeather(NamedTuple):
    condition: str
    category: str
    temperature: Optional[float]
    description: str
    icon: str
    city: str


def _get_json(url, params, timeout, session=None):
    http = session or requests
    try:
        r = http.get(url, params=params, timeout=timeout)
        r.raise_for_status()
        return r.json()
    except requests.RequestException as e:
        raise WeatherProviderError(f"fetch failed for {url}: {e}") from e
    except ValueError as e:
        raise WeatherProviderError(f"invalid JSON from {url}: {e}") from e


def parse_current_weather(data):
    try:
        w = data['weather'][0]
        condition = w['main']
    except (KeyError, IndexError, TypeError) as e:
        raise WeatherProviderError(f"unexpected weather payload: {data!r}") from e
    return CurrentWeather(
        condition=condition,
        category=normalize_weather(condition),
        temperature=(data.get('main') or {}).get('temp'),
        description=w.get('description', ''),
        icon=w.get('icon', ''),
        city=data.get('name', ''),
    )


def fetch_current_weather(lat, lon, api_key=None, session=None, cfg=None):
    """Return CurrentWeather for a coordinate pair."""
    cfg = cfg or {}
    api_key = api_key or os.getenv(cfg.get('api_key_env', 'OPENWEATHER_API_KEY'))
    if not api_key:
        raise WeatherProviderError("OpenWeather API key is missing")

    params = {
        'lat': lat,
        'lon': lon,
        'units': cfg.get('units', 'imperial'),
        'appid': api_key,
    }
    logger.debug("Fetching weather for (%s, %s)", lat, lon)
    data = _get_json(cfg.get('base_url', DEFAULT_URL), params, cfg.get('timeout', 10), session)

    # the API reports errors in-band as well
    cod = data.get('cod') if isinstance(data, dict) else None
    if cod is not None and str(cod) != '200':
        raise WeatherProviderError(f"Weather API error: {data.get('message', cod)}")

    current = parse_current_weather(data)
    logger.info("Weather at (%s, %s): %s %s in %s", lat, lon, current.condition, current.temperature, current.city)
    return current
