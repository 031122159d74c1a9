"""
Current wind data from OpenWeatherMap with seasonal fallback patterns
"""
import time
import numpy as np
import requests
from data_models import WindSample
from simulation_config import (CITIES, DEFAULT_CITY, OPENWEATHER_API_KEY,
                               get_current_season)

# Typical wind by city and season (speed/gust km/h, direction degrees FROM)
TYPICAL_PATTERNS = {
    'lahore': {
        'winter': {'speed': 8, 'direction': 315, 'gust_speed': 15},   # NW winds
        'summer': {'speed': 12, 'direction': 225, 'gust_speed': 25},  # SW monsoon
        'monsoon': {'speed': 15, 'direction': 180, 'gust_speed': 30}  # S winds
    },
    'delhi': {
        'winter': {'speed': 6, 'direction': 300, 'gust_speed': 12},   # NW winds
        'summer': {'speed': 10, 'direction': 270, 'gust_speed': 20},  # W winds
        'monsoon': {'speed': 14, 'direction': 135, 'gust_speed': 28}  # SE monsoon
    }
}

MS_TO_KMH = 3.6


def get_typical_wind(city, season=None, rng=None):
    """
    Seasonal typical wind with a small random variation

    Parameters:
    -----------
    city : str
        City identifier; unknown cities use the default city's pattern
    season : str, optional
        Season, defaults to the current one
    rng : numpy.random.Generator, optional
        Random source (seed it for reproducible fallbacks)

    Returns:
    --------
    wind : WindSample
        Estimated wind with is_real=False
    """
    season = season or get_current_season()
    rng = rng or np.random.default_rng()

    patterns = TYPICAL_PATTERNS.get(city, TYPICAL_PATTERNS[DEFAULT_CITY])
    pattern = patterns.get(season, TYPICAL_PATTERNS[DEFAULT_CITY]['winter'])

    return WindSample(
        speed=max(pattern['speed'] + (rng.random() - 0.5) * 4, 0.0),
        direction=(pattern['direction'] + (rng.random() - 0.5) * 30) % 360,
        gust_speed=pattern['gust_speed'] + (rng.random() - 0.5) * 5,
        is_real=False
    )


class WindDataFetcher:
    """Fetch current wind from OpenWeatherMap, caching per city"""

    def __init__(self, api_key=None, cache_duration=15 * 60, timeout=10):
        self.base_url = "https://api.openweathermap.org/data/2.5/weather"
        self.api_key = api_key or OPENWEATHER_API_KEY
        self.cache_duration = cache_duration
        self.timeout = timeout
        self._cache = {}

    def _parse_response(self, data):
        """Convert an OpenWeatherMap payload to a WindSample (m/s -> km/h)"""
        wind = data.get('wind')
        if not wind or wind.get('speed') is None:
            return None

        speed_ms = float(wind['speed'])
        gust_ms = float(wind.get('gust', speed_ms * 1.5))
        return WindSample(
            speed=speed_ms * MS_TO_KMH,
            direction=float(wind.get('deg', 0.0)),
            gust_speed=gust_ms * MS_TO_KMH,
            is_real=True
        )

    def fetch_wind_data(self, city, season=None):
        """
        Current wind for a city

        Falls back to the seasonal typical pattern when the API is
        unavailable; fallback values are not cached.

        Returns:
        --------
        wind : WindSample
        """
        cached = self._cache.get(city)
        if cached and time.time() - cached[0] < self.cache_duration:
            return cached[1]

        coords = CITIES.get(city, CITIES[DEFAULT_CITY])['center']
        params = {
            'lat': coords['lat'],
            'lon': coords['lng'],
            'appid': self.api_key,
            'units': 'metric'
        }

        try:
            response = requests.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            sample = self._parse_response(response.json())
            if sample is not None:
                self._cache[city] = (time.time(), sample)
                return sample
            print(f"No wind block in weather response for {city}")
        except (requests.exceptions.RequestException, ValueError) as e:
            print(f"Error fetching wind data for {city}: {e}")

        print("Using typical seasonal wind pattern...")
        return get_typical_wind(city, season)

    def clear_cache(self):
        self._cache.clear()


if __name__ == '__main__':
    fetcher = WindDataFetcher()
    for city in CITIES:
        wind = fetcher.fetch_wind_data(city)
        source = 'live' if wind.is_real else 'typical'
        print(f"{city}: {wind.speed:.1f} km/h from {wind.direction:.0f}° ({source})")
