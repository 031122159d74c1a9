"""
Air quality station readings from the AQICN API
Falls back to simulated readings from seasonal averages
"""
import time
from datetime import datetime
from typing import Dict, List, Optional
import numpy as np
import requests
from data_models import StationReading
from simulation_config import AQICN_TOKEN, DEFAULT_CITY, get_current_season

# Monitoring stations per city
STATIONS = {
    'lahore': [
        {'id': 'lahore-us-consulate', 'name': 'US Consulate', 'lat': 31.5600, 'lng': 74.3350},
        {'id': '@7766', 'name': 'PAK EPA Lahore', 'lat': 31.5204, 'lng': 74.3587},
        {'id': '@8686', 'name': 'Punjab EPA', 'lat': 31.5497, 'lng': 74.3436},
        {'id': 'lahore-gulberg', 'name': 'Gulberg', 'lat': 31.5107, 'lng': 74.3460},
        {'id': 'lahore-johar-town', 'name': 'Johar Town', 'lat': 31.4697, 'lng': 74.2728},
        {'id': 'lahore-model-town', 'name': 'Model Town', 'lat': 31.4837, 'lng': 74.3168},
        {'id': 'lahore-cantonment', 'name': 'Cantonment', 'lat': 31.5370, 'lng': 74.3780},
    ],
    'delhi': [
        {'id': '@8539', 'name': 'Anand Vihar', 'lat': 28.6469, 'lng': 77.3164},
        {'id': '@11260', 'name': 'ITO', 'lat': 28.6289, 'lng': 77.2405},
        {'id': '@8540', 'name': 'Mandir Marg', 'lat': 28.6365, 'lng': 77.2012},
        {'id': '@8545', 'name': 'RK Puram', 'lat': 28.5630, 'lng': 77.1750},
        {'id': '@11609', 'name': 'Punjabi Bagh', 'lat': 28.6714, 'lng': 77.1200},
        {'id': '@11263', 'name': 'Dwarka Sector 8', 'lat': 28.5691, 'lng': 77.0715},
        {'id': '@11605', 'name': 'Ashok Vihar', 'lat': 28.6959, 'lng': 77.1823},
        {'id': '@8541', 'name': 'Shadipur', 'lat': 28.6514, 'lng': 77.1558},
        {'id': '@11607', 'name': 'Rohini', 'lat': 28.7325, 'lng': 77.1201},
        {'id': '@11608', 'name': 'Siri Fort', 'lat': 28.5504, 'lng': 77.2157},
    ]
}

# Historical seasonal averages (µg/m³) used when no station responds
SIMULATED_BASELINE = {
    'lahore': {
        'winter': {'pm25': 285, 'pm10': 380, 'no2': 65, 'so2': 28, 'o3': 35},
        'summer': {'pm25': 145, 'pm10': 195, 'no2': 45, 'so2': 18, 'o3': 55},
        'monsoon': {'pm25': 95, 'pm10': 130, 'no2': 35, 'so2': 15, 'o3': 40}
    },
    'delhi': {
        'winter': {'pm25': 320, 'pm10': 420, 'no2': 75, 'so2': 32, 'o3': 38},
        'summer': {'pm25': 165, 'pm10': 220, 'no2': 55, 'so2': 22, 'o3': 65},
        'monsoon': {'pm25': 85, 'pm10': 120, 'no2': 30, 'so2': 12, 'o3': 35}
    }
}


def _number(value):
    """AQICN reports "-" for missing values"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def simulate_station_readings(city, season=None, rng=None) -> List[StationReading]:
    """
    Simulated readings (±15% around the seasonal average) for every station

    Parameters:
    -----------
    city : str
        City identifier; unknown cities use the default city
    season : str, optional
        Season, defaults to the current one
    rng : numpy.random.Generator, optional
        Random source (seed it for reproducible readings)
    """
    season = season or get_current_season()
    rng = rng or np.random.default_rng()

    baseline = SIMULATED_BASELINE.get(city, SIMULATED_BASELINE[DEFAULT_CITY])
    base = baseline.get(season, SIMULATED_BASELINE[DEFAULT_CITY]['winter'])
    now = datetime.now().isoformat()

    def vary(value):
        return float(round(value * (1 + (rng.random() - 0.5) * 0.3)))

    readings = []
    for station in STATIONS.get(city, STATIONS[DEFAULT_CITY]):
        readings.append(StationReading(
            station_id=station['id'],
            name=station['name'],
            lat=station['lat'],
            lng=station['lng'],
            pm25=vary(base['pm25']),
            pm10=vary(base['pm10']),
            aqi=vary(base['pm25']),
            no2=vary(base['no2']),
            so2=vary(base['so2']),
            o3=vary(base['o3']),
            timestamp=now,
            is_real=False
        ))
    return readings


class AQIStationFetcher:
    """
    Fetches station readings from AQICN, caching per city
    """

    def __init__(self, token=None, cache_duration=10 * 60, timeout=10):
        self.base_url = "https://api.waqi.info"
        self.token = token or AQICN_TOKEN
        self.cache_duration = cache_duration
        self.timeout = timeout
        self._cache = {}

    def fetch_station_data(self, station_id) -> Optional[Dict]:
        """
        Readings for a single station

        Returns:
        --------
        readings : dict or None
            Pollutant values, or None if the station reports no data
        """
        response = requests.get(
            f"{self.base_url}/feed/{station_id}/",
            params={'token': self.token},
            timeout=self.timeout
        )
        response.raise_for_status()
        data = response.json()

        if data.get('status') != 'ok' or not data.get('data'):
            return None

        iaqi = data['data'].get('iaqi', {})

        def value(key):
            entry = iaqi.get(key)
            return None if entry is None else _number(entry.get('v'))

        return {
            'aqi': _number(data['data'].get('aqi')),
            'pm25': value('pm25'),
            'pm10': value('pm10'),
            'no2': value('no2'),
            'so2': value('so2'),
            'o3': value('o3'),
            'timestamp': (data['data'].get('time') or {}).get('iso')
        }

    def fetch_city_data(self, city, season=None) -> List[StationReading]:
        """
        Readings for every station in a city

        Stations without a PM2.5 value are skipped. If no station responds,
        simulated readings are returned (is_real=False) and not cached.
        """
        cached = self._cache.get(city)
        if cached and time.time() - cached[0] < self.cache_duration:
            return cached[1]

        readings = []
        for station in STATIONS.get(city, STATIONS[DEFAULT_CITY]):
            try:
                data = self.fetch_station_data(station['id'])
            except (requests.exceptions.RequestException, ValueError) as e:
                print(f"Failed to fetch {station['name']}: {e}")
                continue

            if not data:
                continue
            pm25 = data['pm25'] if data['pm25'] is not None else data['aqi']
            if pm25 is None:
                continue

            readings.append(StationReading(
                station_id=station['id'],
                name=station['name'],
                lat=station['lat'],
                lng=station['lng'],
                pm25=pm25,
                pm10=data['pm10'],
                aqi=data['aqi'],
                no2=data['no2'],
                so2=data['so2'],
                o3=data['o3'],
                timestamp=data['timestamp'],
                is_real=True
            ))

        if not readings:
            print(f"No live station data for {city}, using simulated readings")
            return simulate_station_readings(city, season)

        self._cache[city] = (time.time(), readings)
        return readings

    def clear_cache(self):
        self._cache.clear()
