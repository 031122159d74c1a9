"""
Simulation configuration, unit constants and city reference data
"""
import os
from datetime import datetime

# Unit conversion constants
METERS_PER_DEGREE = 111320.0  # meters per degree latitude (equirectangular)
EARTH_RADIUS_KM = 6371.0  # Haversine sphere radius
KMH_TO_MS = 1.0 / 3.6

# Empirical PM10/PM2.5 ratio used wherever PM10 is not measured
PM10_PM25_RATIO = 1.4

# Default grid resolution for the baseline field
GRID_RESOLUTION_M = 100.0

SEASONS = ('winter', 'summer', 'monsoon')
DEFAULT_CITY = 'lahore'

# Calibration knobs for the interpolation and dispersion stages.
# The plume constants are empirical tuning values, not textbook coefficients.
DEFAULT_CONFIG = {
    # Dispersion
    'near_field_credit': 0.3,  # fraction of removal rate credited inside the canopy
    'source_strength_scale': 1000.0,  # removal rate -> plume source strength Q
    'plume_scale': 0.001,  # normalizes plume magnitude to µg/m³
    'decay_length_m': 500.0,  # characteristic distance decay
    'max_reduction': 0.6,  # cap on fractional reduction per cell
    'min_concentration': 10.0,  # µg/m³ residual floor
    'min_wind_speed': 1.0,  # km/h
    'default_wind_speed': 10.0,  # km/h, used when a sample carries no speed
    'cutoff_radius_m': 5000.0,  # indexed model only
    # Interpolation
    'default_pm25': 200.0,  # conservative value with no stations
    'near_station_km': 0.1,
    'near_station_weight': 1000.0,
    'grid_resolution_m': GRID_RESOLUTION_M,
    # Tree deposition
    'base_deposition_velocity': 0.002,  # m/s for PM2.5
    'reference_lai': 5.0,
}

# City reference data
CITIES = {
    'lahore': {
        'name': 'Lahore',
        'bounds': {'north': 31.65, 'south': 31.35, 'east': 74.55, 'west': 74.15},
        'center': {'lat': 31.5204, 'lng': 74.3587},
        'density': 6300,  # people per km²
        'currency': 'PKR',
    },
    'delhi': {
        'name': 'Delhi',
        'bounds': {'north': 28.85, 'south': 28.40, 'east': 77.45, 'west': 76.85},
        'center': {'lat': 28.6139, 'lng': 77.2090},
        'density': 11320,
        'currency': 'INR',
    },
}

# API credentials (replace the demo tokens for production use)
AQICN_TOKEN = os.environ.get('AQICN_TOKEN', 'demo')
OPENWEATHER_API_KEY = os.environ.get('OPENWEATHER_API_KEY', 'demo')


def make_config(overrides=None):
    """
    Build a run configuration from the defaults

    Parameters:
    -----------
    overrides : dict, optional
        Calibration values replacing the defaults

    Returns:
    --------
    config : dict
        Fresh dictionary; DEFAULT_CONFIG is never mutated
    """
    config = dict(DEFAULT_CONFIG)
    if not overrides:
        return config

    unknown = set(overrides) - set(DEFAULT_CONFIG)
    if unknown:
        raise ValueError(f"Unknown config keys: {sorted(unknown)}")

    for key, value in overrides.items():
        config[key] = float(value)
    return config


def get_city(city_id):
    """Get city reference data, or None if the city is unknown"""
    return CITIES.get(city_id)


def get_city_bounds(city_id):
    """Get the bounding box for a city, falling back to the default city"""
    city = CITIES.get(city_id)
    if city is None:
        print(f"Unknown city '{city_id}', using {DEFAULT_CITY} bounds")
        city = CITIES[DEFAULT_CITY]
    return dict(city['bounds'])


def get_current_season(month=None):
    """
    Season for a calendar month (1-12)

    Nov-Feb is winter, Mar-Jun summer, Jul-Oct monsoon.
    """
    if month is None:
        month = datetime.now().month

    if month >= 11 or month <= 2:
        return 'winter'
    if 3 <= month <= 6:
        return 'summer'
    return 'monsoon'
