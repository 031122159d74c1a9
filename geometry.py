"""
Geographic distance and projection helpers
"""
import math
import numpy as np
from simulation_config import METERS_PER_DEGREE, EARTH_RADIUS_KM


def haversine_km(lat1, lng1, lat2, lng2):
    """
    Great-circle distance using the Haversine formula

    Works on scalars or broadcastable numpy arrays.

    Returns:
    --------
    distance : float or ndarray
        Distance in kilometers
    """
    lat1 = np.radians(lat1)
    lat2 = np.radians(lat2)
    d_lat = lat2 - lat1
    d_lng = np.radians(lng2) - np.radians(lng1)

    a = np.sin(d_lat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(d_lng / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def planar_offset_m(origin_lat, origin_lng, lat, lng):
    """
    Equirectangular offset (dx east, dy north) in meters from origin to point

    The longitude scale uses the latitude of the target point.
    """
    dx = (lng - origin_lng) * METERS_PER_DEGREE * np.cos(np.radians(lat))
    dy = (lat - origin_lat) * METERS_PER_DEGREE
    return dx, dy


def validate_finite(value, label):
    """Raise ValueError if value is missing or not a finite number"""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{label} must be a number, got {value!r}")
    if not math.isfinite(number):
        raise ValueError(f"{label} must be finite, got {value!r}")
    return number


def validate_coordinate(lat, lng, label='coordinate'):
    """Check a (lat, lng) pair is finite and within geographic range"""
    lat = validate_finite(lat, f"{label} latitude")
    lng = validate_finite(lng, f"{label} longitude")
    if not -90.0 <= lat <= 90.0:
        raise ValueError(f"{label} latitude out of range: {lat}")
    if not -180.0 <= lng <= 180.0:
        raise ValueError(f"{label} longitude out of range: {lng}")
    return lat, lng


def validate_bounds(bounds):
    """Check a {north, south, east, west} box is finite and well ordered"""
    for key in ('north', 'south', 'east', 'west'):
        if key not in bounds:
            raise ValueError(f"bounds missing '{key}'")
    validate_coordinate(bounds['north'], bounds['east'], 'bounds north-east')
    validate_coordinate(bounds['south'], bounds['west'], 'bounds south-west')
    if bounds['south'] > bounds['north'] or bounds['west'] > bounds['east']:
        raise ValueError(f"bounds are inverted: {bounds}")
