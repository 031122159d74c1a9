"""
Inverse-distance-weighted interpolation of station readings
Builds the baseline pollution field from sparse monitoring stations
"""
import numpy as np
from geometry import haversine_km, validate_bounds, validate_coordinate
from pollution_field import PollutionField
from simulation_config import DEFAULT_CONFIG, METERS_PER_DEGREE, PM10_PM25_RATIO


def _station_arrays(stations):
    """Stack station coordinates and values into numpy arrays"""
    lat = np.array([s.lat for s in stations], dtype=np.float64)
    lng = np.array([s.lng for s in stations], dtype=np.float64)
    pm25 = np.array([s.pm25 for s in stations], dtype=np.float64)
    pm10 = np.array([s.pm10 if s.pm10 is not None else s.pm25 * PM10_PM25_RATIO
                     for s in stations], dtype=np.float64)
    aqi = np.array([s.aqi if s.aqi is not None else s.pm25
                    for s in stations], dtype=np.float64)
    return lat, lng, pm25, pm10, aqi


def idw_weights(lat, lng, station_lat, station_lng, config=None):
    """
    IDW weights (exponent 2) of every station for every query point

    Parameters:
    -----------
    lat, lng : ndarray
        Query coordinates, any shape S
    station_lat, station_lng : ndarray, shape (k,)
        Station coordinates
    config : dict, optional
        Uses near_station_km and near_station_weight

    Returns:
    --------
    weights : ndarray, shape S + (k,)
        1/d² with d in km, pinned to near_station_weight below near_station_km
    """
    config = config or DEFAULT_CONFIG
    lat = np.asarray(lat, dtype=np.float64)[..., np.newaxis]
    lng = np.asarray(lng, dtype=np.float64)[..., np.newaxis]

    distance = haversine_km(lat, lng, station_lat, station_lng)
    near = distance < config['near_station_km']

    # Stations closer than the cutoff get a fixed dominant weight
    safe = np.where(near, 1.0, distance)
    return np.where(near, config['near_station_weight'], 1.0 / safe ** 2)


def interpolate_grid(lat, lng, stations, config=None):
    """
    Vectorized IDW over arrays of query points

    Returns:
    --------
    pm25, pm10, aqi : ndarray
        Interpolated values with the shape of lat/lng
    """
    config = config or DEFAULT_CONFIG
    lat = np.asarray(lat, dtype=np.float64)
    lng = np.asarray(lng, dtype=np.float64)

    if not stations:
        # Fail open to a high estimate rather than understating risk
        default = config['default_pm25']
        return (np.full(lat.shape, default),
                np.full(lat.shape, default * PM10_PM25_RATIO),
                np.full(lat.shape, default))

    s_lat, s_lng, s_pm25, s_pm10, s_aqi = _station_arrays(stations)
    weights = idw_weights(lat, lng, s_lat, s_lng, config)
    total = weights.sum(axis=-1)

    pm25 = (weights * s_pm25).sum(axis=-1) / total
    pm10 = (weights * s_pm10).sum(axis=-1) / total
    aqi = (weights * s_aqi).sum(axis=-1) / total
    return pm25, pm10, aqi


def interpolate_aqi(lat, lng, stations, config=None):
    """
    Interpolate pollution at a single coordinate

    Parameters:
    -----------
    lat, lng : float
        Query point in degrees
    stations : list of StationReading
        Station snapshot; may be empty
    config : dict, optional
        Calibration config

    Returns:
    --------
    values : dict
        {'pm25', 'pm10', 'aqi'} in µg/m³ (aqi in index units)
    """
    pm25, pm10, aqi = interpolate_grid(lat, lng, stations, config)
    return {'pm25': float(pm25), 'pm10': float(pm10), 'aqi': float(aqi)}


def grid_axes(bounds, step_meters):
    """
    Latitude and longitude axes covering the bounds at a metric step

    Longitude step is corrected by cos(north latitude) so cells stay
    roughly square.
    """
    lat_step = step_meters / METERS_PER_DEGREE
    lng_step = step_meters / (METERS_PER_DEGREE * np.cos(np.radians(bounds['north'])))

    # Small tolerance so an edge that lands on the bound is kept
    n_lat = int(np.floor((bounds['north'] - bounds['south']) / lat_step + 1e-9)) + 1
    n_lng = int(np.floor((bounds['east'] - bounds['west']) / lng_step + 1e-9)) + 1

    lats = bounds['south'] + np.arange(n_lat) * lat_step
    lngs = bounds['west'] + np.arange(n_lng) * lng_step
    return lats, lngs


def build_baseline_field(bounds, stations, step_meters=None, config=None):
    """
    Interpolate station readings onto a regular grid over the bounds

    Parameters:
    -----------
    bounds : dict
        {'north', 'south', 'east', 'west'} in degrees
    stations : list of StationReading
        Station snapshot
    step_meters : float, optional
        Grid resolution, defaults to config['grid_resolution_m']
    config : dict, optional
        Calibration config

    Returns:
    --------
    field : PollutionField
        Baseline field, no reduction attached
    """
    config = config or DEFAULT_CONFIG
    validate_bounds(bounds)
    for station in stations:
        validate_coordinate(station.lat, station.lng, f"station {station.station_id}")

    if step_meters is None:
        step_meters = config['grid_resolution_m']
    if step_meters <= 0:
        raise ValueError(f"Grid step must be positive, got {step_meters}")

    lats, lngs = grid_axes(bounds, step_meters)
    LNG, LAT = np.meshgrid(lngs, lats)
    pm25, pm10, _ = interpolate_grid(LAT, LNG, stations, config)

    return PollutionField(lats=lats, lngs=lngs, pm25=pm25, pm10=pm10)
