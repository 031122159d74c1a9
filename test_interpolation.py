"""
Test inverse-distance-weighted interpolation and baseline field construction
"""
import numpy as np
import pytest
from data_models import StationReading
from interpolation import build_baseline_field, grid_axes, interpolate_aqi
from simulation_config import METERS_PER_DEGREE

BOUNDS = {'north': 31.53, 'south': 31.51, 'east': 74.37, 'west': 74.34}


def station(station_id, lat, lng, pm25, pm10=None, aqi=None):
    return StationReading(station_id=station_id, name=station_id, lat=lat, lng=lng,
                          pm25=pm25, pm10=pm10, aqi=aqi)


def test_station_at_query_point_returns_its_reading():
    stations = [
        station('a', 31.52, 74.35, 180.0, pm10=250.0),
        station('b', 31.60, 74.45, 40.0),
    ]
    values = interpolate_aqi(31.52, 74.35, stations)

    # Pinned weight 1000 vs ~1/(13 km)² for the far station
    assert values['pm25'] == pytest.approx(180.0, abs=0.01)
    assert values['pm10'] == pytest.approx(250.0, abs=0.02)


def test_single_station_is_exact():
    values = interpolate_aqi(31.52, 74.35, [station('a', 31.52, 74.35, 123.4)])
    assert values['pm25'] == pytest.approx(123.4, rel=1e-12)
    assert values['aqi'] == pytest.approx(123.4, rel=1e-12)


def test_interpolation_is_bounded_by_station_values():
    rng = np.random.default_rng(42)
    stations = [
        station(f's{i}', rng.uniform(31.35, 31.65), rng.uniform(74.15, 74.55), rng.uniform(60, 310))
        for i in range(8)
    ]
    low = min(s.pm25 for s in stations)
    high = max(s.pm25 for s in stations)

    for lat, lng in zip(rng.uniform(31.3, 31.7, 50), rng.uniform(74.1, 74.6, 50)):
        pm25 = interpolate_aqi(lat, lng, stations)['pm25']
        assert low - 1e-9 <= pm25 <= high + 1e-9


def test_pm10_falls_back_to_ratio():
    values = interpolate_aqi(31.52, 74.35, [station('a', 31.52, 74.35, 100.0)])
    assert values['pm10'] == pytest.approx(140.0)


def test_closer_station_dominates():
    stations = [station('near', 31.52, 74.35, 100.0), station('far', 31.52, 74.45, 300.0)]
    pm25 = interpolate_aqi(31.52, 74.36, stations)['pm25']
    assert 100.0 < pm25 < 200.0


def test_no_stations_fails_open_to_high_default():
    values = interpolate_aqi(31.52, 74.35, [])
    assert values == {'pm25': 200.0, 'pm10': 280.0, 'aqi': 200.0}


def test_grid_axes_cover_bounds_with_square_cells():
    lats, lngs = grid_axes(BOUNDS, 100.0)

    assert lats[0] == BOUNDS['south']
    assert lngs[0] == BOUNDS['west']
    assert lats[-1] <= BOUNDS['north'] + 1e-12
    assert lngs[-1] <= BOUNDS['east'] + 1e-12

    lat_step = lats[1] - lats[0]
    lng_step = lngs[1] - lngs[0]
    assert lat_step == pytest.approx(100.0 / METERS_PER_DEGREE)
    assert lng_step * METERS_PER_DEGREE * np.cos(np.radians(BOUNDS['north'])) == pytest.approx(100.0)


def test_uniform_station_gives_uniform_field():
    stations = [station('only', 31.52, 74.355, 300.0)]
    field = build_baseline_field(BOUNDS, stations, step_meters=100)

    assert field.shape == (len(field.lats), len(field.lngs))
    assert np.allclose(field.pm25, 300.0, rtol=0, atol=1e-9)
    assert np.allclose(field.pm10, 420.0, rtol=0, atol=1e-9)
    assert field.reduction is None


def test_field_rejects_non_finite_station():
    with pytest.raises(ValueError):
        build_baseline_field(BOUNDS, [station('bad', float('nan'), 74.35, 100.0)])


def test_field_rejects_inverted_bounds():
    bounds = dict(BOUNDS, south=BOUNDS['north'] + 0.1)
    with pytest.raises(ValueError):
        build_baseline_field(bounds, [])


if __name__ == '__main__':
    stations = [station('only', 31.52, 74.355, 300.0)]
    field = build_baseline_field(BOUNDS, stations)
    print(f"Grid: {field.shape[0]} x {field.shape[1]} cells")
    print(f"PM2.5 range: [{field.pm25.min():.3f}, {field.pm25.max():.3f}] µg/m³")
    print("\n✅ Interpolation checks complete")
