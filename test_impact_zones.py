"""
Test downwind impact zone polygons
"""
import math
import pytest
from data_models import TreeEffect, WindSample
from impact_zones import build_impact_zone, calculate_impact_zones
from simulation_config import METERS_PER_DEGREE

LAT, LNG = 31.52, 74.35
M_PER_DEG_LNG = METERS_PER_DEGREE * math.cos(math.radians(LAT))


def test_north_wind_zone_points_south():
    near_left, far_left, far_right, near_right = build_impact_zone(
        LAT, LNG, 6.0, WindSample(speed=30.0, direction=0.0))

    # Length 6 * 10 * (1 + 30/30) = 120 m toward the south
    far_lat = (far_left[0] + far_right[0]) / 2
    assert far_lat == pytest.approx(LAT - 120.0 / METERS_PER_DEGREE, abs=1e-9)

    # Half-widths: 2r at the tree, 0.5r at the far edge
    assert near_left[0] == pytest.approx(LAT, abs=1e-9)
    assert abs(near_left[1] - near_right[1]) * M_PER_DEG_LNG == pytest.approx(24.0, rel=1e-6)
    assert abs(far_left[1] - far_right[1]) * M_PER_DEG_LNG == pytest.approx(6.0, rel=1e-6)


def test_zone_length_grows_with_wind_speed():
    calm = build_impact_zone(LAT, LNG, 6.0, WindSample(speed=0.0, direction=270.0))
    windy = build_impact_zone(LAT, LNG, 6.0, WindSample(speed=60.0, direction=270.0))

    # West wind blows east
    calm_far = (calm[1][1] + calm[2][1]) / 2
    windy_far = (windy[1][1] + windy[2][1]) / 2
    assert (calm_far - LNG) * M_PER_DEG_LNG == pytest.approx(60.0, rel=1e-6)
    assert (windy_far - LNG) * M_PER_DEG_LNG == pytest.approx(180.0, rel=1e-6)


def test_missing_wind_uses_defaults():
    zone = build_impact_zone(LAT, LNG, 6.0, WindSample(speed=None, direction=None))
    far_lat = (zone[1][0] + zone[2][0]) / 2
    assert far_lat == pytest.approx(LAT - 80.0 / METERS_PER_DEGREE, abs=1e-9)


def test_one_zone_per_effect():
    effects = [
        TreeEffect(tree_id='a', species_id='neem', lat=LAT, lng=LNG, removal_rate=24.14,
                   deposition_velocity=0.00208, effective_radius=6.0, seasonal_factor=0.85,
                   leaf_area=285),
        TreeEffect(tree_id='b', species_id='safeda', lat=LAT + 0.001, lng=LNG, removal_rate=19.89,
                   deposition_velocity=0.00152, effective_radius=4.0, seasonal_factor=0.9,
                   leaf_area=420),
    ]
    zones = calculate_impact_zones(effects, WindSample(speed=8.0, direction=315.0))

    assert [z.tree_id for z in zones] == ['a', 'b']
    assert zones[0].reduction == 24.14
    assert zones[1].canopy_radius == 4.0
    assert len(zones[0].polygon) == 4

    data = zones[0].to_dict()
    assert set(data['polygon'][0]) == {'lat', 'lng'}


def test_no_effects_no_zones():
    assert calculate_impact_zones([], WindSample(speed=8.0, direction=0.0)) == []
