"""
Downwind impact zone polygons for map rendering
"""
import math
from data_models import ImpactZone
from simulation_config import METERS_PER_DEGREE

DEFAULT_WIND_SPEED = 10.0  # km/h
DEFAULT_WIND_DIRECTION = 0.0


def zone_polygon(lat, lng, bearing_rad, length, near_width, far_width):
    """
    Trapezoid from an origin along a bearing

    Parameters:
    -----------
    lat, lng : float
        Origin in degrees
    bearing_rad : float
        Direction of the far edge, radians clockwise from north
    length : float
        Distance to the far edge (m)
    near_width, far_width : float
        Half-widths of the near and far edges (m)

    Returns:
    --------
    polygon : list of (lat, lng)
        near-left, far-left, far-right, near-right
    """
    meters_per_deg_lng = METERS_PER_DEGREE * math.cos(math.radians(lat))
    perp = bearing_rad + math.pi / 2

    def offset(base_lat, base_lng, distance, angle):
        return (base_lat + distance * math.cos(angle) / METERS_PER_DEGREE,
                base_lng + distance * math.sin(angle) / meters_per_deg_lng)

    near_left = offset(lat, lng, near_width, perp)
    near_right = offset(lat, lng, -near_width, perp)

    far_lat, far_lng = offset(lat, lng, length, bearing_rad)
    far_left = offset(far_lat, far_lng, far_width, perp)
    far_right = offset(far_lat, far_lng, -far_width, perp)

    return [near_left, far_left, far_right, near_right]


def build_impact_zone(lat, lng, canopy_radius, wind):
    """
    Downwind zone polygon for one tree

    The zone reaches canopy_radius * 10 * (1 + speed/30) meters downwind
    and narrows from 2x to 0.5x the canopy radius, a visual cue for
    dilution rather than true plume geometry.
    """
    speed = DEFAULT_WIND_SPEED if wind.speed is None else wind.speed
    direction = DEFAULT_WIND_DIRECTION if wind.direction is None else wind.direction

    effective_distance = canopy_radius * 10 * (1 + speed / 30.0)
    bearing = math.radians((direction + 180.0) % 360.0)

    return zone_polygon(lat, lng, bearing, effective_distance,
                        near_width=canopy_radius * 2,
                        far_width=canopy_radius * 0.5)


def calculate_impact_zones(tree_effects, wind):
    """Impact zone for every tree effect"""
    return [
        ImpactZone(
            tree_id=effect.tree_id,
            species_id=effect.species_id,
            lat=effect.lat,
            lng=effect.lng,
            canopy_radius=effect.effective_radius,
            polygon=build_impact_zone(effect.lat, effect.lng, effect.effective_radius, wind),
            reduction=effect.removal_rate,
        )
        for effect in tree_effects
    ]
