"""
Immutable records passed between the simulation stages
"""
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, List, Optional, Tuple


class StabilityClass(str, Enum):
    """Pasquill stability classes, very unstable (A) to stable (F)"""
    A = 'A'
    B = 'B'
    C = 'C'
    D = 'D'
    E = 'E'
    F = 'F'


@dataclass(frozen=True)
class StationReading:
    station_id: str
    name: str
    lat: float
    lng: float
    pm25: float
    pm10: Optional[float] = None
    aqi: Optional[float] = None
    no2: Optional[float] = None
    so2: Optional[float] = None
    o3: Optional[float] = None
    timestamp: Optional[str] = None
    is_real: bool = True

    @classmethod
    def from_dict(cls, data):
        """Build a reading from an API/JSON record (id/lat/lng/pm25 keys)"""
        def optional(key):
            value = data.get(key)
            return None if value is None else float(value)

        return cls(
            station_id=str(data.get('station_id', data.get('id', ''))),
            name=data.get('name', ''),
            lat=data['lat'],
            lng=data['lng'],
            pm25=float(data['pm25']),
            pm10=optional('pm10'),
            aqi=optional('aqi'),
            no2=optional('no2'),
            so2=optional('so2'),
            o3=optional('o3'),
            timestamp=data.get('timestamp'),
            is_real=bool(data.get('is_real', True)),
        )

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class Tree:
    id: str
    lat: float
    lng: float
    species_id: str
    placed_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=str(data['id']),
            lat=data['lat'],
            lng=data['lng'],
            species_id=data.get('species_id', data.get('speciesId')),
            placed_at=data.get('placed_at'),
        )

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class WindSample:
    speed: float  # km/h
    direction: float  # degrees, direction the wind blows FROM
    gust_speed: Optional[float] = None
    is_real: bool = True

    @classmethod
    def from_dict(cls, data):
        speed = data.get('speed')
        direction = data.get('direction')
        gust = data.get('gust_speed')
        return cls(
            speed=None if speed is None else float(speed),
            direction=0.0 if direction is None else float(direction),
            gust_speed=None if gust is None else float(gust),
            is_real=bool(data.get('is_real', True)),
        )

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class SpeciesParameters:
    id: str
    common_name: str
    scientific_name: str
    pm25_absorption: float  # μg/m³/tree/day
    pm10_absorption: float
    no2_absorption: float
    so2_absorption: float
    o3_absorption: float
    co2_sequestration: float  # kg/tree/year
    leaf_area_index: float  # m²/m²
    leaf_area_total: float  # m² per mature tree
    mature_height: float  # m
    canopy_diameter: float  # m
    canopy_area: float  # m²
    growth_rate: str
    seasonal_efficiency: Dict[str, float] = field(default_factory=dict)
    costs: Dict[str, float] = field(default_factory=dict)
    suitability: Dict[str, str] = field(default_factory=dict)
    notes: str = ''

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class TreeEffect:
    tree_id: str
    species_id: str
    lat: float
    lng: float
    removal_rate: float  # seasonal PM2.5 removal
    deposition_velocity: float  # m/s
    effective_radius: float  # m
    seasonal_factor: float
    leaf_area: float

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class ImpactZone:
    tree_id: str
    species_id: str
    lat: float
    lng: float
    canopy_radius: float
    polygon: List[Tuple[float, float]]
    reduction: float

    def to_dict(self):
        return {
            'tree_id': self.tree_id,
            'species_id': self.species_id,
            'lat': self.lat,
            'lng': self.lng,
            'canopy_radius': self.canopy_radius,
            'polygon': [{'lat': lat, 'lng': lng} for lat, lng in self.polygon],
            'reduction': self.reduction,
        }
