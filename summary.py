"""
Summary statistics for a simulation run
"""
import math
from collections import Counter
from simulation_config import CITIES, DEFAULT_CITY, get_city
from species_data import calculate_annual_co2, calculate_costs, calculate_cluster_bonus

# US EPA AQI bands: (upper bound, label, colour, text colour)
AQI_CATEGORIES = [
    (50, 'Good', '#00e400', '#000'),
    (100, 'Moderate', '#ffff00', '#000'),
    (150, 'Unhealthy for Sensitive', '#ff7e00', '#000'),
    (200, 'Unhealthy', '#ff0000', '#fff'),
    (300, 'Very Unhealthy', '#8f3f97', '#fff'),
]
HAZARDOUS = ('Hazardous', '#7e0023', '#fff')

# Benefit extends beyond the literal canopy footprint
POPULATION_OVERLAP_FACTOR = 2

# by_species key for trees posted without a species id
UNKNOWN_SPECIES = 'unknown'


def get_aqi_category(value):
    """AQI category label and colours for a value"""
    for upper, label, color, text_color in AQI_CATEGORIES:
        if value <= upper:
            return {'label': label, 'color': color, 'text_color': text_color}
    label, color, text_color = HAZARDOUS
    return {'label': label, 'color': color, 'text_color': text_color}


def coverage_area_km2(tree_effects):
    """Total canopy footprint of all tree effects in km²"""
    return sum(math.pi * effect.effective_radius ** 2 for effect in tree_effects) / 1e6


def summarize(baseline, projected, trees, tree_effects, city_id, catalog=None):
    """
    Reduce baseline and projected fields to KPIs

    Parameters:
    -----------
    baseline, projected : PollutionField
        Fields of identical shape
    trees : list of Tree
        All placed trees (including ones with unknown species)
    tree_effects : list of TreeEffect
        Trees that contributed to the projection
    city_id : str
        City for density and currency; unknown cities use the default
    catalog : SpeciesCatalog, optional
        Species data for CO2 and costs

    Returns:
    --------
    summary : dict
        Nested KPI dictionary
    """
    city = get_city(city_id) or CITIES[DEFAULT_CITY]

    avg_baseline = baseline.mean_pm25()
    avg_projected = projected.mean_pm25()
    if avg_baseline > 0:
        percentage = (avg_baseline - avg_projected) / avg_baseline * 100
    else:
        percentage = 0.0

    species_count = dict(Counter(tree.species_id or UNKNOWN_SPECIES for tree in trees))
    coverage = coverage_area_km2(tree_effects)
    costs = calculate_costs(species_count, catalog)
    co2 = calculate_annual_co2(species_count, catalog)

    return {
        'baseline': {
            'avg_pm25': round(avg_baseline),
            'category': get_aqi_category(avg_baseline)
        },
        'projected': {
            'avg_pm25': round(avg_projected),
            'category': get_aqi_category(avg_projected)
        },
        'reduction': {
            'absolute': round(avg_baseline - avg_projected),
            'percentage': round(percentage, 1)
        },
        'trees': {
            'total': len(trees),
            'by_species': species_count,
            'cluster_bonus': round(calculate_cluster_bonus(trees), 3)
        },
        'coverage': {
            'area_sq_km': round(coverage, 2),
            'population_benefited': round(coverage * city['density'] * POPULATION_OVERLAP_FACTOR)
        },
        'environmental': {
            'co2_tonnes': round(co2, 1)
        },
        'costs': dict(costs, currency=city['currency'])
    }
