"""
Tree species reference data and derived planting figures
Air quality parameters based on Nowak et al. (2006), Yang et al. (2015)
and i-Tree Eco model parameters
"""
import math
from data_models import SpeciesParameters
from simulation_config import DEFAULT_CONFIG, METERS_PER_DEGREE

# Per-species absorption (μg/m³/tree/day), CO2 (kg/tree/year),
# LAI (m²/m²), sizes (m, m²) and costs (PKR)
SPECIES = {
    'neem': {
        'common_name': 'Neem',
        'scientific_name': 'Azadirachta indica',
        'pm25_absorption': 28.4,
        'pm10_absorption': 42.6,
        'no2_absorption': 8.2,
        'so2_absorption': 6.4,
        'o3_absorption': 12.8,
        'co2_sequestration': 21.7,
        'leaf_area_index': 5.2,
        'leaf_area_total': 285,
        'mature_height': 15,
        'canopy_diameter': 12,
        'canopy_area': 113,
        'growth_rate': 'fast',
        'seasonal_efficiency': {'winter': 0.85, 'summer': 1.0, 'monsoon': 0.95},
        'costs': {'sapling': 800, 'planting': 500, 'annual_maintenance': 300},
        'suitability': {'lahore': 'excellent', 'delhi': 'excellent'},
        'notes': 'Highly pollution-tolerant, drought-resistant. Excellent for roadside planting.',
    },
    'safeda': {
        'common_name': 'Safeda (Eucalyptus)',
        'scientific_name': 'Eucalyptus globulus',
        'pm25_absorption': 22.1,
        'pm10_absorption': 35.8,
        'no2_absorption': 6.5,
        'so2_absorption': 5.8,
        'o3_absorption': 10.2,
        'co2_sequestration': 28.4,
        'leaf_area_index': 3.8,
        'leaf_area_total': 420,
        'mature_height': 25,
        'canopy_diameter': 8,
        'canopy_area': 50,
        'growth_rate': 'very-fast',
        'seasonal_efficiency': {'winter': 0.90, 'summer': 1.0, 'monsoon': 0.85},
        'costs': {'sapling': 400, 'planting': 400, 'annual_maintenance': 200},
        'suitability': {'lahore': 'good', 'delhi': 'good'},
        'notes': 'Fast-growing with a tall, narrow canopy. High water consumption.',
    },
    'cookPine': {
        'common_name': 'Cook Pine',
        'scientific_name': 'Araucaria columnaris',
        'pm25_absorption': 15.3,
        'pm10_absorption': 24.2,
        'no2_absorption': 4.8,
        'so2_absorption': 3.2,
        'o3_absorption': 7.5,
        'co2_sequestration': 15.2,
        'leaf_area_index': 4.5,
        'leaf_area_total': 180,
        'mature_height': 12,
        'canopy_diameter': 4,
        'canopy_area': 12.5,
        'growth_rate': 'slow',
        'seasonal_efficiency': {'winter': 1.0, 'summer': 0.90, 'monsoon': 0.95},
        'costs': {'sapling': 1500, 'planting': 600, 'annual_maintenance': 400},
        'suitability': {'lahore': 'moderate', 'delhi': 'moderate'},
        'notes': 'Ornamental conifer for boulevards. Less pollution-tolerant than Neem.',
    },
    'deodarCedar': {
        'common_name': 'Deodar Cedar',
        'scientific_name': 'Cedrus deodara',
        'pm25_absorption': 31.2,
        'pm10_absorption': 48.5,
        'no2_absorption': 9.4,
        'so2_absorption': 7.2,
        'o3_absorption': 14.6,
        'co2_sequestration': 24.8,
        'leaf_area_index': 6.8,
        'leaf_area_total': 380,
        'mature_height': 20,
        'canopy_diameter': 15,
        'canopy_area': 177,
        'growth_rate': 'medium',
        'seasonal_efficiency': {'winter': 1.0, 'summer': 0.85, 'monsoon': 0.95},
        'costs': {'sapling': 2000, 'planting': 800, 'annual_maintenance': 500},
        'suitability': {'lahore': 'good', 'delhi': 'good'},
        'notes': 'Excellent PM capture due to needle structure. Best in cooler areas.',
    },
}

BASE_DEPOSITION_VELOCITY = DEFAULT_CONFIG['base_deposition_velocity']  # m/s for PM2.5
REFERENCE_LAI = DEFAULT_CONFIG['reference_lai']


class SpeciesCatalog:
    """Read-only species lookup table"""

    def __init__(self, table=None):
        table = SPECIES if table is None else table
        self._species = {
            species_id: SpeciesParameters(id=species_id, **params)
            for species_id, params in table.items()
        }

    def get(self, species_id):
        """Species parameters, or None if the id is unknown"""
        return self._species.get(species_id)

    def get_all(self):
        return list(self._species.values())

    def ids(self):
        return list(self._species.keys())

    def __contains__(self, species_id):
        return species_id in self._species

    def __len__(self):
        return len(self._species)


default_catalog = SpeciesCatalog()


def get_species(species_id, catalog=None):
    if catalog is None:
        catalog = default_catalog
    return catalog.get(species_id)


def list_species(catalog=None):
    """List available species ids"""
    if catalog is None:
        catalog = default_catalog
    return catalog.ids()


def deposition_velocity(leaf_area_index, base_vd=BASE_DEPOSITION_VELOCITY,
                        reference_lai=REFERENCE_LAI):
    """Base PM2.5 velocity scaled linearly by LAI relative to the reference LAI"""
    return base_vd * (leaf_area_index / reference_lai)


def get_deposition_velocity(species_id, catalog=None, base_vd=BASE_DEPOSITION_VELOCITY,
                            reference_lai=REFERENCE_LAI):
    """
    Dry deposition velocity for a species (m/s)

    Unknown species get the unscaled base velocity.
    """
    species = get_species(species_id, catalog)
    if species is None:
        return base_vd
    return deposition_velocity(species.leaf_area_index, base_vd, reference_lai)


def calculate_pm25_removal(species_id, count, season='winter', catalog=None):
    """
    PM2.5 removal for a number of trees of one species

    Returns:
    --------
    removal : float
        μg/m³/day, 0 for unknown species
    """
    species = get_species(species_id, catalog)
    if species is None:
        return 0.0
    return species.pm25_absorption * count * species.seasonal_efficiency.get(season, 1.0)


def calculate_coverage_area(species_id, wind_speed=10.0, catalog=None):
    """Effective coverage (m²) of one tree, extended downwind up to 2x at 50 km/h"""
    species = get_species(species_id, catalog)
    if species is None:
        return 0.0
    return species.canopy_area * (1 + wind_speed / 50.0)


def calculate_annual_co2(counts, catalog=None):
    """
    Annual CO2 sequestration

    Parameters:
    -----------
    counts : dict
        species_id -> number of trees

    Returns:
    --------
    co2 : float
        Tonnes CO2 per year
    """
    total = 0.0
    for species_id, count in counts.items():
        species = get_species(species_id, catalog)
        if species is None:
            continue
        total += species.co2_sequestration * count / 1000.0  # kg -> tonnes
    return total


def calculate_costs(counts, catalog=None):
    """Cost breakdown (saplings, planting, first-year maintenance, total)"""
    costs = {'saplings': 0, 'planting': 0, 'maintenance': 0, 'total': 0}

    for species_id, count in counts.items():
        species = get_species(species_id, catalog)
        if species is None:
            continue
        costs['saplings'] += species.costs.get('sapling', 0) * count
        costs['planting'] += species.costs.get('planting', 0) * count
        costs['maintenance'] += species.costs.get('annual_maintenance', 0) * count

    costs['total'] = costs['saplings'] + costs['planting'] + costs['maintenance']
    return costs


def get_cluster_bonus(tree_count, cluster_radius=50.0):
    """
    Capture bonus for a cluster of trees (1.0 - 1.2)

    Dense groups create turbulence that improves particle capture.
    """
    if tree_count < 3:
        return 1.0
    density = tree_count / (math.pi * cluster_radius ** 2)
    return 1.0 + min(density * 10000, 0.2)


def calculate_cluster_bonus(trees, cluster_radius=100.0):
    """
    Average cluster bonus over greedy distance-threshold clusters

    Each tree joins the first cluster whose centroid is within
    cluster_radius meters, otherwise starts a new cluster.
    """
    if len(trees) < 3:
        return 1.0

    clusters = []
    for tree in trees:
        for cluster in clusters:
            center_lat = sum(t.lat for t in cluster) / len(cluster)
            center_lng = sum(t.lng for t in cluster) / len(cluster)
            dx = (tree.lng - center_lng) * METERS_PER_DEGREE * math.cos(math.radians(tree.lat))
            dy = (tree.lat - center_lat) * METERS_PER_DEGREE
            if math.hypot(dx, dy) < cluster_radius:
                cluster.append(tree)
                break
        else:
            clusters.append([tree])

    bonus = sum(get_cluster_bonus(len(cluster), cluster_radius) for cluster in clusters)
    return bonus / len(clusters)


if __name__ == '__main__':
    print("=== Tree Species Catalog ===\n")
    for species in default_catalog.get_all():
        vd = get_deposition_velocity(species.id)
        print(f"{species.common_name:22s} PM2.5: {species.pm25_absorption:5.1f}  "
              f"LAI: {species.leaf_area_index:.1f}  Vd: {vd:.4f} m/s")
