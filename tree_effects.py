"""
Per-tree deposition effects for a simulation run
"""
from typing import List
from data_models import TreeEffect
from geometry import validate_coordinate
from simulation_config import DEFAULT_CONFIG
from species_data import default_catalog, deposition_velocity


def compute_tree_effect(tree, species, season, config=None):
    """
    Effective removal parameters of one tree in a season

    Parameters:
    -----------
    tree : Tree
        Placed tree
    species : SpeciesParameters
        Species of the tree
    season : str
        'winter', 'summer' or 'monsoon'; unknown seasons use factor 1.0
    config : dict, optional
        Uses base_deposition_velocity and reference_lai

    Returns:
    --------
    effect : TreeEffect
    """
    config = config or DEFAULT_CONFIG
    lat, lng = validate_coordinate(tree.lat, tree.lng, f"tree {tree.id}")

    seasonal_factor = species.seasonal_efficiency.get(season, 1.0)
    vd = deposition_velocity(species.leaf_area_index,
                             config['base_deposition_velocity'], config['reference_lai'])

    return TreeEffect(
        tree_id=tree.id,
        species_id=species.id,
        lat=lat,
        lng=lng,
        removal_rate=species.pm25_absorption * seasonal_factor,
        deposition_velocity=vd,
        effective_radius=species.canopy_diameter / 2.0,
        seasonal_factor=seasonal_factor,
        leaf_area=species.leaf_area_total,
    )


def compute_tree_effects(trees, season, catalog=None, config=None) -> List[TreeEffect]:
    """
    Tree effects for every tree with a known species

    Trees whose species is not in the catalog are skipped with a warning.
    Input order is preserved.
    """
    if catalog is None:
        catalog = default_catalog
    effects = []
    for tree in trees:
        species = catalog.get(tree.species_id)
        if species is None:
            print(f"Skipping tree {tree.id}: unknown species '{tree.species_id}'")
            continue
        effects.append(compute_tree_effect(tree, species, season, config))
    return effects
