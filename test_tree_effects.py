"""
Test the species catalog and per-tree deposition effects
"""
import pytest
from data_models import Tree
from simulation_config import DEFAULT_CONFIG
from species_data import (SPECIES, SpeciesCatalog, calculate_annual_co2, calculate_costs,
                          calculate_coverage_area, calculate_cluster_bonus, calculate_pm25_removal,
                          default_catalog, get_cluster_bonus, get_deposition_velocity)
from tree_effects import compute_tree_effect, compute_tree_effects


def tree(tree_id, species_id, lat=31.52, lng=74.35):
    return Tree(id=tree_id, lat=lat, lng=lng, species_id=species_id)


def deciduous_catalog():
    """Catalog with a species that is leafless in winter"""
    table = dict(SPECIES)
    table['shisham'] = dict(SPECIES['neem'], common_name='Shisham',
                            scientific_name='Dalbergia sissoo',
                            seasonal_efficiency={'winter': 0.0, 'summer': 1.0, 'monsoon': 1.0})
    return SpeciesCatalog(table)


def test_catalog_contents():
    assert len(default_catalog) == 4
    assert 'neem' in default_catalog
    assert default_catalog.get('oak') is None
    assert set(default_catalog.ids()) == {'neem', 'safeda', 'cookPine', 'deodarCedar'}


def test_empty_catalog_is_respected():
    effects = compute_tree_effects([tree('t1', 'neem')], 'winter', SpeciesCatalog({}))
    assert effects == []


def test_neem_effect_in_winter():
    effect = compute_tree_effect(tree('t1', 'neem'), default_catalog.get('neem'), 'winter')

    assert effect.tree_id == 't1'
    assert effect.removal_rate == pytest.approx(28.4 * 0.85)
    assert effect.seasonal_factor == 0.85
    assert effect.effective_radius == 6.0
    assert effect.deposition_velocity == pytest.approx(0.002 * 5.2 / 5.0)
    assert effect.leaf_area == 285


def test_leafless_season_removes_nothing():
    catalog = deciduous_catalog()
    winter = compute_tree_effects([tree('t1', 'shisham')], 'winter', catalog)
    summer = compute_tree_effects([tree('t1', 'shisham')], 'summer', catalog)

    assert winter[0].removal_rate == 0.0
    assert summer[0].removal_rate == pytest.approx(28.4)


def test_unknown_season_uses_full_efficiency():
    effect = compute_tree_effect(tree('t1', 'safeda'), default_catalog.get('safeda'), 'autumn')
    assert effect.seasonal_factor == 1.0


def test_unknown_species_is_skipped_and_order_kept():
    trees = [tree('a', 'deodarCedar'), tree('b', 'oak'), tree('c', 'cookPine')]
    effects = compute_tree_effects(trees, 'summer')

    assert [e.tree_id for e in effects] == ['a', 'c']


def test_invalid_coordinate_is_rejected():
    with pytest.raises(ValueError):
        compute_tree_effect(tree('t1', 'neem', lat=float('nan')), default_catalog.get('neem'), 'winter')
    with pytest.raises(ValueError):
        compute_tree_effect(tree('t1', 'neem', lat=95.0), default_catalog.get('neem'), 'winter')


def test_deposition_velocity_scales_with_lai():
    assert get_deposition_velocity('deodarCedar') > get_deposition_velocity('safeda')
    assert get_deposition_velocity('oak') == 0.002


def test_calibrated_deposition_velocity_matches_species_helper():
    config = dict(DEFAULT_CONFIG, base_deposition_velocity=0.004, reference_lai=4.0)
    effect = compute_tree_effect(tree('t1', 'neem'), default_catalog.get('neem'), 'summer', config)

    expected = get_deposition_velocity('neem', base_vd=0.004, reference_lai=4.0)
    assert effect.deposition_velocity == pytest.approx(expected)
    assert effect.deposition_velocity == pytest.approx(0.004 * 5.2 / 4.0)


def test_pm25_removal_for_group():
    assert calculate_pm25_removal('neem', 10, 'summer') == pytest.approx(284.0)
    assert calculate_pm25_removal('oak', 10) == 0.0


def test_coverage_area_grows_downwind():
    assert calculate_coverage_area('neem', 0.0) == 113
    assert calculate_coverage_area('neem', 50.0) == pytest.approx(226.0)
    assert calculate_coverage_area('oak') == 0.0


def test_costs_and_co2():
    counts = {'neem': 2, 'cookPine': 1, 'oak': 3}
    costs = calculate_costs(counts)

    assert costs == {
        'saplings': 2 * 800 + 1500,
        'planting': 2 * 500 + 600,
        'maintenance': 2 * 300 + 400,
        'total': 3100 + 1600 + 1000,
    }
    assert calculate_annual_co2(counts) == pytest.approx((2 * 21.7 + 15.2) / 1000)


def test_cluster_bonus():
    assert get_cluster_bonus(2, 100) == 1.0
    assert get_cluster_bonus(3, 100) == pytest.approx(1.2)

    close = [tree(f't{k}', 'neem', lat=31.52 + k * 0.0001) for k in range(3)]
    assert calculate_cluster_bonus(close) == pytest.approx(1.2)

    spread = [tree(f't{k}', 'neem', lat=31.52 + k * 0.01) for k in range(3)]
    assert calculate_cluster_bonus(spread) == 1.0


if __name__ == '__main__':
    trees = [tree('t1', 'neem'), tree('t2', 'deodarCedar'), tree('t3', 'oak')]
    for season in ('winter', 'summer', 'monsoon'):
        effects = compute_tree_effects(trees, season)
        rates = ', '.join(f"{e.species_id}={e.removal_rate:.2f}" for e in effects)
        print(f"{season:8s} {rates}")
    print("\n✅ Tree effect checks complete")
