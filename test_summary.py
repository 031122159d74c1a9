"""
Test summary statistics of a simulation
"""
import numpy as np
import pytest
from data_models import Tree, TreeEffect
from pollution_field import PollutionField
from summary import get_aqi_category, summarize


def field(value):
    lats = np.array([31.50, 31.51])
    lngs = np.array([74.30, 74.31, 74.32])
    return PollutionField(lats=lats, lngs=lngs,
                          pm25=np.full((2, 3), float(value)),
                          pm10=np.full((2, 3), float(value) * 1.4))


def neem_effect(tree_id):
    return TreeEffect(tree_id=tree_id, species_id='neem', lat=31.505, lng=74.31,
                      removal_rate=24.14, deposition_velocity=0.00208,
                      effective_radius=6.0, seasonal_factor=0.85, leaf_area=285)


@pytest.mark.parametrize("value, label", [
    (0, 'Good'), (50, 'Good'), (51, 'Moderate'), (150, 'Unhealthy for Sensitive'),
    (200, 'Unhealthy'), (300, 'Very Unhealthy'), (301, 'Hazardous'),
])
def test_aqi_categories(value, label):
    assert get_aqi_category(value)['label'] == label


def test_summary_figures():
    trees = [
        Tree(id='t1', lat=31.505, lng=74.31, species_id='neem'),
        Tree(id='t2', lat=31.506, lng=74.31, species_id='neem'),
        Tree(id='t3', lat=31.507, lng=74.31, species_id='oak'),
    ]
    effects = [neem_effect('t1'), neem_effect('t2')]
    summary = summarize(field(100), field(90), trees, effects, 'lahore')

    assert summary['baseline'] == {'avg_pm25': 100, 'category': get_aqi_category(100)}
    assert summary['projected']['avg_pm25'] == 90
    assert summary['reduction'] == {'absolute': 10, 'percentage': 10.0}

    assert summary['trees']['total'] == 3
    assert summary['trees']['by_species'] == {'neem': 2, 'oak': 1}

    # 2 canopies of radius 6 m, doubled for overlap, at 6300 people/km²
    assert summary['coverage']['area_sq_km'] == 0.0
    assert summary['coverage']['population_benefited'] == 3

    assert summary['environmental']['co2_tonnes'] == 0.0
    assert summary['costs'] == {'saplings': 1600, 'planting': 1000, 'maintenance': 600,
                                'total': 3200, 'currency': 'PKR'}


def test_summary_city_currency_and_fallback():
    delhi = summarize(field(100), field(100), [], [], 'delhi')
    unknown = summarize(field(100), field(100), [], [], 'karachi')

    assert delhi['costs']['currency'] == 'INR'
    assert unknown['costs']['currency'] == 'PKR'
    assert delhi['reduction']['percentage'] == 0.0
    assert delhi['trees']['cluster_bonus'] == 1.0


def test_field_rows_for_export():
    baseline = field(100)
    rows = baseline.to_rows()

    assert len(rows) == 2 and len(rows[0]) == 3
    assert rows[1][2] == pytest.approx({'lat': 31.51, 'lng': 74.32, 'pm25': 100.0, 'pm10': 140.0})
    assert baseline.cell_count == 6


def test_zero_baseline_gives_zero_percentage():
    summary = summarize(field(0), field(0), [], [], 'lahore')
    assert summary['reduction']['percentage'] == 0.0


def test_missing_species_counted_as_unknown():
    trees = [Tree(id='t1', lat=31.505, lng=74.31, species_id='neem'),
             Tree(id='t2', lat=31.505, lng=74.31, species_id=None)]
    summary = summarize(field(100), field(100), trees, [neem_effect('t1')], 'lahore')

    assert summary['trees']['by_species'] == {'neem': 1, 'unknown': 1}
    assert summary['costs']['total'] == 1600
