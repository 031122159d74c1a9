"""
Tree impact simulation pipeline
Baseline field -> tree effects -> dispersion -> impact zones -> summary
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

from geometry import validate_coordinate
from impact_zones import calculate_impact_zones
from interpolation import build_baseline_field
from model_manager import model_manager, DEFAULT_MODEL
from pollution_field import PollutionField
from simulation_config import get_city_bounds, make_config
from stability import classify_stability, is_daytime_hour
from summary import summarize
from tree_effects import compute_tree_effects

STAGES = ('baseline', 'tree_effects', 'dispersion', 'impact_zones', 'summary')

# Progress checkpoints (percent, message) emitted before each stage
PROGRESS = {
    'baseline': (5, 'Calculating baseline pollution field...'),
    'tree_effects': (15, 'Computing tree particle capture rates...'),
    'dispersion': (45, 'Running Gaussian dispersion model...'),
    'impact_zones': (75, 'Calculating impact zones...'),
    'summary': (90, 'Generating summary statistics...'),
}
COMPLETE = (100, 'Simulation complete')


class SimulationError(Exception):
    """A stage failed on invalid input"""

    def __init__(self, stage, message):
        super().__init__(f"{stage} stage failed: {message}")
        self.stage = stage
        self.message = message


class SimulationCancelled(Exception):
    """The caller cancelled the run between stages"""

    def __init__(self, stage):
        super().__init__(f"Simulation cancelled before {stage} stage")
        self.stage = stage


@dataclass
class SimulationResult:
    baseline: PollutionField
    projected: PollutionField
    impact_zones: list
    summary: dict
    trees: list
    city_id: str
    season: str
    wind: object
    stability_class: str
    model_type: str
    timestamp: str
    tree_effects: list = field(default_factory=list)

    def to_dict(self, include_fields=True):
        """JSON-ready representation"""
        result = {
            'summary': self.summary,
            'impact_zones': [zone.to_dict() for zone in self.impact_zones],
            'trees': [tree.to_dict() for tree in self.trees],
            'city': self.city_id,
            'season': self.season,
            'wind': self.wind.to_dict(),
            'stability_class': self.stability_class,
            'model_type': self.model_type,
            'timestamp': self.timestamp,
        }
        if include_fields:
            result['baseline'] = self.baseline.to_dict()
            result['projected'] = self.projected.to_dict()
        return result


def _notify(progress_callback, percent, message):
    """Fire-and-forget progress notification"""
    if progress_callback is None:
        return
    try:
        progress_callback(percent, message)
    except Exception as e:
        print(f"Progress callback failed at {percent}%: {e}")


def _run_stage(stage, func, *args, **kwargs):
    """Run one stage, tagging input errors with the stage name"""
    try:
        return func(*args, **kwargs)
    except (ValueError, TypeError, KeyError) as e:
        raise SimulationError(stage, str(e)) from e


def _validate_trees(trees):
    for tree in trees:
        validate_coordinate(tree.lat, tree.lng, f"tree {tree.id}")


def _tree_effects_stage(trees, season, catalog, config):
    _validate_trees(trees)
    return compute_tree_effects(trees, season, catalog, config)


def run_simulation(trees, city_id, station_data, wind, season,
                   catalog=None, config=None, model_type=DEFAULT_MODEL,
                   is_daytime=None,
                   progress_callback: Optional[Callable[[int, str], None]] = None,
                   cancel_check: Optional[Callable[[], bool]] = None,
                   timestamp: Optional[datetime] = None) -> SimulationResult:
    """
    Run the full tree impact simulation

    Parameters:
    -----------
    trees : list of Tree
        Snapshot of placed trees
    city_id : str
        City identifier ('lahore', 'delhi'); unknown cities use the default bounds
    station_data : list of StationReading
        Pre-fetched station readings; may be empty
    wind : WindSample
        Pre-resolved wind (callers supply a seasonal fallback if needed)
    season : str
        'winter', 'summer' or 'monsoon'
    catalog : SpeciesCatalog, optional
        Species lookup, defaults to the built-in catalog
    config : dict, optional
        Calibration overrides (see simulation_config.DEFAULT_CONFIG)
    model_type : str
        Dispersion model from models.AVAILABLE_MODELS
    is_daytime : bool, optional
        Stability table selector; derived from the timestamp hour if None
    progress_callback : callable, optional
        Called as progress_callback(percent, message) between stages
    cancel_check : callable, optional
        Checked between stages; returning True raises SimulationCancelled
    timestamp : datetime, optional
        Run time, defaults to now

    Returns:
    --------
    result : SimulationResult
    """
    trees = list(trees)
    station_data = list(station_data)
    timestamp = timestamp or datetime.now()
    if is_daytime is None:
        is_daytime = is_daytime_hour(timestamp.hour)

    try:
        config = make_config(config)
        model = model_manager.create_model(model_type, config)
    except ValueError as e:
        raise SimulationError('setup', str(e)) from e

    def checkpoint(stage):
        if cancel_check is not None and cancel_check():
            raise SimulationCancelled(stage)
        _notify(progress_callback, *PROGRESS[stage])

    checkpoint('baseline')
    bounds = get_city_bounds(city_id)
    baseline = _run_stage('baseline', build_baseline_field, bounds, station_data,
                          config['grid_resolution_m'], config)

    checkpoint('tree_effects')
    tree_effects = _run_stage('tree_effects', _tree_effects_stage, trees, season, catalog, config)

    checkpoint('dispersion')
    projected = _run_stage('dispersion', model.project, baseline, tree_effects, wind, is_daytime)
    wind_speed, _ = model.wind_parameters(wind)

    checkpoint('impact_zones')
    impact_zones = _run_stage('impact_zones', calculate_impact_zones, tree_effects, wind)

    checkpoint('summary')
    summary = _run_stage('summary', summarize, baseline, projected, trees, tree_effects,
                         city_id, catalog)

    _notify(progress_callback, *COMPLETE)

    return SimulationResult(
        baseline=baseline,
        projected=projected,
        impact_zones=impact_zones,
        summary=summary,
        trees=trees,
        city_id=city_id,
        season=season,
        wind=wind,
        stability_class=classify_stability(wind_speed, is_daytime).value,
        model_type=model_type,
        timestamp=timestamp.isoformat(),
        tree_effects=tree_effects,
    )
