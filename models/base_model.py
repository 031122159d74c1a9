"""
Base class for all dispersion models
Defines the common interface and the reduction step shared by every model
"""
import numpy as np
from abc import ABC, abstractmethod
from geometry import validate_finite
from simulation_config import make_config, PM10_PM25_RATIO
from stability import classify_stability


class BaseDispersionModel(ABC):
    """
    Abstract base class for dispersion models

    A model holds only its read-only configuration, so one instance can
    serve any number of runs.
    """

    def __init__(self, config=None):
        """
        Initialize model with configuration

        Parameters:
        -----------
        config : dict, optional
            Calibration values (see simulation_config.DEFAULT_CONFIG)
        """
        self.config = make_config(config)

    @abstractmethod
    def accumulate_reduction(self, baseline, tree_effects, wind_speed, downwind_rad, stability):
        """
        Sum every tree's reduction contribution per cell

        Parameters:
        -----------
        baseline : PollutionField
            Baseline field
        tree_effects : list of TreeEffect
            Tree sources
        wind_speed : float
            Wind speed in km/h, already floored
        downwind_rad : float
            Bearing the wind blows TO, radians clockwise from north
        stability : str
            Stability class (A-F)

        Returns:
        --------
        total_reduction : ndarray, shape (ny, nx)
            Summed reduction in µg/m³
        """
        pass

    def wind_parameters(self, wind):
        """
        Wind speed (km/h, floored) and downwind bearing (radians)

        The meteorological direction is where the wind comes FROM, so the
        dispersion direction is rotated by 180 degrees.
        """
        speed = wind.speed
        if speed is None:
            speed = self.config['default_wind_speed']
        speed = validate_finite(speed, 'wind speed')
        speed = max(speed, self.config['min_wind_speed'])

        direction = 0.0 if wind.direction is None else validate_finite(wind.direction, 'wind direction')
        downwind_rad = np.radians((direction + 180.0) % 360.0)
        return speed, downwind_rad

    def project(self, baseline, tree_effects, wind, is_daytime=True):
        """
        Projected field after tree deposition

        Parameters:
        -----------
        baseline : PollutionField
            Baseline field (not modified)
        tree_effects : list of TreeEffect
            Tree sources
        wind : WindSample
            Current wind
        is_daytime : bool
            Selects the day or night stability table

        Returns:
        --------
        projected : PollutionField
            New field with per-cell reduction percentage
        """
        wind_speed, downwind_rad = self.wind_parameters(wind)
        stability = classify_stability(wind_speed, is_daytime)

        if tree_effects:
            total = self.accumulate_reduction(baseline, tree_effects, wind_speed,
                                              downwind_rad, stability)
        else:
            total = np.zeros(baseline.shape)

        return self.apply_reduction(baseline, total)

    def apply_reduction(self, baseline, total_reduction):
        """
        Apply summed reductions with a cap and a residual floor

        Cells with no contribution are copied unchanged from the baseline.
        """
        projected = baseline.copy()
        reduction = np.zeros(baseline.shape)

        pm25 = baseline.pm25
        affected = (total_reduction > 0) & (pm25 > 0)

        if affected.any():
            c0 = pm25[affected]
            # Diminishing returns: at most max_reduction of the baseline is removed
            factor = 1.0 - np.minimum(total_reduction[affected] / c0, self.config['max_reduction'])
            # The floor never raises a cell above its baseline
            c1 = np.maximum(c0 * factor, np.minimum(self.config['min_concentration'], c0))

            projected.pm25[affected] = c1
            projected.pm10[affected] = c1 * PM10_PM25_RATIO
            reduction[affected] = (1.0 - factor) * 100.0

        projected.reduction = reduction
        return projected

    def get_info(self):
        """Get model information"""
        return {
            'model_type': self.__class__.__name__,
            'config': dict(self.config),
        }
