"""
Gaussian Plume Deposition Model
Simplified 2-D plume of pollutant removal downwind of each tree
"""
import numpy as np
from geometry import planar_offset_m
from simulation_config import KMH_TO_MS
from stability import dispersion_coefficients
from .base_model import BaseDispersionModel


class GaussianPlumeModel(BaseDispersionModel):
    """
    Gaussian plume reduction model (Pasquill-Gifford spread)

    Every tree is evaluated against every cell, O(cells x trees).
    """

    def tree_contribution(self, effect, lat, lng, wind_speed, downwind_rad, stability):
        """
        Reduction contributed by one tree at the given cells

        Parameters:
        -----------
        effect : TreeEffect
            Tree source
        lat, lng : ndarray
            Cell coordinates (any matching shape)
        wind_speed : float
            Wind speed in km/h
        downwind_rad : float
            Bearing the wind blows TO (radians)
        stability : str
            Stability class (A-F)

        Returns:
        --------
        contribution : ndarray
            Reduction in µg/m³, same shape as lat
        """
        config = self.config

        dx, dy = planar_offset_m(effect.lat, effect.lng, lat, lng)
        distance = np.hypot(dx, dy)

        # Plume coordinates: positive downwind, crosswind unsigned
        sin_t, cos_t = np.sin(downwind_rad), np.cos(downwind_rad)
        downwind = dx * sin_t + dy * cos_t
        crosswind = np.abs(dx * cos_t - dy * sin_t)

        sigma_y, _ = dispersion_coefficients(stability, downwind)
        width = sigma_y + 1.0

        Q = effect.removal_rate * config['source_strength_scale']
        u = wind_speed * KMH_TO_MS

        plume = (Q / (2 * np.pi * u * width)) * \
                np.exp(-crosswind ** 2 / (2 * width ** 2)) * \
                np.exp(-distance / config['decay_length_m']) * \
                config['plume_scale']

        # Flat credit inside the canopy; nothing upwind
        near_field = config['near_field_credit'] * effect.removal_rate
        return np.where(distance <= effect.effective_radius, near_field,
                        np.where(downwind < 0, 0.0, plume))

    def accumulate_reduction(self, baseline, tree_effects, wind_speed, downwind_rad, stability):
        LAT, LNG = baseline.mesh()
        total = np.zeros(baseline.shape)

        for effect in tree_effects:
            total += self.tree_contribution(effect, LAT, LNG, wind_speed,
                                            downwind_rad, stability)
        return total

    def get_info(self):
        """Get Gaussian plume model statistics"""
        info = super().get_info()
        info.update({
            'description': 'Simplified 2-D Gaussian plume of tree deposition',
            'computational_cost': 'O(cells x trees)',
            'limitations': 'Steady-state, uniform wind, flat terrain'
        })
        return info
