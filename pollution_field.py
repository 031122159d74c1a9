"""
Rectangular pollution field over a city bounding box
"""
from dataclasses import dataclass
from typing import Optional
import numpy as np


@dataclass
class PollutionField:
    """
    Row-major grid of PM concentrations

    Row i is latitude lats[i] (south to north), column j is longitude
    lngs[j] (west to east). Arrays have shape (ny, nx).
    """
    lats: np.ndarray
    lngs: np.ndarray
    pm25: np.ndarray
    pm10: np.ndarray
    reduction: Optional[np.ndarray] = None

    @property
    def shape(self):
        return self.pm25.shape

    @property
    def cell_count(self):
        return int(self.pm25.size)

    def mesh(self):
        """Cell coordinates as (LAT, LNG) arrays of shape (ny, nx)"""
        LNG, LAT = np.meshgrid(self.lngs, self.lats)
        return LAT, LNG

    def copy(self):
        return PollutionField(
            lats=self.lats.copy(),
            lngs=self.lngs.copy(),
            pm25=self.pm25.copy(),
            pm10=self.pm10.copy(),
            reduction=None if self.reduction is None else self.reduction.copy(),
        )

    def mean_pm25(self):
        if self.cell_count == 0:
            return 0.0
        return float(self.pm25.mean())

    def cell(self, i, j):
        """Single grid cell as a dict"""
        cell = {
            'lat': float(self.lats[i]),
            'lng': float(self.lngs[j]),
            'pm25': float(self.pm25[i, j]),
            'pm10': float(self.pm10[i, j]),
        }
        if self.reduction is not None:
            cell['reduction'] = float(self.reduction[i, j])
        return cell

    def to_rows(self):
        """Nested list of cell dicts for JSON export (rows south to north)"""
        ny, nx = self.shape
        return [[self.cell(i, j) for j in range(nx)] for i in range(ny)]

    def to_dict(self):
        return {
            'shape': list(self.shape),
            'lats': self.lats.tolist(),
            'lngs': self.lngs.tolist(),
            'pm25': self.pm25.tolist(),
            'pm10': self.pm10.tolist(),
            'reduction': None if self.reduction is None else self.reduction.tolist(),
        }
