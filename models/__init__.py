"""
Dispersion modeling approaches
Models that turn tree effects and wind into a projected pollution field
"""

from .base_model import BaseDispersionModel
from .gaussian_plume_model import GaussianPlumeModel
from .indexed_plume_model import IndexedGaussianPlumeModel

__all__ = [
    'BaseDispersionModel',
    'GaussianPlumeModel',
    'IndexedGaussianPlumeModel'
]

AVAILABLE_MODELS = {
    'gaussian_plume': {
        'name': 'Gaussian Plume (Exhaustive)',
        'class': GaussianPlumeModel,
        'description': 'Every tree against every cell - exact, O(cells x trees)'
    },
    'gaussian_plume_indexed': {
        'name': 'Gaussian Plume (Spatial Index)',
        'class': IndexedGaussianPlumeModel,
        'description': 'KD-tree limited to a cutoff radius - for dense city-wide plantings'
    }
}
