"""
Model Manager - Factory for dispersion models
"""
from models import AVAILABLE_MODELS

DEFAULT_MODEL = 'gaussian_plume'


class ModelManager:
    """Creates dispersion models and describes the available ones"""

    def create_model(self, model_type, config=None):
        """
        Create a dispersion model instance

        Parameters:
        -----------
        model_type : str
            Model identifier (gaussian_plume, gaussian_plume_indexed)
        config : dict, optional
            Model configuration overrides

        Returns:
        --------
        model : BaseDispersionModel
            New model instance
        """
        if model_type not in AVAILABLE_MODELS:
            raise ValueError(f"Unknown model type: {model_type}. Available: {list(AVAILABLE_MODELS.keys())}")

        model_class = AVAILABLE_MODELS[model_type]['class']
        return model_class(config)

    def get_model_info(self, model_type):
        """Get information about a model, without the class object"""
        if model_type not in AVAILABLE_MODELS:
            return None

        info = {k: v for k, v in AVAILABLE_MODELS[model_type].items() if k != 'class'}
        info['type'] = model_type
        info['runtime_info'] = AVAILABLE_MODELS[model_type]['class']().get_info()
        return info

    def list_available_models(self):
        """List all available models"""
        return {
            model_type: {
                'name': info['name'],
                'description': info['description']
            }
            for model_type, info in AVAILABLE_MODELS.items()
        }


# Shared instance; holds no per-run state
model_manager = ModelManager()
