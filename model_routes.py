"""
API routes for dispersion model discovery
"""
from flask import jsonify
from model_manager import model_manager, DEFAULT_MODEL


def register_model_routes(app):
    """Register model management API routes"""

    @app.route('/api/models/list', methods=['GET'])
    def list_models():
        """Get list of available dispersion models"""
        models_list = [model_manager.get_model_info(model_type)
                       for model_type in model_manager.list_available_models()]

        return jsonify({
            'success': True,
            'models': models_list,
            'default_model': DEFAULT_MODEL
        })

    @app.route('/api/models/info/<model_type>', methods=['GET'])
    def get_model_info(model_type):
        """Get detailed information about a specific model"""
        info = model_manager.get_model_info(model_type)

        if info is None:
            return jsonify({
                'success': False,
                'error': f'Unknown model type: {model_type}'
            }), 404

        return jsonify({
            'success': True,
            'model_info': info
        })
