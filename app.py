from flask import Flask, jsonify
from api_routes import register_routes
from model_routes import register_model_routes
from species_data import default_catalog
from station_api import AQIStationFetcher
from wind_api import WindDataFetcher


def create_app(wind_fetcher=None, station_fetcher=None, catalog=None):
    """
    Build the Flask application

    Parameters:
    -----------
    wind_fetcher : WindDataFetcher, optional
        Wind collaborator (replace in tests to avoid network access)
    station_fetcher : AQIStationFetcher, optional
        Station collaborator
    catalog : SpeciesCatalog, optional
        Species lookup table
    """
    app = Flask(__name__)

    register_routes(
        app,
        wind_fetcher or WindDataFetcher(),
        station_fetcher or AQIStationFetcher(),
        default_catalog if catalog is None else catalog
    )
    register_model_routes(app)

    @app.route('/api/health', methods=['GET'])
    def health():
        return jsonify({'success': True, 'status': 'ok'})

    return app


app = create_app()

if __name__ == '__main__':
    app.run(debug=True, port=5000)
