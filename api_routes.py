"""
Flask API routes for the tree impact simulation
"""
from flask import jsonify, request
from data_models import StationReading, Tree, WindSample
from simulation import SimulationError, run_simulation
from simulation_config import CITIES, DEFAULT_CITY, get_current_season
from species_data import calculate_coverage_area, calculate_pm25_removal
from summary import get_aqi_category
from visualization import generate_comparison_data, render_field_map


def _parse_simulation_request(data, wind_fetcher, station_fetcher):
    """Turn a JSON body into run_simulation arguments"""
    city = data.get('city', DEFAULT_CITY)
    season = data.get('season') or get_current_season()

    trees = [Tree.from_dict(t) for t in data.get('trees', [])]

    # Caller-side fallbacks: the core never fetches data itself
    if data.get('wind') is not None:
        wind = WindSample.from_dict(data['wind'])
    else:
        wind = wind_fetcher.fetch_wind_data(city, season)

    if data.get('stations') is not None:
        stations = [StationReading.from_dict(s) for s in data['stations']]
    else:
        stations = station_fetcher.fetch_city_data(city, season)

    return {
        'trees': trees,
        'city_id': city,
        'station_data': stations,
        'wind': wind,
        'season': season,
        'config': data.get('config'),
        'model_type': data.get('model_type', 'gaussian_plume'),
        'is_daytime': data.get('is_daytime'),
    }


def register_routes(app, wind_fetcher, station_fetcher, catalog):
    """Register all API routes"""

    @app.route('/api/cities', methods=['GET'])
    def list_cities():
        """Available cities with bounds, density and currency"""
        return jsonify({
            'success': True,
            'cities': {city_id: dict(info, id=city_id) for city_id, info in CITIES.items()}
        })

    @app.route('/api/species', methods=['GET'])
    def list_species():
        """All tree species in the catalog"""
        return jsonify({
            'success': True,
            'species': [species.to_dict() for species in catalog.get_all()]
        })

    @app.route('/api/species/<species_id>', methods=['GET'])
    def get_species(species_id):
        """Single species parameters"""
        species = catalog.get(species_id)
        if species is None:
            return jsonify({
                'success': False,
                'error': f'Unknown species: {species_id}'
            }), 404
        return jsonify({'success': True, 'species': species.to_dict()})

    @app.route('/api/species/<species_id>/estimate', methods=['GET'])
    def estimate_species(species_id):
        """Daily PM2.5 removal and downwind coverage for a group of trees"""
        if catalog.get(species_id) is None:
            return jsonify({
                'success': False,
                'error': f'Unknown species: {species_id}'
            }), 404

        count = request.args.get('count', 1, type=int)
        season = request.args.get('season') or get_current_season()
        wind_speed = request.args.get('wind_speed', 10.0, type=float)

        return jsonify({
            'success': True,
            'species_id': species_id,
            'count': count,
            'season': season,
            'pm25_removal': calculate_pm25_removal(species_id, count, season, catalog),
            'coverage_area_m2': calculate_coverage_area(species_id, wind_speed, catalog) * count
        })

    @app.route('/api/wind', methods=['GET'])
    def get_wind():
        """Current wind for a city (typical pattern if the API is down)"""
        city = request.args.get('city', DEFAULT_CITY)
        season = request.args.get('season')
        wind = wind_fetcher.fetch_wind_data(city, season)
        return jsonify({'success': True, 'city': city, 'wind': wind.to_dict()})

    @app.route('/api/stations', methods=['GET'])
    def get_stations():
        """Station readings for a city (simulated if the API is down)"""
        city = request.args.get('city', DEFAULT_CITY)
        season = request.args.get('season')
        readings = station_fetcher.fetch_city_data(city, season)
        return jsonify({
            'success': True,
            'city': city,
            'stations': [
                dict(r.to_dict(), category=get_aqi_category(r.aqi if r.aqi is not None else r.pm25))
                for r in readings
            ]
        })

    @app.route('/api/simulate', methods=['POST'])
    def simulate():
        """Run a simulation for the posted trees"""
        data = request.get_json(silent=True) or {}

        try:
            params = _parse_simulation_request(data, wind_fetcher, station_fetcher)
        except (KeyError, TypeError, ValueError) as e:
            return jsonify({'success': False, 'error': f'Invalid request: {e}'}), 400

        progress = []
        try:
            result = run_simulation(
                catalog=catalog,
                progress_callback=lambda percent, message: progress.append(
                    {'percent': percent, 'message': message}),
                **params
            )
        except SimulationError as e:
            return jsonify({
                'success': False,
                'error': str(e),
                'stage': e.stage,
                'progress': progress
            }), 400

        response = {
            'success': True,
            'progress': progress,
            'result': result.to_dict(include_fields=bool(data.get('include_fields', False)))
        }
        if data.get('render'):
            try:
                response['image'] = render_field_map(result, data.get('render_field', 'projected'))
            except ValueError as e:
                return jsonify({'success': False, 'error': str(e)}), 400
        if data.get('heatmap'):
            response['heatmap'] = generate_comparison_data(result)

        return jsonify(response)
