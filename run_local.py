"""
Local Development Server for FilmMate

Provides a JSON API for a browser front end: the reference catalog, exposure
calculation and per-user shot logs.

Usage:
    python run_local.py
    Then point the front end at http://localhost:5000/api
"""

import os
import sys
import logging
from typing import Optional

import yaml
from flask import Flask, request, jsonify
from flask_cors import CORS

# Add project root to path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from models import (
    Camera, Lens, FilmStock, LightingCondition, ExposureSettings, ShotLog
)
from calculators import (
    ExposureCalculator, InvalidInputError, NoValidCombinationError
)
from catalog import ReferenceCatalog
from database import DatabaseManager
from state import validate_username

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Configuration
CONFIG_PATH = 'config.yaml'
VERSION = '0.1.0'


def _resolve(data: dict, key: str, id_key: str, getter, factory):
    """
    Resolve one calculator input from a request body.

    The body may name a catalog entry ('camera_id') or embed the full record
    ('camera'). Returns None when neither is present.

    Raises:
        LookupError: If the id is not in the catalog
        ValueError: If an embedded record is malformed
    """
    if data.get(key):
        try:
            return factory(data[key])
        except KeyError as e:
            raise ValueError(f"Missing {key.replace('_', ' ')} field: {e.args[0]}") from e

    record_id = data.get(id_key)
    if not record_id:
        return None

    record = getter(record_id)
    if record is None:
        raise LookupError(f"Unknown {key.replace('_', ' ')}: {record_id}")
    return record


def create_app(db: DatabaseManager, catalog: ReferenceCatalog,
               calculator: Optional[ExposureCalculator] = None) -> Flask:
    """
    Build the Flask application.

    Args:
        db: Record store for usernames and shot logs
        catalog: Reference catalog for id lookups
        calculator: Exposure calculator (defaults to a new one)

    Returns:
        Configured Flask app
    """
    app = Flask(__name__)
    CORS(app)
    calculator = calculator or ExposureCalculator()

    @app.route('/api/health', methods=['GET'])
    def health_check():
        """Health check endpoint."""
        try:
            db.test_connection()
            database_status = 'ok'
        except RuntimeError as e:
            logger.warning(f"Database check failed: {e}")
            database_status = str(e)

        return jsonify({
            'status': 'ok',
            'service': 'filmmate-local',
            'version': VERSION,
            'database': database_status,
        })

    @app.route('/api/catalog', methods=['GET'])
    def get_catalog():
        """Return the full reference catalog."""
        return jsonify(catalog.to_dict())

    @app.route('/api/calculate', methods=['POST'])
    def calculate():
        """
        Calculate exposure settings.

        Request JSON (ids from the catalog, or embedded records):
            {
                "camera_id": "canon-ae1",
                "lens_id": "canon-fd-50mm-f1.8",
                "film_stock_id": "kodak-portra-400",
                "lighting_condition_id": "bright-sun"
            }

        Returns:
            JSON with recommended_settings, alternative_settings and a
            per-setting latitude report
        """
        try:
            data = request.get_json(silent=True) or {}

            camera = _resolve(data, 'camera', 'camera_id', catalog.get_camera, Camera.from_dict)
            lens = _resolve(data, 'lens', 'lens_id', catalog.get_lens, Lens.from_dict)
            film_stock = _resolve(data, 'film_stock', 'film_stock_id',
                                  catalog.get_film_stock, FilmStock.from_dict)
            lighting = _resolve(data, 'lighting_condition', 'lighting_condition_id',
                                catalog.get_lighting_condition, LightingCondition.from_dict)

            result = calculator.calculate_exposure_settings(camera, lens, film_stock, lighting)

            response = result.to_dict()
            response['latitude'] = [
                entry['within_latitude']
                for entry in calculator.latitude_report(result, film_stock)
            ]
            return jsonify(response)

        except InvalidInputError as e:
            return jsonify(e.to_dict()), 400
        except NoValidCombinationError as e:
            return jsonify(e.to_dict()), 422
        except LookupError as e:
            return jsonify({'error': str(e)}), 404
        except (ValueError, TypeError) as e:
            return jsonify({'error': str(e)}), 400
        except Exception as e:
            logger.error(f"Error in calculate: {e}", exc_info=True)
            return jsonify({'error': str(e)}), 500

    @app.route('/api/users', methods=['POST'])
    def create_user():
        """
        Register a username, or confirm an existing one.

        Request JSON:
            {"username": "ansel"}
        """
        try:
            data = request.get_json(silent=True) or {}
            username = (data.get('username') or '').strip()

            is_valid, message = validate_username(username)
            if not is_valid:
                return jsonify({'error': message}), 400

            created = db.get_or_create_username(username)
            return jsonify({'username': username, 'created': created}), 201 if created else 200

        except Exception as e:
            logger.error(f"Error in create_user: {e}", exc_info=True)
            return jsonify({'error': str(e)}), 500

    @app.route('/api/users/<username>', methods=['GET'])
    def get_user(username):
        """Check whether a username is registered."""
        return jsonify({'username': username, 'exists': db.username_exists(username)})

    @app.route('/api/users/<username>/shot-logs', methods=['GET'])
    def list_shot_logs(username):
        """List a user's shot logs, newest first."""
        try:
            if not db.username_exists(username):
                return jsonify({'error': f'User not found: {username}'}), 404

            shot_logs = db.load_shot_logs(username)
            return jsonify({
                'shot_logs': [log.to_dict() for log in shot_logs],
                'total': len(shot_logs),
            })

        except Exception as e:
            logger.error(f"Error in list_shot_logs: {e}", exc_info=True)
            return jsonify({'error': str(e)}), 500

    @app.route('/api/users/<username>/shot-logs', methods=['POST'])
    def create_shot_log(username):
        """
        Save a shot log.

        Request JSON: a shot log as returned by GET, without "id".
        """
        try:
            if not db.username_exists(username):
                return jsonify({'error': f'User not found: {username}'}), 404

            data = request.get_json(silent=True) or {}
            try:
                shot_log = ShotLog.from_dict(data)
            except KeyError as e:
                return jsonify({'error': f'Missing required shot log data: {e.args[0]}'}), 400

            shot_log.id = None
            db.save_shot_log(username, shot_log)
            return jsonify(shot_log.to_dict()), 201

        except (ValueError, TypeError) as e:
            return jsonify({'error': str(e)}), 400
        except Exception as e:
            logger.error(f"Error in create_shot_log: {e}", exc_info=True)
            return jsonify({'error': str(e)}), 500

    @app.route('/api/users/<username>/shot-logs/<log_id>', methods=['GET'])
    def get_shot_log(username, log_id):
        """Get one shot log."""
        shot_log = db.get_shot_log(username, log_id)
        if shot_log is None:
            return jsonify({'error': f'Shot log not found: {log_id}'}), 404
        return jsonify(shot_log.to_dict())

    @app.route('/api/users/<username>/shot-logs/<log_id>', methods=['PUT'])
    def update_shot_log(username, log_id):
        """
        Edit a shot log.

        Request JSON (all optional):
            {
                "selected_settings": {"aperture": 8, "shutter_speed": 250, "iso": 400},
                "notes": "Backlit portrait",
                "rating": 4
            }
        """
        try:
            shot_log = db.get_shot_log(username, log_id)
            if shot_log is None:
                return jsonify({'error': f'Shot log not found: {log_id}'}), 404

            data = request.get_json(silent=True) or {}

            if 'selected_settings' in data:
                shot_log.selected_settings = ExposureSettings.from_dict(data['selected_settings'])
            if 'notes' in data:
                shot_log.notes = ShotLog.clean_notes(data['notes'])
            if 'rating' in data:
                shot_log.rating = data['rating']

            db.update_shot_log(username, shot_log)
            return jsonify(shot_log.to_dict())

        except (ValueError, TypeError, KeyError) as e:
            return jsonify({'error': str(e)}), 400
        except Exception as e:
            logger.error(f"Error in update_shot_log: {e}", exc_info=True)
            return jsonify({'error': str(e)}), 500

    @app.route('/api/users/<username>/shot-logs/<log_id>', methods=['DELETE'])
    def delete_shot_log(username, log_id):
        """Delete a shot log."""
        if not db.delete_shot_log(username, log_id):
            return jsonify({'error': f'Shot log not found: {log_id}'}), 404
        return '', 204

    return app


def main():
    """Start the development server from config.yaml."""
    with open(CONFIG_PATH, 'r') as f:
        config = yaml.safe_load(f) or {}

    server_config = config.get('server', {})
    db = DatabaseManager.from_config(CONFIG_PATH)
    catalog = ReferenceCatalog.from_config(CONFIG_PATH)

    app = create_app(db, catalog)

    host = server_config.get('host', '127.0.0.1')
    port = int(server_config.get('port', 5000))
    logger.info(f"Starting FilmMate server on http://{host}:{port}")

    try:
        app.run(host=host, port=port, debug=bool(server_config.get('debug', False)))
    finally:
        db.close()


if __name__ == '__main__':
    main()
