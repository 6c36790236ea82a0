"""
API Tests
Tests: catalog, calculation, users and shot log endpoints via the Flask test client
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from run_local import create_app
from database import DatabaseManager
from catalog import ReferenceCatalog

CALCULATE_REQUEST = {
    'camera_id': 'canon-ae1',
    'lens_id': 'canon-fd-50mm-f1.8',
    'film_stock_id': 'fujifilm-c200',
    'lighting_condition_id': 'bright-sun',
}


@pytest.fixture
def db():
    test_db = DatabaseManager(connection_string=':memory:')
    yield test_db
    test_db.close()


@pytest.fixture
def client(db):
    app = create_app(db, ReferenceCatalog.from_yaml())
    app.config['TESTING'] = True
    return app.test_client()


def _saved_log(client, username='ansel'):
    client.post('/api/users', json={'username': username})
    catalog = client.get('/api/catalog').get_json()
    result = client.post('/api/calculate', json=CALCULATE_REQUEST).get_json()

    body = {
        'camera': catalog['cameras'][0],
        'lens': catalog['lenses'][0],
        'film_stock': catalog['film_stocks'][0],
        'lighting_condition': catalog['lighting_conditions'][0],
        'recommended_settings': result['recommended_settings'],
        'alternative_settings': result['alternative_settings'],
        'timestamp': '2025-06-01T12:00:00',
        'notes': 'Lighthouse',
    }
    response = client.post(f'/api/users/{username}/shot-logs', json=body)
    assert response.status_code == 201
    return response.get_json()


def test_health(client):
    data = client.get('/api/health').get_json()

    assert data['status'] == 'ok'
    assert data['database'] == 'ok'


def test_catalog(client):
    data = client.get('/api/catalog').get_json()

    assert data['cameras'][0]['id'] == 'canon-ae1'
    assert len(data['lighting_conditions']) == 7


def test_calculate_by_id(client):
    response = client.post('/api/calculate', json=CALCULATE_REQUEST)

    assert response.status_code == 200
    data = response.get_json()
    assert data['recommended_settings']['iso'] == 200
    assert len(data['alternative_settings']) <= 3
    assert len(data['latitude']) == 1 + len(data['alternative_settings'])


def test_calculate_with_embedded_records(client):
    response = client.post('/api/calculate', json={
        'camera': {'id': 'c', 'name': 'C', 'available_shutter_speeds': [200]},
        'lens': {'id': 'l', 'name': 'L', 'available_apertures': [16]},
        'film_stock': {'id': 'f', 'name': 'F', 'iso': 200, 'latitude': {'over': 2, 'under': 1}},
        'lighting_condition': {'id': 's', 'name': 'S', 'description': '', 'ev_value': 15},
    })

    assert response.status_code == 200
    data = response.get_json()
    assert data['recommended_settings'] == {
        'aperture': 16, 'shutter_speed': 200, 'iso': 200, 'exposure_delta': 1.64
    }
    assert data['alternative_settings'] == []
    assert data['latitude'] == [True]


def test_calculate_missing_input(client):
    request = dict(CALCULATE_REQUEST)
    del request['lens_id']

    response = client.post('/api/calculate', json=request)

    assert response.status_code == 400
    assert response.get_json()['error_type'] == 'InvalidInputError'


def test_calculate_no_valid_combination(client):
    request = dict(CALCULATE_REQUEST)
    del request['lighting_condition_id']
    request['lighting_condition'] = {'id': 'n', 'name': 'Night', 'description': '', 'ev_value': -6}

    response = client.post('/api/calculate', json=request)

    assert response.status_code == 422
    assert response.get_json()['error_type'] == 'NoValidCombinationError'


def test_calculate_unknown_id(client):
    response = client.post('/api/calculate', json=dict(CALCULATE_REQUEST, camera_id='leica-m6'))

    assert response.status_code == 404


def test_calculate_malformed_record(client):
    request = dict(CALCULATE_REQUEST)
    request['film_stock'] = {'id': 'f', 'name': 'F'}

    response = client.post('/api/calculate', json=request)

    assert response.status_code == 400


def test_users(client):
    assert client.post('/api/users', json={'username': 'ab'}).status_code == 400

    created = client.post('/api/users', json={'username': 'ansel'})
    assert created.status_code == 201
    assert created.get_json()['created'] is True

    again = client.post('/api/users', json={'username': 'ansel'})
    assert again.status_code == 200
    assert again.get_json()['created'] is False

    assert client.get('/api/users/ansel').get_json()['exists'] is True
    assert client.get('/api/users/nobody').get_json()['exists'] is False


def test_shot_logs_for_unknown_user(client):
    assert client.get('/api/users/nobody/shot-logs').status_code == 404
    assert client.post('/api/users/nobody/shot-logs', json={}).status_code == 404


def test_create_and_list_shot_logs(client):
    saved = _saved_log(client)

    assert saved['id']
    assert saved['original_settings'] == saved['recommended_settings']

    listing = client.get('/api/users/ansel/shot-logs').get_json()
    assert listing['total'] == 1
    assert listing['shot_logs'][0]['id'] == saved['id']
    assert listing['shot_logs'][0]['notes'] == 'Lighthouse'


def test_create_shot_log_missing_data(client):
    client.post('/api/users', json={'username': 'ansel'})

    response = client.post('/api/users/ansel/shot-logs', json={'notes': 'no equipment'})

    assert response.status_code == 400


def test_update_shot_log(client):
    saved = _saved_log(client)
    url = f"/api/users/ansel/shot-logs/{saved['id']}"

    response = client.put(url, json={
        'selected_settings': {'aperture': 8, 'shutter_speed': 250, 'iso': 200},
        'notes': '  Stopped down  ',
        'rating': 4,
    })

    assert response.status_code == 200
    updated = client.get(url).get_json()
    assert updated['selected_settings']['aperture'] == 8
    assert updated['original_settings'] == saved['original_settings']
    assert updated['notes'] == 'Stopped down'
    assert updated['rating'] == 4

    assert client.put(url, json={'rating': 9}).status_code == 400
    assert client.get(url).get_json()['rating'] == 4


def test_shot_logs_are_private(client):
    saved = _saved_log(client, 'ansel')
    client.post('/api/users', json={'username': 'dorothea'})

    url = f"/api/users/dorothea/shot-logs/{saved['id']}"
    assert client.get(url).status_code == 404
    assert client.delete(url).status_code == 404
    assert client.get('/api/users/dorothea/shot-logs').get_json()['total'] == 0


def test_delete_shot_log(client):
    saved = _saved_log(client)
    url = f"/api/users/ansel/shot-logs/{saved['id']}"

    assert client.delete(url).status_code == 204
    assert client.get(url).status_code == 404
    assert client.delete(url).status_code == 404


def test_browser_timestamp_is_accepted(client):
    client.post('/api/users', json={'username': 'ansel'})
    catalog = client.get('/api/catalog').get_json()
    result = client.post('/api/calculate', json=CALCULATE_REQUEST).get_json()

    response = client.post('/api/users/ansel/shot-logs', json={
        'camera': catalog['cameras'][0],
        'lens': catalog['lenses'][0],
        'film_stock': catalog['film_stocks'][0],
        'lighting_condition': catalog['lighting_conditions'][0],
        'recommended_settings': result['recommended_settings'],
        'timestamp': '2025-06-01T12:00:00.000Z',
    })

    assert response.status_code == 201
    timestamp = response.get_json()['timestamp']
    assert not timestamp.endswith('Z') and '+' not in timestamp


def test_invalid_timestamp_is_rejected(client):
    saved = _saved_log(client)
    body = dict(saved, id=None, timestamp='not a date')

    assert client.post('/api/users/ansel/shot-logs', json=body).status_code == 400
