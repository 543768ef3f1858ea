from datetime import datetime, timedelta, timezone

import pytest

from agridrone.app import create_app
from agridrone.extensions import db


UTC = timezone.utc


class ClockStub:
    """Mutable clock so tests can move token expiry checks forward."""

    def __init__(self, initial=None):
        self._now = initial or datetime.now(UTC)

    def set(self, value):
        self._now = value

    def advance(self, **delta_kwargs):
        self._now += timedelta(**delta_kwargs)

    def __call__(self):
        return self._now


@pytest.fixture
def clock():
    return ClockStub()


@pytest.fixture
def app(clock):
    """Application wired to an isolated in-memory SQLite database."""
    app = create_app('testing', clock=clock)

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def signup(client, username='farmer', email=None, password='secret-pass', full_name='Test Farmer'):
    resp = client.post('/api/auth/signup', json={
        'username': username,
        'email': email or f'{username}@example.com',
        'password': password,
        'fullName': full_name
    })
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


def bearer(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def alice(client):
    """Signed-up user; returns (user dict, auth headers)."""
    body = signup(client, username='alice')
    return body['user'], bearer(body['token'])


@pytest.fixture
def bob(client):
    body = signup(client, username='bob')
    return body['user'], bearer(body['token'])


CROP_BODY = {
    'name': 'North Paddy',
    'type': 'rice',
    'plantedDate': '2024-03-15',
    'expectedHarvestDate': '2024-08-20',
    'area': 2.5
}

FIELD_BODY = {
    'name': 'Zone A',
    'latitude': 30.5795,
    'longitude': 75.9249,
    'area': 1.2
}

DRONE_BODY = {
    'droneName': 'Drone Alpha-1',
    'connectionType': 'wifi'
}


def create(client, path, headers, body):
    resp = client.post(path, json=body, headers=headers)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()['data']


def health_record_body(field_id, **overrides):
    body = {
        'fieldId': field_id,
        'healthScore': 94,
        'infectionRate': 3.2,
        'severity': 'low',
        'detectionConfidence': 85
    }
    body.update(overrides)
    return body


def application_body(field_id, **overrides):
    body = {
        'fieldId': field_id,
        'pesticideType': 'Neem oil spray',
        'volumePerHectare': 2.5,
        'totalVolume': 3.0,
        'confidence': 85
    }
    body.update(overrides)
    return body
