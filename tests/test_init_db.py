from agridrone.init_db import SAMPLE_PASSWORD, SAMPLE_USERNAME, seed_sample_data
from agridrone.models import Field, PesticideApplication, PlantHealthRecord, User
from agridrone.routes.dashboard import compute_stats


def test_seed_creates_demo_farmer_that_can_log_in(client):
    seed_sample_data()

    resp = client.post('/api/auth/login', json={
        'username': SAMPLE_USERNAME,
        'password': SAMPLE_PASSWORD
    })

    assert resp.status_code == 200
    assert resp.get_json()['user']['fullName'] == 'Rajesh Kumar'


def test_seed_is_idempotent(app):
    first = seed_sample_data()
    second = seed_sample_data()

    assert first.id == second.id
    assert User.query.count() == 1
    assert Field.query.count() == 1
    assert PlantHealthRecord.query.count() == 1
    assert PesticideApplication.query.count() == 1


def test_seeded_dashboard_stats(app):
    user = seed_sample_data()

    assert compute_stats(user.id) == {
        'totalFields': 1,
        'healthyPlants': 87,
        'infectionRate': 3.2,
        'pesticideSaved': 3
    }
