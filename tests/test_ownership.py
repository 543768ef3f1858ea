"""Cross-user access: every owned resource is invisible or forbidden to other users."""

from conftest import CROP_BODY, DRONE_BODY, FIELD_BODY, application_body, create, \
    health_record_body


def test_other_users_crop_is_forbidden_not_missing(client, alice, bob):
    _, alice_headers = alice
    _, bob_headers = bob
    crop = create(client, '/api/crops', alice_headers, CROP_BODY)
    url = f"/api/crops/{crop['id']}"

    assert client.get(url, headers=bob_headers).status_code == 403
    assert client.put(url, json={'name': 'Mine now'}, headers=bob_headers).status_code == 403
    assert client.delete(url, headers=bob_headers).status_code == 403

    unchanged = client.get(url, headers=alice_headers).get_json()['data']
    assert unchanged['name'] == CROP_BODY['name']


def test_forbidden_response_leaks_no_data(client, alice, bob):
    _, alice_headers = alice
    _, bob_headers = bob
    crop = create(client, '/api/crops', alice_headers, CROP_BODY)

    body = client.get(f"/api/crops/{crop['id']}", headers=bob_headers).get_json()

    assert body['success'] is False
    assert 'data' not in body
    assert CROP_BODY['name'] not in str(body)


def test_lists_are_scoped_to_caller(client, alice, bob):
    _, alice_headers = alice
    _, bob_headers = bob
    create(client, '/api/crops', alice_headers, CROP_BODY)
    create(client, '/api/fields', alice_headers, FIELD_BODY)
    create(client, '/api/drones', alice_headers, DRONE_BODY)

    for path in ('/api/crops', '/api/fields', '/api/drones', '/api/health-records',
                 '/api/pesticide-applications'):
        assert client.get(path, headers=bob_headers).get_json()['data'] == [], path


def test_other_users_drone_cannot_be_updated(client, alice, bob):
    _, alice_headers = alice
    _, bob_headers = bob
    drone = create(client, '/api/drones', alice_headers, DRONE_BODY)

    resp = client.patch(f"/api/drones/{drone['id']}", json={'status': 'disconnected'},
                        headers=bob_headers)

    assert resp.status_code == 403
    current = client.get(f"/api/drones/{drone['id']}", headers=alice_headers).get_json()['data']
    assert current['status'] == 'connected'


def test_health_record_on_other_users_field_is_forbidden(client, alice, bob):
    _, alice_headers = alice
    _, bob_headers = bob
    field = create(client, '/api/fields', alice_headers, FIELD_BODY)

    resp = client.post('/api/health-records', json=health_record_body(field['id']),
                       headers=bob_headers)

    assert resp.status_code == 403


def test_other_users_health_record_is_forbidden(client, alice, bob):
    _, alice_headers = alice
    _, bob_headers = bob
    field = create(client, '/api/fields', alice_headers, FIELD_BODY)
    record = create(client, '/api/health-records', alice_headers, health_record_body(field['id']))

    assert client.get(f"/api/health-records/{record['id']}", headers=bob_headers).status_code \
        == 403
    assert client.get(f"/api/health-records?fieldId={field['id']}", headers=bob_headers) \
        .status_code == 403


def test_other_users_pesticide_application_cannot_be_updated(client, alice, bob):
    _, alice_headers = alice
    _, bob_headers = bob
    field = create(client, '/api/fields', alice_headers, FIELD_BODY)
    application = create(client, '/api/pesticide-applications', alice_headers,
                         application_body(field['id']))

    resp = client.patch(f"/api/pesticide-applications/{application['id']}",
                        json={'status': 'applied'}, headers=bob_headers)

    assert resp.status_code == 403
    current = client.get(f"/api/pesticide-applications/{application['id']}",
                         headers=alice_headers).get_json()['data']
    assert current['status'] == 'recommended'


def test_field_cannot_reference_other_users_crop(client, alice, bob):
    _, alice_headers = alice
    _, bob_headers = bob
    crop = create(client, '/api/crops', alice_headers, CROP_BODY)

    resp = client.post('/api/fields', json={**FIELD_BODY, 'cropId': crop['id']},
                       headers=bob_headers)

    assert resp.status_code == 403


def test_health_record_cannot_reference_other_users_drone(client, alice, bob):
    _, alice_headers = alice
    _, bob_headers = bob
    drone = create(client, '/api/drones', alice_headers, DRONE_BODY)
    field = create(client, '/api/fields', bob_headers, FIELD_BODY)

    resp = client.post('/api/health-records',
                       json=health_record_body(field['id'], droneId=drone['id']),
                       headers=bob_headers)

    assert resp.status_code == 403


def test_missing_resource_is_404_for_everyone(client, alice):
    _, headers = alice

    for path in ('/api/crops/nope', '/api/fields/nope', '/api/drones/nope',
                 '/api/health-records/nope', '/api/pesticide-applications/nope'):
        assert client.get(path, headers=headers).status_code == 404, path
