from conftest import CROP_BODY, FIELD_BODY, create


def test_list_crops_empty_for_new_user(client, alice):
    _, headers = alice

    resp = client.get('/api/crops', headers=headers)

    assert resp.status_code == 200
    assert resp.get_json()['data'] == []


def test_create_crop_sets_owner_and_defaults(client, alice):
    user, headers = alice

    crop = create(client, '/api/crops', headers, CROP_BODY)

    assert crop['userId'] == user['id']
    assert crop['growthStage'] == 'seedling'
    assert crop['isActive'] is True
    assert crop['plantedDate'].startswith('2024-03-15T00:00:00')
    assert crop['createdAt']


def test_create_crop_ignores_supplied_owner(client, alice, bob):
    alice_user, headers = alice
    bob_user, _ = bob

    crop = create(client, '/api/crops', headers, {**CROP_BODY, 'userId': bob_user['id']})

    assert crop['userId'] == alice_user['id']


def test_create_crop_validation_errors(client, alice):
    _, headers = alice

    resp = client.post('/api/crops', json={**CROP_BODY, 'area': -1, 'plantedDate': 'soon'},
                       headers=headers)

    assert resp.status_code == 400
    fields = resp.get_json()['details']['fields']
    assert 'area' in fields
    assert 'plantedDate' in fields


def test_create_crop_requires_auth(client):
    resp = client.post('/api/crops', json=CROP_BODY)

    assert resp.status_code == 401


def test_get_crop_by_id(client, alice):
    _, headers = alice
    crop = create(client, '/api/crops', headers, CROP_BODY)

    resp = client.get(f"/api/crops/{crop['id']}", headers=headers)

    assert resp.status_code == 200
    assert resp.get_json()['data'] == crop


def test_get_missing_crop_is_404(client, alice):
    _, headers = alice

    resp = client.get('/api/crops/no-such-crop', headers=headers)

    assert resp.status_code == 404


def test_partial_update_keeps_other_fields(client, alice):
    _, headers = alice
    crop = create(client, '/api/crops', headers, CROP_BODY)

    resp = client.patch(f"/api/crops/{crop['id']}", json={'growthStage': 'flowering'},
                        headers=headers)

    assert resp.status_code == 200
    updated = resp.get_json()['data']
    assert updated['growthStage'] == 'flowering'
    assert updated['name'] == crop['name']
    assert updated['area'] == crop['area']


def test_update_cannot_reassign_owner(client, alice, bob):
    _, headers = alice
    bob_user, _ = bob
    crop = create(client, '/api/crops', headers, CROP_BODY)

    resp = client.put(f"/api/crops/{crop['id']}", json={'userId': bob_user['id']},
                      headers=headers)

    assert resp.status_code == 400
    assert client.get(f"/api/crops/{crop['id']}", headers=headers).get_json()['data']['userId'] \
        == crop['userId']


def test_update_missing_crop_is_404(client, alice):
    _, headers = alice

    resp = client.put('/api/crops/no-such-crop', json={'name': 'x'}, headers=headers)

    assert resp.status_code == 404


def test_delete_crop(client, alice):
    _, headers = alice
    crop = create(client, '/api/crops', headers, CROP_BODY)

    resp = client.delete(f"/api/crops/{crop['id']}", headers=headers)

    assert resp.status_code == 200
    assert client.get(f"/api/crops/{crop['id']}", headers=headers).status_code == 404
    assert client.delete(f"/api/crops/{crop['id']}", headers=headers).status_code == 404


def test_delete_crop_clears_field_reference(client, alice):
    _, headers = alice
    crop = create(client, '/api/crops', headers, CROP_BODY)
    field = create(client, '/api/fields', headers, {**FIELD_BODY, 'cropId': crop['id']})

    client.delete(f"/api/crops/{crop['id']}", headers=headers)

    resp = client.get(f"/api/fields/{field['id']}", headers=headers)
    assert resp.get_json()['data']['cropId'] is None


def test_create_crop_coerces_numeric_string_area(client, alice):
    _, headers = alice

    crop = create(client, '/api/crops', headers, {**CROP_BODY, 'area': '2.5'})

    assert crop['area'] == 2.5


def test_create_crop_non_numeric_area_names_field(client, alice):
    _, headers = alice

    resp = client.post('/api/crops', json={**CROP_BODY, 'area': 'not-a-number'}, headers=headers)

    assert resp.status_code == 400
    assert list(resp.get_json()['details']['fields']) == ['area']


def test_planted_date_with_offset_is_converted_to_utc(client, alice):
    _, headers = alice

    crop = create(client, '/api/crops', headers,
                  {**CROP_BODY, 'plantedDate': '2024-03-15T10:00:00+05:30'})

    assert crop['plantedDate'] == '2024-03-15T04:30:00+00:00'


def test_update_with_offset_is_converted_to_utc(client, alice):
    _, headers = alice
    crop = create(client, '/api/crops', headers, CROP_BODY)

    resp = client.patch(f"/api/crops/{crop['id']}",
                        json={'expectedHarvestDate': '2024-08-20T02:00:00-04:00'}, headers=headers)

    assert resp.get_json()['data']['expectedHarvestDate'] == '2024-08-20T06:00:00+00:00'
