from agridrone.models import ContactMessage


def test_contact_message_stored_without_auth(client):
    resp = client.post('/api/contact', json={
        'name': 'Priya',
        'email': 'Priya@Example.com',
        'message': 'Do you cover Haryana?'
    })

    assert resp.status_code == 201
    assert resp.get_json()['message'] == 'Message sent successfully'
    stored = ContactMessage.query.one()
    assert stored.email == 'priya@example.com'
    assert stored.status == 'new'


def test_contact_message_requires_all_fields(client):
    resp = client.post('/api/contact', json={'name': 'Priya', 'message': '  '})

    assert resp.status_code == 400
    fields = resp.get_json()['details']['fields']
    assert 'email' in fields
    assert 'message' in fields
    assert ContactMessage.query.count() == 0
