"""Family member endpoints."""


def test_list_members_requires_family_id(client):
    response = client.get('/api/members')
    assert response.status_code == 400
    assert response.get_json() == {'error': 'family_id is required'}


def test_create_member(client, make_family):
    family = make_family()
    response = client.post('/api/members', json={
        'family_id': family.id, 'name': 'Sam', 'dietary_style': 'vegetarian',
        'allergies': ['nuts'], 'dislikes': ['mushrooms'], 'no_spicy': True,
    })
    assert response.status_code == 201
    data = response.get_json()
    assert data['family_id'] == family.id
    assert data['dietary_style'] == 'vegetarian'
    assert data['allergies'] == ['nuts']
    assert data['dislikes'] == ['mushrooms']
    assert data['no_spicy'] is True


def test_create_member_for_missing_family(client):
    response = client.post('/api/members', json={
        'family_id': 42, 'name': 'Ghost', 'dietary_style': 'omnivore'})
    assert response.status_code == 404
    assert response.get_json()['error'] == 'Family not found'


def test_create_member_requires_dietary_style(client, make_family):
    family = make_family()
    response = client.post('/api/members', json={'family_id': family.id, 'name': 'Sam'})
    assert response.status_code == 400
    fields = [d['field'] for d in response.get_json()['details']]
    assert 'dietary_style' in fields


def test_update_member_partial(client, make_family, make_member):
    member = make_member(make_family(), name='Sam', allergies=['eggs'])
    response = client.put(f'/api/members/{member.id}', json={'dietary_style': 'vegan'})
    assert response.status_code == 200
    data = response.get_json()
    assert data['dietary_style'] == 'vegan'
    assert data['name'] == 'Sam'
    assert data['allergies'] == ['eggs']


def test_update_member_empty_body(client, make_family, make_member):
    member = make_member(make_family())
    response = client.put(f'/api/members/{member.id}', json={})
    assert response.status_code == 400
    assert response.get_json() == {'error': 'No fields to update'}


def test_deleted_member_disappears(client, make_family, make_member):
    family = make_family()
    keep = make_member(family, name='Keep')
    gone = make_member(family, name='Gone')
    assert client.delete(f'/api/members/{gone.id}').status_code == 204
    members = client.get(f'/api/members?family_id={family.id}').get_json()
    assert [m['id'] for m in members] == [keep.id]
    assert client.get(f'/api/members/{gone.id}').status_code == 404
