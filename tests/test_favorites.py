"""Favorite chefs, meals, sides and websites."""

import pytest


@pytest.mark.parametrize('kind', ['chefs', 'meals', 'sides', 'websites'])
def test_create_list_delete(client, make_family, kind):
    family = make_family()
    for name in ('Zucchini Person', ' Alpha '):
        response = client.post(f'/api/favorites/{kind}', json={'family_id': family.id, 'name': name})
        assert response.status_code == 201

    listed = client.get(f'/api/favorites/{kind}?family_id={family.id}').get_json()
    assert [f['name'] for f in listed] == ['Alpha', 'Zucchini Person']

    assert client.delete(f"/api/favorites/{kind}/{listed[0]['id']}").status_code == 204
    listed = client.get(f'/api/favorites/{kind}?family_id={family.id}').get_json()
    assert [f['name'] for f in listed] == ['Zucchini Person']


def test_list_requires_family_id(client):
    response = client.get('/api/favorites/chefs')
    assert response.status_code == 400
    assert response.get_json() == {'error': 'family_id is required'}


def test_create_requires_family(client, make_family):
    response = client.post('/api/favorites/websites', json={'name': 'Serious Eats'})
    assert response.get_json() == {'error': 'family_id is required'}

    response = client.post('/api/favorites/websites', json={'family_id': 999, 'name': 'Serious Eats'})
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Family not found'}

    family = make_family()
    response = client.post('/api/favorites/chefs', json={'family_id': family.id, 'name': '  '})
    assert response.status_code == 400
    assert response.get_json()['details'] == [{'field': 'name', 'message': 'Name is required'}]


def test_chef_cuisines_and_website_url(client, make_family):
    family = make_family()
    chef = client.post('/api/favorites/chefs', json={
        'family_id': family.id, 'name': 'Ina Garten', 'cuisines': ['american', 'french']}).get_json()
    assert chef['cuisines'] == ['american', 'french']
    site = client.post('/api/favorites/websites', json={
        'family_id': family.id, 'name': 'Budget Bytes', 'url': 'https://www.budgetbytes.com'}).get_json()
    assert site['url'] == 'https://www.budgetbytes.com'


def test_meal_validation_and_update(client, make_family, make_recipe):
    family = make_family()
    recipe = make_recipe('Lasagna')
    response = client.post('/api/favorites/meals', json={
        'family_id': family.id, 'name': 'Lasagna', 'frequency_preference': 'daily'})
    assert response.status_code == 400
    assert response.get_json()['details'][0]['field'] == 'frequency_preference'

    meal = client.post('/api/favorites/meals', json={
        'family_id': family.id, 'name': 'Lasagna', 'recipe_id': recipe.id,
        'difficulty': 'medium', 'total_time_minutes': 90, 'frequency_preference': 'monthly',
    }).get_json()
    assert meal['recipe_id'] == recipe.id

    response = client.put(f"/api/favorites/meals/{meal['id']}", json={'frequency_preference': 'weekly'})
    assert response.status_code == 200
    assert response.get_json()['frequency_preference'] == 'weekly'
    assert response.get_json()['name'] == 'Lasagna'

    response = client.put(f"/api/favorites/meals/{meal['id']}", json={})
    assert response.get_json() == {'error': 'No fields to update'}


def test_side_update(client, make_family):
    family = make_family()
    side = client.post('/api/favorites/sides', json={
        'family_id': family.id, 'name': 'Elote', 'category': 'veggie',
        'pairs_well_with': ['mexican']}).get_json()
    assert side['pairs_well_with'] == ['mexican']

    response = client.put(f"/api/favorites/sides/{side['id']}", json={'category': 'soup'})
    assert response.status_code == 400
    response = client.put(f"/api/favorites/sides/{side['id']}", json={'notes': 'extra lime'})
    assert response.get_json()['notes'] == 'extra lime'


def test_chefs_are_not_editable(client, make_family):
    family = make_family()
    chef = client.post('/api/favorites/chefs', json={'family_id': family.id, 'name': 'Julia'}).get_json()
    assert client.put(f"/api/favorites/chefs/{chef['id']}", json={'name': 'Julia Child'}).status_code == 405


def test_delete_missing(client):
    response = client.delete('/api/favorites/meals/42')
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Favorite meal not found'}
