"""Grocery list aggregation and the grocery routes."""

import json

import pytest

from models import db, MealPlan, MealPlanItem, SideLibraryEntry
from services.generator import LEFTOVER_LUNCH_NOTE
from services.grocery import aggregate_grocery_items


@pytest.fixture
def plan(make_family, catalog):
    """Bolognese and curry dinners, a leftover lunch and a library side."""
    recipes = {r.name: r for r in catalog}
    family = make_family(serving_multiplier=2.0)
    side = SideLibraryEntry(name='Lemon Rice', category='grain', weight='medium',
                            ingredients=[{'name': 'rice', 'quantity': 1, 'unit': 'cup', 'category': 'grains'},
                                         '1 lemon'])
    db.session.add(side)
    db.session.flush()

    plan = MealPlan(family_id=family.id, week_start='2025-03-03', variant=0)
    bolognese = MealPlanItem(day='monday', recipe=recipes['Spaghetti Bolognese'], meal_type='main')
    curry = MealPlanItem(day='tuesday', recipe=recipes['Vegetable Curry'], meal_type='main')
    lunch = MealPlanItem(day='tuesday', recipe=recipes['Salmon Rice Bowl'], meal_type='lunch',
                         notes=LEFTOVER_LUNCH_NOTE)
    side_item = MealPlanItem(day='tuesday', meal_type='side', is_custom=True,
                             notes=json.dumps({'side_library_id': side.id, 'side_name': side.name}))
    side_item.parent = curry
    custom = MealPlanItem(day='monday', meal_type='side', is_custom=True,
                          notes=json.dumps({'custom_side': True, 'side_name': 'Crusty bread'}))
    custom.parent = bolognese
    plan.items.extend([bolognese, curry, lunch, side_item, custom])
    db.session.add(plan)
    db.session.commit()
    return plan


def by_name(items):
    return {i['name']: i for i in items}


def test_aggregate_consolidates_and_scales(plan):
    items = by_name(aggregate_grocery_items(plan))
    assert items['Onion'] == {'name': 'Onion', 'quantity': 4, 'unit': 'whole', 'category': 'produce'}
    assert items['Ground beef']['quantity'] == 2
    assert items['Chickpeas']['quantity'] == 2
    assert items['Rice']['quantity'] == 2
    assert 'Lemon' in items
    # leftover lunch is cooked with the previous dinner
    assert 'Salmon' not in items


def test_aggregate_sorted_by_category_then_name(plan):
    items = aggregate_grocery_items(plan, multiplier=1)
    keys = [(i['category'], i['name']) for i in items]
    assert keys == sorted(keys)
    assert by_name(items)['Onion']['quantity'] == 2


def test_get_list_builds_items(client, plan):
    response = client.get(f'/api/meal-plans/{plan.id}/grocery-list')
    assert response.status_code == 200
    data = response.get_json()
    assert data['meal_plan_id'] == plan.id
    onion = by_name(data['items'])['Onion']
    assert onion['total_quantity'] == 4
    assert onion['display_quantity'] == '4'
    assert onion['source'] == 'mealplan'
    assert onion['checked'] is False


def test_missing_plan(client):
    response = client.get('/api/meal-plans/999/grocery-list')
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Meal plan not found'}


def test_checked_state_survives_regeneration(client, plan):
    items = client.get(f'/api/meal-plans/{plan.id}/grocery-list').get_json()['items']
    onion = by_name(items)['Onion']
    response = client.patch(f"/api/grocery-items/{onion['id']}", json={'checked': True})
    assert response.get_json()['checked'] is True

    items = client.post(f'/api/meal-plans/{plan.id}/grocery-list').get_json()['items']
    assert by_name(items)['Onion']['checked'] is True
    assert by_name(items)['Rice']['checked'] is False


def test_manual_items(client, plan):
    response = client.post(f'/api/meal-plans/{plan.id}/grocery-list/items',
                           json={'name': ' Oat milk ', 'quantity': 1, 'unit': 'carton'})
    assert response.status_code == 201
    item = response.get_json()
    assert item['name'] == 'Oat milk'
    assert item['category'] == 'dairy'
    assert item['source'] == 'manual'

    items = client.post(f'/api/meal-plans/{plan.id}/grocery-list').get_json()['items']
    assert 'Oat milk' in by_name(items)


@pytest.mark.parametrize('body, message', [
    ({}, 'name is required'),
    ({'name': 'Soap', 'category': 'household'}, 'Invalid category: household'),
    ({'name': 'Eggs', 'quantity': -2}, 'quantity must not be negative'),
])
def test_manual_item_validation(client, plan, body, message):
    response = client.post(f'/api/meal-plans/{plan.id}/grocery-list/items', json=body)
    assert response.status_code == 400
    assert response.get_json()['error'] == message


def test_clear_checked(client, plan):
    items = client.get(f'/api/meal-plans/{plan.id}/grocery-list').get_json()['items']
    for name in ('Onion', 'Rice'):
        client.patch(f"/api/grocery-items/{by_name(items)[name]['id']}", json={'checked': True})

    response = client.post(f'/api/meal-plans/{plan.id}/grocery-list/clear-checked')
    assert response.get_json() == {'removed': 2}
    remaining = client.get(f'/api/meal-plans/{plan.id}/grocery-list').get_json()['items']
    assert 'Onion' not in by_name(remaining)
    assert 'Chickpeas' in by_name(remaining)


def test_cleared_list_stays_empty(client, plan):
    items = client.get(f'/api/meal-plans/{plan.id}/grocery-list').get_json()['items']
    for item in items:
        client.patch(f"/api/grocery-items/{item['id']}", json={'checked': True})

    response = client.post(f'/api/meal-plans/{plan.id}/grocery-list/clear-checked')
    assert response.get_json() == {'removed': len(items)}
    assert client.get(f'/api/meal-plans/{plan.id}/grocery-list').get_json()['items'] == []


def test_plan_change_rebuilds_cleared_list(client, plan):
    items = client.get(f'/api/meal-plans/{plan.id}/grocery-list').get_json()['items']
    for item in items:
        client.patch(f"/api/grocery-items/{item['id']}", json={'checked': True})
    client.post(f'/api/meal-plans/{plan.id}/grocery-list/clear-checked')

    side = MealPlanItem.query.filter_by(meal_plan_id=plan.id, meal_type='side', day='monday').one()
    assert client.delete(f'/api/sides/{side.id}').status_code == 200
    rebuilt = client.get(f'/api/meal-plans/{plan.id}/grocery-list').get_json()['items']
    assert 'Onion' in by_name(rebuilt)
    assert not any(item['checked'] for item in rebuilt)


def test_patch_requires_boolean(client, plan):
    items = client.get(f'/api/meal-plans/{plan.id}/grocery-list').get_json()['items']
    response = client.patch(f"/api/grocery-items/{items[0]['id']}", json={'checked': 'yes'})
    assert response.status_code == 400
    assert response.get_json()['error'] == 'checked must be a boolean'


def test_delete_item(client, plan):
    items = client.get(f'/api/meal-plans/{plan.id}/grocery-list').get_json()['items']
    assert client.delete(f"/api/grocery-items/{items[0]['id']}").status_code == 204
    response = client.delete(f"/api/grocery-items/{items[0]['id']}")
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Grocery item not found'}
