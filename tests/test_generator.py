"""Schedule-driven generator (v3)."""

from types import SimpleNamespace

import pytest

from services.generator import (
    LEFTOVER_LUNCH_NOTE, is_compatible, select_recipe, select_lunch_recipe, allergy_conflict,
)

WEEK = '2025-03-03'


def by_type(plan, meal_type, day=None):
    return [i for i in plan['items']
            if i['meal_type'] == meal_type and (day is None or i['day'] == day)]


def post_v3(client, family, schedule, **body):
    body.update(family_id=family.id, week_start=WEEK, cooking_schedule=schedule)
    return client.post('/api/meal-plans/generate-v3', json=body)


def test_requires_core_fields(client):
    response = client.post('/api/meal-plans/generate-v3', json={'family_id': 1})
    assert response.status_code == 400
    assert response.get_json() == {
        'error': 'family_id, week_start, and cooking_schedule are required'}


def test_schedule_entries_validated(client, make_family):
    family = make_family()
    response = post_v3(client, family, [{'day': 'blursday', 'is_cooking': True}])
    assert response.status_code == 400
    assert response.get_json()['details'][0]['field'] == 'schedule[0].day'


@pytest.mark.parametrize('body, field', [
    ({'locks': ['monday']}, 'locks'),
    ({'locks': {'funday': 1}}, 'locks'),
    ({'locks': {'monday': 'roast'}}, 'locks'),
    ({'specific_meals': ['tacos']}, 'specific_meals[0]'),
    ({'specific_meals': [{'day': 'someday', 'description': 'tacos'}]}, 'specific_meals[0]'),
    ({'specific_meals': 'tacos'}, 'specific_meals'),
    ({'max_cook_minutes_weekday': '30'}, 'max_cook_minutes_weekday'),
    ({'max_cook_minutes_weekend': 0}, 'max_cook_minutes_weekend'),
    ({'vegetarian_ratio': 'lots'}, 'vegetarian_ratio'),
    ({'vegetarian_ratio': 150}, 'vegetarian_ratio'),
    ({'lunch_needs': {'monday': True}}, 'lunch_needs'),
])
def test_options_validated_before_generating(client, make_family, catalog, body, field):
    family = make_family()
    response = post_v3(client, family, [{'day': 'monday', 'is_cooking': True}], **body)
    assert response.status_code == 400
    assert [d['field'] for d in response.get_json()['details']] == [field]
    assert client.get(f'/api/meal-plans/history?family_id={family.id}').get_json() == []


def test_one_main_days_get_a_main_and_a_side(client, make_family, make_member, catalog):
    family = make_family()
    make_member(family, name='Pat')
    schedule = [
        {'day': 'monday', 'is_cooking': True},
        {'day': 'tuesday', 'is_cooking': False},
        {'day': 'thursday', 'is_cooking': True, 'meal_mode': 'one_main'},
    ]
    response = post_v3(client, family, schedule)
    assert response.status_code == 201
    plan = response.get_json()
    assert plan['settings_snapshot']['generator'] == 'v3'

    assert [m['day'] for m in by_type(plan, 'main')] == ['monday', 'thursday']
    for main in by_type(plan, 'main'):
        assert main['recipe']['cook_minutes'] <= 45
        sides = [s for s in by_type(plan, 'side', main['day'])
                 if s['parent_meal_item_id'] == main['id']]
        assert len(sides) == 1
        assert sides[0]['notes']['side_library_id']
        assert sides[0]['name'] == sides[0]['notes']['side_name']
    assert by_type(plan, 'main', 'tuesday') == []


def test_mains_are_not_repeated(client, make_family, catalog):
    family = make_family()
    schedule = [{'day': day, 'is_cooking': True}
                for day in ('monday', 'tuesday', 'wednesday', 'thursday', 'friday')]
    plan = post_v3(client, family, schedule).get_json()
    ids = [m['recipe_id'] for m in by_type(plan, 'main')]
    assert len(ids) == 5
    assert len(set(ids)) == 5


def test_customize_mains_per_member(client, make_family, make_member, catalog):
    family = make_family()
    meat_eater = make_member(family, name='Jo', dietary_style='omnivore')
    veggie = make_member(family, name='Lee', dietary_style='vegetarian')
    schedule = [{
        'day': 'wednesday', 'is_cooking': True, 'meal_mode': 'customize_mains',
        'main_assignments': [
            {'main_number': 1, 'member_ids': [meat_eater.id]},
            {'main_number': 2, 'member_ids': [veggie.id]},
        ],
    }]
    plan = post_v3(client, family, schedule, vegetarian_ratio=0).get_json()
    mains = by_type(plan, 'main', 'wednesday')
    assert [m['main_number'] for m in mains] == [1, 2]
    assert mains[1]['assigned_member_ids'] == [veggie.id]
    assert mains[1]['recipe']['vegetarian'] is True
    assert mains[0]['recipe_id'] != mains[1]['recipe_id']

    sides = by_type(plan, 'side', 'wednesday')
    assert len(sides) == 2
    assert sides[0]['notes']['side_library_id'] != sides[1]['notes']['side_library_id']


def test_customize_mains_defaults_to_two_for_everyone(client, make_family, make_member, catalog):
    family = make_family()
    make_member(family)
    schedule = [{'day': 'saturday', 'is_cooking': True, 'meal_mode': 'customize_mains'}]
    plan = post_v3(client, family, schedule).get_json()
    assert [m['main_number'] for m in by_type(plan, 'main')] == [1, 2]


def test_vegetarian_member_shapes_shared_main(client, make_family, make_member, catalog):
    family = make_family()
    make_member(family, name='Omni')
    make_member(family, name='Veg', dietary_style='vegetarian')
    plan = post_v3(client, family, [{'day': 'monday', 'is_cooking': True}]).get_json()
    assert by_type(plan, 'main')[0]['recipe']['vegetarian'] is True


def test_allergies_respected(client, make_family, make_member, catalog):
    family = make_family(allergies=['dairy'])
    make_member(family, allergies=['fish'])
    schedule = [{'day': day, 'is_cooking': True}
                for day in ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday')]
    plan = post_v3(client, family, schedule).get_json()
    for main in by_type(plan, 'main'):
        assert not {'dairy', 'fish'} & set(main['recipe']['allergens'])


def test_specific_meal_request(client, make_family, make_member, catalog):
    family = make_family(vegetarian_ratio=100)
    make_member(family)
    plan = post_v3(client, family, [{'day': 'tuesday', 'is_cooking': True}],
                   specific_meals=[{'day': 'tuesday', 'description': 'something with salmon'}]).get_json()
    assert by_type(plan, 'main', 'tuesday')[0]['recipe']['name'] == 'Salmon Rice Bowl'


def test_specific_meal_vetoed_by_allergy(client, make_family, make_member, catalog):
    family = make_family()
    make_member(family, allergies=['fish'])
    plan = post_v3(client, family, [{'day': 'tuesday', 'is_cooking': True}],
                   specific_meals=[{'day': 'tuesday', 'description': 'salmon'}]).get_json()
    assert by_type(plan, 'main', 'tuesday')[0]['recipe']['name'] != 'Salmon Rice Bowl'


def test_locked_day_forced_to_cook(client, make_family, catalog):
    family = make_family()
    roast = next(r for r in catalog if r.name == 'Slow Roast Beef')
    plan = post_v3(client, family, [{'day': 'sunday', 'is_cooking': False}],
                   locks={'sunday': roast.id}).get_json()
    sunday = by_type(plan, 'main', 'sunday')
    assert len(sunday) == 1
    assert sunday[0]['recipe_id'] == roast.id
    assert sunday[0]['locked'] is True


def test_lunches(client, make_family, make_member, catalog):
    family = make_family()
    kid = make_member(family, name='Kid')
    parent = make_member(family, name='Parent')
    schedule = [{'day': 'monday', 'is_cooking': True}]
    lunch_needs = [
        {'member_id': kid.id, 'day': 'tuesday', 'needs_lunch': True, 'leftovers_ok': True},
        {'member_id': parent.id, 'day': 'thursday', 'needs_lunch': True, 'leftovers_ok': False},
        {'member_id': parent.id, 'day': 'friday', 'needs_lunch': False},
    ]
    plan = post_v3(client, family, schedule, lunch_needs=lunch_needs).get_json()
    monday_main = by_type(plan, 'main', 'monday')[0]

    tuesday = by_type(plan, 'lunch', 'tuesday')
    assert len(tuesday) == 1
    assert tuesday[0]['recipe_id'] == monday_main['recipe_id']
    assert tuesday[0]['notes'] == LEFTOVER_LUNCH_NOTE
    assert tuesday[0]['assigned_member_ids'] == [kid.id]

    thursday = by_type(plan, 'lunch', 'thursday')
    assert len(thursday) == 1
    assert thursday[0]['recipe']['cook_minutes'] <= 20
    assert thursday[0]['recipe_id'] != monday_main['recipe_id']
    assert by_type(plan, 'lunch', 'friday') == []


def test_regenerating_reuses_plan(client, make_family, catalog):
    family = make_family()
    first = post_v3(client, family, [{'day': 'monday', 'is_cooking': True}]).get_json()
    second = post_v3(client, family, [{'day': 'tuesday', 'is_cooking': True}]).get_json()
    assert second['id'] == first['id']
    assert [m['day'] for m in by_type(second, 'main')] == ['tuesday']


def _member(**fields):
    fields.setdefault('dietary_style', 'omnivore')
    fields.setdefault('allergies', [])
    fields.setdefault('no_spicy', False)
    fields.setdefault('favorites', [])
    fields.setdefault('dislikes', [])
    return SimpleNamespace(**fields)


def _recipe(id, name, minutes=30, vegetarian=False, allergens=(), tags=(), ingredients=()):
    return SimpleNamespace(id=id, name=name, cook_minutes=minutes, vegetarian=vegetarian,
                           allergens=list(allergens), tags=list(tags),
                           ingredient_names=lambda: list(ingredients))


def test_compatibility_rules():
    spicy = _recipe(1, 'Hot Wings', tags=['spicy'])
    assert not is_compatible(spicy, [_member(no_spicy=True)])
    assert is_compatible(spicy, [_member()])
    assert not is_compatible(_recipe(2, 'Veg Chili', vegetarian=True), [_member(dietary_style='vegan')])
    assert is_compatible(_recipe(3, 'Vegan Bowl', vegetarian=True, tags=['vegan']),
                         [_member(dietary_style='vegan')])
    assert allergy_conflict(_recipe(4, 'PB Noodles', allergens=['Nuts']), [_member(allergies=['nuts'])]) == 'nuts'


def test_select_recipe_prefers_favorites_and_falls_back_from_veg():
    recipes = [_recipe(1, 'Beef Stew'), _recipe(2, 'Chicken Pie')]
    fan = _member(favorites=['chicken'])
    assert select_recipe(recipes, [fan], 45, set()).id == 2
    assert select_recipe(recipes, [fan], 45, {2}).id == 1
    assert select_recipe(recipes, [fan], 45, set(), vegetarian_day=True).id == 2
    assert select_recipe(recipes, [fan], 10, set()) is None


def test_select_lunch_recipe_is_quick():
    recipes = [_recipe(1, 'Roast', minutes=90), _recipe(2, 'Wrap', minutes=10)]
    assert select_lunch_recipe(recipes, [_member()], set()).id == 2
    assert select_lunch_recipe(recipes, [_member()], {2}) is None


def test_requested_dish_reserved_for_its_day(client, make_family, catalog):
    family = make_family()
    schedule = [{'day': day, 'is_cooking': True} for day in ('monday', 'tuesday', 'thursday')]
    plan = post_v3(client, family, schedule, vegetarian_ratio=0,
                   specific_meals=[{'day': 'thursday', 'description': 'tacos'}]).get_json()
    names = {m['day']: m['recipe']['name'] for m in by_type(plan, 'main')}
    assert names['thursday'] == 'Chicken Tacos'
    assert 'Chicken Tacos' not in (names['monday'], names['tuesday'])
