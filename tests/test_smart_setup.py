"""Natural-language setup and conversational planning with a stand-in Anthropic client."""

import json
from types import SimpleNamespace

import anthropic
import httpx
import pytest

from models import Family, CookingScheduleDay, LunchNeed
from services.smart_setup import (
    RATE_LIMIT_MESSAGE, WEEK_SYSTEM_PROMPT, strip_json_fences, normalize_cooking_days,
    map_lunch_needs, lunch_needs_to_entries,
)


def rate_limited():
    request = httpx.Request('POST', 'https://api.anthropic.com/v1/messages')
    return anthropic.RateLimitError('rate limited', response=httpx.Response(429, request=request), body=None)


def week_reply(**overrides):
    reply = {
        'cooking_days': {
            'monday': {'is_cooking': True, 'meal_mode': 'one_main'},
            'wednesday': {'is_cooking': True, 'meal_mode': 'customize_mains'},
        },
        'lunch_needs': {'sam': ['tuesday', 'saturday'], 'Nobody': ['monday']},
        'preferences': {'max_cook_minutes_weekday': 30},
        'specific_meals': [{'day': 'wednesday', 'description': "Ina Garten's mac and cheese"}],
    }
    reply.update(overrides)
    return json.dumps(reply)


def test_smart_setup_parses_week(app, client, make_family, make_member, fake_llm):
    family = make_family()
    sam = make_member(family, name='Sam')
    llm = fake_llm('```json\n' + week_reply() + '\n```')

    response = client.post('/api/smart-setup', json={'family_id': family.id, 'text': 'Cooking Mon and Wed'})
    assert response.status_code == 200
    data = response.get_json()
    assert list(data['cooking_days']) == ['monday', 'tuesday', 'wednesday', 'thursday',
                                          'friday', 'saturday', 'sunday']
    assert data['cooking_days']['monday'] == {'is_cooking': True, 'meal_mode': 'one_main'}
    assert data['cooking_days']['tuesday'] == {'is_cooking': False, 'meal_mode': 'one_main'}
    assert data['lunch_needs'] == {str(sam.id): ['tuesday', 'saturday']}
    assert data['preferences'] == {'max_cook_minutes_weekday': 30}
    assert data['specific_meals'][0]['description'] == "Ina Garten's mac and cheese"
    assert 'week_start' not in data

    call = llm.messages.calls[0]
    assert call['model'] == app.config['ANTHROPIC_MODEL']
    assert call['system'] == WEEK_SYSTEM_PROMPT
    assert 'Family members: Sam' in call['messages'][0]['content']
    assert CookingScheduleDay.query.count() == 0


def test_smart_setup_apply_saves_week(client, make_family, make_member, fake_llm):
    family = make_family()
    sam = make_member(family, name='Sam')
    fake_llm(week_reply())

    response = client.post('/api/smart-setup', json={
        'family_id': family.id, 'text': 'Cooking Mon and Wed', 'apply': True, 'week_start': '2025-03-05'})
    data = response.get_json()
    assert data['week_start'] == '2025-03-03'

    days = CookingScheduleDay.query.filter_by(family_id=family.id, week_start='2025-03-03').all()
    assert len(days) == 7
    assert {d.day for d in days if d.is_cooking} == {'monday', 'wednesday'}
    lunches = LunchNeed.query.filter_by(family_id=family.id).all()
    assert [(l.member_id, l.day) for l in lunches] == [(sam.id, 'tuesday')]


@pytest.mark.parametrize('body, status, message', [
    ({'family_id': 1}, 400, 'text is required'),
    ({'text': '   ', 'family_id': 1}, 400, 'text is required'),
    ({'text': 'Cooking Monday'}, 400, 'family_id is required'),
    ({'text': 'Cooking Monday', 'family_id': 999}, 404, 'Family not found'),
])
def test_smart_setup_validation(client, fake_llm, body, status, message):
    llm = fake_llm()
    response = client.post('/api/smart-setup', json=body)
    assert response.status_code == status
    assert response.get_json() == {'error': message}
    assert llm.messages.calls == []


def test_rate_limit_retried_then_succeeds(client, make_family, fake_llm):
    family = make_family()
    llm = fake_llm(rate_limited(), week_reply())
    response = client.post('/api/smart-setup', json={'family_id': family.id, 'text': 'Cooking Monday'})
    assert response.status_code == 200
    assert len(llm.messages.calls) == 2


def test_rate_limit_exhausted(client, make_family, fake_llm):
    family = make_family()
    llm = fake_llm(rate_limited(), rate_limited(), rate_limited())
    response = client.post('/api/smart-setup', json={'family_id': family.id, 'text': 'Cooking Monday'})
    assert response.status_code == 429
    assert response.get_json() == {'error': RATE_LIMIT_MESSAGE}
    assert len(llm.messages.calls) == 3


def test_unparseable_reply(client, make_family, fake_llm):
    family = make_family()
    fake_llm('Sure! Here is your week: cooking Monday.')
    response = client.post('/api/smart-setup', json={'family_id': family.id, 'text': 'Cooking Monday'})
    assert response.status_code == 500
    assert response.get_json() == {'error': 'Failed to parse Claude response'}


def test_missing_api_key(app, client, make_family, fake_llm):
    family = make_family()
    app.config['ANTHROPIC_API_KEY'] = ''
    fake_llm(week_reply())
    response = client.post('/api/smart-setup', json={'family_id': family.id, 'text': 'Cooking Monday'})
    assert response.status_code == 500
    assert response.get_json() == {'error': 'ANTHROPIC_API_KEY not configured'}


def conversation_reply():
    return json.dumps({
        'cooking_days': {
            'monday': {'is_cooking': True, 'meal_mode': 'one_main'},
            'tuesday': {'is_cooking': True, 'meal_mode': 'one_main'},
        },
        'specific_meals': [{'day': 'tuesday', 'description': 'tacos'}],
        'dietary_preferences': {'vegetarian_ratio': 0, 'allergies': [], 'cuisine_preferences': []},
        'lunch_needs': {},
        'cook_time_limits': {'weekday': 30, 'weekend': 60},
    })


def test_generate_from_conversation_creates_default_family(app, client, catalog, fake_llm):
    llm = fake_llm(conversation_reply())
    response = client.post('/api/plan/generate-from-conversation', json={
        'text': 'Cook Monday and Tuesday, tacos on Tuesday, keep it quick', 'week_start': '2025-03-03'})
    assert response.status_code == 201
    data = response.get_json()

    family = Family.query.one()
    assert family.name == 'My Family'
    assert data['family_id'] == family.id
    assert data['week_start'] == '2025-03-03'
    mains = [i for i in data['items'] if i['meal_type'] == 'main']
    assert [m['day'] for m in mains] == ['monday', 'tuesday']
    assert mains[1]['recipe']['name'] == 'Chicken Tacos'
    assert mains[0]['recipe']['cook_minutes'] <= 30
    assert data['settings_snapshot']['max_cook_minutes_weekday'] == 30
    assert [d['day'] for d in data['cooking_schedule'] if d['is_cooking']] == ['monday', 'tuesday']
    assert data['preferences']['vegetarian_ratio'] == 0
    assert data['specific_meals'] == [{'day': 'tuesday', 'description': 'tacos'}]

    call = llm.messages.calls[0]
    assert call['model'] == app.config['ANTHROPIC_FAST_MODEL']
    assert 'Single person household.' in call['messages'][0]['content']


def test_generate_from_conversation_uses_given_family(client, make_family, catalog, fake_llm):
    make_family(name='First')
    second = make_family(name='Second')
    fake_llm(conversation_reply())
    data = client.post('/api/plan/generate-from-conversation', json={
        'text': 'Cook Monday and Tuesday', 'family_id': second.id}).get_json()
    assert data['family_id'] == second.id
    assert Family.query.count() == 2


def test_generate_from_conversation_rejects_bad_week(client, fake_llm):
    fake_llm(conversation_reply())
    response = client.post('/api/plan/generate-from-conversation', json={
        'text': 'Cook Monday', 'week_start': 'next week'})
    assert response.status_code == 400
    assert response.get_json() == {'error': 'week_start must be in YYYY-MM-DD format'}


def test_strip_json_fences():
    assert strip_json_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_json_fences('  {"a": 1} ') == '{"a": 1}'


def test_normalize_cooking_days_fills_week():
    days = normalize_cooking_days({'friday': {'is_cooking': True}, 'funday': {'is_cooking': True}})
    assert len(days) == 7
    assert days['friday'] == {'is_cooking': True, 'meal_mode': 'one_main'}
    assert normalize_cooking_days(None)['monday']['is_cooking'] is False


def test_lunch_need_mapping():
    members = [SimpleNamespace(id=3, name='Sam'), SimpleNamespace(id=4, name='Riley')]
    mapped = map_lunch_needs({'SAM': ['Monday', 'someday', 'sunday'], 'Ghost': ['monday']}, members)
    assert mapped == {3: ['monday', 'sunday']}
    assert lunch_needs_to_entries(mapped) == [
        {'member_id': 3, 'day': 'monday', 'needs_lunch': True, 'leftovers_ok': False}]
