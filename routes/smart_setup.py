"""Natural-language planning routes backed by the Anthropic API."""

import logging

from flask import Blueprint, current_app, jsonify

from models import db, Family
from services.errors import ApiError
from services.generator import generate_meal_plan_v3
from services.planner import normalize_to_monday, next_monday
from services.schedule import replace_cooking_schedule, replace_lunch_needs
from services.smart_setup import (
    parse_week_description, parse_conversation, cooking_days_to_schedule, lunch_needs_to_entries,
)
from services.validation import is_valid_date
from .common import get_json, get_or_404

logger = logging.getLogger(__name__)

bp = Blueprint('smart_setup', __name__)

DEFAULT_FAMILY_NAME = "My Family"


def _required_text(data):
    text = data.get('text')
    if not isinstance(text, str) or not text.strip():
        raise ApiError("text is required", 400)
    return text.strip()


def _week_start(data):
    week_start = data.get('week_start')
    if week_start is None:
        return next_monday()
    if not is_valid_date(week_start):
        raise ApiError("week_start must be in YYYY-MM-DD format", 400)
    return normalize_to_monday(week_start)


@bp.route('/smart-setup', methods=['POST'])
def smart_setup():
    data = get_json()
    text = _required_text(data)
    if not data.get('family_id'):
        raise ApiError("family_id is required", 400)
    family = get_or_404(Family, data['family_id'], "Family not found")

    parsed = parse_week_description(text, family.members)
    if data.get('apply') is True:
        week_start = _week_start(data)
        replace_cooking_schedule(family.id, week_start, cooking_days_to_schedule(parsed['cooking_days']))
        replace_lunch_needs(family.id, week_start, lunch_needs_to_entries(parsed['lunch_needs']))
        db.session.commit()
        parsed['week_start'] = week_start
        logger.info("Applied smart setup for family %s week %s", family.id, week_start)
    return jsonify(parsed)


def _conversation_family(family_id):
    if family_id:
        return get_or_404(Family, family_id, "Family not found")
    family = Family.query.order_by(Family.id).first()
    if family is None:
        family = Family(name=DEFAULT_FAMILY_NAME)
        db.session.add(family)
        db.session.flush()
        logger.info("Created default family %s for conversational planning", family.id)
    return family


@bp.route('/plan/generate-from-conversation', methods=['POST'])
def generate_from_conversation():
    data = get_json()
    text = _required_text(data)
    family = _conversation_family(data.get('family_id'))
    week_start = _week_start(data)

    parsed = parse_conversation(text, family.members)
    schedule = cooking_days_to_schedule(parsed['cooking_days'])
    preferences = parsed['dietary_preferences']
    limits = parsed['cook_time_limits']

    plan = generate_meal_plan_v3(
        family, week_start, schedule,
        lunch_needs=lunch_needs_to_entries(parsed['lunch_needs']),
        max_cook_minutes_weekday=limits.get('weekday'),
        max_cook_minutes_weekend=limits.get('weekend'),
        vegetarian_ratio=preferences.get('vegetarian_ratio'),
        specific_meals=parsed['specific_meals'],
        lunch_max_cook_minutes=current_app.config['LUNCH_MAX_COOK_MINUTES'],
    )
    db.session.commit()

    payload = plan.to_dict()
    payload['cooking_schedule'] = schedule
    payload['preferences'] = preferences
    payload['specific_meals'] = parsed['specific_meals']
    return jsonify(payload), 201
