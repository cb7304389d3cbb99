"""Meal plan routes: generation, history, swaps, locks, loves and copies."""

import logging
from datetime import date

from flask import Blueprint, current_app, jsonify

from constants import VALID_DAYS
from models import db, Family, MealPlan, MealPlanItem, FavoriteMeal
from services.errors import ApiError, NotFoundError
from services.generator import generate_meal_plan_v3
from services.meal_plans import generate_weekly_plan, swap_day, toggle_lock, copy_item_to_week
from services.planner import normalize_to_monday
from services.validation import (
    validate_generate_request, validate_generate_v3_request, validate_swap_request,
    is_valid_date, ensure_valid,
)
from .common import get_json, get_or_404, query_int, no_content

logger = logging.getLogger(__name__)

bp = Blueprint('meal_plans', __name__)

PLAN_NOT_FOUND = "Meal plan not found"
ITEM_NOT_FOUND = "Meal plan item not found"


@bp.route('/generate', methods=['POST'])
def generate():
    data = get_json()
    ensure_valid(validate_generate_request(data))
    family = get_or_404(Family, data['family_id'], "Family not found")
    week_start = normalize_to_monday(data.get('week_start') or date.today())

    plan = generate_weekly_plan(
        family, week_start,
        variant=data.get('variant') or 0,
        locks=data.get('locks'),
        overwrite=data.get('overwrite') is True,
    )
    db.session.commit()
    return jsonify(plan.to_dict()), 201


@bp.route('/generate-v3', methods=['POST'])
def generate_v3():
    data = get_json()
    if not data.get('family_id') or not data.get('week_start') or 'cooking_schedule' not in data:
        raise ApiError("family_id, week_start, and cooking_schedule are required", 400)

    ensure_valid(validate_generate_v3_request(data))

    family = get_or_404(Family, data['family_id'], "Family not found")
    plan = generate_meal_plan_v3(
        family,
        normalize_to_monday(data['week_start']),
        data['cooking_schedule'],
        lunch_needs=data.get('lunch_needs') or [],
        max_cook_minutes_weekday=data.get('max_cook_minutes_weekday'),
        max_cook_minutes_weekend=data.get('max_cook_minutes_weekend'),
        vegetarian_ratio=data.get('vegetarian_ratio'),
        specific_meals=data.get('specific_meals'),
        locks=data.get('locks'),
        lunch_max_cook_minutes=current_app.config['LUNCH_MAX_COOK_MINUTES'],
    )
    db.session.commit()
    return jsonify(plan.to_dict()), 201


@bp.route('/history', methods=['GET'])
def history():
    family_id = query_int('family_id')
    plans = (MealPlan.query.filter_by(family_id=family_id)
             .order_by(MealPlan.week_start.desc(), MealPlan.variant, MealPlan.id.desc())
             .all())
    result = []
    for plan in plans:
        data = plan.to_dict(include_items=False)
        mains = [i for i in plan.sorted_items() if i.meal_type == 'main']
        data['item_count'] = len(plan.items)
        data['main_names'] = [i.display_name() for i in mains if i.display_name()]
        result.append(data)
    return jsonify(result)


@bp.route('/<int:plan_id>', methods=['GET'])
def get_plan(plan_id):
    return jsonify(get_or_404(MealPlan, plan_id, PLAN_NOT_FOUND).to_dict())


@bp.route('/<int:plan_id>', methods=['DELETE'])
def delete_plan(plan_id):
    plan = get_or_404(MealPlan, plan_id, PLAN_NOT_FOUND)
    db.session.delete(plan)
    db.session.commit()
    logger.info("Deleted meal plan %s", plan_id)
    return no_content()


@bp.route('/<int:plan_id>/swap', methods=['POST'])
def swap(plan_id):
    plan = get_or_404(MealPlan, plan_id, PLAN_NOT_FOUND)
    data = get_json()
    ensure_valid(validate_swap_request(data))
    day = data['day']

    if any(i.locked for i in plan.items if i.day == day and i.meal_type == 'main'):
        raise ApiError("Cannot swap a locked day. Unlock it first.", 400)
    item = swap_day(plan, day)
    if item is None:
        raise NotFoundError(f"No dinner planned for {day}")
    db.session.commit()
    return jsonify(plan.to_dict())


def _plan_item(plan_id, item_id):
    item = db.session.get(MealPlanItem, item_id)
    if item is None or item.meal_plan_id != plan_id:
        raise NotFoundError(ITEM_NOT_FOUND)
    return item


@bp.route('/<int:plan_id>/items/<int:item_id>/lock', methods=['POST'])
def lock_item(plan_id, item_id):
    get_or_404(MealPlan, plan_id, PLAN_NOT_FOUND)
    item = toggle_lock(_plan_item(plan_id, item_id))
    db.session.commit()
    return jsonify(item.to_dict())


@bp.route('/items/<int:item_id>/love', methods=['POST'])
def love_item(item_id):
    item = get_or_404(MealPlanItem, item_id, ITEM_NOT_FOUND)
    if item.recipe is None:
        raise ApiError("Only recipe items can be loved", 400)

    family_id = item.meal_plan.family_id
    favorite = FavoriteMeal.query.filter_by(family_id=family_id, recipe_id=item.recipe_id).first()
    if favorite is not None:
        return jsonify({'favorite': favorite.to_dict(), 'already_favorite': True})

    favorite = FavoriteMeal(
        family_id=family_id,
        name=item.recipe.name,
        recipe_id=item.recipe_id,
        recipe_url=item.recipe.source_url,
        difficulty=item.recipe.difficulty,
        total_time_minutes=item.recipe.cook_minutes,
    )
    db.session.add(favorite)
    db.session.commit()
    return jsonify({'favorite': favorite.to_dict(), 'already_favorite': False}), 201


@bp.route('/items/<int:item_id>/copy', methods=['POST'])
def copy_item(item_id):
    item = get_or_404(MealPlanItem, item_id, ITEM_NOT_FOUND)
    data = get_json()

    errors = []
    if data.get('target_day') not in VALID_DAYS:
        errors.append({'field': 'target_day', 'message': f"Must be one of: {', '.join(VALID_DAYS)}"})
    if not is_valid_date(data.get('target_week_start')):
        errors.append({'field': 'target_week_start', 'message': 'Must be in YYYY-MM-DD format'})
    ensure_valid(errors)
    if item.meal_type != 'main' or item.recipe_id is None:
        raise ApiError("Only main dishes can be copied", 400)

    copy = copy_item_to_week(item, data['target_day'], normalize_to_monday(data['target_week_start']))
    db.session.commit()
    return jsonify(copy.to_dict()), 201
