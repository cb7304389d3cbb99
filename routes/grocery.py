"""Grocery list routes."""

from flask import Blueprint, jsonify

from constants import VALID_GROCERY_CATEGORIES
from models import db, MealPlan, GroceryItem
from services.errors import ApiError
from services.grocery import get_grocery_list, regenerate_grocery_list
from services.parsing import safe_float, guess_category
from services.validation import require_fields
from .common import get_json, get_or_404, no_content

bp = Blueprint('grocery', __name__)

PLAN_NOT_FOUND = "Meal plan not found"


def _grocery_response(plan):
    items = get_grocery_list(plan)
    return jsonify({'meal_plan_id': plan.id, 'items': [i.to_dict() for i in items]})


@bp.route('/meal-plans/<int:plan_id>/grocery-list', methods=['GET'])
def get_list(plan_id):
    plan = get_or_404(MealPlan, plan_id, PLAN_NOT_FOUND)
    response = _grocery_response(plan)
    db.session.commit()
    return response


@bp.route('/meal-plans/<int:plan_id>/grocery-list', methods=['POST'])
def regenerate_list(plan_id):
    plan = get_or_404(MealPlan, plan_id, PLAN_NOT_FOUND)
    regenerate_grocery_list(plan)
    response = _grocery_response(plan)
    db.session.commit()
    return response


@bp.route('/meal-plans/<int:plan_id>/grocery-list/items', methods=['POST'])
def add_item(plan_id):
    plan = get_or_404(MealPlan, plan_id, PLAN_NOT_FOUND)
    data = get_json()
    require_fields(data, 'name')

    name = str(data['name']).strip()
    category = data.get('category') or guess_category(name)
    if category not in VALID_GROCERY_CATEGORIES:
        raise ApiError(f"Invalid category: {category}", 400)
    quantity = safe_float(data.get('quantity'), None)
    if quantity is not None and quantity < 0:
        raise ApiError("quantity must not be negative", 400)

    item = GroceryItem(meal_plan_id=plan.id, name=name, quantity=quantity,
                       unit=data.get('unit') or '', category=category, source='manual')
    db.session.add(item)
    db.session.commit()
    return jsonify(item.to_dict()), 201


@bp.route('/meal-plans/<int:plan_id>/grocery-list/clear-checked', methods=['POST'])
def clear_checked(plan_id):
    plan = get_or_404(MealPlan, plan_id, PLAN_NOT_FOUND)
    removed = GroceryItem.query.filter_by(meal_plan_id=plan.id, checked=True).delete(
        synchronize_session='fetch')
    db.session.commit()
    return jsonify({'removed': removed})


@bp.route('/grocery-items/<int:item_id>', methods=['PATCH'])
def update_item(item_id):
    item = get_or_404(GroceryItem, item_id, "Grocery item not found")
    checked = get_json().get('checked')
    if not isinstance(checked, bool):
        raise ApiError("checked must be a boolean", 400)
    item.checked = checked
    db.session.commit()
    return jsonify(item.to_dict())


@bp.route('/grocery-items/<int:item_id>', methods=['DELETE'])
def delete_item(item_id):
    item = get_or_404(GroceryItem, item_id, "Grocery item not found")
    db.session.delete(item)
    db.session.commit()
    return no_content()
