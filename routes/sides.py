"""Sides library and per-meal side routes."""

import json

from flask import Blueprint, jsonify, request

from models import db, Recipe, MealPlanItem, SideLibraryEntry
from services.errors import ApiError, NotFoundError
from services.generator import add_side_item
from services.grocery import invalidate_grocery_list
from services.sides import suggest_sides, side_payload
from services.validation import validate_side_library_entry, ensure_valid
from .common import get_json, get_or_404, apply_fields

bp = Blueprint('sides', __name__)

LIBRARY_FIELDS = ('category', 'weight', 'cuisine_affinity', 'avoid_with_main_types',
                  'prep_time_minutes', 'vegetarian', 'ingredients', 'recipe_url')


def _meal_item(item_id, meal_type, message):
    item = db.session.get(MealPlanItem, item_id)
    if item is None or item.meal_type != meal_type:
        raise NotFoundError(message)
    return item


def _custom_name(data):
    name = data.get('custom_name')
    return name.strip() if isinstance(name, str) and name.strip() else None


@bp.route('/library', methods=['GET'])
def list_library():
    query = SideLibraryEntry.query
    if request.args.get('category'):
        query = query.filter(SideLibraryEntry.category == request.args['category'])
    if request.args.get('weight'):
        query = query.filter(SideLibraryEntry.weight == request.args['weight'])
    return jsonify([s.to_dict() for s in query.order_by(SideLibraryEntry.name).all()])


@bp.route('/library/<int:side_id>', methods=['GET'])
def get_library_side(side_id):
    return jsonify(get_or_404(SideLibraryEntry, side_id, "Side not found").to_dict())


@bp.route('/library', methods=['POST'])
def create_library_side():
    data = get_json()
    ensure_valid(validate_side_library_entry(data))
    side = SideLibraryEntry(name=data['name'].strip())
    apply_fields(side, data, LIBRARY_FIELDS)
    db.session.add(side)
    db.session.commit()
    return jsonify(side.to_dict()), 201


@bp.route('/suggest', methods=['POST'])
def suggest():
    data = get_json()
    if not data.get('main_recipe_id'):
        raise ApiError("main_recipe_id is required", 400)
    recipe = db.session.get(Recipe, data['main_recipe_id'])
    if recipe is None:
        raise ApiError("Main recipe not found", 400)

    exclude_ids = data.get('exclude_ids') if isinstance(data.get('exclude_ids'), list) else []
    sides = suggest_sides(recipe, cuisine=data.get('cuisine'), exclude_ids=exclude_ids)
    return jsonify([s.to_dict() for s in sides])


@bp.route('/swap/<int:meal_item_id>', methods=['POST'])
def swap_side(meal_item_id):
    data = get_json()
    custom_name = _custom_name(data)
    if not data.get('new_side_id') and not custom_name:
        raise ApiError("new_side_id or custom_name is required", 400)
    item = _meal_item(meal_item_id, 'side', "Side meal item not found")

    if custom_name:
        payload = side_payload(custom_name=custom_name)
    else:
        side = db.session.get(SideLibraryEntry, data['new_side_id'])
        if side is None:
            raise NotFoundError("New side not found in library")
        payload = side_payload(side)

    item.is_custom = True
    item.notes = json.dumps(payload)
    invalidate_grocery_list(item.meal_plan_id)
    db.session.commit()
    return jsonify({'message': "Side swapped successfully", 'item': item.to_dict()})


@bp.route('/add/<int:meal_item_id>', methods=['POST'])
def add_side(meal_item_id):
    main = _meal_item(meal_item_id, 'main', "Main meal item not found")
    data = get_json()
    custom_name = _custom_name(data)

    if data.get('side_id'):
        side = db.session.get(SideLibraryEntry, data['side_id'])
        if side is None:
            raise NotFoundError("Side not found in library")
        item = add_side_item(main.meal_plan, main, side)
    elif custom_name:
        item = add_side_item(main.meal_plan, main, custom_name=custom_name)
    else:
        raise ApiError("Either side_id or custom_name is required", 400)

    invalidate_grocery_list(main.meal_plan_id)
    db.session.commit()
    return jsonify(item.to_dict()), 201


@bp.route('/<int:meal_item_id>', methods=['DELETE'])
def remove_side(meal_item_id):
    item = _meal_item(meal_item_id, 'side', "Side meal item not found")
    plan_id = item.meal_plan_id
    db.session.delete(item)
    invalidate_grocery_list(plan_id)
    db.session.commit()
    return jsonify({'message': "Side removed successfully"})
