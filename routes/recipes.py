"""Recipe catalog routes."""

import logging

import requests
from flask import Blueprint, current_app, jsonify, request

from models import db, Recipe, MealPlanItem, FavoriteMeal
from services.errors import ApiError
from services.matching import match_recipes
from services.parsing import parse_bool
from services.recipe_import import import_recipe_from_url
from services.validation import validate_recipe, ensure_valid, require_fields
from utils import is_valid_http_url
from .common import get_json, get_or_404, apply_fields, no_content

logger = logging.getLogger(__name__)

bp = Blueprint('recipes', __name__)

NOT_FOUND = "Recipe not found"


@bp.route('', methods=['GET'])
def list_recipes():
    query = Recipe.query
    cuisine = request.args.get('cuisine')
    if cuisine:
        query = query.filter(Recipe.cuisine == cuisine)
    if request.args.get('vegetarian') is not None:
        query = query.filter(Recipe.vegetarian == parse_bool(request.args['vegetarian']))
    search = (request.args.get('q') or '').strip()
    if search:
        query = query.filter(Recipe.name.ilike(f"%{search}%"))
    recipes = query.order_by(Recipe.name).all()
    return jsonify([r.to_dict() for r in recipes])


@bp.route('/<int:recipe_id>', methods=['GET'])
def get_recipe(recipe_id):
    return jsonify(get_or_404(Recipe, recipe_id, NOT_FOUND).to_dict())


@bp.route('', methods=['POST'])
def create_recipe():
    data = dict(get_json())
    if 'name' not in data and 'title' in data:
        data['name'] = data.pop('title')
    ensure_valid(validate_recipe(data))

    source_url = data.get('source_url')
    if source_url:
        existing = Recipe.query.filter_by(source_url=source_url).first()
        if existing is not None:
            return jsonify(existing.to_dict()), 200

    recipe = Recipe(source_type='user')
    apply_fields(recipe, data, Recipe.EDITABLE_FIELDS)
    recipe.name = data['name'].strip()
    db.session.add(recipe)
    db.session.commit()
    logger.info("Created recipe %s (%s)", recipe.id, recipe.name)
    return jsonify(recipe.to_dict()), 201


@bp.route('/<int:recipe_id>', methods=['PUT'])
def update_recipe(recipe_id):
    recipe = get_or_404(Recipe, recipe_id, NOT_FOUND)
    if recipe.source_type != 'user':
        raise ApiError("Only user-created recipes can be edited", 403)
    data = get_json()
    ensure_valid(validate_recipe(data, partial=True))

    fields = [f for f in Recipe.EDITABLE_FIELDS if f != 'source_type']
    if not apply_fields(recipe, data, fields):
        raise ApiError("No fields to update", 400)
    if 'name' in data:
        recipe.name = data['name'].strip()
    db.session.commit()
    return jsonify(recipe.to_dict())


@bp.route('/<int:recipe_id>/rename', methods=['PATCH'])
def rename_recipe(recipe_id):
    recipe = get_or_404(Recipe, recipe_id, NOT_FOUND)
    data = get_json()
    require_fields(data, 'name')
    ensure_valid(validate_recipe({'name': data['name']}, partial=True))
    recipe.name = data['name'].strip()
    db.session.commit()
    return jsonify(recipe.to_dict())


@bp.route('/<int:recipe_id>/notes', methods=['PATCH'])
def update_recipe_notes(recipe_id):
    recipe = get_or_404(Recipe, recipe_id, NOT_FOUND)
    notes = get_json().get('notes')
    if notes is not None and not isinstance(notes, str):
        raise ApiError("notes must be a string or null", 400)
    recipe.notes = (notes or '').strip() or None
    db.session.commit()
    return jsonify(recipe.to_dict())


@bp.route('/<int:recipe_id>', methods=['DELETE'])
def delete_recipe(recipe_id):
    recipe = get_or_404(Recipe, recipe_id, NOT_FOUND)
    MealPlanItem.query.filter_by(recipe_id=recipe.id).update(
        {'recipe_id': None}, synchronize_session=False)
    MealPlanItem.query.filter_by(leftover_lunch_recipe_id=recipe.id).update(
        {'leftover_lunch_recipe_id': None}, synchronize_session=False)
    FavoriteMeal.query.filter_by(recipe_id=recipe.id).update(
        {'recipe_id': None}, synchronize_session=False)
    db.session.delete(recipe)
    db.session.commit()
    logger.info("Deleted recipe %s", recipe_id)
    return no_content()


@bp.route('/match', methods=['POST'])
def match():
    data = get_json()
    query = data.get('query')
    if not isinstance(query, str) or not query.strip():
        raise ApiError("query is required", 400)
    matches = match_recipes(query, Recipe.query.order_by(Recipe.id).all())
    return jsonify({'matches': [{'recipe': r.to_dict(), 'score': round(score, 3)}
                                for r, score in matches]})


@bp.route('/import-from-url', methods=['POST'])
def import_from_url():
    data = get_json()
    url = data.get('url')
    if not isinstance(url, str) or not url.strip():
        raise ApiError("url is required", 400)
    url = url.strip()
    if not is_valid_http_url(url):
        raise ApiError("Please enter a valid URL starting with http:// or https://", 400)

    try:
        recipe, already_exists, warning = import_recipe_from_url(
            url,
            timeout=current_app.config['FETCH_TIMEOUT'],
            max_size=current_app.config['FETCH_MAX_BYTES'],
        )
    except requests.RequestException as exc:
        db.session.rollback()
        logger.warning("Failed to fetch %s: %s", url, exc)
        raise ApiError(f"Could not fetch recipe page: {exc}", 502)

    db.session.commit()
    payload = {'recipe': recipe.to_dict(), 'alreadyExists': already_exists,
               'paywall_warning': warning}
    return jsonify(payload), 200 if already_exists else 201
