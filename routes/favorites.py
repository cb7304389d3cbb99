"""
Favorites routes

Chefs, meals, sides and websites share the same list/create/delete shape;
meals and sides can also be edited.
"""

from flask import Blueprint, jsonify

from models import db, Family, FavoriteChef, FavoriteMeal, FavoriteSide, FavoriteWebsite
from services.errors import ApiError
from services.validation import validate_favorite_meal, validate_favorite_side, ensure_valid
from .common import get_json, get_or_404, apply_fields, query_int, no_content

bp = Blueprint('favorites', __name__)


def _validate_name_only(data, partial=False):
    name = data.get('name')
    if (not partial or 'name' in data) and (not isinstance(name, str) or not name.strip()):
        return [{'field': 'name', 'message': 'Name is required'}]
    return []


def register_favorite_routes(kind, model, validator, editable=False):
    """Add GET/POST/DELETE (and PUT when editable) routes for one favorite kind."""
    not_found = f"Favorite {kind[:-1]} not found"

    def list_favorites():
        family_id = query_int('family_id')
        rows = model.query.filter_by(family_id=family_id).order_by(model.name).all()
        return jsonify([r.to_dict() for r in rows])

    def create_favorite():
        data = get_json()
        if data.get('family_id') is None:
            raise ApiError("family_id is required", 400)
        ensure_valid(validator(data))
        get_or_404(Family, data['family_id'], "Family not found")

        row = model(family_id=data['family_id'])
        apply_fields(row, data, model.EDITABLE_FIELDS)
        row.name = data['name'].strip()
        db.session.add(row)
        db.session.commit()
        return jsonify(row.to_dict()), 201

    def update_favorite(favorite_id):
        row = get_or_404(model, favorite_id, not_found)
        data = get_json()
        ensure_valid(validator(data, partial=True))
        if not apply_fields(row, data, model.EDITABLE_FIELDS):
            raise ApiError("No fields to update", 400)
        if 'name' in data:
            row.name = data['name'].strip()
        db.session.commit()
        return jsonify(row.to_dict())

    def delete_favorite(favorite_id):
        row = get_or_404(model, favorite_id, not_found)
        db.session.delete(row)
        db.session.commit()
        return no_content()

    bp.add_url_rule(f'/{kind}', f'list_{kind}', list_favorites, methods=['GET'])
    bp.add_url_rule(f'/{kind}', f'create_{kind}', create_favorite, methods=['POST'])
    bp.add_url_rule(f'/{kind}/<int:favorite_id>', f'delete_{kind}', delete_favorite, methods=['DELETE'])
    if editable:
        bp.add_url_rule(f'/{kind}/<int:favorite_id>', f'update_{kind}', update_favorite, methods=['PUT'])


register_favorite_routes('chefs', FavoriteChef, _validate_name_only)
register_favorite_routes('meals', FavoriteMeal, validate_favorite_meal, editable=True)
register_favorite_routes('sides', FavoriteSide, validate_favorite_side, editable=True)
register_favorite_routes('websites', FavoriteWebsite, _validate_name_only)
