"""Family profile routes."""

import logging

from flask import Blueprint, current_app, jsonify

from models import db, Family
from services.errors import ApiError
from services.validation import validate_family, ensure_valid
from .common import get_json, get_or_404, apply_fields, no_content

logger = logging.getLogger(__name__)

bp = Blueprint('families', __name__)


def _defaults():
    config = current_app.config
    return {
        'vegetarian_ratio': config['DEFAULT_VEGETARIAN_RATIO'],
        'max_cook_minutes_weekday': config['DEFAULT_MAX_COOK_WEEKDAY'],
        'max_cook_minutes_weekend': config['DEFAULT_MAX_COOK_WEEKEND'],
    }


@bp.route('', methods=['GET'])
def list_families():
    families = Family.query.order_by(Family.id.desc()).all()
    return jsonify([f.to_dict() for f in families])


@bp.route('/<int:family_id>', methods=['GET'])
def get_family(family_id):
    return jsonify(get_or_404(Family, family_id, "Family not found").to_dict())


@bp.route('', methods=['POST'])
def create_family():
    data = get_json()
    ensure_valid(validate_family(data))

    family = Family(**_defaults())
    apply_fields(family, data, Family.EDITABLE_FIELDS)
    family.name = data['name'].strip()
    db.session.add(family)
    db.session.commit()
    logger.info("Created family %s", family.id)
    return jsonify(family.to_dict()), 201


@bp.route('/<int:family_id>', methods=['PUT'])
def update_family(family_id):
    family = get_or_404(Family, family_id, "Family not found")
    data = get_json()
    ensure_valid(validate_family(data, partial=True))

    if not apply_fields(family, data, Family.EDITABLE_FIELDS):
        raise ApiError("No fields to update", 400)
    if 'name' in data:
        family.name = data['name'].strip()
    db.session.commit()
    return jsonify(family.to_dict())


@bp.route('/<int:family_id>', methods=['DELETE'])
def delete_family(family_id):
    family = get_or_404(Family, family_id, "Family not found")
    db.session.delete(family)
    db.session.commit()
    logger.info("Deleted family %s", family_id)
    return no_content()


@bp.route('/<int:family_id>/members', methods=['GET'])
def list_family_members(family_id):
    family = get_or_404(Family, family_id, "Family not found")
    return jsonify([m.to_dict() for m in family.members])
