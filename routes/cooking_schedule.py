"""Weekly cooking schedule and lunch planning routes."""

from flask import Blueprint, jsonify, request

from models import db, Family, FamilyMember
from services.errors import ApiError
from services.parsing import safe_int
from services.schedule import (
    replace_cooking_schedule, replace_lunch_needs, load_cooking_schedule, load_lunch_needs,
)
from services.validation import validate_schedule_entry, validate_lunch_entry, ensure_valid
from .common import get_json, get_or_404

bp = Blueprint('cooking_schedule', __name__)


def _week_args():
    family_id = safe_int(request.args.get('family_id'))
    week_start = request.args.get('week_start')
    if not family_id or not week_start:
        raise ApiError("family_id and week_start are required", 400)
    return family_id, week_start


@bp.route('', methods=['GET'])
def get_schedule():
    family_id, week_start = _week_args()
    return jsonify([row.to_dict() for row in load_cooking_schedule(family_id, week_start)])


@bp.route('', methods=['POST'])
def save_schedule():
    data = get_json()
    schedule = data.get('schedule')
    if not data.get('family_id') or not data.get('week_start') or not isinstance(schedule, list):
        raise ApiError("family_id, week_start, and schedule array are required", 400)

    errors = []
    for index, entry in enumerate(schedule):
        errors.extend(validate_schedule_entry(entry, index))
    ensure_valid(errors)
    get_or_404(Family, data['family_id'], "Family not found")

    replace_cooking_schedule(data['family_id'], data['week_start'], schedule)
    db.session.commit()
    return jsonify({'message': "Cooking schedule saved"}), 201


@bp.route('/lunch', methods=['GET'])
def get_lunch_needs():
    family_id, week_start = _week_args()
    return jsonify([row.to_dict() for row in load_lunch_needs(family_id, week_start)])


@bp.route('/lunch', methods=['POST'])
def save_lunch_needs():
    data = get_json()
    lunch_needs = data.get('lunch_needs')
    if not data.get('family_id') or not data.get('week_start') or not isinstance(lunch_needs, list):
        raise ApiError("family_id, week_start, and lunch_needs array are required", 400)

    errors = []
    for index, entry in enumerate(lunch_needs):
        errors.extend(validate_lunch_entry(entry, index))
    ensure_valid(errors)
    family = get_or_404(Family, data['family_id'], "Family not found")

    member_ids = {m.id for m in FamilyMember.query.filter_by(family_id=family.id)}
    for entry in lunch_needs:
        if entry['member_id'] not in member_ids:
            raise ApiError(f"Member {entry['member_id']} does not belong to this family", 400)

    replace_lunch_needs(family.id, data['week_start'], lunch_needs)
    db.session.commit()
    return jsonify({'message': "Lunch needs saved"}), 201
