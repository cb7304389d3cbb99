"""Family member routes."""

from flask import Blueprint, jsonify

from models import db, Family, FamilyMember
from services.errors import ApiError
from services.validation import validate_member, ensure_valid
from .common import get_json, get_or_404, apply_fields, query_int, no_content

bp = Blueprint('members', __name__)


@bp.route('', methods=['GET'])
def list_members():
    family_id = query_int('family_id')
    members = FamilyMember.query.filter_by(family_id=family_id).order_by(FamilyMember.id).all()
    return jsonify([m.to_dict() for m in members])


@bp.route('/<int:member_id>', methods=['GET'])
def get_member(member_id):
    return jsonify(get_or_404(FamilyMember, member_id, "Member not found").to_dict())


@bp.route('', methods=['POST'])
def create_member():
    data = get_json()
    ensure_valid(validate_member(data))
    get_or_404(Family, data['family_id'], "Family not found")

    member = FamilyMember(family_id=data['family_id'])
    apply_fields(member, data, FamilyMember.EDITABLE_FIELDS)
    member.name = data['name'].strip()
    db.session.add(member)
    db.session.commit()
    return jsonify(member.to_dict()), 201


@bp.route('/<int:member_id>', methods=['PUT'])
def update_member(member_id):
    member = get_or_404(FamilyMember, member_id, "Member not found")
    data = get_json()
    if not any(field in data for field in FamilyMember.EDITABLE_FIELDS):
        raise ApiError("No fields to update", 400)
    ensure_valid(validate_member(data, partial=True))

    apply_fields(member, data, FamilyMember.EDITABLE_FIELDS)
    if 'name' in data:
        member.name = data['name'].strip()
    db.session.commit()
    return jsonify(member.to_dict())


@bp.route('/<int:member_id>', methods=['DELETE'])
def delete_member(member_id):
    member = get_or_404(FamilyMember, member_id, "Member not found")
    db.session.delete(member)
    db.session.commit()
    return no_content()
