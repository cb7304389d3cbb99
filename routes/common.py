"""Request helpers shared by the blueprints."""

from flask import request

from models import db
from services.errors import ApiError, NotFoundError, ValidationError
from services.parsing import safe_int


def get_json():
    """The request's JSON object body ({} when there is none)."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ApiError("Request body must be a JSON object", 400)
    return data


def get_or_404(model, ident, message):
    obj = db.session.get(model, ident)
    if obj is None:
        raise NotFoundError(message)
    return obj


def query_int(name, required=True):
    """Integer query-string argument; a missing required one is a 400."""
    value = safe_int(request.args.get(name))
    if value is None and required:
        raise ApiError(f"{name} is required", 400)
    return value


def apply_fields(obj, data, fields):
    """
    Copy the supplied fields onto obj. Returns the names that were set.

    An explicit null for a NOT NULL column is a validation error.
    """
    changed = [field for field in fields if field in data]
    columns = obj.__table__.columns
    errors = [{'field': field, 'message': 'Must not be null'} for field in changed
              if data[field] is None and field in columns and not columns[field].nullable]
    if errors:
        raise ValidationError(errors)
    for field in changed:
        setattr(obj, field, data[field])
    return changed


def no_content():
    return '', 204
