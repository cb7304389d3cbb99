"""
Database Base Module

Creates the SQLAlchemy database instance that all models inherit from.
This is separate to avoid circular imports.

Also defines the JSON column types used for array/object fields. Values are
stored as JSON text so the schema works unchanged on SQLite and Postgres.
"""

import json
from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.types import Text, TypeDecorator

# Create the SQLAlchemy instance
# This will be initialized with the Flask app in app.py
db = SQLAlchemy()


def utcnow():
    """Naive UTC timestamp for created_at columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class JSONList(TypeDecorator):
    """List column stored as JSON text. NULL and bad JSON read back as []."""
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            value = []
        return json.dumps(list(value))

    def process_result_value(self, value, dialect):
        if not value:
            return []
        try:
            result = json.loads(value)
        except (ValueError, TypeError):
            return []
        return result if isinstance(result, list) else []


class JSONDict(TypeDecorator):
    """Dict column stored as JSON text. NULL reads back as {}."""
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            value = {}
        return json.dumps(dict(value))

    def process_result_value(self, value, dialect):
        if not value:
            return {}
        try:
            result = json.loads(value)
        except (ValueError, TypeError):
            return {}
        return result if isinstance(result, dict) else {}


def isoformat(value):
    return value.isoformat() if value else None
