"""
Mealmaker

Flask JSON API for household meal planning: families and their members,
a recipe catalog, weekly plan generation, sides, grocery lists and
natural-language setup.
"""

import logging
import sqlite3

from flask import Flask, jsonify
from flask_migrate import Migrate
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from config import get_config
from constants import DEFAULT_SIDES
from models import db, SideLibraryEntry
from routes import register_blueprints
from services.errors import ApiError
from utils import SSRFError

logger = logging.getLogger(__name__)

migrate = Migrate()


# Enable SQLite foreign key enforcement
@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def register_error_handlers(app):
    """Every error leaves the API as JSON with an 'error' key."""

    @app.errorhandler(ApiError)
    def handle_api_error(exc):
        db.session.rollback()
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(SSRFError)
    def handle_ssrf_error(exc):
        db.session.rollback()
        logger.warning("Blocked URL fetch: %s", exc)
        return jsonify({'error': str(exc)}), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify({'error': exc.description}), exc.code

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(exc):
        db.session.rollback()
        logger.warning("Integrity error: %s", exc.orig)
        return jsonify({'error': "Conflict with existing data"}), 409

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc):
        db.session.rollback()
        logger.exception("Unhandled error")
        return jsonify({'error': str(exc)}), 500


def create_app(config_name=None):
    """Application factory."""
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app.json.sort_keys = False

    db.init_app(app)
    migrate.init_app(app, db)

    register_blueprints(app)
    register_error_handlers(app)

    @app.route('/api/health')
    def health():
        return jsonify({'status': 'ok'})

    return app


def seed_sides_library():
    """Load the standard sides into an empty library."""
    if SideLibraryEntry.query.first() is not None:
        return 0
    for name, category, weight, cuisines, prep_minutes in DEFAULT_SIDES:
        db.session.add(SideLibraryEntry(
            name=name,
            category=category,
            weight=weight,
            cuisine_affinity=list(cuisines),
            prep_time_minutes=prep_minutes,
        ))
    db.session.commit()
    logger.info("Seeded sides library with %d sides", len(DEFAULT_SIDES))
    return len(DEFAULT_SIDES)


def init_db(target=None):
    target = target or app
    with target.app_context():
        db.create_all()
        seed_sides_library()


app = create_app()


if __name__ == '__main__':
    init_db()
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=True, host='0.0.0.0', port=5000, use_reloader=False)
