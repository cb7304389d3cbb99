"""
Application Configuration

Centralizes all Flask and application configuration settings.
"""

import os

# Base directory of the application
BASE_DIR = os.path.dirname(os.path.abspath(__file__))


class Config:
    """Base configuration class."""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-only-change-in-production')
    JSON_SORT_KEYS = False

    # SQLAlchemy settings
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///mealmaker.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

    # Anthropic (smart setup / conversational planning)
    ANTHROPIC_API_KEY = os.environ.get('ANTHROPIC_API_KEY', '')
    ANTHROPIC_MODEL = os.environ.get('ANTHROPIC_MODEL', 'claude-sonnet-4-5-20250929')
    ANTHROPIC_FAST_MODEL = os.environ.get('ANTHROPIC_FAST_MODEL', 'claude-haiku-4-5-20251001')
    LLM_MAX_RETRIES = 2
    LLM_RETRY_DELAY = 10  # seconds to wait after a 429

    # Recipe import fetching
    FETCH_TIMEOUT = 10
    FETCH_MAX_BYTES = 10 * 1024 * 1024

    # Planning defaults
    DEFAULT_VEGETARIAN_RATIO = 40
    DEFAULT_MAX_COOK_WEEKDAY = 45
    DEFAULT_MAX_COOK_WEEKEND = 90
    LUNCH_MAX_COOK_MINUTES = 20


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    ANTHROPIC_API_KEY = 'test-key'
    LLM_RETRY_DELAY = 0


# Configuration dictionary for easy access
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(env=None):
    """Get configuration based on environment."""
    if env is None:
        env = os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
