# =============================================================================
# AgriDrone Backend
# config.py - Configuration Management
#
# Environment-based configuration for development, testing, and production.
# Uses python-dotenv to load environment variables from .env file.
# =============================================================================

import os
from datetime import timedelta
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """
    Base configuration class with default settings.
    All other configuration classes inherit from this.
    """

    # ==========================================================================
    # Flask Core Settings
    # ==========================================================================
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = False
    TESTING = False

    # ==========================================================================
    # Database Configuration
    # ==========================================================================
    SQLALCHEMY_DATABASE_URI = os.getenv(
        'DATABASE_URL',
        'sqlite:///agridrone.db'  # Fallback to SQLite for development
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False
    SQLALCHEMY_ENGINE_OPTIONS = {}

    # ==========================================================================
    # Token Configuration
    # Tokens carry {sub: user id, username, iat, exp}; rotating the secret
    # invalidates every token issued before the rotation.
    # ==========================================================================
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'jwt-secret-key-change-in-production')
    JWT_ALGORITHM = 'HS256'
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=7)
    JWT_TOKEN_LOCATION = ['headers']
    JWT_HEADER_NAME = 'Authorization'
    JWT_HEADER_TYPE = 'Bearer'

    # ==========================================================================
    # Password Hashing
    # ==========================================================================
    BCRYPT_LOG_ROUNDS = int(os.getenv('BCRYPT_LOG_ROUNDS', 10))

    # ==========================================================================
    # Rate Limiting Configuration
    # ==========================================================================
    RATELIMIT_ENABLED = os.getenv('RATELIMIT_ENABLED', 'True').lower() == 'true'
    RATELIMIT_STORAGE_URI = os.getenv('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_STRATEGY = os.getenv('RATELIMIT_STRATEGY', 'fixed-window')
    RATELIMIT_DEFAULT = os.getenv('RATELIMIT_DEFAULT', '200 per hour')
    RATELIMIT_HEADERS_ENABLED = True

    # ==========================================================================
    # CORS Configuration
    # ==========================================================================
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', 'http://localhost:5173').split(',')
    CORS_SUPPORTS_CREDENTIALS = True

    # ==========================================================================
    # Request Limits
    # ==========================================================================
    MAX_CONTENT_LENGTH = 1 * 1024 * 1024  # 1MB JSON bodies

    # Seed the demo farmer account on startup
    SEED_SAMPLE_DATA = False


class DevelopmentConfig(Config):
    """
    Development configuration with debug mode enabled.
    Uses SQLite database for easy local development.
    """
    DEBUG = True
    SQLALCHEMY_ECHO = os.getenv('SQLALCHEMY_ECHO', 'False').lower() == 'true'

    SQLALCHEMY_DATABASE_URI = os.getenv(
        'DATABASE_URL',
        'sqlite:///agridrone_dev.db'
    )

    # Relaxed rate limiting for development
    RATELIMIT_DEFAULT = '1000 per hour'

    SEED_SAMPLE_DATA = os.getenv('SEED_SAMPLE_DATA', 'True').lower() == 'true'


class TestingConfig(Config):
    """
    Testing configuration for automated tests.
    Uses in-memory SQLite database for fast test execution.
    """
    TESTING = True
    DEBUG = True

    # In-memory database for testing
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'

    JWT_SECRET_KEY = 'testing-jwt-secret'

    # Minimum bcrypt cost keeps the suite fast
    BCRYPT_LOG_ROUNDS = 4

    # Disable rate limiting during tests
    RATELIMIT_ENABLED = False


class ProductionConfig(Config):
    """
    Production configuration with security hardening.
    Requires all secrets to be set via environment variables.
    """
    DEBUG = False
    TESTING = False

    # Production requires proper DATABASE_URL
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL')

    # Connection pooling for production performance
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 10,
        'pool_recycle': 3600,
        'pool_pre_ping': True,
        'max_overflow': 20,
        'pool_timeout': 30
    }

    # Use Redis for rate limiting in production
    RATELIMIT_STORAGE_URI = os.getenv('REDIS_URL', 'memory://')

    # Stricter rate limits for production
    RATELIMIT_DEFAULT = '100 per hour'


# =============================================================================
# Configuration Dictionary
# Maps environment names to configuration classes
# =============================================================================
config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}


def get_config():
    """
    Get the appropriate configuration based on FLASK_ENV environment variable.

    Returns:
        Config: Configuration class for the current environment
    """
    env = os.getenv('FLASK_ENV', 'development')
    return config.get(env, config['default'])
