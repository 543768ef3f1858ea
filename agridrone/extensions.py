# =============================================================================
# AgriDrone Backend
# extensions.py - Flask Extensions Initialization
#
# This module initializes Flask extensions without the app instance to prevent
# circular imports. Extensions are initialized with the app in the factory.
# =============================================================================

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
from flask_bcrypt import Bcrypt
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# =============================================================================
# Database ORM
# Backing store for every repository in storage.py
# =============================================================================
db = SQLAlchemy()

# =============================================================================
# Database Migrations
# Alembic-based migrations for schema version control
# =============================================================================
migrate = Migrate()

# =============================================================================
# JWT Signing
# Encodes and decodes the bearer tokens minted by the token service
# =============================================================================
jwt = JWTManager()

# =============================================================================
# Password Hashing
# Bcrypt for secure password hashing and verification
# =============================================================================
bcrypt = Bcrypt()

# =============================================================================
# Cross-Origin Resource Sharing
# Enables the dashboard client to call the API from a different origin
# =============================================================================
cors = CORS()

# =============================================================================
# Rate Limiting
# Protects API endpoints from abuse, notably credential guessing on login.
# Storage, strategy and default limits come from the RATELIMIT_* config keys
# so production can point the counters at Redis.
# =============================================================================
limiter = Limiter(key_func=get_remote_address)
