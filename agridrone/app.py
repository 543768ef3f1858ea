# =============================================================================
# AgriDrone Backend
# app.py - Application Factory & Entry Point
#
# Flask application factory pattern implementation with extension
# initialization, blueprint registration and JSON error handlers.
# =============================================================================

import os
import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from agridrone.config import config, get_config
from agridrone.errors import APIError
from agridrone.extensions import db, migrate, jwt, bcrypt, cors, limiter
from agridrone.services.token_service import init_token_service
from agridrone.utils import error_response


def create_app(config_name=None, clock=None):
    """
    Application factory function.

    Creates and configures the Flask application with all extensions,
    blueprints, and error handlers.

    Args:
        config_name: Configuration environment ('development', 'testing', 'production')
                    Defaults to FLASK_ENV environment variable or 'development'
        clock: Optional callable returning the current aware datetime, used
               by the token service when checking expiry

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)

    # Load configuration
    if config_name is None:
        app.config.from_object(get_config())
        config_name = os.getenv('FLASK_ENV', 'development')
    else:
        app.config.from_object(config[config_name])

    # Setup logging
    setup_logging(app)

    # Initialize extensions
    init_extensions(app)
    init_token_service(app, clock=clock)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Setup database session handling
    setup_database_handlers(app)

    # Development creates tables on startup; production uses migrations
    if app.config['DEBUG'] and not app.config['TESTING']:
        from agridrone.init_db import init_database
        init_database(app, seed=app.config.get('SEED_SAMPLE_DATA', False))

    app.logger.info(f"AgriDrone API started in {config_name} mode")

    return app


def setup_logging(app):
    """
    Configure application logging.

    Sets up logging format and level based on environment.
    """
    log_level = logging.DEBUG if app.config['DEBUG'] else logging.INFO

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    app.logger.setLevel(log_level)


def init_extensions(app):
    """
    Initialize Flask extensions with the application instance.

    Extensions are created in extensions.py without app context,
    then initialized here with the app instance.
    """
    # Database ORM
    db.init_app(app)

    # Database migrations
    migrate.init_app(app, db)

    # Token signing (see services/token_service.py)
    jwt.init_app(app)

    # Password hashing, cost from BCRYPT_LOG_ROUNDS
    bcrypt.init_app(app)

    # CORS - Cross Origin Resource Sharing
    cors.init_app(
        app,
        origins=app.config.get('CORS_ORIGINS', ['http://localhost:5173']),
        supports_credentials=app.config.get('CORS_SUPPORTS_CREDENTIALS', True),
        allow_headers=['Content-Type', 'Authorization'],
        methods=['GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']
    )

    # Rate limiting
    limiter.init_app(app)

    app.logger.info("Flask extensions initialized")


def register_blueprints(app):
    """
    Register all API route blueprints.

    All API routes are prefixed with '/api'.
    """
    from agridrone.routes import (
        auth_bp,
        crops_bp,
        fields_bp,
        drones_bp,
        health_records_bp,
        pesticides_bp,
        contact_bp,
        dashboard_bp,
    )

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(crops_bp, url_prefix='/api/crops')
    app.register_blueprint(fields_bp, url_prefix='/api/fields')
    app.register_blueprint(drones_bp, url_prefix='/api/drones')
    app.register_blueprint(health_records_bp, url_prefix='/api/health-records')
    app.register_blueprint(pesticides_bp, url_prefix='/api/pesticide-applications')
    app.register_blueprint(contact_bp, url_prefix='/api/contact')
    app.register_blueprint(dashboard_bp, url_prefix='/api/dashboard')

    # Health check endpoint at root level
    @app.route('/health', methods=['GET'])
    @limiter.exempt
    def health_check():
        """
        Health check endpoint for monitoring and load balancers.

        Returns:
            JSON response with API status and database connectivity
        """
        db_healthy = False

        try:
            db.session.execute(db.text('SELECT 1'))
            db_healthy = True
        except Exception as e:
            app.logger.error(f"Database health check failed: {e}")
            db.session.rollback()

        return jsonify({
            'status': 'healthy' if db_healthy else 'degraded',
            'message': 'AgriDrone API is running',
            'version': '1.0.0',
            'database': 'connected' if db_healthy else 'error'
        }), 200 if db_healthy else 503

    # Root endpoint
    @app.route('/', methods=['GET'])
    def index():
        """Root endpoint with API information."""
        return jsonify({
            'name': 'AgriDrone API',
            'description': 'Drone-assisted crop health monitoring and pesticide planning',
            'version': '1.0.0',
            'health': '/health'
        })

    app.logger.info("Blueprints registered")


def register_error_handlers(app):
    """
    Register global error handlers.

    Provides consistent JSON error responses across the API: APIError
    subclasses raised by handlers, plus werkzeug's HTTP errors.
    """

    @app.errorhandler(APIError)
    def handle_api_error(error):
        if error.status_code >= 500:
            db.session.rollback()
            app.logger.error(f"{error.error}: {error.message}")
        return error_response(
            error.error,
            message=error.message,
            details=error.details,
            status_code=error.status_code
        )

    @app.errorhandler(400)
    def bad_request(error):
        return error_response(
            'Bad Request',
            message=error.description or 'Invalid request',
            status_code=400
        )

    @app.errorhandler(401)
    def unauthorized(error):
        return error_response('Unauthorized', message='Authentication required', status_code=401)

    @app.errorhandler(403)
    def forbidden(error):
        return error_response(
            'Forbidden',
            message='You do not have permission to access this resource',
            status_code=403
        )

    @app.errorhandler(404)
    def not_found(error):
        return error_response(
            'Not Found',
            message='The requested resource was not found',
            status_code=404
        )

    @app.errorhandler(405)
    def method_not_allowed(error):
        return error_response(
            'Method Not Allowed',
            message='The method is not allowed for this endpoint',
            status_code=405
        )

    @app.errorhandler(413)
    def request_entity_too_large(error):
        return error_response(
            'Payload Too Large',
            message='The request body exceeds the maximum allowed size',
            status_code=413
        )

    @app.errorhandler(429)
    def rate_limit_exceeded(error):
        return error_response(
            'Rate Limit Exceeded',
            message='Too many requests. Please try again later.',
            status_code=429
        )

    @app.errorhandler(500)
    def internal_server_error(error):
        db.session.rollback()
        app.logger.error(f"Internal server error: {error}")
        return error_response(
            'Internal Server Error',
            message='An unexpected error occurred. Please try again later.',
            status_code=500
        )

    @app.errorhandler(Exception)
    def unhandled_exception(error):
        if isinstance(error, HTTPException):
            return error
        db.session.rollback()
        app.logger.exception(f"Unhandled exception: {error}")
        return error_response(
            'Internal Server Error',
            message='An unexpected error occurred. Please try again later.',
            status_code=500
        )

    app.logger.info("Error handlers registered")


def setup_database_handlers(app):
    """
    Remove the database session at the end of every request, rolling back
    if the request failed.
    """

    @app.teardown_appcontext
    def shutdown_session(exception=None):
        if exception:
            db.session.rollback()
        db.session.remove()


# =============================================================================
# Application Entry Point
# =============================================================================

if __name__ == '__main__':
    app = create_app()

    port = int(os.getenv('PORT', 5000))

    app.run(
        host='0.0.0.0',
        port=port,
        debug=app.config['DEBUG']
    )
