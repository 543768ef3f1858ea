# =============================================================================
# AgriDrone Backend
# decorators.py - Reusable Decorators
#
# Custom decorators for authentication, request validation, database error
# handling and request logging.
# =============================================================================

from functools import wraps

from flask import request, current_app
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from agridrone.errors import (
    APIError,
    Conflict,
    InternalError,
    InvalidToken,
    Unauthenticated,
    ValidationError,
)
from agridrone.extensions import db
from agridrone.services.token_service import get_token_service
from agridrone.utils import error_response, pydantic_errors_to_fields


def extract_bearer_token(header):
    """
    Pull the token out of an Authorization header value.

    Raises:
        Unauthenticated: Header missing or not of the form 'Bearer <token>'
    """
    if not header:
        raise Unauthenticated('Missing access token')

    parts = header.split()
    if len(parts) != 2 or parts[0] != 'Bearer':
        raise Unauthenticated("Authorization header must be 'Bearer <token>'")

    return parts[1]


def auth_required(f):
    """
    Require a valid bearer token before the handler runs.

    The verified caller is passed to the decorated function as the
    'identity' keyword argument.

    Usage:
        @crops_bp.route('', methods=['GET'])
        @auth_required
        def list_crops(identity):
            ...
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = extract_bearer_token(request.headers.get('Authorization'))

        try:
            identity = get_token_service().verify(token)
        except InvalidToken as e:
            current_app.logger.info(f"Rejected token on {request.path}: {e}")
            raise Unauthenticated('Invalid or expired token') from e

        kwargs['identity'] = identity
        return f(*args, **kwargs)
    return decorated_function


def validate_body(schema):
    """
    Validate the JSON request body against a pydantic schema.

    Checks that the body is a JSON object, validates it, and passes the
    parsed model to the decorated function as the 'payload' keyword.

    Args:
        schema: pydantic model class

    Usage:
        @crops_bp.route('', methods=['POST'])
        @auth_required
        @validate_body(CropCreate)
        def create_crop(identity, payload):
            ...
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                raise ValidationError(
                    {'body': 'Request body must be a JSON object'},
                    message='Invalid JSON or empty request body'
                )

            try:
                kwargs['payload'] = schema.model_validate(data)
            except PydanticValidationError as e:
                raise ValidationError(pydantic_errors_to_fields(e)) from e

            return f(*args, **kwargs)
        return decorated_function
    return decorator


def handle_db_errors(f):
    """
    Handle database errors and return appropriate responses.

    API errors raised by the handler pass through untouched. Integrity
    violations on unique columns become Conflict; other store failures
    become a generic error so raw database messages never leak.

    Usage:
        @crops_bp.route('', methods=['POST'])
        @handle_db_errors
        def create_crop():
            ...
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)

        except APIError:
            raise

        except IntegrityError as e:
            db.session.rollback()
            current_app.logger.error(f"Database integrity error: {e}")

            error_msg = str(e.orig).lower()
            if 'unique' in error_msg or 'duplicate' in error_msg:
                raise Conflict('A record with this value already exists') from e
            raise ValidationError(
                {'body': 'Database constraint violation'},
                message='Referenced record does not exist or a required value is missing'
            ) from e

        except OperationalError as e:
            db.session.rollback()
            current_app.logger.error(f"Database operational error: {e}")
            return error_response(
                'Service Unavailable',
                message='Database is temporarily unavailable',
                status_code=503
            )

        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.error(f"Unexpected database error: {e}")
            raise InternalError() from e

    return decorated_function


def log_request(f):
    """
    Log incoming request details and the response status.

    Usage:
        @auth_bp.route('/login', methods=['POST'])
        @log_request
        def login():
            ...
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        current_app.logger.info(
            f"Request: {request.method} {request.path} "
            f"from {request.remote_addr}"
        )

        response = f(*args, **kwargs)

        if isinstance(response, tuple):
            status_code = response[1] if len(response) > 1 else 200
        else:
            status_code = getattr(response, 'status_code', 200)

        current_app.logger.info(
            f"Response: {status_code} for {request.method} {request.path}"
        )

        return response
    return decorated_function
