# =============================================================================
# AgriDrone Backend
# routes/auth.py - Authentication Routes
#
# Handles user signup, login, logout, and the current user's profile.
# Uses signed bearer tokens for stateless authentication.
# =============================================================================

from flask import Blueprint, current_app

from agridrone import constants
from agridrone.decorators import auth_required, validate_body, handle_db_errors, log_request
from agridrone.errors import InvalidCredentials
from agridrone.extensions import limiter
from agridrone.schemas import SignupRequest, LoginRequest
from agridrone.services import auth_service
from agridrone.utils import success_response

# Create blueprint
auth_bp = Blueprint('auth', __name__)


# =============================================================================
# User Signup
# =============================================================================

@auth_bp.route('/signup', methods=['POST'])
@limiter.limit("5 per minute")
@log_request
@handle_db_errors
@validate_body(SignupRequest)
def signup(payload):
    """
    Register a new farmer account.

    Request Body:
        username (str): Unique username (required)
        email (str): Unique, well-formed email address (required)
        password (str): Password (required)
        fullName (str): Display name (required)

    Returns:
        201: User created with token
        400: Validation error or user already exists
    """
    user, token = auth_service.signup(payload)

    current_app.logger.info(f"New user registered: {user.username}")

    return success_response(
        message=constants.MESSAGES['SIGNUP_SUCCESS'],
        status_code=201,
        user=user.to_dict(),
        token=token
    )


# =============================================================================
# User Login
# =============================================================================

@auth_bp.route('/login', methods=['POST'])
@limiter.limit("10 per minute")
@log_request
@handle_db_errors
@validate_body(LoginRequest)
def login(payload):
    """
    Authenticate user and return a token.

    Request Body:
        username (str): Username
        password (str): Password

    Returns:
        200: Login successful with token
        400: Missing credentials
        401: Invalid credentials
    """
    try:
        user, token = auth_service.login(payload.username, payload.password)
    except InvalidCredentials:
        current_app.logger.info(f"Failed login attempt for: {payload.username}")
        raise

    current_app.logger.info(f"User logged in: {user.username}")

    return success_response(
        message=constants.MESSAGES['LOGIN_SUCCESS'],
        user=user.to_dict(),
        token=token
    )


# =============================================================================
# Get Current User Profile
# =============================================================================

@auth_bp.route('/me', methods=['GET'])
@auth_required
def get_me(identity):
    """
    Get current user's profile information.

    Headers:
        Authorization: Bearer <token>

    Returns:
        200: User profile data
        401: Not authenticated
        404: User not found
    """
    user = auth_service.current_user(identity)
    return success_response(data=user.to_dict())


# =============================================================================
# Logout
# =============================================================================

@auth_bp.route('/logout', methods=['POST'])
@auth_required
def logout(identity):
    """
    Logout user (client should discard the token).

    Note: Tokens are stateless and stay valid until they expire. There is
    no server-side revocation.

    Returns:
        200: Logout acknowledged
    """
    current_app.logger.info(f"User logged out: {identity.username}")
    return success_response(message=constants.MESSAGES['LOGOUT_SUCCESS'])
