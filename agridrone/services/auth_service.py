# =============================================================================
# AgriDrone Backend
# services/auth_service.py - Signup and Login
#
# Credential handling shared by the auth routes. Passwords are hashed with
# bcrypt; a successful signup or login always returns a fresh token.
# =============================================================================

from flask import current_app

from agridrone import constants
from agridrone.errors import Conflict, InvalidCredentials, NotFound
from agridrone.extensions import bcrypt
from agridrone.services.token_service import get_token_service
from agridrone.storage import storage


def hash_password(password):
    return bcrypt.generate_password_hash(password).decode('utf-8')


def _dummy_hash():
    # Compared against when the username is unknown so both login failure
    # paths cost one bcrypt check
    cached = current_app.config.get('_DUMMY_PASSWORD_HASH')
    if cached is None:
        cached = hash_password('agridrone-dummy-password')
        current_app.config['_DUMMY_PASSWORD_HASH'] = cached
    return cached


def signup(payload):
    """
    Register a new farmer account.

    Args:
        payload: Validated SignupRequest

    Returns:
        tuple: (User, token)

    Raises:
        Conflict: Username or email already registered
    """
    if storage.users.get_by_username(payload.username) or \
            storage.users.get_by_email(payload.email):
        raise Conflict(constants.MESSAGES['USER_EXISTS'])

    user = storage.users.create({
        'username': payload.username,
        'email': payload.email,
        'password_hash': hash_password(payload.password),
        'full_name': payload.full_name,
        'role': constants.DEFAULT_ROLE
    })

    token = get_token_service().issue(user.id, user.username)
    return user, token


def login(username, password):
    """
    Authenticate by username and password.

    Unknown usernames and wrong passwords raise the same error.

    Returns:
        tuple: (User, token)

    Raises:
        InvalidCredentials: On any mismatch
    """
    user = storage.users.get_by_username(username)

    if user is None:
        bcrypt.check_password_hash(_dummy_hash(), password)
        raise InvalidCredentials(constants.MESSAGES['INVALID_CREDENTIALS'])

    if not bcrypt.check_password_hash(user.password_hash, password):
        raise InvalidCredentials(constants.MESSAGES['INVALID_CREDENTIALS'])

    token = get_token_service().issue(user.id, user.username)
    return user, token


def current_user(identity):
    """Load the account behind a verified identity."""
    user = storage.users.get_by_id(identity.user_id)
    if user is None:
        raise NotFound('User not found')
    return user
