# =============================================================================
# AgriDrone Backend
# services/token_service.py - Token Service
#
# Mints and verifies signed bearer tokens asserting a user identity.
# Verification depends only on the token string and the current time:
# there is no revocation list, so logout is a client-side discard.
# =============================================================================

from dataclasses import dataclass
from datetime import datetime, timezone

import jwt as pyjwt
from flask import current_app
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException

from agridrone.errors import InvalidToken


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, passed explicitly to every protected handler."""
    user_id: str
    username: str


def _utcnow():
    return datetime.now(timezone.utc)


class TokenService:
    """
    Issue and verify access tokens.

    Args:
        clock: Callable returning the current aware datetime. Injected by
            tests to move time forward without sleeping.
    """

    def __init__(self, clock=None):
        self.clock = clock or _utcnow

    def issue(self, user_id, username):
        """
        Create a signed token for the user.

        iat and exp are stamped from wall-clock time by Flask-JWT-Extended,
        with the lifetime taken from JWT_ACCESS_TOKEN_EXPIRES (seven days).
        The injected clock is only consulted by verify().

        Returns:
            str: Encoded token carrying {sub, username, iat, exp}
        """
        return create_access_token(
            identity=str(user_id),
            additional_claims={'username': username}
        )

    def verify(self, token):
        """
        Check a token's signature, payload and expiry.

        Returns:
            Identity: The user the token was issued to

        Raises:
            InvalidToken: Bad signature, malformed payload, or expired
        """
        if not token:
            raise InvalidToken('Missing token')

        try:
            # Expiry is checked below against the injected clock
            claims = decode_token(token, allow_expired=True)
        except (pyjwt.PyJWTError, JWTExtendedException) as e:
            raise InvalidToken(f'Token verification failed: {e}') from e

        user_id = claims.get('sub')
        username = claims.get('username')
        expires_at = claims.get('exp')
        if not user_id or not username or not isinstance(expires_at, (int, float)):
            raise InvalidToken('Token payload is malformed')

        if self.clock().timestamp() >= expires_at:
            raise InvalidToken('Token has expired')

        return Identity(user_id=user_id, username=username)


def init_token_service(app, clock=None):
    """Attach a TokenService to the app; routes reach it via get_token_service()."""
    app.config['TOKEN_SERVICE'] = TokenService(clock=clock)
    return app.config['TOKEN_SERVICE']


def get_token_service():
    return current_app.config['TOKEN_SERVICE']
