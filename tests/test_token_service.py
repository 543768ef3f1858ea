from datetime import datetime, timedelta

import jwt as pyjwt
import pytest

from agridrone.errors import InvalidToken
from agridrone.services.token_service import Identity, get_token_service


def encode(claims, secret='testing-jwt-secret'):
    return pyjwt.encode(claims, secret, algorithm='HS256')


def test_issued_token_verifies_to_same_identity(app):
    service = get_token_service()

    token = service.issue('user-1', 'alice')

    assert service.verify(token) == Identity(user_id='user-1', username='alice')


def test_token_carries_seven_day_lifetime(app):
    token = get_token_service().issue('user-1', 'alice')

    claims = pyjwt.decode(token, options={'verify_signature': False})

    assert claims['sub'] == 'user-1'
    assert claims['username'] == 'alice'
    assert claims['exp'] - claims['iat'] == int(timedelta(days=7).total_seconds())


def test_token_valid_just_before_expiry(app, clock):
    service = get_token_service()
    token = service.issue('user-1', 'alice')

    clock.advance(days=7, seconds=-60)

    assert service.verify(token).user_id == 'user-1'


def test_token_rejected_after_expiry(app, clock):
    service = get_token_service()
    token = service.issue('user-1', 'alice')

    clock.advance(days=7, seconds=60)

    with pytest.raises(InvalidToken):
        service.verify(token)


def test_tampered_signature_rejected(app):
    service = get_token_service()
    token = service.issue('user-1', 'alice')
    head, payload, signature = token.split('.')
    flipped = ('A' if signature[0] != 'A' else 'B') + signature[1:]

    with pytest.raises(InvalidToken):
        service.verify('.'.join([head, payload, flipped]))


def test_token_signed_with_other_secret_rejected(app, clock):
    exp = int((clock() + timedelta(days=1)).timestamp())
    token = encode({'sub': 'user-1', 'username': 'alice', 'exp': exp}, secret='another-secret')

    with pytest.raises(InvalidToken):
        get_token_service().verify(token)


def test_token_without_username_rejected(app, clock):
    exp = int((clock() + timedelta(days=1)).timestamp())
    token = encode({'sub': 'user-1', 'exp': exp})

    with pytest.raises(InvalidToken):
        get_token_service().verify(token)


@pytest.mark.parametrize('token', ['', 'not-a-token', 'a.b.c'])
def test_garbage_rejected(app, token):
    with pytest.raises(InvalidToken):
        get_token_service().verify(token)


def test_clock_controls_expiry_check(app, clock):
    service = get_token_service()
    token = service.issue('user-1', 'alice')

    clock.set(datetime.fromtimestamp(0, tz=clock().tzinfo))

    assert service.verify(token).username == 'alice'


def test_token_rejected_exactly_at_exp(app, clock):
    service = get_token_service()
    token = service.issue('user-1', 'alice')
    exp = pyjwt.decode(token, options={'verify_signature': False})['exp']

    clock.set(datetime.fromtimestamp(exp - 1, tz=clock().tzinfo))
    assert service.verify(token).user_id == 'user-1'

    clock.set(datetime.fromtimestamp(exp, tz=clock().tzinfo))
    with pytest.raises(InvalidToken):
        service.verify(token)


def test_issue_stamps_wall_clock_time(app, clock):
    clock.set(datetime.fromtimestamp(0, tz=clock().tzinfo))

    token = get_token_service().issue('user-1', 'alice')

    claims = pyjwt.decode(token, options={'verify_signature': False})
    assert claims['iat'] > 0
    assert claims['iat'] >= int(datetime.now(clock().tzinfo).timestamp()) - 60
