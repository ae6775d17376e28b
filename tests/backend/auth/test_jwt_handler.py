from datetime import datetime, timedelta, timezone

import jwt
import pytest

from backend.auth import jwt_handler
from backend.core import config


def test_create_access_token_embeds_identity_claims() -> None:
    token = jwt_handler.create_access_token(user_id='user-1', email='a@b.com', role='TEACHER')

    payload = jwt_handler.decode_access_token(token)

    assert payload['sub'] == 'user-1'
    assert payload['id'] == 'user-1'
    assert payload['email'] == 'a@b.com'
    assert payload['role'] == 'TEACHER'


def test_create_access_token_uses_configured_expiry(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'JWT_EXPIRES_MINUTES', 60)

    payload = jwt_handler.decode_access_token(
        jwt_handler.create_access_token(user_id='user-1', email='a@b.com', role='LEARNER')
    )

    assert payload['exp'] - payload['iat'] == 60 * 60


def test_decode_access_token_rejects_expired_token() -> None:
    token = jwt_handler.create_access_token(
        user_id='user-1',
        email='a@b.com',
        role='LEARNER',
        expires_minutes=-1,
    )

    with pytest.raises(jwt.ExpiredSignatureError):
        jwt_handler.decode_access_token(token)


def test_decode_access_token_rejects_other_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    token = jwt_handler.create_access_token(user_id='user-1', email='a@b.com', role='LEARNER')
    monkeypatch.setattr(config, 'JWT_SECRET_KEY', 'rotated-secret-key-that-is-long-enough-for-hs256')

    with pytest.raises(jwt.InvalidSignatureError):
        jwt_handler.decode_access_token(token)


def test_decode_access_token_requires_subject() -> None:
    token = jwt.encode(
        {'email': 'a@b.com', 'exp': datetime.now(timezone.utc) + timedelta(minutes=5)},
        config.JWT_SECRET_KEY,
        algorithm=config.JWT_ALGORITHM,
    )

    with pytest.raises(jwt.MissingRequiredClaimError):
        jwt_handler.decode_access_token(token)
