from datetime import timedelta
from types import SimpleNamespace

import pytest
from jose import jwt

from asktrack.core.config import settings
from asktrack.core.exceptions import InvalidToken
from asktrack.core.security import (
    create_access_token,
    decode_token,
    get_password_hash,
    is_legacy_password,
    verify_password,
)


def make_installer(**overrides):
    fields = {"number": "100", "code": "A1", "type": "installer", "branch": "NORTH"}
    fields.update(overrides)
    return SimpleNamespace(**fields)


def test_token_carries_installer_claims():
    claims = decode_token(create_access_token(make_installer()))

    assert claims["Int_number"] == "100"
    assert claims["Int_code"] == "A1"
    assert claims["role"] == "installer"
    assert claims["branch"] == "NORTH"
    assert claims["iss"] == settings.JWT_ISSUER
    assert claims["aud"] == settings.JWT_AUDIENCE

def test_token_expiry_uses_configured_minutes():
    claims = decode_token(create_access_token(make_installer()))
    assert claims["exp"] - claims["iat"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60

def test_missing_optional_fields_become_empty_claims():
    claims = decode_token(create_access_token(make_installer(type=None, branch=None)))
    assert claims["role"] == ""
    assert claims["branch"] == ""

def test_expired_token_rejected():
    token = create_access_token(make_installer(), expires_delta=timedelta(minutes=-1))
    with pytest.raises(InvalidToken):
        decode_token(token)

def test_wrong_secret_rejected():
    token = jwt.encode(
        {"branch": "NORTH", "iss": settings.JWT_ISSUER, "aud": settings.JWT_AUDIENCE},
        "another-secret",
        algorithm="HS256",
    )
    with pytest.raises(InvalidToken):
        decode_token(token)

@pytest.mark.parametrize("claim, value", [("iss", "someone-else"), ("aud", "other-audience")])
def test_wrong_issuer_or_audience_rejected(claim, value):
    claims = {"branch": "NORTH", "iss": settings.JWT_ISSUER, "aud": settings.JWT_AUDIENCE}
    claims[claim] = value
    token = jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    with pytest.raises(InvalidToken):
        decode_token(token)

def test_garbage_token_rejected():
    with pytest.raises(InvalidToken):
        decode_token("not-a-jwt")


def test_hashed_password_roundtrip():
    hashed = get_password_hash("secret")
    assert hashed != "secret"
    assert verify_password("secret", hashed)
    assert not verify_password("Secret", hashed)
    assert not is_legacy_password(hashed)

def test_legacy_plaintext_password_still_matches_exactly():
    assert verify_password("plainpass", "plainpass")
    assert not verify_password("plainpass ", "plainpass")
    assert is_legacy_password("plainpass")

def test_hash_string_itself_is_not_a_password():
    hashed = get_password_hash("secret")
    assert not verify_password(hashed, hashed)

def test_empty_stored_password_never_matches():
    assert not verify_password("", "")
