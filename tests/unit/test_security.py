"""Tests for JWT tokens and password hashing."""

from datetime import timedelta

import pytest
from jose import jwt

from app.core.config import get_settings
from app.infrastructure.security import (
    JWTTokenIssuer,
    create_access_token,
    get_password_hash,
    verify_password,
    verify_password_async,
    verify_token,
)


class TestJWT:
    def test_round_trip_subject(self) -> None:
        issuer = JWTTokenIssuer()
        assert issuer.decode_subject(issuer.create_access_token("user-1")) == "user-1"

    def test_default_expiry_is_seven_days(self) -> None:
        payload = verify_token(create_access_token({"sub": "u"}))
        assert payload["exp"] - payload["iat"] == 7 * 24 * 60 * 60

    def test_expired_token_rejected(self) -> None:
        token = create_access_token({"sub": "u"}, timedelta(seconds=-5))
        with pytest.raises(ValueError):
            verify_token(token)

    def test_missing_subject_rejected(self) -> None:
        with pytest.raises(ValueError):
            verify_token(create_access_token({"name": "no-sub"}))

    def test_wrong_secret_rejected(self) -> None:
        forged = jwt.encode({"sub": "u", "exp": 9999999999}, "other-secret", algorithm="HS256")
        with pytest.raises(ValueError):
            verify_token(forged)

    def test_algorithm_from_settings(self) -> None:
        header = jwt.get_unverified_header(create_access_token({"sub": "u"}))
        assert header["alg"] == get_settings().algorithm


class TestPasswords:
    def test_hash_and_verify(self) -> None:
        hashed = get_password_hash("correct horse", rounds=4)
        assert hashed != "correct horse"
        assert verify_password("correct horse", hashed)
        assert not verify_password("wrong", hashed)

    def test_long_passwords_are_not_truncated(self) -> None:
        base = "x" * 80
        hashed = get_password_hash(base + "a", rounds=4)
        assert not verify_password(base + "b", hashed)

    def test_malformed_hash_is_a_mismatch(self) -> None:
        assert not verify_password("pw", "not-a-bcrypt-hash")

    async def test_missing_hash_runs_dummy_compare(self) -> None:
        assert await verify_password_async("pw", None) is False
