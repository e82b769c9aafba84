"""
Session token tests
"""

from datetime import timedelta

import jwt
import pytest

from core.auth import ACCOUNTS_PERMISSION, decode_token, issue_token
from core.ledger.errors import UnauthorizedError
from core.types import Role

SECRET = "test_jwt_secret_key_xyz"


class TestIssueToken:
    """issue_token"""

    def test_claims(self) -> None:
        token = issue_token("user-1", SECRET, permissions=[ACCOUNTS_PERMISSION])

        claims = jwt.decode(token, SECRET, algorithms=["HS256"])

        assert claims["sub"] == "user-1"
        assert claims["role"] == "staff"
        assert claims["permissions"] == ["accounts"]
        assert claims["exp"] > claims["iat"]


class TestDecodeToken:
    """decode_token"""

    def test_round_trip(self) -> None:
        token = issue_token("user-1", SECRET, role=Role.ADMIN)

        actor = decode_token(token, SECRET)

        assert actor.id == "user-1"
        assert actor.role == "admin"
        assert actor.permissions == ()

    def test_wrong_secret(self) -> None:
        token = issue_token("user-1", SECRET)

        with pytest.raises(UnauthorizedError, match="Unauthorized"):
            decode_token(token, "another-secret")

    def test_expired(self) -> None:
        token = issue_token("user-1", SECRET, ttl=timedelta(seconds=-10))

        with pytest.raises(UnauthorizedError, match="Session expired"):
            decode_token(token, SECRET)

    def test_garbage(self) -> None:
        with pytest.raises(UnauthorizedError):
            decode_token("not-a-jwt", SECRET)

    def test_algorithm_mismatch(self) -> None:
        token = issue_token("user-1", SECRET, algorithm="HS512")

        with pytest.raises(UnauthorizedError):
            decode_token(token, SECRET, algorithm="HS256")

    def test_unknown_role(self) -> None:
        token = jwt.encode(
            {"sub": "user-1", "role": "superuser", "exp": 32503680000},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(UnauthorizedError):
            decode_token(token, SECRET)

    def test_missing_exp(self) -> None:
        token = jwt.encode({"sub": "user-1"}, SECRET, algorithm="HS256")

        with pytest.raises(UnauthorizedError):
            decode_token(token, SECRET)

    def test_status_code(self) -> None:
        with pytest.raises(UnauthorizedError) as exc_info:
            decode_token("x", SECRET)

        assert exc_info.value.status_code == 401
