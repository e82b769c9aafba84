"""
Session tokens

Bearer JWTs carrying the actor id, role and permissions.
Signed with web.secret_key from settings.yaml.
"""

from datetime import timedelta
from typing import Any

import jwt

from core.ledger.errors import UnauthorizedError
from core.types import Actor, Role
from core.utils.timezone import now_utc

# Permission required by the accounting endpoints
ACCOUNTS_PERMISSION = "accounts"

DEFAULT_TOKEN_TTL = timedelta(hours=12)


def issue_token(
    actor_id: str,
    secret_key: str,
    role: Role | str = Role.STAFF,
    permissions: list[str] | tuple[str, ...] = (),
    algorithm: str = "HS256",
    ttl: timedelta = DEFAULT_TOKEN_TTL,
) -> str:
    """Issue a session token

    Args:
        actor_id: user id (sub claim)
        secret_key: signing key
        role: user role
        permissions: granted permissions
        algorithm: JWT algorithm
        ttl: validity period

    Returns:
        encoded JWT
    """
    issued_at = now_utc()
    payload: dict[str, Any] = {
        "sub": actor_id,
        "role": Role(role).value,
        "permissions": list(permissions),
        "iat": issued_at,
        "exp": issued_at + ttl,
    }
    return jwt.encode(payload, secret_key, algorithm=algorithm)


def decode_token(token: str, secret_key: str, algorithm: str = "HS256") -> Actor:
    """Verify a session token and return its actor

    Raises:
        UnauthorizedError: bad signature, expired, or malformed claims
    """
    try:
        claims = jwt.decode(
            token,
            secret_key,
            algorithms=[algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Session expired") from None
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Unauthorized") from None

    try:
        role = Role(claims.get("role", Role.STAFF.value))
    except ValueError:
        raise UnauthorizedError("Unauthorized") from None

    permissions = claims.get("permissions") or []
    if not isinstance(permissions, list):
        raise UnauthorizedError("Unauthorized")

    return Actor(
        id=str(claims["sub"]),
        role=role.value,
        permissions=tuple(str(p) for p in permissions),
    )
