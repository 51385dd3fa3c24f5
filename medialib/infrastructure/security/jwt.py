"""Signed bearer tokens for the login endpoint (python-jose, HS256 by default).

Tokens are informational: data endpoints do not require them.
"""

from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from medialib.core.config import Settings, get_settings


def create_access_token(
    subject: str,
    claims: Mapping[str, Any] | None = None,
    expires_delta: timedelta | None = None,
    settings: Settings | None = None,
) -> str:
    """Return a JWT for ``subject`` carrying ``claims`` plus iat/exp.

    Args:
        subject: User id stored in ``sub``.
        claims: Extra claims (email, role).
        expires_delta: Lifetime; defaults to settings.access_token_expire_seconds.
        settings: Defaults to get_settings().
    """
    settings = settings or get_settings()
    if expires_delta is None:
        expires_delta = timedelta(seconds=settings.access_token_expire_seconds)
    issued_at = datetime.now(UTC)
    payload = {**(claims or {}), "sub": subject, "iat": issued_at, "exp": issued_at + expires_delta}
    return cast(
        str,
        jwt.encode(payload, settings.secret_key.get_secret_value(), algorithm=settings.algorithm),
    )


def verify_token(token: str, settings: Settings | None = None) -> dict[str, Any]:
    """Decode ``token`` and return its claims.

    Raises:
        ValueError: Bad signature, expired, malformed or missing ``sub``/``exp``.
    """
    settings = settings or get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    return payload
