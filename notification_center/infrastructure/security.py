"""Helpers for bearer tokens issued by the platform's identity service."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from notification_center.config import get_settings

DEFAULT_TOKEN_LIFETIME = timedelta(hours=1)


def create_access_token(
    subject: str,
    *,
    role: str = "member",
    name: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Sign a token for ``subject``; used by tests and development scripts."""

    settings = get_settings()
    expire = datetime.now(timezone.utc) + (expires_delta or DEFAULT_TOKEN_LIFETIME)
    claims: dict[str, object] = {"sub": subject, "role": role, "exp": expire}
    if name:
        claims["name"] = name
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc
