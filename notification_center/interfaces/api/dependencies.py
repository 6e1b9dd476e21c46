"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from notification_center.domain.entities import User
from notification_center.infrastructure.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _unauthorized("Invalid credentials") from exc

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject.strip():
        raise _unauthorized("Invalid credentials")

    role = payload.get("role")
    name = payload.get("name")
    return User(
        id=subject.strip(),
        role=role if isinstance(role, str) and role else "member",
        name=name if isinstance(name, str) else None,
    )


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> User:
    """Return the authenticated user from the ``Authorization`` header."""

    if credentials is None or not credentials.credentials:
        raise _unauthorized("No authorization token provided")
    return resolve_current_user(credentials.credentials)


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user has administrator privileges."""

    if not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )
    return current_user
