# shopfront/core/auth.py
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session

from shopfront.core.config import get_settings
from shopfront.core.errors import AuthenticationRequired, AuthorizationDenied
from shopfront.database import get_session
from shopfront.models.user import User

settings = get_settings()

# Roles allowed to manage products and move orders through their lifecycle.
STAFF_ROLES = frozenset({"seller", "admin"})

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so we can support "guest" mode (unauthenticated).
bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(user: User, expires_minutes: int | None = None) -> str:
    """
    Issue a signed access token for `user`.

    Claims:
      - sub: user id as a string
      - role: application role at issue time (informational; the role is
        re-read from the database on every request)
      - exp: expiry
    """
    minutes = expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    payload = {
        "sub": str(user.id),
        "role": user.role,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=minutes),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify an access token (JWT).

    Verification:
      - signature (JWT_ALG using JWT_SECRET)
      - expiration time (exp)

    Raises:
        AuthenticationRequired(401): if token is invalid/expired.
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALG],
        )
    except JWTError:
        raise AuthenticationRequired("Invalid or expired token")


def resolve_user(session: Session, token: str) -> User | None:
    """
    Map a raw token to its User, or None if the account no longer exists.

    This is the only way the cart and order code learns who is calling;
    it never sees how the token was issued.
    """
    payload = decode_access_token(token)
    sub = payload.get("sub")
    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        raise AuthenticationRequired("Invalid sub in token")
    return session.get(User, user_id)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User | None:
    """
    Resolve the current user from the bearer token.

    Returns:
        User instance if authenticated, else None for guests.

    Raises:
        AuthenticationRequired(401): if the token is malformed or expired.
    """
    if credentials is None:
        return None  # guest mode
    return resolve_user(session, credentials.credentials)


def require_auth(user: User | None = Depends(get_current_user)) -> User:
    """
    Enforce authentication.

    Raises:
        AuthenticationRequired(401): if user is None.
    """
    if user is None:
        raise AuthenticationRequired("Authentication required")
    return user


def require_seller(user: User = Depends(require_auth)) -> User:
    """
    Enforce seller or admin role.

    Raises:
        AuthorizationDenied(403): for customers.
    """
    if user.role not in STAFF_ROLES:
        raise AuthorizationDenied("Seller access required")
    return user
