"""Bearer token authentication for API routes."""

from datetime import UTC, datetime, timedelta
from typing import Annotated

import jwt
from fastapi import Depends, Request
from starlette.datastructures import Headers

from src.api.dependencies import SettingsDep

JWT_ALGORITHM = "HS256"


class AuthenticationError(Exception):
    """Raised when a request carries no valid bearer token."""


def get_bearer_token(headers: Headers) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header.

    Raises:
        AuthenticationError: If the header is missing or malformed.
    """
    auth_header = headers.get("Authorization")
    if not auth_header:
        raise AuthenticationError("Authorization header is missing")

    scheme, _, token = auth_header.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise AuthenticationError("Malformed authorization header")
    return token


def make_jwt(
    user_id: str,
    secret: str,
    expires_in: timedelta,
    issuer: str = "tubely-access",
) -> str:
    """Issue a signed access token for ``user_id``."""
    now = datetime.now(UTC)
    claims = {
        "iss": issuer,
        "sub": user_id,
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(claims, secret, algorithm=JWT_ALGORITHM)


def validate_jwt(token: str, secret: str, issuer: str = "tubely-access") -> str:
    """Validate an access token and return the user ID it was issued to.

    Raises:
        AuthenticationError: If the token is invalid, expired or has no subject.
    """
    if not secret:
        raise AuthenticationError("Token validation is not configured")

    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            issuer=issuer,
            options={"require": ["exp", "iss", "sub"]},
        )
    except jwt.PyJWTError as e:
        raise AuthenticationError("Couldn't validate JWT") from e

    subject = str(claims.get("sub", "")).strip()
    if not subject:
        raise AuthenticationError("JWT missing subject")
    return subject


def get_current_user_id(request: Request, settings: SettingsDep) -> str:
    """Resolve the authenticated user for a request."""
    token = get_bearer_token(request.headers)
    return validate_jwt(token, settings.auth.jwt_secret, settings.auth.token_issuer)


CurrentUserDep = Annotated[str, Depends(get_current_user_id)]
