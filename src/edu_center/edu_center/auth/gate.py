from __future__ import annotations

from functools import wraps

from flask import current_app, g, request

from ..core.exceptions import AuthenticationError, AuthorizationError
from .claims import AuthClaims

TOKEN_SERVICE_KEY = "EDU_TOKEN_SERVICE"


def _bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Missing bearer token")
    return token.strip()


def current_claims() -> AuthClaims:
    """Claims attached by ``login_required``; denies when none are present."""
    claims = g.get("claims")
    if not isinstance(claims, AuthClaims):
        raise AuthenticationError("Unable to get role/user name from token")
    return claims


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        tokens = current_app.extensions[TOKEN_SERVICE_KEY]
        g.claims = tokens.decode(_bearer_token())
        return view(*args, **kwargs)

    return wrapper


def elevated_required(view):
    """Leader/admin only. Applied on top of ``login_required``."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if not current_claims().is_elevated:
            raise AuthorizationError("You are not allowed to access this function")
        return view(*args, **kwargs)

    return login_required(wrapper)
