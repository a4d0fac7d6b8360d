"""
JWT session tokens.

Provides token generation, validation, cookie settings and the ninja auth
class that guards every project route.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

import jwt
from django.conf import settings
from django.http import HttpRequest
from ninja.security import APIKeyCookie

logger = logging.getLogger(__name__)


def create_session_token(user_id: int, email: str) -> str:
    """
    Create a signed session token.
    
    Contains the user's email and id; expires after
    settings.SESSION_TOKEN_LIFETIME (24 hours).
    """
    now = datetime.now(timezone.utc)
    payload = {
        'email': email,
        'id': user_id,
        'iat': now,
        'exp': now + settings.SESSION_TOKEN_LIFETIME,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Optional[dict]:
    """
    Decode and validate a session token.
    
    Returns:
        Decoded payload if valid, None if invalid/expired.
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired session token")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning(f"Rejected invalid session token: {e}")
        return None


def get_user_id_from_token(token: str) -> Optional[int]:
    """
    Extract the user id from a valid token.
    
    Returns:
        The user id if the token is valid, None otherwise.
    """
    payload = decode_token(token)
    if not payload or 'id' not in payload:
        return None
    try:
        return int(payload['id'])
    except (TypeError, ValueError):
        return None


def get_session_cookie_settings() -> dict:
    """Cookie settings for the session token."""
    return {
        'httponly': True,
        'secure': settings.SESSION_COOKIE_SECURE,
        'samesite': 'Lax',
        'path': '/',
        'max_age': int(settings.SESSION_TOKEN_LIFETIME.total_seconds()),
    }


class SessionTokenAuth(APIKeyCookie):
    """
    Resolves the caller from the ``token`` cookie.

    Returning None makes ninja answer 401 before the view (or body
    validation) runs. On success ``request.auth`` is the user id.
    """

    def __init__(self):
        self.param_name = settings.SESSION_TOKEN_COOKIE
        # Token is http-only and same-site; no CSRF double submit
        super().__init__(csrf=False)

    def authenticate(self, request: HttpRequest, key: Optional[str]) -> Optional[int]:
        if not key:
            return None
        return get_user_id_from_token(key)
