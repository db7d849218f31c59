# tracker/core/cookies.py
"""
Carrying the access token between browser and API.

The token travels in an HttpOnly cookie. When the frontend lives on another
origin the cookie has to be ``SameSite=None``, and browsers drop such cookies
unless they are also ``Secure``, so the two are always set together.
Clearing must repeat the exact attributes used when setting, otherwise the
browser keeps the old cookie.
"""
from typing import Any, Dict, Optional

from fastapi import Request, Response

from .config import Settings, settings as default_settings

BEARER_PREFIX = "bearer "


def cookie_options(settings: Optional[Settings] = None) -> Dict[str, Any]:
    settings = settings or default_settings
    if settings.CROSS_SITE_COOKIES:
        samesite, secure = "none", True
    else:
        samesite, secure = "strict", settings.COOKIE_SECURE
    return {
        "httponly": True,
        "secure": secure,
        "samesite": samesite,
        "path": "/",
    }


def set_access_cookie(response: Response, token: str, settings: Optional[Settings] = None) -> None:
    settings = settings or default_settings
    response.set_cookie(
        key=settings.ACCESS_TOKEN_COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        **cookie_options(settings),
    )


def clear_access_cookie(response: Response, settings: Optional[Settings] = None) -> None:
    settings = settings or default_settings
    response.delete_cookie(
        key=settings.ACCESS_TOKEN_COOKIE_NAME,
        **cookie_options(settings),
    )


def extract_token(request: Request, settings: Optional[Settings] = None) -> Optional[str]:
    """Cookie first, then ``Authorization: Bearer <token>``."""
    settings = settings or default_settings

    token = (request.cookies.get(settings.ACCESS_TOKEN_COOKIE_NAME) or "").strip()
    if token:
        return token

    auth_header = request.headers.get("Authorization", "")
    if auth_header[:len(BEARER_PREFIX)].lower() == BEARER_PREFIX:
        token = auth_header[len(BEARER_PREFIX):].strip()
        if token:
            return token
    return None
