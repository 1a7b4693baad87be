"""
JWT Cookie Utilities

로그인/로그아웃 응답에 JWT 를 HttpOnly Cookie 로 설정/삭제합니다.
"""

from typing import Any

from django.conf import settings
from rest_framework.response import Response


def _cookie_options() -> dict[str, Any]:
    return {
        "path": settings.JWT_AUTH_COOKIE_PATH,
        "domain": settings.JWT_AUTH_COOKIE_DOMAIN,
        "samesite": settings.JWT_AUTH_COOKIE_SAMESITE,
    }


def set_jwt_cookies(
    response: Response, access_token: str, refresh_token: str
) -> Response:
    """토큰 수명과 같은 max_age 로 access/refresh 쿠키를 설정."""
    lifetimes = {
        settings.JWT_AUTH_COOKIE: (access_token, settings.SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"]),
        settings.JWT_AUTH_REFRESH_COOKIE: (
            refresh_token,
            settings.SIMPLE_JWT["REFRESH_TOKEN_LIFETIME"],
        ),
    }
    for name, (value, lifetime) in lifetimes.items():
        response.set_cookie(
            key=name,
            value=value,
            httponly=settings.JWT_AUTH_COOKIE_HTTP_ONLY,
            secure=settings.JWT_AUTH_COOKIE_SECURE,
            max_age=int(lifetime.total_seconds()),
            **_cookie_options(),
        )
    return response


def delete_jwt_cookies(response: Response) -> Response:
    """로그아웃: 두 쿠키 모두 삭제."""
    for name in (settings.JWT_AUTH_COOKIE, settings.JWT_AUTH_REFRESH_COOKIE):
        response.delete_cookie(key=name, **_cookie_options())
    return response
