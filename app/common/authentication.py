"""
JWT Cookie Authentication

HttpOnly Cookie 또는 Authorization 헤더에서 JWT를 읽어 인증합니다.
"""

import logging

from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError

logger = logging.getLogger(__name__)


class JWTCookieAuthentication(JWTAuthentication):
    """
    1) Authorization 헤더
    2) Cookie (settings.JWT_AUTH_COOKIE)
    순으로 토큰을 찾아 인증.

    헤더의 잘못된 토큰은 401 이지만, 만료된 쿠키는 익명 요청으로 취급합니다.
    (공개 목록 조회가 오래된 쿠키 때문에 막히지 않도록)
    """

    def authenticate(self, request):
        header = super().authenticate(request)
        if header is not None:
            return header

        raw = request.COOKIES.get(settings.JWT_AUTH_COOKIE)
        if not raw:
            return None

        try:
            validated = self.get_validated_token(raw)
        except (InvalidToken, TokenError) as e:
            logger.info("jwt_cookie_rejected reason=%s", e)
            return None
        return self.get_user(validated), validated
