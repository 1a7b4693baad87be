from __future__ import annotations

import re

MAX_MASKED_LENGTH = 500

_SECRET_PATTERNS: list[re.Pattern[str]] = [
    # Authorization 헤더나 예외 메시지에 섞인 토큰
    re.compile(r"Bearer\s+[A-Za-z0-9\-\._~\+/]+=*", re.IGNORECASE),
    re.compile(
        r"\b(access_token|refresh_token|password|secret_key)\b\s*[:=]\s*[^\s,]+",
        re.IGNORECASE,
    ),
    # DB/브로커 접속 URL 의 user:password@ 부분
    re.compile(r"(?<=://)[^/\s:@]+:[^/\s@]+@"),
]


def mask_secrets(text: str) -> str:
    """
    저장소 예외 메시지를 로그/에러 응답에 싣기 전에 민감 정보를 가립니다.
    """
    if not text:
        return text
    masked = text
    for pat in _SECRET_PATTERNS:
        masked = pat.sub("[REDACTED]", masked)
    if len(masked) > MAX_MASKED_LENGTH:
        masked = masked[:MAX_MASKED_LENGTH] + "...[TRUNCATED]"
    return masked
