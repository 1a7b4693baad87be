from __future__ import annotations

from contextvars import ContextVar, Token

# 요청 밖(celery worker, manage.py)에서는 "-" 로 찍힘
_request_id: ContextVar[str] = ContextVar("request_id", default="-")


def set_request_id(value: str) -> Token[str]:
    return _request_id.set(value)


def reset_request_id(token: Token[str]) -> None:
    _request_id.reset(token)


def get_request_id() -> str:
    return _request_id.get()
