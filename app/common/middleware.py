from __future__ import annotations

import re
import uuid
from typing import Callable

from common.request_id import reset_request_id, set_request_id
from django.http import HttpRequest, HttpResponse

_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9\-_.]{1,64}$")


class RequestIdMiddleware:
    """
    - 요청마다 request_id를 생성/전파하고
    - response에 X-Request-ID 헤더를 포함합니다.

    클라이언트가 보낸 X-Request-ID 는 형식이 맞을 때만 그대로 사용합니다.
    """

    header_name = "HTTP_X_REQUEST_ID"
    response_header = "X-Request-ID"

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request_id = self._resolve(request.META.get(self.header_name))

        # request 객체에도 달아두고(디버깅), contextvar에도 저장(로깅 필터에서 사용)
        request.request_id = request_id  # type: ignore[attr-defined]
        token = set_request_id(request_id)
        try:
            response = self.get_response(request)
        finally:
            reset_request_id(token)

        response[self.response_header] = request_id
        return response

    @staticmethod
    def _resolve(incoming) -> str:
        candidate = str(incoming).strip() if incoming else ""
        if _VALID_REQUEST_ID.match(candidate):
            return candidate
        return str(uuid.uuid4())
