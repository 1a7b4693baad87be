from __future__ import annotations

import logging

from common.request_id import get_request_id


class RequestIdFilter(logging.Filter):
    """모든 로그 레코드에 request_id 를 붙입니다. (LOGGING 설정의 formatter 가 사용)"""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = get_request_id()  # type: ignore[attr-defined]
        return True
