from __future__ import annotations

import logging
from typing import Any, Callable

from common.masking import mask_secrets

logger = logging.getLogger(__name__)


def run_side_effect(name: str, func: Callable[..., Any], **kwargs: Any) -> None:
    """
    감사 로그/조회 추적/알림 등 부가 작업 실행.

    부가 작업의 실패는 본 작업 결과에 영향을 주지 않도록 로그만 남기고 삼킵니다.
    """
    try:
        func(**kwargs)
    except Exception as e:
        logger.warning("job_side_effect_failed name=%s reason=%s", name, mask_secrets(str(e)))
