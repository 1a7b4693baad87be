from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Err:
    """
    유스케이스 실패 결과.

    - code: 프로그램적으로 구분 가능한 에러 코드 (예: "NOT_FOUND", "VALIDATION_FAILED")
    - message: 사용자/로그용 메시지
    - details: 추가 정보(선택). 검증 실패 시 {"validation_errors": {필드: [메시지]}}
    """

    code: str
    message: str
    details: Optional[dict] = None

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def validation_errors(self) -> Optional[dict[str, list[str]]]:
        if not self.details:
            return None
        return self.details.get("validation_errors")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """유스케이스 성공 결과."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True


Result = Ok[T] | Err
