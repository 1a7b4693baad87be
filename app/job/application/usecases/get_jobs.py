from __future__ import annotations

import logging
from typing import Any, Optional, Union

from common.application.result import Err, Ok, Result
from common.masking import mask_secrets
from common.ports.job_repo import JobRepositoryPort
from job.application.errors import JobErrorCode, repository_error
from job.domain.job import Job, JobType, JobValidationError
from job.domain.policies import sanitize_search_term
from job.domain.query import (
    JobFilters,
    OrderDirection,
    OrderField,
    PaginatedResult,
    Pagination,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
FEATURED_JOBS_LIMIT = 5

_ORDER_FIELD_ALIASES = {
    "createdAt": OrderField.CREATED_AT,
    "updatedAt": OrderField.UPDATED_AT,
}


def normalize_page(page: Any) -> int:
    try:
        value = int(page) if page is not None else 0
    except (TypeError, ValueError):
        return 1
    return value if value >= 1 else 1


def normalize_limit(limit: Any) -> int:
    try:
        value = int(limit) if limit is not None else 0
    except (TypeError, ValueError):
        return DEFAULT_PAGE_SIZE
    if value < 1:
        return DEFAULT_PAGE_SIZE
    return min(value, MAX_PAGE_SIZE)


def parse_order_field(order_by: Any) -> Optional[OrderField]:
    if order_by is None or order_by == "":
        return OrderField.CREATED_AT
    if isinstance(order_by, OrderField):
        return order_by
    if order_by in _ORDER_FIELD_ALIASES:
        return _ORDER_FIELD_ALIASES[order_by]
    try:
        return OrderField(order_by)
    except ValueError:
        return None


def parse_order_direction(direction: Any) -> OrderDirection:
    if isinstance(direction, OrderDirection):
        return direction
    if isinstance(direction, str) and direction.lower() == OrderDirection.ASC.value:
        return OrderDirection.ASC
    return OrderDirection.DESC


class GetJobsUseCase:
    """
    채용 공고 목록 조회 유스케이스.

    - 페이지/페이지 크기 정규화 (page >= 1, 1 <= limit <= 100)
    - job_type / order_by 는 저장소 호출 전에 검증 (fail fast)
    - location / search_term 은 허용 문자만 남기고 100자로 자름
    """

    def __init__(self, *, job_repo: JobRepositoryPort):
        self._job_repo = job_repo

    def execute(
        self,
        *,
        location: Optional[str] = None,
        job_type: Union[JobType, str, None] = None,
        search_term: Optional[str] = None,
        user_id: Optional[str] = None,
        page: Any = None,
        limit: Any = None,
        order_by: Any = None,
        order_direction: Any = None,
    ) -> Result[PaginatedResult[Job]]:
        filters = self._build_filters(
            location=location,
            job_type=job_type,
            search_term=search_term,
            user_id=user_id,
        )
        if isinstance(filters, Err):
            return filters

        order_field = parse_order_field(order_by)
        if order_field is None:
            return Err(
                code=JobErrorCode.INVALID_ORDER_FIELD,
                message="Invalid order by field",
                details={"order_by": str(order_by)},
            )

        pagination = Pagination(
            page=normalize_page(page),
            limit=normalize_limit(limit),
            order_by=order_field,
            order_direction=parse_order_direction(order_direction),
        )

        try:
            result = self._job_repo.find_all(filters, pagination)
        except Exception as e:
            logger.error(
                "job_list_failed filters=%s reason=%s",
                filters,
                mask_secrets(str(e)),
                exc_info=True,
            )
            return repository_error("fetch jobs", e)

        logger.debug(
            "job_list_fetched page=%s limit=%s count=%s total=%s",
            result.page,
            result.limit,
            len(result.data),
            result.total,
        )
        return Ok(result)

    def count_jobs(
        self,
        *,
        location: Optional[str] = None,
        job_type: Union[JobType, str, None] = None,
        search_term: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Result[int]:
        filters = self._build_filters(
            location=location,
            job_type=job_type,
            search_term=search_term,
            user_id=user_id,
        )
        if isinstance(filters, Err):
            return filters

        try:
            return Ok(self._job_repo.count(filters))
        except Exception as e:
            logger.error(
                "job_count_failed reason=%s", mask_secrets(str(e)), exc_info=True
            )
            return repository_error("count jobs", e)

    def get_featured_jobs(self, *, limit: int = FEATURED_JOBS_LIMIT) -> Result[PaginatedResult[Job]]:
        # 별도 노출 플래그가 없으므로 최신 공고를 featured 로 사용
        return self.execute(
            page=1,
            limit=limit,
            order_by=OrderField.CREATED_AT,
            order_direction=OrderDirection.DESC,
        )

    def get_jobs_by_location(
        self, *, location: str, limit: int = DEFAULT_PAGE_SIZE
    ) -> Result[PaginatedResult[Job]]:
        return self.execute(location=location, page=1, limit=limit)

    def get_jobs_by_type(
        self, *, job_type: Union[JobType, str], limit: int = DEFAULT_PAGE_SIZE
    ) -> Result[PaginatedResult[Job]]:
        return self.execute(job_type=job_type, page=1, limit=limit)

    def search_jobs(
        self, *, term: str, page: int = 1, limit: int = DEFAULT_PAGE_SIZE
    ) -> Result[PaginatedResult[Job]]:
        return self.execute(search_term=term, page=page, limit=limit)

    def get_user_jobs(
        self, *, user_id: Optional[str], page: int = 1, limit: int = DEFAULT_PAGE_SIZE
    ) -> Result[PaginatedResult[Job]]:
        if not user_id:
            return Err(code=JobErrorCode.MISSING_USER_ID, message="User ID is required")

        return self.execute(
            user_id=user_id,
            page=page,
            limit=limit,
            order_by=OrderField.CREATED_AT,
            order_direction=OrderDirection.DESC,
        )

    def _build_filters(
        self,
        *,
        location: Optional[str],
        job_type: Union[JobType, str, None],
        search_term: Optional[str],
        user_id: Optional[str],
    ) -> Union[JobFilters, Err]:
        parsed_type: Optional[JobType] = None
        if job_type:
            try:
                parsed_type = JobType.parse(job_type)
            except JobValidationError:
                return Err(
                    code=JobErrorCode.INVALID_JOB_TYPE,
                    message="Invalid job type specified",
                    details={"job_type": str(job_type)},
                )

        return JobFilters(
            location=_clean_text(location),
            job_type=parsed_type,
            user_id=user_id or None,
            search_term=_clean_text(search_term),
        )


def _clean_text(value: Optional[str]) -> Optional[str]:
    # 정제 후 빈 문자열이면 필터 자체를 적용하지 않음
    if not value:
        return None
    return sanitize_search_term(str(value)) or None
