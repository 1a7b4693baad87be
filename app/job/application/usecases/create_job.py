from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Iterable, Optional

from common.application.result import Err, Ok, Result
from common.masking import mask_secrets
from common.ports.job_repo import JobRepositoryPort
from django.utils import timezone
from job.application.errors import JobErrorCode, repository_error, validation_failed
from job.application.side_effects import run_side_effect
from job.domain.job import Job
from job.domain.policies import (
    DEFAULT_COMPANY_BLACKLIST,
    find_duplicate,
    is_company_blacklisted,
)
from job.domain.query import JobFilters, OrderDirection, OrderField, Pagination
from job.ports.audit_log import AuditLogPort
from job.schemas import CreateJobSchema, safe_parse

logger = logging.getLogger(__name__)

DUPLICATE_LOOKUP_LIMIT = 100


class CreateJobUseCase:
    """
    채용 공고 생성 유스케이스.

    - 입력 검증(CreateJobSchema)
    - 회사명 블랙리스트 검사
    - 같은 소유자의 최근 7일 내 중복 공고 검사 (조회 실패 시 생성은 계속 진행)
    - 저장 후 감사 로그 기록
    """

    def __init__(
        self,
        *,
        job_repo: JobRepositoryPort,
        audit_log: AuditLogPort,
        company_blacklist: Iterable[str] = DEFAULT_COMPANY_BLACKLIST,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self._job_repo = job_repo
        self._audit_log = audit_log
        self._company_blacklist = tuple(company_blacklist)
        self._clock = clock

    def execute(self, *, data: Any, user_id: Optional[str]) -> Result[Job]:
        if not user_id:
            return Err(
                code=JobErrorCode.UNAUTHENTICATED,
                message="User must be authenticated to create a job",
            )

        parsed = safe_parse(CreateJobSchema, data)
        if not parsed.success:
            return validation_failed(parsed.field_errors)
        validated = parsed.data
        assert validated is not None

        if is_company_blacklisted(validated.company, self._company_blacklist):
            return Err(
                code=JobErrorCode.COMPANY_NOT_ALLOWED,
                message="This company is not allowed to post jobs on our platform",
            )

        if self._has_recent_duplicate(
            title=validated.title, company=validated.company, user_id=user_id
        ):
            return Err(
                code=JobErrorCode.DUPLICATE_POSTING,
                message=(
                    "A similar job posting from your company already exists. "
                    "Please update the existing posting instead."
                ),
            )

        try:
            job = self._job_repo.create(validated.to_new_job(user_id=user_id))
        except Exception as e:
            logger.error(
                "job_create_failed user_id=%s reason=%s",
                user_id,
                mask_secrets(str(e)),
                exc_info=True,
            )
            return repository_error("create job", e)

        run_side_effect(
            "audit.record_created",
            self._audit_log.record_created,
            job=job,
            actor_id=user_id,
        )
        return Ok(job)

    def can_user_create_jobs(self, user_id: Optional[str]) -> bool:
        # 역할/구독 체계가 생기기 전까지는 인증된 사용자 모두 허용
        return bool(user_id)

    def _has_recent_duplicate(self, *, title: str, company: str, user_id: str) -> bool:
        try:
            recent = self._job_repo.find_all(
                JobFilters(user_id=user_id),
                Pagination(
                    page=1,
                    limit=DUPLICATE_LOOKUP_LIMIT,
                    order_by=OrderField.CREATED_AT,
                    order_direction=OrderDirection.DESC,
                ),
            )
        except Exception as e:
            logger.warning(
                "job_duplicate_check_failed user_id=%s reason=%s",
                user_id,
                mask_secrets(str(e)),
            )
            return False

        duplicate = find_duplicate(
            recent.data, title=title, company=company, now=self._clock()
        )
        return duplicate is not None
