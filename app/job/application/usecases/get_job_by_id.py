from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from common.application.result import Err, Ok, Result
from common.masking import mask_secrets
from common.ports.job_repo import JobRepositoryPort
from django.utils import timezone
from job.application.errors import JobErrorCode, job_not_found, repository_error
from job.application.side_effects import run_side_effect
from job.domain.job import Job, JobType
from job.domain.policies import (
    NEW_POSTING_BADGE_DAYS,
    days_since,
    is_valid_job_id,
    is_within_edit_window,
)
from job.domain.query import JobFilters, OrderDirection, OrderField, Pagination
from job.ports.view_tracker import ViewTrackerPort

logger = logging.getLogger(__name__)

RELATED_JOBS_LIMIT = 5
PREVIEW_DESCRIPTION_LENGTH = 200


@dataclass(frozen=True, slots=True)
class JobDetail:
    job: Job
    is_owner: bool
    can_edit: bool
    days_since_posted: int = 0
    is_new: bool = False


@dataclass(frozen=True, slots=True)
class MultipleJobsResult:
    jobs: list[Job] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class JobWithRelated:
    detail: JobDetail
    related: list[Job] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class JobPreview:
    id: str
    title: str
    company: str
    location: str
    job_type: JobType
    created_at: datetime
    description: str


class GetJobByIdUseCase:
    """
    채용 공고 단건 조회 유스케이스.

    - 조회자 기준 권한 계산(is_owner, can_edit)
    - 소유자가 아닌 조회는 조회 추적(비동기, 실패 무시)
    """

    def __init__(
        self,
        *,
        job_repo: JobRepositoryPort,
        view_tracker: ViewTrackerPort,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self._job_repo = job_repo
        self._view_tracker = view_tracker
        self._clock = clock

    def execute(self, *, job_id: str, user_id: Optional[str] = None) -> Result[JobDetail]:
        if not job_id or not isinstance(job_id, str):
            return Err(code=JobErrorCode.INVALID_ID, message="Invalid job ID provided")
        if not is_valid_job_id(job_id):
            return Err(code=JobErrorCode.INVALID_ID, message="Invalid job ID format")

        try:
            job = self._job_repo.find_by_id(job_id)
        except Exception as e:
            logger.error(
                "job_fetch_failed job_id=%s reason=%s",
                job_id,
                mask_secrets(str(e)),
                exc_info=True,
            )
            return repository_error("fetch job", e)

        if job is None:
            return job_not_found(job_id)

        now = self._clock()
        is_owner = bool(user_id) and job.is_owned_by(user_id)
        can_edit = is_owner and is_within_edit_window(job, now)

        if not is_owner:
            run_side_effect(
                "view_tracker.track_view",
                self._view_tracker.track_view,
                job=job,
                viewer_id=user_id or None,
            )

        posted_days = days_since(job.created_at, now)
        return Ok(
            JobDetail(
                job=job,
                is_owner=is_owner,
                can_edit=can_edit,
                days_since_posted=posted_days,
                is_new=posted_days <= NEW_POSTING_BADGE_DAYS,
            )
        )

    def get_multiple_jobs(
        self, *, job_ids: list[str], user_id: Optional[str] = None
    ) -> Result[MultipleJobsResult]:
        """
        여러 공고를 한 번에 조회합니다. (best-effort)

        실패한 id 는 errors[id] = 에러 메시지로 모으고 나머지는 계속 조회합니다.
        """
        jobs: list[Job] = []
        errors: dict[str, str] = {}
        for job_id in job_ids:
            result = self.execute(job_id=job_id, user_id=user_id)
            if isinstance(result, Ok):
                jobs.append(result.value.job)
            else:
                errors[str(job_id)] = result.message
        return Ok(MultipleJobsResult(jobs=jobs, errors=errors))

    def get_job_with_related(
        self, *, job_id: str, user_id: Optional[str] = None
    ) -> Result[JobWithRelated]:
        result = self.execute(job_id=job_id, user_id=user_id)
        if isinstance(result, Err):
            return result

        detail = result.value
        return Ok(JobWithRelated(detail=detail, related=self._find_related(detail.job)))

    def get_job_preview(self, *, job_id: str) -> Result[JobPreview]:
        result = self.execute(job_id=job_id)
        if isinstance(result, Err):
            return result

        job = result.value.job
        description = job.description
        if len(description) > PREVIEW_DESCRIPTION_LENGTH:
            description = description[:PREVIEW_DESCRIPTION_LENGTH] + "..."
        return Ok(
            JobPreview(
                id=job.id,
                title=job.title,
                company=job.company,
                location=job.location,
                job_type=job.job_type,
                created_at=job.created_at,
                description=description,
            )
        )

    def _find_related(self, job: Job) -> list[Job]:
        # 자기 자신을 제외해도 최대 5건이 채워지도록 한 건 더 조회
        try:
            page = self._job_repo.find_all(
                JobFilters(location=job.location, job_type=job.job_type),
                Pagination(
                    page=1,
                    limit=RELATED_JOBS_LIMIT + 1,
                    order_by=OrderField.CREATED_AT,
                    order_direction=OrderDirection.DESC,
                ),
            )
        except Exception as e:
            logger.warning(
                "job_related_lookup_failed job_id=%s reason=%s",
                job.id,
                mask_secrets(str(e)),
            )
            return []

        related = [candidate for candidate in page.data if candidate.id != job.id]
        return related[:RELATED_JOBS_LIMIT]
