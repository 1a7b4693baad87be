"""
Job Posting Service

뷰에서 사용하는 채용 공고 유스케이스 파사드
"""

from __future__ import annotations

from typing import Any, Optional

from common.application.result import Result
from job.application.container import (
    build_create_job_usecase,
    build_delete_job_usecase,
    build_get_job_by_id_usecase,
    build_get_jobs_usecase,
    build_update_job_usecase,
)
from job.application.usecases.delete_job import BulkDeleteResult
from job.application.usecases.get_job_by_id import (
    JobDetail,
    JobPreview,
    JobWithRelated,
    MultipleJobsResult,
)
from job.domain.job import Job
from job.domain.query import PaginatedResult


class JobService:
    """
    요청마다 유스케이스를 조립해서 한 번 호출합니다. (상태 없음)
    """

    @staticmethod
    def create_job(*, data: Any, user_id: Optional[str]) -> Result[Job]:
        return build_create_job_usecase().execute(data=data, user_id=user_id)

    @staticmethod
    def get_job(*, job_id: str, user_id: Optional[str]) -> Result[JobDetail]:
        return build_get_job_by_id_usecase().execute(job_id=job_id, user_id=user_id)

    @staticmethod
    def get_multiple_jobs(
        *, job_ids: list[str], user_id: Optional[str]
    ) -> Result[MultipleJobsResult]:
        return build_get_job_by_id_usecase().get_multiple_jobs(
            job_ids=job_ids, user_id=user_id
        )

    @staticmethod
    def get_job_with_related(
        *, job_id: str, user_id: Optional[str]
    ) -> Result[JobWithRelated]:
        return build_get_job_by_id_usecase().get_job_with_related(
            job_id=job_id, user_id=user_id
        )

    @staticmethod
    def get_job_preview(*, job_id: str) -> Result[JobPreview]:
        return build_get_job_by_id_usecase().get_job_preview(job_id=job_id)

    @staticmethod
    def list_jobs(**query: Any) -> Result[PaginatedResult[Job]]:
        """
        query: location, job_type, search_term, user_id, page, limit,
        order_by, order_direction (모두 선택)
        """
        return build_get_jobs_usecase().execute(**query)

    @staticmethod
    def count_jobs(**query: Any) -> Result[int]:
        return build_get_jobs_usecase().count_jobs(**query)

    @staticmethod
    def get_featured_jobs(*, limit: Optional[int] = None) -> Result[PaginatedResult[Job]]:
        usecase = build_get_jobs_usecase()
        if limit is None:
            return usecase.get_featured_jobs()
        return usecase.get_featured_jobs(limit=limit)

    @staticmethod
    def get_user_jobs(
        *, user_id: Optional[str], page: Any = 1, limit: Any = 20
    ) -> Result[PaginatedResult[Job]]:
        return build_get_jobs_usecase().get_user_jobs(
            user_id=user_id, page=page, limit=limit
        )

    @staticmethod
    def update_job(*, job_id: str, data: Any, user_id: Optional[str]) -> Result[Job]:
        return build_update_job_usecase().execute(job_id=job_id, data=data, user_id=user_id)

    @staticmethod
    def delete_job(
        *, job_id: str, user_id: Optional[str], force: bool = False
    ) -> Result[str]:
        """force 는 관리자 정책이 허용한 호출자에게만 적용됩니다."""
        usecase = build_delete_job_usecase()
        force_delete = force and usecase.is_admin(user_id)
        return usecase.execute(job_id=job_id, user_id=user_id, force_delete=force_delete)

    @staticmethod
    def bulk_delete(
        *, job_ids: list[str], caller_user_id: Optional[str]
    ) -> Result[BulkDeleteResult]:
        return build_delete_job_usecase().bulk_delete(
            job_ids=job_ids, caller_user_id=caller_user_id
        )
