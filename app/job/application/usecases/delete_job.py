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
from job.domain.policies import is_brand_new, is_recently_updated
from job.ports.admin_policy import AdminPolicyPort
from job.ports.audit_log import AuditLogPort
from job.ports.deletion_notifier import DeletionNotifierPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BulkDeleteResult:
    succeeded: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)


class DeleteJobUseCase:
    """
    채용 공고 삭제 유스케이스 (hard delete).

    - 소유자만 삭제 가능 (force_delete 는 소유권/쿨다운 검사를 건너뜀)
    - 마지막 수정 후 5분 이내에는 삭제 불가
    - 삭제 전 감사 로그, 삭제 후 알림 (둘 다 실패해도 결과에는 영향 없음)
    """

    def __init__(
        self,
        *,
        job_repo: JobRepositoryPort,
        audit_log: AuditLogPort,
        notifier: DeletionNotifierPort,
        admin_policy: AdminPolicyPort,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self._job_repo = job_repo
        self._audit_log = audit_log
        self._notifier = notifier
        self._admin_policy = admin_policy
        self._clock = clock

    def execute(
        self, *, job_id: str, user_id: Optional[str], force_delete: bool = False
    ) -> Result[str]:
        if not user_id:
            return Err(
                code=JobErrorCode.UNAUTHENTICATED,
                message="User must be authenticated to delete a job",
            )
        if not job_id:
            return Err(code=JobErrorCode.INVALID_ID, message="Job ID is required")

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

        if not force_delete and not job.is_owned_by(user_id):
            return Err(
                code=JobErrorCode.FORBIDDEN,
                message="You do not have permission to delete this job",
            )

        now = self._clock()
        if not force_delete:
            if is_recently_updated(job, now):
                return Err(
                    code=JobErrorCode.RECENTLY_UPDATED,
                    message=(
                        "Cannot delete a job that was recently updated. "
                        "Please wait a few minutes."
                    ),
                )
            if is_brand_new(job, now):
                logger.warning(
                    "job_delete_brand_new job_id=%s user_id=%s created_at=%s",
                    job_id,
                    user_id,
                    job.created_at.isoformat(),
                )

        run_side_effect(
            "audit.record_deleted",
            self._audit_log.record_deleted,
            job=job,
            actor_id=user_id,
            force_delete=force_delete,
            reason="force_delete" if force_delete else "user_request",
        )

        try:
            deleted = self._job_repo.delete(job_id)
        except Exception as e:
            logger.error(
                "job_delete_failed job_id=%s reason=%s",
                job_id,
                mask_secrets(str(e)),
                exc_info=True,
            )
            return repository_error("delete job", e)

        if not deleted:
            return Err(code=JobErrorCode.DELETE_FAILED, message="Failed to delete job")

        logger.info(
            "job_deleted job_id=%s user_id=%s force=%s", job_id, user_id, force_delete
        )
        run_side_effect(
            "notifier.notify_deleted",
            self._notifier.notify_deleted,
            job=job,
            deleted_by=user_id,
        )
        return Ok(job_id)

    def bulk_delete(
        self, *, job_ids: list[str], caller_user_id: Optional[str]
    ) -> Result[BulkDeleteResult]:
        """관리자 전용 일괄 삭제. 각 id 를 force_delete 로 처리하고 결과를 모읍니다."""
        if not caller_user_id or not self._admin_policy.is_admin(caller_user_id):
            return Err(
                code=JobErrorCode.ADMIN_ONLY,
                message="Only administrators can perform bulk delete",
            )

        succeeded: list[str] = []
        failed: dict[str, str] = {}
        for job_id in job_ids:
            result = self.execute(job_id=job_id, user_id=caller_user_id, force_delete=True)
            if isinstance(result, Ok):
                succeeded.append(result.value)
            else:
                failed[str(job_id)] = result.message

        logger.info(
            "job_bulk_delete_done caller=%s succeeded=%s failed=%s",
            caller_user_id,
            len(succeeded),
            len(failed),
        )
        return Ok(BulkDeleteResult(succeeded=succeeded, failed=failed))

    def is_admin(self, user_id: Optional[str]) -> bool:
        return bool(user_id) and self._admin_policy.is_admin(user_id)
