from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Iterable, Optional

from common.application.result import Err, Ok, Result
from common.masking import mask_secrets
from common.ports.job_repo import JobNotFoundError, JobRepositoryPort
from django.utils import timezone
from job.application.errors import (
    JobErrorCode,
    job_not_found,
    repository_error,
    validation_failed,
)
from job.application.side_effects import run_side_effect
from job.domain.job import Job, JobPatch, JobType
from job.domain.policies import (
    DEFAULT_COMPANY_BLACKLIST,
    can_change_company,
    is_company_blacklisted,
    is_within_edit_window,
)
from job.ports.audit_log import AuditLogPort
from job.schemas import UpdateJobSchema, safe_parse

logger = logging.getLogger(__name__)

AUDIT_DESCRIPTION_LENGTH = 100


def _audit_value(name: str, value: Any) -> Any:
    if isinstance(value, JobType):
        value = value.value
    if name == "description" and isinstance(value, str) and len(value) > AUDIT_DESCRIPTION_LENGTH:
        return value[:AUDIT_DESCRIPTION_LENGTH] + "..."
    return value


def diff_changes(before: Job, patch: JobPatch) -> dict[str, dict[str, Any]]:
    """
    patch 로 실제 값이 바뀌는 필드만 {"필드": {"from": 이전, "to": 이후}} 로 반환합니다.
    """
    changes: dict[str, dict[str, Any]] = {}
    for name, new_value in patch.present_fields().items():
        old_value = getattr(before, name)
        if old_value == new_value:
            continue
        changes[name] = {
            "from": _audit_value(name, old_value),
            "to": _audit_value(name, new_value),
        }
    return changes


class UpdateJobUseCase:
    """
    채용 공고 수정 유스케이스.

    - 소유자만, 생성 후 90일 이내에만 수정 가능
    - 회사명 변경은 생성 후 24시간 이내에만 허용 (블랙리스트 검사 포함)
    - 요청에 포함된 필드만 반영 (명시적 null 은 검증 실패)
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

    def execute(self, *, job_id: str, data: Any, user_id: Optional[str]) -> Result[Job]:
        if not user_id:
            return Err(
                code=JobErrorCode.UNAUTHENTICATED,
                message="User must be authenticated to update a job",
            )
        if not job_id:
            return Err(code=JobErrorCode.INVALID_ID, message="Job ID is required")

        try:
            existing = self._job_repo.find_by_id(job_id)
        except Exception as e:
            logger.error(
                "job_fetch_failed job_id=%s reason=%s",
                job_id,
                mask_secrets(str(e)),
                exc_info=True,
            )
            return repository_error("fetch job", e)

        if existing is None:
            return job_not_found(job_id)

        if not existing.is_owned_by(user_id):
            return Err(
                code=JobErrorCode.FORBIDDEN,
                message="You do not have permission to update this job",
            )

        now = self._clock()
        if not is_within_edit_window(existing, now):
            return Err(
                code=JobErrorCode.EDIT_WINDOW_EXPIRED,
                message="Jobs older than 90 days cannot be edited",
            )

        parsed = safe_parse(UpdateJobSchema, data)
        if not parsed.success:
            return validation_failed(parsed.field_errors)
        assert parsed.data is not None
        patch = parsed.data.to_patch()

        if patch.company is not None and patch.company != existing.company:
            if is_company_blacklisted(patch.company, self._company_blacklist):
                return Err(
                    code=JobErrorCode.COMPANY_NOT_ALLOWED,
                    message="This company is not allowed to post jobs on our platform",
                )
            if not can_change_company(existing, now):
                return Err(
                    code=JobErrorCode.COMPANY_LOCKED,
                    message="Company name cannot be changed after 24 hours",
                )

        # 저장소가 existing 을 그대로 돌려줄 수도 있으므로 diff 는 먼저 계산
        changes = diff_changes(existing, patch)

        try:
            updated = self._job_repo.update(job_id, patch)
        except JobNotFoundError:
            return job_not_found(job_id)
        except Exception as e:
            logger.error(
                "job_update_failed job_id=%s reason=%s",
                job_id,
                mask_secrets(str(e)),
                exc_info=True,
            )
            return repository_error("update job", e)

        logger.info(
            "job_updated job_id=%s user_id=%s fields=%s",
            job_id,
            user_id,
            ",".join(sorted(changes)) or "-",
        )
        run_side_effect(
            "audit.record_updated",
            self._audit_log.record_updated,
            job=updated,
            actor_id=user_id,
            changes=changes,
        )
        return Ok(updated)
