from __future__ import annotations

import logging
from typing import Any

from job.domain.job import Job
from job.models import JobAuditLog

logger = logging.getLogger(__name__)


class DjangoAuditLog:
    """AuditLogPort 구현: JobAuditLog 테이블에 기록하고 로그도 남깁니다."""

    def record_created(self, *, job: Job, actor_id: str) -> None:
        self._write(
            job_id=job.id,
            action=JobAuditLog.Action.CREATED,
            actor_id=actor_id,
            payload={"title": job.title, "company": job.company},
        )

    def record_updated(
        self, *, job: Job, actor_id: str, changes: dict[str, dict[str, Any]]
    ) -> None:
        self._write(
            job_id=job.id,
            action=JobAuditLog.Action.UPDATED,
            actor_id=actor_id,
            payload={"changes": changes},
        )

    def record_deleted(
        self, *, job: Job, actor_id: str, force_delete: bool, reason: str
    ) -> None:
        self._write(
            job_id=job.id,
            action=JobAuditLog.Action.DELETED,
            actor_id=actor_id,
            payload={
                "snapshot": job.to_dict(),
                "force_delete": force_delete,
                "reason": reason,
            },
        )

    def _write(
        self, *, job_id: str, action: str, actor_id: str, payload: dict[str, Any]
    ) -> None:
        JobAuditLog.objects.create(
            job_id=job_id, action=action, actor_id=str(actor_id), payload=payload
        )
        logger.info("job_audit action=%s job_id=%s actor_id=%s", action, job_id, actor_id)
