from __future__ import annotations

from job.domain.job import Job
from job.tasks import notify_job_deleted


class CeleryDeletionNotifier:
    def notify_deleted(self, *, job: Job, deleted_by: str) -> None:
        # 삭제는 이미 끝났으므로 브로커가 없으면 재시도 없이 바로 실패 (호출 측에서 로그만 남김)
        notify_job_deleted.apply_async(
            args=(job.id, job.title, job.company, deleted_by), retry=False
        )
