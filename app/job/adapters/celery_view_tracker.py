from __future__ import annotations

from typing import Optional

from job.domain.job import Job
from job.tasks import track_job_view


class CeleryViewTracker:
    """
    조회 추적을 Celery 로 넘깁니다.

    브로커 장애 시 publish 재시도로 조회 응답이 막히지 않도록 retry=False 로 즉시 실패시킵니다.
    """

    def track_view(self, *, job: Job, viewer_id: Optional[str]) -> None:
        track_job_view.apply_async(args=(job.id, viewer_id), retry=False)
