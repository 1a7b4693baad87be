"""
Celery 태스크: 채용 공고 조회 추적 / 삭제 알림
"""

import logging
from typing import Optional

from celery import shared_task
from django.db.models import F
from job.models import JobPosting

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3)
def track_job_view(self, job_id: str, viewer_id: Optional[str] = None):
    """
    비소유자 조회 시 view_count 를 1 증가시킵니다.

    F() 표현식으로 DB 에서 원자적으로 증가시키므로 동시 조회에도 누락이 없습니다.

    Returns:
        dict: 처리 결과
    """
    try:
        updated = JobPosting.objects.filter(pk=job_id).update(
            view_count=F("view_count") + 1
        )
    except Exception as e:
        logger.warning("track_job_view_failed job_id=%s reason=%s", job_id, e)
        try:
            raise self.retry(exc=e, countdown=10)
        except self.MaxRetriesExceededError:
            return {"success": False, "error": str(e)}

    if not updated:
        logger.info("track_job_view_skipped job_id=%s reason=not_found", job_id)
        return {"success": False, "error": f"JobPosting {job_id} not found"}

    logger.debug("track_job_view_done job_id=%s viewer_id=%s", job_id, viewer_id)
    return {"success": True, "job_id": job_id}


@shared_task
def notify_job_deleted(job_id: str, title: str, company: str, deleted_by: str):
    """
    공고 삭제 후속 알림.

    1. 삭제한 사용자에게 확인 알림
    2. 지원자 알림
    3. 캐시 무효화
    메일/캐시 연동 전까지는 구조화 로그로 남깁니다.
    """
    for channel in ("owner_confirmation", "applicant_notification", "cache_invalidation"):
        logger.info(
            "job_deleted_notification channel=%s job_id=%s title=%s company=%s deleted_by=%s",
            channel,
            job_id,
            title,
            company,
            deleted_by,
        )
    return {"success": True, "job_id": job_id}
