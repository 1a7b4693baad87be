import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone
from job.domain.job import JobType


class JobPosting(models.Model):
    class JobTypeChoices(models.TextChoices):
        FULL_TIME = JobType.FULL_TIME.value, "Full-Time"
        PART_TIME = JobType.PART_TIME.value, "Part-Time"
        CONTRACT = JobType.CONTRACT.value, "Contract"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=100)
    company = models.CharField(max_length=100)
    description = models.TextField(max_length=5000)
    location = models.CharField(max_length=100)
    job_type = models.CharField(max_length=20, choices=JobTypeChoices.choices)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="job_postings",
    )
    # 도메인 엔티티가 타임스탬프를 결정하므로 auto_now 를 쓰지 않음
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)
    view_count = models.PositiveIntegerField(default=0, help_text="비소유자 조회 수")

    class Meta:
        db_table = "job_posting"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "-created_at"], name="job_posting_user_created"),
            models.Index(fields=["location"], name="job_posting_location"),
            models.Index(fields=["job_type"], name="job_posting_job_type"),
        ]

    def __str__(self):
        return f"{self.company} - {self.title}"


class JobAuditLog(models.Model):
    """채용 공고 생성/수정/삭제 감사 기록 (공고 삭제 후에도 남도록 FK 대신 id 를 보관)."""

    class Action(models.TextChoices):
        CREATED = "created", "Created"
        UPDATED = "updated", "Updated"
        DELETED = "deleted", "Deleted"

    job_id = models.CharField(max_length=64, db_index=True)
    action = models.CharField(max_length=16, choices=Action.choices)
    actor_id = models.CharField(max_length=64)
    payload = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "job_audit_log"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.action} {self.job_id} by {self.actor_id}"
