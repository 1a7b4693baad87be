from __future__ import annotations

import uuid
from typing import Optional

from common.ports.job_repo import JobNotFoundError
from django.db.models import Q, QuerySet
from django.utils import timezone
from job.domain.job import Job, JobPatch, JobType, NewJob
from job.domain.query import (
    JobFilters,
    OrderDirection,
    PaginatedResult,
    Pagination,
)
from job.models import JobPosting


def _to_uuid(job_id: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(job_id))
    except (TypeError, ValueError, AttributeError):
        return None


def to_entity(posting: JobPosting) -> Job:
    return Job(
        id=str(posting.pk),
        title=posting.title,
        company=posting.company,
        description=posting.description,
        location=posting.location,
        job_type=JobType(posting.job_type),
        user_id=str(posting.user_id),
        created_at=posting.created_at,
        updated_at=posting.updated_at,
    )


class DjangoJobRepository:
    """
    JobRepositoryPort 의 Django ORM 구현.

    - 모든 반환값은 ORM 모델이 아닌 도메인 엔티티(Job)
    - id 는 UUID 문자열. UUID 가 아닌 id 는 "없음"으로 취급
    """

    def create(self, new_job: NewJob) -> Job:
        job = Job.create(new_job, now=timezone.now())
        posting = JobPosting.objects.create(
            id=uuid.UUID(job.id),
            title=job.title,
            company=job.company,
            description=job.description,
            location=job.location,
            job_type=job.job_type.value,
            user_id=job.user_id,
            created_at=job.created_at,
            updated_at=job.updated_at,
        )
        return to_entity(posting)

    def find_by_id(self, job_id: str) -> Optional[Job]:
        posting = self._get_posting(job_id)
        return to_entity(posting) if posting is not None else None

    def find_all(self, filters: JobFilters, pagination: Pagination) -> PaginatedResult[Job]:
        queryset = self._filtered(filters)
        total = queryset.count()

        field_name = pagination.order_by.value
        if pagination.order_direction == OrderDirection.DESC:
            ordering = (f"-{field_name}", "-id")
        else:
            ordering = (field_name, "id")

        start = pagination.offset
        rows = queryset.order_by(*ordering)[start : start + pagination.limit]
        return PaginatedResult.build(
            data=[to_entity(row) for row in rows],
            total=total,
            page=pagination.page,
            limit=pagination.limit,
        )

    def update(self, job_id: str, patch: JobPatch) -> Job:
        posting = self._get_posting(job_id)
        if posting is None:
            raise JobNotFoundError(job_id)

        job = to_entity(posting)
        job.apply_patch(patch, now=timezone.now())

        changed = list(patch.present_fields())
        for name in changed:
            value = getattr(job, name)
            setattr(posting, name, value.value if isinstance(value, JobType) else value)
        posting.updated_at = job.updated_at
        posting.save(update_fields=[*changed, "updated_at"])
        return job

    def delete(self, job_id: str) -> bool:
        pk = _to_uuid(job_id)
        if pk is None:
            return False
        deleted, _ = JobPosting.objects.filter(pk=pk).delete()
        return deleted > 0

    def count(self, filters: JobFilters) -> int:
        return self._filtered(filters).count()

    def _get_posting(self, job_id: str) -> Optional[JobPosting]:
        pk = _to_uuid(job_id)
        if pk is None:
            return None
        try:
            return JobPosting.objects.get(pk=pk)
        except JobPosting.DoesNotExist:
            return None

    def _filtered(self, filters: JobFilters) -> QuerySet[JobPosting]:
        queryset = JobPosting.objects.all()
        if filters.location:
            queryset = queryset.filter(location__icontains=filters.location)
        if filters.job_type:
            queryset = queryset.filter(job_type=filters.job_type.value)
        if filters.user_id:
            # 정수 pk 가 아닌 id 와 일치하는 작성자는 없음
            if not str(filters.user_id).isdigit():
                return queryset.none()
            queryset = queryset.filter(user_id=filters.user_id)
        if filters.search_term:
            term = filters.search_term
            queryset = queryset.filter(
                Q(title__icontains=term)
                | Q(company__icontains=term)
                | Q(description__icontains=term)
            )
        return queryset
