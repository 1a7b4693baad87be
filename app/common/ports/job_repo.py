from __future__ import annotations

from typing import Optional, Protocol

from job.domain.job import Job, JobPatch, NewJob
from job.domain.query import JobFilters, PaginatedResult, Pagination


class JobNotFoundError(LookupError):
    def __init__(self, job_id: str):
        super().__init__(f"Job {job_id} not found")
        self.job_id = job_id


class JobRepositoryPort(Protocol):
    def create(self, new_job: NewJob) -> Job: ...

    def find_by_id(self, job_id: str) -> Optional[Job]: ...

    def find_all(
        self, filters: JobFilters, pagination: Pagination
    ) -> PaginatedResult[Job]: ...

    def update(self, job_id: str, patch: JobPatch) -> Job:
        """patch 에 포함된 필드만 반영하고 updated_at 을 갱신합니다. 없으면 JobNotFoundError."""
        ...

    def delete(self, job_id: str) -> bool: ...

    def count(self, filters: JobFilters) -> int: ...
