from __future__ import annotations

from typing import Protocol

from job.domain.job import Job


class DeletionNotifierPort(Protocol):
    def notify_deleted(self, *, job: Job, deleted_by: str) -> None: ...
