from __future__ import annotations

from typing import Any, Protocol

from job.domain.job import Job


class AuditLogPort(Protocol):
    def record_created(self, *, job: Job, actor_id: str) -> None: ...

    def record_updated(
        self, *, job: Job, actor_id: str, changes: dict[str, dict[str, Any]]
    ) -> None: ...

    def record_deleted(
        self, *, job: Job, actor_id: str, force_delete: bool, reason: str
    ) -> None: ...
