from __future__ import annotations

from typing import Optional, Protocol

from job.domain.job import Job


class ViewTrackerPort(Protocol):
    def track_view(self, *, job: Job, viewer_id: Optional[str]) -> None:
        """조회 기록. 호출자를 블로킹하지 않아야 합니다 (fire-and-forget)."""
        ...
