"""
Tests for DeleteJobUseCase
"""

import logging

from job.application.errors import JobErrorCode
from job.application.usecases.delete_job import DeleteJobUseCase
from job.tests.fakes import (
    BASE_TIME,
    FakeClock,
    InMemoryJobRepository,
    RecordingAuditLog,
    RecordingNotifier,
    StaticAdminPolicy,
    make_job,
)


class TestDeleteJobUseCase:
    def setup_method(self):
        self.clock = FakeClock()
        self.repo = InMemoryJobRepository(self.clock)
        self.audit = RecordingAuditLog()
        self.notifier = RecordingNotifier()
        self.usecase = DeleteJobUseCase(
            job_repo=self.repo,
            audit_log=self.audit,
            notifier=self.notifier,
            admin_policy=StaticAdminPolicy({"admin-1"}),
            clock=self.clock,
        )
        self.job = self.repo.add(make_job(user_id="owner-1", created_at=BASE_TIME))

    def test_owner_can_delete(self):
        # Given
        self.clock.advance(days=1)

        # When
        result = self.usecase.execute(job_id=self.job.id, user_id="owner-1")

        # Then
        assert result.value == self.job.id
        assert self.repo.get(self.job.id) is None
        action, payload = self.audit.events[0]
        assert action == "deleted"
        assert payload["force_delete"] is False
        assert payload["reason"] == "user_request"
        assert self.notifier.notifications == [(self.job.id, "owner-1")]

    def test_unauthenticated(self):
        assert self.usecase.execute(job_id=self.job.id, user_id="").code == (
            JobErrorCode.UNAUTHENTICATED
        )

    def test_missing_id(self):
        assert self.usecase.execute(job_id="", user_id="owner-1").code == JobErrorCode.INVALID_ID

    def test_not_found(self):
        assert self.usecase.execute(job_id="gone", user_id="owner-1").code == (
            JobErrorCode.NOT_FOUND
        )

    def test_forbidden_for_non_owner(self):
        self.clock.advance(days=1)

        result = self.usecase.execute(job_id=self.job.id, user_id="intruder")

        assert result.code == JobErrorCode.FORBIDDEN
        assert self.repo.get(self.job.id) is not None

    def test_recently_updated_blocks_delete(self):
        # Given: 4분 전에 수정된 공고
        self.clock.advance(days=1)
        self.repo.update(self.job.id, _title_patch())
        self.clock.advance(minutes=4)

        # When
        result = self.usecase.execute(job_id=self.job.id, user_id="owner-1")

        # Then
        assert result.code == JobErrorCode.RECENTLY_UPDATED
        assert "delete" not in self.repo.calls

    def test_delete_allowed_six_minutes_after_update(self):
        self.clock.advance(days=1)
        self.repo.update(self.job.id, _title_patch())
        self.clock.advance(minutes=6)

        assert self.usecase.execute(job_id=self.job.id, user_id="owner-1").is_ok

    def test_force_delete_skips_cooldown_and_ownership(self):
        self.clock.advance(minutes=1)

        result = self.usecase.execute(job_id=self.job.id, user_id="admin-1", force_delete=True)

        assert result.is_ok
        assert self.audit.events[0][1]["reason"] == "force_delete"

    def test_brand_new_job_only_warns(self, caplog):
        # Given: 생성 30분 후 (마지막 수정 후 5분 경과)
        self.clock.advance(minutes=30)

        # When
        with caplog.at_level(logging.WARNING):
            result = self.usecase.execute(job_id=self.job.id, user_id="owner-1")

        # Then
        assert result.is_ok
        assert "job_delete_brand_new" in caplog.text

    def test_delete_returning_false(self):
        self.clock.advance(days=1)
        self.repo.delete_returns = False

        result = self.usecase.execute(job_id=self.job.id, user_id="owner-1")

        assert result.code == JobErrorCode.DELETE_FAILED
        assert self.notifier.notifications == []

    def test_repository_failure(self):
        self.clock.advance(days=1)
        self.repo.fail_on.add("delete")

        result = self.usecase.execute(job_id=self.job.id, user_id="owner-1")

        assert result.code == JobErrorCode.REPOSITORY_ERROR

    def test_side_effect_failures_are_swallowed(self):
        self.clock.advance(days=1)
        usecase = DeleteJobUseCase(
            job_repo=self.repo,
            audit_log=RecordingAuditLog(fail=True),
            notifier=RecordingNotifier(fail=True),
            admin_policy=StaticAdminPolicy(),
            clock=self.clock,
        )

        assert usecase.execute(job_id=self.job.id, user_id="owner-1").is_ok
        assert self.repo.get(self.job.id) is None


class TestBulkDelete:
    def setup_method(self):
        self.clock = FakeClock()
        self.repo = InMemoryJobRepository(self.clock)
        self.usecase = DeleteJobUseCase(
            job_repo=self.repo,
            audit_log=RecordingAuditLog(),
            notifier=RecordingNotifier(),
            admin_policy=StaticAdminPolicy({"admin-1"}),
            clock=self.clock,
        )

    def test_non_admin_is_rejected(self):
        job = self.repo.add(make_job(user_id="u1"))

        result = self.usecase.bulk_delete(job_ids=[job.id], caller_user_id="u1")

        assert result.code == JobErrorCode.ADMIN_ONLY
        assert self.repo.get(job.id) is not None

    def test_admin_deletes_and_collects_failures(self):
        # Given
        first = self.repo.add(make_job(user_id="u1"))
        second = self.repo.add(make_job(user_id="u2", title="Data Engineer"))

        # When
        result = self.usecase.bulk_delete(
            job_ids=[first.id, "missing", second.id], caller_user_id="admin-1"
        )

        # Then
        assert result.value.succeeded == [first.id, second.id]
        assert result.value.failed == {"missing": "Job not found"}

    def test_is_admin(self):
        assert self.usecase.is_admin("admin-1") is True
        assert self.usecase.is_admin("u1") is False
        assert self.usecase.is_admin(None) is False


def _title_patch():
    from job.domain.job import JobPatch

    return JobPatch(title="Edited title")
