"""
Tests for GetJobByIdUseCase
"""

from datetime import timedelta

from job.application.errors import JobErrorCode
from job.application.usecases.get_job_by_id import GetJobByIdUseCase
from job.tests.fakes import (
    BASE_TIME,
    FakeClock,
    InMemoryJobRepository,
    RecordingViewTracker,
    make_job,
)


class TestGetJobById:
    def setup_method(self):
        self.clock = FakeClock()
        self.repo = InMemoryJobRepository(self.clock)
        self.tracker = RecordingViewTracker()
        self.usecase = GetJobByIdUseCase(
            job_repo=self.repo, view_tracker=self.tracker, clock=self.clock
        )
        self.job = self.repo.add(make_job(user_id="owner-1"))

    def test_owner_view(self):
        result = self.usecase.execute(job_id=self.job.id, user_id="owner-1")

        detail = result.value
        assert detail.is_owner is True
        assert detail.can_edit is True
        assert detail.is_new is True
        assert self.tracker.views == []

    def test_anonymous_view_is_tracked(self):
        result = self.usecase.execute(job_id=self.job.id)

        assert result.value.is_owner is False
        assert result.value.can_edit is False
        assert self.tracker.views == [(self.job.id, None)]

    def test_other_user_view_is_tracked(self):
        self.usecase.execute(job_id=self.job.id, user_id="viewer-9")

        assert self.tracker.views == [(self.job.id, "viewer-9")]

    def test_tracker_failure_is_swallowed(self):
        usecase = GetJobByIdUseCase(
            job_repo=self.repo, view_tracker=RecordingViewTracker(fail=True), clock=self.clock
        )

        assert usecase.execute(job_id=self.job.id, user_id="viewer-9").is_ok

    def test_edit_window_exactly_90_days(self):
        self.clock.advance(days=90)

        assert self.usecase.execute(job_id=self.job.id, user_id="owner-1").value.can_edit is True

    def test_edit_window_expired_after_91_days(self):
        self.clock.advance(days=91)

        detail = self.usecase.execute(job_id=self.job.id, user_id="owner-1").value
        assert detail.can_edit is False
        assert detail.days_since_posted == 91
        assert detail.is_new is False

    def test_invalid_ids(self):
        assert self.usecase.execute(job_id="").message == "Invalid job ID provided"
        result = self.usecase.execute(job_id="../etc/passwd")
        assert result.code == JobErrorCode.INVALID_ID
        assert result.message == "Invalid job ID format"
        assert self.repo.calls == []

    def test_trailing_newline_is_rejected(self):
        result = self.usecase.execute(job_id="abc\n")
        uuid_result = self.usecase.execute(job_id=f"{self.job.id}\n")

        assert result.message == "Invalid job ID format"
        assert uuid_result.code == JobErrorCode.INVALID_ID
        assert self.repo.calls == []

    def test_simple_ids_are_accepted_format(self):
        result = self.usecase.execute(job_id="job_123-abc")

        assert result.code == JobErrorCode.NOT_FOUND

    def test_repository_failure(self):
        self.repo.fail_on.add("find_by_id")

        result = self.usecase.execute(job_id=self.job.id)

        assert result.code == JobErrorCode.REPOSITORY_ERROR


class TestGetJobByIdExtras:
    def setup_method(self):
        self.clock = FakeClock()
        self.repo = InMemoryJobRepository(self.clock)
        self.usecase = GetJobByIdUseCase(
            job_repo=self.repo, view_tracker=RecordingViewTracker(), clock=self.clock
        )

    def test_get_multiple_jobs_collects_errors(self):
        # Given
        job = self.repo.add(make_job())

        # When
        result = self.usecase.get_multiple_jobs(job_ids=[job.id, "missing-id", "bad id!"])

        # Then
        assert [j.id for j in result.value.jobs] == [job.id]
        assert result.value.errors == {
            "missing-id": "Job not found",
            "bad id!": "Invalid job ID format",
        }

    def test_related_excludes_self_and_caps_at_five(self):
        # Given: 같은 지역/고용 형태 7건, 다른 지역 1건
        target = self.repo.add(make_job(title="Target", created_at=BASE_TIME))
        for i in range(7):
            self.repo.add(
                make_job(title=f"Similar {i}", created_at=BASE_TIME + timedelta(minutes=i + 1))
            )
        self.repo.add(make_job(title="Elsewhere", location="Busan"))

        # When
        result = self.usecase.get_job_with_related(job_id=target.id)

        # Then
        related = result.value.related
        assert len(related) == 5
        assert all(job.id != target.id for job in related)
        assert all(job.location == "Seoul" for job in related)
        assert related[0].title == "Similar 6"

    def test_related_lookup_failure_returns_empty(self):
        target = self.repo.add(make_job())
        self.repo.fail_on.add("find_all")

        result = self.usecase.get_job_with_related(job_id=target.id)

        assert result.value.related == []
        assert result.value.detail.job.id == target.id

    def test_preview_truncates_long_description(self):
        job = self.repo.add(make_job(description="x" * 250))

        preview = self.usecase.get_job_preview(job_id=job.id).value

        assert preview.description == "x" * 200 + "..."
        assert preview.title == job.title

    def test_preview_keeps_short_description(self):
        job = self.repo.add(make_job(description="y" * 200))

        assert self.usecase.get_job_preview(job_id=job.id).value.description == "y" * 200

    def test_preview_not_found(self):
        result = self.usecase.get_job_preview(job_id="nope")

        assert result.code == JobErrorCode.NOT_FOUND
