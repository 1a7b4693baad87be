"""
Tests for JobPosting Views

채용 공고 API 엔드포인트 테스트
"""

from datetime import timedelta

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from job.models import JobAuditLog, JobPosting
from rest_framework import status
from rest_framework.test import APIClient

User = get_user_model()

PAYLOAD = {
    "title": "Backend Engineer",
    "company": "Acme",
    "description": "Build and operate APIs for the job board.",
    "location": "Seoul",
    "job_type": "Full-Time",
}


def _age_posting(job_id, **delta):
    """생성/수정 시각을 과거로 옮겨 시간 기반 규칙을 검증할 수 있게 합니다."""
    moment = timezone.now() - timedelta(**delta)
    JobPosting.objects.filter(pk=job_id).update(created_at=moment, updated_at=moment)


@pytest.mark.django_db
class TestJobPostingViewSet:
    """JobPostingViewSet API 테스트"""

    def setup_method(self):
        """각 테스트 전에 실행"""
        self.client = APIClient()
        self.user = User.objects.create_user(
            username="testuser", email="test@example.com", password="testpass123"
        )
        self.other = User.objects.create_user(
            username="otheruser", email="other@example.com", password="testpass123"
        )
        self.client.force_authenticate(user=self.user)

    def _create(self, **overrides):
        response = self.client.post("/api/v1/jobs/", {**PAYLOAD, **overrides}, format="json")
        assert response.status_code == status.HTTP_201_CREATED, response.data
        return response.data

    def test_create_job(self):
        """채용 공고 생성"""
        # When
        response = self.client.post("/api/v1/jobs/", PAYLOAD, format="json")

        # Then
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["title"] == "Backend Engineer"
        assert response.data["job_type"] == "Full-Time"
        assert response.data["user_id"] == str(self.user.pk)
        assert JobPosting.objects.filter(pk=response.data["id"]).exists()
        assert JobAuditLog.objects.filter(
            job_id=response.data["id"], action=JobAuditLog.Action.CREATED
        ).exists()

    def test_create_accepts_camel_case_job_type(self):
        payload = {k: v for k, v in PAYLOAD.items() if k != "job_type"}

        response = self.client.post(
            "/api/v1/jobs/", {**payload, "jobType": "Contract"}, format="json"
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["job_type"] == "Contract"

    def test_create_requires_authentication(self):
        """비로그인 사용자는 공고를 만들 수 없음"""
        client = APIClient()

        response = client.post("/api/v1/jobs/", PAYLOAD, format="json")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data["error_code"] == "UNAUTHENTICATED"
        assert JobPosting.objects.count() == 0

    def test_create_validation_errors(self):
        """필드별 검증 오류는 422 로 반환"""
        response = self.client.post(
            "/api/v1/jobs/",
            {**PAYLOAD, "title": "", "job_type": "Remote"},
            format="json",
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.data["error_code"] == "VALIDATION_FAILED"
        assert set(response.data["validation_errors"]) == {"title", "job_type"}

    def test_create_duplicate_is_conflict(self):
        self._create()

        response = self.client.post("/api/v1/jobs/", PAYLOAD, format="json")

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data["error_code"] == "DUPLICATE_POSTING"

    def test_create_blacklisted_company(self):
        response = self.client.post(
            "/api/v1/jobs/", {**PAYLOAD, "company": "Fake Corp"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "COMPANY_NOT_ALLOWED"

    def test_list_jobs(self):
        """채용 공고 목록 조회"""
        # Given
        self._create()
        self._create(title="Data Engineer", location="Busan", job_type="Contract")

        # When
        response = self.client.get("/api/v1/jobs/")
        filtered = self.client.get("/api/v1/jobs/", {"location": "busan"})

        # Then
        assert response.status_code == status.HTTP_200_OK
        assert response.data["total"] == 2
        assert response.data["page"] == 1
        assert response.data["limit"] == 20
        assert response.data["has_more"] is False
        assert filtered.data["total"] == 1
        assert filtered.data["data"][0]["title"] == "Data Engineer"

    def test_list_is_public(self):
        self._create()

        response = APIClient().get("/api/v1/jobs/")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["total"] == 1

    def test_list_invalid_job_type(self):
        response = self.client.get("/api/v1/jobs/", {"job_type": "Freelance"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "INVALID_JOB_TYPE"

    def test_list_with_unknown_owner_is_empty(self):
        """존재할 수 없는 작성자 id 필터는 오류가 아니라 빈 목록"""
        self._create()

        response = self.client.get("/api/v1/jobs/", {"user_id": "abc"})

        assert response.status_code == status.HTTP_200_OK
        assert response.data["total"] == 0
        assert response.data["data"] == []

    def test_list_by_owner(self):
        self._create()

        response = self.client.get("/api/v1/jobs/", {"user_id": str(self.other.pk)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data["total"] == 0

    def test_list_invalid_order_field(self):
        response = self.client.get("/api/v1/jobs/", {"order_by": "salary"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "INVALID_ORDER_FIELD"

    def test_retrieve_as_owner(self):
        """소유자 상세 조회는 조회수를 올리지 않음"""
        job = self._create()

        response = self.client.get(f"/api/v1/jobs/{job['id']}/")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["is_owner"] is True
        assert response.data["can_edit"] is True
        assert response.data["is_new"] is True
        assert response.data["days_since_posted"] == 0
        assert JobPosting.objects.get(pk=job["id"]).view_count == 0

    def test_retrieve_as_visitor_tracks_view(self):
        job = self._create()

        response = APIClient().get(f"/api/v1/jobs/{job['id']}/")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["is_owner"] is False
        assert JobPosting.objects.get(pk=job["id"]).view_count == 1

    def test_retrieve_not_found(self):
        response = self.client.get("/api/v1/jobs/3f0c8f61-5a43-4b8f-9f55-0a7d0f5a0c11/")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error"] == "Job not found"

    def test_partial_update(self):
        job = self._create()

        response = self.client.patch(
            f"/api/v1/jobs/{job['id']}/", {"title": "Senior Backend Engineer"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["title"] == "Senior Backend Engineer"
        assert response.data["company"] == "Acme"
        log = JobAuditLog.objects.get(job_id=job["id"], action=JobAuditLog.Action.UPDATED)
        assert log.payload["changes"]["title"]["to"] == "Senior Backend Engineer"

    def test_update_by_other_user_is_forbidden(self):
        job = self._create()
        client = APIClient()
        client.force_authenticate(user=self.other)

        response = client.patch(f"/api/v1/jobs/{job['id']}/", {"title": "Hijacked"}, format="json")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert JobPosting.objects.get(pk=job["id"]).title == "Backend Engineer"

    def test_update_company_after_lock(self):
        job = self._create()
        _age_posting(job["id"], hours=25)

        response = self.client.patch(
            f"/api/v1/jobs/{job['id']}/", {"company": "Acme Labs"}, format="json"
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data["error_code"] == "COMPANY_LOCKED"

    def test_delete(self):
        """마지막 수정 후 5분이 지나면 삭제 가능"""
        job = self._create()
        _age_posting(job["id"], hours=2)

        response = self.client.delete(f"/api/v1/jobs/{job['id']}/")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not JobPosting.objects.filter(pk=job["id"]).exists()
        log = JobAuditLog.objects.get(job_id=job["id"], action=JobAuditLog.Action.DELETED)
        assert log.payload["snapshot"]["title"] == "Backend Engineer"
        assert log.payload["reason"] == "user_request"

    def test_delete_right_after_update_is_conflict(self):
        job = self._create()

        response = self.client.delete(f"/api/v1/jobs/{job['id']}/")

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data["error_code"] == "RECENTLY_UPDATED"

    def test_force_delete_requires_admin(self):
        """관리자 역할이 없으면 force 파라미터는 무시됨"""
        job = self._create()
        _age_posting(job["id"], hours=2)
        client = APIClient()
        client.force_authenticate(user=self.other)

        response = client.delete(f"/api/v1/jobs/{job['id']}/?force=true")

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_mine(self):
        self._create()
        client = APIClient()
        client.force_authenticate(user=self.other)
        client.post("/api/v1/jobs/", {**PAYLOAD, "title": "Other Role"}, format="json")

        response = self.client.get("/api/v1/jobs/mine/")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["total"] == 1
        assert response.data["data"][0]["title"] == "Backend Engineer"

    def test_mine_requires_authentication(self):
        response = APIClient().get("/api/v1/jobs/mine/")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_featured_and_count(self):
        for i in range(3):
            self._create(title=f"Engineer {i}")

        featured = self.client.get("/api/v1/jobs/featured/", {"limit": 2})
        count = self.client.get("/api/v1/jobs/count/", {"location": "Seoul"})

        assert featured.status_code == status.HTTP_200_OK
        assert len(featured.data["data"]) == 2
        assert count.data == {"count": 3}

    def test_batch(self):
        job = self._create()

        response = self.client.post(
            "/api/v1/jobs/batch/", {"ids": [job["id"], "bad id!"]}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert [j["id"] for j in response.data["jobs"]] == [job["id"]]
        assert response.data["errors"] == {"bad id!": "Invalid job ID format"}

    def test_related_and_preview(self):
        job = self._create(description="x" * 250)
        self._create(title="Frontend Engineer")

        related = self.client.get(f"/api/v1/jobs/{job['id']}/related/")
        preview = self.client.get(f"/api/v1/jobs/{job['id']}/preview/")

        assert related.status_code == status.HTTP_200_OK
        assert related.data["job"]["id"] == job["id"]
        assert [j["title"] for j in related.data["related"]] == ["Frontend Engineer"]
        assert preview.data["description"] == "x" * 200 + "..."

    def test_bulk_delete_is_admin_only(self):
        job = self._create()

        response = self.client.post("/api/v1/jobs/bulk-delete/", {"ids": [job["id"]]}, format="json")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["error_code"] == "ADMIN_ONLY"
        assert JobPosting.objects.filter(pk=job["id"]).exists()


@pytest.mark.django_db
class TestJobLifecycleScenario:
    """공고 생성부터 삭제까지의 흐름"""

    def test_backend_engineer_at_acme(self):
        # Given
        user = User.objects.create_user(username="recruiter", password="testpass123")
        client = APIClient()
        client.force_authenticate(user=user)

        # When: 생성 -> 검색 -> 수정
        created = client.post("/api/v1/jobs/", PAYLOAD, format="json").data
        search = client.get("/api/v1/jobs/", {"search": "acme"}).data
        updated = client.patch(
            f"/api/v1/jobs/{created['id']}/", {"location": "Pangyo"}, format="json"
        ).data

        # Then
        assert search["total"] == 1
        assert search["data"][0]["id"] == created["id"]
        assert updated["location"] == "Pangyo"
        assert updated["title"] == "Backend Engineer"

        # When: 쿨다운 이후 삭제
        _age_posting(created["id"], minutes=10)
        response = client.delete(f"/api/v1/jobs/{created['id']}/")

        # Then
        assert response.status_code == status.HTTP_204_NO_CONTENT
        actions = list(
            JobAuditLog.objects.filter(job_id=created["id"])
            .order_by("created_at", "id")
            .values_list("action", flat=True)
        )
        assert actions == ["created", "updated", "deleted"]
