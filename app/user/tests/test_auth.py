"""
Tests for user registration / login / JWT cookie flow
"""

import pytest
from django.conf import settings
from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APIClient

User = get_user_model()


@pytest.mark.django_db
class TestUserAuth:
    def setup_method(self):
        self.client = APIClient()

    def _register(self, username="recruiter", password="secret-pass-1"):
        return self.client.post(
            "/api/v1/users/register/",
            {"username": username, "email": f"{username}@example.com", "password": password},
            format="json",
        )

    def _login(self, username="recruiter", password="secret-pass-1"):
        return self.client.post(
            "/api/v1/users/login/",
            {"username": username, "password": password},
            format="json",
        )

    def test_register(self):
        # When
        response = self._register()

        # Then
        assert response.status_code == status.HTTP_201_CREATED
        assert "password" not in response.data
        assert User.objects.get(username="recruiter").check_password("secret-pass-1")

    def test_register_rejects_numeric_password(self):
        response = self._register(password="12345678")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "password" in response.data

    def test_login_sets_cookies(self):
        # Given
        self._register()

        # When
        response = self._login()

        # Then
        assert response.status_code == status.HTTP_200_OK
        assert response.data["user"]["username"] == "recruiter"
        assert response.cookies[settings.JWT_AUTH_COOKIE].value == response.data["access"]
        assert response.cookies[settings.JWT_AUTH_COOKIE]["httponly"]
        assert settings.JWT_AUTH_REFRESH_COOKIE in response.cookies

    def test_login_with_wrong_password(self):
        self._register()

        response = self._login(password="wrong-pass-1")

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_me_with_cookie(self):
        # Given: 로그인 응답의 쿠키가 클라이언트에 저장됨
        self._register()
        self._login()

        # When
        response = self.client.get("/api/v1/users/me/")

        # Then
        assert response.status_code == status.HTTP_200_OK
        assert response.data["username"] == "recruiter"

    def test_me_with_bearer_header(self):
        self._register()
        access = self._login().data["access"]
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")

        response = client.get("/api/v1/users/me/")

        assert response.status_code == status.HTTP_200_OK

    def test_me_requires_authentication(self):
        response = self.client.get("/api/v1/users/me/")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_logout_deletes_cookies(self):
        self._register()
        self._login()

        response = self.client.post("/api/v1/users/logout/")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert response.cookies[settings.JWT_AUTH_COOKIE].value == ""
        assert response.cookies[settings.JWT_AUTH_COOKIE]["max-age"] == 0

    def test_cookie_login_can_create_job(self):
        """쿠키 인증만으로 채용 공고 API 를 사용할 수 있음"""
        self._register()
        self._login()

        response = self.client.post(
            "/api/v1/jobs/",
            {
                "title": "Backend Engineer",
                "company": "Acme",
                "description": "Build and operate APIs for the job board.",
                "location": "Seoul",
                "job_type": "Full-Time",
            },
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["user_id"] == str(User.objects.get(username="recruiter").pk)

    def test_stale_cookie_is_treated_as_anonymous(self):
        """잘못된 쿠키가 있어도 공개 API 는 익명으로 동작"""
        self.client.cookies[settings.JWT_AUTH_COOKIE] = "not-a-jwt"

        listing = self.client.get("/api/v1/jobs/")
        me = self.client.get("/api/v1/users/me/")

        assert listing.status_code == status.HTTP_200_OK
        assert me.status_code == status.HTTP_401_UNAUTHORIZED
