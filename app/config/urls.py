"""
URL configuration for config project.

- /api/v1/jobs/   채용 공고
- /api/v1/users/  회원가입/로그인
- /api/v1/schema/ OpenAPI 문서
"""

from django.contrib import admin
from django.http import JsonResponse
from django.urls import include, path
from django.views.decorators.http import require_http_methods
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)


@require_http_methods(["GET"])
def health_check(request):
    """헬스체크 엔드포인트"""
    return JsonResponse({"status": "healthy", "message": "Service is running"})


urlpatterns = [
    # Admin
    path("admin/", admin.site.urls),
    # API v1 Endpoints
    path("api/v1/jobs/", include("job.urls")),
    path("api/v1/users/", include("user.urls")),
    # Health Check
    path("health/", health_check, name="health_check"),
    # API Documentation (Spectacular)
    path("api/v1/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "api/v1/schema/swagger-ui/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
    path(
        "api/v1/schema/redoc/",
        SpectacularRedocView.as_view(url_name="schema"),
        name="redoc",
    ),
]
