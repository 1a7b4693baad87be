from django.urls import include, path
from job.views import JobPostingViewSet
from rest_framework.routers import SimpleRouter

# prefix 가 비어 있으므로 api-root 뷰를 추가하는 DefaultRouter 대신 SimpleRouter 사용
router = SimpleRouter()
router.register(r"", JobPostingViewSet, basename="job")

urlpatterns = [
    path("", include(router.urls)),
]
