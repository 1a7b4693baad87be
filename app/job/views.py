"""
Job Posting Views

채용 공고 API 엔드포인트 (Thin Controller)

비즈니스 규칙은 유스케이스에 있고, 여기서는 요청 파싱과 Err.code -> HTTP 상태 매핑만 담당합니다.
"""

import logging
from typing import Any, Optional

from common.application.result import Err
from drf_spectacular.utils import OpenApiParameter, OpenApiTypes, extend_schema
from job.application.errors import JobErrorCode
from job.serializers import (
    BulkDeleteResultSerializer,
    ErrorResponseSerializer,
    JobCountSerializer,
    JobDetailSerializer,
    JobIdsRequestSerializer,
    JobPageSerializer,
    JobPreviewSerializer,
    JobSerializer,
    JobWithRelatedSerializer,
    MultipleJobsSerializer,
)
from job.services import JobService
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

logger = logging.getLogger(__name__)

ERROR_STATUS_MAP = {
    JobErrorCode.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    JobErrorCode.INVALID_ID: status.HTTP_400_BAD_REQUEST,
    JobErrorCode.COMPANY_NOT_ALLOWED: status.HTTP_400_BAD_REQUEST,
    JobErrorCode.INVALID_JOB_TYPE: status.HTTP_400_BAD_REQUEST,
    JobErrorCode.INVALID_ORDER_FIELD: status.HTTP_400_BAD_REQUEST,
    JobErrorCode.MISSING_USER_ID: status.HTTP_400_BAD_REQUEST,
    JobErrorCode.VALIDATION_FAILED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    JobErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    JobErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    JobErrorCode.ADMIN_ONLY: status.HTTP_403_FORBIDDEN,
    JobErrorCode.DUPLICATE_POSTING: status.HTTP_409_CONFLICT,
    JobErrorCode.COMPANY_LOCKED: status.HTTP_409_CONFLICT,
    JobErrorCode.EDIT_WINDOW_EXPIRED: status.HTTP_409_CONFLICT,
    JobErrorCode.RECENTLY_UPDATED: status.HTTP_409_CONFLICT,
    JobErrorCode.DELETE_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    JobErrorCode.REPOSITORY_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_TRUTHY = {"1", "true", "yes"}

_LIST_PARAMETERS = [
    OpenApiParameter(name="location", description="근무지 (부분 일치)", required=False, type=OpenApiTypes.STR),
    OpenApiParameter(
        name="job_type",
        description="고용 형태 (Full-Time / Part-Time / Contract)",
        required=False,
        type=OpenApiTypes.STR,
    ),
    OpenApiParameter(name="search", description="제목/회사명/본문 검색어", required=False, type=OpenApiTypes.STR),
    OpenApiParameter(name="user_id", description="작성자 id", required=False, type=OpenApiTypes.STR),
]

_PAGE_PARAMETERS = [
    OpenApiParameter(name="page", description="페이지 (기본 1)", required=False, type=OpenApiTypes.INT),
    OpenApiParameter(name="limit", description="페이지 크기 (기본 20, 최대 100)", required=False, type=OpenApiTypes.INT),
]


def error_response(err: Err) -> Response:
    body: dict[str, Any] = {"error_code": err.code, "error": err.message}
    if err.validation_errors:
        body["validation_errors"] = err.validation_errors
    http_status = ERROR_STATUS_MAP.get(err.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if http_status >= 500:
        logger.error("job_api_error code=%s message=%s", err.code, err.message)
    return Response(body, status=http_status)


def _current_user_id(request) -> Optional[str]:
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        return None
    return str(user.pk)


def _request_payload(request) -> Any:
    # form 요청의 QueryDict 는 값이 리스트이므로 평범한 dict 로 바꿔서 검증
    data = request.data
    if hasattr(data, "dict"):
        return data.dict()
    return data


def _filter_params(request) -> dict[str, Any]:
    params = request.query_params
    return {
        "location": params.get("location"),
        "job_type": params.get("job_type") or params.get("jobType"),
        "search_term": params.get("search"),
        "user_id": params.get("user_id"),
    }


class JobPostingViewSet(GenericViewSet):
    """
    채용 공고 ViewSet (Thin Controller)

    비즈니스 로직은 JobService(유스케이스)에 위임하고,
    HTTP 요청/응답 처리만 담당합니다.
    인증 여부 판단도 유스케이스가 하므로 permission 은 AllowAny 입니다.
    """

    permission_classes = [AllowAny]
    serializer_class = JobSerializer

    @extend_schema(
        parameters=[
            *_LIST_PARAMETERS,
            *_PAGE_PARAMETERS,
            OpenApiParameter(
                name="order_by",
                description="정렬 필드 (created_at / updated_at / title / company)",
                required=False,
                type=OpenApiTypes.STR,
            ),
            OpenApiParameter(
                name="order_direction", description="asc / desc (기본 desc)", required=False, type=OpenApiTypes.STR
            ),
        ],
        responses={200: JobPageSerializer, 400: ErrorResponseSerializer},
        summary="List Jobs",
    )
    def list(self, request, *args, **kwargs):
        """
        채용 공고 목록 조회

        GET /api/v1/jobs/
        """
        params = request.query_params
        result = JobService.list_jobs(
            **_filter_params(request),
            page=params.get("page"),
            limit=params.get("limit"),
            order_by=params.get("order_by") or params.get("orderBy"),
            order_direction=params.get("order_direction") or params.get("orderDirection"),
        )
        if isinstance(result, Err):
            return error_response(result)
        return Response(JobPageSerializer(result.value).data)

    @extend_schema(
        request=OpenApiTypes.OBJECT,
        responses={201: JobSerializer, 401: ErrorResponseSerializer, 422: ErrorResponseSerializer},
        summary="Create Job",
    )
    def create(self, request, *args, **kwargs):
        """
        채용 공고 생성

        POST /api/v1/jobs/
        """
        result = JobService.create_job(
            data=_request_payload(request), user_id=_current_user_id(request)
        )
        if isinstance(result, Err):
            return error_response(result)
        return Response(JobSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: JobDetailSerializer, 404: ErrorResponseSerializer}, summary="Get Job")
    def retrieve(self, request, pk=None, *args, **kwargs):
        """
        채용 공고 상세 조회

        GET /api/v1/jobs/<id>/
        """
        result = JobService.get_job(job_id=pk, user_id=_current_user_id(request))
        if isinstance(result, Err):
            return error_response(result)
        return Response(JobDetailSerializer(result.value).data)

    @extend_schema(
        request=OpenApiTypes.OBJECT,
        responses={200: JobSerializer, 403: ErrorResponseSerializer, 409: ErrorResponseSerializer},
        summary="Update Job",
    )
    def update(self, request, pk=None, *args, **kwargs):
        """
        채용 공고 수정

        PUT/PATCH /api/v1/jobs/<id>/ (둘 다 요청에 포함된 필드만 반영)
        """
        result = JobService.update_job(
            job_id=pk, data=_request_payload(request), user_id=_current_user_id(request)
        )
        if isinstance(result, Err):
            return error_response(result)
        return Response(JobSerializer(result.value).data)

    @extend_schema(
        request=OpenApiTypes.OBJECT,
        responses={200: JobSerializer, 403: ErrorResponseSerializer, 409: ErrorResponseSerializer},
        summary="Partially Update Job",
    )
    def partial_update(self, request, pk=None, *args, **kwargs):
        return self.update(request, pk, *args, **kwargs)

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="force",
                description="관리자 강제 삭제 (소유권/쿨다운 무시)",
                required=False,
                type=OpenApiTypes.BOOL,
            )
        ],
        responses={204: None, 403: ErrorResponseSerializer, 409: ErrorResponseSerializer},
        summary="Delete Job",
    )
    def destroy(self, request, pk=None, *args, **kwargs):
        """
        채용 공고 삭제

        DELETE /api/v1/jobs/<id>/?force=true
        """
        force = str(request.query_params.get("force", "")).lower() in _TRUTHY
        result = JobService.delete_job(
            job_id=pk, user_id=_current_user_id(request), force=force
        )
        if isinstance(result, Err):
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(parameters=_PAGE_PARAMETERS, responses={200: JobPageSerializer}, summary="My Jobs")
    @action(detail=False, methods=["get"])
    def mine(self, request):
        """
        내가 작성한 공고 목록

        GET /api/v1/jobs/mine/
        """
        user_id = _current_user_id(request)
        if user_id is None:
            return error_response(
                Err(
                    code=JobErrorCode.UNAUTHENTICATED,
                    message="Authentication required",
                )
            )
        params = request.query_params
        result = JobService.get_user_jobs(
            user_id=user_id, page=params.get("page", 1), limit=params.get("limit", 20)
        )
        if isinstance(result, Err):
            return error_response(result)
        return Response(JobPageSerializer(result.value).data)

    @extend_schema(
        parameters=[
            OpenApiParameter(name="limit", description="개수 (기본 5)", required=False, type=OpenApiTypes.INT)
        ],
        responses={200: JobPageSerializer},
        summary="Featured Jobs",
    )
    @action(detail=False, methods=["get"])
    def featured(self, request):
        """
        추천(최신) 공고

        GET /api/v1/jobs/featured/
        """
        limit = request.query_params.get("limit")
        result = JobService.get_featured_jobs(limit=limit if limit else None)
        if isinstance(result, Err):
            return error_response(result)
        return Response(JobPageSerializer(result.value).data)

    @extend_schema(parameters=_LIST_PARAMETERS, responses={200: JobCountSerializer}, summary="Count Jobs")
    @action(detail=False, methods=["get"])
    def count(self, request):
        """
        조건에 맞는 공고 수

        GET /api/v1/jobs/count/
        """
        result = JobService.count_jobs(**_filter_params(request))
        if isinstance(result, Err):
            return error_response(result)
        return Response({"count": result.value})

    @extend_schema(request=JobIdsRequestSerializer, responses={200: MultipleJobsSerializer}, summary="Get Jobs By Ids")
    @action(detail=False, methods=["post"])
    def batch(self, request):
        """
        여러 공고 한 번에 조회 (실패한 id 는 errors 에 담김)

        POST /api/v1/jobs/batch/
        """
        serializer = JobIdsRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = JobService.get_multiple_jobs(
            job_ids=serializer.validated_data["ids"], user_id=_current_user_id(request)
        )
        if isinstance(result, Err):
            return error_response(result)
        return Response(MultipleJobsSerializer(result.value).data)

    @extend_schema(responses={200: JobWithRelatedSerializer, 404: ErrorResponseSerializer}, summary="Job With Related")
    @action(detail=True, methods=["get"])
    def related(self, request, pk=None):
        """
        공고 상세 + 같은 지역/고용 형태의 관련 공고 (최대 5개)

        GET /api/v1/jobs/<id>/related/
        """
        result = JobService.get_job_with_related(job_id=pk, user_id=_current_user_id(request))
        if isinstance(result, Err):
            return error_response(result)
        return Response(JobWithRelatedSerializer(result.value).data)

    @extend_schema(responses={200: JobPreviewSerializer, 404: ErrorResponseSerializer}, summary="Job Preview")
    @action(detail=True, methods=["get"])
    def preview(self, request, pk=None):
        """
        GET /api/v1/jobs/<id>/preview/
        """
        result = JobService.get_job_preview(job_id=pk)
        if isinstance(result, Err):
            return error_response(result)
        return Response(JobPreviewSerializer(result.value).data)

    @extend_schema(
        request=JobIdsRequestSerializer,
        responses={200: BulkDeleteResultSerializer, 403: ErrorResponseSerializer},
        summary="Bulk Delete Jobs (admin)",
    )
    @action(detail=False, methods=["post"], url_path="bulk-delete")
    def bulk_delete(self, request):
        """
        관리자 전용 일괄 삭제

        POST /api/v1/jobs/bulk-delete/
        """
        serializer = JobIdsRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = JobService.bulk_delete(
            job_ids=serializer.validated_data["ids"],
            caller_user_id=_current_user_id(request),
        )
        if isinstance(result, Err):
            return error_response(result)
        return Response(BulkDeleteResultSerializer(result.value).data)
