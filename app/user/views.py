import logging

from common.jwt_cookies import delete_jwt_cookies, set_jwt_cookies
from drf_spectacular.utils import OpenApiTypes, extend_schema
from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken
from user.serializers import (
    UserLoginSerializer,
    UserRegistrationSerializer,
    UserSerializer,
)

logger = logging.getLogger(__name__)


class UserRegistrationView(generics.CreateAPIView):
    serializer_class = UserRegistrationSerializer
    permission_classes = [AllowAny]


class UserLoginView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(
        request=UserLoginSerializer,
        responses={200: OpenApiTypes.OBJECT},
        summary="User Login",
        description="Login with username and password. JWT tokens are returned and set as HttpOnly cookies.",
    )
    def post(self, request):
        serializer = UserLoginSerializer(
            data=request.data, context={"request": request}
        )
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        refresh = RefreshToken.for_user(user)
        access = str(refresh.access_token)

        logger.info("user_login user_id=%s", user.pk)
        response = Response(
            {
                "refresh": str(refresh),
                "access": access,
                "user": UserSerializer(user).data,
            },
            status=status.HTTP_200_OK,
        )
        return set_jwt_cookies(response, access, str(refresh))


class UserLogoutView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(request=None, responses={204: None}, summary="User Logout")
    def post(self, request):
        response = Response(status=status.HTTP_204_NO_CONTENT)
        return delete_jwt_cookies(response)


class CurrentUserView(APIView):
    """현재 로그인한 사용자 (쿠키 또는 Authorization 헤더)"""

    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: UserSerializer}, summary="Current User")
    def get(self, request):
        return Response(UserSerializer(request.user).data)
