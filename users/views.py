import logging

from django.conf import settings
from django.db import transaction
from django.utils import timezone
from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import permissions, serializers, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from common.records import RecordViewSet
from common.tasks import send_email_task
from schools.models import SchoolProfile
from schools.permissions import IsAdmin
from .models import User
from .serializers import LoginSerializer, ResetPasswordSerializer, UserCreateSerializer, UserSerializer

logger = logging.getLogger(__name__)

SuccessSerializer = inline_serializer("Success", {"success": serializers.BooleanField()})


class LoginView(TokenObtainPairView):
    """Exchange username and password for a JWT pair plus the user record."""

    @extend_schema(
        operation_id='auth_login',
        request=LoginSerializer,
        responses={200: inline_serializer("LoginResponse", {
            "user": UserSerializer(),
            "token": serializers.CharField(),
            "refresh": serializers.CharField(),
        })},
        tags=['auth'],
    )
    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        try:
            serializer.is_valid(raise_exception=True)
        except TokenError as e:
            raise InvalidToken(e.args[0])

        user = serializer.user
        logger.info(f"User {user.username} logged in")
        return Response({
            'user': UserSerializer(user).data,
            'token': serializer.validated_data['access'],
            'refresh': serializer.validated_data['refresh'],
        })


class RefreshView(TokenRefreshView):
    pass


class LogoutView(APIView):
    """Tokens are stateless; the client discards its pair."""
    permission_classes = [permissions.AllowAny]

    @extend_schema(operation_id='auth_logout', request=None, responses={200: SuccessSerializer}, tags=['auth'])
    def post(self, request):
        return Response({'success': True})


def queue_password_changed_email(user, context):
    """Hand the notice to Celery; a broker failure is logged, never raised."""
    try:
        send_email_task.delay("password_changed", context, [user.email])
    except Exception as e:
        logger.error(f"Could not queue password change email for {user.username}: {e}")


@extend_schema(
    operation_id='auth_reset_password',
    summary='Reset password by email',
    request=ResetPasswordSerializer,
    responses={200: SuccessSerializer},
    tags=['auth'],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def reset_password(request):
    serializer = ResetPasswordSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    email = serializer.validated_data["email"]

    user = User.objects.filter(email__iexact=email, is_active=True).first()
    if user is None:
        raise NotFound(f"No active user with email {email}")

    user.set_password(serializer.validated_data["new_password"])
    user.save(update_fields=["password", "updated_at"])
    logger.info(f"Password reset for user {user.username}")

    profile = SchoolProfile.load()
    context = {
        "subject": "SIMADAM password changed",
        "full_name": user.full_name or user.username,
        "username": user.username,
        "changed_at": timezone.localtime().strftime("%Y-%m-%d %H:%M"),
        "school_name": profile.school_name if profile else settings.SPECTACULAR_SETTINGS["TITLE"],
    }
    transaction.on_commit(lambda: queue_password_changed_email(user, context))
    return Response({"success": True}, status=status.HTTP_200_OK)


class UserViewSet(RecordViewSet):
    queryset = User.objects.all()
    serializer_class = UserSerializer
    permission_classes = [IsAdmin]
    filterset_fields = ['role', 'is_active']

    def get_serializer_class(self):
        if self.action == 'create':
            return UserCreateSerializer
        return UserSerializer

    def perform_destroy(self, instance):
        logger.info(f"Deleting user {instance.username}")
        super().perform_destroy(instance)
