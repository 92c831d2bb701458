import logging

from django.db import transaction
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import serializers, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from common.records import RecordViewSet, reject
from students.models import Student, StudentOrigin
from .models import BackgroundSetting, Classroom, SchoolProfile, Teacher
from .permissions import IsAdminOrGuru, IsAdminOrReadOnly
from .serializers import (
    BackgroundSettingSerializer,
    BackgroundUploadSerializer,
    ClassroomSerializer,
    DashboardStatsSerializer,
    ImageUploadSerializer,
    SchoolProfileSerializer,
    TeacherSerializer,
)
from .uploads import store_upload

logger = logging.getLogger(__name__)


class UserQuerySerializer(serializers.Serializer):
    user_id = serializers.IntegerField()


class GradeQuerySerializer(serializers.Serializer):
    grade = serializers.IntegerField(min_value=1, max_value=3)


class AcademicYearQuerySerializer(serializers.Serializer):
    academic_year = serializers.CharField()


class TeacherViewSet(RecordViewSet):
    queryset = Teacher.objects.all()
    serializer_class = TeacherSerializer
    permission_classes = [IsAdminOrGuru]
    filterset_fields = ['gender', 'is_active', 'subject']

    @extend_schema(parameters=[OpenApiParameter('user_id', int, required=True)])
    @action(detail=False, methods=['get'], url_path='by-user')
    def by_user(self, request):
        """Teacher record linked to a login account, if any"""
        params = self.query_params(UserQuerySerializer)
        return self.optional_response(self.get_queryset().filter(user_id=params['user_id']).first())


class ClassroomViewSet(RecordViewSet):
    queryset = Classroom.objects.all()
    serializer_class = ClassroomSerializer
    permission_classes = [IsAdminOrGuru]
    filterset_fields = ['grade', 'academic_year', 'is_active', 'homeroom_teacher']

    def check_destroy(self, instance):
        if instance.students.filter(is_active=True).exists():
            reject(f"Cannot delete class {instance.pk} with active students assigned")

    @extend_schema(parameters=[OpenApiParameter('grade', int, required=True)])
    @action(detail=False, methods=['get'], url_path='by-grade')
    def by_grade(self, request):
        params = self.query_params(GradeQuerySerializer)
        return self.list_where(grade=params['grade'])

    @extend_schema(parameters=[OpenApiParameter('academic_year', str, required=True)])
    @action(detail=False, methods=['get'], url_path='by-academic-year')
    def by_academic_year(self, request):
        params = self.query_params(AcademicYearQuerySerializer)
        return self.list_where(academic_year=params['academic_year'])


class SchoolProfileView(APIView):
    """
    The school profile is a single record. Reading it before it exists
    answers 204; the first update creates it.
    """
    permission_classes = [IsAdminOrGuru]

    @extend_schema(operation_id='school_profile_retrieve', responses={200: SchoolProfileSerializer, 204: None})
    def get(self, request):
        profile = SchoolProfile.load()
        if profile is None:
            return Response(status=status.HTTP_204_NO_CONTENT)
        return Response(SchoolProfileSerializer(profile).data)

    @extend_schema(operation_id='school_profile_update', request=SchoolProfileSerializer, responses={200: SchoolProfileSerializer})
    def patch(self, request):
        with transaction.atomic():
            profile = SchoolProfile.objects.select_for_update().order_by('id').first()
            if profile is None:
                logger.info("No school profile yet, creating one")
            serializer = SchoolProfileSerializer(profile, data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            profile = serializer.save()
        return Response(SchoolProfileSerializer(profile).data)

    put = patch


class SchoolProfileLogoView(APIView):
    """Store a logo image and hand back its path; the profile is left untouched."""
    permission_classes = [IsAdminOrGuru]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(operation_id='school_profile_upload_logo', request=ImageUploadSerializer)
    def post(self, request):
        serializer = ImageUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        logo_path = store_upload(serializer.validated_data['file'], 'logos', 'logo')
        return Response({'logo_path': logo_path}, status=status.HTTP_201_CREATED)


class BackgroundSettingViewSet(RecordViewSet):
    queryset = BackgroundSetting.objects.all()
    serializer_class = BackgroundSettingSerializer
    permission_classes = [IsAdminOrReadOnly]
    parser_classes = [JSONParser, MultiPartParser, FormParser]
    filterset_fields = ['is_active']

    def check_destroy(self, instance):
        if instance.is_active:
            reject("Cannot delete active background")

    @action(detail=False, methods=['get'], url_path='active')
    def active(self, request):
        return self.optional_response(BackgroundSetting.active())

    @extend_schema(request=None)
    @action(detail=True, methods=['post'], url_path='set-active')
    def set_active(self, request, pk=None):
        background = self.get_object()
        background.is_active = True
        background.save()
        logger.info(f"Background {background.pk} is now active")
        return Response(self.get_serializer(background).data)

    @extend_schema(request=BackgroundUploadSerializer)
    @action(detail=False, methods=['post'], url_path='upload')
    def upload(self, request):
        """Store an image and register it as an inactive background"""
        upload = BackgroundUploadSerializer(data=request.data)
        upload.is_valid(raise_exception=True)
        file_path = store_upload(upload.validated_data['file'], 'backgrounds', 'bg')
        background = BackgroundSetting.objects.create(
            name=upload.validated_data['name'],
            file_path=file_path,
            is_active=False,
        )
        return Response(self.get_serializer(background).data, status=status.HTTP_201_CREATED)


@extend_schema(operation_id='dashboard_stats', responses={200: DashboardStatsSerializer}, tags=['dashboard'])
@api_view(['GET'])
@permission_classes([IsAdminOrGuru])
def dashboard_stats(request):
    stats = {
        'total_students': Student.objects.filter(is_active=True).count(),
        'total_teachers': Teacher.objects.filter(is_active=True).count(),
        'students_from_smp': Student.objects.filter(origin_school=StudentOrigin.SMP_DARUL_MUTTAQIEN).count(),
        'students_from_mts': Student.objects.filter(origin_school=StudentOrigin.MTS).count(),
        'students_from_other': Student.objects.filter(origin_school=StudentOrigin.OTHER).count(),
    }
    return Response(DashboardStatsSerializer(stats).data)
