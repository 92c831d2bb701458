from datetime import timedelta

from django.utils import timezone
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import serializers
from rest_framework.decorators import action
from rest_framework.filters import SearchFilter
from django_filters.rest_framework import DjangoFilterBackend

from common.records import (
    DateRangeQuerySerializer,
    RecordViewSet,
    StudentQuerySerializer,
    choice_query_serializer,
    flag_query_serializer,
)
from schools.permissions import IsAdminOrGuru
from .models import CertificatePickup, Student, StudentCard, StudentOrigin, StudentTransfer
from .serializers import (
    CertificatePickupSerializer,
    ExpiringQuerySerializer,
    StudentCardSerializer,
    StudentSerializer,
    StudentTransferSerializer,
)

STUDENT_PARAM = OpenApiParameter('student_id', int, required=True)
DATE_RANGE_PARAMS = [
    OpenApiParameter('start_date', str, required=True, description='YYYY-MM-DD, inclusive'),
    OpenApiParameter('end_date', str, required=True, description='YYYY-MM-DD, inclusive'),
]


class ClassQuerySerializer(serializers.Serializer):
    class_id = serializers.IntegerField()


OriginQuerySerializer = choice_query_serializer('origin', StudentOrigin.values)
PickedUpQuerySerializer = flag_query_serializer('is_picked_up')
ActiveQuerySerializer = flag_query_serializer('is_active')


class StudentViewSet(RecordViewSet):
    queryset = Student.objects.all()
    serializer_class = StudentSerializer
    permission_classes = [IsAdminOrGuru]
    filter_backends = [DjangoFilterBackend, SearchFilter]
    filterset_fields = ['gender', 'origin_school', 'entry_year', 'is_active']
    search_fields = ['nis', 'nisn', 'full_name', 'parent_name']

    @extend_schema(parameters=[OpenApiParameter('class_id', int, required=True)])
    @action(detail=False, methods=['get'], url_path='by-class')
    def by_class(self, request):
        params = self.query_params(ClassQuerySerializer)
        return self.list_where(school_class_id=params['class_id'])

    @extend_schema(parameters=[OpenApiParameter('origin', str, required=True, enum=StudentOrigin.values)])
    @action(detail=False, methods=['get'], url_path='by-origin')
    def by_origin(self, request):
        params = self.query_params(OriginQuerySerializer)
        return self.list_where(origin_school=params['origin'])


class CertificatePickupViewSet(RecordViewSet):
    queryset = CertificatePickup.objects.all()
    serializer_class = CertificatePickupSerializer
    permission_classes = [IsAdminOrGuru]
    filterset_fields = ['certificate_type', 'is_picked_up']

    @extend_schema(parameters=[STUDENT_PARAM])
    @action(detail=False, methods=['get'], url_path='by-student')
    def by_student(self, request):
        params = self.query_params(StudentQuerySerializer)
        return self.list_where(student_id=params['student_id'])

    @extend_schema(parameters=[OpenApiParameter('is_picked_up', bool, required=True)])
    @action(detail=False, methods=['get'], url_path='by-status')
    def by_status(self, request):
        params = self.query_params(PickedUpQuerySerializer)
        return self.list_where(is_picked_up=params['is_picked_up'])


class StudentTransferViewSet(RecordViewSet):
    queryset = StudentTransfer.objects.all()
    serializer_class = StudentTransferSerializer
    permission_classes = [IsAdminOrGuru]
    filterset_fields = ['destination_school']

    @extend_schema(parameters=[STUDENT_PARAM])
    @action(detail=False, methods=['get'], url_path='by-student')
    def by_student(self, request):
        params = self.query_params(StudentQuerySerializer)
        return self.list_where(student_id=params['student_id'])

    @extend_schema(parameters=DATE_RANGE_PARAMS)
    @action(detail=False, methods=['get'], url_path='by-date-range')
    def by_date_range(self, request):
        params = self.query_params(DateRangeQuerySerializer)
        return self.list_where(transfer_date__range=(params['start_date'], params['end_date']))


class StudentCardViewSet(RecordViewSet):
    queryset = StudentCard.objects.all()
    serializer_class = StudentCardSerializer
    permission_classes = [IsAdminOrGuru]
    filterset_fields = ['is_active']

    @extend_schema(parameters=[STUDENT_PARAM])
    @action(detail=False, methods=['get'], url_path='by-student')
    def by_student(self, request):
        params = self.query_params(StudentQuerySerializer)
        return self.list_where(student_id=params['student_id'])

    @extend_schema(parameters=[OpenApiParameter('is_active', bool, required=True)])
    @action(detail=False, methods=['get'], url_path='by-status')
    def by_status(self, request):
        params = self.query_params(ActiveQuerySerializer)
        return self.list_where(is_active=params['is_active'])

    @extend_schema(parameters=[OpenApiParameter('days_until_expiry', int, required=True)])
    @action(detail=False, methods=['get'], url_path='expiring')
    def expiring(self, request):
        """Active cards whose expiry date falls between today and today + N days"""
        params = self.query_params(ExpiringQuerySerializer)
        today = timezone.localdate()
        until = today + timedelta(days=params['days_until_expiry'])
        return self.list_where(is_active=True, expiry_date__range=(today, until))
