from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.decorators import action

from common.records import Reference, RecordViewSet, StudentQuerySerializer, choice_query_serializer
from schools.permissions import IsAdminOrGuru
from students.models import Student
from .models import PaymentStatus, SppPayment
from .serializers import MonthYearQuerySerializer, SppPaymentSerializer

StatusQuerySerializer = choice_query_serializer('status', PaymentStatus.values)


class SppPaymentViewSet(RecordViewSet):
    queryset = SppPayment.objects.all()
    serializer_class = SppPaymentSerializer
    permission_classes = [IsAdminOrGuru]
    filterset_fields = ['student', 'month', 'year', 'status']

    @extend_schema(parameters=[OpenApiParameter('student_id', int, required=True)])
    @action(detail=False, methods=['get'], url_path='by-student')
    def by_student(self, request):
        params = self.query_params(StudentQuerySerializer)
        Reference('student_id', Student).check(params['student_id'])
        return self.list_where(student_id=params['student_id'])

    @extend_schema(parameters=[OpenApiParameter('status', str, required=True, enum=PaymentStatus.values)])
    @action(detail=False, methods=['get'], url_path='by-status')
    def by_status(self, request):
        params = self.query_params(StatusQuerySerializer)
        return self.list_where(status=params['status'])

    @extend_schema(parameters=[
        OpenApiParameter('month', int, required=True),
        OpenApiParameter('year', int, required=True),
    ])
    @action(detail=False, methods=['get'], url_path='by-month-year')
    def by_month_year(self, request):
        params = self.query_params(MonthYearQuerySerializer)
        return self.list_where(month=params['month'], year=params['year'])
