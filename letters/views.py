from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.decorators import action
from rest_framework.filters import SearchFilter
from django_filters.rest_framework import DjangoFilterBackend

from common.records import DateRangeQuerySerializer, RecordViewSet, choice_query_serializer
from schools.permissions import IsAdminOrGuru
from .models import Letter, LetterType
from .serializers import LetterSerializer

LetterTypeQuerySerializer = choice_query_serializer('letter_type', LetterType.values)


class LetterViewSet(RecordViewSet):
    queryset = Letter.objects.all()
    serializer_class = LetterSerializer
    permission_classes = [IsAdminOrGuru]
    filter_backends = [DjangoFilterBackend, SearchFilter]
    filterset_fields = ['letter_type']
    search_fields = ['letter_number', 'subject', 'sender', 'recipient']

    @extend_schema(parameters=[OpenApiParameter('letter_type', str, required=True, enum=LetterType.values)])
    @action(detail=False, methods=['get'], url_path='by-type')
    def by_type(self, request):
        params = self.query_params(LetterTypeQuerySerializer)
        return self.list_where(letter_type=params['letter_type'])

    @extend_schema(parameters=[
        OpenApiParameter('start_date', str, required=True, description='YYYY-MM-DD, inclusive'),
        OpenApiParameter('end_date', str, required=True, description='YYYY-MM-DD, inclusive'),
    ])
    @action(detail=False, methods=['get'], url_path='by-date-range')
    def by_date_range(self, request):
        """Letters dated within the range, by letter_date"""
        params = self.query_params(DateRangeQuerySerializer)
        return self.list_where(letter_date__range=(params['start_date'], params['end_date']))
