from rest_framework import serializers

from common.records import Reference, RecordSerializer
from students.models import Student
from .models import SppPayment


class SppPaymentSerializer(RecordSerializer):
    student_id = serializers.IntegerField()

    references = (Reference('student_id', Student),)
    unique_fields = (('student_id', 'month', 'year'),)

    class Meta:
        model = SppPayment
        fields = [
            'id', 'student_id', 'month', 'year', 'amount', 'payment_date', 'status', 'notes',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class MonthYearQuerySerializer(serializers.Serializer):
    month = serializers.IntegerField(min_value=1, max_value=12)
    year = serializers.IntegerField()
