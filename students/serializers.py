import logging

from django.db import transaction
from rest_framework import serializers

from common.records import Reference, RecordSerializer, reject
from schools.models import Classroom
from .models import CertificatePickup, Student, StudentCard, StudentTransfer

logger = logging.getLogger(__name__)


class StudentSerializer(RecordSerializer):
    class_id = serializers.IntegerField(source='school_class_id', allow_null=True, required=False)

    references = (Reference('school_class_id', Classroom),)
    unique_fields = ('nis',)

    class Meta:
        model = Student
        fields = [
            'id', 'nis', 'nisn', 'full_name', 'gender', 'birth_place', 'birth_date', 'address',
            'phone', 'parent_name', 'parent_phone', 'origin_school', 'entry_year', 'class_id',
            'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def check_rules(self, attrs):
        # Leaving through a transfer is permanent
        instance = self.instance
        if instance is not None and attrs.get('is_active') and not instance.is_active:
            if instance.transfers.exists():
                reject(f"Student with ID {instance.pk} was transferred out and cannot be reactivated")


class CertificatePickupSerializer(RecordSerializer):
    student_id = serializers.IntegerField()

    references = (Reference('student_id', Student),)

    class Meta:
        model = CertificatePickup
        fields = [
            'id', 'student_id', 'certificate_type', 'pickup_date', 'picked_by', 'relationship',
            'id_card_number', 'notes', 'is_picked_up', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class StudentTransferSerializer(RecordSerializer):
    student_id = serializers.IntegerField()

    references = (Reference('student_id', Student),)

    class Meta:
        model = StudentTransfer
        fields = [
            'id', 'student_id', 'transfer_date', 'destination_school', 'transfer_reason',
            'letter_number', 'notes', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def check_rules(self, attrs):
        if self.instance is not None and attrs.get('student_id', self.instance.student_id) != self.instance.student_id:
            reject("A transfer cannot be moved to another student")

    def create(self, validated_data):
        with transaction.atomic():
            student = Student.objects.select_for_update().get(pk=validated_data['student_id'])
            if not student.is_active:
                reject(f"Student with ID {student.pk} is already inactive")

            transfer = super().create(validated_data)

            student.is_active = False
            student.save(update_fields=['is_active', 'updated_at'])
            logger.info(f"Student {student.nis} transferred to {transfer.destination_school}, marked inactive")
        return transfer


class StudentCardSerializer(RecordSerializer):
    student_id = serializers.IntegerField()

    references = (Reference('student_id', Student),)
    unique_fields = ('card_number',)

    class Meta:
        model = StudentCard
        fields = [
            'id', 'student_id', 'card_number', 'issue_date', 'expiry_date', 'is_active', 'notes',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate(self, attrs):
        issue_date = self.current_value(attrs, 'issue_date')
        expiry_date = self.current_value(attrs, 'expiry_date')
        if issue_date and expiry_date and expiry_date < issue_date:
            raise serializers.ValidationError({'expiry_date': "Expiry date must not be before issue date."})
        return super().validate(attrs)


class ExpiringQuerySerializer(serializers.Serializer):
    days_until_expiry = serializers.IntegerField(min_value=0)
