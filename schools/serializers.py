from rest_framework import serializers

from common.records import Reference, RecordSerializer
from users.models import User
from .models import BackgroundSetting, Classroom, SchoolProfile, Teacher


class TeacherSerializer(RecordSerializer):
    user_id = serializers.IntegerField(allow_null=True, required=False)

    references = (Reference('user_id', User),)
    unique_fields = ('nip',)

    class Meta:
        model = Teacher
        fields = [
            'id', 'nip', 'full_name', 'gender', 'birth_place', 'birth_date', 'address',
            'phone', 'email', 'subject', 'user_id', 'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class ClassroomSerializer(RecordSerializer):
    homeroom_teacher_id = serializers.IntegerField(allow_null=True, required=False)

    references = (Reference('homeroom_teacher_id', Teacher, active_only=True),)

    class Meta:
        model = Classroom
        fields = [
            'id', 'name', 'grade', 'academic_year', 'homeroom_teacher_id', 'is_active',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class SchoolProfileSerializer(RecordSerializer):
    class Meta:
        model = SchoolProfile
        fields = [
            'id', 'school_name', 'address', 'phone', 'email', 'website', 'headmaster_name',
            'logo_path', 'description', 'vision', 'mission', 'established_year',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def create(self, validated_data):
        return super().create({**SchoolProfile.PLACEHOLDERS, **validated_data})


class BackgroundSettingSerializer(RecordSerializer):
    class Meta:
        model = BackgroundSetting
        fields = ['id', 'name', 'file_path', 'is_active', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']


class ImageUploadSerializer(serializers.Serializer):
    file = serializers.FileField()

    def validate_file(self, value):
        content_type = getattr(value, 'content_type', '') or ''
        if not content_type.startswith('image/'):
            raise serializers.ValidationError("Only image files can be uploaded.")
        return value


class BackgroundUploadSerializer(ImageUploadSerializer):
    name = serializers.CharField(max_length=255)


class DashboardStatsSerializer(serializers.Serializer):
    total_students = serializers.IntegerField()
    total_teachers = serializers.IntegerField()
    students_from_smp = serializers.IntegerField()
    students_from_mts = serializers.IntegerField()
    students_from_other = serializers.IntegerField()
