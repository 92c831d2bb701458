from django.contrib import admin
from .models import BackgroundSetting, Classroom, SchoolProfile, Teacher


@admin.register(Teacher)
class TeacherAdmin(admin.ModelAdmin):
    list_display = ('full_name', 'nip', 'gender', 'subject', 'is_active')
    list_filter = ('gender', 'is_active', 'subject')
    search_fields = ('full_name', 'nip', 'email')
    autocomplete_fields = ('user',)
    ordering = ('full_name',)

    fieldsets = (
        (None, {'fields': ('nip', 'full_name', 'gender', 'subject', 'is_active')}),
        ('Personal Information', {'fields': ('birth_place', 'birth_date', 'address', 'phone', 'email')}),
        ('Account', {'fields': ('user',)}),
    )


@admin.register(Classroom)
class ClassroomAdmin(admin.ModelAdmin):
    list_display = ('name', 'grade', 'academic_year', 'homeroom_teacher', 'is_active')
    list_filter = ('grade', 'academic_year', 'is_active')
    search_fields = ('name', 'academic_year', 'homeroom_teacher__full_name')
    autocomplete_fields = ('homeroom_teacher',)
    ordering = ('academic_year', 'grade', 'name')


@admin.register(SchoolProfile)
class SchoolProfileAdmin(admin.ModelAdmin):
    list_display = ('school_name', 'headmaster_name', 'phone', 'email', 'updated_at')

    fieldsets = (
        (None, {'fields': ('school_name', 'headmaster_name', 'established_year')}),
        ('Contact Information', {'fields': ('address', 'phone', 'email', 'website')}),
        ('About', {'fields': ('description', 'vision', 'mission', 'logo_path')}),
    )


@admin.register(BackgroundSetting)
class BackgroundSettingAdmin(admin.ModelAdmin):
    list_display = ('name', 'file_path', 'is_active', 'updated_at')
    list_filter = ('is_active',)
    search_fields = ('name',)
