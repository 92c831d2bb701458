from django.contrib import admin
from .models import CertificatePickup, Student, StudentCard, StudentTransfer


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ('nis', 'full_name', 'gender', 'origin_school', 'entry_year', 'school_class', 'is_active')
    list_filter = ('gender', 'origin_school', 'entry_year', 'is_active')
    search_fields = ('nis', 'nisn', 'full_name', 'parent_name')
    autocomplete_fields = ('school_class',)
    ordering = ('nis',)

    fieldsets = (
        (None, {'fields': ('nis', 'nisn', 'full_name', 'gender', 'is_active')}),
        ('Personal Information', {'fields': ('birth_place', 'birth_date', 'address', 'phone')}),
        ('Parent', {'fields': ('parent_name', 'parent_phone')}),
        ('Enrollment', {'fields': ('origin_school', 'entry_year', 'school_class')}),
    )


@admin.register(CertificatePickup)
class CertificatePickupAdmin(admin.ModelAdmin):
    list_display = ('student', 'certificate_type', 'is_picked_up', 'pickup_date', 'picked_by')
    list_filter = ('certificate_type', 'is_picked_up')
    search_fields = ('student__nis', 'student__full_name', 'picked_by', 'id_card_number')
    autocomplete_fields = ('student',)


@admin.register(StudentTransfer)
class StudentTransferAdmin(admin.ModelAdmin):
    list_display = ('letter_number', 'student', 'transfer_date', 'destination_school')
    list_filter = ('transfer_date',)
    search_fields = ('letter_number', 'student__nis', 'student__full_name', 'destination_school')
    autocomplete_fields = ('student',)


@admin.register(StudentCard)
class StudentCardAdmin(admin.ModelAdmin):
    list_display = ('card_number', 'student', 'issue_date', 'expiry_date', 'is_active')
    list_filter = ('is_active',)
    search_fields = ('card_number', 'student__nis', 'student__full_name')
    autocomplete_fields = ('student',)
