from django.contrib import admin
from .models import SppPayment


@admin.register(SppPayment)
class SppPaymentAdmin(admin.ModelAdmin):
    list_display = ('student', 'month', 'year', 'amount', 'status', 'payment_date')
    list_filter = ('status', 'year', 'month')
    search_fields = ('student__nis', 'student__full_name', 'notes')
    autocomplete_fields = ('student',)
    ordering = ('-year', '-month', 'student__nis')

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('student')
