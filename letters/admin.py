from django.contrib import admin
from .models import Letter


@admin.register(Letter)
class LetterAdmin(admin.ModelAdmin):
    list_display = ('letter_number', 'letter_type', 'subject', 'letter_date', 'sender', 'recipient')
    list_filter = ('letter_type', 'letter_date')
    search_fields = ('letter_number', 'subject', 'sender', 'recipient')
    ordering = ('-letter_date',)

    fieldsets = (
        (None, {'fields': ('letter_number', 'letter_type', 'subject')}),
        ('Parties', {'fields': ('sender', 'recipient')}),
        ('Dates', {'fields': ('letter_date', 'received_date')}),
        ('Content', {'fields': ('description', 'file_path')}),
    )
