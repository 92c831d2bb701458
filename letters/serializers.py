from common.records import RecordSerializer
from .models import Letter


class LetterSerializer(RecordSerializer):
    unique_fields = ('letter_number',)

    class Meta:
        model = Letter
        fields = [
            'id', 'letter_number', 'letter_type', 'subject', 'sender', 'recipient', 'letter_date',
            'received_date', 'description', 'file_path', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
