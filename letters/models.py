from django.db import models


class LetterType(models.TextChoices):
    INCOMING = "masuk", "Surat Masuk"
    OUTGOING = "keluar", "Surat Keluar"


class Letter(models.Model):
    letter_number = models.CharField(max_length=100, unique=True)
    letter_type = models.CharField(max_length=8, choices=LetterType.choices)
    subject = models.CharField(max_length=255)
    sender = models.CharField(max_length=255, null=True, blank=True)
    recipient = models.CharField(max_length=255, null=True, blank=True)
    letter_date = models.DateField()
    received_date = models.DateField(null=True, blank=True)
    description = models.TextField(null=True, blank=True)
    file_path = models.CharField(max_length=512, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.letter_number} ({self.get_letter_type_display()})"
