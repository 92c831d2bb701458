from django.db import models

from schools.models import Classroom, Gender


class StudentOrigin(models.TextChoices):
    SMP_DARUL_MUTTAQIEN = "smp_darul_muttaqien", "SMP Darul Muttaqien"
    MTS = "mts", "MTs"
    OTHER = "luar_smp_darul_muttaqien", "Luar SMP Darul Muttaqien"


class Student(models.Model):
    nis = models.CharField(max_length=32, unique=True)
    nisn = models.CharField(max_length=32, null=True, blank=True)
    full_name = models.CharField(max_length=255)
    gender = models.CharField(max_length=1, choices=Gender.choices)
    birth_place = models.CharField(max_length=255)
    birth_date = models.DateField()
    address = models.TextField()
    phone = models.CharField(max_length=32, null=True, blank=True)
    parent_name = models.CharField(max_length=255)
    parent_phone = models.CharField(max_length=32, null=True, blank=True)
    origin_school = models.CharField(max_length=32, choices=StudentOrigin.choices)
    entry_year = models.PositiveIntegerField()
    school_class = models.ForeignKey(
        Classroom, on_delete=models.SET_NULL, null=True, blank=True, related_name="students"
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.nis} - {self.full_name}"


class CertificatePickup(models.Model):
    student = models.ForeignKey(Student, on_delete=models.PROTECT, related_name="certificate_pickups")
    certificate_type = models.CharField(max_length=100)
    pickup_date = models.DateTimeField(null=True, blank=True)
    picked_by = models.CharField(max_length=255, null=True, blank=True)
    relationship = models.CharField(max_length=100, null=True, blank=True)
    id_card_number = models.CharField(max_length=64, null=True, blank=True)
    notes = models.TextField(null=True, blank=True)
    is_picked_up = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.certificate_type} for {self.student_id}"


class StudentTransfer(models.Model):
    """Outgoing transfer (surat mutasi). Creating one retires the student."""

    student = models.ForeignKey(Student, on_delete=models.PROTECT, related_name="transfers")
    transfer_date = models.DateField()
    destination_school = models.CharField(max_length=255)
    transfer_reason = models.TextField()
    letter_number = models.CharField(max_length=100)
    notes = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.letter_number} ({self.student_id} -> {self.destination_school})"


class StudentCard(models.Model):
    student = models.ForeignKey(Student, on_delete=models.PROTECT, related_name="cards")
    card_number = models.CharField(max_length=64, unique=True)
    issue_date = models.DateField()
    expiry_date = models.DateField()
    is_active = models.BooleanField(default=True)
    notes = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return self.card_number
