from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from students.models import Student


class PaymentStatus(models.TextChoices):
    UNPAID = "belum_bayar", "Belum Bayar"
    PAID = "lunas", "Lunas"
    LATE = "terlambat", "Terlambat"


class SppPayment(models.Model):
    """Monthly tuition (SPP) bill for one student."""

    student = models.ForeignKey(Student, on_delete=models.PROTECT, related_name="spp_payments")
    month = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(12)])
    year = models.PositiveIntegerField()
    amount = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))])
    payment_date = models.DateTimeField(null=True, blank=True)
    status = models.CharField(max_length=16, choices=PaymentStatus.choices)
    notes = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]
        verbose_name = "SPP payment"
        constraints = [
            models.UniqueConstraint(fields=["student", "month", "year"], name="uq_spp_payment_per_student_month"),
        ]

    def __str__(self) -> str:
        return f"SPP {self.month:02d}/{self.year} - {self.student_id}"
