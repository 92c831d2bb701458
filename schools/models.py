from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models, transaction
from django.utils import timezone


class Gender(models.TextChoices):
    MALE = "L", "Laki-laki"
    FEMALE = "P", "Perempuan"


class Teacher(models.Model):
    nip = models.CharField(max_length=32, unique=True, null=True, blank=True)
    full_name = models.CharField(max_length=255)
    gender = models.CharField(max_length=1, choices=Gender.choices)
    birth_place = models.CharField(max_length=255)
    birth_date = models.DateField()
    address = models.TextField()
    phone = models.CharField(max_length=32, null=True, blank=True)
    email = models.EmailField(null=True, blank=True)
    subject = models.CharField(max_length=255, null=True, blank=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="teacher_profiles"
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return self.full_name


class Classroom(models.Model):
    name = models.CharField(max_length=100)
    grade = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(3)])
    academic_year = models.CharField(max_length=20, help_text="e.g. '2024/2025'")
    homeroom_teacher = models.ForeignKey(
        Teacher, on_delete=models.SET_NULL, null=True, blank=True, related_name="homeroom_classes"
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]
        verbose_name = "class"
        verbose_name_plural = "classes"

    def __str__(self) -> str:
        return f"{self.name} ({self.academic_year})"


class SchoolProfile(models.Model):
    """Descriptive school data; the first row is the profile."""

    school_name = models.CharField(max_length=255)
    address = models.TextField()
    phone = models.CharField(max_length=32, null=True, blank=True)
    email = models.EmailField(null=True, blank=True)
    website = models.CharField(max_length=255, null=True, blank=True)
    headmaster_name = models.CharField(max_length=255)
    logo_path = models.CharField(max_length=512, null=True, blank=True)
    description = models.TextField(null=True, blank=True)
    vision = models.TextField(null=True, blank=True)
    mission = models.TextField(null=True, blank=True)
    established_year = models.PositiveSmallIntegerField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Used when an update arrives before any profile exists
    PLACEHOLDERS = {
        "school_name": "School Name",
        "address": "School Address",
        "headmaster_name": "Headmaster Name",
    }

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return self.school_name

    @classmethod
    def load(cls):
        return cls.objects.order_by("id").first()


class BackgroundSetting(models.Model):
    name = models.CharField(max_length=255)
    file_path = models.CharField(max_length=512)
    is_active = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]
        verbose_name = "background"

    def __str__(self) -> str:
        return self.name

    def save(self, *args, **kwargs):
        # At most one active background: clear the others in the same transaction
        with transaction.atomic():
            if self.is_active:
                # Lock every row so concurrent activations queue up behind each other
                list(BackgroundSetting.objects.select_for_update().order_by("pk").values_list("pk", flat=True))
                BackgroundSetting.objects.filter(is_active=True).exclude(pk=self.pk).update(
                    is_active=False, updated_at=timezone.now()
                )
            super().save(*args, **kwargs)

    @classmethod
    def active(cls):
        return cls.objects.filter(is_active=True).first()
