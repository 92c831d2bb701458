"""Fixtures shared by the app test suites."""

from datetime import date, timedelta

from rest_framework.test import APITestCase

from schools.models import Classroom, Teacher
from students.models import Student
from users.models import User, UserRole


def make_user(username, role=UserRole.GURU, password="secret123", **extra):
    extra.setdefault("email", f"{username}@simadam.test")
    extra.setdefault("full_name", username.title())
    return User.objects.create_user(username=username, password=password, role=role, **extra)


def make_teacher(**overrides):
    data = {
        "nip": None,
        "full_name": "Siti Aminah",
        "gender": "P",
        "birth_place": "Bandung",
        "birth_date": date(1985, 4, 12),
        "address": "Jl. Merdeka 1",
    }
    data.update(overrides)
    return Teacher.objects.create(**data)


def make_class(**overrides):
    data = {"name": "X-A", "grade": 1, "academic_year": "2024/2025"}
    data.update(overrides)
    return Classroom.objects.create(**data)


def make_student(nis="S100", **overrides):
    data = {
        "nis": nis,
        "full_name": "Ahmad Fauzi",
        "gender": "L",
        "birth_place": "Garut",
        "birth_date": date(2008, 1, 20),
        "address": "Jl. Pesantren 5",
        "parent_name": "Budi",
        "origin_school": "mts",
        "entry_year": 2023,
    }
    data.update(overrides)
    return Student.objects.create(**data)


def student_payload(nis="S100", **overrides):
    data = {
        "nis": nis,
        "nisn": None,
        "full_name": "Ahmad Fauzi",
        "gender": "L",
        "birth_place": "Garut",
        "birth_date": "2008-01-20",
        "address": "Jl. Pesantren 5",
        "phone": None,
        "parent_name": "Budi",
        "parent_phone": None,
        "origin_school": "mts",
        "entry_year": 2023,
        "class_id": None,
        "is_active": True,
    }
    data.update(overrides)
    return data


class RecordAPITestCase(APITestCase):
    """Authenticated as an admin unless a test switches with ``login_as``."""

    def setUp(self):
        self.admin = make_user("admin", role=UserRole.ADMIN)
        self.guru = make_user("guru")
        self.login_as(self.admin)

    def login_as(self, user):
        self.client.force_authenticate(user=user)

    def assertError(self, response, status_code, code):
        self.assertEqual(response.status_code, status_code, response.content)
        self.assertEqual(response.data["code"], code)

    def age_record(self, model, pk, days=1):
        """Push ``updated_at`` into the past so the next write visibly advances it."""
        past = model.objects.get(pk=pk).updated_at - timedelta(days=days)
        model.objects.filter(pk=pk).update(updated_at=past)
        return past
