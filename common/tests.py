from datetime import date
from io import StringIO

from django.core import mail
from django.core.management import call_command
from django.http import HttpResponse
from django.test import RequestFactory, SimpleTestCase, TestCase
from rest_framework import status
from rest_framework.test import APITestCase

from letters.models import Letter
from payments.models import SppPayment
from schools.models import BackgroundSetting, SchoolProfile
from simadam.middlewares import RemoveXFrameForMedia
from students.models import CertificatePickup, StudentCard, StudentTransfer
from .email_service import EmailService, RenderedEmail
from .tasks import send_email_task
from .testing import RecordAPITestCase, make_class, make_student, make_teacher


class HealthCheckTests(APITestCase):
    def test_health_check_reports_database(self):
        response = self.client.get('/api/health/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'healthy')
        self.assertEqual(response.data['database'], 'connected')


class RemoveXFrameForMediaTests(SimpleTestCase):
    def setUp(self):
        self.factory = RequestFactory()

    def build(self):
        def get_response(request):
            response = HttpResponse("ok")
            response.headers['X-Frame-Options'] = 'DENY'
            return response
        return RemoveXFrameForMedia(get_response)

    def test_media_responses_can_be_framed(self):
        response = self.build()(self.factory.get('/media/logos/logo_1.png'))
        self.assertNotIn('X-Frame-Options', response.headers)

    def test_api_responses_keep_header(self):
        response = self.build()(self.factory.get('/api/students/'))
        self.assertEqual(response.headers['X-Frame-Options'], 'DENY')


class EmailTests(TestCase):
    def test_send_email_attaches_html_alternative(self):
        EmailService.send(RenderedEmail("Hello", "plain", "<p>html</p>"), ["guru@simadam.test"])

        self.assertEqual(len(mail.outbox), 1)
        message = mail.outbox[0]
        self.assertEqual(message.to, ['guru@simadam.test'])
        self.assertEqual(message.alternatives[0][1], 'text/html')

    def test_password_changed_task_renders_template(self):
        context = {
            'subject': 'SIMADAM password changed',
            'full_name': 'Siti Aminah',
            'username': 'siti',
            'changed_at': '2024-07-01 08:00',
            'school_name': 'MA Darul Muttaqien',
        }
        send_email_task.apply(args=('password_changed', context, ['siti@simadam.test']))

        self.assertEqual(len(mail.outbox), 1)
        message = mail.outbox[0]
        self.assertEqual(message.subject, 'SIMADAM password changed')
        self.assertIn('"siti"', message.body)
        self.assertIn('MA Darul Muttaqien', message.body)


class MigrationStateTests(TestCase):
    def test_models_match_migrations(self):
        output = StringIO()
        try:
            call_command('makemigrations', '--check', '--dry-run', stdout=output)
        except SystemExit:
            self.fail(f"Models have changes without a migration:\n{output.getvalue()}")


class UpdateTimestampTests(RecordAPITestCase):
    """Every update moves ``updated_at`` forward and leaves ``created_at`` alone."""

    def records(self):
        yield 'users', self.guru, {'full_name': 'Guru Baru'}
        yield 'teachers', make_teacher(), {'subject': 'Fiqih'}
        yield 'classes', make_class(), {'name': 'X-B'}
        yield 'students', make_student(nis='S1'), {'phone': '0812'}
        yield 'spp-payments', SppPayment.objects.create(
            student=make_student(nis='S2'), month=7, year=2024, amount=100, status='belum_bayar',
        ), {'notes': 'Dicicil'}
        yield 'letters', Letter.objects.create(
            letter_number='001', letter_type='masuk', subject='Perihal', letter_date=date(2024, 7, 1),
        ), {'subject': 'Undangan'}
        yield 'certificate-pickups', CertificatePickup.objects.create(
            student=make_student(nis='S3'), certificate_type='Ijazah',
        ), {'picked_by': 'Budi'}
        yield 'student-transfers', StudentTransfer.objects.create(
            student=make_student(nis='S4'), transfer_date=date(2024, 7, 15), destination_school='A',
            transfer_reason='r', letter_number='L1',
        ), {'notes': 'Berkas diserahkan'}
        yield 'student-cards', StudentCard.objects.create(
            student=make_student(nis='S5'), card_number='KP-1', issue_date=date(2024, 7, 1),
            expiry_date=date(2027, 6, 30),
        ), {'notes': 'Cetak ulang'}
        yield 'backgrounds', BackgroundSetting.objects.create(name='a', file_path='/media/a.png'), {'name': 'b'}

    def test_update_advances_updated_at(self):
        for route, record, changes in self.records():
            model = type(record)
            with self.subTest(route=route):
                before = self.age_record(model, record.pk)

                response = self.client.patch(f'/api/{route}/{record.pk}/', changes, format='json')

                self.assertEqual(response.status_code, status.HTTP_200_OK, response.content)
                stored = model.objects.get(pk=record.pk)
                self.assertGreater(stored.updated_at, before)
                self.assertEqual(stored.created_at, record.created_at)

    def test_school_profile_update_advances_updated_at(self):
        profile = SchoolProfile.objects.create(
            school_name='MA Darul Muttaqien', address='Garut', headmaster_name='H. Ahmad',
        )
        before = self.age_record(SchoolProfile, profile.pk)

        self.client.patch('/api/school-profile/', {'vision': 'Berakhlak mulia'}, format='json')

        profile.refresh_from_db()
        self.assertGreater(profile.updated_at, before)
