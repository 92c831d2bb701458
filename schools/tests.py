import shutil
import tempfile
from unittest.mock import patch

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings
from rest_framework import status

from common.testing import RecordAPITestCase, make_class, make_student, make_teacher
from .models import BackgroundSetting, Classroom, SchoolProfile, Teacher

PNG_BYTES = (
    b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00'
    b'\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f\x00\x00\x01\x01\x00\x05\x18\xd8N\x00\x00'
    b'\x00\x00IEND\xaeB`\x82'
)


def png_upload(name='logo.png'):
    return SimpleUploadedFile(name, PNG_BYTES, content_type='image/png')


class TeacherTests(RecordAPITestCase):
    def payload(self, **overrides):
        data = {
            'nip': '198504122010012001',
            'full_name': 'Siti Aminah',
            'gender': 'P',
            'birth_place': 'Bandung',
            'birth_date': '1985-04-12',
            'address': 'Jl. Merdeka 1',
            'subject': 'Fiqih',
        }
        data.update(overrides)
        return data

    def test_create_teacher_linked_to_user(self):
        response = self.client.post('/api/teachers/', self.payload(user_id=self.guru.pk), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.content)
        self.assertEqual(response.data['user_id'], self.guru.pk)
        self.assertTrue(response.data['is_active'])

    def test_duplicate_nip_is_rejected(self):
        make_teacher(nip='198504122010012001')
        response = self.client.post('/api/teachers/', self.payload(), format='json')

        self.assertError(response, status.HTTP_409_CONFLICT, 'duplicate_value')
        self.assertEqual(Teacher.objects.count(), 1)

    def test_teachers_without_nip_do_not_collide(self):
        first = self.client.post('/api/teachers/', self.payload(nip=None), format='json')
        second = self.client.post('/api/teachers/', self.payload(nip=None, full_name='Dedi'), format='json')

        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.content)
        self.assertEqual(second.status_code, status.HTTP_201_CREATED, second.content)

    def test_unknown_user_is_rejected(self):
        response = self.client.post('/api/teachers/', self.payload(user_id=999), format='json')

        self.assertError(response, status.HTTP_404_NOT_FOUND, 'reference_not_found')
        self.assertFalse(Teacher.objects.exists())

    def test_invalid_gender_is_rejected(self):
        response = self.client.post('/api/teachers/', self.payload(gender='X'), format='json')
        self.assertError(response, status.HTTP_400_BAD_REQUEST, 'invalid')

    def test_by_user(self):
        teacher = make_teacher(user=self.guru)

        found = self.client.get('/api/teachers/by-user/', {'user_id': self.guru.pk})
        self.assertEqual(found.status_code, status.HTTP_200_OK)
        self.assertEqual(found.data['id'], teacher.pk)

        missing = self.client.get('/api/teachers/by-user/', {'user_id': self.admin.pk})
        self.assertEqual(missing.status_code, status.HTTP_204_NO_CONTENT)


class ClassroomTests(RecordAPITestCase):
    def test_create_class_with_homeroom_teacher(self):
        teacher = make_teacher()
        response = self.client.post('/api/classes/', {
            'name': 'X-A', 'grade': 1, 'academic_year': '2024/2025', 'homeroom_teacher_id': teacher.pk,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.content)
        self.assertEqual(response.data['homeroom_teacher_id'], teacher.pk)

    def test_inactive_homeroom_teacher_is_rejected(self):
        teacher = make_teacher(is_active=False)
        response = self.client.post('/api/classes/', {
            'name': 'X-A', 'grade': 1, 'academic_year': '2024/2025', 'homeroom_teacher_id': teacher.pk,
        }, format='json')

        self.assertError(response, status.HTTP_404_NOT_FOUND, 'reference_not_found')
        self.assertFalse(Classroom.objects.exists())

    def test_grade_out_of_range(self):
        response = self.client.post('/api/classes/', {
            'name': 'XIII-A', 'grade': 4, 'academic_year': '2024/2025',
        }, format='json')
        self.assertError(response, status.HTTP_400_BAD_REQUEST, 'invalid')

    def test_class_with_active_students_cannot_be_deleted(self):
        classroom = make_class()
        student = make_student(school_class=classroom)

        response = self.client.delete(f'/api/classes/{classroom.pk}/')
        self.assertError(response, status.HTTP_409_CONFLICT, 'business_rule')
        self.assertTrue(Classroom.objects.filter(pk=classroom.pk).exists())

        student.is_active = False
        student.save()
        response = self.client.delete(f'/api/classes/{classroom.pk}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        student.refresh_from_db()
        self.assertIsNone(student.school_class_id)

    def test_deleting_teacher_clears_homeroom(self):
        teacher = make_teacher()
        classroom = make_class(homeroom_teacher=teacher)

        self.client.delete(f'/api/teachers/{teacher.pk}/')
        classroom.refresh_from_db()
        self.assertIsNone(classroom.homeroom_teacher_id)

    def test_by_grade_and_academic_year(self):
        first = make_class(name='X-A', grade=1, academic_year='2024/2025')
        make_class(name='XI-A', grade=2, academic_year='2024/2025')
        make_class(name='X-A', grade=1, academic_year='2023/2024')

        by_grade = self.client.get('/api/classes/by-grade/', {'grade': 2})
        self.assertEqual([row['name'] for row in by_grade.data], ['XI-A'])

        by_year = self.client.get('/api/classes/by-academic-year/', {'academic_year': '2024/2025'})
        self.assertEqual(by_year.data[0]['id'], first.pk)
        self.assertEqual(len(by_year.data), 2)


class SchoolProfileTests(RecordAPITestCase):
    def setUp(self):
        super().setUp()
        self.media_root = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.media_root, ignore_errors=True)

    def test_profile_is_absent_until_first_update(self):
        self.assertEqual(self.client.get('/api/school-profile/').status_code, status.HTTP_204_NO_CONTENT)

        response = self.client.patch('/api/school-profile/', {'vision': 'Berakhlak mulia'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.content)
        self.assertEqual(response.data['school_name'], 'School Name')
        self.assertEqual(response.data['headmaster_name'], 'Headmaster Name')
        self.assertEqual(response.data['vision'], 'Berakhlak mulia')
        self.assertEqual(SchoolProfile.objects.count(), 1)

    def test_update_existing_profile_keeps_other_fields(self):
        self.client.patch('/api/school-profile/', {'school_name': 'MA Darul Muttaqien'}, format='json')
        response = self.client.put('/api/school-profile/', {'established_year': 1998}, format='json')

        self.assertEqual(response.data['school_name'], 'MA Darul Muttaqien')
        self.assertEqual(response.data['established_year'], 1998)
        self.assertEqual(SchoolProfile.objects.count(), 1)
        self.assertEqual(self.client.get('/api/school-profile/').data['established_year'], 1998)

    def test_upload_logo_returns_stored_path(self):
        with override_settings(MEDIA_ROOT=self.media_root):
            response = self.client.post('/api/school-profile/upload-logo/', {'file': png_upload()}, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.content)
        self.assertTrue(response.data['logo_path'].startswith('/media/logos/logo_'))
        self.assertTrue(response.data['logo_path'].endswith('.png'))
        self.assertFalse(SchoolProfile.objects.exists())

    def test_upload_rejects_non_image(self):
        text = SimpleUploadedFile('notes.txt', b'hello', content_type='text/plain')
        with override_settings(MEDIA_ROOT=self.media_root):
            response = self.client.post('/api/school-profile/upload-logo/', {'file': text}, format='multipart')
        self.assertError(response, status.HTTP_400_BAD_REQUEST, 'invalid')


class BackgroundSettingTests(RecordAPITestCase):
    def create(self, name, is_active):
        response = self.client.post('/api/backgrounds/', {
            'name': name, 'file_path': f'/media/backgrounds/{name}.png', 'is_active': is_active,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.content)
        return response.data['id']

    def test_activating_a_background_deactivates_the_previous_one(self):
        first = self.create('a', True)
        second = self.create('b', True)

        active = self.client.get('/api/backgrounds/active/')
        self.assertEqual(active.data['id'], second)
        self.assertFalse(BackgroundSetting.objects.get(pk=first).is_active)
        self.assertEqual(BackgroundSetting.objects.filter(is_active=True).count(), 1)

    def test_update_to_active_deactivates_others(self):
        first = self.create('a', True)
        second = self.create('b', False)

        self.client.patch(f'/api/backgrounds/{second}/', {'is_active': True}, format='json')
        self.assertEqual(list(BackgroundSetting.objects.filter(is_active=True).values_list('id', flat=True)), [second])
        self.assertFalse(BackgroundSetting.objects.get(pk=first).is_active)

    def test_activation_locks_background_rows(self):
        self.create('a', True)
        manager = BackgroundSetting.objects
        with patch.object(manager, 'select_for_update', wraps=manager.select_for_update) as locked:
            second = self.create('b', True)

        locked.assert_called_once_with()
        self.assertEqual(list(manager.filter(is_active=True).values_list('id', flat=True)), [second])

    def test_inactive_save_takes_no_lock(self):
        manager = BackgroundSetting.objects
        with patch.object(manager, 'select_for_update', wraps=manager.select_for_update) as locked:
            self.create('a', False)
        locked.assert_not_called()

    def test_set_active_action(self):
        first = self.create('a', True)
        second = self.create('b', False)

        response = self.client.post(f'/api/backgrounds/{second}/set-active/')
        self.assertTrue(response.data['is_active'])
        self.assertFalse(BackgroundSetting.objects.get(pk=first).is_active)

    def test_active_background_cannot_be_deleted(self):
        active = self.create('a', True)
        inactive = self.create('b', False)

        response = self.client.delete(f'/api/backgrounds/{active}/')
        self.assertError(response, status.HTTP_409_CONFLICT, 'business_rule')

        response = self.client.delete(f'/api/backgrounds/{inactive}/')
        self.assertEqual(response.data, {'success': True})

    def test_no_active_background(self):
        self.create('a', False)
        self.assertEqual(self.client.get('/api/backgrounds/active/').status_code, status.HTTP_204_NO_CONTENT)

    def test_guru_can_read_but_not_write(self):
        self.create('a', True)
        self.login_as(self.guru)

        self.assertEqual(self.client.get('/api/backgrounds/').status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.get('/api/backgrounds/active/').status_code, status.HTTP_200_OK)
        response = self.client.post('/api/backgrounds/', {'name': 'c', 'file_path': 'x.png'}, format='json')
        self.assertError(response, status.HTTP_403_FORBIDDEN, 'permission_denied')

    def test_upload_registers_inactive_background(self):
        media_root = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, media_root, ignore_errors=True)
        with override_settings(MEDIA_ROOT=media_root):
            response = self.client.post('/api/backgrounds/upload/', {
                'name': 'Lapangan', 'file': png_upload('field.png'),
            }, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.content)
        self.assertFalse(response.data['is_active'])
        self.assertTrue(response.data['file_path'].startswith('/media/backgrounds/bg_'))


class DashboardTests(RecordAPITestCase):
    def test_stats_count_active_records_and_origins(self):
        make_teacher()
        make_teacher(is_active=False)
        make_student(nis='S1', origin_school='smp_darul_muttaqien')
        make_student(nis='S2', origin_school='mts')
        make_student(nis='S3', origin_school='luar_smp_darul_muttaqien', is_active=False)

        response = self.client.get('/api/dashboard/stats/')

        self.assertEqual(response.data, {
            'total_students': 2,
            'total_teachers': 1,
            'students_from_smp': 1,
            'students_from_mts': 1,
            'students_from_other': 1,
        })

    def test_stats_require_login(self):
        self.client.force_authenticate(user=None)
        self.assertEqual(self.client.get('/api/dashboard/stats/').status_code, status.HTTP_401_UNAUTHORIZED)
