from datetime import date, timedelta

from django.utils import timezone
from rest_framework import status

from common.testing import RecordAPITestCase, make_class, make_student, student_payload
from .models import CertificatePickup, Student, StudentCard, StudentTransfer


class StudentLifecycleTests(RecordAPITestCase):
    def test_create_then_get_returns_same_record(self):
        """A created student reads back field for field"""
        response = self.client.post('/api/students/', student_payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.content)
        created = response.data

        detail = self.client.get(f"/api/students/{created['id']}/")
        self.assertEqual(detail.status_code, status.HTTP_200_OK)
        self.assertEqual(detail.data, created)
        self.assertEqual(created['birth_date'], '2008-01-20')
        self.assertIsNotNone(created['created_at'])
        self.assertIsNotNone(created['updated_at'])

    def test_missing_required_field_is_rejected_before_any_write(self):
        payload = student_payload()
        del payload['full_name']
        response = self.client.post('/api/students/', payload, format='json')

        self.assertError(response, status.HTTP_400_BAD_REQUEST, 'invalid')
        self.assertIn('full_name', response.data['detail'])
        self.assertFalse(Student.objects.exists())

    def test_unknown_origin_school_is_rejected(self):
        response = self.client.post('/api/students/', student_payload(origin_school='sma'), format='json')
        self.assertError(response, status.HTTP_400_BAD_REQUEST, 'invalid')
        self.assertIn('origin_school', response.data['detail'])

    def test_duplicate_nis_is_rejected(self):
        make_student(nis='S100')
        response = self.client.post('/api/students/', student_payload(nis='S100'), format='json')

        self.assertError(response, status.HTTP_409_CONFLICT, 'duplicate_value')
        self.assertEqual(Student.objects.count(), 1)

    def test_nonexistent_class_is_rejected(self):
        response = self.client.post('/api/students/', student_payload(class_id=999), format='json')

        self.assertError(response, status.HTTP_404_NOT_FOUND, 'reference_not_found')
        self.assertIn('999', str(response.data['detail']))
        self.assertFalse(Student.objects.exists())

    def test_partial_update_touches_only_given_fields(self):
        classroom = make_class()
        student = make_student(nisn='0012345678', phone='0812', school_class=classroom)
        before = self.age_record(Student, student.pk)

        response = self.client.patch(f'/api/students/{student.pk}/', {'full_name': 'Ahmad F.'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.content)
        student.refresh_from_db()
        self.assertEqual(student.full_name, 'Ahmad F.')
        self.assertEqual(student.nisn, '0012345678')
        self.assertEqual(student.phone, '0812')
        self.assertEqual(student.school_class_id, classroom.pk)
        self.assertTrue(student.is_active)
        self.assertGreater(student.updated_at, before)

    def test_put_is_treated_as_partial(self):
        student = make_student(phone='0812')
        response = self.client.put(f'/api/students/{student.pk}/', {'address': 'Jl. Baru 2'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.content)
        student.refresh_from_db()
        self.assertEqual(student.address, 'Jl. Baru 2')
        self.assertEqual(student.phone, '0812')

    def test_explicit_null_clears_nullable_field(self):
        student = make_student(nisn='0012345678')
        response = self.client.patch(f'/api/students/{student.pk}/', {'nisn': None}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.content)
        student.refresh_from_db()
        self.assertIsNone(student.nisn)

    def test_update_keeping_own_nis_is_not_a_duplicate(self):
        student = make_student(nis='S100')
        response = self.client.patch(f'/api/students/{student.pk}/', {'nis': 'S100', 'full_name': 'X'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.content)

    def test_update_to_taken_nis_is_rejected(self):
        make_student(nis='S100')
        other = make_student(nis='S200')
        response = self.client.patch(f'/api/students/{other.pk}/', {'nis': 'S100'}, format='json')

        self.assertError(response, status.HTTP_409_CONFLICT, 'duplicate_value')
        other.refresh_from_db()
        self.assertEqual(other.nis, 'S200')

    def test_update_missing_student_is_not_found(self):
        response = self.client.patch('/api/students/999/', {'full_name': 'Nobody'}, format='json')
        self.assertError(response, status.HTTP_404_NOT_FOUND, 'not_found')

    def test_get_missing_student_returns_no_content(self):
        response = self.client.get('/api/students/999/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_delete_then_get_returns_no_content(self):
        student = make_student()
        response = self.client.delete(f'/api/students/{student.pk}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'success': True})
        self.assertEqual(self.client.get(f'/api/students/{student.pk}/').status_code, status.HTTP_204_NO_CONTENT)

    def test_delete_missing_student_is_not_found(self):
        response = self.client.delete('/api/students/999/')
        self.assertError(response, status.HTTP_404_NOT_FOUND, 'not_found')

    def test_list_returns_every_student_in_storage_order(self):
        first = make_student(nis='S1')
        second = make_student(nis='S2', is_active=False)
        response = self.client.get('/api/students/')

        self.assertEqual([row['id'] for row in response.data], [first.pk, second.pk])

    def test_by_class_and_by_origin(self):
        classroom = make_class()
        in_class = make_student(nis='S1', school_class=classroom, origin_school='smp_darul_muttaqien')
        make_student(nis='S2', origin_school='mts')

        by_class = self.client.get('/api/students/by-class/', {'class_id': classroom.pk})
        self.assertEqual([row['id'] for row in by_class.data], [in_class.pk])

        by_origin = self.client.get('/api/students/by-origin/', {'origin': 'mts'})
        self.assertEqual([row['nis'] for row in by_origin.data], ['S2'])

    def test_by_origin_rejects_unknown_value(self):
        response = self.client.get('/api/students/by-origin/', {'origin': 'elsewhere'})
        self.assertError(response, status.HTTP_400_BAD_REQUEST, 'invalid')

    def test_anonymous_requests_are_rejected(self):
        self.client.force_authenticate(user=None)
        response = self.client.get('/api/students/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_guru_can_manage_students(self):
        self.login_as(self.guru)
        response = self.client.post('/api/students/', student_payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.content)


class StudentTransferTests(RecordAPITestCase):
    def setUp(self):
        super().setUp()
        self.student = make_student()

    def transfer_payload(self, **overrides):
        data = {
            'student_id': self.student.pk,
            'transfer_date': '2024-07-15',
            'destination_school': 'SMA Negeri 1 Garut',
            'transfer_reason': 'Family moved',
            'letter_number': '001/MT/2024',
            'notes': None,
        }
        data.update(overrides)
        return data

    def test_transfer_deactivates_student(self):
        response = self.client.post('/api/student-transfers/', self.transfer_payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.content)
        self.assertEqual(response.data['transfer_date'], '2024-07-15')
        self.student.refresh_from_db()
        self.assertFalse(self.student.is_active)

    def test_second_transfer_for_inactive_student_fails(self):
        self.client.post('/api/student-transfers/', self.transfer_payload(), format='json')
        response = self.client.post(
            '/api/student-transfers/', self.transfer_payload(letter_number='002/MT/2024'), format='json'
        )

        self.assertError(response, status.HTTP_409_CONFLICT, 'business_rule')
        self.assertEqual(StudentTransfer.objects.count(), 1)

    def test_transfer_for_missing_student_writes_nothing(self):
        response = self.client.post('/api/student-transfers/', self.transfer_payload(student_id=999), format='json')

        self.assertError(response, status.HTTP_404_NOT_FOUND, 'reference_not_found')
        self.assertFalse(StudentTransfer.objects.exists())

    def test_transferred_student_cannot_be_reactivated(self):
        self.client.post('/api/student-transfers/', self.transfer_payload(), format='json')
        response = self.client.patch(f'/api/students/{self.student.pk}/', {'is_active': True}, format='json')

        self.assertError(response, status.HTTP_409_CONFLICT, 'business_rule')
        self.student.refresh_from_db()
        self.assertFalse(self.student.is_active)

    def test_transfer_cannot_move_to_another_student(self):
        self.client.post('/api/student-transfers/', self.transfer_payload(), format='json')
        transfer = StudentTransfer.objects.get()
        other = make_student(nis='S200')

        response = self.client.patch(
            f'/api/student-transfers/{transfer.pk}/', {'student_id': other.pk}, format='json'
        )
        self.assertError(response, status.HTTP_409_CONFLICT, 'business_rule')

    def test_update_transfer_details(self):
        self.client.post('/api/student-transfers/', self.transfer_payload(), format='json')
        transfer = StudentTransfer.objects.get()

        response = self.client.patch(
            f'/api/student-transfers/{transfer.pk}/', {'notes': 'Documents handed over'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.content)
        self.assertEqual(response.data['destination_school'], 'SMA Negeri 1 Garut')
        self.assertEqual(response.data['notes'], 'Documents handed over')

    def test_by_student_and_by_date_range(self):
        other = make_student(nis='S200')
        StudentTransfer.objects.create(
            student=self.student, transfer_date=date(2024, 1, 10), destination_school='A',
            transfer_reason='r', letter_number='L1',
        )
        StudentTransfer.objects.create(
            student=other, transfer_date=date(2024, 3, 1), destination_school='B',
            transfer_reason='r', letter_number='L2',
        )

        by_student = self.client.get('/api/student-transfers/by-student/', {'student_id': other.pk})
        self.assertEqual([row['letter_number'] for row in by_student.data], ['L2'])

        in_range = self.client.get(
            '/api/student-transfers/by-date-range/', {'start_date': '2024-01-01', 'end_date': '2024-01-31'}
        )
        self.assertEqual([row['letter_number'] for row in in_range.data], ['L1'])

    def test_reversed_date_range_matches_nothing(self):
        StudentTransfer.objects.create(
            student=self.student, transfer_date=date(2024, 1, 15), destination_school='A',
            transfer_reason='r', letter_number='L1',
        )
        response = self.client.get(
            '/api/student-transfers/by-date-range/', {'start_date': '2024-02-01', 'end_date': '2024-01-01'}
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, [])

    def test_date_range_requires_valid_dates(self):
        response = self.client.get(
            '/api/student-transfers/by-date-range/', {'start_date': '2024-13-01', 'end_date': '2024-01-01'}
        )
        self.assertError(response, status.HTTP_400_BAD_REQUEST, 'invalid')


class StudentCardTests(RecordAPITestCase):
    def setUp(self):
        super().setUp()
        self.student = make_student()

    def card_payload(self, **overrides):
        data = {
            'student_id': self.student.pk,
            'card_number': 'KP-0001',
            'issue_date': '2024-07-01',
            'expiry_date': '2027-06-30',
            'notes': None,
        }
        data.update(overrides)
        return data

    def test_create_card_defaults_to_active(self):
        response = self.client.post('/api/student-cards/', self.card_payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.content)
        self.assertTrue(response.data['is_active'])
        self.assertEqual(response.data['expiry_date'], '2027-06-30')

    def test_duplicate_card_number_is_rejected(self):
        self.client.post('/api/student-cards/', self.card_payload(), format='json')
        other = make_student(nis='S200')
        response = self.client.post('/api/student-cards/', self.card_payload(student_id=other.pk), format='json')

        self.assertError(response, status.HTTP_409_CONFLICT, 'duplicate_value')
        self.assertEqual(StudentCard.objects.count(), 1)

    def test_missing_student_is_reported_before_duplicate(self):
        self.client.post('/api/student-cards/', self.card_payload(), format='json')
        response = self.client.post('/api/student-cards/', self.card_payload(student_id=999), format='json')
        self.assertError(response, status.HTTP_404_NOT_FOUND, 'reference_not_found')

    def test_expiry_before_issue_is_rejected(self):
        response = self.client.post(
            '/api/student-cards/', self.card_payload(expiry_date='2024-01-01'), format='json'
        )
        self.assertError(response, status.HTTP_400_BAD_REQUEST, 'invalid')
        self.assertIn('expiry_date', response.data['detail'])

    def test_partial_update_checks_dates_against_stored_values(self):
        card = StudentCard.objects.create(
            student=self.student, card_number='KP-1', issue_date=date(2024, 7, 1), expiry_date=date(2027, 6, 30)
        )
        response = self.client.patch(f'/api/student-cards/{card.pk}/', {'expiry_date': '2023-01-01'}, format='json')
        self.assertError(response, status.HTTP_400_BAD_REQUEST, 'invalid')

    def test_by_status_and_expiring(self):
        today = timezone.localdate()
        soon = StudentCard.objects.create(
            student=self.student, card_number='KP-1', issue_date=today - timedelta(days=700),
            expiry_date=today + timedelta(days=10),
        )
        StudentCard.objects.create(
            student=self.student, card_number='KP-2', issue_date=today,
            expiry_date=today + timedelta(days=400),
        )
        StudentCard.objects.create(
            student=self.student, card_number='KP-3', issue_date=today - timedelta(days=700),
            expiry_date=today + timedelta(days=5), is_active=False,
        )

        expiring = self.client.get('/api/student-cards/expiring/', {'days_until_expiry': 30})
        self.assertEqual([row['id'] for row in expiring.data], [soon.pk])

        inactive = self.client.get('/api/student-cards/by-status/', {'is_active': 'false'})
        self.assertEqual([row['card_number'] for row in inactive.data], ['KP-3'])

        by_student = self.client.get('/api/student-cards/by-student/', {'student_id': self.student.pk})
        self.assertEqual(len(by_student.data), 3)


class CertificatePickupTests(RecordAPITestCase):
    def setUp(self):
        super().setUp()
        self.student = make_student()

    def test_pickup_for_missing_student_writes_nothing(self):
        response = self.client.post(
            '/api/certificate-pickups/', {'student_id': 999, 'certificate_type': 'Ijazah'}, format='json'
        )
        self.assertError(response, status.HTTP_404_NOT_FOUND, 'reference_not_found')
        self.assertFalse(CertificatePickup.objects.exists())

    def test_record_pickup_and_filter_by_status(self):
        response = self.client.post(
            '/api/certificate-pickups/', {'student_id': self.student.pk, 'certificate_type': 'Ijazah'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.content)
        self.assertFalse(response.data['is_picked_up'])
        pickup_id = response.data['id']

        waiting = self.client.get('/api/certificate-pickups/by-status/', {'is_picked_up': 'false'})
        self.assertEqual([row['id'] for row in waiting.data], [pickup_id])

        self.client.patch(f'/api/certificate-pickups/{pickup_id}/', {
            'is_picked_up': True,
            'pickup_date': '2024-06-20T09:00:00+07:00',
            'picked_by': 'Budi',
            'relationship': 'Ayah',
        }, format='json')

        picked = self.client.get('/api/certificate-pickups/by-status/', {'is_picked_up': 'true'})
        self.assertEqual([row['picked_by'] for row in picked.data], ['Budi'])
        by_student = self.client.get('/api/certificate-pickups/by-student/', {'student_id': self.student.pk})
        self.assertEqual(len(by_student.data), 1)

    def test_by_status_requires_flag(self):
        response = self.client.get('/api/certificate-pickups/by-status/')
        self.assertError(response, status.HTTP_400_BAD_REQUEST, 'invalid')
