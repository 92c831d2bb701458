from decimal import Decimal

from rest_framework import status

from common.testing import RecordAPITestCase, make_student
from .models import PaymentStatus, SppPayment


class SppPaymentTests(RecordAPITestCase):
    def setUp(self):
        super().setUp()
        self.student = make_student(nis='S100')

    def payload(self, **overrides):
        data = {
            'student_id': self.student.pk,
            'month': 7,
            'year': 2024,
            'amount': '150000',
            'status': 'belum_bayar',
        }
        data.update(overrides)
        return data

    def test_monthly_bill_lifecycle(self):
        """A bill is created once per month, then settled and found by status"""
        response = self.client.post('/api/spp-payments/', self.payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.content)
        payment_id = response.data['id']
        self.assertEqual(response.data['amount'], Decimal('150000.00'))
        self.assertIsNone(response.data['payment_date'])

        duplicate = self.client.post('/api/spp-payments/', self.payload(), format='json')
        self.assertError(duplicate, status.HTTP_409_CONFLICT, 'duplicate_value')

        settled = self.client.patch(f'/api/spp-payments/{payment_id}/', {
            'status': 'lunas',
            'payment_date': '2024-07-05T10:00:00+07:00',
        }, format='json')
        self.assertEqual(settled.status_code, status.HTTP_200_OK, settled.content)
        self.assertEqual(settled.data['month'], 7)
        self.assertEqual(settled.data['amount'], Decimal('150000.00'))

        paid = self.client.get('/api/spp-payments/by-status/', {'status': 'lunas'})
        self.assertEqual([row['id'] for row in paid.data], [payment_id])

    def test_same_month_in_another_year_is_allowed(self):
        self.client.post('/api/spp-payments/', self.payload(), format='json')
        response = self.client.post('/api/spp-payments/', self.payload(year=2025), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.content)

    def test_missing_student_writes_nothing(self):
        response = self.client.post('/api/spp-payments/', self.payload(student_id=999), format='json')

        self.assertError(response, status.HTTP_404_NOT_FOUND, 'reference_not_found')
        self.assertFalse(SppPayment.objects.exists())

    def test_update_into_existing_month_is_rejected(self):
        SppPayment.objects.create(student=self.student, month=7, year=2024, amount=100, status=PaymentStatus.UNPAID)
        august = SppPayment.objects.create(
            student=self.student, month=8, year=2024, amount=100, status=PaymentStatus.UNPAID
        )

        response = self.client.patch(f'/api/spp-payments/{august.pk}/', {'month': 7}, format='json')

        self.assertError(response, status.HTTP_409_CONFLICT, 'duplicate_value')
        august.refresh_from_db()
        self.assertEqual(august.month, 8)

    def test_amount_must_be_positive(self):
        response = self.client.post('/api/spp-payments/', self.payload(amount='0'), format='json')
        self.assertError(response, status.HTTP_400_BAD_REQUEST, 'invalid')
        self.assertIn('amount', response.data['detail'])

    def test_month_out_of_range(self):
        response = self.client.post('/api/spp-payments/', self.payload(month=13), format='json')
        self.assertError(response, status.HTTP_400_BAD_REQUEST, 'invalid')

    def test_unknown_status(self):
        response = self.client.post('/api/spp-payments/', self.payload(status='dicicil'), format='json')
        self.assertError(response, status.HTTP_400_BAD_REQUEST, 'invalid')

    def test_by_student_and_by_month_year(self):
        other = make_student(nis='S200')
        own = SppPayment.objects.create(
            student=self.student, month=7, year=2024, amount=100, status=PaymentStatus.UNPAID
        )
        SppPayment.objects.create(student=other, month=7, year=2024, amount=100, status=PaymentStatus.LATE)
        SppPayment.objects.create(student=other, month=8, year=2024, amount=100, status=PaymentStatus.UNPAID)

        by_student = self.client.get('/api/spp-payments/by-student/', {'student_id': self.student.pk})
        self.assertEqual([row['id'] for row in by_student.data], [own.pk])

        july = self.client.get('/api/spp-payments/by-month-year/', {'month': 7, 'year': 2024})
        self.assertEqual(len(july.data), 2)

        bad_month = self.client.get('/api/spp-payments/by-month-year/', {'month': 0, 'year': 2024})
        self.assertError(bad_month, status.HTTP_400_BAD_REQUEST, 'invalid')

    def test_by_student_for_unknown_student(self):
        response = self.client.get('/api/spp-payments/by-student/', {'student_id': 999})
        self.assertError(response, status.HTTP_404_NOT_FOUND, 'reference_not_found')

    def test_by_student_without_payments_is_empty(self):
        response = self.client.get('/api/spp-payments/by-student/', {'student_id': self.student.pk})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, [])

    def test_student_with_payments_cannot_be_deleted(self):
        SppPayment.objects.create(student=self.student, month=7, year=2024, amount=100, status=PaymentStatus.UNPAID)

        response = self.client.delete(f'/api/students/{self.student.pk}/')

        self.assertError(response, status.HTTP_409_CONFLICT, 'store_failure')
        self.assertTrue(type(self.student).objects.filter(pk=self.student.pk).exists())
