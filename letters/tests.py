from datetime import date

from rest_framework import status

from common.testing import RecordAPITestCase
from .models import Letter, LetterType


class LetterTests(RecordAPITestCase):
    def payload(self, **overrides):
        data = {
            'letter_number': '012/MA-DM/VII/2024',
            'letter_type': 'masuk',
            'subject': 'Undangan rapat',
            'sender': 'Kemenag Kab. Garut',
            'recipient': None,
            'letter_date': '2024-07-10',
            'received_date': '2024-07-12',
        }
        data.update(overrides)
        return data

    def make_letter(self, number, letter_type=LetterType.INCOMING, letter_date=date(2024, 7, 10)):
        return Letter.objects.create(
            letter_number=number, letter_type=letter_type, subject='Perihal', letter_date=letter_date,
        )

    def test_create_letter(self):
        response = self.client.post('/api/letters/', self.payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.content)
        self.assertEqual(response.data['letter_date'], '2024-07-10')
        self.assertIsNone(response.data['file_path'])

    def test_duplicate_letter_number_is_rejected(self):
        self.client.post('/api/letters/', self.payload(), format='json')
        response = self.client.post('/api/letters/', self.payload(letter_type='keluar'), format='json')

        self.assertError(response, status.HTTP_409_CONFLICT, 'duplicate_value')
        self.assertEqual(Letter.objects.count(), 1)

    def test_distinct_numbers_are_both_stored(self):
        first = self.client.post('/api/letters/', self.payload(), format='json')
        second = self.client.post('/api/letters/', self.payload(letter_number='013/MA-DM/VII/2024'), format='json')

        self.assertEqual(first.status_code, status.HTTP_201_CREATED)
        self.assertEqual(second.status_code, status.HTTP_201_CREATED)

    def test_update_with_own_number(self):
        letter = self.make_letter('001')
        response = self.client.patch(
            f'/api/letters/{letter.pk}/', {'letter_number': '001', 'subject': 'Revisi'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.content)
        self.assertEqual(response.data['subject'], 'Revisi')

    def test_update_to_taken_number(self):
        self.make_letter('001')
        letter = self.make_letter('002')
        response = self.client.patch(f'/api/letters/{letter.pk}/', {'letter_number': '001'}, format='json')
        self.assertError(response, status.HTTP_409_CONFLICT, 'duplicate_value')

    def test_unknown_letter_type(self):
        response = self.client.post('/api/letters/', self.payload(letter_type='memo'), format='json')
        self.assertError(response, status.HTTP_400_BAD_REQUEST, 'invalid')

    def test_by_type(self):
        self.make_letter('001')
        outgoing = self.make_letter('002', letter_type=LetterType.OUTGOING)

        response = self.client.get('/api/letters/by-type/', {'letter_type': 'keluar'})
        self.assertEqual([row['id'] for row in response.data], [outgoing.pk])

    def test_by_date_range_includes_both_ends(self):
        first = self.make_letter('001', letter_date=date(2024, 7, 1))
        last = self.make_letter('002', letter_date=date(2024, 7, 31))
        self.make_letter('003', letter_date=date(2024, 8, 1))

        response = self.client.get('/api/letters/by-date-range/', {'start_date': '2024-07-01', 'end_date': '2024-07-31'})
        self.assertEqual([row['id'] for row in response.data], [first.pk, last.pk])

    def test_by_date_range_reversed_range_is_empty(self):
        self.make_letter('001', letter_date=date(2024, 7, 15))
        response = self.client.get('/api/letters/by-date-range/', {'start_date': '2024-08-01', 'end_date': '2024-07-01'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, [])

    def test_delete_letter(self):
        letter = self.make_letter('001')
        response = self.client.delete(f'/api/letters/{letter.pk}/')

        self.assertEqual(response.data, {'success': True})
        self.assertFalse(Letter.objects.exists())
