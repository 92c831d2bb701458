from unittest.mock import patch

from django.contrib.auth import authenticate
from kombu.exceptions import OperationalError
from rest_framework import status
from rest_framework.test import APITestCase, APITransactionTestCase

from common.testing import RecordAPITestCase, make_user
from .models import User, UserRole


class AuthTests(APITestCase):
    def setUp(self):
        self.user = make_user('siti', role=UserRole.ADMIN, password='rahasia1')

    def test_login_returns_tokens_and_user(self):
        response = self.client.post('/api/auth/login/', {'username': 'siti', 'password': 'rahasia1'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.content)
        self.assertIn('token', response.data)
        self.assertIn('refresh', response.data)
        self.assertEqual(response.data['user']['username'], 'siti')
        self.assertEqual(response.data['user']['role'], 'admin')
        self.assertNotIn('password', response.data['user'])

    def test_token_authenticates_later_requests(self):
        login = self.client.post('/api/auth/login/', {'username': 'siti', 'password': 'rahasia1'}, format='json')
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['token']}")

        response = self.client.get('/api/users/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_wrong_password_is_rejected(self):
        response = self.client.post('/api/auth/login/', {'username': 'siti', 'password': 'nope'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_inactive_user_cannot_log_in(self):
        self.user.is_active = False
        self.user.save()
        response = self.client.post('/api/auth/login/', {'username': 'siti', 'password': 'rahasia1'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_refresh_issues_new_access_token(self):
        login = self.client.post('/api/auth/login/', {'username': 'siti', 'password': 'rahasia1'}, format='json')
        response = self.client.post('/api/auth/refresh/', {'refresh': login.data['refresh']}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)

    def test_logout_succeeds(self):
        response = self.client.post('/api/auth/logout/')
        self.assertEqual(response.data, {'success': True})

    @patch('users.views.send_email_task.delay')
    def test_reset_password_changes_password_and_queues_email(self, mocked_delay):
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post('/api/auth/reset-password/', {
                'email': 'SITI@simadam.test',
                'new_password': 'baru12345',
            }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.content)
        self.assertEqual(authenticate(username='siti', password='baru12345'), self.user)
        mocked_delay.assert_called_once()
        template, context, recipients = mocked_delay.call_args.args
        self.assertEqual(template, 'password_changed')
        self.assertEqual(context['username'], 'siti')
        self.assertEqual(recipients, ['siti@simadam.test'])

    def test_reset_password_for_unknown_email(self):
        response = self.client.post('/api/auth/reset-password/', {
            'email': 'nobody@simadam.test',
            'new_password': 'baru12345',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['code'], 'not_found')

    def test_reset_password_rejects_short_password(self):
        response = self.client.post('/api/auth/reset-password/', {
            'email': 'siti@simadam.test',
            'new_password': '123',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class UserManagementTests(RecordAPITestCase):
    def payload(self, **overrides):
        data = {
            'username': 'budi',
            'email': 'budi@simadam.test',
            'full_name': 'Budi Santoso',
            'role': 'guru',
            'password': 'rahasia1',
        }
        data.update(overrides)
        return data

    def test_admin_creates_user_with_hashed_password(self):
        response = self.client.post('/api/users/', self.payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.content)
        self.assertNotIn('password', response.data)
        user = User.objects.get(username='budi')
        self.assertTrue(user.check_password('rahasia1'))
        self.assertEqual(user.role, UserRole.GURU)

    def test_duplicate_username_is_rejected(self):
        response = self.client.post('/api/users/', self.payload(username='guru'), format='json')
        self.assertError(response, status.HTTP_409_CONFLICT, 'duplicate_value')

    def test_duplicate_email_is_rejected(self):
        response = self.client.post('/api/users/', self.payload(email='guru@simadam.test'), format='json')
        self.assertError(response, status.HTTP_409_CONFLICT, 'duplicate_value')

    def test_short_password_is_rejected(self):
        response = self.client.post('/api/users/', self.payload(password='123'), format='json')
        self.assertError(response, status.HTTP_400_BAD_REQUEST, 'invalid')

    def test_unknown_role_is_rejected(self):
        response = self.client.post('/api/users/', self.payload(role='kepala'), format='json')
        self.assertError(response, status.HTTP_400_BAD_REQUEST, 'invalid')

    def test_update_and_delete_user(self):
        response = self.client.patch(f'/api/users/{self.guru.pk}/', {'full_name': 'Guru Baru'}, format='json')
        self.assertEqual(response.data['full_name'], 'Guru Baru')

        response = self.client.delete(f'/api/users/{self.guru.pk}/')
        self.assertEqual(response.data, {'success': True})
        self.assertEqual(self.client.get(f'/api/users/{self.guru.pk}/').status_code, status.HTTP_204_NO_CONTENT)

    def test_guru_cannot_manage_users(self):
        self.login_as(self.guru)
        response = self.client.get('/api/users/')
        self.assertError(response, status.HTTP_403_FORBIDDEN, 'permission_denied')

    def test_anonymous_is_rejected(self):
        self.client.force_authenticate(user=None)
        response = self.client.get('/api/users/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class ResetPasswordBrokerTests(APITransactionTestCase):
    """Commit hooks run immediately here, inside the request."""

    def setUp(self):
        self.user = make_user('siti', password='rahasia1')

    @patch('users.views.send_email_task.delay', side_effect=OperationalError('broker unreachable'))
    def test_broker_failure_does_not_fail_the_reset(self, mocked_delay):
        with self.assertLogs('users.views', level='ERROR') as logs:
            response = self.client.post('/api/auth/reset-password/', {
                'email': 'siti@simadam.test',
                'new_password': 'baru12345',
            }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.content)
        self.assertEqual(response.data, {'success': True})
        mocked_delay.assert_called_once()
        self.assertIn('broker unreachable', logs.output[0])
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('baru12345'))
