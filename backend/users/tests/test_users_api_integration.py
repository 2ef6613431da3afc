"""
Users API Integration Tests

Registration, login, token refresh and revocation, and staff account
management through /api/users/.
"""
import pytest
from rest_framework import status

from users.models import User
from users.services import UserService


@pytest.mark.django_db
class TestRegistration:

    def test_register_returns_user_and_tokens(self, api_client):
        response = api_client.post('/api/auth/register/', {
            'name': 'New Hire',
            'email': 'New.Hire@Bistro.com',
            'password': 'Welcome123',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['user']['email'] == 'new.hire@bistro.com'
        assert response.data['user']['role'] == 'waiter'
        assert response.data['access']
        assert response.data['refresh']
        assert User.objects.get(email='new.hire@bistro.com').check_password('Welcome123')

    @pytest.mark.parametrize('password', ['short1A', 'alllowercase1', 'ALLUPPERCASE1', 'NoDigitsHere'])
    def test_weak_passwords_are_rejected(self, api_client, password):
        response = api_client.post('/api/auth/register/', {
            'name': 'New Hire',
            'email': 'new@bistro.com',
            'password': password,
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password' in response.data

    def test_duplicate_email(self, api_client, waiter_user):
        response = api_client.post('/api/auth/register/', {
            'name': 'Copy Cat',
            'email': 'WAITER@bistro.com',
            'password': 'Welcome123',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'email' in response.data


@pytest.mark.django_db
class TestLogin:

    def test_login(self, api_client, waiter_user):
        response = api_client.post('/api/auth/login/', {
            'email': 'waiter@bistro.com',
            'password': 'Password123',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['id'] == str(waiter_user.id)

    def test_wrong_password(self, api_client, waiter_user):
        response = api_client.post('/api/auth/login/', {
            'email': 'waiter@bistro.com',
            'password': 'nope',
        }, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error'] == 'invalid_credentials'

    def test_deactivated_user_cannot_log_in(self, api_client, waiter_user):
        UserService.deactivate(waiter_user)

        response = api_client.post('/api/auth/login/', {
            'email': 'waiter@bistro.com',
            'password': 'Password123',
        }, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_check_status_returns_fresh_tokens(self, waiter_client, waiter_user):
        response = waiter_client.get('/api/auth/check-status/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['email'] == waiter_user.email
        assert response.data['access']


@pytest.mark.django_db
class TestTokenRevocation:

    def test_logout_revokes_access_tokens(self, api_client, waiter_user):
        tokens = UserService.generate_tokens_for_user(waiter_user)
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        response = api_client.post('/api/auth/logout/')
        assert response.status_code == status.HTTP_200_OK

        response = api_client.get('/api/orders/')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_refresh(self, api_client, waiter_user):
        tokens = UserService.generate_tokens_for_user(waiter_user)

        response = api_client.post('/api/auth/token/refresh/', {'refresh': tokens['refresh']}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['access']

    def test_refresh_after_logout_is_rejected(self, api_client, waiter_user):
        tokens = UserService.generate_tokens_for_user(waiter_user)
        UserService.logout(waiter_user)

        response = api_client.post('/api/auth/token/refresh/', {'refresh': tokens['refresh']}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_deactivated_user_token_is_rejected(self, waiter_client, waiter_user):
        UserService.deactivate(waiter_user)

        response = waiter_client.get('/api/orders/')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestUserManagement:

    def test_waiter_cannot_list_users(self, waiter_client):
        response = waiter_client.get('/api/users/')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_manager_lists_users(self, manager_client, waiter_user, cashier_user):
        response = manager_client.get('/api/users/?role=waiter')

        assert response.status_code == status.HTTP_200_OK
        assert [row['email'] for row in response.data['results']] == ['waiter@bistro.com']

    def test_manager_edits_waiter(self, manager_client, waiter_user):
        response = manager_client.patch(f'/api/users/{waiter_user.id}/', {'name': 'Wes W.'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Wes W.'

    def test_manager_cannot_edit_admin(self, manager_client, admin_user):
        response = manager_client.patch(f'/api/users/{admin_user.id}/', {'role': 'waiter'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        admin_user.refresh_from_db()
        assert admin_user.role == User.Role.ADMIN

    def test_admin_promotes_waiter(self, admin_client_api, waiter_user):
        response = admin_client_api.patch(f'/api/users/{waiter_user.id}/', {'role': 'manager'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        waiter_user.refresh_from_db()
        assert waiter_user.role == User.Role.MANAGER

    def test_delete_deactivates(self, manager_client, waiter_user):
        response = manager_client.delete(f'/api/users/{waiter_user.id}/')

        assert response.status_code == status.HTTP_204_NO_CONTENT
        waiter_user.refresh_from_db()
        assert waiter_user.is_active is False
