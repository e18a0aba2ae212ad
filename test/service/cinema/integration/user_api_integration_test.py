"""
Integration tests for sign-up, login and the current-user endpoint
"""

from fastapi.testclient import TestClient
import pytest

from src.platform.constant.route_constant import (
    RESERVATION_CANCEL,
    RESERVATION_GET,
    USER_CREATE,
    USER_LOGIN,
    USER_ME,
)
from test.shared.utils import (
    assert_response_status,
    create_user,
    login_user,
    reserve,
    setup_showtime_as_admin,
)
from test.util_constant import ADMIN_EMAIL, DEFAULT_PASSWORD, TEST_USER_EMAIL, TEST_USER_NAME


pytestmark = pytest.mark.integration


class TestUserApi:
    def test_sign_up_returns_user_without_password(self, client: TestClient):
        user = create_user(client, 'new@test.com', DEFAULT_PASSWORD, 'New User', 'user')

        assert user['email'] == 'new@test.com'
        assert user['role'] == 'user'
        assert user['is_active'] is True
        assert 'password' not in user
        assert 'hashed_password' not in user

    def test_sign_up_defaults_to_user_role(self, client: TestClient):
        response = client.post(
            USER_CREATE,
            json={'email': 'plain@test.com', 'password': DEFAULT_PASSWORD, 'name': 'Plain'},
        )

        assert_response_status(response, 201)
        assert response.json()['role'] == 'user'

    def test_duplicate_email_conflicts(self, client: TestClient, normal_user):
        response = client.post(
            USER_CREATE,
            json={
                'email': TEST_USER_EMAIL,
                'password': DEFAULT_PASSWORD,
                'name': TEST_USER_NAME,
                'role': 'user',
            },
        )

        assert_response_status(response, 409)
        assert response.json()['code'] == 'CONFLICT'

    @pytest.mark.parametrize(
        'payload',
        [
            {'email': 'not-an-email', 'password': DEFAULT_PASSWORD, 'name': 'X'},
            {'email': 'short@test.com', 'password': 'short', 'name': 'X'},
            {'email': 'role@test.com', 'password': DEFAULT_PASSWORD, 'name': 'X', 'role': 'vip'},
        ],
    )
    def test_invalid_sign_up_payload(self, client: TestClient, payload):
        response = client.post(USER_CREATE, json=payload)

        assert_response_status(response, 400)
        assert response.json()['code'] == 'INVALID_REQUEST'

    def test_login_sets_cookie_and_me_returns_user(self, client: TestClient, normal_user):
        response = login_user(client, TEST_USER_EMAIL)

        assert 'fastapiusersauth' in response.cookies
        me = client.get(USER_ME)
        assert_response_status(me, 200)
        assert me.json()['id'] == normal_user['id']

    def test_login_with_wrong_password(self, client: TestClient, normal_user):
        response = client.post(
            USER_LOGIN, json={'email': TEST_USER_EMAIL, 'password': 'wrong-password'}
        )

        assert_response_status(response, 400)
        assert response.json()['code'] == 'LOGIN_FAILED'

    def test_me_requires_authentication(self, client: TestClient):
        response = client.get(USER_ME)

        assert_response_status(response, 401)


class TestAdminSignUp:
    def _sign_up_admin(self, client: TestClient, email: str):
        return client.post(
            USER_CREATE,
            json={'email': email, 'password': DEFAULT_PASSWORD, 'name': 'Wannabe', 'role': 'admin'},
        )

    def test_anonymous_admin_sign_up_is_forbidden(self, client: TestClient):
        response = self._sign_up_admin(client, 'wannabe@test.com')

        assert_response_status(response, 403)
        assert response.json()['code'] == 'FORBIDDEN'
        # No account was created under that email
        assert_response_status(
            client.post(
                USER_LOGIN, json={'email': 'wannabe@test.com', 'password': DEFAULT_PASSWORD}
            ),
            400,
        )

    def test_user_cannot_create_admin(self, client: TestClient, normal_user):
        login_user(client, TEST_USER_EMAIL)

        response = self._sign_up_admin(client, 'wannabe@test.com')

        assert_response_status(response, 403)

    def test_admin_can_create_admin(self, client: TestClient, admin_user):
        login_user(client, ADMIN_EMAIL)

        response = self._sign_up_admin(client, 'second-admin@test.com')

        assert_response_status(response, 201)
        assert response.json()['role'] == 'admin'
        login_user(client, 'second-admin@test.com')
        assert client.get(USER_ME).json()['role'] == 'admin'

    def test_self_signed_account_cannot_cancel_other_reservations(
        self, client: TestClient, admin_user, normal_user
    ):
        # Given: a reservation owned by someone else
        showtime = setup_showtime_as_admin(client)
        login_user(client, TEST_USER_EMAIL)
        reservation = reserve(client, showtime['id'], [5, 6]).json()

        # When: the attacker asks for admin, falls back to a plain account and tries to cancel
        client.cookies.clear()
        assert_response_status(self._sign_up_admin(client, 'attacker@test.com'), 403)
        create_user(client, 'attacker@test.com', DEFAULT_PASSWORD, 'Attacker', 'user')
        login_user(client, 'attacker@test.com')
        response = client.post(RESERVATION_CANCEL.format(reservation_id=reservation['id']))

        # Then
        assert_response_status(response, 403)
        login_user(client, TEST_USER_EMAIL)
        assert client.get(
            RESERVATION_GET.format(reservation_id=reservation['id'])
        ).json()['status'] == 'active'
