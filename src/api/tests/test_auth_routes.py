"""Tests for the signup, login and logout routes."""

import os
import unittest
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from api.dependencies import get_activity_repo, get_auth_service
from api.main import app
from api.security import FLASH_COOKIE_NAME, SESSION_COOKIE_NAME
from adapter.fake.activity_repository import FakeActivityRepository
from adapter.fake.session_repository import FakeSessionRepository
from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import StoreError
from services.auth_service import AuthService
from utils.config import get_settings
from utils.passwords import verify_password

JSON = {"Accept": "application/json"}


class AuthRoutesTestCase(unittest.TestCase):

    def setUp(self):
        self.users = FakeUserRepository()
        self.sessions = FakeSessionRepository()
        self.activities = FakeActivityRepository(self.users)
        app.dependency_overrides[get_auth_service] = self._auth_service
        app.dependency_overrides[get_activity_repo] = lambda: self.activities
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def _auth_service(self):
        return AuthService(self.users, self.sessions, bcrypt_rounds=4)

    def _signup(self, username='alice', password='pw123'):
        return self.client.post("/signup", json={"username": username, "password": password})

    def _login(self, username='alice', password='pw123'):
        return self.client.post("/login", json={"username": username, "password": password})


class TestSignup(AuthRoutesTestCase):

    def test_signup_creates_user_with_hashed_password(self):
        response = self._signup()

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json(), {"message": "User registered"})
        user = self.users.get_by_username('alice')
        self.assertNotEqual(user.password_hash, 'pw123')
        self.assertTrue(verify_password('pw123', user.password_hash))
        self.assertEqual(user.activities, [])

    def test_signup_does_not_log_in(self):
        self._signup()
        self.assertNotIn(SESSION_COOKIE_NAME, self.client.cookies)
        self.assertEqual(self.sessions.store, {})

    def test_duplicate_username(self):
        self._signup()

        response = self._signup(password='other')

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["detail"], "Username already registered")
        self.assertEqual(len(self.users.store), 1)

    def test_missing_password(self):
        response = self.client.post("/signup", json={"username": "alice"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "password: Field required")
        self.assertEqual(self.users.store, {})

    def test_blank_username(self):
        response = self._signup(username='   ')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "username: must not be empty")

    def test_truncated_json_body(self):
        response = self.client.post(
            "/signup",
            content='{"username": "a", "password": ',
            headers={"Content-Type": "application/json"},
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "body: Invalid JSON")
        self.assertEqual(self.users.store, {})

    def test_password_longer_than_bcrypt_limit(self):
        response = self._signup(password='x' * 73)

        self.assertEqual(response.status_code, 400)
        self.assertTrue(response.json()["detail"].startswith("password:"))

    def test_store_failure(self):
        failing = MagicMock()
        failing.create.side_effect = StoreError("down")
        app.dependency_overrides[get_auth_service] = lambda: AuthService(failing, self.sessions, bcrypt_rounds=4)

        response = self._signup()

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["detail"], "Error registering user")

    def test_signup_page(self):
        response = self.client.get("/signup")

        self.assertEqual(response.status_code, 200)
        self.assertIn("text/html", response.headers["content-type"])
        self.assertIn("<form", response.text)


class TestLogin(AuthRoutesTestCase):

    def setUp(self):
        super().setUp()
        self._signup()

    def test_login_sets_session_cookie(self):
        response = self._login()

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"message": "Logged in", "redirect": "/profile"})
        self.assertIn(SESSION_COOKIE_NAME, response.cookies)
        self.assertEqual(len(self.sessions.store), 1)

    def test_session_cookie_is_http_only(self):
        response = self._login()

        set_cookie = response.headers["set-cookie"].lower()
        self.assertIn("httponly", set_cookie)
        self.assertIn("samesite=lax", set_cookie)

    def test_cookie_lifetime_uses_validated_ttl(self):
        with patch.dict(os.environ, {"SESSION_TTL_SECONDS": "0"}):
            get_settings.cache_clear()
            self.addCleanup(get_settings.cache_clear)

            response = self._login()

        self.assertEqual(response.status_code, 200)
        self.assertIn("max-age=60", response.headers["set-cookie"].lower())
        self.assertEqual(self.client.get("/profile", headers=JSON).status_code, 200)

    def test_wrong_password(self):
        response = self._login(password='wrong')

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["detail"], "Invalid username or password")
        self.assertNotIn(SESSION_COOKIE_NAME, response.cookies)
        self.assertIn(FLASH_COOKIE_NAME, response.cookies)
        self.assertEqual(self.sessions.store, {})

    def test_unknown_user_looks_like_wrong_password(self):
        unknown = self._login(username='bob')
        wrong = self._login(password='wrong')

        self.assertEqual(unknown.status_code, wrong.status_code)
        self.assertEqual(unknown.json(), wrong.json())

    def test_failed_login_flash_is_shown_once(self):
        self._login(password='wrong')

        first = self.client.get("/login")
        second = self.client.get("/login")

        self.assertIn("Invalid username or password", first.text)
        self.assertNotIn("Invalid username or password", second.text)

    def test_failed_login_keeps_existing_session(self):
        self._login()
        token_count = len(self.sessions.store)

        self._login(password='wrong')

        self.assertEqual(len(self.sessions.store), token_count)
        self.assertEqual(self.client.get("/profile", headers=JSON).status_code, 200)

    def test_second_login_replaces_previous_session(self):
        self._login()
        first_token = next(iter(self.sessions.store))

        self._login()

        self.assertEqual(len(self.sessions.store), 1)
        self.assertNotIn(first_token, self.sessions.store)

    def test_login_succeeds_when_old_session_cannot_be_deleted(self):
        self._login()

        with patch.object(self.sessions, 'delete', side_effect=StoreError("sessions unavailable")):
            response = self._login()

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["redirect"], "/profile")
        self.assertEqual(len(self.sessions.store), 2)
        self.assertEqual(self.client.get("/profile", headers=JSON).status_code, 200)

    def test_missing_username(self):
        response = self.client.post("/login", json={"password": "pw123"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "username: Field required")

    def test_login_page(self):
        response = self.client.get("/login")

        self.assertEqual(response.status_code, 200)
        self.assertIn("<form", response.text)


class TestLogout(AuthRoutesTestCase):

    def setUp(self):
        super().setUp()
        self._signup()
        self._login()

    def test_post_logout_ends_session(self):
        response = self.client.post("/logout")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"message": "Logged out"})
        self.assertEqual(self.sessions.store, {})
        self.assertEqual(self.client.get("/profile", headers=JSON).status_code, 401)

    def test_get_logout_redirects_to_login(self):
        response = self.client.get("/logout", follow_redirects=False)

        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.headers["location"], "/login")
        self.assertEqual(self.sessions.store, {})

    def test_logout_flash_shown_on_login_page(self):
        response = self.client.get("/logout")

        self.assertEqual(response.status_code, 200)
        self.assertIn("You have been logged out", response.text)

    def test_logout_without_session(self):
        self.client.cookies.clear()

        response = self.client.post("/logout")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(self.sessions.store), 1)


if __name__ == '__main__':
    unittest.main()
