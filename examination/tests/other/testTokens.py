from django.test import TestCase
from rest_framework import status

from examination.tests.helpers import make_user

"""
    Test Script für Registrierung, Token-Ausstellung (Body und Cookie) und Logout.
"""

BASE = "/api/examination"


class TokenTests(TestCase):
    def setUp(self):
        self.user = make_user("testUser", password="testPassword")
        self.response = self.client.post(
            f"{BASE}/token/", {"username": "testUser", "password": "testPassword"}
        )

    def test_token_in_body_and_cookie(self):
        self.assertEqual(self.response.status_code, status.HTTP_200_OK)
        body = self.response.json()
        self.assertIn("access", body)
        self.assertIn("refresh", body)
        self.assertIsNotNone(self.response.cookies.get("access_token"))
        self.assertIsNotNone(self.response.cookies.get("refresh_token"))

    def test_cookie_authenticates(self):
        response = self.client.get(f"{BASE}/user/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["username"], "testUser")

    def test_bearer_header_authenticates(self):
        access = self.response.json()["access"]
        self.client.cookies.clear()
        response = self.client.get(f"{BASE}/user/", HTTP_AUTHORIZATION=f"Bearer {access}")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_wrong_password(self):
        response = self.client.post(f"{BASE}/token/", {"username": "testUser", "password": "falsch"})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_no_token(self):
        self.client.cookies.clear()
        response = self.client.get(f"{BASE}/user/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_refresh_token(self):
        refresh = self.response.json()["refresh"]
        response = self.client.post(f"{BASE}/token/refresh/", {"refresh": refresh})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("access", response.json())

    def test_logout_blacklists_refresh_token(self):
        refresh = self.response.json()["refresh"]
        response = self.client.post(f"{BASE}/auth/logout/")
        self.assertEqual(response.status_code, status.HTTP_205_RESET_CONTENT)

        response = self.client.post(f"{BASE}/token/refresh/", {"refresh": refresh})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class RegisterTests(TestCase):
    def test_register(self):
        response = self.client.post(
            f"{BASE}/auth/register/",
            {"username": "neu", "name": "Neue Person", "email": "neu@test.com", "password": "Sicher-Passwort-42"},
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        body = response.json()
        self.assertEqual(body["name"], "Neue Person")
        self.assertNotIn("password", body)

    def test_register_duplicate_username(self):
        make_user("neu")
        response = self.client.post(
            f"{BASE}/auth/register/",
            {"username": "neu", "name": "X", "email": "x@test.com", "password": "Sicher-Passwort-42"},
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["error_code"], "ValidationFailed")

    def test_register_weak_password(self):
        response = self.client.post(
            f"{BASE}/auth/register/",
            {"username": "neu", "name": "X", "email": "x@test.com", "password": "123"},
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password", response.json())
