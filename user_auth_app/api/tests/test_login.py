from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

User = get_user_model()


def login(client, username, password):
    return client.post(reverse("login"), {"username": username, "password": password}, format="json")


class LoginTests(APITestCase):
    def setUp(self):
        cache.clear()
        self.guest = User.objects.create_user("andrey", "andrey@bistro.test", "Tandoori!42")
        self.chef = User.objects.create_user("chef", "chef@bistro.test", "Kitchen!42", is_staff=True)

    def test_customer_login_returns_token_payload(self):
        resp = login(self.client, "andrey", "Tandoori!42")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["token"], Token.objects.get(user=self.guest).key)
        self.assertEqual(resp.data["user_id"], self.guest.id)
        self.assertEqual(resp.data["email"], "andrey@bistro.test")
        self.assertFalse(resp.data["is_staff"])

    def test_staff_login_flags_staff(self):
        resp = login(self.client, "chef", "Kitchen!42")
        self.assertTrue(resp.data["is_staff"])

    def test_repeated_login_reuses_token(self):
        first = login(self.client, "andrey", "Tandoori!42")
        second = login(self.client, "andrey", "Tandoori!42")
        self.assertEqual(first.data["token"], second.data["token"])
        self.assertEqual(Token.objects.filter(user=self.guest).count(), 1)

    def test_bad_credentials_400(self):
        for username, password in (("andrey", "wrong"), ("nobody", "Tandoori!42")):
            resp = login(self.client, username, password)
            self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertIn("detail", resp.data)

    def test_missing_password_400(self):
        resp = self.client.post(reverse("login"), {"username": "andrey"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password", resp.data)


class LogoutTests(APITestCase):
    def setUp(self):
        self.guest = User.objects.create_user("andrey", "andrey@bistro.test", "Tandoori!42")
        self.token = Token.objects.create(user=self.guest)

    def test_logout_deletes_token(self):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {self.token.key}")
        resp = self.client.post(reverse("logout"))
        self.assertEqual(resp.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Token.objects.filter(user=self.guest).exists())

    def test_old_token_rejected_after_logout(self):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {self.token.key}")
        self.client.post(reverse("logout"))
        resp = self.client.post(reverse("logout"))
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_logout_requires_auth_401(self):
        resp = self.client.post(reverse("logout"))
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
