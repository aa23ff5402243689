from django.contrib.auth import get_user_model
from django.core import mail
from django.core.cache import cache
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase, APIClient
from profiles.models import Profile

User = get_user_model()


def registration_payload(**overrides):
    payload = {
        "username": "exampleUsername",
        "email": "example@mail.de",
        "password": "StrongPassw0rd!",
        "repeated_password": "StrongPassw0rd!",
    }
    payload.update(overrides)
    return payload


class RegistrationTests(APITestCase):
    def setUp(self):
        cache.clear()
        self.url = reverse("registration")
        self.client = APIClient()

    def test_registration_success(self):
        payload = registration_payload()
        resp = self.client.post(self.url, payload, format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertIn("token", resp.data)
        self.assertIn("user_id", resp.data)
        self.assertEqual(resp.data["username"], payload["username"])
        self.assertEqual(resp.data["email"], payload["email"])
        self.assertFalse(resp.data["is_staff"])
        self.assertTrue(User.objects.filter(username=payload["username"]).exists())

    def test_password_mismatch_400(self):
        resp = self.client.post(
            self.url, registration_payload(repeated_password="DIFFERENT123!"), format="json"
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("repeated_password", resp.data)

    def test_duplicate_username_400(self):
        User.objects.create_user(username="taken", email="t@mail.de", password="abc12345")
        resp = self.client.post(
            self.url, registration_payload(username="taken", email="new@mail.de"), format="json"
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("username", resp.data)

    def test_duplicate_email_400(self):
        User.objects.create_user(username="u1", email="dup@mail.de", password="abc12345")
        resp = self.client.post(
            self.url, registration_payload(username="u2", email="dup@mail.de"), format="json"
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", resp.data)

    def test_missing_required_fields_400(self):
        resp = self.client.post(self.url, {"username": "x"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        for f in ("email", "password", "repeated_password"):
            self.assertIn(f, resp.data)

    def test_registration_creates_unverified_profile(self):
        resp = self.client.post(
            self.url, registration_payload(phone_number="+49 170 123"), format="json"
        )
        self.assertEqual(resp.status_code, 201)

        prof = Profile.objects.get(user_id=resp.data["user_id"])
        self.assertEqual(prof.phone_number, "+49 170 123")
        self.assertFalse(prof.email_verified)

    def test_registration_sends_verification_code(self):
        resp = self.client.post(self.url, registration_payload(), format="json")
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["example@mail.de"])
        self.assertEqual(mail.outbox[0].subject, "Email Verification")
        self.assertRegex(mail.outbox[0].body, r"code is \d{6}")
