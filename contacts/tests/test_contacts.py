from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from contacts.models import Contact

User = get_user_model()


def contact_payload(**overrides):
    data = {
        "name": "Mira",
        "email": "mira@example.com",
        "subject": "Birthday dinner",
        "message": "Can we bring our own cake?",
    }
    data.update(overrides)
    return data


class ContactPostTests(APITestCase):
    def setUp(self):
        cache.clear()
        self.url = reverse("contact-list")

    def test_anonymous_sends_message(self):
        res = self.client.post(self.url, contact_payload(), format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["subject"], "Birthday dinner")
        self.assertEqual(Contact.objects.count(), 1)

    def test_invalid_email_400(self):
        res = self.client.post(self.url, contact_payload(email="not-an-email"), format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", res.data)

    def test_missing_fields_400(self):
        res = self.client.post(self.url, {"name": "Mira"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        for field in ("email", "subject", "message"):
            self.assertIn(field, res.data)

    def test_too_long_values_400(self):
        res = self.client.post(self.url, contact_payload(name="x" * 101, message="y" * 5001), format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("name", res.data)
        self.assertIn("message", res.data)

    def test_form_is_rate_limited(self):
        for _ in range(5):
            res = self.client.post(self.url, contact_payload(), format="json")
            self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        res = self.client.post(self.url, contact_payload(), format="json")
        self.assertEqual(res.status_code, status.HTTP_429_TOO_MANY_REQUESTS)


class ContactStaffTests(APITestCase):
    def setUp(self):
        cache.clear()
        self.admin = User.objects.create_user("admin", "admin@example.com", "Pass123!x", is_staff=True)
        self.admin_token = Token.objects.create(user=self.admin)
        self.cust = User.objects.create_user("cust", "cust@example.com", "Pass123!x")
        self.cust_token = Token.objects.create(user=self.cust)

        self.first = Contact.objects.create(**contact_payload(name="Anna", email="anna@example.com"))
        self.second = Contact.objects.create(**contact_payload(name="Bernd", email="bernd@example.com"))
        self.url = reverse("contact-list")

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")

    def test_staff_lists_messages(self):
        self.auth(self.admin_token)
        res = self.client.get(self.url, {"ordering": "name"})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["count"], 2)
        self.assertEqual([r["name"] for r in res.data["results"]], ["Anna", "Bernd"])

    def test_filter_by_email(self):
        self.auth(self.admin_token)
        res = self.client.get(self.url, {"email": "BERND@example.com"})
        self.assertEqual([r["id"] for r in res.data["results"]], [str(self.second.id)])

    def test_invalid_ordering_400(self):
        self.auth(self.admin_token)
        res = self.client.get(self.url, {"ordering": "subject"})
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_customer_cannot_list_403(self):
        self.auth(self.cust_token)
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_anonymous_cannot_list_401(self):
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_staff_soft_deletes_message(self):
        self.auth(self.admin_token)
        res = self.client.delete(reverse("contact-detail", args=[self.first.id]))
        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Contact.objects.filter(id=self.first.id).exists())
        self.assertTrue(Contact.all_objects.filter(id=self.first.id).exists())

    def test_customer_cannot_delete_403(self):
        self.auth(self.cust_token)
        res = self.client.delete(reverse("contact-detail", args=[self.first.id]))
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
