from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from orders.models import Order

User = get_user_model()


class OrderDeleteTests(APITestCase):
    def setUp(self):
        self.cust = User.objects.create_user("cust", "cust@example.com", "Pass123!x")
        self.cust_token = Token.objects.create(user=self.cust)
        self.admin = User.objects.create_user("admin", "admin@example.com", "Pass123!x", is_staff=True)
        self.admin_token = Token.objects.create(user=self.admin)
        self.order = Order.objects.create(user=self.cust, total_price=Decimal("8.00"))
        self.url = reverse("order-detail", args=[self.order.id])

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")

    def test_admin_soft_deletes_order_204(self):
        self.auth(self.admin_token)
        res = self.client.delete(self.url)
        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Order.objects.filter(id=self.order.id).exists())
        self.assertIsNotNone(Order.all_objects.get(id=self.order.id).deleted_at)

    def test_customer_cannot_delete_403(self):
        self.auth(self.cust_token)
        res = self.client.delete(self.url)
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Order.objects.filter(id=self.order.id).exists())

    def test_unauthenticated_401(self):
        res = self.client.delete(self.url)
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_delete_twice_404(self):
        self.auth(self.admin_token)
        self.client.delete(self.url)
        res = self.client.delete(self.url)
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
