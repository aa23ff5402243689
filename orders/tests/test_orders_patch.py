from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from notifications.models import Notification
from orders import services
from orders.models import Order

User = get_user_model()


def create_order(user, status=Order.Status.CREATED):
    return Order.objects.create(user=user, status=status, total_price=Decimal("25.00"))


class OrderPatchTests(APITestCase):
    def setUp(self):
        self.cust = User.objects.create_user("cust", "cust@example.com", "Pass123!x")
        self.cust_token = Token.objects.create(user=self.cust)
        self.admin = User.objects.create_user("admin", "admin@example.com", "Pass123!x", is_staff=True)
        self.admin_token = Token.objects.create(user=self.admin)

        self.order = create_order(self.cust)
        self.url = reverse("order-detail", args=[self.order.id])

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")

    def notified(self):
        return list(Notification.objects.filter(user=self.cust).values_list("type", flat=True))

    def test_staff_moves_order_to_ready(self):
        self.auth(self.admin_token)
        res = self.client.patch(self.url, {"status": "READY"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["status"], "READY")
        self.assertIn("lines", res.data)
        self.assertEqual(self.notified(), [Notification.Type.ORDER_READY])

    def test_status_is_case_insensitive(self):
        self.auth(self.admin_token)
        res = self.client.patch(self.url, {"status": "preparing"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertIsNotNone(res.data["accepted_at"])

    def test_customer_cannot_patch_403(self):
        self.auth(self.cust_token)
        res = self.client.patch(self.url, {"status": "CANCELED"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.Status.CREATED)

    def test_invalid_transition_409(self):
        self.order.status = Order.Status.RECEIVED
        self.order.save(update_fields=["status"])
        self.auth(self.admin_token)
        res = self.client.patch(self.url, {"status": "PREPARING"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(res.data["code"], "invalid_transition")

    def test_moving_to_draft_is_rejected_400(self):
        self.auth(self.admin_token)
        res = self.client.patch(self.url, {"status": "DRAFT"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("status", res.data)

    def test_empty_patch_400(self):
        self.auth(self.admin_token)
        res = self.client.patch(self.url, {}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delivered_at_notifies_once_over_two_requests(self):
        self.auth(self.admin_token)
        payload = {"delivered_at": "2025-05-01T12:00:00Z"}
        self.assertEqual(self.client.patch(self.url, payload, format="json").status_code, 200)
        self.assertEqual(self.client.patch(self.url, payload, format="json").status_code, 200)
        self.assertEqual(self.notified(), [Notification.Type.ORDER_DELIVERED])

    def test_cart_cannot_be_patched_404(self):
        cart = services.get_or_create_cart(self.cust.id)
        self.auth(self.admin_token)
        res = self.client.patch(reverse("order-detail", args=[cart.id]), {"status": "CREATED"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
