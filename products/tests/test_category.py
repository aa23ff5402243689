from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from products.models import Category, Product

User = get_user_model()


class CategoryTests(APITestCase):
    def setUp(self):
        cache.clear()
        self.admin = User.objects.create_user("admin", "admin@example.com", "Pass123!x", is_staff=True)
        self.admin_token = Token.objects.create(user=self.admin)
        self.customer = User.objects.create_user("cust", "cust@example.com", "Pass123!x")
        self.customer_token = Token.objects.create(user=self.customer)
        self.url = reverse("category-list")

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")

    def test_list_public_sorted_by_name(self):
        Category.objects.create(name="Soups")
        Category.objects.create(name="Desserts")
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual([c["name"] for c in res.data["results"]], ["Desserts", "Soups"])
        self.assertEqual(res["X-Cache"], "MISS")

    def test_staff_creates_category(self):
        self.auth(self.admin_token)
        res = self.client.post(self.url, {"name": "Starters", "description": "Small plates"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["image"], "")

    def test_short_name_400(self):
        self.auth(self.admin_token)
        res = self.client.post(self.url, {"name": "S"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_customer_cannot_patch_403(self):
        category = Category.objects.create(name="Soups")
        self.auth(self.customer_token)
        res = self.client.patch(reverse("category-detail", args=[category.id]), {"name": "Stews"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_delete_category_uncategorises_products(self):
        category = Category.objects.create(name="Soups")
        product = Product.objects.create(name="Minestrone", price="5.50", category=category)
        self.auth(self.admin_token)

        res = self.client.delete(reverse("category-detail", args=[category.id]))
        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Category.objects.filter(pk=category.pk).exists())
        product.refresh_from_db()
        self.assertIsNone(product.category_id)

    def test_unknown_category_404(self):
        res = self.client.get(reverse("category-detail", args=["5b0d1a5e-54a3-4c40-9f1a-0e7d3d9b1f11"]))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
