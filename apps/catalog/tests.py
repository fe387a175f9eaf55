# apps/catalog/tests.py
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from django.contrib.auth import get_user_model

from rest_framework.test import APITestCase, APIClient
from rest_framework import status

from apps.accounts.models import AdminActivityLog
from .models import Category, Product, ProductVariant, PublishStatus
from .services import CatalogService

User = get_user_model()


def make_product(**overrides):
    data = {
        "name": "Linen Shirt",
        "sku": "SHIRT-LINEN",
        "price": Decimal("1499.00"),
        "mrp": Decimal("1999.00"),
        "category_name": "Apparel",
        "publish_status": PublishStatus.PUBLISHED,
    }
    data.update(overrides)
    return Product.objects.create(**data)


class CategoryModelTests(TestCase):
    def test_slug_auto_generated_and_unique(self):
        parent = Category.objects.create(name="Apparel")
        c1 = Category.objects.create(name="Shirts", parent=parent)
        c2 = Category.objects.create(name="Shirts")

        self.assertNotEqual(c1.slug, c2.slug)
        self.assertTrue(c1.slug.startswith("shirts"))
        self.assertTrue(c2.slug.startswith("shirts"))

    def test_delete_category_removes_subtree(self):
        root = Category.objects.create(name="Apparel")
        child = Category.objects.create(name="Shirts", parent=root)
        Category.objects.create(name="Formal", parent=child)
        other = Category.objects.create(name="Home")

        CatalogService.delete_category(root)

        self.assertEqual(list(Category.objects.all()), [other])


class CatalogServiceTests(TestCase):
    def setUp(self):
        self.product = make_product()
        self.small = ProductVariant.objects.create(
            product=self.product, sku="SHIRT-S", price="1499.00", attributes={"Size": "S"}
        )
        self.large = ProductVariant.objects.create(
            product=self.product, sku="SHIRT-L", price="1599.00", attributes={"Size": "L"}
        )

    def test_update_product_syncs_variants(self):
        CatalogService.update_product(self.product, {
            "name": "Linen Shirt v2",
            "variants": [
                {"id": str(self.small.id), "sku": "SHIRT-S", "price": Decimal("1399.00"), "attributes": {"Size": "S"}},
                {"id": "tmp-123", "sku": "SHIRT-M", "price": Decimal("1449.00"), "attributes": {"Size": "M"}},
            ],
        })

        self.product.refresh_from_db()
        self.assertEqual(self.product.name, "Linen Shirt v2")

        skus = set(self.product.variants.values_list("sku", flat=True))
        self.assertEqual(skus, {"SHIRT-S", "SHIRT-M"})
        self.small.refresh_from_db()
        self.assertEqual(self.small.price, Decimal("1399.00"))
        self.assertFalse(ProductVariant.objects.filter(id=self.large.id).exists())

    def test_update_without_variants_leaves_them_alone(self):
        CatalogService.update_product(self.product, {"price": Decimal("999.00")})
        self.assertEqual(self.product.variants.count(), 2)

    def test_tags_counted_and_deleted(self):
        self.product.tags = ["summer", "linen"]
        self.product.save()
        make_product(sku="SHIRT-2", name="Cotton Shirt", tags=["summer"])

        counts = {row["name"]: row["count"] for row in CatalogService.tag_counts()}
        self.assertEqual(counts, {"summer": 2, "linen": 1})

        touched = CatalogService.delete_tag("summer")
        self.assertEqual(touched, 2)
        self.product.refresh_from_db()
        self.assertEqual(self.product.tags, ["linen"])


class PublicCatalogAPITests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.shirt = make_product()
        self.draft = make_product(name="Secret Drop", sku="DRAFT-1", publish_status=PublishStatus.DRAFT)
        self.mug = make_product(name="Clay Mug", sku="MUG-1", category_name="Home", description="Hand thrown")

    def test_list_only_published(self):
        resp = self.client.get(reverse("product-list"))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        names = [p["name"] for p in resp.data["products"]]
        self.assertIn("Linen Shirt", names)
        self.assertNotIn("Secret Drop", names)
        self.assertEqual(resp.data["current_page"], 1)
        self.assertEqual(resp.data["total_pages"], 1)

    def test_filter_search_and_paginate(self):
        resp = self.client.get(reverse("product-list"), {"category": "Home"})
        self.assertEqual([p["name"] for p in resp.data["products"]], ["Clay Mug"])

        resp = self.client.get(reverse("product-list"), {"search": "THROWN"})
        self.assertEqual([p["name"] for p in resp.data["products"]], ["Clay Mug"])

        resp = self.client.get(reverse("product-list"), {"limit": 1, "page": 2})
        self.assertEqual(len(resp.data["products"]), 1)
        self.assertEqual(resp.data["total_pages"], 2)
        self.assertEqual(resp.data["current_page"], 2)

    def test_detail_by_slug(self):
        resp = self.client.get(reverse("product-detail", kwargs={"slug": self.shirt.slug}))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["sku"], "SHIRT-LINEN")

        resp = self.client.get(reverse("product-detail", kwargs={"slug": "nope"}))
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["message"], "Product not found")


class AdminProductAPITests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_admin(email="admin@shop.test", password="Adm1n!pass", name="Asha")
        self.shopper = User.objects.create_user(email="buyer@shop.test", password="Buy3r!pass", name="Ravi")

    def test_non_admin_forbidden(self):
        self.client.force_authenticate(self.shopper)
        resp = self.client.get(reverse("admin-products-list"))
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

    def test_create_product_with_variants_is_audited(self):
        self.client.force_authenticate(self.admin)
        payload = {
            "name": "Wool Scarf",
            "sku": "SCARF-1",
            "price": "899.00",
            "mrp": "1199.00",
            "category": "Accessories",
            "variants": [
                {"sku": "SCARF-RED", "price": "899.00", "attributes": {"Color": "Red"}},
                {"id": "draft-1", "sku": "SCARF-BLUE", "price": "949.00", "attributes": {"Color": "Blue"}},
            ],
        }
        resp = self.client.post(reverse("admin-products-list"), payload, format="json")

        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, resp.data)
        self.assertEqual(resp.data["category_name"], "Accessories")
        self.assertEqual(len(resp.data["variants"]), 2)
        self.assertTrue(
            AdminActivityLog.objects.filter(action="Created product: Wool Scarf", admin_user=self.admin).exists()
        )

    def test_create_requires_core_fields(self):
        self.client.force_authenticate(self.admin)
        resp = self.client.post(reverse("admin-products-list"), {"name": "No price"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        for field in ("sku", "price", "mrp", "category"):
            self.assertIn(field, resp.data)
        self.assertEqual(Product.objects.count(), 0)

    def test_stock_update_for_variant_and_unknown_variant(self):
        product = make_product()
        ProductVariant.objects.create(product=product, sku="SHIRT-S", price="1499.00")
        self.client.force_authenticate(self.admin)

        url = reverse("admin-stock-update")
        resp = self.client.post(url, {"product_id": str(product.id), "variant_sku": "SHIRT-S", "new_stock": 7}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(product.variants.get(sku="SHIRT-S").stock_quantity, 7)

        resp = self.client.post(url, {"product_id": str(product.id), "variant_sku": "NOPE", "new_stock": 1}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
