import logging
import uuid
from collections import Counter

from django.db import transaction
from rest_framework.exceptions import NotFound

from .models import Category, Product, ProductVariant

logger = logging.getLogger(__name__)


def _stored_variant_id(raw_id):
    """
    Returns a UUID for ids that can name a stored variant, None for drafts.
    """
    if not raw_id:
        return None
    try:
        return uuid.UUID(str(raw_id))
    except ValueError:
        return None


class CatalogService:

    @staticmethod
    @transaction.atomic
    def create_product(data: dict) -> Product:
        variants = data.pop("variants", None) or []
        product = Product.objects.create(**data)
        ProductVariant.objects.bulk_create([
            ProductVariant(product=product, **{k: v for k, v in variant.items() if k != "id"})
            for variant in variants
        ])
        logger.info("Created product %s with %d variants", product.id, len(variants))
        return product

    @staticmethod
    @transaction.atomic
    def update_product(product: Product, data: dict) -> Product:
        """
        Replaces product fields and, when `variants` is supplied, syncs them:
        stored ids are updated, unknown/draft ids are created, and stored
        variants absent from the payload are deleted. All or nothing.
        """
        variants = data.pop("variants", None)

        for field, value in data.items():
            setattr(product, field, value)
        product.save()

        if variants is not None:
            existing = {v.id: v for v in product.variants.select_for_update()}
            incoming_ids = set()

            for variant_data in variants:
                payload = {k: v for k, v in variant_data.items() if k != "id"}
                variant_id = _stored_variant_id(variant_data.get("id"))

                if variant_id in existing:
                    incoming_ids.add(variant_id)
                    variant = existing[variant_id]
                    for field, value in payload.items():
                        setattr(variant, field, value)
                    variant.save()
                else:
                    ProductVariant.objects.create(product=product, **payload)

            stale_ids = [pk for pk in existing if pk not in incoming_ids]
            if stale_ids:
                ProductVariant.objects.filter(id__in=stale_ids).delete()

        return product

    @staticmethod
    def update_stock(product_id, new_stock: int, variant_sku: str = None) -> str:
        if variant_sku:
            updated = ProductVariant.objects.filter(
                product_id=product_id, sku=variant_sku
            ).update(stock_quantity=new_stock)
            if not updated:
                raise NotFound("Product variant not found.")
            return "variant"

        updated = Product.objects.filter(id=product_id).update(stock_quantity=new_stock)
        if not updated:
            raise NotFound("Product not found.")
        return "base"

    @staticmethod
    def tag_counts() -> list:
        counts = Counter()
        for tags in Product.objects.values_list("tags", flat=True):
            counts.update(tags or [])
        return [{"name": name, "count": count} for name, count in sorted(counts.items())]

    @staticmethod
    @transaction.atomic
    def delete_tag(tag_name: str) -> int:
        """
        Removes a tag from every product carrying it. Returns the number of products touched.
        """
        touched = 0
        for product in Product.objects.select_for_update().only("id", "tags"):
            if tag_name in (product.tags or []):
                product.tags = [t for t in product.tags if t != tag_name]
                product.save(update_fields=["tags", "updated_at"])
                touched += 1
        return touched

    @staticmethod
    @transaction.atomic
    def delete_category(category: Category) -> None:
        """
        Deletes a category with its whole subtree, leaves first.
        """
        for child in list(category.subcategories.all()):
            CatalogService.delete_category(child)
        category.delete()
