from django.db import models
from .order import Order
from apps.catalog.models import Product, ProductVariant

__all__ = ["OrderItem"]


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name='order_items')
    variant = models.ForeignKey(ProductVariant, on_delete=models.SET_NULL, null=True, blank=True)

    quantity = models.PositiveIntegerField()

    # Snapshot fields, independent of later catalog edits
    price_at_purchase = models.DecimalField(max_digits=10, decimal_places=2)
    variant_snapshot = models.JSONField(default=dict, blank=True)

    @property
    def subtotal(self):
        return self.price_at_purchase * self.quantity

    def __str__(self):
        return f"{self.quantity}x {self.product_id}"
