# apps/catalog/serializers.py
from decimal import Decimal
from rest_framework import serializers
from .models import Category, Product, ProductVariant, VariantAttribute, ProductReview


class CategorySerializer(serializers.ModelSerializer):
    subcategories = serializers.SerializerMethodField(read_only=True)

    class Meta:
        model = Category
        fields = ["id", "name", "slug", "parent", "image_url", "subcategories"]
        read_only_fields = ["slug"]

    def get_subcategories(self, obj):
        return CategorySerializer(obj.subcategories.all(), many=True, context=self.context).data


class ProductVariantSerializer(serializers.ModelSerializer):
    # Client-side drafts send temporary ids; only ids of stored variants are honoured
    id = serializers.CharField(required=False, allow_null=True, allow_blank=True)

    class Meta:
        model = ProductVariant
        fields = ["id", "sku", "price", "stock_quantity", "attributes", "image_url"]


class ProductSerializer(serializers.ModelSerializer):
    variants = ProductVariantSerializer(many=True, read_only=True)

    class Meta:
        model = Product
        fields = [
            "id", "name", "slug", "description", "sku", "price", "mrp",
            "stock_quantity", "category_name", "sub_category_name",
            "image_url", "gallery_image_urls", "tags", "publish_status",
            "variants", "created_at", "updated_at",
        ]


class AdminProductSerializer(serializers.ModelSerializer):
    """
    Admin create/update payload. `category`/`sub_category` are category names.
    """
    category = serializers.CharField(source="category_name")
    sub_category = serializers.CharField(source="sub_category_name", required=False, allow_null=True, allow_blank=True)
    variants = ProductVariantSerializer(many=True, required=False)
    tags = serializers.ListField(child=serializers.CharField(max_length=100), required=False)

    class Meta:
        model = Product
        fields = [
            "id", "name", "slug", "description", "sku", "price", "mrp",
            "stock_quantity", "category", "sub_category",
            "image_url", "gallery_image_urls", "tags", "publish_status",
            "variants", "created_at", "updated_at",
        ]
        read_only_fields = ["id", "slug", "created_at", "updated_at"]

    def validate_price(self, value):
        if value <= Decimal("0"):
            raise serializers.ValidationError("Price must be greater than zero.")
        return value

    def validate_mrp(self, value):
        if value <= Decimal("0"):
            raise serializers.ValidationError("MRP must be greater than zero.")
        return value

    def to_representation(self, instance):
        return ProductSerializer(instance, context=self.context).data


class StockUpdateSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    variant_sku = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    new_stock = serializers.IntegerField(min_value=0)


class VariantAttributeSerializer(serializers.ModelSerializer):
    values = serializers.ListField(child=serializers.CharField(max_length=100), required=False)

    class Meta:
        model = VariantAttribute
        fields = ["id", "name", "values"]


class ProductReviewSerializer(serializers.ModelSerializer):
    user_name = serializers.CharField(source="user.name", read_only=True, default=None)
    product_name = serializers.CharField(source="product.name", read_only=True)
    product_image_url = serializers.CharField(source="product.image_url", read_only=True)

    class Meta:
        model = ProductReview
        fields = [
            "id", "product", "product_name", "product_image_url", "user", "user_name",
            "rating", "comment", "approved", "created_at",
        ]
        read_only_fields = ["product", "user", "rating", "comment", "created_at"]
