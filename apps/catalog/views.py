import math

from django.db.models import Q
from django.shortcuts import get_object_or_404
from rest_framework import viewsets, mixins, status
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny

from apps.accounts.permissions import IsAdmin
from apps.accounts.services import log_admin_action
from .models import Category, Product, PublishStatus, VariantAttribute, ProductReview
from .serializers import (
    CategorySerializer,
    ProductSerializer,
    AdminProductSerializer,
    StockUpdateSerializer,
    VariantAttributeSerializer,
    ProductReviewSerializer,
)
from .services import CatalogService

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def _positive_int(raw, default, ceiling=None):
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    if value < 1:
        return default
    return min(value, ceiling) if ceiling else value


class ProductListView(APIView):
    """
    Public storefront listing: published products only.
    GET /api/v1/catalog/products/?category=&search=&page=&limit=
    """
    permission_classes = [AllowAny]

    def get(self, request):
        page = _positive_int(request.query_params.get("page"), 1)
        limit = _positive_int(request.query_params.get("limit"), DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE)

        qs = Product.objects.filter(publish_status=PublishStatus.PUBLISHED)

        category = request.query_params.get("category")
        if category:
            qs = qs.filter(category_name=category)

        search = request.query_params.get("search")
        if search:
            qs = qs.filter(Q(name__icontains=search) | Q(description__icontains=search))

        total = qs.count()
        offset = (page - 1) * limit
        products = qs.prefetch_related("variants")[offset:offset + limit]

        return Response({
            "products": ProductSerializer(products, many=True).data,
            "total_pages": math.ceil(total / limit),
            "current_page": page,
        })


class ProductDetailView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, slug):
        product = Product.objects.prefetch_related("variants").filter(slug=slug).first()
        if product is None:
            return Response({"message": "Product not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(ProductSerializer(product).data)


class CategoryListView(APIView):
    """
    Public category tree (top-level categories with nested subcategories).
    """
    permission_classes = [AllowAny]

    def get(self, request):
        roots = Category.objects.filter(parent__isnull=True).prefetch_related("subcategories")
        return Response(CategorySerializer(roots, many=True).data)


# --- Admin ---

class AdminProductViewSet(viewsets.ModelViewSet):
    serializer_class = AdminProductSerializer
    permission_classes = [IsAdmin]
    queryset = Product.objects.prefetch_related("variants")
    filterset_fields = ["publish_status", "category_name"]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = CatalogService.create_product(dict(serializer.validated_data))
        log_admin_action(request, f"Created product: {product.name}", f"ID: {product.id}")
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        product = self.get_object()
        serializer = self.get_serializer(product, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        product = CatalogService.update_product(product, dict(serializer.validated_data))
        log_admin_action(request, f"Updated product: {product.name}", f"ID: {product.id}")
        product = Product.objects.prefetch_related("variants").get(pk=product.pk)
        return Response(ProductSerializer(product).data)

    def perform_destroy(self, instance):
        name, pk = instance.name, instance.pk
        instance.delete()
        log_admin_action(self.request, f"Deleted product: {name}", f"ID: {pk}")


class StockUpdateView(APIView):
    permission_classes = [IsAdmin]

    def post(self, request):
        serializer = StockUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        CatalogService.update_stock(
            product_id=data["product_id"],
            new_stock=data["new_stock"],
            variant_sku=data.get("variant_sku"),
        )
        log_admin_action(
            request,
            "Updated stock",
            f"Product ID: {data['product_id']}, SKU: {data.get('variant_sku') or 'base'}, New Stock: {data['new_stock']}",
        )
        return Response({"success": True, "message": "Stock updated successfully."})


class AdminCategoryViewSet(viewsets.ModelViewSet):
    serializer_class = CategorySerializer
    permission_classes = [IsAdmin]
    queryset = Category.objects.all()

    def get_queryset(self):
        qs = super().get_queryset()
        if self.action == "list":
            qs = qs.filter(parent__isnull=True).prefetch_related("subcategories")
        return qs

    def perform_create(self, serializer):
        category = serializer.save()
        log_admin_action(self.request, "Created category", f"Name: {category.name}")

    def perform_update(self, serializer):
        category = serializer.save()
        log_admin_action(self.request, "Updated category", f"Name: {category.name}")

    def perform_destroy(self, instance):
        name = instance.name
        CatalogService.delete_category(instance)
        log_admin_action(self.request, "Deleted category and its subcategories", f"Name: {name}")


class TagListView(APIView):
    permission_classes = [IsAdmin]

    def get(self, request):
        return Response(CatalogService.tag_counts())


class TagDeleteView(APIView):
    permission_classes = [IsAdmin]

    def delete(self, request, tag_name):
        CatalogService.delete_tag(tag_name)
        log_admin_action(request, "Deleted tag from all products", f"Tag: {tag_name}")
        return Response(status=status.HTTP_204_NO_CONTENT)


class VariantAttributeViewSet(viewsets.ModelViewSet):
    serializer_class = VariantAttributeSerializer
    permission_classes = [IsAdmin]
    queryset = VariantAttribute.objects.all()


class AdminReviewViewSet(mixins.ListModelMixin,
                         mixins.UpdateModelMixin,
                         mixins.DestroyModelMixin,
                         viewsets.GenericViewSet):
    """
    Moderation: list, approve/unapprove (PATCH {"approved": bool}), delete.
    """
    serializer_class = ProductReviewSerializer
    permission_classes = [IsAdmin]
    queryset = ProductReview.objects.select_related("user", "product")
    filterset_fields = ["approved"]
