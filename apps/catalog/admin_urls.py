from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import (
    AdminProductViewSet,
    AdminCategoryViewSet,
    VariantAttributeViewSet,
    AdminReviewViewSet,
    StockUpdateView,
    TagListView,
    TagDeleteView,
)

router = DefaultRouter()
router.register(r"products", AdminProductViewSet, basename="admin-products")
router.register(r"categories", AdminCategoryViewSet, basename="admin-categories")
router.register(r"variant-attributes", VariantAttributeViewSet, basename="admin-variant-attributes")
router.register(r"reviews", AdminReviewViewSet, basename="admin-reviews")

urlpatterns = [
    path("inventory/stock/", StockUpdateView.as_view(), name="admin-stock-update"),
    path("tags/", TagListView.as_view(), name="admin-tags"),
    path("tags/<str:tag_name>/", TagDeleteView.as_view(), name="admin-tag-delete"),
    path("", include(router.urls)),
]
