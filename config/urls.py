from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from drf_spectacular.views import SpectacularAPIView

from apps.utils.health import health_check

admin_url = settings.ADMIN_URL.strip("/") + "/"

urlpatterns = [
    path(admin_url, admin.site.urls),
    path("health/", health_check, name="health-check"),
    path("api/schema/", SpectacularAPIView.as_view(), name="api-schema"),

    # Storefront
    path("api/v1/auth/", include("apps.accounts.urls")),
    path("api/v1/catalog/", include("apps.catalog.urls")),
    path("api/v1/orders/", include("apps.orders.urls")),
    path("api/v1/media/", include("apps.media_library.urls")),
    path("api/v1/support/", include("apps.support.urls")),

    # Admin panel API
    path("api/v1/admin/", include("apps.accounts.admin_urls")),
    path("api/v1/admin/", include("apps.catalog.admin_urls")),
    path("api/v1/admin/", include("apps.orders.admin_urls")),
    path("api/v1/admin/", include("apps.payments.urls")),
    path("api/v1/admin/", include("apps.customers.urls")),
    path("api/v1/admin/", include("apps.shipping.urls")),
    path("api/v1/admin/", include("apps.media_library.admin_urls")),
    path("api/v1/admin/", include("apps.support.admin_urls")),
    path("api/v1/admin/", include("apps.web_admin.urls")),
]
