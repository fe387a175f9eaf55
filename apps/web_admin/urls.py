from django.urls import path
from .views import SiteSettingsView, DashboardView, NotificationsView, WishlistAnalyticsView

urlpatterns = [
    path('site-settings/', SiteSettingsView.as_view(), name='admin-site-settings'),
    path('dashboard/', DashboardView.as_view(), name='admin-dashboard'),
    path('notifications/', NotificationsView.as_view(), name='admin-notifications'),
    path('analytics/wishlist/', WishlistAnalyticsView.as_view(), name='admin-wishlist-analytics'),
]
