from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import AdminUserViewSet, AdminActivityLogListView

router = DefaultRouter()
router.register(r'users', AdminUserViewSet, basename='admin-users')

urlpatterns = [
    path('activity-logs/', AdminActivityLogListView.as_view(), name='admin-activity-logs'),
    path('', include(router.urls)),
]
