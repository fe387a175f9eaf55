from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import SupportTicketViewSet, ChatSessionViewSet, FaqViewSet, TestimonialViewSet

router = DefaultRouter()
router.register(r'support-tickets', SupportTicketViewSet, basename='admin-support-tickets')
router.register(r'chats', ChatSessionViewSet, basename='admin-chats')
router.register(r'faqs', FaqViewSet, basename='admin-faqs')
router.register(r'testimonials', TestimonialViewSet, basename='admin-testimonials')

urlpatterns = [
    path('', include(router.urls)),
]
