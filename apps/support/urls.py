from django.urls import path
from .views import PublicFaqListView, PublicTestimonialListView

urlpatterns = [
    path('faqs/', PublicFaqListView.as_view(), name='faq-list'),
    path('testimonials/', PublicTestimonialListView.as_view(), name='testimonial-list'),
]
