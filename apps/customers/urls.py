from django.urls import path
from .views import CustomerListView, ToggleCustomerBlockView

urlpatterns = [
    path('customers/', CustomerListView.as_view(), name='admin-customers'),
    path('customers/<uuid:pk>/toggle-block/', ToggleCustomerBlockView.as_view(), name='admin-customer-toggle-block'),
]
