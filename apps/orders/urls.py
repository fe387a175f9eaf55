from django.urls import path
from apps.payments.views import CreateGatewayOrderView
from .views import PlaceOrderView, ActivityFeedView

urlpatterns = [
    path('', PlaceOrderView.as_view(), name='place-order'),
    path('payment/create/', CreateGatewayOrderView.as_view(), name='checkout-payment-create'),
    path('activity/', ActivityFeedView.as_view(), name='activity-feed'),
]
