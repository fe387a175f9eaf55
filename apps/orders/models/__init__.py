"""
Orders app models, split per concern:

    from apps.orders.models import Order, OrderItem, Coupon, ActivityLog
"""

from .order import *      # Order, OrderStatus, PaymentStatus
from .item import *       # OrderItem
from .coupon import *     # Coupon, DiscountType
from .activity import *   # ActivityLog
