# Services Module
from .api import StorefrontApi
from .models import Product, Stock
from .notifications import LogNotifier, Notification, NotificationQueue, NotificationSink

__all__ = [
    "StorefrontApi",
    "Product",
    "Stock",
    "LogNotifier",
    "Notification",
    "NotificationQueue",
    "NotificationSink",
]
