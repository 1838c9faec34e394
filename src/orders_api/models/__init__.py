"""
Service Models Package

This package contains the Pydantic models used throughout the service:
request bodies, the error response body and the order domain models.
"""

from .input import CreateOrderItemRequest, CreateOrderRequest, UpdateOrderItemRequest, UpdateOrderRequest
from .order import DEFAULT_ORDER_STATUS, Order, OrderItem, utc_timestamp
from .output import ErrorOutput

__all__ = [
    # Input models
    "CreateOrderRequest",
    "UpdateOrderRequest",
    "CreateOrderItemRequest",
    "UpdateOrderItemRequest",

    # Output models
    "ErrorOutput",

    # Domain models
    "Order",
    "OrderItem",
    "DEFAULT_ORDER_STATUS",
    "utc_timestamp",
]
