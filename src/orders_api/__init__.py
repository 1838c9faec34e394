"""
Orders API Service Module.

A CRUD HTTP API for orders and order items stored in DynamoDB, organised in the
three-layer architecture:

- handlers: routes, request parsing, transports (Lambda and local listener)
- logic: ids, timestamps, defaults and patch semantics
- dal: DynamoDB persistence and the cascading order delete
- models: Pydantic request, response and domain models
"""

__version__ = "1.0.0"
__description__ = "Orders and order items CRUD API on DynamoDB"

# Re-export commonly used classes for convenience
from orders_api.models.order import Order, OrderItem
from orders_api.models.input import (
    CreateOrderItemRequest,
    CreateOrderRequest,
    UpdateOrderItemRequest,
    UpdateOrderRequest,
)
from orders_api.handlers.utils.observability import logger, tracer, metrics

__all__ = [
    "Order",
    "OrderItem",
    "CreateOrderRequest",
    "UpdateOrderRequest",
    "CreateOrderItemRequest",
    "UpdateOrderItemRequest",
    "logger",
    "tracer",
    "metrics",
]
