"""
Business Logic Layer Module.

The logic layer sits between the HTTP handlers and the data access layer:
- assigning identifiers and timestamps
- applying the default order status
- applying patch updates to existing records
- turning absent records into not-found errors
"""

from orders_api.logic.order_service import OrderService

__all__ = [
    "OrderService",
]
