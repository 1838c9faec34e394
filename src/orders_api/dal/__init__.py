"""
Data Access Layer (DAL) for the orders API.

This module provides the repository interface and the factory used during startup
wiring. Repositories return None for absent keys and let store errors propagate.
"""

from typing import Callable, List, Optional, Protocol, runtime_checkable

from orders_api.models.order import Order, OrderItem


@runtime_checkable
class OrdersRepository(Protocol):
    """Protocol defining the data access layer interface."""

    def create_order(self, order: Order) -> None:
        """Store a new order, failing if the id is taken."""
        ...

    def get_order(self, order_id: str) -> Optional[Order]:
        """Retrieve an order by its ID."""
        ...

    def list_orders(self) -> List[Order]:
        """List all orders."""
        ...

    def update_order(self, order: Order) -> None:
        """Overwrite an order."""
        ...

    def delete_order(self, order_id: str, is_cancelled: Optional[Callable[[], bool]] = None) -> None:
        """Delete an order after deleting all of its items."""
        ...

    def create_order_item(self, item: OrderItem) -> None:
        """Store a new order item, failing if the key is taken."""
        ...

    def get_order_item(self, order_id: str, item_id: str) -> Optional[OrderItem]:
        """Retrieve an order item by its composite key."""
        ...

    def list_order_items(self, order_id: str) -> List[OrderItem]:
        """List the items of one order."""
        ...

    def update_order_item(self, item: OrderItem) -> None:
        """Overwrite an order item."""
        ...

    def delete_order_item(self, order_id: str, item_id: str) -> None:
        """Delete an order item; absent keys are not an error."""
        ...


def get_repository(client, orders_table: str, order_items_table: str) -> OrdersRepository:
    """
    Factory function to get the repository implementation.

    Args:
        client: Shared DynamoDB client
        orders_table: Name of the orders table
        order_items_table: Name of the order items table

    Returns:
        Repository instance
    """
    # Import here to avoid circular imports
    from orders_api.dal.dynamodb_handler import DynamoDBRepository

    return DynamoDBRepository(client, orders_table=orders_table, order_items_table=order_items_table)


__all__ = [
    'OrdersRepository',
    'get_repository',
]
