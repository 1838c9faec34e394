"""
Order and order item domain models.

This module defines the entities stored by the repository and returned by the API.
Timestamps are UTC RFC 3339 strings with millisecond precision, so that their
lexical order matches their chronological order.
"""

from datetime import datetime, timezone
from typing import Annotated, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

DEFAULT_ORDER_STATUS = 'new'


def utc_timestamp() -> str:
    """Current UTC time as an RFC 3339 string, e.g. 2024-01-15T10:30:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def _refreshed(previous: str) -> str:
    # never move updated_at backwards if the wall clock steps back
    return max(utc_timestamp(), previous)


class Order(BaseModel):
    """Customer order, keyed by ``id`` in the orders table."""

    id: Annotated[str, Field(
        description='Unique identifier for the order',
        examples=['550e8400-e29b-41d4-a716-446655440000']
    )]

    customer_name: Annotated[str, Field(
        description='Customer name for the order',
        examples=['Alice']
    )]

    status: Annotated[str, Field(
        description='Free-form order status',
        examples=['new', 'shipped']
    )]

    created_at: Annotated[str, Field(
        description='RFC 3339 timestamp when the order was created'
    )]

    updated_at: Annotated[str, Field(
        description='RFC 3339 timestamp when the order was last updated'
    )]

    @classmethod
    def create(cls, customer_name: str, status: Optional[str] = None) -> 'Order':
        """
        Create a new order with generated ID and timestamps.

        Args:
            customer_name: Name of the customer placing the order
            status: Initial status, ``new`` when omitted or empty

        Returns:
            New Order instance with generated fields
        """
        now = utc_timestamp()
        return cls(
            id=str(uuid4()),
            customer_name=customer_name,
            status=status or DEFAULT_ORDER_STATUS,
            created_at=now,
            updated_at=now,
        )

    def apply_update(self, customer_name: Optional[str] = None, status: Optional[str] = None) -> None:
        """
        Overwrite the supplied fields and refresh ``updated_at``.

        Fields passed as None are left unchanged.
        """
        if customer_name is not None:
            self.customer_name = customer_name
        if status is not None:
            self.status = status
        self.updated_at = _refreshed(self.updated_at)


class OrderItem(BaseModel):
    """Line item of an order, keyed by ``(order_id, id)`` in the order items table."""

    order_id: Annotated[str, Field(
        description='Identifier of the owning order'
    )]

    id: Annotated[str, Field(
        description='Identifier of the item, unique within its order'
    )]

    product_name: Annotated[str, Field(
        description='Name of the ordered product',
        examples=['Keyboard']
    )]

    quantity: Annotated[int, Field(
        ge=1,
        description='Number of units',
        examples=[2]
    )]

    price: Annotated[float, Field(
        ge=0,
        description='Unit price',
        examples=[99.99]
    )]

    created_at: Annotated[str, Field(
        description='RFC 3339 timestamp when the item was created'
    )]

    updated_at: Annotated[str, Field(
        description='RFC 3339 timestamp when the item was last updated'
    )]

    @classmethod
    def create(cls, order_id: str, product_name: str, quantity: int, price: float) -> 'OrderItem':
        """Create a new item of ``order_id`` with generated ID and timestamps."""
        now = utc_timestamp()
        return cls(
            order_id=order_id,
            id=str(uuid4()),
            product_name=product_name,
            quantity=quantity,
            price=price,
            created_at=now,
            updated_at=now,
        )

    def apply_update(
        self,
        product_name: Optional[str] = None,
        quantity: Optional[int] = None,
        price: Optional[float] = None,
    ) -> None:
        """Overwrite the supplied fields and refresh ``updated_at``."""
        if product_name is not None:
            self.product_name = product_name
        if quantity is not None:
            self.quantity = quantity
        if price is not None:
            self.price = price
        self.updated_at = _refreshed(self.updated_at)
