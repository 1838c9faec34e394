"""
Business Logic Layer for Order Management.

This module turns validated requests into repository calls: it assigns ids and
timestamps, applies defaults and patch semantics, and decides which lookups are
not-found errors. It never catches store errors.
"""

from typing import Callable, List, Optional

from aws_lambda_powertools.metrics import MetricUnit

from orders_api.dal import OrdersRepository
from orders_api.handlers.utils.errors import OrderDoesNotExistError, ResourceNotFoundError
from orders_api.handlers.utils.observability import logger, metrics, tracer
from orders_api.models.input import (
    CreateOrderItemRequest,
    CreateOrderRequest,
    UpdateOrderItemRequest,
    UpdateOrderRequest,
)
from orders_api.models.order import Order, OrderItem


class OrderService:
    """Business logic service for orders and their items."""

    def __init__(self, repository: OrdersRepository):
        """
        Initialize order service.

        Args:
            repository: Data access layer shared by every request
        """
        self.repository = repository

    # Orders

    @tracer.capture_method
    def list_orders(self) -> List[Order]:
        return self.repository.list_orders()

    @tracer.capture_method
    def create_order(self, request: CreateOrderRequest) -> Order:
        """
        Create an order; status defaults to ``new``.

        Args:
            request: Validated create request

        Returns:
            The stored order
        """
        order = Order.create(customer_name=request.customer_name, status=request.status)
        self.repository.create_order(order)

        metrics.add_metric(name="OrderCreated", unit=MetricUnit.Count, value=1)
        logger.info("Order created", extra={"order_id": order.id, "status": order.status})
        return order

    @tracer.capture_method
    def get_order(self, order_id: str) -> Order:
        """
        Get an order by ID.

        Raises:
            ResourceNotFoundError: If the order does not exist
        """
        order = self.repository.get_order(order_id)
        if order is None:
            raise ResourceNotFoundError('order')
        return order

    @tracer.capture_method
    def update_order(self, order: Order, request: UpdateOrderRequest) -> Order:
        """
        Apply the supplied fields of ``request`` to an existing order and store it.

        Args:
            order: Order previously returned by ``get_order``
            request: Validated patch

        Returns:
            The updated order
        """
        order.apply_update(customer_name=request.customer_name, status=request.status)
        self.repository.update_order(order)

        logger.info("Order updated", extra={
            "order_id": order.id,
            "fields": sorted(request.model_dump(exclude_none=True)),
        })
        return order

    @tracer.capture_method
    def delete_order(self, order_id: str, is_cancelled: Optional[Callable[[], bool]] = None) -> None:
        """Delete an order and its items; absent orders are not an error."""
        self.repository.delete_order(order_id, is_cancelled=is_cancelled)
        metrics.add_metric(name="OrderDeleted", unit=MetricUnit.Count, value=1)

    # Order items

    @tracer.capture_method
    def list_order_items(self, order_id: str) -> List[OrderItem]:
        return self.repository.list_order_items(order_id)

    @tracer.capture_method
    def ensure_order_exists(self, order_id: str) -> None:
        """
        Check the parent order of a new item.

        Raises:
            OrderDoesNotExistError: If the order is missing
        """
        if self.repository.get_order(order_id) is None:
            raise OrderDoesNotExistError(order_id)

    @tracer.capture_method
    def create_order_item(self, order_id: str, request: CreateOrderItemRequest) -> OrderItem:
        """
        Create an item under an order that ``ensure_order_exists`` has checked.

        Args:
            order_id: Owning order
            request: Validated create request

        Returns:
            The stored order item
        """
        item = OrderItem.create(
            order_id=order_id,
            product_name=request.product_name,
            quantity=request.quantity,
            price=request.price,
        )
        self.repository.create_order_item(item)

        metrics.add_metric(name="OrderItemCreated", unit=MetricUnit.Count, value=1)
        logger.info("Order item created", extra={"order_id": order_id, "item_id": item.id})
        return item

    @tracer.capture_method
    def get_order_item(self, order_id: str, item_id: str) -> OrderItem:
        """
        Get an order item by its composite key.

        Raises:
            ResourceNotFoundError: If the item does not exist
        """
        item = self.repository.get_order_item(order_id, item_id)
        if item is None:
            raise ResourceNotFoundError('item')
        return item

    @tracer.capture_method
    def update_order_item(self, item: OrderItem, request: UpdateOrderItemRequest) -> OrderItem:
        """Apply the supplied fields of ``request`` to an existing item and store it."""
        item.apply_update(
            product_name=request.product_name,
            quantity=request.quantity,
            price=request.price,
        )
        self.repository.update_order_item(item)

        logger.info("Order item updated", extra={
            "order_id": item.order_id,
            "item_id": item.id,
            "fields": sorted(request.model_dump(exclude_none=True)),
        })
        return item

    @tracer.capture_method
    def delete_order_item(self, order_id: str, item_id: str) -> None:
        self.repository.delete_order_item(order_id, item_id)
