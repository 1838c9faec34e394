"""
DynamoDB implementation of the Data Access Layer (DAL).

Orders live in a table keyed by ``id``; order items live in a table keyed by
``order_id`` (hash) and ``id`` (range) so the items of one order are a single
partition query. Store errors (``ClientError``, ``BotoCoreError``) are not caught
here: callers see them unchanged.
"""

from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

from aws_lambda_powertools.metrics import MetricUnit
from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from pydantic import BaseModel

from orders_api.dal.cascade import run_bounded
from orders_api.handlers.utils.observability import logger, metrics, tracer
from orders_api.models.order import Order, OrderItem

# Upper bound on item deletes in flight during a cascading order delete
ORDER_ITEM_DELETE_CONCURRENCY = 8

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def _to_item(model: BaseModel) -> Dict[str, Dict[str, Any]]:
    """Marshal a model into DynamoDB attribute values."""
    data = model.model_dump()
    # the serializer refuses float, numbers travel as Decimal
    for key, value in data.items():
        if isinstance(value, float):
            data[key] = Decimal(str(value))
    return {key: _serializer.serialize(value) for key, value in data.items()}


def _from_item(item: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    """Unmarshal DynamoDB attribute values into plain Python values."""
    return {key: _deserializer.deserialize(value) for key, value in item.items()}


class DynamoDBRepository:
    """Repository over the orders and order items DynamoDB tables."""

    def __init__(
        self,
        client,
        orders_table: str,
        order_items_table: str,
        delete_concurrency: int = ORDER_ITEM_DELETE_CONCURRENCY,
    ) -> None:
        """
        Initialize the repository.

        Args:
            client: Shared boto3 DynamoDB client
            orders_table: Name of the orders table
            order_items_table: Name of the order items table
            delete_concurrency: Bound on concurrent item deletes in the cascade
        """
        self.client = client
        self.orders_table = orders_table
        self.order_items_table = order_items_table
        self.delete_concurrency = delete_concurrency

        logger.debug("DynamoDB repository initialized", extra={
            "orders_table": orders_table,
            "order_items_table": order_items_table,
        })

    # Orders

    @tracer.capture_method
    def create_order(self, order: Order) -> None:
        """
        Store a new order.

        Raises:
            ClientError: ConditionalCheckFailedException if the id already exists
        """
        self.client.put_item(
            TableName=self.orders_table,
            Item=_to_item(order),
            ConditionExpression='attribute_not_exists(id)',
        )
        logger.debug("Order stored", extra={"order_id": order.id})

    @tracer.capture_method
    def get_order(self, order_id: str) -> Optional[Order]:
        """Retrieve an order, None if absent."""
        response = self.client.get_item(
            TableName=self.orders_table,
            Key={'id': {'S': order_id}},
        )
        item = response.get('Item')
        if item is None:
            return None
        return Order.model_validate(_from_item(item))

    @tracer.capture_method
    def list_orders(self) -> List[Order]:
        """List orders from the first scan page."""
        response = self.client.scan(TableName=self.orders_table)
        return [Order.model_validate(_from_item(item)) for item in response.get('Items', [])]

    @tracer.capture_method
    def update_order(self, order: Order) -> None:
        """Overwrite an order unconditionally."""
        self.client.put_item(TableName=self.orders_table, Item=_to_item(order))

    @tracer.capture_method
    def delete_order(self, order_id: str, is_cancelled: Optional[Callable[[], bool]] = None) -> None:
        """
        Delete an order and all of its items.

        Items are deleted concurrently, at most ``delete_concurrency`` at a time. If any
        item delete fails the first failure is raised and the order row is left in place,
        so the whole operation can be retried. Not atomic across items.

        Args:
            order_id: Order identifier
            is_cancelled: Optional check that stops item deletes from starting
        """
        items = self.list_order_items(order_id)

        deleted = run_bounded(
            (item.id for item in items),
            lambda item_id: self.delete_order_item(order_id, item_id),
            max_in_flight=self.delete_concurrency,
            is_cancelled=is_cancelled,
        )
        if deleted:
            metrics.add_metric(name="OrderItemsCascadeDeleted", unit=MetricUnit.Count, value=deleted)

        self.client.delete_item(
            TableName=self.orders_table,
            Key={'id': {'S': order_id}},
        )
        logger.info("Order deleted", extra={"order_id": order_id, "items_deleted": deleted})

    # Order items

    @tracer.capture_method
    def create_order_item(self, item: OrderItem) -> None:
        """
        Store a new order item.

        Raises:
            ClientError: ConditionalCheckFailedException if the key already exists
        """
        self.client.put_item(
            TableName=self.order_items_table,
            Item=_to_item(item),
            ConditionExpression='attribute_not_exists(order_id) AND attribute_not_exists(id)',
        )
        logger.debug("Order item stored", extra={"order_id": item.order_id, "item_id": item.id})

    @tracer.capture_method
    def get_order_item(self, order_id: str, item_id: str) -> Optional[OrderItem]:
        """Retrieve an order item, None if absent."""
        response = self.client.get_item(
            TableName=self.order_items_table,
            Key={'order_id': {'S': order_id}, 'id': {'S': item_id}},
        )
        item = response.get('Item')
        if item is None:
            return None
        return OrderItem.model_validate(_from_item(item))

    @tracer.capture_method
    def list_order_items(self, order_id: str) -> List[OrderItem]:
        """List the items of an order from the first query page."""
        response = self.client.query(
            TableName=self.order_items_table,
            KeyConditionExpression='order_id = :order_id',
            ExpressionAttributeValues={':order_id': {'S': order_id}},
        )
        return [OrderItem.model_validate(_from_item(item)) for item in response.get('Items', [])]

    @tracer.capture_method
    def update_order_item(self, item: OrderItem) -> None:
        """Overwrite an order item unconditionally."""
        self.client.put_item(TableName=self.order_items_table, Item=_to_item(item))

    # not traced: also runs on cascade worker threads, outside the X-Ray segment
    def delete_order_item(self, order_id: str, item_id: str) -> None:
        """Delete an order item; deleting an absent key succeeds."""
        self.client.delete_item(
            TableName=self.order_items_table,
            Key={'order_id': {'S': order_id}, 'id': {'S': item_id}},
        )
