"""
Integration tests for the Data Access Layer (DAL).

This module tests the DynamoDB repository against in-memory tables (mocked with
moto), including the cascading order delete.
"""

import threading
from unittest.mock import patch

import pytest
from botocore.exceptions import ClientError

from orders_api.dal import OrdersRepository
from orders_api.dal.cascade import CascadeCancelledError
from orders_api.dal.dynamodb_handler import DynamoDBRepository
from orders_api.models.order import Order, OrderItem


def new_item(order_id, product_name="Keyboard", quantity=2, price=99.99):
    return OrderItem.create(order_id=order_id, product_name=product_name, quantity=quantity, price=price)


@pytest.mark.integration
class TestOrders:
    """Integration tests for order rows."""

    def test_repository_satisfies_protocol(self, repository):
        assert isinstance(repository, OrdersRepository)

    def test_create_and_get(self, repository):
        order = Order.create(customer_name="Alice")

        repository.create_order(order)

        assert repository.get_order(order.id) == order

    def test_get_missing(self, repository):
        assert repository.get_order("missing") is None

    def test_create_duplicate_id(self, repository):
        order = Order.create(customer_name="Alice")
        repository.create_order(order)

        with pytest.raises(ClientError) as exc_info:
            repository.create_order(order)

        assert exc_info.value.response["Error"]["Code"] == "ConditionalCheckFailedException"

    def test_list(self, repository):
        orders = [Order.create(customer_name=name) for name in ("Alice", "Bob", "Carol")]
        for order in orders:
            repository.create_order(order)

        listed = repository.list_orders()

        assert sorted(order.id for order in listed) == sorted(order.id for order in orders)

    def test_list_empty(self, repository):
        assert repository.list_orders() == []

    def test_update_overwrites(self, repository):
        order = Order.create(customer_name="Alice")
        repository.create_order(order)

        order.apply_update(status="shipped")
        repository.update_order(order)

        stored = repository.get_order(order.id)
        assert stored.status == "shipped"
        assert stored.created_at == order.created_at
        assert stored.updated_at == order.updated_at

    def test_delete_missing_order_succeeds(self, repository):
        repository.delete_order("missing")

        assert repository.get_order("missing") is None


@pytest.mark.integration
class TestOrderItems:
    """Integration tests for order item rows."""

    def test_create_and_get_round_trips_numbers(self, repository):
        item = new_item("order-1", quantity=3, price=19.99)

        repository.create_order_item(item)
        stored = repository.get_order_item("order-1", item.id)

        assert stored == item
        assert isinstance(stored.quantity, int)
        assert stored.price == 19.99

    def test_zero_price(self, repository):
        item = new_item("order-1", price=0)
        repository.create_order_item(item)

        assert repository.get_order_item("order-1", item.id).price == 0

    def test_get_scoped_to_order(self, repository):
        item = new_item("order-1")
        repository.create_order_item(item)

        assert repository.get_order_item("order-2", item.id) is None

    def test_create_duplicate_key(self, repository):
        item = new_item("order-1")
        repository.create_order_item(item)

        with pytest.raises(ClientError) as exc_info:
            repository.create_order_item(item)

        assert exc_info.value.response["Error"]["Code"] == "ConditionalCheckFailedException"

    def test_list_scoped_to_order(self, repository):
        first = [new_item("order-1", product_name=f"p{i}") for i in range(3)]
        for item in first + [new_item("order-2")]:
            repository.create_order_item(item)

        listed = repository.list_order_items("order-1")

        assert sorted(item.id for item in listed) == sorted(item.id for item in first)
        assert all(item.order_id == "order-1" for item in listed)

    def test_update_overwrites(self, repository):
        item = new_item("order-1")
        repository.create_order_item(item)

        item.apply_update(quantity=7)
        repository.update_order_item(item)

        assert repository.get_order_item("order-1", item.id).quantity == 7

    def test_delete_is_idempotent(self, repository):
        item = new_item("order-1")
        repository.create_order_item(item)

        repository.delete_order_item("order-1", item.id)
        repository.delete_order_item("order-1", item.id)

        assert repository.get_order_item("order-1", item.id) is None


@pytest.mark.integration
class TestCascadeDelete:
    """Integration tests for deleting an order together with its items."""

    @pytest.fixture
    def order_with_items(self, repository):
        order = Order.create(customer_name="Alice")
        repository.create_order(order)
        items = [new_item(order.id, product_name=f"product-{i}") for i in range(12)]
        for item in items:
            repository.create_order_item(item)
        return order, items

    def test_deletes_order_and_items(self, repository, order_with_items):
        order, _ = order_with_items
        other = new_item("other-order")
        repository.create_order_item(other)

        repository.delete_order(order.id)

        assert repository.get_order(order.id) is None
        assert repository.list_order_items(order.id) == []
        assert repository.get_order_item("other-order", other.id) == other

    def test_concurrency_is_bounded(self, dynamodb_client, repository, order_with_items):
        order, items = order_with_items
        bounded = DynamoDBRepository(
            dynamodb_client,
            orders_table=repository.orders_table,
            order_items_table=repository.order_items_table,
            delete_concurrency=2,
        )
        real_delete = DynamoDBRepository.delete_order_item
        lock = threading.Lock()
        active = 0
        peak = 0

        def tracking_delete(self, order_id, item_id):
            nonlocal active, peak
            with lock:
                active += 1
                peak = max(peak, active)
            try:
                real_delete(self, order_id, item_id)
            finally:
                with lock:
                    active -= 1

        with patch.object(DynamoDBRepository, "delete_order_item", tracking_delete):
            bounded.delete_order(order.id)

        assert peak <= 2
        assert repository.list_order_items(order.id) == []

    def test_item_failure_keeps_order(self, repository, order_with_items):
        order, items = order_with_items
        failing_id = items[3].id
        real_delete = DynamoDBRepository.delete_order_item
        error = ClientError({"Error": {"Code": "InternalServerError", "Message": "item delete failed"}}, "DeleteItem")

        def flaky_delete(self, order_id, item_id):
            if item_id == failing_id:
                raise error
            real_delete(self, order_id, item_id)

        with patch.object(DynamoDBRepository, "delete_order_item", flaky_delete):
            with pytest.raises(ClientError) as exc_info:
                repository.delete_order(order.id)

        assert exc_info.value is error
        assert repository.get_order(order.id) == order
        assert [item.id for item in repository.list_order_items(order.id)] == [failing_id]

        # retrying completes the delete
        repository.delete_order(order.id)
        assert repository.get_order(order.id) is None

    def test_cancelled_cascade_keeps_order(self, repository, order_with_items):
        order, items = order_with_items

        with pytest.raises(CascadeCancelledError):
            repository.delete_order(order.id, is_cancelled=lambda: True)

        assert repository.get_order(order.id) == order
        assert len(repository.list_order_items(order.id)) == len(items)
