"""
Order Items Handler - HTTP routes for the items of an order.
"""

from http import HTTPStatus
from typing import List

from aws_lambda_powertools.event_handler import APIGatewayRestResolver, Response

from orders_api.handlers.utils.errors import json_response, no_content
from orders_api.handlers.utils.observability import logger, tracer
from orders_api.handlers.utils.rest_api_resolver import (
    ORDER_ITEM_PATH,
    ORDER_ITEMS_PATH,
    ORDER_ITEMS_TAG,
    parse_body,
)
from orders_api.logic.order_service import OrderService
from orders_api.models.input import CreateOrderItemRequest, UpdateOrderItemRequest
from orders_api.models.order import OrderItem


def register_order_item_routes(app: APIGatewayRestResolver, service: OrderService) -> None:
    """Bind the order item routes of the static route table to ``app``."""

    @app.get(ORDER_ITEMS_PATH, tags=[ORDER_ITEMS_TAG.name])
    @tracer.capture_method
    def list_order_items(order_id: str) -> Response[List[OrderItem]]:
        items = service.list_order_items(order_id)
        logger.debug("Order items listed", extra={"order_id": order_id, "items_count": len(items)})
        return json_response(HTTPStatus.OK, [item.model_dump() for item in items])

    @app.post(ORDER_ITEMS_PATH, tags=[ORDER_ITEMS_TAG.name])
    @tracer.capture_method
    def create_order_item(order_id: str) -> Response[OrderItem]:
        """
        Add an item to an order.

        A missing order is a bad request here (400), checked before the body is read.
        """
        tracer.put_annotation("order_id", order_id)
        service.ensure_order_exists(order_id)
        request = parse_body(app.current_event, CreateOrderItemRequest)
        item = service.create_order_item(order_id, request)
        return json_response(HTTPStatus.CREATED, item.model_dump())

    @app.get(ORDER_ITEM_PATH, tags=[ORDER_ITEMS_TAG.name])
    @tracer.capture_method
    def get_order_item(order_id: str, item_id: str) -> Response[OrderItem]:
        item = service.get_order_item(order_id, item_id)
        return json_response(HTTPStatus.OK, item.model_dump())

    @app.put(ORDER_ITEM_PATH, tags=[ORDER_ITEMS_TAG.name])
    @tracer.capture_method
    def update_order_item(order_id: str, item_id: str) -> Response[OrderItem]:
        item = service.get_order_item(order_id, item_id)
        request = parse_body(app.current_event, UpdateOrderItemRequest)
        item = service.update_order_item(item, request)
        return json_response(HTTPStatus.OK, item.model_dump())

    @app.delete(ORDER_ITEM_PATH, tags=[ORDER_ITEMS_TAG.name])
    @tracer.capture_method
    def delete_order_item(order_id: str, item_id: str) -> Response[None]:
        service.delete_order_item(order_id, item_id)
        return no_content()
