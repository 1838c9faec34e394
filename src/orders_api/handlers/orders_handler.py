"""
Orders Handler - HTTP routes for order management.

This module implements the handler layer for orders: it reads path parameters and
bodies from the current API Gateway event, calls the order service and shapes the
HTTP response. Errors raised here or below are rendered by the resolver's
exception handlers.
"""

from http import HTTPStatus
from typing import List

from aws_lambda_powertools.event_handler import APIGatewayRestResolver, Response

from orders_api.dal.cascade import deadline_check
from orders_api.handlers.utils.errors import json_response, no_content
from orders_api.handlers.utils.observability import logger, tracer
from orders_api.handlers.utils.rest_api_resolver import ORDER_PATH, ORDERS_PATH, ORDERS_TAG, parse_body
from orders_api.logic.order_service import OrderService
from orders_api.models.input import CreateOrderRequest, UpdateOrderRequest
from orders_api.models.order import Order


def register_order_routes(app: APIGatewayRestResolver, service: OrderService) -> None:
    """Bind the order routes of the static route table to ``app``."""

    @app.get(ORDERS_PATH, tags=[ORDERS_TAG.name])
    @tracer.capture_method
    def list_orders() -> Response[List[Order]]:
        orders = service.list_orders()
        logger.debug("Orders listed", extra={"orders_count": len(orders)})
        return json_response(HTTPStatus.OK, [order.model_dump() for order in orders])

    @app.post(ORDERS_PATH, tags=[ORDERS_TAG.name])
    @tracer.capture_method
    def create_order() -> Response[Order]:
        """Create a new order from ``customer_name`` and an optional ``status``."""
        request = parse_body(app.current_event, CreateOrderRequest)
        order = service.create_order(request)
        return json_response(HTTPStatus.CREATED, order.model_dump())

    @app.get(ORDER_PATH, tags=[ORDERS_TAG.name])
    @tracer.capture_method
    def get_order(order_id: str) -> Response[Order]:
        tracer.put_annotation("order_id", order_id)
        order = service.get_order(order_id)
        return json_response(HTTPStatus.OK, order.model_dump())

    @app.put(ORDER_PATH, tags=[ORDERS_TAG.name])
    @tracer.capture_method
    def update_order(order_id: str) -> Response[Order]:
        """
        Patch an order.

        The order is looked up before the body is read, so a missing order answers 404
        even when the body is malformed.
        """
        tracer.put_annotation("order_id", order_id)
        order = service.get_order(order_id)
        request = parse_body(app.current_event, UpdateOrderRequest)
        order = service.update_order(order, request)
        return json_response(HTTPStatus.OK, order.model_dump())

    @app.delete(ORDER_PATH, tags=[ORDERS_TAG.name])
    @tracer.capture_method
    def delete_order(order_id: str) -> Response[None]:
        """Delete an order after its items; the cascade stops starting deletes near the invocation deadline."""
        tracer.put_annotation("order_id", order_id)
        service.delete_order(order_id, is_cancelled=deadline_check(app.lambda_context))
        return no_content()
