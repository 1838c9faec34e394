"""
Router for the orders API.

``create_app`` wires a repository into a resolver carrying the static route table:

    GET    /orders
    POST   /orders
    GET    /orders/{orderId}
    PUT    /orders/{orderId}
    DELETE /orders/{orderId}
    GET    /orders/{orderId}/items
    POST   /orders/{orderId}/items
    GET    /orders/{orderId}/items/{itemId}
    PUT    /orders/{orderId}/items/{itemId}
    DELETE /orders/{orderId}/items/{itemId}

plus Swagger UI at ``GET /swagger``. The same resolver serves Lambda proxy events
and the local listener.
"""

from aws_lambda_powertools.event_handler import APIGatewayRestResolver

from orders_api.dal import OrdersRepository
from orders_api.handlers.order_items_handler import register_order_item_routes
from orders_api.handlers.orders_handler import register_order_routes
from orders_api.handlers.utils.errors import register_error_handlers
from orders_api.handlers.utils.rest_api_resolver import new_resolver
from orders_api.logic.order_service import OrderService


def create_app(repository: OrdersRepository) -> APIGatewayRestResolver:
    """
    Build the resolver for one process.

    Args:
        repository: Data access layer shared by every request

    Returns:
        Resolver with routes and error handlers registered
    """
    app = new_resolver()
    service = OrderService(repository)

    register_order_routes(app, service)
    register_order_item_routes(app, service)
    register_error_handlers(app)
    return app
