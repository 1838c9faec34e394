"""
HTTP Handlers Module.

This module contains the handler layer of the orders API:

1. Handler Layer (this module): request parsing, routing and response shaping
2. Logic Layer: ids, timestamps, defaults and patch semantics
3. Data Access Layer: DynamoDB persistence

Both transports go through the same resolver:
- Lambda proxy events from API Gateway (``orders_api.main.lambda_handler``)
- HTTP requests to the local listener (``handlers.local_server``)
"""

from orders_api.handlers.utils.observability import logger, metrics, tracer

__all__ = [
    "logger",
    "tracer",
    "metrics",
]
