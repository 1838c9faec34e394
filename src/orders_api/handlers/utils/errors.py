"""
Error handling utilities for the orders API.

Service errors carry the HTTP status they map to. ``register_error_handlers`` installs
resolver-level handlers that turn service errors, store errors and anything unexpected
into ``{"error": "<message>"}`` JSON responses.
"""

import json
from http import HTTPStatus
from typing import Any, List

from aws_lambda_powertools.event_handler import APIGatewayRestResolver, Response, content_types
from aws_lambda_powertools.event_handler.exceptions import NotFoundError
from aws_lambda_powertools.metrics import MetricUnit
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError as PydanticValidationError

from orders_api.handlers.utils.observability import logger, metrics
from orders_api.models.output import ErrorOutput


class ServiceError(Exception):
    """Base exception class for errors that map to a client-facing status."""

    status_code: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RequestValidationError(ServiceError):
    """Raised when a request body is missing, malformed or breaks a field rule."""

    status_code = HTTPStatus.BAD_REQUEST

    @classmethod
    def from_pydantic(cls, error: PydanticValidationError) -> 'RequestValidationError':
        """Summarize pydantic field errors into one message."""
        messages: List[str] = []
        for detail in error.errors():
            location = '.'.join(str(part) for part in detail['loc'])
            text = detail['msg'].removeprefix('Value error, ')
            messages.append(f'{location}: {text}' if location else text)
        return cls('; '.join(messages))


class ResourceNotFoundError(ServiceError):
    """Raised when a requested order or item does not exist."""

    status_code = HTTPStatus.NOT_FOUND

    def __init__(self, resource_type: str):
        super().__init__(f'{resource_type} not found')
        self.resource_type = resource_type


class OrderDoesNotExistError(ServiceError):
    """Raised when an item is created under a missing order; a bad request, not a 404."""

    status_code = HTTPStatus.BAD_REQUEST

    def __init__(self, order_id: str):
        super().__init__('order does not exist')
        self.order_id = order_id


def json_response(status_code: HTTPStatus, body: Any) -> Response:
    """Create an API Gateway response with a JSON body."""
    return Response(
        status_code=status_code.value,
        content_type=content_types.APPLICATION_JSON,
        body=json.dumps(body),
    )


def no_content() -> Response:
    return Response(status_code=HTTPStatus.NO_CONTENT.value, body='')


def error_response(status_code: HTTPStatus, message: str) -> Response:
    return Response(
        status_code=status_code.value,
        content_type=content_types.APPLICATION_JSON,
        body=ErrorOutput(error=message).model_dump_json(),
    )


def register_error_handlers(app: APIGatewayRestResolver) -> None:
    """Install the exception and not-found handlers on the resolver."""

    @app.exception_handler(ServiceError)
    def handle_service_error(ex: ServiceError) -> Response:
        logger.info("Request rejected", extra={
            "status_code": ex.status_code.value,
            "error": ex.message,
            "path": app.current_event.path,
        })
        return error_response(ex.status_code, ex.message)

    @app.exception_handler([ClientError, BotoCoreError])
    def handle_store_error(ex: Exception) -> Response:
        logger.exception("DynamoDB operation failed", extra={
            "error": str(ex),
            "path": app.current_event.path,
        })
        metrics.add_metric(name="StoreError", unit=MetricUnit.Count, value=1)
        return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, str(ex))

    @app.exception_handler(Exception)
    def handle_unexpected_error(ex: Exception) -> Response:
        logger.exception("Unexpected error in handler", extra={
            "error": str(ex),
            "path": app.current_event.path,
        })
        metrics.add_metric(name="UnexpectedError", unit=MetricUnit.Count, value=1)
        return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, str(ex) or 'internal server error')

    @app.not_found
    def handle_not_found(ex: NotFoundError) -> Response:
        return error_response(HTTPStatus.NOT_FOUND, 'not found')
