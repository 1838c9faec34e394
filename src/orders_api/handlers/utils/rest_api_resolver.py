"""
REST API resolver utilities for the orders API.

Path templates of the static route table, the resolver factory with its Swagger UI,
and request body parsing shared by the order and order item handlers.
"""

import json
from typing import Type, TypeVar

from aws_lambda_powertools.event_handler import APIGatewayRestResolver
from aws_lambda_powertools.event_handler.openapi.models import Tag
from aws_lambda_powertools.utilities.data_classes.common import BaseProxyEvent
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from orders_api import __version__
from orders_api.handlers.utils.errors import RequestValidationError

# API path templates
ORDERS_PATH = '/orders'
ORDER_PATH = '/orders/<order_id>'
ORDER_ITEMS_PATH = '/orders/<order_id>/items'
ORDER_ITEM_PATH = '/orders/<order_id>/items/<item_id>'
SWAGGER_PATH = '/swagger'

# OpenAPI tags for documentation
ORDERS_TAG = Tag(name='Orders', description='Order management operations')
ORDER_ITEMS_TAG = Tag(name='Order items', description='Line items of an order')

RequestT = TypeVar('RequestT', bound=BaseModel)


def new_resolver() -> APIGatewayRestResolver:
    """
    Create the API Gateway REST resolver with Swagger UI at ``/swagger``.

    Body validation is done by the handlers so that every rejected body answers 400
    with the ``{"error": ...}`` shape rather than the resolver's 422.
    ``GET /swagger?format=json`` returns the OpenAPI document.
    """
    app = APIGatewayRestResolver(enable_validation=False, debug=False)
    app.enable_swagger(
        path=SWAGGER_PATH,
        title='Orders API',
        version=__version__,
        description='CRUD API for orders and their items stored in DynamoDB',
        tags=[ORDERS_TAG, ORDER_ITEMS_TAG],
    )
    return app


def parse_body(event: BaseProxyEvent, model: Type[RequestT]) -> RequestT:
    """
    Decode and validate a JSON request body.

    Args:
        event: Current API Gateway proxy event
        model: Pydantic model describing the body

    Returns:
        Validated request model

    Raises:
        RequestValidationError: On a missing body, invalid JSON or a field rule violation
    """
    raw_body = event.decoded_body
    if not raw_body:
        raise RequestValidationError('request body is required')

    try:
        payload = json.loads(raw_body)
    except json.JSONDecodeError as e:
        raise RequestValidationError(f'invalid JSON body: {e.msg}') from e

    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        raise RequestValidationError.from_pydantic(e) from e
