"""
Entry point of the orders API.

Startup wiring builds configuration -> DynamoDB client -> repository -> resolver once
per process. The resolver is then served either by the Lambda runtime through
``lambda_handler`` (hosted mode) or by a local HTTP listener (``APP_ENV=local``).
"""

import sys
from functools import lru_cache
from typing import Any, Dict

from aws_lambda_powertools.event_handler import APIGatewayRestResolver
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext
from dotenv import load_dotenv

from orders_api.dal import get_repository
from orders_api.dal.dynamodb_client import create_dynamodb_client
from orders_api.handlers.api import create_app
from orders_api.handlers.local_server import serve
from orders_api.handlers.models.env_vars import OrdersEnvVars, get_handler_env_vars
from orders_api.handlers.utils.observability import logger, metrics, tracer


def build_app(env_vars: OrdersEnvVars) -> APIGatewayRestResolver:
    """
    Wire the dependency chain for one process.

    Args:
        env_vars: Validated configuration

    Returns:
        Resolver serving the orders API
    """
    client = create_dynamodb_client(env_vars.AWS_REGION, endpoint_url=env_vars.DYNAMODB_ENDPOINT)
    repository = get_repository(
        client,
        orders_table=env_vars.TABLE_ORDERS,
        order_items_table=env_vars.TABLE_ORDER_ITEMS,
    )
    return create_app(repository)


@lru_cache(maxsize=1)
def get_app() -> APIGatewayRestResolver:
    """Resolver for the hosted mode, built on the first invocation and reused afterwards."""
    return build_app(get_handler_env_vars())


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Lambda function entry point for API Gateway proxy events.

    Args:
        event: API Gateway REST proxy event
        context: Lambda context object

    Returns:
        API Gateway proxy result
    """
    return get_app().resolve(event, context)


def main() -> None:
    """Console entry point: serve locally when ``APP_ENV`` is ``local``."""
    # .env is a local convenience only, a missing file is fine
    load_dotenv()
    env_vars = get_handler_env_vars()

    if not env_vars.is_local:
        logger.error("Hosted mode has no listener to start", extra={"app_env": env_vars.APP_ENV})
        sys.exit(
            f'APP_ENV={env_vars.APP_ENV!r} selects the hosted mode: configure '
            'orders_api.main.lambda_handler as the Lambda function handler'
        )

    serve(build_app(env_vars), port=env_vars.APP_PORT)


if __name__ == '__main__':
    main()
