"""
Environment variable models for type-safe configuration.

This module defines the Pydantic model for the environment variables the orders API
reads at startup, in both the Lambda and the local listener run modes.
"""

from typing import Annotated, Any, Optional

from aws_lambda_env_modeler import get_environment_variables
from pydantic import BaseModel, Field, ValidationInfo, field_validator

LOCAL_ENVIRONMENT = 'local'


class OrdersEnvVars(BaseModel):
    """Environment variables for the orders API."""

    # Port of the local HTTP listener
    APP_PORT: Annotated[int, Field(
        default=8080,
        description='Listen port when running in local mode',
        ge=1,
        le=65535
    )] = 8080

    # AWS region of the DynamoDB tables
    AWS_REGION: Annotated[str, Field(
        default='us-east-1',
        description='AWS region for the DynamoDB client'
    )] = 'us-east-1'

    # Endpoint override, e.g. DynamoDB Local
    DYNAMODB_ENDPOINT: Annotated[Optional[str], Field(
        default=None,
        description='DynamoDB endpoint URL override, empty for the managed endpoint'
    )] = None

    TABLE_ORDERS: Annotated[str, Field(
        default='orders',
        description='DynamoDB table holding orders (hash key: id)',
        min_length=1
    )] = 'orders'

    TABLE_ORDER_ITEMS: Annotated[str, Field(
        default='order_items',
        description='DynamoDB table holding order items (hash key: order_id, range key: id)',
        min_length=1
    )] = 'order_items'

    # "local" runs the HTTP listener, anything else is the hosted Lambda mode
    APP_ENV: Annotated[str, Field(
        default=LOCAL_ENVIRONMENT,
        description='Run mode selector'
    )] = LOCAL_ENVIRONMENT

    @field_validator('APP_PORT', 'AWS_REGION', 'TABLE_ORDERS', 'TABLE_ORDER_ITEMS', 'APP_ENV', mode='before')
    @classmethod
    def blank_means_default(cls, value: Any, info: ValidationInfo) -> Any:
        """Treat a blank variable the same as an unset one."""
        if isinstance(value, str) and not value.strip():
            return cls.model_fields[info.field_name].default
        return value

    @field_validator('DYNAMODB_ENDPOINT', mode='before')
    @classmethod
    def blank_endpoint_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def is_local(self) -> bool:
        """Check if the service should bind a local listener."""
        return self.APP_ENV == LOCAL_ENVIRONMENT


def get_handler_env_vars() -> OrdersEnvVars:
    """
    Get typed environment variables for the orders API.

    The result is cached per process by aws_lambda_env_modeler.

    Returns:
        Validated environment variables model instance
    """
    return get_environment_variables(model=OrdersEnvVars)
