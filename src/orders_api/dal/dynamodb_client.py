"""
DynamoDB client factory.

The low-level client is thread safe, so one instance is built during startup and
shared by every request and by the cascade delete workers.
"""

from typing import Optional

import boto3

from orders_api.handlers.utils.observability import logger


def create_dynamodb_client(region_name: str, endpoint_url: Optional[str] = None):
    """
    Create the DynamoDB client used by the repository.

    Args:
        region_name: AWS region of the tables
        endpoint_url: Optional endpoint override (DynamoDB Local, moto server, ...)

    Returns:
        A boto3 DynamoDB client
    """
    client_kwargs = {'region_name': region_name}
    if endpoint_url:
        client_kwargs['endpoint_url'] = endpoint_url

    client = boto3.client('dynamodb', **client_kwargs)

    logger.info("DynamoDB client initialized", extra={
        "region_name": region_name,
        "endpoint_url": endpoint_url,
    })
    return client
