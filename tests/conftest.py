"""
Pytest configuration and shared fixtures for the orders API.

This module provides the in-memory DynamoDB tables, the API Gateway event builder
and the Lambda context used across unit and integration tests.
"""

import json
import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

import boto3
import pytest
from moto import mock_aws

# Test environment configuration, set before the service modules create their
# Powertools and boto3 objects
os.environ.update({
    "AWS_DEFAULT_REGION": "us-east-1",
    "AWS_ACCESS_KEY_ID": "testing",
    "AWS_SECRET_ACCESS_KEY": "testing",
    "AWS_SECURITY_TOKEN": "testing",
    "AWS_SESSION_TOKEN": "testing",
    "POWERTOOLS_SERVICE_NAME": "test-orders-api",
    "POWERTOOLS_METRICS_NAMESPACE": "TestOrdersApi",
    "POWERTOOLS_TRACE_DISABLED": "true",  # Disable X-Ray in tests
    "POWERTOOLS_LOG_LEVEL": "DEBUG",
})

from orders_api.dal.dynamodb_handler import DynamoDBRepository  # noqa: E402
from orders_api.handlers.api import create_app  # noqa: E402

ORDERS_TABLE = "test-orders"
ORDER_ITEMS_TABLE = "test-order-items"


def create_tables(client) -> None:
    """Create both tables with the key schemas the service expects."""
    client.create_table(
        TableName=ORDERS_TABLE,
        KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
        BillingMode="PAY_PER_REQUEST",
    )
    client.create_table(
        TableName=ORDER_ITEMS_TABLE,
        KeySchema=[
            {"AttributeName": "order_id", "KeyType": "HASH"},
            {"AttributeName": "id", "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": "order_id", "AttributeType": "S"},
            {"AttributeName": "id", "AttributeType": "S"},
        ],
        BillingMode="PAY_PER_REQUEST",
    )


def build_event(
    method: str,
    path: str,
    body: Any = None,
    raw_body: Optional[str] = None,
    query: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """Create an API Gateway REST proxy event; ``body`` is JSON encoded, ``raw_body`` is sent as is."""
    if raw_body is None and body is not None:
        raw_body = json.dumps(body)

    return {
        "resource": path,
        "path": path,
        "httpMethod": method,
        "headers": {
            "Content-Type": "application/json",
            "User-Agent": "test-agent/1.0",
        },
        "multiValueHeaders": {
            "Content-Type": ["application/json"],
            "User-Agent": ["test-agent/1.0"],
        },
        "queryStringParameters": query,
        "multiValueQueryStringParameters": {name: [value] for name, value in query.items()} if query else None,
        "pathParameters": None,
        "stageVariables": None,
        "body": raw_body,
        "isBase64Encoded": False,
        "requestContext": {
            "requestId": "test-request-id-123",
            "accountId": "123456789012",
            "stage": "test",
            "httpMethod": method,
            "path": path,
            "resourcePath": path,
            "protocol": "HTTP/1.1",
            "identity": {
                "sourceIp": "127.0.0.1",
                "userAgent": "test-agent/1.0",
            },
        },
    }


@dataclass
class FakeLambdaContext:
    function_name: str = "test-orders-api"
    memory_limit_in_mb: int = 512
    invoked_function_arn: str = "arn:aws:lambda:us-east-1:123456789012:function:test-orders-api"
    aws_request_id: str = "test-request-id-123"
    remaining_time_in_millis: int = 30000

    def get_remaining_time_in_millis(self) -> int:
        return self.remaining_time_in_millis


# DynamoDB fixtures
@pytest.fixture
def dynamodb_client():
    """Create in-memory DynamoDB tables for testing."""
    with mock_aws():
        client = boto3.client("dynamodb", region_name="us-east-1")
        create_tables(client)
        yield client


@pytest.fixture
def repository(dynamodb_client) -> DynamoDBRepository:
    return DynamoDBRepository(dynamodb_client, orders_table=ORDERS_TABLE, order_items_table=ORDER_ITEMS_TABLE)


@pytest.fixture
def app(repository):
    return create_app(repository)


@pytest.fixture
def lambda_context() -> FakeLambdaContext:
    """Create a Lambda context for testing."""
    return FakeLambdaContext()


ApiCall = Callable[..., Tuple[int, Any]]


@pytest.fixture
def resolve_request() -> Callable[..., Tuple[int, Any]]:
    """Send one request through a resolver, returning the status code and decoded JSON body."""

    def _resolve(app, method: str, path: str, body: Any = None, raw_body: Optional[str] = None, context=None):
        response = app.resolve(build_event(method, path, body=body, raw_body=raw_body), context)
        payload = json.loads(response["body"]) if response.get("body") else None
        return response["statusCode"], payload

    return _resolve


@pytest.fixture
def call_api(app, resolve_request) -> ApiCall:
    """Send one request to the API backed by the in-memory tables."""

    def _call(method: str, path: str, body: Any = None, raw_body: Optional[str] = None):
        return resolve_request(app, method, path, body=body, raw_body=raw_body)

    return _call


@pytest.fixture
def make_event() -> Callable[..., Dict[str, Any]]:
    """Expose the API Gateway event builder to tests."""
    return build_event


# Pytest configuration
def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
