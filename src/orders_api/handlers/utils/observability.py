"""
Centralized observability utilities for the orders API.

Configured instances of AWS Lambda Powertools for logging, tracing and metrics,
shared by both the Lambda entry point and the local listener.
"""

from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.metrics import Metrics
from aws_lambda_powertools.tracing import Tracer

# Order and item counters, plus store and unexpected error counts
METRICS_NAMESPACE = 'OrdersApi'

# Structured JSON logs; set POWERTOOLS_LOG_LEVEL=DEBUG to see repository calls
logger: Logger = Logger()

# X-Ray segments are only emitted inside Lambda; POWERTOOLS_TRACE_DISABLED turns them off
tracer: Tracer = Tracer()

# Flushed by lambda_handler; POWERTOOLS_METRICS_NAMESPACE overrides the namespace
metrics = Metrics(namespace=METRICS_NAMESPACE)
