"""
Output models for API responses using Pydantic.

Successful responses serialize the domain models from ``order.py`` directly;
every failure uses ``ErrorOutput``.
"""

from typing import Annotated

from pydantic import BaseModel, Field


class ErrorOutput(BaseModel):
    """Response body for every 4xx and 5xx answer."""

    error: Annotated[str, Field(
        description='Human readable error message',
        examples=['order not found', 'quantity must be >= 1']
    )]
