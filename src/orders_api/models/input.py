"""
Input models for request validation using Pydantic.

This module defines the request bodies accepted by the orders API. Unknown fields
are ignored; fields sent as null count as not supplied.
"""

from typing import Annotated

from pydantic import BaseModel, Field, field_validator


# Largest signed 64-bit integer
QUANTITY_MAX = 2**63 - 1

# Range of a non-zero DynamoDB number
PRICE_MIN_POSITIVE = 1e-130
PRICE_LIMIT = 1e126


def _check_quantity(v: int) -> int:
    if v < 1:
        raise ValueError('quantity must be >= 1')
    if v > QUANTITY_MAX:
        raise ValueError(f'quantity must be <= {QUANTITY_MAX}')
    return v


def _check_price(v: float) -> float:
    if not v >= 0:
        raise ValueError('price must be >= 0')
    if v >= PRICE_LIMIT:
        raise ValueError('price must be < 1E+126')
    if 0 < v < PRICE_MIN_POSITIVE:
        raise ValueError('price must be 0 or >= 1E-130')
    return v


class CreateOrderRequest(BaseModel):
    """Request model for creating a new order."""

    customer_name: Annotated[str, Field(
        min_length=1,
        description='Customer name for the order',
        examples=['Alice']
    )]

    status: Annotated[str | None, Field(
        default=None,
        description='Initial status, defaults to "new"',
        examples=['new', 'shipped']
    )] = None


class UpdateOrderRequest(BaseModel):
    """Request model for patching an existing order."""

    customer_name: Annotated[str | None, Field(
        default=None,
        min_length=1,
        description='Updated customer name'
    )] = None

    status: Annotated[str | None, Field(
        default=None,
        description='Updated status'
    )] = None


class CreateOrderItemRequest(BaseModel):
    """Request model for adding an item to an order."""

    product_name: Annotated[str, Field(
        min_length=1,
        description='Name of the ordered product',
        examples=['Keyboard']
    )]

    # We don't use Field(ge=...) so the error text states the rule the same way
    # for create and update
    quantity: Annotated[int, Field(
        strict=True,
        description='Number of units, at least 1',
        examples=[1, 2]
    )]

    price: Annotated[float, Field(
        strict=True,
        allow_inf_nan=False,
        description='Unit price, zero or more',
        examples=[0, 99.99]
    )]

    @field_validator('quantity')
    @classmethod
    def validate_quantity(cls, v: int) -> int:
        return _check_quantity(v)

    @field_validator('price')
    @classmethod
    def validate_price(cls, v: float) -> float:
        return _check_price(v)


class UpdateOrderItemRequest(BaseModel):
    """Request model for patching an existing order item."""

    product_name: Annotated[str | None, Field(
        default=None,
        min_length=1,
        description='Updated product name'
    )] = None

    quantity: Annotated[int | None, Field(
        default=None,
        strict=True,
        description='Updated number of units, at least 1'
    )] = None

    price: Annotated[float | None, Field(
        default=None,
        strict=True,
        allow_inf_nan=False,
        description='Updated unit price, zero or more'
    )] = None

    @field_validator('quantity')
    @classmethod
    def validate_quantity(cls, v: int | None) -> int | None:
        """Validate the quantity bound if provided."""
        if v is not None:
            _check_quantity(v)
        return v

    @field_validator('price')
    @classmethod
    def validate_price(cls, v: float | None) -> float | None:
        """Validate the price bound if provided."""
        if v is not None:
            _check_price(v)
        return v
