"""Serialisable views of orders used in API responses and webhook payloads."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from souq_api.models.order import OrderStatusEnum, PaymentMethodEnum

from .marketing import CamelModel


class _RecordModel(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ProductRecord(_RecordModel):
    id: int
    name: str
    brand: str
    category: str
    original_price: Decimal
    discounted_price: Decimal
    discount: int
    image: str
    stock: int


class OrderRecord(_RecordModel):
    id: int
    order_number: str
    customer_name: str
    customer_email: str
    customer_phone: str
    shipping_address: str
    city: str
    postal_code: str | None = None
    special_instructions: str | None = None
    payment_method: PaymentMethodEnum
    total: Decimal
    status: OrderStatusEnum
    created_at: datetime | None = None


class OrderItemRecord(_RecordModel):
    id: int | None = None
    order_id: int | None = None
    product_id: int
    quantity: int
    price: Decimal
    product: ProductRecord | None = None


__all__ = ["OrderItemRecord", "OrderRecord", "ProductRecord"]
