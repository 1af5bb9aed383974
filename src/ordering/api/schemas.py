"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands.
"""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    company: str | None = None
    address1: str
    address2: str | None = None
    city: str
    state: str | None = None
    zip_code: str
    country: str = "US"
    phone: str | None = None


class OrderItemSchema(BaseModel):
    product_id: str
    product_name: str
    product_image: str | None = None
    variant_id: str | None = None
    quantity: int = Field(ge=1)
    unit_price: float = Field(ge=0)
    weight: str | None = None
    sku: str | None = None
    notes: str | None = None


class PaymentMethodSchema(BaseModel):
    method_type: Literal["card", "paypal", "apple_pay", "google_pay", "bank_transfer"]
    provider: str | None = None
    last4: str | None = Field(default=None, max_length=4)
    brand: str | None = None


class ShippingMethodSchema(BaseModel):
    option_id: str
    name: str
    zone_id: str | None = None
    price: float = Field(default=0.0, ge=0)
    estimated_time: str | None = None


class DeliveryScheduleSchema(BaseModel):
    delivery_date: date
    slot_id: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    delivery_type: Literal["standard", "express", "scheduled"] = "scheduled"
    instructions: str | None = None


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    user_id: str
    items: list[OrderItemSchema] = Field(min_length=1)
    billing_address: AddressSchema
    shipping_address: AddressSchema
    payment_method: PaymentMethodSchema
    shipping_method: ShippingMethodSchema
    delivery_schedule: DeliveryScheduleSchema | None = None
    shipping_cost: float = Field(default=0.0, ge=0)
    promo_code: str | None = Field(default=None, max_length=50)
    currency: str = "USD"
    notes: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "user-001",
                    "items": [
                        {
                            "product_id": "prod-001",
                            "product_name": "Organic Bananas",
                            "quantity": 2,
                            "unit_price": 3.49,
                        }
                    ],
                    "billing_address": {
                        "address1": "1101 Brickell Ave",
                        "city": "Miami",
                        "state": "FL",
                        "zip_code": "33131",
                        "country": "US",
                    },
                    "shipping_address": {
                        "address1": "1101 Brickell Ave",
                        "city": "Miami",
                        "state": "FL",
                        "zip_code": "33131",
                        "country": "US",
                    },
                    "payment_method": {"method_type": "card", "brand": "visa", "last4": "4242"},
                    "shipping_method": {"option_id": "standard", "name": "Standard Delivery"},
                    "shipping_cost": 4.99,
                    "promo_code": "SAVE5",
                }
            ]
        }
    }


class UpdateStatusRequest(BaseModel):
    status: str
    message: str | None = None
    tracking_number: str | None = None
    estimated_delivery: datetime | None = None
    location: str | None = None


class PromoCodeRequest(BaseModel):
    code: str
    user_id: str
    items: list[OrderItemSchema] = Field(min_length=1)


class CancelOrderRequest(BaseModel):
    reason: str


class TrackingNoteRequest(BaseModel):
    message: str
    location: str | None = None
    is_public: bool = False


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderIdResponse(BaseModel):
    order_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class PricingResponse(BaseModel):
    subtotal: float
    tax: float
    shipping: float
    discount: float
    total: float
    currency: str


class PromoCodeResponse(BaseModel):
    code: str
    discount: float
    free_shipping: bool
    message: str


class OrderItemResponse(BaseModel):
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    total_price: float
    variant_name: str | None = None


class OrderResponse(BaseModel):
    order_id: str
    order_number: str
    user_id: str
    status: str
    items: list[OrderItemResponse]
    pricing: PricingResponse
    promo_code: str | None = None
    shipping_method: ShippingMethodSchema
    tracking_number: str | None = None
    estimated_delivery: datetime | None = None
    actual_delivery: datetime | None = None
    is_trackable: bool
    is_reorderable: bool
    created_at: datetime
    updated_at: datetime


class TrackingEntryResponse(BaseModel):
    status: str
    message: str
    location: str | None = None
    timestamp: datetime


class ProgressStepResponse(BaseModel):
    status: str
    title: str
    description: str
    state: str
    reached_at: str | None = None
