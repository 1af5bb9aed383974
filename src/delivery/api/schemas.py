"""Pydantic API schemas for the Delivery domain.

These are the external API contracts, separate from the delivery model.
The API layer translates between these schemas and domain calls.
"""

from pydantic import BaseModel, Field

from delivery.cart import CartItem


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------
class CartItemRequest(BaseModel):
    product_id: str
    name: str = ""
    category: str = ""
    price: float = Field(ge=0)
    quantity: int = Field(default=1, ge=1)
    tags: list[str] = []
    weight: float | None = None

    def to_cart_item(self) -> CartItem:
        return CartItem(
            product_id=self.product_id,
            name=self.name,
            category=self.category,
            price=self.price,
            quantity=self.quantity,
            tags=tuple(self.tags),
            weight=self.weight,
        )


class DeliveryQuoteRequest(BaseModel):
    items: list[CartItemRequest]
    postal_code: str
    shipping_option_id: str = "standard"
    is_rush_delivery: bool = False


class InstructionsRequest(BaseModel):
    items: list[CartItemRequest]


class EstimateRequest(BaseModel):
    from_postal_code: str
    to_postal_code: str
    shipping_option_id: str = "standard"


class ScheduleDeliveryRequest(BaseModel):
    order_id: str
    postal_code: str
    shipping_option_id: str
    items: list[CartItemRequest] = Field(min_length=1)
    slot_id: str | None = None
    is_rush_delivery: bool = False
    special_instructions: str | None = None
    contactless_delivery: bool = False
    requires_signature: bool = False


class AddressRequest(BaseModel):
    street: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = "US"


class ConfigureGeocoderRequest(BaseModel):
    should_succeed: bool = True
    failure_reason: str = "Geocoding service unavailable"


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------
class ZoneResponse(BaseModel):
    id: str
    name: str
    base_rate: float
    free_delivery_threshold: float
    max_delivery_minutes: int
    perishable_handling: bool
    rush_delivery_available: bool


class AvailabilityResponse(BaseModel):
    postal_code: str
    available: bool


class ShippingOptionResponse(BaseModel):
    id: str
    name: str
    description: str
    base_price: float
    estimated_time: str
    is_default: bool
    requires_scheduling: bool


class SlotResponse(BaseModel):
    id: str
    start_time: str
    end_time: str
    is_available: bool
    capacity: int
    booked: int
    price: float
    perishable_compatible: bool


class DeliveryQuoteResponse(BaseModel):
    base_rate: float
    distance_rate: float
    perishable_handling: float
    rush_delivery: float
    total: float
    estimated_time: str
    available_slots: list[SlotResponse]


class InstructionsResponse(BaseModel):
    instructions: list[str]


class EstimateResponse(BaseModel):
    estimated_time: str
    estimated_arrival: str
    distance: int | None = None


class ScheduleDeliveryResponse(BaseModel):
    booking_id: str
    tracking_number: str
    delivery_fee: float


class TrackingUpdateResponse(BaseModel):
    timestamp: str
    status: str
    message: str
    location: str | None = None


class TrackingResponse(BaseModel):
    tracking_number: str
    status: str
    location: str | None = None
    estimated_arrival: str | None = None
    driver_name: str | None = None
    driver_phone: str | None = None
    updates: list[TrackingUpdateResponse]
    refresh_after_seconds: int | None = None


class SuggestionResponse(BaseModel):
    place_id: str
    description: str
    main_text: str
    secondary_text: str


class AddressValidationResponse(BaseModel):
    is_valid: bool
    deliverable: bool
    errors: list[str]


class GeocoderConfigResponse(BaseModel):
    geocoder: str
    should_succeed: bool
    failure_reason: str
