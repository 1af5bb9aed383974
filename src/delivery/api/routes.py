"""FastAPI routes for the Delivery domain."""

import json
import os

from fastapi import APIRouter, HTTPException
from protean.utils.globals import current_domain

from delivery.api.schemas import (
    AddressRequest,
    AddressValidationResponse,
    AvailabilityResponse,
    ConfigureGeocoderRequest,
    DeliveryQuoteRequest,
    DeliveryQuoteResponse,
    EstimateRequest,
    EstimateResponse,
    GeocoderConfigResponse,
    InstructionsRequest,
    InstructionsResponse,
    ScheduleDeliveryRequest,
    ScheduleDeliveryResponse,
    ShippingOptionResponse,
    SlotResponse,
    SuggestionResponse,
    TrackingResponse,
    TrackingUpdateResponse,
    ZoneResponse,
)
from delivery.booking.scheduling import ScheduleDelivery
from delivery.estimates import get_delivery_estimate
from delivery.exceptions import DeliveryUnavailable
from delivery.fees import calculate_delivery_fee
from delivery.geocoding import get_geocoder
from delivery.geocoding.fake_adapter import FakeGeocoder
from delivery.geocoding.port import LocationBias
from delivery.geocoding.validation import validate_address
from delivery.instructions import get_delivery_instructions
from delivery.slots import DeliverySlot, get_available_delivery_slots
from delivery.tracking import REFRESH_INTERVAL_SECONDS, TrackingSimulator
from delivery.zones import DeliveryZone, ShippingOption, get_catalog

delivery_router = APIRouter(prefix="/delivery", tags=["delivery"])

_tracker = TrackingSimulator()


def _zone_response(zone: DeliveryZone) -> ZoneResponse:
    return ZoneResponse(
        id=zone.id,
        name=zone.name,
        base_rate=zone.base_rate,
        free_delivery_threshold=zone.free_delivery_threshold,
        max_delivery_minutes=zone.max_delivery_minutes,
        perishable_handling=zone.perishable_handling,
        rush_delivery_available=zone.rush_delivery_available,
    )


def _option_response(option: ShippingOption) -> ShippingOptionResponse:
    return ShippingOptionResponse(
        id=option.id,
        name=option.name,
        description=option.description,
        base_price=option.base_price,
        estimated_time=option.estimated_time,
        is_default=option.is_default,
        requires_scheduling=option.requires_scheduling,
    )


def _slot_response(slot: DeliverySlot) -> SlotResponse:
    return SlotResponse(**slot.to_dict())


# ---------------------------------------------------------------------------
# Zones & shipping options
# ---------------------------------------------------------------------------
@delivery_router.get("/zones", response_model=list[ZoneResponse])
async def list_zones() -> list[ZoneResponse]:
    """List active delivery zones."""
    return [_zone_response(zone) for zone in get_catalog().get_all_delivery_zones()]


@delivery_router.get("/zones/{postal_code}", response_model=ZoneResponse)
async def get_zone(postal_code: str) -> ZoneResponse:
    """Get the zone serving a postal code."""
    zone = get_catalog().get_delivery_zone(postal_code)
    if zone is None:
        raise DeliveryUnavailable(postal_code=postal_code)
    return _zone_response(zone)


@delivery_router.get("/availability/{postal_code}", response_model=AvailabilityResponse)
async def check_availability(postal_code: str) -> AvailabilityResponse:
    return AvailabilityResponse(
        postal_code=postal_code,
        available=get_catalog().is_delivery_available(postal_code),
    )


@delivery_router.get("/options", response_model=list[ShippingOptionResponse])
async def list_shipping_options(postal_code: str) -> list[ShippingOptionResponse]:
    """Shipping options offered at a postal code (empty when undeliverable)."""
    return [_option_response(option) for option in get_catalog().get_shipping_options(postal_code)]


@delivery_router.get("/slots", response_model=list[SlotResponse])
async def list_slots(
    zone_id: str,
    shipping_option_id: str = "scheduled",
    has_perishables: bool = False,
) -> list[SlotResponse]:
    """Bookable delivery windows over the next seven days."""
    catalog = get_catalog()
    if catalog.get_zone_by_id(zone_id) is None:
        raise HTTPException(status_code=404, detail="Delivery zone not found")
    if catalog.get_shipping_option(shipping_option_id) is None:
        raise HTTPException(status_code=404, detail="Shipping option not found")
    slots = get_available_delivery_slots(zone_id, shipping_option_id, has_perishables)
    return [_slot_response(slot) for slot in slots]


# ---------------------------------------------------------------------------
# Pricing, instructions, estimates
# ---------------------------------------------------------------------------
@delivery_router.post("/quote", response_model=DeliveryQuoteResponse)
async def quote_delivery(body: DeliveryQuoteRequest) -> DeliveryQuoteResponse:
    """Calculate the delivery fee for a cart."""
    calculation = calculate_delivery_fee(
        [item.to_cart_item() for item in body.items],
        body.postal_code,
        shipping_option_id=body.shipping_option_id,
        is_rush_delivery=body.is_rush_delivery,
    )
    return DeliveryQuoteResponse(
        base_rate=calculation.base_rate,
        distance_rate=calculation.distance_rate,
        perishable_handling=calculation.perishable_handling,
        rush_delivery=calculation.rush_delivery,
        total=calculation.total,
        estimated_time=calculation.estimated_time,
        available_slots=[_slot_response(slot) for slot in calculation.available_slots],
    )


@delivery_router.post("/instructions", response_model=InstructionsResponse)
async def delivery_instructions(body: InstructionsRequest) -> InstructionsResponse:
    return InstructionsResponse(
        instructions=get_delivery_instructions([item.to_cart_item() for item in body.items]),
    )


@delivery_router.post("/estimate", response_model=EstimateResponse)
async def delivery_estimate(body: EstimateRequest) -> EstimateResponse:
    estimate = get_delivery_estimate(
        body.from_postal_code,
        body.to_postal_code,
        shipping_option_id=body.shipping_option_id,
    )
    return EstimateResponse(
        estimated_time=estimate.estimated_time,
        estimated_arrival=estimate.estimated_arrival.isoformat(),
        distance=estimate.distance,
    )


# ---------------------------------------------------------------------------
# Scheduling & tracking
# ---------------------------------------------------------------------------
@delivery_router.post("/schedule", status_code=201, response_model=ScheduleDeliveryResponse)
async def schedule_delivery(body: ScheduleDeliveryRequest) -> ScheduleDeliveryResponse:
    """Confirm a delivery window and mint a tracking number."""
    command = ScheduleDelivery(
        order_id=body.order_id,
        postal_code=body.postal_code,
        shipping_option_id=body.shipping_option_id,
        items=json.dumps([item.model_dump() for item in body.items]),
        slot_id=body.slot_id,
        is_rush_delivery=body.is_rush_delivery,
        special_instructions=body.special_instructions,
        contactless_delivery=body.contactless_delivery,
        requires_signature=body.requires_signature,
    )
    result = current_domain.process(command, asynchronous=False)
    return ScheduleDeliveryResponse(**result)


@delivery_router.get("/track/{tracking_number}", response_model=TrackingResponse)
async def track_delivery(tracking_number: str) -> TrackingResponse:
    """Simulated live tracking for a delivery."""
    info = _tracker.track(tracking_number)
    return TrackingResponse(
        tracking_number=info.tracking_number,
        status=info.status,
        location=info.location,
        estimated_arrival=info.estimated_arrival.isoformat() if info.estimated_arrival else None,
        driver_name=info.driver_name,
        driver_phone=info.driver_phone,
        updates=[
            TrackingUpdateResponse(
                timestamp=update.timestamp.isoformat(),
                status=update.status,
                message=update.message,
                location=update.location,
            )
            for update in info.updates
        ],
        refresh_after_seconds=REFRESH_INTERVAL_SECONDS if info.should_refresh else None,
    )


# ---------------------------------------------------------------------------
# Addresses
# ---------------------------------------------------------------------------
@delivery_router.get("/addresses/autocomplete", response_model=list[SuggestionResponse])
async def autocomplete_address(
    q: str,
    country: str = "US",
    lat: float | None = None,
    lng: float | None = None,
) -> list[SuggestionResponse]:
    bias = LocationBias(latitude=lat, longitude=lng) if lat is not None and lng is not None else None
    suggestions = get_geocoder().autocomplete(q, country=country, bias=bias)
    return [
        SuggestionResponse(
            place_id=s.place_id,
            description=s.description,
            main_text=s.main_text,
            secondary_text=s.secondary_text,
        )
        for s in suggestions
    ]


@delivery_router.get("/addresses/places/{place_id}", response_model=AddressRequest)
async def place_details(place_id: str) -> AddressRequest:
    address = get_geocoder().place_details(place_id)
    if address is None:
        raise HTTPException(status_code=404, detail="Place not found")
    return AddressRequest(
        street=address.street,
        city=address.city,
        state=address.state,
        postal_code=address.postal_code,
        country=address.country,
    )


@delivery_router.post("/addresses/validate", response_model=AddressValidationResponse)
async def validate_delivery_address(body: AddressRequest) -> AddressValidationResponse:
    result = validate_address(body.model_dump())
    return AddressValidationResponse(
        is_valid=result.is_valid,
        deliverable=result.deliverable,
        errors=result.errors,
    )


@delivery_router.post("/geocoder/configure", response_model=GeocoderConfigResponse)
async def configure_geocoder(body: ConfigureGeocoderRequest) -> GeocoderConfigResponse:
    """Configure the FakeGeocoder behavior (non-production only)."""
    if os.environ.get("PROTEAN_ENV") == "production":
        raise HTTPException(status_code=403, detail="Geocoder configuration not available in production")

    geocoder = get_geocoder()
    if not isinstance(geocoder, FakeGeocoder):
        raise HTTPException(status_code=400, detail="Geocoder configuration only available for FakeGeocoder")

    geocoder.configure(should_succeed=body.should_succeed, failure_reason=body.failure_reason)
    return GeocoderConfigResponse(
        geocoder=type(geocoder).__name__,
        should_succeed=geocoder.should_succeed,
        failure_reason=geocoder.failure_reason,
    )
