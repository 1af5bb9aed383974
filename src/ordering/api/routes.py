"""FastAPI routes for the Ordering domain."""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    CancelOrderRequest,
    OrderIdResponse,
    OrderItemResponse,
    OrderResponse,
    PlaceOrderRequest,
    PricingResponse,
    ProgressStepResponse,
    PromoCodeRequest,
    PromoCodeResponse,
    ShippingMethodSchema,
    StatusResponse,
    TrackingEntryResponse,
    TrackingNoteRequest,
    UpdateStatusRequest,
)
from ordering.order.creation import PlaceOrder, redeem_promo_code
from ordering.order.order import Order
from ordering.order.status import AddTrackingNote, CancelOrder, UpdateOrderStatus
from ordering.progress import order_progress
from ordering.projections.orders_by_status import status_counts

order_router = APIRouter(prefix="/orders", tags=["orders"])


def _order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.id),
        order_number=order.order_number,
        user_id=str(order.user_id),
        status=order.status,
        items=[
            OrderItemResponse(
                product_id=str(item.product_id),
                product_name=item.product_name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                total_price=item.total_price,
                variant_name=item.variant_name,
            )
            for item in order.items
        ],
        pricing=PricingResponse(
            subtotal=order.pricing.subtotal,
            tax=order.pricing.tax,
            shipping=order.pricing.shipping,
            discount=order.pricing.discount,
            total=order.pricing.total,
            currency=order.pricing.currency,
        ),
        promo_code=order.promo_code,
        shipping_method=ShippingMethodSchema(
            option_id=order.shipping_method.option_id,
            name=order.shipping_method.name,
            zone_id=order.shipping_method.zone_id,
            price=order.shipping_method.price or 0.0,
            estimated_time=order.shipping_method.estimated_time,
        ),
        tracking_number=order.tracking_number,
        estimated_delivery=order.estimated_delivery,
        actual_delivery=order.actual_delivery,
        is_trackable=order.is_trackable,
        is_reorderable=order.is_reorderable,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def _orders():
    return current_domain.repository_for(Order)


# ---------------------------------------------------------------------------
# Placement
# ---------------------------------------------------------------------------
@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def place_order(body: PlaceOrderRequest) -> OrderIdResponse:
    command = PlaceOrder(
        user_id=body.user_id,
        items=json.dumps([item.model_dump() for item in body.items]),
        billing_address=json.dumps(body.billing_address.model_dump()),
        shipping_address=json.dumps(body.shipping_address.model_dump()),
        payment_method=json.dumps(body.payment_method.model_dump()),
        shipping_method=json.dumps(body.shipping_method.model_dump()),
        delivery_schedule=(
            json.dumps(body.delivery_schedule.model_dump(mode="json")) if body.delivery_schedule else None
        ),
        shipping_cost=body.shipping_cost,
        promo_code=body.promo_code,
        currency=body.currency,
        notes=body.notes,
    )
    result = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=result)


@order_router.post("/promo-codes/validate", response_model=PromoCodeResponse)
async def check_promo_code(body: PromoCodeRequest) -> PromoCodeResponse:
    """Price a promo code against a cart without placing the order."""
    promo = redeem_promo_code(body.code, body.user_id, [item.model_dump() for item in body.items])
    return PromoCodeResponse(
        code=promo.code,
        discount=promo.discount,
        free_shipping=promo.free_shipping,
        message=promo.message,
    )


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------
@order_router.get("", response_model=list[OrderResponse])
async def list_user_orders(user_id: str, limit: int = 20) -> list[OrderResponse]:
    return [_order_response(order) for order in _orders().find_by_user(user_id, limit=limit)]


@order_router.get("/search", response_model=list[OrderResponse])
async def search_orders(q: str, limit: int = 20) -> list[OrderResponse]:
    return [_order_response(order) for order in _orders().search(q, limit=limit)]


@order_router.get("/status/{status}", response_model=list[OrderResponse])
async def list_orders_by_status(status: str, limit: int = 50) -> list[OrderResponse]:
    return [_order_response(order) for order in _orders().find_by_status(status, limit=limit)]


@order_router.get("/dashboard/status-counts", response_model=dict[str, int])
async def dashboard_status_counts() -> dict[str, int]:
    return status_counts()


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    return _order_response(_orders().get(order_id))


@order_router.get("/{order_id}/tracking", response_model=list[TrackingEntryResponse])
async def get_order_tracking(order_id: str) -> list[TrackingEntryResponse]:
    return [
        TrackingEntryResponse(
            status=entry.status,
            message=entry.message,
            location=entry.location,
            timestamp=entry.timestamp,
        )
        for entry in _orders().tracking_history(order_id)
    ]


@order_router.get("/{order_id}/progress", response_model=list[ProgressStepResponse])
async def get_order_progress(order_id: str) -> list[ProgressStepResponse]:
    order = _orders().get(order_id)
    return [ProgressStepResponse(**step.to_dict()) for step in order_progress(order)]


# ---------------------------------------------------------------------------
# Status changes
# ---------------------------------------------------------------------------
@order_router.put("/{order_id}/status", response_model=StatusResponse)
async def update_order_status(order_id: str, body: UpdateStatusRequest) -> StatusResponse:
    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        message=body.message,
        tracking_number=body.tracking_number,
        estimated_delivery=body.estimated_delivery,
        location=body.location,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/cancel", response_model=StatusResponse)
async def cancel_order(order_id: str, body: CancelOrderRequest) -> StatusResponse:
    command = CancelOrder(order_id=order_id, reason=body.reason)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@order_router.post("/{order_id}/notes", status_code=201, response_model=StatusResponse)
async def add_tracking_note(order_id: str, body: TrackingNoteRequest) -> StatusResponse:
    command = AddTrackingNote(
        order_id=order_id,
        message=body.message,
        location=body.location,
        is_public=body.is_public,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
