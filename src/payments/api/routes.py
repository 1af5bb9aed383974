"""FastAPI routes for order payments and the payment gateway."""

import os

from fastapi import APIRouter, HTTPException
from protean.utils.globals import current_domain

from ordering.order.payment import ConfirmPayment, RefundOrder, StartPayment
from payments.api.schemas import (
    ConfigureGatewayRequest,
    GatewayConfigResponse,
    PaymentIntentResponse,
    RefundRequest,
    StartPaymentRequest,
    StatusResponse,
)
from payments.gateway import get_gateway
from payments.gateway.fake_adapter import FakeGateway

payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.post("/orders/{order_id}/intent", status_code=201, response_model=PaymentIntentResponse)
async def start_payment(order_id: str, body: StartPaymentRequest) -> PaymentIntentResponse:
    """Open a payment intent for the order total."""
    command = StartPayment(order_id=order_id, customer_id=body.customer_id)
    result = current_domain.process(command, asynchronous=False)
    return PaymentIntentResponse(**result)


@payment_router.post("/orders/{order_id}/confirm", response_model=StatusResponse)
async def confirm_payment(order_id: str) -> StatusResponse:
    current_domain.process(ConfirmPayment(order_id=order_id), asynchronous=False)
    return StatusResponse(status="payment_confirmed")


@payment_router.post("/orders/{order_id}/refund", response_model=StatusResponse)
async def refund_order(order_id: str, body: RefundRequest) -> StatusResponse:
    command = RefundOrder(order_id=order_id, amount=body.amount, reason=body.reason)
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="refund_processed")


@payment_router.post("/gateway/configure", response_model=GatewayConfigResponse)
async def configure_gateway(body: ConfigureGatewayRequest) -> GatewayConfigResponse:
    """Configure the FakeGateway behavior (non-production only).

    This endpoint is only available when PROTEAN_ENV is not 'production'.
    It allows toggling success/failure behavior for manual API testing.
    """
    if os.environ.get("PROTEAN_ENV") == "production":
        raise HTTPException(status_code=403, detail="Gateway configuration not available in production")

    gateway = get_gateway()
    if not isinstance(gateway, FakeGateway):
        raise HTTPException(status_code=400, detail="Gateway configuration only available for FakeGateway")

    gateway.configure(
        should_succeed=body.should_succeed,
        failure_reason=body.failure_reason,
    )
    return GatewayConfigResponse(
        gateway=type(gateway).__name__,
        should_succeed=gateway.should_succeed,
        failure_reason=gateway.failure_reason,
    )
