"""Pydantic request/response schemas for the Payments API."""

from pydantic import BaseModel, Field


class StartPaymentRequest(BaseModel):
    customer_id: str | None = None


class RefundRequest(BaseModel):
    amount: float | None = Field(default=None, ge=0)
    reason: str = "requested_by_customer"


class ConfigureGatewayRequest(BaseModel):
    should_succeed: bool = True
    failure_reason: str = "Card declined"


class PaymentIntentResponse(BaseModel):
    payment_intent_id: str
    client_secret: str
    amount_minor: int
    currency: str


class StatusResponse(BaseModel):
    status: str = "ok"


class GatewayConfigResponse(BaseModel):
    gateway: str
    should_succeed: bool
    failure_reason: str
