"""ZapCart HTTP entry point.

Serves the delivery, ordering and payment routers from one process. Commands
run synchronously inside the request; each request gets the domain context
that owns its URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from delivery.api.routes import delivery_router
from delivery.domain import delivery
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from ordering.api.routes import order_router
from ordering.domain import ordering
from payments.api.routes import payment_router
from shared.api import register_exception_handlers
from shared.logging import configure_logging

configure_logging()

# PROTEAN_ENV picks the overlay from domain.toml: projectors run inside the
# unit of work outside production, and through the async engine in it.
delivery.init()
ordering.init()

# Payments commands act on the Order aggregate
DOMAIN_PREFIXES = (
    ("/delivery", delivery),
    ("/orders", ordering),
    ("/payments", ordering),
)


def domain_for(path: str):
    return next((domain for prefix, domain in DOMAIN_PREFIXES if path.startswith(prefix)), None)


app = FastAPI(
    title="ZapCart API",
    description="Grocery delivery: zones, slots and fees, order tracking and payments",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    domain = domain_for(request.url.path)
    if domain is None:
        return await call_next(request)
    with domain.domain_context():
        return await call_next(request)


for router in (delivery_router, order_router, payment_router):
    app.include_router(router)


@app.get("/health")
async def health() -> dict:
    return {"status": "ok", "domains": [delivery.name, ordering.name]}
