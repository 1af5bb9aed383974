"""Promo codes redeemable at checkout.

A code is looked up case-insensitively and checked against its validity
window, its overall and per-customer redemption limits, the order minimum
and the products it applies to. The discount it earns is always computed
here; checkout never accepts a discount amount from the client.

Redemption counts are passed in by the caller (the order repository counts
orders carrying the code), so this module stays free of persistence.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError


class PromoType(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"
    FREE_SHIPPING = "free_shipping"


@dataclass(frozen=True)
class PromoCode:
    code: str
    promo_type: PromoType
    value: float  # percent for PERCENTAGE, currency amount for FIXED
    description: str
    valid_from: datetime
    valid_until: datetime | None = None
    min_order_amount: float | None = None
    max_discount: float | None = None
    usage_limit: int | None = None
    user_limit: int | None = None
    applicable_products: frozenset[str] = frozenset()
    excluded_products: frozenset[str] = frozenset()
    is_active: bool = True

    def is_valid_at(self, moment: datetime) -> bool:
        if moment < self.valid_from:
            return False
        return self.valid_until is None or moment <= self.valid_until


@dataclass(frozen=True)
class PromoApplication:
    code: str
    discount: float
    free_shipping: bool = False
    message: str = "Promo code applied successfully"


DEFAULT_PROMO_CODES = (
    PromoCode(
        code="WELCOME10",
        promo_type=PromoType.PERCENTAGE,
        value=10.0,
        description="10% off your first order",
        valid_from=datetime(2025, 1, 1, tzinfo=UTC),
        min_order_amount=25.0,
        max_discount=15.0,
        user_limit=1,
    ),
    PromoCode(
        code="SAVE5",
        promo_type=PromoType.FIXED,
        value=5.0,
        description="$5 off orders of $30 or more",
        valid_from=datetime(2025, 1, 1, tzinfo=UTC),
        min_order_amount=30.0,
    ),
    PromoCode(
        code="FREESHIP",
        promo_type=PromoType.FREE_SHIPPING,
        value=0.0,
        description="Free delivery on orders of $35 or more",
        valid_from=datetime(2025, 1, 1, tzinfo=UTC),
        min_order_amount=35.0,
    ),
    PromoCode(
        code="PRODUCE20",
        promo_type=PromoType.PERCENTAGE,
        value=20.0,
        description="20% off when the cart includes organic bananas",
        valid_from=datetime(2025, 1, 1, tzinfo=UTC),
        max_discount=10.0,
        applicable_products=frozenset({"prod-001"}),
    ),
    PromoCode(
        code="SUMMER15",
        promo_type=PromoType.PERCENTAGE,
        value=15.0,
        description="Summer sale",
        valid_from=datetime(2025, 6, 1, tzinfo=UTC),
        valid_until=datetime(2025, 9, 1, tzinfo=UTC),
    ),
    PromoCode(
        code="RETIRED",
        promo_type=PromoType.FIXED,
        value=10.0,
        description="Withdrawn campaign",
        valid_from=datetime(2025, 1, 1, tzinfo=UTC),
        is_active=False,
    ),
)


class PromoCatalog:
    """Active promo codes keyed by their upper-cased code."""

    def __init__(self, codes: Iterable[PromoCode] = DEFAULT_PROMO_CODES):
        self._codes = {promo.code.upper(): promo for promo in codes}

    def get(self, code: str | None) -> PromoCode | None:
        promo = self._codes.get((code or "").strip().upper())
        if promo is None or not promo.is_active:
            return None
        return promo


_catalog: PromoCatalog | None = None


def get_promo_catalog() -> PromoCatalog:
    global _catalog
    if _catalog is None:
        _catalog = PromoCatalog()
    return _catalog


def _reject(message: str):
    raise ValidationError({"promo_code": [message]})


def calculate_promo_discount(promo: PromoCode, order_amount: float) -> float:
    if promo.promo_type == PromoType.PERCENTAGE:
        discount = order_amount * promo.value / 100
        if promo.max_discount is not None:
            discount = min(discount, promo.max_discount)
    elif promo.promo_type == PromoType.FIXED:
        discount = min(promo.value, order_amount)
    else:
        discount = 0.0
    return round(discount, 2)


def validate_promo_code(
    code: str,
    order_amount: float,
    product_ids: Iterable[str] = (),
    times_used: int = 0,
    times_used_by_customer: int = 0,
    now: datetime | None = None,
    catalog: PromoCatalog | None = None,
) -> PromoApplication:
    """Check ``code`` against an order and price the discount it earns.

    Raises ``ValidationError`` keyed on ``promo_code`` with a customer-facing
    message when the code cannot be used.
    """
    promo = (catalog or get_promo_catalog()).get(code)
    if promo is None:
        _reject("Invalid promo code")

    if not promo.is_valid_at(now or datetime.now(UTC)):
        _reject("Promo code has expired")

    if promo.usage_limit is not None and times_used >= promo.usage_limit:
        _reject("Promo code usage limit reached")

    if promo.user_limit is not None and times_used_by_customer >= promo.user_limit:
        _reject("You have reached the usage limit for this promo code")

    if promo.min_order_amount is not None and order_amount < promo.min_order_amount:
        _reject(f"Minimum order amount of ${promo.min_order_amount:.2f} required")

    products = {str(product_id) for product_id in product_ids}
    if promo.applicable_products and not products & promo.applicable_products:
        _reject("Promo code not applicable to items in cart")
    if promo.excluded_products and products & promo.excluded_products:
        _reject("Promo code cannot be applied to some items in cart")

    return PromoApplication(
        code=promo.code,
        discount=calculate_promo_discount(promo, order_amount),
        free_shipping=promo.promo_type == PromoType.FREE_SHIPPING,
    )
