"""Order totals computed at checkout."""

from dataclasses import dataclass

DEFAULT_TAX_RATE = 0.08


@dataclass(frozen=True)
class OrderTotals:
    subtotal: float
    tax: float
    shipping: float
    discount: float
    total: float

    def to_dict(self) -> dict:
        return {
            "subtotal": self.subtotal,
            "tax": self.tax,
            "shipping": self.shipping,
            "discount": self.discount,
            "total": self.total,
        }


def calculate_order_totals(
    items: list[dict],
    shipping_cost: float = 0.0,
    tax_rate: float = DEFAULT_TAX_RATE,
    discount: float = 0.0,
) -> OrderTotals:
    """Subtotal, tax and grand total for a list of ``{"unit_price", "quantity"}`` lines.

    The discount comes off the subtotal before tax and never takes it below
    zero. Tax and total are rounded to cents; the subtotal is reported as
    summed.
    """
    subtotal = sum(item["unit_price"] * item["quantity"] for item in items)
    discounted = max(0.0, subtotal - discount)
    tax = discounted * tax_rate
    total = discounted + tax + shipping_cost
    return OrderTotals(
        subtotal=subtotal,
        tax=round(tax, 2),
        shipping=shipping_cost,
        discount=discount,
        total=round(total, 2),
    )
