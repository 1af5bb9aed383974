"""Cart contents as seen by delivery pricing and handling rules."""

from dataclasses import dataclass, field

PERISHABLE_CATEGORIES = frozenset({"fresh-produce", "dairy", "frozen"})
FROZEN_CATEGORY = "frozen"
BEVERAGE_CATEGORY = "beverages"
FRAGILE_TAG = "fragile"


@dataclass(frozen=True)
class CartItem:
    product_id: str
    name: str
    category: str
    price: float
    quantity: int = 1
    tags: tuple[str, ...] = field(default_factory=tuple)
    weight: float | None = None  # lbs

    @classmethod
    def from_dict(cls, data: dict) -> "CartItem":
        return cls(
            product_id=str(data["product_id"]),
            name=data.get("name", ""),
            category=data.get("category", ""),
            price=float(data["price"]),
            quantity=int(data.get("quantity", 1)),
            tags=tuple(data.get("tags") or ()),
            weight=float(data["weight"]) if data.get("weight") is not None else None,
        )

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


def is_perishable(item: CartItem) -> bool:
    return item.category in PERISHABLE_CATEGORIES


def has_perishables(items: list[CartItem]) -> bool:
    return any(is_perishable(item) for item in items)


def cart_subtotal(items: list[CartItem]) -> float:
    return sum(item.line_total for item in items)
