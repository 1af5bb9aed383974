"""Repository for the Order aggregate."""

from ordering.domain import ordering
from ordering.order.order import Order, TrackingEntry, parse_status

# Newest orders scanned by free-text search
SEARCH_SCAN_LIMIT = 500


@ordering.repository(part_of=Order)
class OrderRepository:
    """Order queries used by the customer order pages and the admin console."""

    def find_by_user(self, user_id: str, limit: int = 20) -> list[Order]:
        """A customer's orders, newest first."""
        return self._dao.query.filter(user_id=user_id).order_by("-created_at").limit(limit).all().items

    def find_by_status(self, status: str, limit: int = 50) -> list[Order]:
        status = parse_status(status).value
        return self._dao.query.filter(status=status).order_by("-created_at").limit(limit).all().items

    def find_by_order_number(self, order_number: str) -> Order | None:
        return self._dao.query.filter(order_number=order_number).all().first

    def search(self, term: str, limit: int = 20) -> list[Order]:
        """Case-insensitive match on order number or any item's product name."""
        needle = (term or "").strip().lower()
        if not needle:
            return []

        recent = self._dao.query.order_by("-created_at").limit(SEARCH_SCAN_LIMIT).all().items
        matches = [
            order
            for order in recent
            if needle in order.order_number.lower()
            or any(needle in item.product_name.lower() for item in order.items)
        ]
        return matches[:limit]

    def count_promo_redemptions(self, code: str, user_id: str | None = None) -> int:
        """Orders placed with ``code``, optionally only those of one customer."""
        filters = {"promo_code": code}
        if user_id is not None:
            filters["user_id"] = user_id
        return self._dao.query.filter(**filters).all().total

    def tracking_history(self, order_id: str) -> list[TrackingEntry]:
        """Public tracking entries for an order, oldest first."""
        return self.get(order_id).public_history()
