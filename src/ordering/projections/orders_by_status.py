"""Orders by status: admin dashboard view for filtering orders by status."""

from collections import Counter

from protean.core.projector import on
from protean.fields import DateTime, Float, Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.events import OrderPlaced, OrderStatusChanged
from ordering.order.order import Order, OrderStatus

STATUS_COUNT_SCAN_LIMIT = 10_000


@ordering.projection
class OrdersByStatus:
    order_id = Identifier(identifier=True, required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    status = String(required=True)
    total = Float()
    created_at = DateTime()
    updated_at = DateTime()


@ordering.projector(projector_for=OrdersByStatus, aggregates=[Order])
class OrdersByStatusProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        current_domain.repository_for(OrdersByStatus).add(
            OrdersByStatus(
                order_id=event.order_id,
                order_number=event.order_number,
                user_id=event.user_id,
                status=OrderStatus.PENDING.value,
                total=event.total,
                created_at=event.placed_at,
                updated_at=event.placed_at,
            )
        )

    @on(OrderStatusChanged)
    def on_order_status_changed(self, event):
        repo = current_domain.repository_for(OrdersByStatus)
        record = repo.get(event.order_id)
        record.status = event.status
        record.updated_at = event.changed_at
        repo.add(record)


def status_counts() -> dict[str, int]:
    """Number of orders in every status, zero-filled."""
    records = current_domain.repository_for(OrdersByStatus)._dao.query.limit(STATUS_COUNT_SCAN_LIMIT).all().items
    counts = Counter(record.status for record in records)
    return {status.value: counts.get(status.value, 0) for status in OrderStatus}
