"""Order status changes: commands and handler.

Status updates come from staff actions or delivery callbacks; the
aggregate decides whether the move is legal.
"""

from protean import handle
from protean.fields import Boolean, DateTime, Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=50)
    message = Text()
    tracking_number = String(max_length=50)
    estimated_delivery = DateTime()
    location = String(max_length=255)


@ordering.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    reason = String(required=True, max_length=500)


@ordering.command(part_of="Order")
class AddTrackingNote:
    order_id = Identifier(required=True)
    message = Text(required=True)
    location = String(max_length=255)
    is_public = Boolean(default=False)


@ordering.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        previous = order.status
        order.update_status(
            command.status,
            message=command.message,
            tracking_number=command.tracking_number,
            estimated_delivery=command.estimated_delivery,
            location=command.location,
        )
        repo.add(order)
        logger.info("Order status changed", order_id=str(order.id), previous=previous, status=order.status)

    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.cancel(command.reason)
        repo.add(order)
        logger.info("Order cancelled", order_id=str(order.id), reason=command.reason)

    @handle(AddTrackingNote)
    def add_tracking_note(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.add_tracking_note(
            command.message,
            location=command.location,
            is_public=bool(command.is_public),
        )
        repo.add(order)
