"""Order progress rendering for the tracking page.

The tracker shows the forward lifecycle as a row of steps. For an order on
the forward path each step is ``completed``, ``current`` or ``upcoming`` by
its position relative to the order's status. Cancelled and refunded orders
are not on that path: steps the order actually reached are shown completed
and the rest ``halted``.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ordering.order.order import FORWARD_STATUSES, Order, OrderStatus, parse_status


class StepState(Enum):
    COMPLETED = "completed"
    CURRENT = "current"
    UPCOMING = "upcoming"
    HALTED = "halted"


@dataclass(frozen=True)
class TrackingStep:
    status: OrderStatus
    title: str
    description: str


TRACKING_STEPS = (
    TrackingStep(OrderStatus.PENDING, "Order Placed", "We have received your order"),
    TrackingStep(OrderStatus.CONFIRMED, "Order Confirmed", "Your order has been confirmed and is being prepared"),
    TrackingStep(OrderStatus.PROCESSING, "Processing", "Your items are being picked and prepared"),
    TrackingStep(OrderStatus.PACKED, "Packed", "Your order has been packed and is ready for shipping"),
    TrackingStep(OrderStatus.SHIPPED, "Shipped", "Your order is on its way to you"),
    TrackingStep(OrderStatus.OUT_FOR_DELIVERY, "Out for Delivery", "Your driver is heading to your address"),
    TrackingStep(OrderStatus.DELIVERED, "Delivered", "Your order has been delivered successfully"),
)


@dataclass(frozen=True)
class ProgressStep:
    status: str
    title: str
    description: str
    state: StepState
    reached_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "title": self.title,
            "description": self.description,
            "state": self.state.value,
            "reached_at": self.reached_at.isoformat() if self.reached_at else None,
        }


def step_state(current_status, step_status) -> StepState:
    """Position of ``step_status`` relative to an order in ``current_status``.

    Both must be forward statuses; side exits are rendered by ``order_progress``.
    """
    current = parse_status(current_status)
    step = parse_status(step_status)
    if current not in FORWARD_STATUSES or step not in FORWARD_STATUSES:
        raise ValueError(f"{current.value} / {step.value} is not on the forward path")

    current_index = FORWARD_STATUSES.index(current)
    step_index = FORWARD_STATUSES.index(step)
    if step_index < current_index:
        return StepState.COMPLETED
    if step_index == current_index:
        return StepState.CURRENT
    return StepState.UPCOMING


def order_progress(order: Order) -> list[ProgressStep]:
    first_reached = {}
    for entry in order.public_history():
        first_reached.setdefault(entry.status, entry.timestamp)

    current = OrderStatus(order.status)
    steps = []
    for step in TRACKING_STEPS:
        if current in FORWARD_STATUSES:
            state = step_state(current, step.status)
        else:
            state = StepState.COMPLETED if step.status.value in first_reached else StepState.HALTED

        steps.append(
            ProgressStep(
                status=step.status.value,
                title=step.title,
                description=step.description,
                state=state,
                reached_at=first_reached.get(step.status.value),
            )
        )
    return steps
