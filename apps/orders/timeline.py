"""
Tracking timeline and delivery-estimate simulator.

The timeline shown to customers is synthesized from the order's status,
transport mode and creation time. It is not an audit trail (that lives in
OrderStatusChange). Without an explicit RNG the simulator seeds one from the
order itself, so repeated views of the same order agree.
"""

import math
import random
from dataclasses import dataclass, asdict, field
from datetime import timedelta

from django.core.exceptions import ValidationError
from django.utils import timezone

from .status import (
    CANONICAL_SEQUENCE, OrderStatus, TransportMode,
    parse_status, precedes, transport_icon,
)

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class TimelineEvent:
    status:       str
    label:        str
    icon:         str
    location:     str
    timestamp:    object
    has_happened: bool
    is_current:   bool
    is_future:    bool
    is_cancelled: bool = False


@dataclass(frozen=True)
class DeliveryEstimate:
    status:         str
    message:        str
    date:           object = None
    day_name:       str = None
    days_remaining: int = None
    is_estimate:    bool = False
    estimated_at:   object = None


@dataclass(frozen=True)
class TrackingView:
    timeline: list = field(default_factory=list)
    estimate: DeliveryEstimate = None

    def as_dict(self) -> dict:
        return asdict(self)


class TimelineSimulator:
    STEP_DETAILS = {
        OrderStatus.PENDING:    ("Order Received",   "📝", "Order Processing Center"),
        OrderStatus.CONFIRMED:  ("Order Confirmed",  "✅", "Order Processing Center"),
        OrderStatus.PROCESSING: ("Package Prepared", "📦", "Fulfillment Center"),
        OrderStatus.IN_TRANSIT: ("In Transit",       None, "Transport Hub"),
        OrderStatus.DELIVERED:  ("Delivered",        "🏠", "Customer Address"),
        OrderStatus.CANCELLED:  ("Order Cancelled",  "❌", "Order Processing Center"),
    }

    # Hours elapsed between reaching the previous status and reaching this one.
    STEP_HOURS = {
        OrderStatus.CONFIRMED:  (2, 6),
        OrderStatus.PROCESSING: (8, 24),
        OrderStatus.IN_TRANSIT: (4, 12),
        OrderStatus.CANCELLED:  (1, 48),
    }
    DELIVERY_HOURS = {
        TransportMode.LAND:  (24, 72),
        TransportMode.AIR:   (12, 24),
        TransportMode.OCEAN: (120, 240),
    }
    DEFAULT_DELIVERY_HOURS = 48

    # (urgent range, standard range) in days
    TRANSIT_DAYS = {
        TransportMode.LAND:  ((1, 2),  (2, 5)),
        TransportMode.AIR:   ((1, 1),  (1, 3)),
        TransportMode.OCEAN: ((7, 10), (10, 15)),
    }
    DEFAULT_TRANSIT_DAYS = 3

    PROGRESS_OFFSET_DAYS = {
        OrderStatus.PENDING:    0,
        OrderStatus.CONFIRMED:  -0.5,
        OrderStatus.PROCESSING: -1,
        OrderStatus.IN_TRANSIT: -1.5,
    }

    def __init__(self, rng=None):
        self.rng = rng

    def _rng_for(self, order):
        if self.rng is not None:
            return self.rng
        return random.Random(f"{order.created_at.isoformat()}|{order.transport_mode}")

    @staticmethod
    def _status_of(order) -> OrderStatus:
        status = parse_status(order.status)
        if status == OrderStatus.DELETED:
            raise ValidationError("Deleted orders have no tracking history.", code="invalid_status")
        return status

    def _step_hours(self, rng, status, transport_mode) -> int:
        if status == OrderStatus.DELIVERED:
            bounds = self.DELIVERY_HOURS.get(transport_mode)
            return rng.randint(*bounds) if bounds else self.DEFAULT_DELIVERY_HOURS
        return rng.randint(*self.STEP_HOURS[status])

    def _event(self, status, transport_mode, timestamp, current) -> TimelineEvent:
        label, icon, location = self.STEP_DETAILS[status]
        if status == OrderStatus.IN_TRANSIT:
            icon = transport_icon(transport_mode)
        if current == OrderStatus.CANCELLED:
            has_happened = status in (OrderStatus.PENDING, OrderStatus.CONFIRMED)
        else:
            has_happened = precedes(status, current)
        is_current = status == current
        return TimelineEvent(
            status       = status.value,
            label        = label,
            icon         = icon,
            location     = location,
            timestamp    = timestamp,
            has_happened = has_happened,
            is_current   = is_current,
            is_future    = not has_happened and not is_current,
            is_cancelled = status == OrderStatus.CANCELLED,
        )

    def timeline(self, order, now=None) -> list:
        current = self._status_of(order)
        now     = now or timezone.now()
        rng     = self._rng_for(order)
        created = order.created_at

        def clamp(ts):
            return max(created, min(ts, now))

        if current == OrderStatus.CANCELLED:
            steps = (OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.CANCELLED)
        else:
            steps = CANONICAL_SEQUENCE[:CANONICAL_SEQUENCE.index(current) + 1]

        events  = []
        instant = created
        for index, status in enumerate(steps):
            if index:
                instant += timedelta(hours=self._step_hours(rng, status, order.transport_mode))
            events.append(self._event(status, order.transport_mode, clamp(instant), current))
        return events

    def estimate(self, order, now=None) -> DeliveryEstimate:
        current = self._status_of(order)
        if current == OrderStatus.DELIVERED:
            return DeliveryEstimate(status="delivered", message="Package has been delivered")
        if current == OrderStatus.CANCELLED:
            return DeliveryEstimate(status="cancelled", message="Order has been cancelled")

        now    = now or timezone.now()
        rng    = self._rng_for(order)
        ranges = self.TRANSIT_DAYS.get(order.transport_mode)
        if ranges:
            urgent_range, standard_range = ranges
            days = rng.randint(*(urgent_range if order.urgent_delivery else standard_range))
        else:
            days = self.DEFAULT_TRANSIT_DAYS

        offset    = self.PROGRESS_OFFSET_DAYS.get(current, 0)
        estimated = order.created_at + days * ONE_DAY + timedelta(days=offset)
        remaining = max(0, math.ceil((estimated - now) / ONE_DAY))
        local     = timezone.localtime(estimated) if timezone.is_aware(estimated) else estimated

        return DeliveryEstimate(
            status         = "estimated",
            message        = "Urgent delivery" if order.urgent_delivery else "Standard delivery",
            date           = local.date(),
            day_name       = local.strftime("%A"),
            days_remaining = remaining,
            is_estimate    = True,
            estimated_at   = estimated,
        )

    def build(self, order, now=None) -> TrackingView:
        now = now or timezone.now()
        return TrackingView(timeline=self.timeline(order, now), estimate=self.estimate(order, now))


def build_tracking_view(order, rng=None, now=None) -> TrackingView:
    return TimelineSimulator(rng=rng).build(order, now=now)
