"""
Order status and transport vocabulary.

The happy path is a total order:

    PENDING → CONFIRMED → PROCESSING → IN_TRANSIT → DELIVERED

CANCELLED and DELETED are absorbing branches reachable only from
PENDING or CONFIRMED.
"""

from django.core.exceptions import ValidationError
from django.db import models


class OrderStatus(models.TextChoices):
    PENDING    = "pending",    "Pending Confirmation"
    CONFIRMED  = "confirmed",  "Confirmed"
    PROCESSING = "processing", "Processing"
    IN_TRANSIT = "in_transit", "In Transit"
    DELIVERED  = "delivered",  "Delivered"
    CANCELLED  = "cancelled",  "Cancelled"
    DELETED    = "deleted",    "Deleted"


class TransportMode(models.TextChoices):
    LAND  = "land",  "Land Transport"
    AIR   = "air",   "Air Transport"
    OCEAN = "ocean", "Ocean Transport"


TRANSPORT_ICONS = {
    TransportMode.LAND:  "🚛",
    TransportMode.AIR:   "✈️",
    TransportMode.OCEAN: "🚢",
}
DEFAULT_TRANSPORT_ICON = "🚚"

CANONICAL_SEQUENCE = (
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PROCESSING,
    OrderStatus.IN_TRANSIT,
    OrderStatus.DELIVERED,
)

_RANK = {status: index for index, status in enumerate(CANONICAL_SEQUENCE)}

EDITABLE_STATUSES    = frozenset({OrderStatus.PENDING, OrderStatus.CONFIRMED})
CUSTOMER_CANCELLABLE = frozenset({OrderStatus.PENDING})
ACTIVE_STATUSES      = frozenset({OrderStatus.CONFIRMED, OrderStatus.PROCESSING, OrderStatus.IN_TRANSIT})
TERMINAL_STATUSES    = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED, OrderStatus.DELETED})


def _build_transitions():
    table = {}
    for status in CANONICAL_SEQUENCE:
        table[status] = set(CANONICAL_SEQUENCE[_RANK[status] + 1:])
    for status in EDITABLE_STATUSES:
        table[status] |= {OrderStatus.CANCELLED, OrderStatus.DELETED}
    for status in TERMINAL_STATUSES:
        table[status] = set()
    return {status: frozenset(targets) for status, targets in table.items()}


TRANSITIONS = _build_transitions()


def parse_status(value) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown order status: {value!r}", code="invalid_status")


def parse_transport_mode(value) -> TransportMode:
    try:
        return TransportMode(value)
    except ValueError:
        raise ValidationError(
            f"Invalid transport type {value!r}. Choose land, air or ocean.",
            code="invalid_transport_mode",
        )


def precedes(status, other) -> bool:
    """True if `status` comes strictly before `other` on the happy path."""
    if status not in _RANK or other not in _RANK:
        return False
    return _RANK[status] < _RANK[other]


def can_transition(current, target) -> bool:
    return target in TRANSITIONS.get(current, frozenset())


def status_label(status) -> str:
    try:
        return OrderStatus(status).label
    except ValueError:
        return str(status).replace("_", " ").capitalize()


def transport_icon(mode) -> str:
    return TRANSPORT_ICONS.get(mode, DEFAULT_TRANSPORT_ICON)
