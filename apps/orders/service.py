"""
OrderService — the order lifecycle orchestrator.

Flow:  create_order  →  confirm_order  →  update_status … → delivered
                 ↘ edit_order (pending / confirmed only, re-prices)
                 ↘ cancel_order (customer, pending only) / delete_order (employee)

Every mutation locks the order row, writes an OrderStatusChange and
schedules a customer notification once the transaction commits.
"""

import logging
import random
import string
from functools import partial

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from apps.orders.models import Order, OrderStatusChange
from apps.orders.pricing import PricingEngine
from apps.orders.status import (
    ACTIVE_STATUSES, CANONICAL_SEQUENCE, CUSTOMER_CANCELLABLE, EDITABLE_STATUSES,
    OrderStatus, can_transition, parse_status, status_label,
)

logger = logging.getLogger("swiftcargo.orders")

COST_FIELDS = (
    "package_weight", "package_length", "package_width", "package_height",
    "transport_mode", "urgent_delivery",
)
EDITABLE_FIELDS = (
    "pickup_address", "delivery_address", "package_description", "special_instructions",
) + COST_FIELDS

STATUS_MESSAGES = {
    OrderStatus.PENDING:    "Order set to pending status.",
    OrderStatus.CONFIRMED:  "Order confirmed and tracking number assigned.",
    OrderStatus.PROCESSING: "Order is now being processed.",
    OrderStatus.IN_TRANSIT: "Order is now in transit.",
    OrderStatus.DELIVERED:  "Order has been delivered.",
    OrderStatus.CANCELLED:  "Order has been cancelled.",
    OrderStatus.DELETED:    "Order has been deleted.",
}


def _generate_order_number():
    return f"ORD-{timezone.now().year}-{random.randint(1000, 9999)}"


def _generate_tracking_number():
    chars = string.ascii_uppercase + string.digits
    return "TRK-" + "".join(random.choices(chars, k=10))


def _queue_notification(order_id, status):
    from apps.orders.tasks import notify_status_change
    notify_status_change.delay(order_id, status)


def _unique(generator, field):
    value = generator()
    while Order.objects.filter(**{field: value}).exists():
        value = generator()
    return value


class OrderService:
    """
    Order lifecycle orchestration.
    The pricing engine is injected so tests can pin the rate variation;
    `notifier(order_id, status)` runs after each committed status change.
    """

    def __init__(self, pricing_engine=None, notifier=None):
        self.pricing  = pricing_engine or PricingEngine()
        self.notifier = notifier or _queue_notification

    # ── Create ────────────────────────────────────────────────────────────────
    @transaction.atomic
    def create_order(self, customer, data: dict, actor=None) -> Order:
        """Price and persist a new PENDING order for `customer`."""
        breakdown = self.pricing.calculate(
            data.get("package_weight"), data.get("transport_mode"), data.get("urgent_delivery", False),
        )
        order = Order(
            order_number = _unique(_generate_order_number, "order_number"),
            customer     = customer,
            status       = OrderStatus.PENDING,
            **{k: v for k, v in data.items() if k in EDITABLE_FIELDS},
        )
        order.transport_mode  = breakdown.transport_mode
        order.package_weight  = breakdown.weight
        order.urgent_delivery = breakdown.urgent
        order.apply_costs(breakdown)
        order.save()

        actor = actor or customer
        note = "Order created" if actor == customer else f"Order created by {actor.full_name}"
        self._record(order, "", OrderStatus.PENDING, actor, note)
        logger.info("Order %s created for %s (total %s)", order.order_number, customer.email, order.total_cost)
        return order

    # ── Status transitions ────────────────────────────────────────────────────
    def confirm_order(self, order: Order, actor, tracking_number=None) -> Order:
        """PENDING → CONFIRMED, assigning a tracking number if none is supplied."""
        return self.update_status(
            order, OrderStatus.CONFIRMED, actor, tracking_number=tracking_number,
            allowed_from={OrderStatus.PENDING},
            rejection="Only pending orders can be confirmed.",
        )

    @transaction.atomic
    def update_status(self, order: Order, new_status, actor, tracking_number=None, note="",
                      allowed_from=None, rejection=None) -> Order:
        """
        Move the order to `new_status` under a row lock.
        `allowed_from` narrows the transition table for one caller and is
        checked against the locked row, not the caller's copy.
        """
        target = parse_status(new_status)
        locked = Order.objects.select_for_update().get(pk=order.pk)
        current = locked.status

        if allowed_from is not None and current not in allowed_from:
            raise ValueError(rejection or f"Order cannot be changed while {status_label(current)}.")
        if not can_transition(current, target):
            raise ValueError(
                f"Cannot change order status from {status_label(current)} to {status_label(target)}."
            )

        if tracking_number:
            if Order.objects.exclude(pk=locked.pk).filter(tracking_number=tracking_number).exists():
                raise ValidationError("Tracking number already in use.", code="duplicate_tracking")
            locked.tracking_number = tracking_number
        elif target in CANONICAL_SEQUENCE[1:] and not locked.tracking_number:
            locked.tracking_number = _unique(_generate_tracking_number, "tracking_number")

        locked.status = target
        locked.save(update_fields=["status", "tracking_number", "updated_at"])

        self._record(locked, current, target, actor, note or STATUS_MESSAGES[target])
        self._notify(locked)
        logger.info(
            "Order %s: %s → %s by %s", locked.order_number, current, target,
            getattr(actor, "email", "system"),
        )
        return locked

    def cancel_order(self, order: Order, actor) -> Order:
        """Customer cancellation, permitted only while PENDING."""
        return self.update_status(
            order, OrderStatus.CANCELLED, actor, note="Cancelled by customer",
            allowed_from=CUSTOMER_CANCELLABLE, rejection="Only pending orders can be cancelled.",
        )

    def delete_order(self, order: Order, actor) -> Order:
        """Soft delete — the row stays, with status DELETED."""
        return self.update_status(
            order, OrderStatus.DELETED, actor, note=f"Order {order.order_number} deleted",
            allowed_from=EDITABLE_STATUSES,
            rejection="Only pending and confirmed orders can be deleted.",
        )

    # ── Edit ──────────────────────────────────────────────────────────────────
    @transaction.atomic
    def edit_order(self, order: Order, changes: dict, actor):
        """
        Apply detail changes while the order is PENDING or CONFIRMED.
        Returns (order, recalculated) — costs are recomputed whenever a
        cost-affecting field is part of the change set.
        """
        locked = Order.objects.select_for_update().get(pk=order.pk)
        if locked.status not in EDITABLE_STATUSES:
            raise ValueError(
                "Only pending and confirmed orders can be edited. "
                f"Current status: {status_label(locked.status)}"
            )

        changes = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS}
        if not changes:
            raise ValidationError("No valid fields provided for update.", code="empty_update")

        for field, value in changes.items():
            setattr(locked, field, value)

        recalculated = any(field in changes for field in COST_FIELDS)
        if recalculated:
            breakdown = self.pricing.calculate(
                locked.package_weight, locked.transport_mode, locked.urgent_delivery,
            )
            locked.transport_mode = breakdown.transport_mode
            locked.apply_costs(breakdown)

        locked.save()

        note = "Order details updated." + (" Costs have been recalculated." if recalculated else "")
        self._record(locked, locked.status, locked.status, actor, note)
        logger.info("Order %s edited by %s (recalculated=%s)", locked.order_number, actor.email, recalculated)
        return locked, recalculated

    # ── Helpers ───────────────────────────────────────────────────────────────
    @staticmethod
    def _record(order, from_status, to_status, actor, note):
        OrderStatusChange.objects.create(
            order=order, from_status=from_status, to_status=to_status,
            actor=actor, note=note[:255],
        )

    def _notify(self, order):
        transaction.on_commit(partial(self.notifier, str(order.id), order.status))


# ── Queries ────────────────────────────────────────────────────────────────────
def orders_visible_to(user):
    """Employees and admins see every order; customers see their own, minus deleted."""
    qs = Order.objects.select_related("customer")
    if user.is_employee:
        return qs
    return qs.filter(customer=user).exclude(status=OrderStatus.DELETED)


def customer_stats(user) -> dict:
    orders = Order.objects.filter(customer=user).exclude(status=OrderStatus.DELETED)
    last = orders.order_by("-created_at").values_list("created_at", flat=True).first()
    return {
        "total_orders":     orders.count(),
        "active_shipments": orders.filter(status__in=ACTIVE_STATUSES).count(),
        "last_order":       last,
    }


def find_for_public_tracking(identifier):
    """Look up by tracking number first, then by order number."""
    if not identifier:
        return None
    qs = Order.objects.exclude(status=OrderStatus.DELETED)
    return (
        qs.filter(tracking_number=identifier).first()
        or qs.filter(order_number=identifier).first()
    )


def sanitize_address_for_public(address: str) -> str:
    """Keep only the city-level line of an address."""
    if not address:
        return ""
    lines = [line.strip() for line in address.splitlines()]
    for line in lines:
        if "," in line:
            return line
    return lines[-1]
